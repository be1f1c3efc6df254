"""
Health check endpoints for the REST API.
Liveness plus a detailed check of the database and Redis.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal, engine
from shared.infrastructure.events import get_redis_client
from shared.utils.health import (
    HealthStatus,
    aggregate_health_checks,
    health_check_with_timeout,
)

router = APIRouter(prefix="/api", tags=["health"])

SERVICE_NAME = "restaurant-api"


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": HealthStatus.HEALTHY.value,
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@health_check_with_timeout(timeout=3.0, component="database")
async def check_database_health() -> dict:
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
    return {"dialect": engine.dialect.name}


@health_check_with_timeout(timeout=3.0, component="redis")
async def check_redis_health() -> dict:
    redis_client = await get_redis_client()
    await redis_client.ping()
    return {}


@router.get("/health/detailed")
async def detailed_health_check():
    """
    Checks the database and Redis concurrently.

    Returns 503 Service Unavailable if any dependency is down.
    """
    results = await aggregate_health_checks([
        check_database_health(),
        check_redis_health(),
    ])
    body = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "status": results["status"],
        "dependencies": results["components"],
    }
    if results["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(content=body, status_code=503)
    return body
