"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.config.settings import settings
from shared.config.logging import rest_api_logger as logger
from rest_api.core.cors import configure_cors
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.public import health_router
from rest_api.routers.restaurant import router as restaurant_router
from rest_api.routers.realtime import router as realtime_router
from rest_api.routers.reports import router as reports_router
from rest_api.routers.content import current_affairs_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.user import router as user_router


# Create FastAPI application
app = FastAPI(
    title="Restaurant REST API",
    description="Multi-tenant restaurant management and study companion API",
    version="0.1.0",
    lifespan=lifespan,
)

configure_cors(app)
register_middlewares(app)


# =============================================================================
# Exception handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are client errors (400)."""
    logger.warning("Request validation failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything not raised as an AppException. The message is echoed only in debug mode."""
    logger.error("Unhandled error", path=request.url.path, error_type=type(exc).__name__, exc_info=True)
    content = {"detail": "Internal server error"}
    if settings.debug:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(restaurant_router)
app.include_router(realtime_router)
app.include_router(reports_router)
app.include_router(current_affairs_router)
app.include_router(auth_router)
app.include_router(user_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
