"""
Public routers - no authentication.
- /api/health - Liveness and dependency checks
"""

from .health import router as health_router

__all__ = ["health_router"]
