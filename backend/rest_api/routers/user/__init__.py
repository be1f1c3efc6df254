"""
Study app user routers - /api/user/*
- /api/user/preferences/* - Display, reminder and sync preferences
- /api/user/stats/* - Quiz, study and streak statistics
"""

from fastapi import APIRouter

from .preferences import router as preferences_router
from .stats import router as stats_router

router = APIRouter(prefix="/api/user")

router.include_router(preferences_router)
router.include_router(stats_router)
