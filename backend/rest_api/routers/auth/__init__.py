"""
Study app account routers - /api/auth/*
Handles sign-in, sign-up, sign-out, profile and push token updates.
"""

from .routes import router

__all__ = ["router"]
