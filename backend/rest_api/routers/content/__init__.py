"""
Content routers - study app current affairs.
- /api/current-affairs/* - Daily items, quizzes, trending topics, search
"""

from .current_affairs import router as current_affairs_router

__all__ = ["current_affairs_router"]
