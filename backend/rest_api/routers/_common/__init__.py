"""
Helpers shared across routers.
"""

from .pagination import Pagination, get_pagination

__all__ = ["Pagination", "get_pagination"]
