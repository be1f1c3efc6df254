"""
Realtime API: robot calls and their live event stream.
"""

from .robot_calls import router

__all__ = ["router"]
