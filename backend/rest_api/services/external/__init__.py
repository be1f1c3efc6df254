"""
Outbound HTTP integrations: Gemini, Google Custom Search, robot dispatch.
"""

from .gemini_client import (
    AINotConfiguredError,
    AIProviderError,
    GeminiClient,
    close_gemini_client,
    extract_json,
    gemini_client,
)
from .robot_dispatch import (
    DispatchResult,
    RobotDispatchClient,
    close_robot_dispatch_client,
    robot_dispatch_client,
)
from .search_client import GoogleSearchClient, SearchError, close_search_client, search_client


async def close_http_clients() -> None:
    """Close every outbound client. Called from the lifespan shutdown."""
    await close_gemini_client()
    await close_search_client()
    await close_robot_dispatch_client()


__all__ = [
    "AINotConfiguredError",
    "AIProviderError",
    "GeminiClient",
    "gemini_client",
    "extract_json",
    "DispatchResult",
    "RobotDispatchClient",
    "robot_dispatch_client",
    "GoogleSearchClient",
    "SearchError",
    "search_client",
    "close_http_clients",
]
