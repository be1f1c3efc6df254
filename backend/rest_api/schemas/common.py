"""
Shared schema building blocks.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

ALIASED = {"populate_by_name": True, "from_attributes": True}


class MessageResponse(BaseModel):
    message: str


class Envelope(BaseModel, Generic[T]):
    """{success, data, message} wrapper used by feedback and app-user routes."""

    success: bool = True
    data: T | None = None
    message: str | None = None


def dump(model: BaseModel) -> dict[str, Any]:
    """Aliased JSON-ready dict of a schema instance."""
    return model.model_dump(mode="json", by_alias=True)
