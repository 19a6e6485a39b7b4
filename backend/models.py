"""
Request/response models for the diagram engine API.

The diagram itself travels as a raw JSON object: its `type` field picks
the plugin, which parses it into the family model.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field

from diagram_core.models import RenderConfig


class DiagramRequest(BaseModel):
    """Body of every diagram operation."""
    diagram: dict[str, Any]
    config: Optional[RenderConfig] = None


class ErrorResponse(BaseModel):
    """Body of 404/422 responses for unknown types and unparseable payloads."""
    detail: str
    errors: list[Any] = Field(default_factory=list)
