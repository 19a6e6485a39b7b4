"""Network (entity/relationship) family."""

from .models import (
    NetworkData,
    NetworkEdge,
    NetworkEdgeType,
    NetworkLayout,
    NetworkNode,
    NetworkNodeType,
)
from .plugin import NetworkDiagramPlugin

__all__ = [
    "NetworkData",
    "NetworkEdge",
    "NetworkEdgeType",
    "NetworkLayout",
    "NetworkNode",
    "NetworkNodeType",
    "NetworkDiagramPlugin",
]
