"""Mind map (radial hierarchy) family."""

from .models import (
    MindMapAlgorithm,
    MindMapData,
    MindMapDirection,
    MindMapEdge,
    MindMapLayout,
    MindMapNode,
)
from .plugin import MindMapDiagramPlugin

__all__ = [
    "MindMapAlgorithm",
    "MindMapData",
    "MindMapDirection",
    "MindMapEdge",
    "MindMapLayout",
    "MindMapNode",
    "MindMapDiagramPlugin",
]
