"""Swimlane (lane-based process flow) family."""

from .models import (
    LaneType,
    Swimlane,
    SwimlaneData,
    SwimlaneEdge,
    SwimlaneNode,
    SwimlaneNodeType,
    SwimlanePhase,
)
from .plugin import SwimlaneDiagramPlugin

__all__ = [
    "LaneType",
    "Swimlane",
    "SwimlaneData",
    "SwimlaneEdge",
    "SwimlaneNode",
    "SwimlaneNodeType",
    "SwimlanePhase",
    "SwimlaneDiagramPlugin",
]
