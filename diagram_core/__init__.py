"""
Diagram Core - Plugin engine for mind map, network and swimlane diagrams.

Each diagram family computes layout geometry, validates structure and
produces heuristic quality assessments behind one plugin contract. The
backend API, the CLI and the MCP tools all go through the registry here.
"""

from .models import (
    # Geometry
    Position,
    Size,
    Bounds,
    # Enums
    DiagramType,
    ExportFormat,
    SuggestionType,
    Priority,
    ActionType,
    # Records
    DiagramMetadata,
    RenderConfig,
    AISuggestion,
    AIAnalysis,
    PluginDescriptor,
)

from .validation import ValidationResult, ValidationIssue, IssueSeverity
from .scene import SceneElement
from .plugin import DiagramPlugin, RenderResult, RenderMetadata
from .registry import (
    DiagramData,
    PluginRegistry,
    default_registry,
    parse_diagram,
    DiagramEngineError,
    PluginNotFoundError,
    DiagramParseError,
)
from .families.mindmap import MindMapData
from .families.network import NetworkData
from .families.swimlane import SwimlaneData

__version__ = "1.0.0"

__all__ = [
    # Geometry
    "Position",
    "Size",
    "Bounds",
    # Enums
    "DiagramType",
    "ExportFormat",
    "SuggestionType",
    "Priority",
    "ActionType",
    # Records
    "DiagramMetadata",
    "RenderConfig",
    "AISuggestion",
    "AIAnalysis",
    "PluginDescriptor",
    # Validation
    "ValidationResult",
    "ValidationIssue",
    "IssueSeverity",
    # Plugins
    "SceneElement",
    "DiagramPlugin",
    "RenderResult",
    "RenderMetadata",
    "DiagramData",
    "PluginRegistry",
    "default_registry",
    "parse_diagram",
    # Errors
    "DiagramEngineError",
    "PluginNotFoundError",
    "DiagramParseError",
    # Family models
    "MindMapData",
    "NetworkData",
    "SwimlaneData",
]
