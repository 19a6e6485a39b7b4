"""
Shared data models for diagram plugins.

These models define the pieces every diagram family builds on:
- Geometry primitives (Position, Size, Bounds)
- Base node/edge records that each family extends with its own fields
- Render configuration and the assistant-facing analysis records

Field Naming Convention:
- Python attributes are snake_case (root_node, lane_id, start_position)
- JSON input/output uses camelCase (rootNode, laneId, startPosition)
- Edges also accept legacy `from`/`to` keys on input and convert them
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH


# Open-ended style/data bags are restricted to scalar values
StyleValue = Union[str, bool, int, float]


class DiagramModel(BaseModel):
    """Base model: camelCase JSON aliases, snake_case attributes."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# --- Geometry ---

class Position(DiagramModel):
    """A point on the canvas."""
    x: float = 0.0
    y: float = 0.0

    def is_origin(self) -> bool:
        return self.x == 0 and self.y == 0


class Size(DiagramModel):
    """Width/height of an element."""
    width: float = 0.0
    height: float = 0.0


class Bounds(DiagramModel):
    """Axis-aligned bounding box."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


# --- Enums ---

class DiagramType(str, Enum):
    """Diagram families with a registered plugin."""
    MINDMAP = "mindmap"
    NETWORK = "network"
    SWIMLANE = "swimlane"


class ExportFormat(str, Enum):
    """Export formats a plugin can advertise."""
    SVG = "svg"
    PNG = "png"
    PDF = "pdf"
    JSON = "json"
    HTML = "html"


class SuggestionType(str, Enum):
    """Area a suggestion is about."""
    STRUCTURE = "structure"
    STYLE = "style"
    CONTENT = "content"
    LAYOUT = "layout"


class Priority(str, Enum):
    """Suggestion priority, ordered low < medium < high."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 0, "medium": 1, "high": 2}[self.value]


class ActionType(str, Enum):
    """Kind of change a suggestion proposes."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    OPTIMIZE = "optimize"


# --- Base node/edge records ---

class DiagramMetadata(DiagramModel):
    """Descriptive metadata carried along with diagram data."""
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    category: Optional[str] = None


class BaseNode(DiagramModel):
    """
    A node shared by all families.

    `id` and `label` default to empty strings so that incomplete nodes
    still parse and the validators can report them.
    """
    id: str = ""
    label: str = ""
    style: dict[str, StyleValue] = Field(default_factory=dict)
    data: dict[str, StyleValue] = Field(default_factory=dict)


class BaseEdge(DiagramModel):
    """
    An edge connecting two nodes.

    Uses `source` and `target` as canonical field names.
    Accepts `from`/`to` on input for backward compatibility.
    """
    id: str = ""
    source: str = ""
    target: str = ""
    label: Optional[str] = None
    style: dict[str, StyleValue] = Field(default_factory=dict)
    data: dict[str, StyleValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert legacy 'from'/'to' fields to 'source'/'target'."""
        if isinstance(data, dict):
            data = dict(data)  # never mutate the caller's payload
            if "from" in data and "source" not in data:
                data["source"] = data.pop("from")
            if "to" in data and "target" not in data:
                data["target"] = data.pop("to")
        return data


# --- Render configuration ---

class RenderConfig(DiagramModel):
    """Canvas and layout knobs passed to render/get_bounds."""
    width: float = Field(default=DEFAULT_WIDTH, gt=0)
    height: float = Field(default=DEFAULT_HEIGHT, gt=0)
    initial_radius: float = Field(default=200.0, gt=0)  # radial layouts
    theme: str = "default"
    background: Optional[str] = None
    interactive: bool = True

    @property
    def center(self) -> Position:
        return Position(x=self.width / 2, y=self.height / 2)


# --- Assistant-facing analysis records ---

class SuggestionAction(DiagramModel):
    """The change a suggestion proposes."""
    type: ActionType
    payload: dict[str, StyleValue] = Field(default_factory=dict)
    description: str = ""


class AISuggestion(DiagramModel):
    """A single heuristic improvement suggestion."""
    type: SuggestionType
    priority: Priority
    message: str
    confidence: float = Field(ge=0.0, le=1.0)
    action: SuggestionAction


class AIAnalysis(DiagramModel):
    """Scalar quality metrics plus structural suggestions."""
    complexity: float = Field(ge=0.0, le=1.0)
    readability: float = Field(ge=0.0, le=1.0)
    completeness: float = Field(ge=0.0, le=1.0)
    suggestions: list[AISuggestion] = Field(default_factory=list)
    optimizations: list[str] = Field(default_factory=list)


def rank_suggestions(suggestions: list[AISuggestion]) -> list[AISuggestion]:
    """Order suggestions by priority, then confidence (both descending)."""
    return sorted(
        suggestions,
        key=lambda s: (s.priority.rank, s.confidence),
        reverse=True,
    )


class PluginDescriptor(DiagramModel):
    """Stable identity of a registered plugin."""
    id: str
    name: str
    version: str
    type: DiagramType
    description: str = ""
    supported_formats: list[ExportFormat] = Field(
        default_factory=lambda: [ExportFormat.SVG, ExportFormat.PNG, ExportFormat.PDF]
    )


def make_suggestion(
    kind: SuggestionType,
    priority: Priority,
    message: str,
    confidence: float,
    action: ActionType,
    payload: dict[str, StyleValue],
    description: str,
) -> AISuggestion:
    return AISuggestion(
        type=kind,
        priority=priority,
        message=message,
        confidence=confidence,
        action=SuggestionAction(type=action, payload=payload, description=description),
    )
