"""Swimlane data models: ordered lanes, optional phases, lane-local nodes."""

from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from ...models import BaseEdge, BaseNode, DiagramMetadata, DiagramModel, Position, StyleValue


class LaneType(str, Enum):
    POOL = "pool"
    LANE = "lane"


class SwimlaneNodeType(str, Enum):
    START = "start"
    END = "end"
    DECISION = "decision"
    PROCESS = "process"


class Swimlane(DiagramModel):
    """A horizontal band; lanes are stacked in list order."""
    id: str = ""
    label: str = ""
    type: LaneType = LaneType.LANE
    style: dict[str, StyleValue] = Field(default_factory=dict)


class SwimlanePhase(DiagramModel):
    """A vertical divider marking a stage of the process."""
    id: str = ""
    label: str = ""
    lane_id: Optional[str] = None
    start_position: float = 0
    end_position: float = 0


class SwimlaneNode(BaseNode):
    """A process step; `position` is an offset inside its lane."""
    lane_id: str = ""
    type: SwimlaneNodeType = SwimlaneNodeType.PROCESS
    position: Position = Field(default_factory=Position)


class SwimlaneEdge(BaseEdge):
    pass


class SwimlaneData(DiagramModel):
    """A lane-based process flow."""
    type: Literal["swimlane"] = "swimlane"
    version: str = "1.0"
    metadata: DiagramMetadata = Field(default_factory=DiagramMetadata)
    lanes: list[Swimlane] = Field(default_factory=list)
    phases: list[SwimlanePhase] = Field(default_factory=list)
    nodes: list[SwimlaneNode] = Field(default_factory=list)
    edges: list[SwimlaneEdge] = Field(default_factory=list)

    def lane_index(self, lane_id: str) -> Optional[int]:
        """Row of a lane (first match wins), or None if it is not declared."""
        for index, lane in enumerate(self.lanes):
            if lane.id == lane_id:
                return index
        return None

    def get_node(self, node_id: str) -> Optional[SwimlaneNode]:
        """Get a node by ID (first match wins on duplicate ids)."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_in_lane(self, lane_id: str) -> list[SwimlaneNode]:
        return [node for node in self.nodes if node.lane_id == lane_id]

    def has_node_type(self, node_type: SwimlaneNodeType) -> bool:
        return any(node.type == node_type for node in self.nodes)
