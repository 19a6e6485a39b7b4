"""
Swimlane layout - lane bands, phase dividers and absolute node centres.

Lanes split the canvas height evenly, top to bottom in list order. Node
positions are offsets inside their lane; the layout only translates them
to canvas coordinates and never auto-places nodes.
"""

from dataclasses import dataclass

from ...models import Position, RenderConfig
from .models import SwimlaneData, SwimlaneNode, SwimlanePhase

HEADER_WIDTH = 200
HEADER_HEIGHT = 40
PHASE_WIDTH = 100
# x of a node with a zero lane-local offset
NODE_ORIGIN_X = 250


@dataclass
class LaneGeometry:
    """Canvas measurements shared by lanes, phases and nodes."""
    lane_height: float
    lane_width: float
    total_height: float
    total_width: float

    def lane_top(self, index: int) -> float:
        return index * self.lane_height


def compute_geometry(data: SwimlaneData, config: RenderConfig) -> LaneGeometry:
    lane_count = len(data.lanes)
    return LaneGeometry(
        lane_height=config.height / lane_count if lane_count else config.height,
        lane_width=config.width,
        total_height=config.height,
        total_width=config.width,
    )


def phase_x(phase: SwimlanePhase) -> float:
    return HEADER_WIDTH + phase.start_position * PHASE_WIDTH


def node_center(node: SwimlaneNode, lane_index: int, geometry: LaneGeometry) -> Position:
    return Position(
        x=NODE_ORIGIN_X + node.position.x,
        y=geometry.lane_top(lane_index) + HEADER_HEIGHT + node.position.y,
    )


def compute_positions(data: SwimlaneData, config: RenderConfig) -> dict[str, Position]:
    """
    Absolute centre per node id.

    Nodes whose lane is not declared get no entry; on duplicate ids the
    first occurrence wins.
    """
    geometry = compute_geometry(data, config)
    positions: dict[str, Position] = {}

    for node in data.nodes:
        if node.id in positions:
            continue
        lane_index = data.lane_index(node.lane_id)
        if lane_index is None:
            continue
        positions[node.id] = node_center(node, lane_index, geometry)

    return positions
