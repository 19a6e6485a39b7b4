"""
Network layout - deterministic placement by layout tag.

If every node already has a non-origin position the data is used as is.
Otherwise the whole node set is re-placed by the diagram's layout:
- force, circular: evenly around a circle (no physics simulation)
- hierarchical: one row per level, levels from the edge direction
- grid: near-square grid
"""

import math

from ...analysis import assign_levels
from ...layout import circle_positions, grid_positions, level_positions
from ...models import Position, RenderConfig
from .models import NetworkData, NetworkLayout

# Upper bound on how far a wireless link bows away from the straight line
MAX_CURVATURE = 100


def is_placed(data: NetworkData) -> bool:
    """True when every node has a position other than the origin."""
    return all(not node.position.is_origin() for node in data.nodes)


def compute_positions(data: NetworkData, config: RenderConfig) -> dict[str, Position]:
    """Position per node id (first occurrence wins on duplicate ids)."""
    if is_placed(data):
        positions: dict[str, Position] = {}
        for node in data.nodes:
            positions.setdefault(node.id, node.position)
        return positions

    node_ids = data.node_ids()
    layout = data.effective_layout

    if layout == NetworkLayout.HIERARCHICAL:
        levels = assign_levels(node_ids, data.edges)
        return level_positions(node_ids, levels, config.width, config.height)
    if layout == NetworkLayout.GRID:
        return grid_positions(node_ids, config.width, config.height)
    return circle_positions(node_ids, config.width, config.height)


def compute_layout(data: NetworkData, config: RenderConfig) -> NetworkData:
    """
    Return a copy of `data` with computed node positions.

    Already-placed (or empty) diagrams come back as an unchanged copy, so
    applying the layout twice gives the same result as applying it once.
    """
    if is_placed(data):
        return data.model_copy(deep=True)

    positions = compute_positions(data, config)
    nodes = [
        node.model_copy(deep=True, update={"position": positions.get(node.id, node.position)})
        for node in data.nodes
    ]
    return data.model_copy(deep=True, update={"nodes": nodes})


def midpoint(source: Position, target: Position) -> Position:
    return Position(x=(source.x + target.x) / 2, y=(source.y + target.y) / 2)


def wireless_control_point(source: Position, target: Position) -> Position:
    """Quadratic control point: the midpoint lifted by min(distance * 0.3, 100)."""
    mid = midpoint(source, target)
    distance = math.hypot(target.x - source.x, target.y - source.y)
    curvature = min(distance * 0.3, MAX_CURVATURE)
    return Position(x=mid.x, y=mid.y - curvature)
