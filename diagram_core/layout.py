"""
Layout algorithms shared by the diagram families.

Provides the deterministic placement strategies the family layout
engines are assembled from:
- Circle: evenly spaced on a circle (also used in place of a force layout)
- Grid: near-square grid filling the canvas
- Level rows: one row per hierarchy level, evenly spread across the width

All functions are pure: they return new Position objects keyed by node id
and never touch the nodes they were given.
"""

import math
from collections import defaultdict
from collections.abc import Sequence

from .models import Position


# Shrink factor applied to the radius at each level of a radial tree
RADIUS_DECAY = 0.8
# Share of the half-canvas used by circular layouts
CIRCLE_FILL = 0.8


def circle_positions(
    node_ids: Sequence[str],
    width: float,
    height: float,
) -> dict[str, Position]:
    """
    Place nodes evenly around a circle centred on the canvas.

    Node i sits at angle 2*pi*i/n on a circle of radius
    0.8 * min(width/2, height/2).
    """
    if not node_ids:
        return {}

    center_x = width / 2
    center_y = height / 2
    radius = min(center_x, center_y) * CIRCLE_FILL
    count = len(node_ids)

    positions: dict[str, Position] = {}
    for i, node_id in enumerate(node_ids):
        angle = (i / count) * 2 * math.pi
        positions.setdefault(node_id, Position(
            x=center_x + math.cos(angle) * radius,
            y=center_y + math.sin(angle) * radius,
        ))
    return positions


def grid_columns(count: int) -> int:
    """Columns of a near-square grid holding `count` cells."""
    return max(1, math.ceil(math.sqrt(count)))


def grid_cell(index: int, columns: int) -> tuple[int, int]:
    """(row, col) of the index-th cell in row-major order."""
    return index // columns, index % columns


def grid_positions(
    node_ids: Sequence[str],
    width: float,
    height: float,
) -> dict[str, Position]:
    """
    Arrange nodes in a grid pattern filling the canvas.

    cols = ceil(sqrt(n)); each node is centred in its cell.
    """
    if not node_ids:
        return {}

    columns = grid_columns(len(node_ids))
    rows = math.ceil(len(node_ids) / columns)
    cell_width = width / columns
    cell_height = height / rows

    positions: dict[str, Position] = {}
    for i, node_id in enumerate(node_ids):
        row, col = grid_cell(i, columns)
        positions.setdefault(node_id, Position(
            x=(col + 0.5) * cell_width,
            y=(row + 0.5) * cell_height,
        ))
    return positions


def level_positions(
    node_ids: Sequence[str],
    levels: dict[str, int],
    width: float,
    height: float,
) -> dict[str, Position]:
    """
    Arrange nodes in horizontal rows by hierarchy level.

    Each level gets height / (max_level + 1) of vertical space; the nodes
    of a level split the full width evenly, in diagram order.
    """
    if not node_ids:
        return {}

    max_level = max(levels.get(nid, 0) for nid in node_ids)
    level_height = height / (max_level + 1)

    by_level: dict[int, list[str]] = defaultdict(list)
    for node_id in node_ids:
        by_level[levels.get(node_id, 0)].append(node_id)

    positions: dict[str, Position] = {}
    for level, members in by_level.items():
        level_width = width / len(members)
        for index, node_id in enumerate(members):
            positions.setdefault(node_id, Position(
                x=(index + 0.5) * level_width,
                y=(level + 0.5) * level_height,
            ))
    return positions


def fan_angles(center_angle: float, count: int) -> list[float]:
    """
    Angles for `count` children fanned symmetrically around `center_angle`.

    The step is 2*pi/count, so siblings cover a full circle.
    """
    if count <= 0:
        return []
    step = (2 * math.pi) / count
    start = center_angle - (step * (count - 1)) / 2
    return [start + i * step for i in range(count)]


def polar_offset(origin: Position, angle: float, radius: float) -> Position:
    return Position(
        x=origin.x + math.cos(angle) * radius,
        y=origin.y + math.sin(angle) * radius,
    )
