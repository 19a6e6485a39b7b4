"""
Radial tree layout for mind maps.

The root sits at the canvas centre. The children of a node fan out over
a full circle centred on the node's own angle, at a radius that shrinks
by RADIUS_DECAY with every level. The walk uses an explicit stack and
places each node at most once, so it terminates on cyclic data.
"""

import math

from ...layout import RADIUS_DECAY, fan_angles, polar_offset
from ...models import Position, RenderConfig
from .models import MindMapData

# Angle handed to the root's children; any multiple of 2*pi gives the same fan
ROOT_ANGLE = 2 * math.pi


def compute_positions(data: MindMapData, config: RenderConfig) -> dict[str, Position]:
    """
    Position every node reachable from the root.

    Returns an empty mapping when the declared root is not a node.
    """
    if data.get_node(data.root_node) is None:
        return {}

    children_index = data.children_index()
    positions: dict[str, Position] = {data.root_node: config.center}
    stack = [(data.root_node, ROOT_ANGLE, config.initial_radius)]

    while stack:
        parent_id, angle, radius = stack.pop()
        parent_pos = positions[parent_id]
        # one fan slot per unique child id
        children = [c for c in children_index.get(parent_id, []) if c not in positions]

        placed = []
        for child_id, child_angle in zip(children, fan_angles(angle, len(children))):
            positions[child_id] = polar_offset(parent_pos, child_angle, radius)
            placed.append((child_id, child_angle, radius * RADIUS_DECAY))

        # reversed so siblings are expanded in diagram order
        stack.extend(reversed(placed))

    return positions


def wrap_label(label: str, is_root: bool) -> list[str]:
    """Lines of a node label: one word per line, except root or single words."""
    words = label.split(" ")
    if is_root or len(words) <= 1:
        return [label]
    return words
