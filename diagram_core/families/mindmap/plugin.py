"""Mind map renderer and plugin registration record."""

import math

from ...models import DiagramType, PluginDescriptor, Position, RenderConfig
from ...plugin import DiagramPlugin, DiagramRenderer
from ...scene import SceneElement, darken_color, element, fmt, palette_color, svg_root
from .analysis import MindMapAnalyzer
from .layout import compute_positions, wrap_label
from .models import MindMapData, MindMapEdge, MindMapNode
from .validation import MindMapValidator

ROOT_COLOR = "#4CAF50"
NODE_PALETTE = [
    "#2196F3",  # Blue
    "#FF9800",  # Orange
    "#9C27B0",  # Purple
    "#00BCD4",  # Cyan
    "#FFC107",  # Amber
    "#F44336",  # Red
    "#607D8B",  # Blue Grey
]
ROOT_RADIUS = 60
NODE_RADIUS = 40
LINE_HEIGHT = 16
MAX_CURVE_OFFSET = 100


def node_color(node: MindMapNode, is_root: bool) -> str:
    """Root colour, or a palette entry chosen by hashing the node id."""
    if is_root:
        return ROOT_COLOR
    return palette_color(node.id, NODE_PALETTE)


class MindMapRenderer(DiagramRenderer[MindMapData]):

    def build_scene(self, data: MindMapData, config: RenderConfig) -> SceneElement:
        svg = svg_root(config.width, config.height, "mindmap-diagram")
        positions = compute_positions(data, config)

        # Connections first so they sit behind nodes
        edges = svg.append(element("g", class_="mindmap-connections"))
        for edge in data.edges:
            connection = self.create_connection(edge, positions)
            if connection is not None:
                edges.append(connection)

        nodes = svg.append(element("g", class_="mindmap-nodes"))
        seen: set[str] = set()
        for node in data.nodes:
            if node.id in seen or node.id not in positions:
                continue
            seen.add(node.id)
            nodes.append(self.create_node(node, positions[node.id], node.id == data.root_node))

        return svg

    def create_node(self, node: MindMapNode, position: Position, is_root: bool) -> SceneElement:
        fill = node_color(node, is_root)
        group = element(
            "g",
            class_="mindmap-node-group",
            data_node_id=node.id,
        )
        group.append(element(
            "circle",
            cx=position.x,
            cy=position.y,
            r=ROOT_RADIUS if is_root else NODE_RADIUS,
            fill=fill,
            stroke=darken_color(fill, 0.3),
            stroke_width=3,
            class_=f"mindmap-node {'root-node' if is_root else 'child-node'}",
        ))

        lines = wrap_label(node.label, is_root)
        text = group.append(element(
            "text",
            x=position.x,
            y=position.y,
            text_anchor="middle",
            dominant_baseline="middle",
            fill="#ffffff",
            font_size=16 if is_root else 14,
            font_weight="bold",
            pointer_events="none",
            class_="mindmap-node-text",
        ))
        if len(lines) == 1:
            text.text = lines[0]
        else:
            top = position.y - (len(lines) - 1) * LINE_HEIGHT / 2
            for index, word in enumerate(lines):
                text.append(element(
                    "tspan",
                    text=word,
                    x=position.x,
                    y=top + index * LINE_HEIGHT,
                    text_anchor="middle",
                ))
        return group

    def create_connection(self, edge: MindMapEdge, positions: dict[str, Position]):
        """Cubic curve between two placed nodes; None if either is missing."""
        source = positions.get(edge.source)
        target = positions.get(edge.target)
        if source is None or target is None:
            return None

        dx = target.x - source.x
        dy = target.y - source.y
        distance = math.hypot(dx, dy)
        if distance == 0:
            return None

        offset = min(distance * 0.3, MAX_CURVE_OFFSET)
        nx = -dy * (offset / distance)
        ny = dx * (offset / distance)
        cp1 = (source.x + dx * 0.5 + nx, source.y + dy * 0.5 + ny)
        cp2 = (target.x - dx * 0.5 + nx, target.y - dy * 0.5 + ny)

        return element(
            "path",
            d=(
                f"M {fmt(source.x)} {fmt(source.y)} "
                f"C {fmt(cp1[0])} {fmt(cp1[1])}, {fmt(cp2[0])} {fmt(cp2[1])}, "
                f"{fmt(target.x)} {fmt(target.y)}"
            ),
            stroke="#6c757d",
            stroke_width=3,
            fill="none",
            class_="mindmap-connection",
            data_source=edge.source,
            data_target=edge.target,
        )


MindMapDiagramPlugin = DiagramPlugin(
    descriptor=PluginDescriptor(
        id="mindmap-diagram",
        name="Mind Map Diagram",
        version="1.0.0",
        type=DiagramType.MINDMAP,
        description="Hierarchical idea visualization with central root and branching connections",
    ),
    data_model=MindMapData,
    validator=MindMapValidator(),
    renderer=MindMapRenderer(),
    analyzer=MindMapAnalyzer(),
)
