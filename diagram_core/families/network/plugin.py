"""Network renderer and plugin registration record."""

from ...models import DiagramType, PluginDescriptor, Position, RenderConfig
from ...plugin import DiagramPlugin, DiagramRenderer
from ...scene import SceneElement, element, fmt, svg_root
from .analysis import NetworkAnalyzer
from .layout import compute_positions, midpoint, wireless_control_point
from .models import NetworkData, NetworkEdge, NetworkEdgeType, NetworkNode, NetworkNodeType
from .validation import NetworkValidator

# node type -> (fill, stroke)
NODE_COLORS = {
    NetworkNodeType.SERVER: ("#4CAF50", "#2E7D32"),
    NetworkNodeType.DATABASE: ("#FF9800", "#E65100"),
    NetworkNodeType.ROUTER: ("#2196F3", "#0D47A1"),
    NetworkNodeType.SWITCH: ("#2196F3", "#0D47A1"),
    NetworkNodeType.USER: ("#9C27B0", "#4A148C"),
}
DEFAULT_COLORS = ("#607D8B", "#37474F")
EDGE_COLOR = "#6c757d"


def node_shape(node: NetworkNode, position: Position) -> SceneElement:
    """Shape for a node type: square, ellipse, diamond or circle."""
    size = node.extent
    x, y = position.x, position.y
    fill, stroke = NODE_COLORS.get(node.type, DEFAULT_COLORS)

    if node.type == NetworkNodeType.SERVER:
        return element(
            "rect", x=x - size / 2, y=y - size / 2, width=size, height=size,
            rx=5, fill=fill, stroke=stroke, stroke_width=2,
        )
    if node.type == NetworkNodeType.DATABASE:
        return element(
            "ellipse", cx=x, cy=y, rx=size / 2, ry=size / 1.5,
            fill=fill, stroke=stroke, stroke_width=2,
        )
    if node.type in (NetworkNodeType.ROUTER, NetworkNodeType.SWITCH):
        points = [
            (x, y - size / 2),
            (x + size / 2, y + size / 4),
            (x, y + size / 2),
            (x - size / 2, y + size / 4),
        ]
        return element(
            "polygon", points=" ".join(f"{fmt(px)},{fmt(py)}" for px, py in points),
            fill=fill, stroke=stroke, stroke_width=2,
        )
    return element(
        "circle", cx=x, cy=y, r=size / 2,
        fill=fill, stroke=stroke, stroke_width=2,
    )


class NetworkRenderer(DiagramRenderer[NetworkData]):

    def build_scene(self, data: NetworkData, config: RenderConfig) -> SceneElement:
        svg = svg_root(config.width, config.height, "network-diagram")
        positions = compute_positions(data, config)

        # Edges first (behind nodes)
        for edge in data.edges:
            group = self.create_edge(edge, positions)
            if group is not None:
                svg.append(group)

        seen: set[str] = set()
        for node in data.nodes:
            if node.id in seen or node.id not in positions:
                continue
            seen.add(node.id)
            svg.append(self.create_node(node, positions[node.id]))

        return svg

    def create_node(self, node: NetworkNode, position: Position) -> SceneElement:
        group = element(
            "g",
            class_=f"network-node network-node-{node.type.value}",
            data_node_id=node.id,
        )
        group.append(node_shape(node, position))
        group.append(element(
            "text",
            text=node.label,
            x=position.x,
            y=position.y + node.extent / 2 + 20,
            text_anchor="middle",
            fill="#212529",
            font_size=12,
            font_weight="bold",
            class_="network-node-label",
        ))
        return group

    def create_edge(self, edge: NetworkEdge, positions: dict[str, Position]):
        source = positions.get(edge.source)
        target = positions.get(edge.target)
        if source is None or target is None:
            return None

        group = element(
            "g",
            class_="network-edge",
            data_source=edge.source,
            data_target=edge.target,
        )

        if edge.type == NetworkEdgeType.WIRELESS:
            control = wireless_control_point(source, target)
            group.append(element(
                "path",
                d=(
                    f"M {fmt(source.x)} {fmt(source.y)} "
                    f"Q {fmt(control.x)} {fmt(control.y)} {fmt(target.x)} {fmt(target.y)}"
                ),
                stroke=EDGE_COLOR,
                stroke_width=2,
                fill="none",
                stroke_dasharray="5,5",
                class_="wireless-connection",
            ))
        else:
            physical = edge.type == NetworkEdgeType.PHYSICAL
            group.append(element(
                "line",
                x1=source.x,
                y1=source.y,
                x2=target.x,
                y2=target.y,
                stroke=EDGE_COLOR,
                stroke_width=4 if physical else 2,
                class_="physical-connection" if physical else "logical-connection",
            ))

        if edge.label:
            mid = midpoint(source, target)
            group.append(element(
                "rect",
                x=mid.x - 30, y=mid.y - 10, width=60, height=20,
                fill="white", stroke="#dee2e6", stroke_width=1, rx=3,
            ))
            group.append(element(
                "text",
                text=edge.label,
                x=mid.x,
                y=mid.y + 4,
                text_anchor="middle",
                fill="#495057",
                font_size=11,
                class_="network-edge-label",
            ))

        return group


NetworkDiagramPlugin = DiagramPlugin(
    descriptor=PluginDescriptor(
        id="network-diagram",
        name="Network Diagram",
        version="1.0.0",
        type=DiagramType.NETWORK,
        description="Entity relationship visualization with nodes and connections",
    ),
    data_model=NetworkData,
    validator=NetworkValidator(),
    renderer=NetworkRenderer(),
    analyzer=NetworkAnalyzer(),
)
