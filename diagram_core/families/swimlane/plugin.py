"""Swimlane renderer and plugin registration record."""

from ...models import DiagramType, PluginDescriptor, Position, RenderConfig
from ...plugin import DiagramPlugin, DiagramRenderer
from ...scene import SceneElement, element, fmt, svg_root
from .analysis import SwimlaneAnalyzer
from .layout import (
    HEADER_HEIGHT,
    HEADER_WIDTH,
    LaneGeometry,
    compute_geometry,
    compute_positions,
    phase_x,
)
from .models import Swimlane, SwimlaneData, SwimlaneNode, SwimlaneNodeType, SwimlanePhase
from .validation import SwimlaneValidator

EDGE_COLOR = "#6c757d"
ARROWHEAD_ID = "arrowhead"

# node type -> (fill, stroke)
NODE_COLORS = {
    SwimlaneNodeType.START: ("#28a745", "#1e7e34"),
    SwimlaneNodeType.END: ("#dc3545", "#bd2130"),
    SwimlaneNodeType.DECISION: ("#ffc107", "#e0a800"),
    SwimlaneNodeType.PROCESS: ("#007bff", "#0056b3"),
}


def arrowhead_defs() -> SceneElement:
    """Shared arrow marker referenced by every edge."""
    defs = element("defs")
    marker = defs.append(element(
        "marker",
        id=ARROWHEAD_ID,
        markerWidth=10,
        markerHeight=7,
        refX=9,
        refY=3.5,
        orient="auto",
    ))
    marker.append(element("polygon", points="0 0, 10 3.5, 0 7", fill=EDGE_COLOR))
    return defs


def node_shape(node: SwimlaneNode, center: Position) -> SceneElement:
    x, y = center.x, center.y
    fill, stroke = NODE_COLORS[node.type]

    if node.type in (SwimlaneNodeType.START, SwimlaneNodeType.END):
        return element("circle", cx=x, cy=y, r=20, fill=fill, stroke=stroke, stroke_width=2)
    if node.type == SwimlaneNodeType.DECISION:
        points = [(x - 25, y), (x, y - 25), (x + 25, y), (x, y + 25)]
        return element(
            "polygon", points=" ".join(f"{fmt(px)},{fmt(py)}" for px, py in points),
            fill=fill, stroke=stroke, stroke_width=2,
        )
    return element(
        "rect", x=x - 40, y=y - 20, width=80, height=40, rx=5,
        fill=fill, stroke=stroke, stroke_width=2,
    )


class SwimlaneRenderer(DiagramRenderer[SwimlaneData]):
    """Paints lanes, then phases, then edges, then nodes."""

    def build_scene(self, data: SwimlaneData, config: RenderConfig) -> SceneElement:
        svg = svg_root(config.width, config.height, "swimlane-diagram")
        svg.append(arrowhead_defs())
        geometry = compute_geometry(data, config)
        positions = compute_positions(data, config)

        for index, lane in enumerate(data.lanes):
            svg.append(self.create_lane(lane, index, geometry))

        for phase in data.phases:
            svg.append(self.create_phase(phase, geometry))

        for edge in data.edges:
            source = positions.get(edge.source)
            target = positions.get(edge.target)
            if source is None or target is None:
                continue
            group = svg.append(element(
                "g", class_="edge", data_source=edge.source, data_target=edge.target,
            ))
            group.append(element(
                "path",
                d=f"M {fmt(source.x)} {fmt(source.y)} L {fmt(target.x)} {fmt(target.y)}",
                stroke=EDGE_COLOR,
                stroke_width=2,
                fill="none",
                marker_end=f"url(#{ARROWHEAD_ID})",
                class_="swimlane-edge",
            ))

        seen: set[str] = set()
        for node in data.nodes:
            if node.id in seen or node.id not in positions:
                continue
            seen.add(node.id)
            svg.append(self.create_node(node, positions[node.id]))

        return svg

    def create_lane(self, lane: Swimlane, index: int, geometry: LaneGeometry) -> SceneElement:
        top = geometry.lane_top(index)
        group = element("g", class_=f"swimlane swimlane-{lane.type.value}", data_lane_id=lane.id)
        group.append(element(
            "rect",
            x=0, y=top, width=geometry.lane_width, height=geometry.lane_height,
            fill="#f8f9fa" if index % 2 == 0 else "#ffffff",
            stroke="#dee2e6", stroke_width=1,
            class_="swimlane-background",
        ))
        group.append(element(
            "rect",
            x=0, y=top, width=HEADER_WIDTH, height=HEADER_HEIGHT,
            fill="#e9ecef", stroke="#dee2e6", stroke_width=1,
            class_="swimlane-header",
        ))
        group.append(element(
            "text",
            text=lane.label,
            x=HEADER_WIDTH / 2,
            y=top + 25,
            text_anchor="middle",
            dominant_baseline="middle",
            fill="#495057",
            font_size=14,
            font_weight="bold",
            class_="swimlane-label",
        ))
        return group

    def create_phase(self, phase: SwimlanePhase, geometry: LaneGeometry) -> SceneElement:
        x = phase_x(phase)
        group = element("g", class_="phase", data_phase_id=phase.id)
        group.append(element(
            "line",
            x1=x, y1=0, x2=x, y2=geometry.total_height,
            stroke=EDGE_COLOR, stroke_width=2, stroke_dasharray="5,5",
            class_="swimlane-phase",
        ))
        group.append(element(
            "text",
            text=phase.label,
            x=x + 10,
            y=20,
            fill="#495057",
            font_size=12,
            font_weight="bold",
            class_="phase-label",
        ))
        return group

    def create_node(self, node: SwimlaneNode, center: Position) -> SceneElement:
        group = element(
            "g",
            class_=f"swimlane-node swimlane-node-{node.type.value}",
            data_node_id=node.id,
        )
        group.append(node_shape(node, center))
        group.append(element(
            "text",
            text=node.label,
            x=center.x,
            y=center.y + 40,
            text_anchor="middle",
            fill="#212529",
            font_size=12,
            font_weight="bold",
            class_="node-label",
        ))
        return group


SwimlaneDiagramPlugin = DiagramPlugin(
    descriptor=PluginDescriptor(
        id="swimlane-diagram",
        name="Swimlane Diagram",
        version="1.0.0",
        type=DiagramType.SWIMLANE,
        description="Process flow visualization with role-based lanes and phases",
    ),
    data_model=SwimlaneData,
    validator=SwimlaneValidator(),
    renderer=SwimlaneRenderer(),
    analyzer=SwimlaneAnalyzer(),
)
