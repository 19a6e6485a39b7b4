"""Tests for the plugin contract, registry and tagged-union parsing."""

import pytest
from loguru import logger

from diagram_core import (
    DiagramParseError,
    MindMapData,
    NetworkData,
    PluginNotFoundError,
    PluginRegistry,
    RenderConfig,
    SwimlaneData,
    default_registry,
    parse_diagram,
)
from diagram_core.families import BUILTIN_PLUGINS, MindMapDiagramPlugin, NetworkDiagramPlugin
from diagram_core.models import Bounds, ExportFormat


@pytest.fixture
def log_records():
    """Loguru records emitted while the test runs."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


class TestParseDiagram:
    """Tests for discriminated parsing of raw payloads."""

    def test_dispatch_on_type(self, mindmap_payload, network_payload, swimlane_payload):
        assert isinstance(parse_diagram(mindmap_payload), MindMapData)
        assert isinstance(parse_diagram(network_payload), NetworkData)
        assert isinstance(parse_diagram(swimlane_payload), SwimlaneData)

    def test_unknown_type(self):
        with pytest.raises(DiagramParseError):
            parse_diagram({"type": "timeline", "nodes": []})

    def test_missing_type(self):
        with pytest.raises(DiagramParseError) as excinfo:
            parse_diagram({"nodes": []})
        assert excinfo.value.errors

    def test_wrong_field_shape(self):
        with pytest.raises(DiagramParseError):
            parse_diagram({"type": "network", "nodes": [{"id": "a", "type": "toaster"}]})

    def test_camel_and_snake_case(self):
        camel = parse_diagram({"type": "mindmap", "rootNode": "r"})
        snake = parse_diagram({"type": "mindmap", "root_node": "r"})
        assert camel.root_node == snake.root_node == "r"


class TestPluginRegistry:
    """Tests for registration and dispatch."""

    def test_default_registry(self):
        assert {p.type for p in default_registry.all()} == {"mindmap", "network", "swimlane"}
        assert default_registry.supports("network")
        assert not default_registry.supports("timeline")

    def test_unknown_type(self):
        with pytest.raises(PluginNotFoundError) as excinfo:
            default_registry.get("timeline")
        assert excinfo.value.diagram_type == "timeline"

    def test_duplicate_registration_ignored(self):
        registry = PluginRegistry([MindMapDiagramPlugin])
        assert registry.register(MindMapDiagramPlugin) is False
        assert len(registry.all()) == 1

    def test_builtin_registration_logs_at_debug(self, log_records):
        """Building the built-in table stays below INFO; a duplicate warns."""
        registry = PluginRegistry(BUILTIN_PLUGINS)
        assert [r["level"].name for r in log_records] == ["DEBUG"] * 3

        registry.register(MindMapDiagramPlugin)
        assert log_records[-1]["level"].name == "WARNING"

    def test_unregister(self):
        registry = PluginRegistry([MindMapDiagramPlugin, NetworkDiagramPlugin])
        assert registry.unregister("mindmap")
        assert not registry.unregister("mindmap")
        assert [p.type for p in registry.all()] == ["network"]

    def test_get_by_id(self):
        assert default_registry.get_by_id("swimlane-diagram").type == "swimlane"
        assert default_registry.get_by_id("nope") is None

    def test_metadata_and_formats(self):
        ids = [d.id for d in default_registry.metadata()]
        assert ids == ["mindmap-diagram", "network-diagram", "swimlane-diagram"]
        assert default_registry.supported_formats("mindmap") == [
            ExportFormat.SVG, ExportFormat.PNG, ExportFormat.PDF,
        ]

    def test_dispatch_accepts_dict_or_model(self, mindmap_payload, mindmap):
        assert default_registry.validate(mindmap_payload) == default_registry.validate(mindmap)

    def test_dispatch_unknown_type(self):
        with pytest.raises(PluginNotFoundError):
            default_registry.analyze({"type": "venn"})

    def test_dispatch_missing_type(self):
        with pytest.raises(DiagramParseError):
            default_registry.render({"nodes": []})

    def test_dispatch_does_not_mutate(self, network_payload):
        before = repr(network_payload)
        default_registry.render(network_payload)
        default_registry.optimize(network_payload)
        assert repr(network_payload) == before

    def test_schema(self):
        schema = default_registry.get_schema("mindmap")
        assert "rootNode" in schema["properties"]


class TestPluginContract:
    """Tests for the shared plugin facade."""

    def test_default_canvas(self, network):
        result = NetworkDiagramPlugin.render(network)
        assert result.bounds == Bounds(x=0, y=0, width=1200, height=800)
        assert result.scene.attrs["viewBox"] == "0 0 1200 800"

    def test_bounds_follow_config(self, network):
        bounds = NetworkDiagramPlugin.get_bounds(network, RenderConfig(width=640, height=480))
        assert (bounds.width, bounds.height) == (640, 480)

    def test_render_metadata(self, network, config):
        metadata = NetworkDiagramPlugin.render(network, config).metadata
        assert (metadata.node_count, metadata.edge_count) == (4, 3)
        assert metadata.render_time >= 0
        assert metadata.warnings == [] and metadata.errors == []

    def test_result_json(self, network, config):
        payload = NetworkDiagramPlugin.render(network, config).to_json_dict()
        assert set(payload) == {"sceneMarkup", "bounds", "metadata"}
        assert "renderTime" in payload["metadata"]

    def test_update_and_destroy(self, network, mindmap, config):
        scene = NetworkDiagramPlugin.render(network, config).scene
        MindMapDiagramPlugin.update(scene, mindmap, config)
        assert scene.attrs["class"] == "mindmap-diagram"
        assert scene.find_node_group("root") is not None

        MindMapDiagramPlugin.destroy(scene)
        assert scene.children == []

    def test_type_tag_mismatch(self, network):
        result = NetworkDiagramPlugin.validate(network, type_tag="swimlane")
        assert not result.is_valid
        assert "swimlane" in result.errors[0].message

    def test_suggest_is_ranked(self, network):
        suggestions = NetworkDiagramPlugin.suggest(network)
        ranks = [(s.priority.rank, s.confidence) for s in suggestions]
        assert ranks == sorted(ranks, reverse=True)
