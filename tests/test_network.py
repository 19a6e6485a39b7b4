"""Tests for the network layout, validator and analyzer."""

import pytest

from diagram_core.families.network.analysis import (
    NetworkAnalyzer,
    calculate_connectivity,
    has_hierarchy,
    identify_clusters,
    optimize_layout,
)
from diagram_core.families.network.layout import (
    compute_layout,
    compute_positions,
    wireless_control_point,
)
from diagram_core.families.network.models import NetworkData, NetworkLayout
from diagram_core.families.network.plugin import NetworkDiagramPlugin
from diagram_core.families.network.validation import NetworkValidator
from diagram_core.models import Position


def make_network(node_ids, pairs=(), layout=None, **node_fields):
    return NetworkData.model_validate({
        "type": "network",
        "layout": layout,
        "nodes": [{"id": nid, "label": nid.upper(), **node_fields} for nid in node_ids],
        "edges": [{"id": f"e{i}", "source": s, "target": t} for i, (s, t) in enumerate(pairs)],
    })


def dense_network():
    """Three nodes, five edges: connectivity above 1.5."""
    return make_network(["a", "b", "c"], [("a", "b"), ("b", "c"), ("c", "a"), ("a", "c"), ("b", "a")])


class TestNetworkLayout:
    """Tests for deterministic network placement."""

    def test_force_is_circle(self, network, config):
        positions = compute_positions(network, config)
        assert positions["r"].x == pytest.approx(920)
        assert positions["r"].y == pytest.approx(400)
        assert positions["d"].x == pytest.approx(280)

    def test_layout_is_idempotent(self, network, config):
        once = compute_layout(network, config)
        twice = compute_layout(once, config)
        assert once == twice

    def test_layout_is_deterministic(self, network, config):
        assert compute_layout(network, config) == compute_layout(network, config)

    def test_layout_does_not_mutate(self, network, config):
        compute_layout(network, config)
        assert all(node.position.is_origin() for node in network.nodes)

    def test_placed_nodes_pass_through(self, config):
        data = NetworkData.model_validate({
            "type": "network",
            "layout": "grid",
            "nodes": [
                {"id": "a", "label": "A", "position": {"x": 10, "y": 0}},
                {"id": "b", "label": "B", "position": {"x": 0, "y": 5}},
            ],
        })
        positions = compute_positions(data, config)
        assert positions["a"] == Position(x=10, y=0)
        assert positions["b"] == Position(x=0, y=5)

    def test_one_unplaced_node_relays_everything(self, config):
        data = NetworkData.model_validate({
            "type": "network",
            "layout": "grid",
            "nodes": [
                {"id": "a", "label": "A", "position": {"x": 10, "y": 10}},
                {"id": "b", "label": "B"},
            ],
        })
        positions = compute_positions(data, config)
        # 2 nodes: 2 columns, 1 row
        assert positions["a"] == Position(x=300, y=400)
        assert positions["b"] == Position(x=900, y=400)

    def test_grid(self, config):
        data = make_network(["a", "b", "c", "d", "e"], layout="grid")
        positions = compute_positions(data, config)
        assert positions["e"] == Position(x=600, y=600)

    def test_grid_places_every_node_apart(self, config):
        """Every grid size gives each node its own cell."""
        for count in range(1, 41):
            data = make_network([f"n{i}" for i in range(count)], layout="grid")
            positions = compute_positions(data, config)
            assert len(positions) == count
            assert len({(p.x, p.y) for p in positions.values()}) == count

    def test_hierarchical(self, config):
        data = make_network(["a", "b", "c"], [("a", "b"), ("b", "c")], layout="hierarchical")
        positions = compute_positions(data, config)
        assert positions["a"].y == pytest.approx(800 / 6)
        assert positions["c"].y == pytest.approx(800 * 5 / 6)
        assert positions["b"].x == 600

    def test_hierarchical_cycle_terminates(self, config):
        data = make_network(["r", "a", "b"], [("r", "a"), ("a", "b"), ("b", "a")], layout="hierarchical")
        assert len(compute_positions(data, config)) == 3

    def test_empty(self, config):
        data = make_network([])
        assert compute_positions(data, config) == {}
        assert compute_layout(data, config).nodes == []

    def test_wireless_control_point(self):
        control = wireless_control_point(Position(x=0, y=0), Position(x=100, y=0))
        assert control == Position(x=50, y=-30)
        far = wireless_control_point(Position(x=0, y=0), Position(x=1000, y=0))
        assert far.y == -100


class TestNetworkValidator:
    """Tests for network validation."""

    def test_valid_with_no_isolated_nodes(self, network):
        result = NetworkValidator().validate(network)
        assert result.is_valid
        assert result.warnings == []

    def test_empty_network(self):
        result = NetworkValidator().validate(make_network([]))
        assert [e.message for e in result.errors] == ["Network diagram must have at least one node"]

    def test_missing_id_and_label(self):
        data = NetworkData.model_validate({"type": "network", "nodes": [{}]})
        messages = [e.message for e in NetworkValidator().validate(data).errors]
        assert messages == [
            "Node at index 0 must have an ID",
            'Node "at index 0" must have a label',
        ]

    def test_dangling_edge_reports_both_ends(self):
        data = make_network(["a"], [("x", "y")])
        messages = [e.message for e in NetworkValidator().validate(data).errors]
        assert 'Edge references non-existent source node "x"' in messages
        assert 'Edge references non-existent target node "y"' in messages

    def test_isolated_nodes_single_warning(self):
        data = make_network(["a", "b", "c", "d"], [("a", "b")])
        result = NetworkValidator().validate(data)
        assert result.is_valid
        assert [w.message for w in result.warnings] == [
            "2 node(s) are not connected to any other nodes"
        ]


class TestNetworkAnalyzer:
    """Tests for network heuristics."""

    def test_fixture_scores(self, network):
        analysis = NetworkAnalyzer().analyze(network)
        assert analysis.complexity == pytest.approx(0.3)
        assert analysis.readability == 0.9
        assert analysis.completeness == 1.0
        assert analysis.suggestions == []

    def test_zero_nodes(self):
        data = make_network([])
        assert calculate_connectivity(data) == 0
        analysis = NetworkAnalyzer().analyze(data)
        assert analysis.completeness == pytest.approx(0.5)
        assert [s.action.payload["type"] for s in analysis.suggestions] == ["connections"]

    def test_custom_nodes_add_complexity(self):
        data = make_network(["a", "b"], [("a", "b")])
        assert NetworkAnalyzer().analyze(data).complexity == pytest.approx(0.4)

    def test_single_type_suggestion(self):
        data = make_network([f"n{i}" for i in range(6)], [(f"n{i}", f"n{i + 1}") for i in range(5)], type="server")
        payloads = [s.action.payload for s in NetworkAnalyzer().analyze(data).suggestions]
        assert {"type": "node-types"} in payloads

    def test_large_network(self):
        data = make_network([f"n{i}" for i in range(41)], [(f"n{i}", f"n{i + 1}") for i in range(40)])
        analysis = NetworkAnalyzer().analyze(data)
        assert analysis.readability == 0.6
        assert analysis.suggestions[0].action.payload == {"layout": "hierarchical"}

    def test_clusters(self):
        data = make_network(["a", "b", "c", "d", "e"], [("a", "b"), ("c", "d")])
        assert identify_clusters(data) == [["a", "b"], ["c", "d"]]
        suggestions = NetworkAnalyzer().suggest(data)
        messages = [s.message for s in suggestions]
        assert "Detected 2 potential clusters. Consider grouping related nodes together" in messages

    def test_suggest_edge_labels(self, network):
        suggestions = NetworkAnalyzer().suggest(network)
        assert [s.action.payload["type"] for s in suggestions] == ["edge-labels"]

    def test_optimize_layout_choice(self, network):
        assert optimize_layout(network) == NetworkLayout.CIRCULAR

        assert optimize_layout(dense_network()) == NetworkLayout.FORCE

        tree = make_network(
            ["r", "a", "b", "a1", "a2", "a3", "b1", "b2", "b3"],
            [("r", "a"), ("r", "b"), ("a", "a1"), ("a", "a2"), ("a", "a3"),
             ("b", "b1"), ("b", "b2"), ("b", "b3")],
        )
        assert has_hierarchy(tree)
        assert optimize_layout(tree) == NetworkLayout.HIERARCHICAL

        big = make_network([f"n{i}" for i in range(51)])
        assert optimize_layout(big) == NetworkLayout.GRID

    def test_optimize_keeps_positions(self, network):
        optimized = NetworkAnalyzer().optimize(network)
        assert optimized.layout == NetworkLayout.CIRCULAR
        assert [n.position for n in optimized.nodes] == [n.position for n in network.nodes]
        assert network.layout == NetworkLayout.FORCE


class TestNetworkPlugin:
    """Tests for the network scene."""

    def test_shapes_by_type(self, network, config):
        scene = NetworkDiagramPlugin.render(network, config).scene
        shapes = {nid: scene.find_node_group(nid).children[0].tag for nid in ("r", "s", "d", "u")}
        assert shapes == {"r": "polygon", "s": "rect", "d": "ellipse", "u": "circle"}

    def test_edges_before_nodes(self, network, config):
        scene = NetworkDiagramPlugin.render(network, config).scene
        classes = [child.attrs["class"].split()[0] for child in scene.children]
        assert classes == ["network-edge"] * 3 + ["network-node"] * 4

    def test_edge_styles(self, network, config):
        scene = NetworkDiagramPlugin.render(network, config).scene
        physical, labeled, wireless = scene.children[:3]
        assert physical.children[0].attrs["stroke-width"] == "4"
        assert labeled.children[0].attrs["class"] == "logical-connection"
        assert [c.tag for c in labeled.children] == ["line", "rect", "text"]
        assert wireless.children[0].tag == "path"
        assert wireless.children[0].attrs["stroke-dasharray"] == "5,5"

    def test_dangling_edge_has_no_geometry(self, config):
        data = make_network(["a"], [("a", "ghost")])
        result = NetworkDiagramPlugin.render(data, config)
        assert [c.attrs["class"] for c in result.scene.children] == ["network-node network-node-custom"]
        assert result.metadata.errors == ['Edge references non-existent target node "ghost"']
