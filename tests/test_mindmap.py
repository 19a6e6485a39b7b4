"""Tests for the mind map layout, validator and analyzer."""

import math
import time

import pytest

from diagram_core.families.mindmap.analysis import (
    MindMapAnalyzer,
    analyze_branch_balance,
    calculate_connectivity,
    optimize_layout,
)
from diagram_core.families.mindmap.layout import compute_positions, wrap_label
from diagram_core.families.mindmap.models import MindMapAlgorithm, MindMapData
from diagram_core.families.mindmap.plugin import NODE_PALETTE, MindMapDiagramPlugin, node_color
from diagram_core.families.mindmap.validation import (
    MindMapValidator,
    calculate_max_depth,
    contains_cycle,
    has_cycle,
)
from diagram_core.models import Priority, RenderConfig


def distance(p, q):
    return math.hypot(p.x - q.x, p.y - q.y)


class TestMindMapLayout:
    """Tests for the radial tree layout."""

    def test_root_at_center(self, mindmap, config):
        positions = compute_positions(mindmap, config)
        assert (positions["root"].x, positions["root"].y) == (600, 400)

    def test_three_children_120_degrees_apart(self, mindmap, config):
        """Children sit on the initial radius, evenly spread."""
        positions = compute_positions(mindmap, config)
        root = positions["root"]
        children = [positions[c] for c in ("a", "b", "c")]

        for child in children:
            assert distance(root, child) == pytest.approx(200)
        for p, q in [(children[0], children[1]), (children[1], children[2])]:
            # chord of a 120 degree arc on radius 200
            assert distance(p, q) == pytest.approx(2 * 200 * math.sin(math.pi / 3))

        # middle child is centred on the root angle (2*pi -> straight right)
        assert positions["b"].x == pytest.approx(800)
        assert positions["b"].y == pytest.approx(400)

    def test_grandchild_radius_decays(self, mindmap, config):
        """A single grandchild continues along its parent's angle at 0.8 radius."""
        positions = compute_positions(mindmap, config)
        assert distance(positions["a"], positions["a1"]) == pytest.approx(160)
        assert positions["a1"].x == pytest.approx(420)
        assert positions["a1"].y == pytest.approx(400 - 200 * math.sin(math.pi / 3) - 160 * math.sin(math.pi / 3))

    def test_custom_initial_radius(self, mindmap):
        positions = compute_positions(mindmap, RenderConfig(width=400, height=400, initial_radius=50))
        assert distance(positions["root"], positions["b"]) == pytest.approx(50)

    def test_missing_root(self, mindmap_factory, config):
        """An undeclared root yields no positions."""
        data = mindmap_factory([("a", None)], root="nope")
        assert compute_positions(data, config) == {}

    def test_cyclic_data_terminates(self, mindmap_factory, config):
        """Nodes on a parent cycle unreachable from the root are not placed."""
        data = mindmap_factory([("root", None), ("x", "y"), ("y", "x")])
        assert set(compute_positions(data, config)) == {"root"}

    def test_repeated_sibling_takes_one_slot(self, mindmap_factory, config):
        """Siblings a, a, b fan out as two children on opposite sides."""
        data = mindmap_factory([("root", None), ("a", "root"), ("a", "root"), ("b", "root")])
        positions = compute_positions(data, config)
        assert distance(positions["a"], positions["b"]) == pytest.approx(2 * config.initial_radius)

    def test_layout_is_deterministic(self, mindmap_payload, config):
        """Identical input gives identical positions in the same order."""
        first = compute_positions(MindMapData.model_validate(mindmap_payload), config)
        second = compute_positions(MindMapData.model_validate(mindmap_payload), config)
        assert list(first) == list(second)
        assert first == second

    def test_wrap_label(self):
        assert wrap_label("Build Phase", is_root=False) == ["Build", "Phase"]
        assert wrap_label("Build Phase", is_root=True) == ["Build Phase"]
        assert wrap_label("Launch", is_root=False) == ["Launch"]


class TestMindMapValidator:
    """Tests for mind map validation."""

    def test_valid(self, mindmap):
        result = MindMapValidator().validate(mindmap)
        assert result.is_valid
        assert result.errors == []

    def test_missing_root(self, mindmap_factory):
        data = mindmap_factory([("a", None)], root="")
        result = MindMapValidator().validate(data)
        assert [e.message for e in result.errors] == ["Mind map must have a root node"]

    def test_root_not_in_nodes(self, mindmap_factory):
        data = mindmap_factory([("a", None)], root="ghost")
        result = MindMapValidator().validate(data)
        assert result.errors[0].message == 'Root node "ghost" does not exist in nodes'

    def test_unknown_parent(self, mindmap_factory):
        data = mindmap_factory([("root", None), ("a", "missing")])
        result = MindMapValidator().validate(data)
        assert [e.message for e in result.errors] == [
            'Node "a" references non-existent parent "missing"'
        ]

    def test_single_cycle_error(self, mindmap_factory):
        """Two separate cycles still produce exactly one cycle error."""
        data = mindmap_factory([
            ("root", None), ("x", "y"), ("y", "x"), ("p", "q"), ("q", "p"),
        ])
        result = MindMapValidator().validate(data)
        cycle_errors = [e for e in result.errors if "Circular reference" in e.message]
        assert len(cycle_errors) == 1
        assert not result.is_valid

    def test_cycle_through_root(self, mindmap_factory):
        data = mindmap_factory([("root", "b"), ("a", "root"), ("b", "a")])
        assert contains_cycle(data)
        assert has_cycle(data, "root")

    def test_has_cycle_from_start(self, mindmap_factory):
        """has_cycle only looks at what is reachable from the start node."""
        data = mindmap_factory([("root", None), ("a", "root"), ("x", "y"), ("y", "x")])
        assert not has_cycle(data, "root")
        assert has_cycle(data, "x")

    def test_duplicate_ids(self, mindmap_factory):
        data = mindmap_factory([("root", None), ("a", "root"), ("a", "root")])
        result = MindMapValidator().validate(data)
        assert 'Duplicate node id "a"' in [e.message for e in result.errors]

    def test_depth_warning(self, mindmap_factory):
        """Exceeding layout.depthLimit warns but stays valid."""
        data = mindmap_factory(
            [("root", None), ("a", "root"), ("b", "a"), ("c", "b")],
            layout={"depthLimit": 2},
        )
        result = MindMapValidator().validate(data)
        assert result.is_valid
        assert [w.message for w in result.warnings] == [
            "Mind map depth (3) exceeds recommended limit (2)"
        ]

    def test_max_depth(self, mindmap):
        assert calculate_max_depth(mindmap) == 2

    def test_max_depth_with_repeated_ids(self, mindmap_factory):
        """Ten copies of one id per level still count as one level each."""
        pairs = [("root", None)]
        parent = "root"
        for level in range(7):
            node_id = f"level{level}"
            pairs.extend((node_id, parent) for _ in range(10))
            parent = node_id
        data = mindmap_factory(pairs)

        started = time.perf_counter()
        assert calculate_max_depth(data) == 7
        analysis = MindMapAnalyzer().analyze(data)
        assert time.perf_counter() - started < 1.0
        assert analysis.readability == 0.6

    def test_max_depth_ignores_cycles(self, mindmap_factory):
        data = mindmap_factory([("root", "b"), ("a", "root"), ("b", "a")])
        assert calculate_max_depth(data) == 2


class TestMindMapAnalyzer:
    """Tests for mind map heuristics."""

    def test_small_map_scores(self, mindmap):
        analysis = MindMapAnalyzer().analyze(mindmap)
        assert analysis.complexity == pytest.approx(0.3)
        assert analysis.readability == 0.9
        # root declared, more than one node, no layout, balance 0
        assert analysis.completeness == pytest.approx(0.9)

    def test_unbalanced_branches_suggestion(self, mindmap):
        assert analyze_branch_balance(mindmap) == 0.0
        analysis = MindMapAnalyzer().analyze(mindmap)
        assert [s.action.payload["type"] for s in analysis.suggestions] == ["balance"]

    def test_balanced_branches(self, mindmap_factory):
        data = mindmap_factory([("root", None), ("a", "root"), ("b", "root"), ("a1", "a"), ("b1", "b")])
        assert analyze_branch_balance(data) == 1.0

    def test_complexity_is_clamped(self, mindmap_factory):
        """All increments together would exceed 1.0."""
        chain = [("root", None), ("d1", "root"), ("d2", "d1"), ("d3", "d2"), ("d4", "d3"), ("d5", "d4")]
        flat = [(f"n{i}", "root") for i in range(50)]
        analysis = MindMapAnalyzer().analyze(mindmap_factory(chain + flat))
        assert analysis.readability == 0.6
        assert analysis.readability == 0.6

    def test_deep_and_large_suggestions(self, mindmap_factory):
        chain = [("root", None)] + [(f"d{i}", "root" if i == 1 else f"d{i - 1}") for i in range(1, 7)]
        flat = [(f"n{i}", "root") for i in range(40)]
        analysis = MindMapAnalyzer().analyze(mindmap_factory(chain + flat))
        kinds = {s.action.payload["type"]: s.priority for s in analysis.suggestions}
        assert kinds["depth"] == Priority.HIGH
        assert kinds["split"] == Priority.MEDIUM

    def test_long_root_label(self, mindmap):
        data = mindmap.model_copy(deep=True)
        data.nodes[0].label = "A root label that is much longer than thirty characters"
        analysis = MindMapAnalyzer().analyze(data)
        assert any(s.action.payload.get("nodeId") == "root" for s in analysis.suggestions)

    def test_connectivity(self, mindmap, mindmap_factory):
        assert calculate_connectivity(mindmap) == pytest.approx(0.4)
        assert calculate_connectivity(mindmap_factory([("root", None)])) == 0.0

    def test_suggest_adds_cross_links_and_ranks(self, mindmap_factory):
        """No edges at all: cross-link suggestion ranks above the low ones."""
        data = mindmap_factory([("root", None), ("a", "root"), ("b", "root"), ("a1", "a"), ("a2", "a")])
        suggestions = MindMapAnalyzer().suggest(data)
        assert suggestions[0].action.payload["type"] == "cross-links"
        assert suggestions[0].priority == Priority.MEDIUM
        ranks = [s.priority.rank for s in suggestions]
        assert ranks == sorted(ranks, reverse=True)

    def test_optimize_layout_choice(self, mindmap, mindmap_factory):
        layout = optimize_layout(mindmap)
        assert layout.algorithm == MindMapAlgorithm.TREE
        assert layout.spacing == 190
        assert layout.depth_limit == 3

        large = mindmap_factory([("root", None)] + [(f"n{i}", "root") for i in range(35)])
        assert optimize_layout(large).algorithm == MindMapAlgorithm.FORCE
        assert optimize_layout(large).spacing == 128

    def test_optimize_does_not_mutate(self, mindmap):
        optimized = MindMapAnalyzer().optimize(mindmap)
        assert mindmap.layout is None
        assert optimized.layout is not None
        assert optimized.nodes == mindmap.nodes


class TestMindMapPlugin:
    """Tests for the mind map scene."""

    def test_render(self, mindmap_payload, config):
        result = MindMapDiagramPlugin.render(mindmap_payload, config)
        assert result.metadata.node_count == 5
        assert result.metadata.errors == []
        assert result.scene.find_node_group("a1") is not None
        assert 'data-node-id="root"' in result.scene_markup

    def test_edges_painted_before_nodes(self, mindmap, config):
        scene = MindMapDiagramPlugin.render(mindmap, config).scene
        classes = [child.attrs.get("class") for child in scene.children]
        assert classes == ["mindmap-connections", "mindmap-nodes"]
        assert len(scene.children[0].children) == 4

    def test_node_colors(self, mindmap, config):
        """Root is green; other nodes take the palette entry their id hashes to."""
        root = mindmap.get_node("root")
        assert node_color(root, is_root=True) == "#4CAF50"
        # hash("a") == 97
        assert NODE_PALETTE[97 % len(NODE_PALETTE)] == "#607D8B"
        assert node_color(mindmap.get_node("a"), False) == "#607D8B"

        group = MindMapDiagramPlugin.render(mindmap, config).scene.find_node_group("a")
        circle = [el for el in group.iter() if el.tag == "circle"][0]
        assert circle.attrs["fill"] == "#607D8B"

    def test_multiword_label_wraps(self, mindmap, config):
        scene = MindMapDiagramPlugin.render(mindmap, config).scene
        text = [el for el in scene.find_node_group("b").iter() if el.tag == "text"][0]
        assert [t.text for t in text.children] == ["Build", "Phase"]

    def test_render_records_validation_errors(self, mindmap_factory, config):
        """Render goes ahead and reports errors in metadata."""
        data = mindmap_factory([("root", None), ("a", "ghost")])
        result = MindMapDiagramPlugin.render(data, config)
        assert result.metadata.errors == ['Node "a" references non-existent parent "ghost"']
