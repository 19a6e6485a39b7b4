"""Pytest configuration and shared fixtures for diagram engine tests."""

import pytest

from diagram_core.families.mindmap.models import MindMapData
from diagram_core.families.network.models import NetworkData
from diagram_core.families.swimlane.models import SwimlaneData
from diagram_core.models import RenderConfig


@pytest.fixture
def config():
    """Default 1200x800 canvas."""
    return RenderConfig(width=1200, height=800)


@pytest.fixture
def mindmap_payload():
    """Root with three children, one grandchild."""
    return {
        "type": "mindmap",
        "rootNode": "root",
        "nodes": [
            {"id": "root", "label": "Project Plan"},
            {"id": "a", "label": "Research", "parent": "root"},
            {"id": "b", "label": "Build Phase", "parent": "root"},
            {"id": "c", "label": "Launch", "parent": "root"},
            {"id": "a1", "label": "Interviews", "parent": "a"},
        ],
        "edges": [
            {"id": "e1", "source": "root", "target": "a"},
            {"id": "e2", "source": "root", "target": "b"},
            {"id": "e3", "source": "root", "target": "c"},
            {"id": "e4", "source": "a", "target": "a1"},
        ],
    }


@pytest.fixture
def mindmap(mindmap_payload):
    return MindMapData.model_validate(mindmap_payload)


@pytest.fixture
def network_payload():
    """Small unplaced network: router feeding a server and a database."""
    return {
        "type": "network",
        "layout": "force",
        "nodes": [
            {"id": "r", "label": "Router", "type": "router"},
            {"id": "s", "label": "Web", "type": "server"},
            {"id": "d", "label": "DB", "type": "database"},
            {"id": "u", "label": "User", "type": "user"},
        ],
        "edges": [
            {"id": "e1", "source": "r", "target": "s", "type": "physical"},
            {"id": "e2", "source": "s", "target": "d", "label": "SQL"},
            {"id": "e3", "source": "u", "target": "r", "type": "wireless"},
        ],
    }


@pytest.fixture
def network(network_payload):
    return NetworkData.model_validate(network_payload)


@pytest.fixture
def swimlane_payload():
    """Two lanes, one start node in lane A, one process node in lane B."""
    return {
        "type": "swimlane",
        "lanes": [
            {"id": "A", "label": "Customer", "type": "lane"},
            {"id": "B", "label": "Support", "type": "lane"},
        ],
        "phases": [],
        "nodes": [
            {"id": "n1", "label": "Open ticket", "laneId": "A", "type": "start", "position": {"x": 0, "y": 0}},
            {"id": "n2", "label": "Triage", "laneId": "B", "type": "process", "position": {"x": 100, "y": 0}},
        ],
        "edges": [
            {"id": "e1", "source": "n1", "target": "n2"},
        ],
    }


@pytest.fixture
def swimlane(swimlane_payload):
    return SwimlaneData.model_validate(swimlane_payload)


def make_mindmap(nodes, root="root", **extra):
    """Build a mind map from (id, parent) pairs."""
    return MindMapData.model_validate({
        "type": "mindmap",
        "rootNode": root,
        "nodes": [{"id": nid, "label": nid, "parent": parent} for nid, parent in nodes],
        **extra,
    })


@pytest.fixture
def mindmap_factory():
    return make_mindmap
