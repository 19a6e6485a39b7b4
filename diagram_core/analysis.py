"""
Graph analysis - Shared traversal and scoring helpers.

Provides the graph utilities the family analyzers and layout engines
build on. All traversals are iterative with per-call visited sets, so
cyclic or malformed input always terminates.
"""

import math
from collections import defaultdict, deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import BaseEdge


@dataclass
class ConnectedComponent:
    """A connected component in the diagram graph."""
    node_ids: list[str] = field(default_factory=list)
    edge_count: int = 0

    @property
    def size(self) -> int:
        return len(self.node_ids)


def undirected_adjacency(
    node_ids: Sequence[str],
    edges: Iterable["BaseEdge"],
) -> dict[str, list[str]]:
    """Neighbour lists (edge order preserved), ignoring dangling edges."""
    adjacency: dict[str, list[str]] = {nid: [] for nid in node_ids}
    for edge in edges:
        if edge.source in adjacency and edge.target in adjacency:
            adjacency[edge.source].append(edge.target)
            adjacency[edge.target].append(edge.source)
    return adjacency


def find_connected_components(
    node_ids: Sequence[str],
    edges: Iterable["BaseEdge"],
) -> list[ConnectedComponent]:
    """
    Find all connected components using BFS.

    Edges are treated as undirected. Components are returned in the order
    their first node appears in `node_ids`.

    Args:
        node_ids: Node ids in diagram order
        edges: Edges of the diagram

    Returns:
        List of ConnectedComponent objects
    """
    edges = list(edges)
    adjacency = undirected_adjacency(node_ids, edges)

    visited: set[str] = set()
    components: list[ConnectedComponent] = []

    for start_node in adjacency:
        if start_node in visited:
            continue

        component_nodes: list[str] = []
        frontier = deque([start_node])

        while frontier:
            current = frontier.popleft()
            if current in visited:
                continue

            visited.add(current)
            component_nodes.append(current)

            for neighbor in adjacency[current]:
                if neighbor not in visited:
                    frontier.append(neighbor)

        components.append(ConnectedComponent(node_ids=component_nodes))

    # one pass; both endpoints of a known edge share a component
    component_of = {nid: c for c in components for nid in c.node_ids}
    for edge in edges:
        if edge.source in component_of and edge.target in component_of:
            component_of[edge.source].edge_count += 1

    return components


def find_clusters(
    node_ids: Sequence[str],
    edges: Iterable["BaseEdge"],
) -> list[list[str]]:
    """Connected components with more than one node."""
    return [c.node_ids for c in find_connected_components(node_ids, edges) if c.size > 1]


def touched_node_ids(edges: Iterable["BaseEdge"]) -> set[str]:
    """Ids referenced by at least one edge endpoint."""
    touched: set[str] = set()
    for edge in edges:
        touched.add(edge.source)
        touched.add(edge.target)
    return touched


def assign_levels(
    node_ids: Sequence[str],
    edges: Iterable["BaseEdge"],
) -> dict[str, int]:
    """
    Assign a hierarchy level to every node.

    Starts at nodes with no incoming edge (level 0) and walks outgoing
    edges breadth-first. A node reached again on a longer path moves to
    the larger level. Levels never exceed len(node_ids) - 1, which bounds
    the walk on cyclic graphs. Unreached nodes stay at level 0.
    """
    known = set(node_ids)
    children: dict[str, list[str]] = defaultdict(list)
    has_incoming: set[str] = set()

    for edge in edges:
        if edge.source in known and edge.target in known:
            children[edge.source].append(edge.target)
            has_incoming.add(edge.target)

    levels: dict[str, int] = {nid: 0 for nid in node_ids}
    max_level = max(0, len(levels) - 1)
    roots = [nid for nid in levels if nid not in has_incoming]

    queue = deque((root, 0) for root in roots)
    reached: set[str] = set(roots)

    while queue:
        node_id, level = queue.popleft()
        if level < levels[node_id]:
            continue  # a longer path already moved this node down
        for child in children[node_id]:
            next_level = level + 1
            if next_level > max_level:
                continue
            if child not in reached or next_level > levels[child]:
                reached.add(child)
                levels[child] = next_level
                queue.append((child, next_level))

    return levels


def count_descendants(children: dict[str, list[str]], node_id: str) -> int:
    """Number of nodes below `node_id` (each counted once)."""
    visited: set[str] = {node_id}
    stack = list(children.get(node_id, []))
    count = 0

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        count += 1
        stack.extend(children.get(current, []))

    return count


def balance_score(counts: Sequence[int]) -> float:
    """
    Balance of a set of branch sizes.

    1 - stddev/mean (population stddev) floored at 0; 1.0 when there is
    at most one branch or every branch is empty.
    """
    if len(counts) <= 1:
        return 1.0

    mean = sum(counts) / len(counts)
    if mean == 0:
        return 1.0

    variance = sum((c - mean) ** 2 for c in counts) / len(counts)
    return max(0.0, 1 - math.sqrt(variance) / mean)


def clamp_score(value: float) -> float:
    """Clamp a heuristic score into [0, 1]."""
    return max(0.0, min(1.0, value))
