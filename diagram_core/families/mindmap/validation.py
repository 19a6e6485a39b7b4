"""
Mind map validation - root, parent links, cycles and depth.

Checks run in order and accumulate:
1. Declared root exists (as a field and as a node)
2. Every parent reference resolves
3. Node ids are unique
4. Parent links are acyclic (one error however many cycles exist)
5. Depth stays within layout.depth_limit (warning only)
"""

from enum import Enum

from ...plugin import DiagramValidator
from ...validation import (
    ValidationIssue,
    ValidationResult,
    check_duplicate_ids,
    error,
    warning,
)
from .models import MindMapData


class VisitState(Enum):
    """Per-node state of the cycle walk."""
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


def _walk_for_cycle(
    children: dict[str, list[str]],
    start: str,
    state: dict[str, VisitState],
) -> bool:
    """
    Depth-first walk from `start` over child links.

    Returns True as soon as a node that is still in progress (on the
    current path) is reached again. `state` is shared across calls so a
    node finished by an earlier walk is never re-entered.
    """
    if state.get(start, VisitState.UNVISITED) is not VisitState.UNVISITED:
        return False

    state[start] = VisitState.IN_PROGRESS
    stack = [(start, iter(children.get(start, [])))]

    while stack:
        node_id, pending = stack[-1]
        child = next(pending, None)
        if child is None:
            state[node_id] = VisitState.DONE
            stack.pop()
            continue

        child_state = state.get(child, VisitState.UNVISITED)
        if child_state is VisitState.IN_PROGRESS:
            return True
        if child_state is VisitState.UNVISITED:
            state[child] = VisitState.IN_PROGRESS
            stack.append((child, iter(children.get(child, []))))

    return False


def has_cycle(data: MindMapData, start: str) -> bool:
    """True if a parent-link cycle is reachable from `start`."""
    return _walk_for_cycle(data.children_index(), start, {})


def contains_cycle(data: MindMapData) -> bool:
    """True if any parent-link cycle exists, reachable from the root or not."""
    children = data.children_index()
    state: dict[str, VisitState] = {}

    starts = [data.root_node] if data.root_node else []
    starts.extend(node.id for node in data.nodes)
    return any(_walk_for_cycle(children, node_id, state) for node_id in starts)


def calculate_max_depth(data: MindMapData) -> int:
    """
    Longest parent -> leaf chain below the root, in edges.

    Each unique id is expanded once and its height memoized, so the walk
    is linear in nodes plus links even when ids repeat. A link back to a
    node still in progress (a cycle) contributes nothing.
    """
    if not data.root_node:
        return 0

    children = data.children_index()
    height: dict[str, int] = {}
    state = {data.root_node: VisitState.IN_PROGRESS}
    stack = [(data.root_node, iter(children.get(data.root_node, [])))]

    while stack:
        node_id, pending = stack[-1]
        child = next(pending, None)
        if child is None:
            height[node_id] = max(
                (height[c] + 1 for c in children.get(node_id, []) if c in height),
                default=0,
            )
            state[node_id] = VisitState.DONE
            stack.pop()
            continue

        if state.get(child, VisitState.UNVISITED) is VisitState.UNVISITED:
            state[child] = VisitState.IN_PROGRESS
            stack.append((child, iter(children.get(child, []))))

    return height[data.root_node]


class MindMapValidator(DiagramValidator[MindMapData]):
    """Structural checks for mind maps."""

    def validate(self, data: MindMapData) -> ValidationResult:
        issues: list[ValidationIssue] = []
        node_ids = {node.id for node in data.nodes}

        if not data.root_node:
            issues.append(error("Mind map must have a root node"))
        elif data.root_node not in node_ids:
            issues.append(error(
                f'Root node "{data.root_node}" does not exist in nodes',
                node_id=data.root_node,
            ))

        for node in data.nodes:
            if node.parent and node.parent not in node_ids:
                issues.append(error(
                    f'Node "{node.id}" references non-existent parent "{node.parent}"',
                    node_id=node.id,
                ))

        issues.extend(check_duplicate_ids(data.nodes))

        if contains_cycle(data):
            issues.append(error("Circular reference detected in mind map structure"))

        depth_limit = data.layout.depth_limit if data.layout else None
        if depth_limit:
            max_depth = calculate_max_depth(data)
            if max_depth > depth_limit:
                issues.append(warning(
                    f"Mind map depth ({max_depth}) exceeds recommended limit ({depth_limit})"
                ))

        return ValidationResult.from_issues(issues)
