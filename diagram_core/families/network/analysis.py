"""
Network analysis - connectivity heuristics, clusters and layout choice.
"""

from ...analysis import assign_levels, clamp_score, find_clusters, touched_node_ids
from ...models import (
    ActionType,
    AIAnalysis,
    AISuggestion,
    Priority,
    SuggestionType,
    make_suggestion,
)
from ...plugin import StructuralAnalyzer
from .models import NetworkData, NetworkLayout, NetworkNodeType


def calculate_connectivity(data: NetworkData) -> float:
    """Edges per node; 0 for an empty network."""
    if not data.nodes:
        return 0.0
    return len(data.edges) / max(1, len(data.nodes))


def calculate_coverage(data: NetworkData) -> float:
    """Share of nodes touched by at least one edge."""
    if not data.nodes:
        return 0.0
    touched = touched_node_ids(data.edges)
    return sum(1 for node in data.nodes if node.id in touched) / len(data.nodes)


def has_hierarchy(data: NetworkData) -> bool:
    """More than two levels, but clearly fewer levels than nodes."""
    levels = assign_levels(data.node_ids(), data.edges)
    level_count = len(set(levels.values()))
    return 2 < level_count < len(data.nodes) * 0.8


def identify_clusters(data: NetworkData) -> list[list[str]]:
    return find_clusters(data.node_ids(), data.edges)


def optimize_layout(data: NetworkData) -> NetworkLayout:
    if calculate_connectivity(data) > 1.5:
        return NetworkLayout.FORCE
    if has_hierarchy(data):
        return NetworkLayout.HIERARCHICAL
    if len(data.nodes) > 50:
        return NetworkLayout.GRID
    return NetworkLayout.CIRCULAR


class NetworkAnalyzer(StructuralAnalyzer[NetworkData]):

    def analyze(self, data: NetworkData) -> AIAnalysis:
        node_count = len(data.nodes)
        connectivity = calculate_connectivity(data)

        complexity = 0.3
        if node_count > 30:
            complexity += 0.3
        if connectivity > 2:
            complexity += 0.2
        if any(node.type == NetworkNodeType.CUSTOM for node in data.nodes):
            complexity += 0.1

        readability = 0.9 if node_count <= 20 and connectivity <= 3 else 0.6

        suggestions: list[AISuggestion] = []

        if connectivity < 0.5:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.MEDIUM,
                "Network has low connectivity. Consider adding more connections between nodes",
                0.7, ActionType.CREATE, {"type": "connections"}, "Add more connections",
            ))

        if node_count > 40:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.HIGH,
                "Large networks can be overwhelming. Consider using hierarchical layout or breaking into subnets",
                0.8, ActionType.OPTIMIZE, {"layout": NetworkLayout.HIERARCHICAL.value},
                "Switch to hierarchical layout",
            ))

        node_types = {node.type for node in data.nodes}
        if len(node_types) == 1 and node_count > 5:
            suggestions.append(make_suggestion(
                SuggestionType.CONTENT, Priority.LOW,
                "Consider using different node types to better represent your network components",
                0.5, ActionType.UPDATE, {"type": "node-types"}, "Diversify node types",
            ))

        return AIAnalysis(
            complexity=clamp_score(complexity),
            readability=readability,
            completeness=self.check_completeness(data),
            suggestions=suggestions,
            optimizations=[f"Use the {optimize_layout(data).value} layout"],
        )

    def check_completeness(self, data: NetworkData) -> float:
        score = 0.5
        if data.nodes:
            score += 0.2
        if data.edges:
            score += 0.2
        if data.layout is not None:
            score += 0.1
        score += calculate_coverage(data) * 0.1
        return clamp_score(score)

    def extra_suggestions(self, data: NetworkData) -> list[AISuggestion]:
        suggestions: list[AISuggestion] = []

        unlabeled = [edge for edge in data.edges if not edge.label]
        if len(unlabeled) > len(data.edges) * 0.5:
            suggestions.append(make_suggestion(
                SuggestionType.CONTENT, Priority.LOW,
                "Consider adding labels to connections to clarify their purpose or type",
                0.5, ActionType.UPDATE, {"type": "edge-labels"}, "Add edge labels",
            ))

        clusters = identify_clusters(data)
        if len(clusters) > 1:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.MEDIUM,
                f"Detected {len(clusters)} potential clusters. Consider grouping related nodes together",
                0.6, ActionType.OPTIMIZE, {"type": "clustering"}, "Group related nodes",
            ))

        return suggestions

    def optimize(self, data: NetworkData) -> NetworkData:
        """Choose a layout; node positions are kept as they are."""
        return data.model_copy(deep=True, update={"layout": optimize_layout(data)})
