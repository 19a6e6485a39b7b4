"""
Mind map analysis - depth/size heuristics and branch balance.
"""

from ...analysis import balance_score, clamp_score, count_descendants
from ...models import (
    ActionType,
    AIAnalysis,
    AISuggestion,
    Priority,
    SuggestionType,
    make_suggestion,
)
from ...plugin import StructuralAnalyzer
from .models import MindMapAlgorithm, MindMapData, MindMapDirection, MindMapLayout
from .validation import calculate_max_depth

ROOT_LABEL_LIMIT = 30


def analyze_branch_balance(data: MindMapData) -> float:
    """Balance of the root's branches by descendant count (1.0 = even)."""
    children = data.children_index()
    counts = [count_descendants(children, child_id) for child_id in children.get(data.root_node, [])]
    return balance_score(counts)


def calculate_connectivity(data: MindMapData) -> float:
    """Edges as a share of all possible node pairs; 0 below two nodes."""
    n = len(data.nodes)
    if n < 2:
        return 0.0
    return len(data.edges) / (n * (n - 1) / 2)


def optimize_layout(data: MindMapData) -> MindMapLayout:
    """Pick a layout algorithm and spacing from size and depth alone."""
    node_count = len(data.nodes)
    max_depth = calculate_max_depth(data)

    algorithm = MindMapAlgorithm.TREE
    if node_count > 30:
        algorithm = MindMapAlgorithm.FORCE
    if max_depth > 4:
        algorithm = MindMapAlgorithm.CIRCULAR

    return MindMapLayout(
        algorithm=algorithm,
        direction=MindMapDirection.RADIAL,
        spacing=max(100, 200 - node_count * 2),
        depth_limit=min(max_depth + 1, 6),
    )


class MindMapAnalyzer(StructuralAnalyzer[MindMapData]):

    def analyze(self, data: MindMapData) -> AIAnalysis:
        node_count = len(data.nodes)
        max_depth = calculate_max_depth(data)
        balance = analyze_branch_balance(data)

        complexity = 0.3
        if node_count > 20:
            complexity += 0.3
        if max_depth > 4:
            complexity += 0.2
        if node_count > 50:
            complexity += 0.2

        readability = 0.9 if node_count <= 30 and max_depth <= 4 else 0.6

        suggestions: list[AISuggestion] = []

        if max_depth > 5:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.HIGH,
                "Consider restructuring - mind maps work best with 3-4 levels of depth",
                0.9, ActionType.OPTIMIZE, {"type": "depth"}, "Reduce depth levels",
            ))

        if node_count > 40:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.MEDIUM,
                "Large mind maps can be overwhelming. Consider breaking into sub-maps",
                0.8, ActionType.OPTIMIZE, {"type": "split"}, "Split into sub-maps",
            ))

        if balance < 0.5:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.LOW,
                "Some branches are much larger than others. Consider balancing the structure",
                0.6, ActionType.OPTIMIZE, {"type": "balance"}, "Balance branches",
            ))

        root = data.get_node(data.root_node)
        if root is not None and len(root.label) > ROOT_LABEL_LIMIT:
            suggestions.append(make_suggestion(
                SuggestionType.CONTENT, Priority.LOW,
                "Consider shortening the root node label for better readability",
                0.5, ActionType.UPDATE, {"nodeId": root.id, "property": "label"},
                "Shorten root label",
            ))

        layout = optimize_layout(data)
        return AIAnalysis(
            complexity=clamp_score(complexity),
            readability=readability,
            completeness=self.check_completeness(data, balance),
            suggestions=suggestions,
            optimizations=[f"Use the {layout.algorithm.value} layout with spacing {layout.spacing:g}"],
        )

    def check_completeness(self, data: MindMapData, balance: float) -> float:
        score = 0.5
        if data.root_node:
            score += 0.2
        if len(data.nodes) > 1:
            score += 0.2
        if data.layout is not None:
            score += 0.1
        score += balance * 0.1
        return clamp_score(score)

    def extra_suggestions(self, data: MindMapData) -> list[AISuggestion]:
        if len(data.nodes) < 2 or calculate_connectivity(data) >= 0.3:
            return []
        return [make_suggestion(
            SuggestionType.STRUCTURE, Priority.MEDIUM,
            "Consider adding cross-connections between different branches",
            0.7, ActionType.CREATE, {"type": "cross-links"}, "Add cross-branch connections",
        )]

    def optimize(self, data: MindMapData) -> MindMapData:
        return data.model_copy(deep=True, update={"layout": optimize_layout(data)})
