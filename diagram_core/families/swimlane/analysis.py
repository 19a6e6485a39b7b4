"""
Swimlane analysis - lane/phase heuristics and lane-local packing.
"""

from ...analysis import clamp_score
from ...models import (
    ActionType,
    AIAnalysis,
    AISuggestion,
    Position,
    Priority,
    SuggestionType,
    make_suggestion,
)
from ...plugin import StructuralAnalyzer
from .models import SwimlaneData, SwimlaneNodeType

PACK_STEP = 150
PACK_MARGIN = 50
PACK_Y = 50


def packed_positions(data: SwimlaneData) -> list[Position]:
    """Left-to-right position of each node by its order within its lane."""
    seen_per_lane: dict[str, int] = {}
    positions = []
    for node in data.nodes:
        index = seen_per_lane.get(node.lane_id, 0)
        seen_per_lane[node.lane_id] = index + 1
        positions.append(Position(x=index * PACK_STEP + PACK_MARGIN, y=PACK_Y))
    return positions


class SwimlaneAnalyzer(StructuralAnalyzer[SwimlaneData]):

    def analyze(self, data: SwimlaneData) -> AIAnalysis:
        lane_count = len(data.lanes)
        node_count = len(data.nodes)
        has_phases = bool(data.phases)

        complexity = 0.4
        if lane_count > 3:
            complexity += 0.2
        if node_count > 10:
            complexity += 0.2
        if has_phases:
            complexity += 0.1

        readability = 0.8 if lane_count <= 5 and node_count <= 15 else 0.6

        suggestions: list[AISuggestion] = []

        if lane_count > 5:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.HIGH,
                "Consider reducing the number of lanes for better readability",
                0.8, ActionType.OPTIMIZE, {"type": "lanes"}, "Optimize lane structure",
            ))

        if not has_phases and node_count > 8:
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.MEDIUM,
                "Consider adding phases to organize the process flow",
                0.7, ActionType.CREATE, {"type": "phases"}, "Add process phases",
            ))

        return AIAnalysis(
            complexity=clamp_score(complexity),
            readability=readability,
            completeness=self.check_completeness(data),
            suggestions=suggestions,
            optimizations=["Pack nodes left to right within each lane"],
        )

    def check_completeness(self, data: SwimlaneData) -> float:
        score = 0.5
        if data.lanes:
            score += 0.2
        if data.nodes:
            score += 0.2
        if data.edges:
            score += 0.1
        if data.has_node_type(SwimlaneNodeType.START) and data.has_node_type(SwimlaneNodeType.END):
            score += 0.1
        return clamp_score(score)

    def extra_suggestions(self, data: SwimlaneData) -> list[AISuggestion]:
        suggestions: list[AISuggestion] = []

        if not data.has_node_type(SwimlaneNodeType.START):
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.MEDIUM,
                "Consider adding a start node to clearly indicate process beginning",
                0.6, ActionType.CREATE, {"type": "start-node"}, "Add start node",
            ))

        if not data.has_node_type(SwimlaneNodeType.END):
            suggestions.append(make_suggestion(
                SuggestionType.STRUCTURE, Priority.MEDIUM,
                "Consider adding an end node to clearly indicate process completion",
                0.6, ActionType.CREATE, {"type": "end-node"}, "Add end node",
            ))

        return suggestions

    def optimize(self, data: SwimlaneData) -> SwimlaneData:
        nodes = [
            node.model_copy(deep=True, update={"position": position})
            for node, position in zip(data.nodes, packed_positions(data))
        ]
        return data.model_copy(deep=True, update={"nodes": nodes})
