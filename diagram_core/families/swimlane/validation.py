"""
Swimlane validation - lanes, lane membership, edge references, phases.
"""

from ...plugin import DiagramValidator
from ...validation import (
    ValidationIssue,
    ValidationResult,
    check_duplicate_ids,
    check_edge_references,
    error,
    warning,
)
from .models import SwimlaneData


class SwimlaneValidator(DiagramValidator[SwimlaneData]):
    """Structural checks for swimlane diagrams."""

    def validate(self, data: SwimlaneData) -> ValidationResult:
        issues: list[ValidationIssue] = []

        if not data.lanes:
            issues.append(error("Swimlane diagram must have at least one lane"))

        lane_ids = {lane.id for lane in data.lanes}
        for node in data.nodes:
            if node.lane_id not in lane_ids:
                issues.append(error(
                    f'Node "{node.label}" references non-existent lane "{node.lane_id}"',
                    node_id=node.id or None,
                ))

        issues.extend(check_duplicate_ids(data.nodes))
        issues.extend(check_edge_references(data.edges, {node.id for node in data.nodes}))

        for phase in data.phases:
            if phase.end_position < phase.start_position:
                issues.append(warning(
                    f'Phase "{phase.label or phase.id}" ends before it starts '
                    f"({phase.end_position:g} < {phase.start_position:g})"
                ))

        return ValidationResult.from_issues(issues)
