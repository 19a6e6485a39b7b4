"""
Network validation - node identity, edge references and isolation.
"""

from ...analysis import touched_node_ids
from ...plugin import DiagramValidator
from ...validation import (
    ValidationIssue,
    ValidationResult,
    check_duplicate_ids,
    check_edge_references,
    error,
    warning,
)
from .models import NetworkData


def find_isolated_nodes(data: NetworkData) -> list[str]:
    """Ids of nodes that no edge touches, in diagram order."""
    touched = touched_node_ids(data.edges)
    return [node.id for node in data.nodes if node.id not in touched]


class NetworkValidator(DiagramValidator[NetworkData]):
    """Structural checks for network diagrams."""

    def validate(self, data: NetworkData) -> ValidationResult:
        issues: list[ValidationIssue] = []

        if not data.nodes:
            issues.append(error("Network diagram must have at least one node"))

        for index, node in enumerate(data.nodes):
            if not node.id:
                issues.append(error(f"Node at index {index} must have an ID"))
            if not node.label:
                name = node.id or f"at index {index}"
                issues.append(error(f'Node "{name}" must have a label', node_id=node.id or None))

        issues.extend(check_duplicate_ids(data.nodes))
        issues.extend(check_edge_references(data.edges, set(data.node_ids())))

        isolated = find_isolated_nodes(data)
        if isolated:
            issues.append(warning(f"{len(isolated)} node(s) are not connected to any other nodes"))

        return ValidationResult.from_issues(issues)
