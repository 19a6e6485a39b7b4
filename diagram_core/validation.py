"""
Diagram validation - Shared result types and structural checks.

Every family validator accumulates ValidationIssue objects in a single
list and converts it with ValidationResult.from_issues(). Nothing here
raises on bad data: findings are reported, not thrown.
"""

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Optional

from pydantic import Field

from .models import BaseEdge, BaseNode, DiagramModel


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Invalid state, blocks safe layout
    WARNING = "warning"  # Potential problem, rendering still works


class ValidationIssue(DiagramModel):
    """A single validation issue found in a diagram."""
    message: str
    severity: IssueSeverity
    node_id: Optional[str] = None
    edge_id: Optional[str] = None


class ValidationResult(DiagramModel):
    """Outcome of validating one diagram."""
    is_valid: bool = True
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: Iterable[ValidationIssue]) -> "ValidationResult":
        errors = []
        warnings = []
        for issue in issues:
            if issue.severity == IssueSeverity.ERROR:
                errors.append(issue)
            else:
                warnings.append(issue)
        return cls(is_valid=not errors, errors=errors, warnings=warnings)

    def messages(self, severity: IssueSeverity) -> list[str]:
        """Plain messages for one severity (used in render metadata)."""
        items = self.errors if severity == IssueSeverity.ERROR else self.warnings
        return [issue.message for issue in items]


def error(message: str, **location) -> ValidationIssue:
    return ValidationIssue(message=message, severity=IssueSeverity.ERROR, **location)


def warning(message: str, **location) -> ValidationIssue:
    return ValidationIssue(message=message, severity=IssueSeverity.WARNING, **location)


def check_duplicate_ids(nodes: Sequence[BaseNode]) -> list[ValidationIssue]:
    """
    Report node ids that occur more than once.

    Lookups elsewhere resolve a duplicated id to its first occurrence;
    each duplicated id is reported once.
    """
    issues: list[ValidationIssue] = []
    seen: set[str] = set()
    reported: set[str] = set()

    for node in nodes:
        if not node.id:
            continue
        if node.id in seen and node.id not in reported:
            issues.append(error(f'Duplicate node id "{node.id}"', node_id=node.id))
            reported.add(node.id)
        seen.add(node.id)

    return issues


def check_edge_references(
    edges: Sequence[BaseEdge],
    node_ids: set[str],
) -> list[ValidationIssue]:
    """
    Check that every edge names both endpoints and that they exist.

    Source and target are checked independently, so an edge whose two
    endpoints are both missing yields two errors.
    """
    issues: list[ValidationIssue] = []

    for index, edge in enumerate(edges):
        edge_id = edge.id or None
        if not edge.source or not edge.target:
            issues.append(error(
                f"Edge at index {index} must have source and target nodes",
                edge_id=edge_id,
            ))
            continue

        if edge.source not in node_ids:
            issues.append(error(
                f'Edge references non-existent source node "{edge.source}"',
                edge_id=edge_id,
            ))
        if edge.target not in node_ids:
            issues.append(error(
                f'Edge references non-existent target node "{edge.target}"',
                edge_id=edge_id,
            ))

    return issues


def validation_summary(result: ValidationResult) -> dict:
    """
    Create a summary of validation issues.

    Args:
        result: The validation result to summarize

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(result.errors) + len(result.warnings),
        "errors": len(result.errors),
        "warnings": len(result.warnings),
        "valid": result.is_valid,
    }
