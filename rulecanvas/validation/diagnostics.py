"""Diagnostic models shared by the structural and field validators."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A single finding about one node.

    Attributes:
        code: Machine-readable category (e.g. "DISCONNECTED", "INVALID_FIELD").
        severity: Errors mark the node invalid; warnings are informational.
        node_id: Node the finding is about.
        label: Display label of the node's type.
        message: Human-readable description.
    """

    code: str
    severity: Severity
    node_id: str | None = None
    label: str = ""
    message: str

    def __str__(self) -> str:
        return self.message


class GraphReport(BaseModel):
    """All diagnostics for a graph at one point in time.

    Attributes:
        valid: True when there are no errors (warnings do not count).
        errors: Field-completeness errors.
        warnings: Connectivity warnings.
        invalid_node_ids: Nodes with at least one error.
    """

    valid: bool
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)
    invalid_node_ids: list[str] = Field(default_factory=list)

    def messages(self) -> list[str]:
        return [str(d) for d in [*self.errors, *self.warnings]]

    def for_node(self, node_id: str) -> list[Diagnostic]:
        return [d for d in [*self.errors, *self.warnings] if d.node_id == node_id]
