"""Connectivity and field-completeness diagnostics."""

from __future__ import annotations

from rulecanvas.validation.diagnostics import Diagnostic, GraphReport, Severity
from rulecanvas.validation.structure import (
    connectivity_diagnostics,
    disconnected_actions,
    field_diagnostics,
    node_field_problems,
    validate_graph,
)

__all__ = [
    "Diagnostic",
    "GraphReport",
    "Severity",
    "connectivity_diagnostics",
    "disconnected_actions",
    "field_diagnostics",
    "node_field_problems",
    "validate_graph",
]
