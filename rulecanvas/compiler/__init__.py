"""Linearizer and compiler producing the canonical automation definition."""

from __future__ import annotations

from rulecanvas.compiler.compile import compile_graph
from rulecanvas.compiler.definition import ActionStep, AutomationDefinition, InitialDefinition
from rulecanvas.compiler.linearize import Linearizer, linearize

__all__ = [
    "ActionStep",
    "AutomationDefinition",
    "InitialDefinition",
    "Linearizer",
    "compile_graph",
    "linearize",
]
