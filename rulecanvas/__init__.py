"""RuleCanvas: visual automation rule authoring core.

Graph model, connection rules, linearizing compiler and diagnostics for
CRM automations built as trigger -> (conditions) -> actions graphs.

Usage::

    from rulecanvas import AutomationBuilder, default_registry

    builder = AutomationBuilder(default_registry())
    node_id = builder.add_action_node()
    builder.set_node_config(node_id, {"title": "Call client"})
    definition = builder.compile()
"""

from __future__ import annotations

from rulecanvas.builder import AutomationBuilder, FocusContext, SaveResult
from rulecanvas.compiler import AutomationDefinition, compile_graph, linearize
from rulecanvas.exceptions import (
    CompileError,
    NoActionsError,
    NoTriggerError,
    RegistryError,
    RuleCanvasError,
)
from rulecanvas.graph import GraphStore, NodeKind, is_allowed
from rulecanvas.registry import TypeRegistry
from rulecanvas.registry.crm import default_registry

__all__ = [
    "AutomationBuilder",
    "AutomationDefinition",
    "CompileError",
    "FocusContext",
    "GraphStore",
    "NoActionsError",
    "NoTriggerError",
    "NodeKind",
    "RegistryError",
    "RuleCanvasError",
    "SaveResult",
    "TypeRegistry",
    "compile_graph",
    "default_registry",
    "is_allowed",
    "linearize",
]
