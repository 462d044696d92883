"""Structural and field validation for automation graphs.

Two independent checks, both returning diagnostics rather than raising:

- connectivity: every action except the first one created must have an
  incoming edge. A warning only; compilation ignores edges.
- field completeness: each node's config is checked by its registry type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rulecanvas.graph.models import Node, NodeKind
from rulecanvas.graph.store import GraphStore
from rulecanvas.validation.diagnostics import Diagnostic, GraphReport, Severity

if TYPE_CHECKING:
    from rulecanvas.registry.core import TypeRegistry

DISCONNECTED = "DISCONNECTED"
INVALID_FIELD = "INVALID_FIELD"


def disconnected_actions(graph: GraphStore) -> list[Node]:
    """Action nodes, other than the first created, with no incoming edge."""
    actions = graph.nodes(NodeKind.ACTION)
    if not actions:
        return []
    first = min(actions, key=lambda node: node.seq)
    targeted = {edge.target_id for edge in graph.edges()}
    return [node for node in actions if node.id != first.id and node.id not in targeted]


def _label(node: Node, registry: TypeRegistry | None) -> str:
    return registry.label_for(node.kind, node.type_key) if registry else node.type_key


def connectivity_diagnostics(graph: GraphStore, registry: TypeRegistry | None = None) -> list[Diagnostic]:
    """Warnings for actions that are not wired into the graph."""
    diagnostics = []
    for node in disconnected_actions(graph):
        label = _label(node, registry)
        diagnostics.append(
            Diagnostic(
                code=DISCONNECTED,
                severity=Severity.WARNING,
                node_id=node.id,
                label=label,
                message=f'"{label}" is not connected to other blocks',
            )
        )
    return diagnostics


def node_field_problems(node: Node, registry: TypeRegistry) -> list[str]:
    return registry.resolve(node.kind, node.type_key).validate(node.config)


def field_diagnostics(graph: GraphStore, registry: TypeRegistry) -> list[Diagnostic]:
    """Errors for nodes whose config misses required values or has bad ones."""
    diagnostics = []
    for node in graph.nodes():
        label = _label(node, registry)
        for problem in node_field_problems(node, registry):
            diagnostics.append(
                Diagnostic(
                    code=INVALID_FIELD,
                    severity=Severity.ERROR,
                    node_id=node.id,
                    label=label,
                    message=f'"{label}": {problem}',
                )
            )
    return diagnostics


def validate_graph(graph: GraphStore, registry: TypeRegistry) -> GraphReport:
    """Run both checks and collect the results."""
    errors = field_diagnostics(graph, registry)
    warnings = connectivity_diagnostics(graph, registry)
    invalid = list(dict.fromkeys(d.node_id for d in errors if d.node_id))
    return GraphReport(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        invalid_node_ids=invalid,
    )
