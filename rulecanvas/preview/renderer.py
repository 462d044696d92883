"""Natural-language preview of an automation graph.

Recomputed from current state on every call; nothing is cached.
"""

from __future__ import annotations

from rulecanvas.compiler.linearize import linearize
from rulecanvas.graph.models import Node, NodeKind
from rulecanvas.graph.store import GraphStore
from rulecanvas.registry.core import GenericConfig, TypeRegistry
from rulecanvas.validation.structure import disconnected_actions

NO_TRIGGER_LINE = "No trigger configured"
NO_ACTIONS_LINE = "(no actions yet)"


def preview_actions(graph: GraphStore, *, exclude_disconnected: bool = False) -> list[Node]:
    """Action nodes in the order the compiler would emit them."""
    actions = linearize(graph)
    if exclude_disconnected:
        excluded = {node.id for node in disconnected_actions(graph)}
        actions = [node for node in actions if node.id not in excluded]
    return actions


def describe_trigger(node: Node, registry: TypeRegistry) -> str:
    descriptor = registry.resolve(NodeKind.TRIGGER, node.type_key)
    if descriptor.config_model is GenericConfig:
        return f"Trigger: {descriptor.label}"
    return descriptor.describe(node.config)


def describe_action(position: int, node: Node, registry: TypeRegistry) -> str:
    descriptor = registry.resolve(NodeKind.ACTION, node.type_key)
    return f"{position}. {descriptor.describe(node.config)}"


def preview_lines(
    graph: GraphStore,
    registry: TypeRegistry,
    *,
    exclude_disconnected: bool = False,
) -> list[str]:
    """Trigger line followed by one numbered line per action."""
    trigger = graph.trigger
    lines = [describe_trigger(trigger, registry) if trigger else NO_TRIGGER_LINE]

    actions = preview_actions(graph, exclude_disconnected=exclude_disconnected)
    if not actions:
        lines.append(NO_ACTIONS_LINE)
    for position, node in enumerate(actions, start=1):
        lines.append(describe_action(position, node, registry))
    return lines


def render_preview(
    graph: GraphStore,
    registry: TypeRegistry,
    *,
    exclude_disconnected: bool = False,
) -> str:
    return "\n".join(preview_lines(graph, registry, exclude_disconnected=exclude_disconnected))
