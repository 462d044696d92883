"""Graph -> AutomationDefinition compiler.

``compile_graph`` is a pure function of graph state: it never mutates
the store, and two calls without an intervening mutation return equal
definitions.
"""

from __future__ import annotations

import logging

from rulecanvas.compiler.definition import ActionStep, AutomationDefinition
from rulecanvas.compiler.linearize import Linearizer, linearize
from rulecanvas.exceptions import NoActionsError, NoTriggerError
from rulecanvas.graph.store import GraphStore
from rulecanvas.validation.structure import disconnected_actions

logger = logging.getLogger(__name__)


def compile_graph(
    graph: GraphStore,
    *,
    linearizer: Linearizer = linearize,
    exclude_disconnected: bool = False,
) -> AutomationDefinition:
    """Compile the current graph into an automation definition.

    Args:
        graph: Graph to compile (read only).
        linearizer: Function ordering the action nodes.
        exclude_disconnected: Drop actions flagged by the connectivity
            check instead of only warning about them.

    Returns:
        The compiled definition. Configs are shallow copies.

    Raises:
        NoTriggerError: If the graph has no trigger node.
        NoActionsError: If the graph has no (included) action nodes.
    """
    trigger = graph.trigger
    if trigger is None:
        raise NoTriggerError()

    actions = linearizer(graph)
    if exclude_disconnected:
        excluded = {node.id for node in disconnected_actions(graph)}
        actions = [node for node in actions if node.id not in excluded]
    if not actions:
        raise NoActionsError()

    definition = AutomationDefinition(
        trigger_type=trigger.type_key,
        trigger_config=dict(trigger.config),
        actions=[ActionStep(type=node.type_key, params=dict(node.config)) for node in actions],
    )
    logger.debug(
        "Compiled automation: trigger=%s actions=%d",
        definition.trigger_type,
        len(definition.actions),
    )
    return definition
