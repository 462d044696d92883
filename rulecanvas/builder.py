"""Automation builder: the command surface of an authoring session.

Wraps a GraphStore with the operations the canvas exposes (add an action
below the chain, delete the selection, retype and configure nodes,
keyboard shortcuts) and the read side (compile, diagnostics, preview,
dry run, save).

Usage::

    builder = AutomationBuilder(default_registry())
    action_id = builder.add_action_node()
    builder.set_node_config(action_id, {"title": "Call client"})
    result = await builder.save(handler)
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from rulecanvas.compiler.compile import compile_graph
from rulecanvas.compiler.definition import AutomationDefinition
from rulecanvas.exceptions import CompileError
from rulecanvas.graph.models import Node, NodeKind, Position
from rulecanvas.graph.store import Command, GraphStore
from rulecanvas.preview.renderer import render_preview
from rulecanvas.preview.simulator import DryRunReport, dry_run
from rulecanvas.registry.core import TypeDescriptor, TypeRegistry
from rulecanvas.settings import Settings, get_settings
from rulecanvas.validation.diagnostics import GraphReport
from rulecanvas.validation.structure import validate_graph

logger = logging.getLogger(__name__)

SaveHandler = Callable[[AutomationDefinition], Awaitable[None] | None]


class FocusContext(str, Enum):
    """Where keyboard focus is when a key is pressed."""

    CANVAS = "canvas"
    TEXT_INPUT = "text_input"
    OUTSIDE = "outside"


class SaveResult(BaseModel):
    """Outcome of a save attempt."""

    saved: bool
    definition: AutomationDefinition | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class AutomationBuilder:
    """One authoring session over one automation graph.

    Args:
        registry: Available trigger/action types.
        initial: Definition to hydrate from; a lone default trigger otherwise.
        settings: Layout and policy settings (defaults to get_settings()).
    """

    def __init__(
        self,
        registry: TypeRegistry,
        initial: AutomationDefinition | Mapping[str, Any] | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or get_settings()
        self.store = GraphStore(deduplicate_edges=self.settings.deduplicate_edges)

        if initial is None:
            self.store.create_node(
                NodeKind.TRIGGER,
                registry.first(NodeKind.TRIGGER).key,
                position=self._trigger_position,
            )
        else:
            self._hydrate(initial)

        self._report = validate_graph(self.store, registry)
        self.store.subscribe(self._on_change)

    @classmethod
    def from_template(
        cls,
        template_id: str,
        registry: TypeRegistry | None = None,
        *,
        settings: Settings | None = None,
    ) -> AutomationBuilder:
        """Start a session from a built-in template.

        Raises:
            KeyError: If the template id is unknown.
        """
        from rulecanvas.registry.crm import default_registry
        from rulecanvas.templates import get_template

        template = get_template(template_id)
        return cls(registry or default_registry(), template.definition, settings=settings)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def _trigger_position(self) -> Position:
        return Position(self.settings.trigger_position_x, self.settings.trigger_position_y)

    def _hydrate(self, initial: AutomationDefinition | Mapping[str, Any]) -> None:
        definition = (
            initial if isinstance(initial, AutomationDefinition) else AutomationDefinition.model_validate(initial)
        )
        trigger_position = self._trigger_position
        previous_id = self.store.create_node(
            NodeKind.TRIGGER,
            definition.trigger_type,
            position=trigger_position,
            config=definition.trigger_config,
        )
        for index, step in enumerate(definition.actions, start=1):
            node_id = self.store.create_node(
                NodeKind.ACTION,
                step.type,
                position=trigger_position.below(self.settings.action_spacing * index),
                config=step.params,
            )
            self.store.create_edge(previous_id, node_id)
            previous_id = node_id

        logger.debug(
            "Hydrated automation: trigger=%s actions=%d",
            definition.trigger_type,
            len(definition.actions),
        )

    def _on_change(self, command: Command) -> None:
        self._report = validate_graph(self.store, self.registry)

    # ------------------------------------------------------------------
    # Graph mutators
    # ------------------------------------------------------------------

    def add_action_node(self) -> str:
        """Append an action of the default type below the chain.

        The new node sits one spacing below the lowest action (or the
        trigger) and is wired from it.
        """
        actions = self.store.nodes(NodeKind.ACTION)
        tail: Node | None
        if actions:
            tail = max(actions, key=lambda node: (node.position.y, node.seq))
        else:
            tail = self.store.trigger
        anchor = tail.position if tail else self._trigger_position

        node_id = self.store.create_node(
            NodeKind.ACTION,
            self.registry.first(NodeKind.ACTION).key,
            position=anchor.below(self.settings.action_spacing),
        )
        if tail is not None:
            self.store.create_edge(tail.id, node_id)
        return node_id

    def add_condition_node(self, type_key: str | None = None, *, position: Position | None = None) -> str | None:
        """Place a condition node. Returns None if there is no such condition type."""
        descriptor = (
            self.registry.get(NodeKind.CONDITION, type_key)
            if type_key
            else next(iter(self.registry.conditions), None)
        )
        if descriptor is None:
            logger.warning("No condition type %r in registry", type_key)
            return None
        return self.store.create_node(NodeKind.CONDITION, descriptor.key, position=position)

    def delete_node(self, node_id: str) -> bool:
        return self.store.delete_node(node_id)

    def delete_selected(self) -> bool:
        """Delete the selected node unless it is the trigger."""
        selected = self.store.selected
        if selected is None or selected.kind == NodeKind.TRIGGER:
            return False
        return self.store.delete_node(selected.id)

    def select(self, node_id: str) -> bool:
        return self.store.select(node_id)

    def clear_selection(self) -> bool:
        return self.store.select(None)

    def connect(self, source_id: str, target_id: str) -> str | None:
        """Create an edge if the node kinds allow it. Returns the edge id or None."""
        return self.store.create_edge(source_id, target_id)

    def disconnect(self, edge_id: str) -> bool:
        return self.store.delete_edge(edge_id)

    def set_node_config(self, node_id: str, partial: Mapping[str, Any]) -> bool:
        return self.store.set_node_config(node_id, partial)

    def set_node_type(self, node_id: str, type_key: str) -> bool:
        """Retype a node (config resets to empty). The key must exist for the node's kind."""
        node = self.store.get_node(node_id)
        if node is None:
            return False
        if not self.registry.has(node.kind, type_key):
            logger.warning("Unknown %s type %r for node %s", node.kind.value, type_key, node_id)
            return False
        return self.store.set_node_type(node_id, type_key)

    def move_node(self, node_id: str, position: Position) -> bool:
        return self.store.move_node(node_id, position)

    def handle_key(self, key: str, focus: FocusContext = FocusContext.CANVAS) -> bool:
        """Apply a keyboard shortcut.

        Shortcuts only act while the canvas has focus, so typing into a
        config field never deletes nodes.

        Returns:
            Whether the key changed the graph or selection.
        """
        if focus != FocusContext.CANVAS:
            return False
        if key == self.settings.delete_key:
            return self.delete_selected()
        if key == self.settings.escape_key:
            if self.store.selected_id is None:
                return False
            return self.clear_selection()
        return False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def label_for(self, node_id: str) -> str | None:
        node = self.store.get_node(node_id)
        return self.registry.label_for(node.kind, node.type_key) if node else None

    def active_panel(self) -> TypeDescriptor | None:
        """Type of the selected node, whose config fields are being edited."""
        node = self.store.selected
        return self.registry.resolve(node.kind, node.type_key) if node else None

    def compile(self) -> AutomationDefinition:
        """Compile the current graph.

        Raises:
            NoTriggerError: If there is no trigger.
            NoActionsError: If there are no actions.
        """
        return compile_graph(self.store, exclude_disconnected=self.settings.exclude_disconnected_actions)

    @property
    def diagnostics(self) -> GraphReport:
        """Diagnostics for the current graph (recomputed on every mutation)."""
        return self._report

    def preview(self) -> str:
        return render_preview(
            self.store,
            self.registry,
            exclude_disconnected=self.settings.exclude_disconnected_actions,
        )

    def dry_run(self) -> DryRunReport:
        return dry_run(
            self.store,
            self.registry,
            exclude_disconnected=self.settings.exclude_disconnected_actions,
        )

    async def save(self, handler: SaveHandler) -> SaveResult:
        """Compile and hand the definition to ``handler``.

        Missing trigger/actions block the save; field errors block it
        only when ``block_save_on_field_errors`` is set. The graph stays
        editable while the handler runs. Handler errors propagate.
        """
        report = self.diagnostics
        warnings = [str(w) for w in report.warnings]

        try:
            definition = self.compile()
        except CompileError as exc:
            logger.info("Save blocked: %s", exc)
            return SaveResult(saved=False, errors=[str(exc)], warnings=warnings)

        if self.settings.block_save_on_field_errors and report.errors:
            logger.info("Save blocked: %d field error(s)", len(report.errors))
            return SaveResult(
                saved=False,
                errors=[str(e) for e in report.errors],
                warnings=warnings,
            )

        outcome = handler(definition)
        if inspect.isawaitable(outcome):
            await outcome

        logger.info(
            "Saved automation: trigger=%s actions=%d",
            definition.trigger_type,
            len(definition.actions),
        )
        return SaveResult(saved=True, definition=definition, warnings=warnings)
