"""Dry-run simulator.

Explains what saving and running the automation would involve without
contacting any execution engine or persisting anything: whether the
graph compiles, and a pass/fail line for every action.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from rulecanvas.compiler.compile import compile_graph
from rulecanvas.exceptions import CompileError
from rulecanvas.graph.store import GraphStore
from rulecanvas.compiler.linearize import linearize
from rulecanvas.preview.renderer import render_preview
from rulecanvas.registry.core import TypeRegistry
from rulecanvas.validation.structure import disconnected_actions, node_field_problems, validate_graph

logger = logging.getLogger(__name__)


class DryRunStep(BaseModel):
    """Outcome for one action node.

    Skipped steps are actions left out of the compiled definition; they
    have no position.
    """

    position: int | None
    node_id: str
    label: str
    passed: bool
    problems: list[str] = Field(default_factory=list)
    skipped: bool = False

    def line(self) -> str:
        if self.skipped:
            return f"[SKIP] {self.label}: not connected, left out of the automation"
        if self.passed:
            return f"[PASS] {self.position}. {self.label}"
        return f"[FAIL] {self.position}. {self.label}: {'; '.join(self.problems)}"


class DryRunReport(BaseModel):
    """Result of a dry run.

    Attributes:
        compiles: Whether the graph compiles (trigger and actions present).
        blocking: Messages of compile errors that would block saving.
        trigger_problems: Field problems on the trigger node.
        steps: One entry per action node, top to bottom. Actions left out
            of the compiled definition are marked skipped.
        warnings: Connectivity warnings.
        preview: Rendered preview text.
    """

    compiles: bool
    blocking: list[str] = Field(default_factory=list)
    trigger_problems: list[str] = Field(default_factory=list)
    steps: list[DryRunStep] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    preview: str = ""

    @property
    def passed(self) -> bool:
        return self.compiles and not self.trigger_problems and all(step.passed or step.skipped for step in self.steps)

    def lines(self) -> list[str]:
        lines = [f"[BLOCKED] {message}" for message in self.blocking]
        if self.trigger_problems:
            lines.append(f"[FAIL] Trigger: {'; '.join(self.trigger_problems)}")
        lines.extend(step.line() for step in self.steps)
        lines.extend(f"[WARN] {warning}" for warning in self.warnings)
        return lines

    def render(self) -> str:
        return "\n".join([self.preview, "", *self.lines()])


def dry_run(
    graph: GraphStore,
    registry: TypeRegistry,
    *,
    exclude_disconnected: bool = False,
) -> DryRunReport:
    """Validate the graph and explain the outcome per action."""
    blocking: list[str] = []
    try:
        compile_graph(graph, exclude_disconnected=exclude_disconnected)
    except CompileError as exc:
        blocking.append(str(exc))

    trigger = graph.trigger
    trigger_problems = node_field_problems(trigger, registry) if trigger else []

    excluded = {node.id for node in disconnected_actions(graph)} if exclude_disconnected else set()
    steps = []
    position = 0
    for node in linearize(graph):
        label = registry.label_for(node.kind, node.type_key)
        if node.id in excluded:
            steps.append(DryRunStep(position=None, node_id=node.id, label=label, passed=False, skipped=True))
            continue
        position += 1
        problems = node_field_problems(node, registry)
        steps.append(
            DryRunStep(
                position=position,
                node_id=node.id,
                label=label,
                passed=not problems,
                problems=problems,
            )
        )

    report = validate_graph(graph, registry)
    result = DryRunReport(
        compiles=not blocking,
        blocking=blocking,
        trigger_problems=trigger_problems,
        steps=steps,
        warnings=[str(w) for w in report.warnings],
        preview=render_preview(graph, registry, exclude_disconnected=exclude_disconnected),
    )
    logger.info(
        "Dry run: %d/%d actions pass, compiles=%s",
        sum(1 for step in steps if step.passed),
        sum(1 for step in steps if not step.skipped),
        result.compiles,
    )
    return result
