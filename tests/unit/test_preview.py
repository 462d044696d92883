"""Unit tests for the natural-language preview and dry run."""

from __future__ import annotations

from rulecanvas.builder import AutomationBuilder
from rulecanvas.graph import GraphStore, NodeKind, Position
from rulecanvas.preview import preview_lines, render_preview
from rulecanvas.preview.renderer import NO_ACTIONS_LINE, NO_TRIGGER_LINE
from rulecanvas.preview.simulator import dry_run
from rulecanvas.registry.core import TypeRegistry


class TestPreview:
    """Test preview lines."""

    def test_stage_trigger_mentions_stage(self, builder: AutomationBuilder) -> None:
        builder.set_node_type("trigger-1", "DEAL_STAGE_CHANGED")
        builder.set_node_config("trigger-1", {"stage": "negotiation"})

        first_line = builder.preview().splitlines()[0]

        assert "negotiation" in first_line
        assert first_line == 'When a deal moves to stage "negotiation"'

    def test_empty_chain(self, builder: AutomationBuilder) -> None:
        assert builder.preview().splitlines() == ["When a deal changes stage", NO_ACTIONS_LINE]

    def test_no_trigger(self, registry: TypeRegistry) -> None:
        assert preview_lines(GraphStore(), registry) == [NO_TRIGGER_LINE, NO_ACTIONS_LINE]

    def test_numbered_actions_in_compiled_order(self, builder: AutomationBuilder) -> None:
        first = builder.add_action_node()
        builder.set_node_config(first, {"title": "Call client", "dueInDays": 1})
        second = builder.add_action_node()
        builder.set_node_type(second, "SEND_EMAIL")
        builder.set_node_config(second, {"subject": "Thanks"})
        builder.move_node(first, Position(250, 900))

        assert builder.preview().splitlines()[1:] == [
            '1. Send email "Thanks"',
            '2. Create task "Call client", due in 1 day',
        ]

    def test_incomplete_config_still_renders(self, builder: AutomationBuilder) -> None:
        node_id = builder.add_action_node()
        builder.set_node_type(node_id, "ASSIGN_USER")
        assert builder.preview().splitlines()[1] == "1. Assign deal to a user (not selected)"

    def test_unknown_types_fall_back_to_key(self, registry: TypeRegistry) -> None:
        graph = GraphStore()
        graph.create_node(NodeKind.TRIGGER, "INVOICE_PAID")
        graph.create_node(NodeKind.ACTION, "SEND_SMS")

        assert render_preview(graph, registry) == "Trigger: INVOICE_PAID\n1. SEND_SMS"

    def test_event_trigger_phrase(self, builder: AutomationBuilder) -> None:
        builder.set_node_type("trigger-1", "CONTACT_CREATED")
        assert builder.preview().splitlines()[0] == "When a contact is created"


class TestDryRun:
    """Test the dry-run report."""

    def test_blocked_without_actions(self, builder: AutomationBuilder) -> None:
        report = builder.dry_run()

        assert report.compiles is False
        assert report.passed is False
        assert report.lines() == ["[BLOCKED] Add at least one action"]

    def test_failing_step(self, builder: AutomationBuilder) -> None:
        builder.add_action_node()

        report = builder.dry_run()

        assert report.compiles is True
        assert report.passed is False
        assert report.lines() == ["[FAIL] 1. Create task: title is required"]

    def test_passing_run_with_warning(self, registry: TypeRegistry) -> None:
        graph = GraphStore()
        graph.create_node(NodeKind.TRIGGER, "DEAL_CREATED", position=Position(250, 50))
        graph.create_node(NodeKind.ACTION, "CREATE_TASK", position=Position(250, 200), config={"title": "Call"})
        graph.create_node(
            NodeKind.ACTION, "SEND_EMAIL", position=Position(250, 350), config={"subject": "Hi", "body": "Hello"}
        )

        report = dry_run(graph, registry)

        assert report.passed is True
        assert report.lines() == [
            "[PASS] 1. Create task",
            "[PASS] 2. Send email",
            '[WARN] "Send email" is not connected to other blocks',
        ]
        assert report.render().startswith("When a deal is created\n")

    def test_trigger_problems_reported(self, builder: AutomationBuilder) -> None:
        builder.set_node_type("trigger-1", "DEAL_AMOUNT_CHANGED")
        builder.set_node_config("trigger-1", {"minAmount": 10, "maxAmount": 1})
        node_id = builder.add_action_node()
        builder.set_node_config(node_id, {"title": "Call"})

        report = builder.dry_run()

        assert report.passed is False
        assert report.lines()[0] == "[FAIL] Trigger: minAmount must not exceed maxAmount"

    def test_excluded_actions_listed_as_skipped(self, registry: TypeRegistry) -> None:
        graph = GraphStore()
        graph.create_node(NodeKind.TRIGGER, "DEAL_CREATED", position=Position(250, 50))
        graph.create_node(NodeKind.ACTION, "CREATE_TASK", position=Position(250, 200), config={"title": "Call"})
        graph.create_node(NodeKind.ACTION, "ASSIGN_USER", position=Position(250, 350))
        graph.create_node(NodeKind.ACTION, "CREATE_TASK", position=Position(250, 500), config={"title": "Follow up"})
        graph.create_edge("action-1", "action-3")

        report = dry_run(graph, registry, exclude_disconnected=True)

        assert report.passed is True
        assert [step.node_id for step in report.steps] == ["action-1", "action-2", "action-3"]
        assert report.lines()[:3] == [
            "[PASS] 1. Create task",
            "[SKIP] Assign user: not connected, left out of the automation",
            "[PASS] 2. Create task",
        ]
