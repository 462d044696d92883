"""Unit tests for the type registry and the CRM catalogue."""

from __future__ import annotations

import pytest

from rulecanvas.exceptions import RegistryError
from rulecanvas.graph import NodeKind
from rulecanvas.registry import FieldSpec, GenericConfig, TypeDescriptor, TypeRegistry, ValueKind
from tests.factories import RegistryEntryFactory


class TestDefaultRegistry:
    """Test the shipped CRM catalogue."""

    def test_first_types(self, registry: TypeRegistry) -> None:
        assert registry.first(NodeKind.TRIGGER).key == "DEAL_STAGE_CHANGED"
        assert registry.first(NodeKind.ACTION).key == "CREATE_TASK"

    def test_catalogue_keys(self, registry: TypeRegistry) -> None:
        assert [d.key for d in registry.triggers] == [
            "DEAL_STAGE_CHANGED",
            "DEAL_CREATED",
            "DEAL_AMOUNT_CHANGED",
            "TASK_CREATED",
            "TASK_COMPLETED",
            "CONTACT_CREATED",
            "EVENT_CREATED",
        ]
        assert [d.key for d in registry.actions] == [
            "CREATE_TASK",
            "SEND_EMAIL",
            "CHANGE_PROBABILITY",
            "ASSIGN_USER",
            "CREATE_NOTIFICATION",
            "UPDATE_DEAL_STAGE",
        ]

    def test_no_condition_types_shipped(self, registry: TypeRegistry) -> None:
        assert registry.conditions == []
        with pytest.raises(RegistryError):
            registry.first(NodeKind.CONDITION)

    def test_label_fallback_to_key(self, registry: TypeRegistry) -> None:
        assert registry.label_for(NodeKind.ACTION, "SEND_EMAIL") == "Send email"
        assert registry.label_for(NodeKind.ACTION, "SEND_SMS") == "SEND_SMS"

    def test_kinds_do_not_share_keys(self, registry: TypeRegistry) -> None:
        assert registry.get(NodeKind.ACTION, "DEAL_CREATED") is None
        assert registry.has(NodeKind.TRIGGER, "DEAL_CREATED")

    def test_required_fields(self, registry: TypeRegistry) -> None:
        assert registry.get(NodeKind.ACTION, "CREATE_TASK").required_fields == ["title"]
        assert registry.get(NodeKind.ACTION, "CREATE_NOTIFICATION").required_fields == ["title", "message"]


class TestFieldValidation:
    """Test per-type field completeness checks."""

    @pytest.mark.parametrize(
        ("key", "config", "expected"),
        [
            ("CREATE_TASK", {}, ["title is required"]),
            ("CREATE_TASK", {"title": "   "}, ["title is required"]),
            ("CREATE_TASK", {"title": "Call client"}, []),
            ("SEND_EMAIL", {"body": "hi"}, ["subject is required"]),
            ("SEND_EMAIL", {"subject": "Hello"}, ["body is required"]),
            ("SEND_EMAIL", {"subject": "Hello", "body": "  "}, ["body is required"]),
            ("SEND_EMAIL", {"subject": "Hello", "body": "Hi there"}, []),
            ("SEND_EMAIL", {"subject": "Hello", "text": "Hi there"}, []),
            ("CHANGE_PROBABILITY", {}, ["probability is required"]),
            ("CHANGE_PROBABILITY", {"probability": 0}, []),
            ("ASSIGN_USER", {"userId": None}, ["userId is required"]),
            ("ASSIGN_USER", {"userId": 7}, []),
            ("CREATE_NOTIFICATION", {"title": "x"}, ["message is required"]),
            ("UPDATE_DEAL_STAGE", {"stage": "won"}, []),
            ("UPDATE_DEAL_STAGE", {}, ["newStage is required"]),
        ],
    )
    def test_action_fields(self, registry: TypeRegistry, key: str, config: dict, expected: list[str]) -> None:
        assert registry.get(NodeKind.ACTION, key).validate(config) == expected

    def test_out_of_range_probability(self, registry: TypeRegistry) -> None:
        problems = registry.get(NodeKind.ACTION, "CHANGE_PROBABILITY").validate({"probability": 150})
        assert len(problems) == 1
        assert problems[0].startswith("probability:")

    def test_non_numeric_probability(self, registry: TypeRegistry) -> None:
        problems = registry.get(NodeKind.ACTION, "CHANGE_PROBABILITY").validate({"probability": "lots"})
        assert problems and problems[0].startswith("probability:")

    @pytest.mark.parametrize("value", ["75", True])
    def test_probability_must_be_a_number(self, registry: TypeRegistry, value: object) -> None:
        problems = registry.get(NodeKind.ACTION, "CHANGE_PROBABILITY").validate({"probability": value})
        assert len(problems) == 1
        assert problems[0].startswith("probability:")

    @pytest.mark.parametrize("value", ["7", True, 7.5])
    def test_user_id_must_be_an_integer(self, registry: TypeRegistry, value: object) -> None:
        problems = registry.get(NodeKind.ACTION, "ASSIGN_USER").validate({"userId": value})
        assert problems and problems[0].startswith("userId:")

    def test_integer_probability_accepted(self, registry: TypeRegistry) -> None:
        assert registry.get(NodeKind.ACTION, "CHANGE_PROBABILITY").validate({"probability": 60}) == []

    def test_negative_due_days(self, registry: TypeRegistry) -> None:
        problems = registry.get(NodeKind.ACTION, "CREATE_TASK").validate({"title": "x", "dueInDays": -1})
        assert problems and problems[0].startswith("dueInDays:")

    def test_amount_range_order(self, registry: TypeRegistry) -> None:
        descriptor = registry.get(NodeKind.TRIGGER, "DEAL_AMOUNT_CHANGED")
        assert descriptor.validate({"minAmount": 10, "maxAmount": 5}) == ["minAmount must not exceed maxAmount"]
        assert descriptor.validate({"minAmount": 5, "maxAmount": 10}) == []

    def test_extra_keys_are_allowed(self, registry: TypeRegistry) -> None:
        assert registry.get(NodeKind.ACTION, "SEND_EMAIL").validate({"subject": "s", "html": "<p/>"}) == []


class TestDescribe:
    """Test natural-language phrasing."""

    def test_stage_trigger(self, registry: TypeRegistry) -> None:
        descriptor = registry.get(NodeKind.TRIGGER, "DEAL_STAGE_CHANGED")
        assert descriptor.describe({"stage": "negotiation"}) == 'When a deal moves to stage "negotiation"'
        assert descriptor.describe({}) == "When a deal changes stage"

    def test_amount_trigger(self, registry: TypeRegistry) -> None:
        descriptor = registry.get(NodeKind.TRIGGER, "DEAL_AMOUNT_CHANGED")
        assert descriptor.describe({"minAmount": 50000, "maxAmount": 150000}) == (
            "When a deal amount changes to between 50,000 and 150,000"
        )

    def test_task_action(self, registry: TypeRegistry) -> None:
        descriptor = registry.get(NodeKind.ACTION, "CREATE_TASK")
        assert descriptor.describe({"title": "Call client", "dueInDays": 1}) == (
            'Create task "Call client", due in 1 day'
        )
        assert descriptor.describe({"title": "Call client", "dueInDays": 3}) == (
            'Create task "Call client", due in 3 days'
        )

    def test_invalid_config_falls_back_to_label(self, registry: TypeRegistry) -> None:
        descriptor = registry.get(NodeKind.ACTION, "CHANGE_PROBABILITY")
        assert descriptor.describe({"probability": "lots"}) == "Change probability"


class TestFromDict:
    """Test building a registry from the host-supplied shape."""

    def test_recognized_keys_keep_typed_models(self) -> None:
        registry = TypeRegistry.from_dict(
            {
                "triggers": [RegistryEntryFactory(key="DEAL_CREATED")],
                "actions": [
                    RegistryEntryFactory(
                        key="SEND_EMAIL",
                        config_schema=[{"field": "subject", "required": True, "valueKind": "text"}],
                    )
                ],
            }
        )
        descriptor = registry.get(NodeKind.ACTION, "SEND_EMAIL")
        assert descriptor.config_model is not GenericConfig
        assert descriptor.validate({}) == ["subject is required", "body is required"]

    def test_unknown_keys_use_schema_flags(self) -> None:
        registry = TypeRegistry.from_dict(
            {
                "triggers": [RegistryEntryFactory()],
                "actions": [
                    RegistryEntryFactory(
                        key="SEND_SMS",
                        label="Send SMS",
                        config_schema=[
                            {"field": "text", "required": True, "valueKind": "text"},
                            {"field": "delay", "required": False, "valueKind": "number"},
                        ],
                    )
                ],
            }
        )
        descriptor = registry.get(NodeKind.ACTION, "SEND_SMS")
        assert descriptor.validate({}) == ["text is required"]
        assert descriptor.validate({"text": "hi", "delay": "soon"}) == ["delay must be a number"]
        assert descriptor.describe({"text": "hi"}) == "Send SMS"

    def test_round_trips_to_dict(self, registry: TypeRegistry) -> None:
        rebuilt = TypeRegistry.from_dict(registry.to_dict())
        assert [d.key for d in rebuilt.actions] == [d.key for d in registry.actions]
        assert rebuilt.get(NodeKind.ACTION, "CREATE_TASK").config_schema[0] == FieldSpec(
            field="title", required=True, value_kind=ValueKind.TEXT
        )

    def test_empty_triggers_raise(self) -> None:
        with pytest.raises(RegistryError, match="no trigger"):
            TypeRegistry.from_dict({"triggers": [], "actions": [RegistryEntryFactory()]})

    def test_empty_actions_raise(self) -> None:
        with pytest.raises(RegistryError, match="no action"):
            TypeRegistry.from_dict({"triggers": [RegistryEntryFactory()], "actions": []})

    def test_duplicate_keys_raise(self) -> None:
        with pytest.raises(RegistryError, match="Duplicate"):
            TypeRegistry.from_dict(
                {
                    "triggers": [RegistryEntryFactory()],
                    "actions": [RegistryEntryFactory(key="X"), RegistryEntryFactory(key="X")],
                }
            )

    def test_malformed_document_raises(self) -> None:
        with pytest.raises(RegistryError, match="Malformed"):
            TypeRegistry.from_dict({"triggers": "nope"})

    def test_descriptor_kind_must_match(self) -> None:
        with pytest.raises(RegistryError):
            TypeRegistry(
                triggers=[TypeDescriptor(NodeKind.ACTION, "X", "X")],
                actions=[TypeDescriptor(NodeKind.ACTION, "Y", "Y")],
            )
