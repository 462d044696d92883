"""Shipped CRM type catalogue.

Seven record-lifecycle triggers and six deal/contact actions, each bound
to a typed config model.

Usage::

    from rulecanvas.registry.crm import default_registry

    registry = default_registry()
    registry.first(NodeKind.TRIGGER).key  # "DEAL_STAGE_CHANGED"
"""

from __future__ import annotations

from rulecanvas.graph.models import NodeKind
from rulecanvas.registry.core import ConfigModel, FieldSpec, TypeDescriptor, TypeRegistry, ValueKind
from rulecanvas.registry.crm.actions import ACTION_CONFIG_MODELS
from rulecanvas.registry.crm.triggers import TRIGGER_CONFIG_MODELS

_TEXT = ValueKind.TEXT
_NUMBER = ValueKind.NUMBER
_USER = ValueKind.USER
_CHOICE = ValueKind.CHOICE

# (key, label, [(field, required, value_kind), ...]) in menu order
TRIGGER_TYPES: list[tuple[str, str, list[tuple[str, bool, ValueKind]]]] = [
    ("DEAL_STAGE_CHANGED", "Deal stage changed", [("stage", False, _TEXT)]),
    ("DEAL_CREATED", "Deal created", []),
    (
        "DEAL_AMOUNT_CHANGED",
        "Deal amount changed",
        [("minAmount", False, _NUMBER), ("maxAmount", False, _NUMBER)],
    ),
    ("TASK_CREATED", "Task created", []),
    ("TASK_COMPLETED", "Task completed", []),
    ("CONTACT_CREATED", "Contact created", []),
    ("EVENT_CREATED", "Calendar event created", []),
]

ACTION_TYPES: list[tuple[str, str, list[tuple[str, bool, ValueKind]]]] = [
    (
        "CREATE_TASK",
        "Create task",
        [
            ("title", True, _TEXT),
            ("description", False, _TEXT),
            ("dueInDays", False, _NUMBER),
            ("assignedUserId", False, _USER),
        ],
    ),
    ("SEND_EMAIL", "Send email", [("subject", True, _TEXT), ("body", True, _TEXT)]),
    ("CHANGE_PROBABILITY", "Change probability", [("probability", True, _NUMBER)]),
    ("ASSIGN_USER", "Assign user", [("userId", True, _USER)]),
    (
        "CREATE_NOTIFICATION",
        "Create notification",
        [
            ("userId", False, _USER),
            ("title", True, _TEXT),
            ("message", True, _TEXT),
            ("type", False, _CHOICE),
        ],
    ),
    ("UPDATE_DEAL_STAGE", "Change deal stage", [("newStage", True, _TEXT)]),
]

CONFIG_MODELS: dict[tuple[NodeKind, str], type[ConfigModel]] = {
    **{(NodeKind.TRIGGER, key): model for key, model in TRIGGER_CONFIG_MODELS.items()},
    **{(NodeKind.ACTION, key): model for key, model in ACTION_CONFIG_MODELS.items()},
}


def _descriptors(
    kind: NodeKind,
    types: list[tuple[str, str, list[tuple[str, bool, ValueKind]]]],
) -> list[TypeDescriptor]:
    return [
        TypeDescriptor(
            kind,
            key,
            label,
            [FieldSpec(field=name, required=required, value_kind=value_kind) for name, required, value_kind in fields],
            CONFIG_MODELS.get((kind, key)),
        )
        for key, label, fields in types
    ]


def default_registry() -> TypeRegistry:
    """Build the shipped CRM registry."""
    return TypeRegistry(
        triggers=_descriptors(NodeKind.TRIGGER, TRIGGER_TYPES),
        actions=_descriptors(NodeKind.ACTION, ACTION_TYPES),
    )


__all__ = [
    "ACTION_TYPES",
    "CONFIG_MODELS",
    "TRIGGER_TYPES",
    "default_registry",
]
