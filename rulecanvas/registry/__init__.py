"""Trigger/action type registry.

Usage::

    from rulecanvas.registry import TypeRegistry

    registry = TypeRegistry.from_dict({"triggers": [...], "actions": [...]})
    registry.first(NodeKind.ACTION).key
"""

from __future__ import annotations

from rulecanvas.registry.core import (
    ConfigModel,
    FieldSpec,
    GenericConfig,
    TypeDescriptor,
    TypeRegistry,
    ValueKind,
)

__all__ = [
    "ConfigModel",
    "FieldSpec",
    "GenericConfig",
    "TypeDescriptor",
    "TypeRegistry",
    "ValueKind",
]
