"""Type registry core.

Declares every trigger/action (and optional condition) type available to
the authoring surface: its key, display label, config schema and the typed
config model that parses, validates and describes node configs.

The registry is supplied once per authoring session and is read-only
afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from rulecanvas.exceptions import RegistryError
from rulecanvas.graph.models import NodeKind

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIG SCHEMA
# =============================================================================


class ValueKind(str, Enum):
    """Kind of value a config field holds."""

    TEXT = "text"
    NUMBER = "number"
    USER = "user"
    CHOICE = "choice"


class FieldSpec(BaseModel):
    """One entry of a type's config schema."""

    field: str
    required: bool = False
    value_kind: ValueKind = Field(default=ValueKind.TEXT, alias="valueKind")

    model_config = {"frozen": True, "populate_by_name": True}


def is_blank(value: Any) -> bool:
    """True for values that do not count as a filled-in field."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def required_message(field: str) -> str:
    return f"{field} is required"


class ConfigModel(BaseModel):
    """Base for typed node configs. Extra keys are kept as-is."""

    model_config = {"extra": "allow", "populate_by_name": True, "strict": True}

    def problems(self) -> list[str]:
        """Type-specific completeness problems (empty when complete)."""
        return []

    def describe(self, label: str) -> str:
        """Natural-language phrase for this config."""
        return label


class GenericConfig(ConfigModel):
    """Fallback for types without a dedicated config model."""


# =============================================================================
# TYPE DESCRIPTOR
# =============================================================================


class TypeDescriptor:
    """Registry entry binding a type key to its label, schema and config model.

    Args:
        kind: Node kind this type applies to.
        key: Type key stored on nodes (e.g. "CREATE_TASK").
        label: Human-readable label.
        config_schema: Ordered field specs.
        config_model: Typed config model; GenericConfig when omitted.
    """

    def __init__(
        self,
        kind: NodeKind,
        key: str,
        label: str,
        config_schema: Iterable[FieldSpec] = (),
        config_model: type[ConfigModel] | None = None,
    ) -> None:
        self.kind = kind
        self.key = key
        self.label = label
        self.config_schema: tuple[FieldSpec, ...] = tuple(config_schema)
        self.config_model = config_model or GenericConfig

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.kind.value}:{self.key})"

    @property
    def required_fields(self) -> list[str]:
        return [spec.field for spec in self.config_schema if spec.required]

    def parse(self, config: Mapping[str, Any]) -> ConfigModel:
        """Parse a raw config map into the typed config model.

        Raises:
            pydantic.ValidationError: If a value has the wrong type or range.
        """
        return self.config_model.model_validate(dict(config))

    def validate(self, config: Mapping[str, Any]) -> list[str]:
        """Return completeness/type problems for a raw config map.

        Typed config models own the checks for their type; the schema
        flags drive validation only for types without one.
        """
        if self.config_model is GenericConfig:
            return self._validate_schema(config)

        try:
            parsed = self.parse(config)
        except PydanticValidationError as exc:
            problems = []
            for e in exc.errors():
                loc = ".".join(str(part) for part in e["loc"])
                problems.append(f"{loc}: {e['msg']}" if loc else e["msg"])
            return problems
        return parsed.problems()

    def _validate_schema(self, config: Mapping[str, Any]) -> list[str]:
        problems: list[str] = []
        for spec in self.config_schema:
            value = config.get(spec.field)
            if spec.required and is_blank(value):
                problems.append(required_message(spec.field))
            elif (
                spec.value_kind == ValueKind.NUMBER
                and not is_blank(value)
                and (isinstance(value, bool) or not isinstance(value, int | float))
            ):
                problems.append(f"{spec.field} must be a number")
        return problems

    def describe(self, config: Mapping[str, Any]) -> str:
        """Phrase describing a node of this type with the given config."""
        try:
            return self.config_model.model_validate(dict(config)).describe(self.label)
        except PydanticValidationError:
            return self.label

    def to_dict(self) -> dict[str, Any]:
        """External registry entry shape."""
        return {
            "key": self.key,
            "label": self.label,
            "configSchema": [spec.model_dump(by_alias=True, mode="json") for spec in self.config_schema],
        }


# =============================================================================
# REGISTRY DOCUMENT (external input shape)
# =============================================================================


class RegistryEntry(BaseModel):
    """One type as supplied by the host."""

    key: str = Field(..., min_length=1)
    label: str
    config_schema: list[FieldSpec] = Field(default_factory=list, alias="configSchema")

    model_config = {"populate_by_name": True}


class RegistryDocument(BaseModel):
    """Registry as supplied by the host: ``{triggers: [...], actions: [...]}``."""

    triggers: list[RegistryEntry]
    actions: list[RegistryEntry]
    conditions: list[RegistryEntry] = Field(default_factory=list)


# =============================================================================
# TYPE REGISTRY
# =============================================================================


class TypeRegistry:
    """Read-only catalogue of trigger, condition and action types.

    Raises:
        RegistryError: If there are no trigger types or no action types,
            or a key is declared twice for the same kind.
    """

    def __init__(
        self,
        triggers: Iterable[TypeDescriptor],
        actions: Iterable[TypeDescriptor],
        conditions: Iterable[TypeDescriptor] = (),
    ) -> None:
        self._types: dict[NodeKind, dict[str, TypeDescriptor]] = {
            NodeKind.TRIGGER: {},
            NodeKind.CONDITION: {},
            NodeKind.ACTION: {},
        }
        for kind, descriptors in (
            (NodeKind.TRIGGER, triggers),
            (NodeKind.CONDITION, conditions),
            (NodeKind.ACTION, actions),
        ):
            for descriptor in descriptors:
                if descriptor.kind != kind:
                    raise RegistryError(f"Type '{descriptor.key}' is a {descriptor.kind.value}, not a {kind.value}")
                if descriptor.key in self._types[kind]:
                    raise RegistryError(f"Duplicate {kind.value} type '{descriptor.key}'")
                self._types[kind][descriptor.key] = descriptor

        if not self._types[NodeKind.TRIGGER]:
            raise RegistryError("Registry declares no trigger types")
        if not self._types[NodeKind.ACTION]:
            raise RegistryError("Registry declares no action types")

    def types(self, kind: NodeKind) -> list[TypeDescriptor]:
        """Types of a kind, in declaration order."""
        return list(self._types[kind].values())

    @property
    def triggers(self) -> list[TypeDescriptor]:
        return self.types(NodeKind.TRIGGER)

    @property
    def actions(self) -> list[TypeDescriptor]:
        return self.types(NodeKind.ACTION)

    @property
    def conditions(self) -> list[TypeDescriptor]:
        return self.types(NodeKind.CONDITION)

    def first(self, kind: NodeKind) -> TypeDescriptor:
        """Default type for new nodes of a kind.

        Raises:
            RegistryError: If the kind has no types (conditions only).
        """
        for descriptor in self._types[kind].values():
            return descriptor
        raise RegistryError(f"Registry declares no {kind.value} types")

    def get(self, kind: NodeKind, key: str | None) -> TypeDescriptor | None:
        if key is None:
            return None
        return self._types[kind].get(key)

    def has(self, kind: NodeKind, key: str) -> bool:
        return key in self._types[kind]

    def resolve(self, kind: NodeKind, key: str) -> TypeDescriptor:
        """Descriptor for a key, with a schema-less fallback for unknown keys."""
        descriptor = self.get(kind, key)
        if descriptor is None:
            logger.debug("Unknown %s type %r, using generic descriptor", kind.value, key)
            return TypeDescriptor(kind, key, key)
        return descriptor

    def label_for(self, kind: NodeKind, key: str) -> str:
        """Display label for a key, falling back to the key itself."""
        descriptor = self.get(kind, key)
        return descriptor.label if descriptor else key

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "triggers": [d.to_dict() for d in self.triggers],
            "actions": [d.to_dict() for d in self.actions],
        }
        if self.conditions:
            data["conditions"] = [d.to_dict() for d in self.conditions]
        return data

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        config_models: Mapping[tuple[NodeKind, str], type[ConfigModel]] | None = None,
    ) -> TypeRegistry:
        """Build a registry from the host-supplied shape.

        Args:
            data: ``{"triggers": [...], "actions": [...], "conditions": [...]}``
                where each entry is ``{key, label, configSchema}``.
            config_models: Typed config models by (kind, key). Defaults to
                the shipped CRM models, so recognized keys keep their
                typed validation and phrasing.

        Raises:
            RegistryError: If the data does not have the registry shape, or
                fails the constructor checks.
        """
        try:
            document = RegistryDocument.model_validate(data)
        except PydanticValidationError as exc:
            raise RegistryError(f"Malformed type registry: {exc.error_count()} error(s)") from exc

        if config_models is None:
            from rulecanvas.registry.crm import CONFIG_MODELS

            config_models = CONFIG_MODELS

        def build(kind: NodeKind, entries: list[RegistryEntry]) -> list[TypeDescriptor]:
            return [
                TypeDescriptor(
                    kind,
                    entry.key,
                    entry.label,
                    entry.config_schema,
                    config_models.get((kind, entry.key)),
                )
                for entry in entries
            ]

        return cls(
            triggers=build(NodeKind.TRIGGER, document.triggers),
            actions=build(NodeKind.ACTION, document.actions),
            conditions=build(NodeKind.CONDITION, document.conditions),
        )
