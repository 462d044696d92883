"""Document schema validation.

Validates YAML/JSON documents (automation definitions, type registries)
before they are turned into models. Pydantic models are compiled to JSON
Schema via .model_json_schema() and validated with the jsonschema
library, which reports every problem with its location.
"""

from __future__ import annotations

from typing import Any

import jsonschema  # type: ignore[import-untyped,unused-ignore]
import yaml
from pydantic import BaseModel, Field

from rulecanvas.compiler.definition import AutomationDefinition
from rulecanvas.exceptions import DefinitionError
from rulecanvas.registry.core import RegistryDocument, TypeRegistry

DEFINITION_SCHEMA = "rulecanvas.definition"
REGISTRY_SCHEMA = "rulecanvas.registry"

# =============================================================================
# MODELS
# =============================================================================


class ValidationError(BaseModel):
    """One schema violation and where it occurred.

    Attributes:
        path: JSONPath-style location of the error (e.g., "actions[0].type").
        message: Human-readable error description.
        schema_path: JSON Schema path that triggered the error.
    """

    path: str
    message: str
    schema_path: str = ""

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ValidationResult(BaseModel):
    """Result of validating a document against a schema."""

    valid: bool
    errors: list[ValidationError] = Field(default_factory=list)
    schema_name: str


# =============================================================================
# SCHEMA REGISTRY
# =============================================================================


class SchemaRegistry:
    """Named document schemas backed by pydantic models.

    Holds the wire definition and the host registry document. JSON Schema
    is generated lazily and cached per name.
    """

    def __init__(self) -> None:
        self._models: dict[str, type[BaseModel]] = {}
        self._json_schemas: dict[str, dict[str, Any]] = {}

    def register(self, name: str, model: type[BaseModel]) -> None:
        """Add a document model under ``name``.

        Raises:
            ValueError: If name is already registered.
        """
        if name in self._models:
            raise ValueError(f"Schema '{name}' is already registered")
        self._models[name] = model
        self._json_schemas.pop(name, None)

    def list_schemas(self) -> list[str]:
        return list(self._models.keys())

    def get_json_schema(self, name: str) -> dict[str, Any]:
        """JSON Schema (camelCase wire names) for a named document model.

        Raises:
            KeyError: If schema name is not registered.
        """
        if name not in self._models:
            raise KeyError(f"Schema '{name}' is not registered")

        if name not in self._json_schemas:
            schema = self._models[name].model_json_schema(by_alias=True)
            # Hosts may carry extra top-level keys (name, description, ...)
            schema.setdefault("additionalProperties", True)
            self._json_schemas[name] = schema

        return self._json_schemas[name]

    def validate(self, name: str, data: Any) -> ValidationResult:
        """Validate parsed data against a registered schema.

        Raises:
            KeyError: If schema name is not registered.
        """
        json_schema = self.get_json_schema(name)
        validator = jsonschema.validators.validator_for(json_schema)(json_schema)

        errors = [
            ValidationError(
                path=_format_json_path(error.absolute_path),
                message=error.message,
                schema_path=_format_json_path(error.absolute_schema_path),
            )
            for error in validator.iter_errors(data)
        ]
        return ValidationResult(valid=not errors, errors=errors, schema_name=name)


registry = SchemaRegistry()
registry.register(DEFINITION_SCHEMA, AutomationDefinition)
registry.register(REGISTRY_SCHEMA, RegistryDocument)


# =============================================================================
# TOP-LEVEL API
# =============================================================================


def parse_document(content: str) -> tuple[Any, list[ValidationError]]:
    """Parse YAML (or JSON, which YAML accepts) into a mapping.

    Returns:
        Tuple of (data, errors). On failure data is None.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        return None, [ValidationError(path="", message=f"Invalid YAML syntax: {exc}")]

    if not isinstance(data, dict):
        return None, [
            ValidationError(
                path="",
                message=f"Expected a mapping (object), got {type(data).__name__}",
            )
        ]
    return data, []


def validate_document(
    content: str,
    schema_name: str,
    *,
    schemas: SchemaRegistry | None = None,
) -> ValidationResult:
    """Parse a document and validate it against a named schema.

    Raises:
        KeyError: If schema_name is not registered.
    """
    reg = schemas or registry
    data, errors = parse_document(content)
    if errors:
        return ValidationResult(valid=False, errors=errors, schema_name=schema_name)
    return reg.validate(schema_name, data)


def _load(content: str, schema_name: str) -> dict[str, Any]:
    data, errors = parse_document(content)
    if not errors:
        errors = registry.validate(schema_name, data).errors
    if errors:
        raise DefinitionError(
            f"Document does not match {schema_name}: " + "; ".join(str(e) for e in errors),
            errors=errors,
        )
    return data


def load_definition(content: str) -> AutomationDefinition:
    """Parse and validate an automation definition document.

    Raises:
        DefinitionError: If the document is not a valid definition.
    """
    return AutomationDefinition.model_validate(_load(content, DEFINITION_SCHEMA))


def load_registry(content: str) -> TypeRegistry:
    """Parse and validate a type registry document.

    Raises:
        DefinitionError: If the document does not have the registry shape.
        RegistryError: If the registry is empty or declares duplicate keys.
    """
    return TypeRegistry.from_dict(_load(content, REGISTRY_SCHEMA))


# =============================================================================
# HELPERS
# =============================================================================


def _format_json_path(path: Any) -> str:
    """Format a jsonschema deque path as a JSONPath-style string.

    Examples:
        deque([]) -> ""
        deque(["actions", 0, "type"]) -> "actions[0].type"
    """
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)
