"""YAML/JSON document validation for definitions and registries.

Usage::

    from rulecanvas.schema import load_definition, validate_document

    result = validate_document(yaml_string, "rulecanvas.definition")
    if not result.valid:
        for error in result.errors:
            print(f"{error.path}: {error.message}")
"""

from __future__ import annotations

from rulecanvas.schema.core import (
    DEFINITION_SCHEMA,
    REGISTRY_SCHEMA,
    SchemaRegistry,
    ValidationError,
    ValidationResult,
    load_definition,
    load_registry,
    parse_document,
    registry,
    validate_document,
)

__all__ = [
    "DEFINITION_SCHEMA",
    "REGISTRY_SCHEMA",
    "SchemaRegistry",
    "ValidationError",
    "ValidationResult",
    "load_definition",
    "load_registry",
    "parse_document",
    "registry",
    "validate_document",
]
