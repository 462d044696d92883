"""RuleCanvas exception hierarchy.

Editing operations never raise; these cover host-facing failures:
registry initialization, compilation and document loading.

Usage:
    from rulecanvas.exceptions import CompileError

    try:
        definition = compile_graph(store)
    except CompileError as e:
        show_blocking_message(str(e))
"""

import uuid
from typing import Any


class RuleCanvasError(Exception):
    """Base exception for all RuleCanvas errors.

    Carries a correlation_id for tracing errors across layers.
    """

    def __init__(self, message: str, *, correlation_id: str | None = None):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        super().__init__(message)


class RegistryError(RuleCanvasError):
    """The type registry is empty or malformed.

    Hosts must treat this as a hard initialization error.
    """

    pass


class CompileError(RuleCanvasError):
    """The graph cannot be compiled into an automation definition."""

    code = "COMPILE_ERROR"


class NoTriggerError(CompileError):
    """The graph has no trigger node."""

    code = "NO_TRIGGER"

    def __init__(self, message: str = "A trigger must be configured", **kwargs: Any):
        super().__init__(message, **kwargs)


class NoActionsError(CompileError):
    """The graph has no action nodes."""

    code = "NO_ACTIONS"

    def __init__(self, message: str = "Add at least one action", **kwargs: Any):
        super().__init__(message, **kwargs)


class DefinitionError(RuleCanvasError):
    """A YAML/JSON document failed schema validation."""

    def __init__(self, message: str, *, errors: list[Any] | None = None, **kwargs: Any):
        self.errors = errors or []
        super().__init__(message, **kwargs)


class ConfigurationError(RuleCanvasError):
    """Errors from application configuration."""

    pass
