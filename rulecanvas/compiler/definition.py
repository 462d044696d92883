"""Compiled automation definition (the wire contract).

``AutomationDefinition`` is an immutable snapshot with no reference back
to the graph it was compiled from. Serialized with camelCase keys::

    {
      "triggerType": "DEAL_STAGE_CHANGED",
      "triggerConfig": {"stage": "negotiation"},
      "actions": [{"type": "CREATE_TASK", "params": {"title": "Call client"}}]
    }

The same shape hydrates a builder (``InitialDefinition``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ActionStep(BaseModel):
    """One action of the compiled sequence."""

    type: str = Field(..., min_length=1, description="Action type key")
    params: dict[str, Any] = Field(default_factory=dict, description="Action config values")

    model_config = {"frozen": True}

    @field_validator("params", mode="before")
    @classmethod
    def _none_params(cls, value: Any) -> Any:
        return {} if value is None else value


class AutomationDefinition(BaseModel):
    """Trigger type/config plus the ordered action list."""

    trigger_type: str = Field(..., min_length=1, alias="triggerType", description="Trigger type key")
    trigger_config: dict[str, Any] = Field(
        default_factory=dict,
        alias="triggerConfig",
        description="Trigger config values",
    )
    actions: list[ActionStep] = Field(default_factory=list, description="Actions in execution order")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("trigger_config", mode="before")
    @classmethod
    def _none_config(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_wire(self) -> dict[str, Any]:
        """Plain dict in the camelCase wire shape."""
        return self.model_dump(by_alias=True)

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


# Hydration input has the same shape as compiled output
InitialDefinition = AutomationDefinition
