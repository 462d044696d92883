"""CRM trigger config models.

Each model parses one trigger type's config and phrases it for previews.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from rulecanvas.registry.core import ConfigModel


def format_amount(value: float) -> str:
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"


class DealStageChangedConfig(ConfigModel):
    """Deal moved between pipeline stages."""

    stage: str | None = None
    from_stage: str | None = Field(default=None, alias="fromStage")
    to_stage: str | None = Field(default=None, alias="toStage")

    def describe(self, label: str) -> str:
        target = self.stage or self.to_stage
        if target and self.from_stage:
            return f'When a deal moves from stage "{self.from_stage}" to stage "{target}"'
        if target:
            return f'When a deal moves to stage "{target}"'
        if self.from_stage:
            return f'When a deal leaves stage "{self.from_stage}"'
        return "When a deal changes stage"


class DealAmountChangedConfig(ConfigModel):
    """Deal amount changed, optionally within a range."""

    min_amount: float | None = Field(default=None, alias="minAmount")
    max_amount: float | None = Field(default=None, alias="maxAmount")

    def problems(self) -> list[str]:
        if self.min_amount is not None and self.max_amount is not None and self.min_amount > self.max_amount:
            return ["minAmount must not exceed maxAmount"]
        return []

    def describe(self, label: str) -> str:
        if self.min_amount is not None and self.max_amount is not None:
            return (
                "When a deal amount changes to between "
                f"{format_amount(self.min_amount)} and {format_amount(self.max_amount)}"
            )
        if self.min_amount is not None:
            return f"When a deal amount changes to at least {format_amount(self.min_amount)}"
        if self.max_amount is not None:
            return f"When a deal amount changes to at most {format_amount(self.max_amount)}"
        return "When a deal amount changes"


class _EventTriggerConfig(ConfigModel):
    """Record lifecycle trigger with no settings of its own."""

    phrase: ClassVar[str] = ""

    def describe(self, label: str) -> str:
        return self.phrase or label


class DealCreatedConfig(_EventTriggerConfig):
    phrase: ClassVar[str] = "When a deal is created"


class TaskCreatedConfig(_EventTriggerConfig):
    phrase: ClassVar[str] = "When a task is created"


class TaskCompletedConfig(_EventTriggerConfig):
    phrase: ClassVar[str] = "When a task is completed"


class ContactCreatedConfig(_EventTriggerConfig):
    phrase: ClassVar[str] = "When a contact is created"


class EventCreatedConfig(_EventTriggerConfig):
    phrase: ClassVar[str] = "When a calendar event is created"


TRIGGER_CONFIG_MODELS: dict[str, type[ConfigModel]] = {
    "DEAL_STAGE_CHANGED": DealStageChangedConfig,
    "DEAL_CREATED": DealCreatedConfig,
    "DEAL_AMOUNT_CHANGED": DealAmountChangedConfig,
    "TASK_CREATED": TaskCreatedConfig,
    "TASK_COMPLETED": TaskCompletedConfig,
    "CONTACT_CREATED": ContactCreatedConfig,
    "EVENT_CREATED": EventCreatedConfig,
}
