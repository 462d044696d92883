"""CRM action config models.

Required values are checked by ``problems()`` rather than by pydantic so
that half-filled configs still parse while the operator is editing.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from rulecanvas.registry.core import ConfigModel, is_blank, required_message


class CreateTaskConfig(ConfigModel):
    """Create a task on the contact that fired the trigger."""

    title: str | None = None
    description: str | None = None
    due_in_days: int | None = Field(default=None, ge=0, alias="dueInDays")
    assigned_user_id: int | None = Field(default=None, alias="assignedUserId")

    def problems(self) -> list[str]:
        return [required_message("title")] if is_blank(self.title) else []

    def describe(self, label: str) -> str:
        text = f'Create task "{self.title}"' if not is_blank(self.title) else "Create task (untitled)"
        if self.due_in_days == 0:
            text += ", due the same day"
        elif self.due_in_days is not None:
            text += f", due in {self.due_in_days} {'day' if self.due_in_days == 1 else 'days'}"
        if self.assigned_user_id is not None:
            text += f", assigned to user #{self.assigned_user_id}"
        return text


class SendEmailConfig(ConfigModel):
    """Email the contact. ``body`` may use {{deal.title}}-style placeholders.

    A ``text`` or ``html`` key stands in for ``body``.
    """

    subject: str | None = None
    body: str | None = None

    
    def content(self) -> str | None:
        extra = self.model_extra or {}
        for value in (self.body, extra.get("text"), extra.get("html")):
            if not is_blank(value):
                return value
        return None

    def problems(self) -> list[str]:
        problems = []
        if is_blank(self.subject):
            problems.append(required_message("subject"))
        if self.content is None:
            problems.append(required_message("body"))
        return problems

    def describe(self, label: str) -> str:
        if is_blank(self.subject):
            return "Send email (no subject)"
        return f'Send email "{self.subject}"'


class ChangeProbabilityConfig(ConfigModel):
    """Set the deal's win probability (percent)."""

    probability: float | None = Field(default=None, ge=0, le=100)

    def problems(self) -> list[str]:
        return [required_message("probability")] if self.probability is None else []

    def describe(self, label: str) -> str:
        if self.probability is None:
            return "Change deal probability (value not set)"
        return f"Set deal probability to {self.probability:g}%"


class AssignUserConfig(ConfigModel):
    """Reassign the deal to a user."""

    user_id: int | None = Field(default=None, alias="userId")

    def problems(self) -> list[str]:
        return [required_message("userId")] if self.user_id is None else []

    def describe(self, label: str) -> str:
        if self.user_id is None:
            return "Assign deal to a user (not selected)"
        return f"Assign deal to user #{self.user_id}"


class CreateNotificationConfig(ConfigModel):
    """In-app notification for a user (the triggering user by default)."""

    user_id: int | None = Field(default=None, alias="userId")
    title: str | None = None
    message: str | None = None
    notification_type: Literal["info", "success", "warning", "error"] = Field(default="info", alias="type")

    def problems(self) -> list[str]:
        problems = []
        if is_blank(self.title):
            problems.append(required_message("title"))
        if is_blank(self.message):
            problems.append(required_message("message"))
        return problems

    def describe(self, label: str) -> str:
        text = f"Send {self.notification_type} notification"
        if not is_blank(self.title):
            text += f' "{self.title}"'
        if self.user_id is not None:
            text += f" to user #{self.user_id}"
        return text


class UpdateDealStageConfig(ConfigModel):
    """Move the deal to another stage. ``stage`` is accepted for ``newStage``."""

    new_stage: str | None = Field(default=None, alias="newStage")
    stage: str | None = None

    @property
    def target_stage(self) -> str | None:
        return self.new_stage if not is_blank(self.new_stage) else self.stage

    def problems(self) -> list[str]:
        return [required_message("newStage")] if is_blank(self.target_stage) else []

    def describe(self, label: str) -> str:
        if is_blank(self.target_stage):
            return "Move deal to another stage (not set)"
        return f'Move deal to stage "{self.target_stage}"'


ACTION_CONFIG_MODELS: dict[str, type[ConfigModel]] = {
    "CREATE_TASK": CreateTaskConfig,
    "SEND_EMAIL": SendEmailConfig,
    "CHANGE_PROBABILITY": ChangeProbabilityConfig,
    "ASSIGN_USER": AssignUserConfig,
    "CREATE_NOTIFICATION": CreateNotificationConfig,
    "UPDATE_DEAL_STAGE": UpdateDealStageConfig,
}
