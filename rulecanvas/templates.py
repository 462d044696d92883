"""Built-in automation templates.

Starter automations an operator can load into the builder and adjust.
Placeholders left as ``None`` (e.g. the user to assign) must be filled in
before the field check passes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from rulecanvas.compiler.definition import ActionStep, AutomationDefinition


class AutomationTemplate(BaseModel):
    """A named, categorized starter definition."""

    id: str
    title: str
    description: str
    category: str = ""
    complexity: Literal["basic", "advanced"] = "basic"
    definition: AutomationDefinition = Field(..., description="Definition to hydrate a builder with")

    model_config = {"frozen": True}


def _definition(trigger_type: str, trigger_config: dict | None, *actions: tuple[str, dict]) -> AutomationDefinition:
    return AutomationDefinition(
        trigger_type=trigger_type,
        trigger_config=trigger_config or {},
        actions=[ActionStep(type=action_type, params=params) for action_type, params in actions],
    )


TEMPLATES: list[AutomationTemplate] = [
    AutomationTemplate(
        id="deal-to-negotiation-task-email",
        title="Call and email when a deal reaches negotiation",
        description="When a deal moves to the negotiation stage, create a task and send an email.",
        category="Deals",
        definition=_definition(
            "DEAL_STAGE_CHANGED",
            {"stage": "negotiation"},
            (
                "CREATE_TASK",
                {"title": "Contact the client", "description": "Clarify details and send the offer", "dueInDays": 1},
            ),
            (
                "SEND_EMAIL",
                {
                    "subject": "Thank you for the meeting",
                    "body": "Hello! Here are the materials from our meeting. Happy to discuss the details.",
                },
            ),
        ),
    ),
    AutomationTemplate(
        id="high-amount-assign-manager",
        title="Assign a manager to large deals",
        description="When a deal amount exceeds 300,000, assign a senior manager.",
        category="Deals",
        definition=_definition(
            "DEAL_AMOUNT_CHANGED",
            {"minAmount": 300000},
            ("ASSIGN_USER", {"userId": None}),
            (
                "CREATE_NOTIFICATION",
                {"title": "New large deal", "message": "The deal exceeds 300,000. Check the details.", "type": "info"},
            ),
        ),
    ),
    AutomationTemplate(
        id="contact-created-followup",
        title="Follow up on new contacts",
        description="Create a task and send an email after a contact is created.",
        category="Contacts",
        definition=_definition(
            "CONTACT_CREATED",
            None,
            ("CREATE_TASK", {"title": "First touch", "description": "Call or write to the client", "dueInDays": 0}),
            (
                "SEND_EMAIL",
                {"subject": "Nice to meet you!", "body": "Hello! Let's discuss your goals and how we can help."},
            ),
        ),
    ),
    AutomationTemplate(
        id="deal-created-quick-touch",
        title="Quick follow-up on new deals",
        description="Right after a deal is created, create a contact task and send a welcome email.",
        category="Deals",
        definition=_definition(
            "DEAL_CREATED",
            None,
            (
                "CREATE_TASK",
                {
                    "title": "Contact the client",
                    "description": "Say hello, clarify the need and agree on the next step.",
                    "dueInDays": 0,
                },
            ),
            (
                "SEND_EMAIL",
                {"subject": "Welcome!", "body": "Thank you for choosing us. Let's agree on the next step."},
            ),
        ),
    ),
    AutomationTemplate(
        id="stage-negotiation-raise-probability",
        title="Raise probability at negotiation",
        description="When a deal moves to negotiation, raise its probability.",
        category="Deals",
        definition=_definition(
            "DEAL_STAGE_CHANGED",
            {"stage": "negotiation"},
            ("CHANGE_PROBABILITY", {"probability": 60}),
        ),
    ),
    AutomationTemplate(
        id="stage-proposal-send-email",
        title="Send the offer at the proposal stage",
        description="When a deal moves to proposal, email the commercial offer.",
        category="Deals",
        definition=_definition(
            "DEAL_STAGE_CHANGED",
            {"stage": "proposal"},
            (
                "SEND_EMAIL",
                {"subject": "Commercial offer", "body": "Hello! Please find our offer attached."},
            ),
            (
                "CREATE_TASK",
                {"title": "Close the offer", "description": "Answer questions and book a call.", "dueInDays": 1},
            ),
        ),
    ),
    AutomationTemplate(
        id="deal-amount-range-assign-and-probability",
        title="Routing for mid-size deals",
        description="For deals between 50,000 and 150,000, assign a manager and set the probability.",
        category="Deals",
        complexity="advanced",
        definition=_definition(
            "DEAL_AMOUNT_CHANGED",
            {"minAmount": 50000, "maxAmount": 150000},
            ("ASSIGN_USER", {"userId": None}),
            ("CHANGE_PROBABILITY", {"probability": 45}),
            (
                "CREATE_NOTIFICATION",
                {"title": "Mid-size deal", "message": "Deal in the 50-150k range, check the plan.", "type": "info"},
            ),
        ),
    ),
]

_BY_ID = {template.id: template for template in TEMPLATES}


def list_templates(category: str | None = None) -> list[AutomationTemplate]:
    return [t for t in TEMPLATES if category is None or t.category == category]


def get_template(template_id: str) -> AutomationTemplate:
    """Look up a template by id.

    Raises:
        KeyError: If no template has this id.
    """
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise KeyError(f"Unknown automation template '{template_id}'") from None
