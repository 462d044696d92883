"""Factory Boy factories for test data generation.

Dict-based factories for the wire shapes (action steps, definitions and
registry entries), so tests can build documents without the models.
"""

import factory


class ActionStepFactory(factory.Factory):
    """Factory for ``{type, params}`` action steps."""

    class Meta:
        model = dict

    type = "CREATE_TASK"
    params = factory.LazyAttributeSequence(lambda o, n: {"title": f"Task {n}"})


class DefinitionFactory(factory.Factory):
    """Factory for ``{triggerType, triggerConfig, actions}`` definitions."""

    class Meta:
        model = dict
        rename = {"trigger_type": "triggerType", "trigger_config": "triggerConfig"}

    trigger_type = "DEAL_STAGE_CHANGED"
    trigger_config = factory.LazyFunction(lambda: {"stage": "negotiation"})
    actions = factory.LazyFunction(lambda: [ActionStepFactory(), ActionStepFactory()])


class RegistryEntryFactory(factory.Factory):
    """Factory for ``{key, label, configSchema}`` registry entries."""

    class Meta:
        model = dict
        rename = {"config_schema": "configSchema"}

    key = factory.Sequence(lambda n: f"TYPE_{n}")
    label = factory.LazyAttribute(lambda o: o.key.replace("_", " ").title())
    config_schema = factory.LazyFunction(list)
