"""Unit tests for the async save flow."""

from __future__ import annotations

import pytest

from rulecanvas.builder import AutomationBuilder, SaveResult
from rulecanvas.compiler import AutomationDefinition
from rulecanvas.registry.core import TypeRegistry
from rulecanvas.settings import Settings


class Recorder:
    """Save handler that remembers what it was given."""

    def __init__(self) -> None:
        self.saved: list[AutomationDefinition] = []

    def __call__(self, definition: AutomationDefinition) -> None:
        self.saved.append(definition)


@pytest.fixture
def ready_builder(builder: AutomationBuilder) -> AutomationBuilder:
    node_id = builder.add_action_node()
    builder.set_node_config(node_id, {"title": "Call client"})
    return builder


class TestSave:
    """Test save outcomes."""

    async def test_blocked_without_actions(self, builder: AutomationBuilder) -> None:
        recorder = Recorder()

        result = await builder.save(recorder)

        assert isinstance(result, SaveResult)
        assert result.saved is False
        assert result.errors == ["Add at least one action"]
        assert recorder.saved == []

    async def test_sync_handler(self, ready_builder: AutomationBuilder) -> None:
        recorder = Recorder()

        result = await ready_builder.save(recorder)

        assert result.saved is True
        assert recorder.saved == [result.definition]
        assert result.definition.actions[0].params == {"title": "Call client"}

    async def test_async_handler(self, ready_builder: AutomationBuilder) -> None:
        received: list[AutomationDefinition] = []

        async def handler(definition: AutomationDefinition) -> None:
            received.append(definition)

        result = await ready_builder.save(handler)

        assert result.saved is True
        assert received == [result.definition]

    async def test_handler_errors_propagate(self, ready_builder: AutomationBuilder) -> None:
        async def handler(definition: AutomationDefinition) -> None:
            raise RuntimeError("backend down")

        with pytest.raises(RuntimeError, match="backend down"):
            await ready_builder.save(handler)

    async def test_field_errors_do_not_block_by_default(self, builder: AutomationBuilder) -> None:
        builder.add_action_node()
        recorder = Recorder()

        result = await builder.save(recorder)

        assert result.saved is True
        assert len(recorder.saved) == 1

    async def test_field_errors_block_when_enabled(self, registry: TypeRegistry, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"block_save_on_field_errors": True})
        builder = AutomationBuilder(registry, settings=settings)
        builder.add_action_node()
        recorder = Recorder()

        result = await builder.save(recorder)

        assert result.saved is False
        assert result.errors == ['"Create task": title is required']
        assert recorder.saved == []

    async def test_warnings_reported(self, ready_builder: AutomationBuilder) -> None:
        second = ready_builder.add_action_node()
        ready_builder.set_node_config(second, {"title": "Follow up"})
        ready_builder.disconnect(ready_builder.store.incoming(second)[0].id)

        result = await ready_builder.save(Recorder())

        assert result.saved is True
        assert result.warnings == ['"Create task" is not connected to other blocks']
