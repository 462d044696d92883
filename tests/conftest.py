"""Shared test fixtures for RuleCanvas.

Provides settings, registry and builder fixtures used across unit tests.
"""

import pytest

from rulecanvas.builder import AutomationBuilder
from rulecanvas.registry.core import TypeRegistry
from rulecanvas.registry.crm import default_registry
from rulecanvas.settings import Settings

# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with the default layout and policies."""
    return Settings(
        environment="testing",
        debug=True,
        trigger_position_x=250,
        trigger_position_y=50,
        action_spacing=150,
        block_save_on_field_errors=False,
        exclude_disconnected_actions=False,
        deduplicate_edges=True,
    )


# =============================================================================
# REGISTRY / BUILDER
# =============================================================================


@pytest.fixture
def registry() -> TypeRegistry:
    """The shipped CRM registry."""
    return default_registry()


@pytest.fixture
def builder(registry: TypeRegistry, test_settings: Settings) -> AutomationBuilder:
    """Fresh builder holding only the default trigger."""
    return AutomationBuilder(registry, settings=test_settings)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
