"""Application settings using pydantic-settings.

Loads configuration from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Authoring-core configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RULECANVAS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production", "testing"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Canvas layout for generated nodes
    trigger_position_x: float = Field(default=250.0, description="X coordinate of the trigger node")
    trigger_position_y: float = Field(default=50.0, description="Y coordinate of the trigger node")
    action_spacing: float = Field(
        default=150.0,
        gt=0,
        description="Vertical offset between stacked action nodes (and trigger -> first action)",
    )

    # Save / compile policy
    block_save_on_field_errors: bool = Field(
        default=False,
        description="Refuse to save while any node has missing required fields",
    )
    exclude_disconnected_actions: bool = Field(
        default=False,
        description="Drop action nodes flagged by the connectivity check from compiled output",
    )
    deduplicate_edges: bool = Field(
        default=True,
        description="Ignore a connect request when the same source -> target edge already exists",
    )

    # Keyboard bindings (scoped to canvas focus)
    delete_key: str = Field(default="Delete", description="Key that removes the selected node")
    escape_key: str = Field(default="Escape", description="Key that clears the selection")

    # CLI
    registry_path: Path | None = Field(
        default=None,
        description="YAML/JSON type registry used by the CLI instead of the built-in CRM catalogue",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded once and reused.
    """
    return Settings()
