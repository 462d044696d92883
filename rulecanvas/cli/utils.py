"""Shared CLI helpers."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from rulecanvas.builder import AutomationBuilder
from rulecanvas.exceptions import ConfigurationError, DefinitionError, RegistryError
from rulecanvas.registry.core import TypeRegistry
from rulecanvas.settings import get_settings

console = Console()
err_console = Console(stderr=True)


def _read_problem(exc: OSError | UnicodeDecodeError) -> str:
    if isinstance(exc, UnicodeDecodeError):
        return f"not valid UTF-8 (byte {exc.start})"
    return exc.strerror or str(exc)


def read_registry_file(path: Path) -> TypeRegistry:
    """Load a registry document from disk.

    Raises:
        ConfigurationError: If the file cannot be read.
        DefinitionError: If the document does not have the registry shape.
        RegistryError: If the registry is empty or declares duplicate keys.
    """
    from rulecanvas.schema import load_registry

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read registry file: {_read_problem(exc)}") from exc
    return load_registry(content)


def load_type_registry(path: Path | None) -> TypeRegistry:
    """Registry from ``path`` (or settings.registry_path), else the CRM catalogue."""
    from rulecanvas.registry.crm import default_registry

    path = path or get_settings().registry_path
    if path is None:
        return default_registry()
    try:
        return read_registry_file(path)
    except (ConfigurationError, DefinitionError, RegistryError) as exc:
        err_console.print(f"[red]Invalid registry {path}: {exc}[/red]", soft_wrap=True)
        raise typer.Exit(code=2) from exc


def load_builder(file: Path | None, template: str | None, registry_path: Path | None) -> AutomationBuilder:
    """Builder hydrated from a definition document or a template id."""
    from rulecanvas.schema import load_definition

    registry = load_type_registry(registry_path)

    if (file is None) == (template is None):
        err_console.print("[red]Pass exactly one of FILE or --template[/red]")
        raise typer.Exit(code=2)

    if template is not None:
        try:
            return AutomationBuilder.from_template(template, registry)
        except KeyError as exc:
            err_console.print(f"[red]{exc.args[0]}[/red]")
            raise typer.Exit(code=2) from exc

    try:
        content = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Cannot read definition {file}: {_read_problem(exc)}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    try:
        definition = load_definition(content)
    except DefinitionError as exc:
        err_console.print(f"[red]Invalid definition {file}:[/red]")
        for error in exc.errors:
            err_console.print(f"  • {error}")
        raise typer.Exit(code=1) from exc
    return AutomationBuilder(registry, definition)
