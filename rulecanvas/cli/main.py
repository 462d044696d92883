"""CLI entry point and catalogue commands.

Provides the main CLI application with commands for:
- types / templates: inspect the registry and built-in templates
- compile / preview / dry-run: work with a definition document
- schema: print the wire JSON Schema
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from rulecanvas.cli.commands.definitions import compile_definition, dry_run, preview
from rulecanvas.cli.utils import console, load_type_registry
from rulecanvas.logging_config import configure_logging

app = typer.Typer(
    name="rulecanvas",
    help="Author, validate and compile CRM automation rules",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    configure_logging("DEBUG" if verbose else None)


app.command(name="compile")(compile_definition)
app.command(name="preview")(preview)
app.command(name="dry-run")(dry_run)


@app.command()
def types(
    registry: Annotated[
        Optional[Path],  # noqa: UP007
        typer.Option("--registry", "-r", help="Type registry document", exists=True, dir_okay=False),
    ] = None,
) -> None:
    """List trigger and action types with their config fields."""
    type_registry = load_type_registry(registry)

    for title, descriptors in (
        ("Triggers", type_registry.triggers),
        ("Conditions", type_registry.conditions),
        ("Actions", type_registry.actions),
    ):
        if not descriptors:
            continue
        table = Table(title=title, show_header=True)
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Label")
        table.add_column("Fields")
        for descriptor in descriptors:
            fields = ", ".join(
                f"{spec.field}{'*' if spec.required else ''} ({spec.value_kind.value})"
                for spec in descriptor.config_schema
            )
            table.add_row(descriptor.key, descriptor.label, fields or "[dim]none[/dim]")
        console.print(table)


@app.command()
def templates(
    category: Annotated[
        Optional[str],  # noqa: UP007
        typer.Option("--category", "-c", help="Filter by category"),
    ] = None,
) -> None:
    """List built-in automation templates."""
    from rulecanvas.templates import list_templates

    found = list_templates(category)
    if not found:
        console.print("[yellow]No templates found.[/yellow]")
        return

    table = Table(title=f"Templates ({len(found)})", show_header=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Trigger")
    table.add_column("Actions", justify="right")
    for template in found:
        table.add_row(
            template.id,
            template.title,
            template.category,
            template.definition.trigger_type,
            str(len(template.definition.actions)),
        )
    console.print(table)


@app.command()
def schema() -> None:
    """Print the JSON Schema of the compiled definition."""
    from rulecanvas.schema import DEFINITION_SCHEMA, registry

    typer.echo(json.dumps(registry.get_json_schema(DEFINITION_SCHEMA), indent=2))


@app.command()
def version() -> None:
    """Show RuleCanvas version information."""
    console.print(
        Panel(
            "[bold]RuleCanvas[/bold] v0.1.0\nCRM automation rule authoring core",
            title="Version",
            border_style="blue",
        )
    )


# Entry point for: python -m rulecanvas.cli.main
if __name__ == "__main__":
    app()
