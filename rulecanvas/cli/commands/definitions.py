"""Commands that load a definition and compile, preview or dry-run it."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.text import Text

from rulecanvas.cli.utils import console, err_console, load_builder
from rulecanvas.exceptions import CompileError

FileArg = Annotated[
    Optional[Path],  # noqa: UP007
    typer.Argument(help="Definition document (YAML or JSON)", exists=True, dir_okay=False),
]
TemplateOpt = Annotated[
    Optional[str],  # noqa: UP007
    typer.Option("--template", "-t", help="Built-in template id instead of a file"),
]
RegistryOpt = Annotated[
    Optional[Path],  # noqa: UP007
    typer.Option("--registry", "-r", help="Type registry document", exists=True, dir_okay=False),
]


def compile_definition(
    file: FileArg = None,
    template: TemplateOpt = None,
    registry: RegistryOpt = None,
) -> None:
    """Compile a definition into the canonical wire JSON.

    Hydrates the authoring graph from the document, then emits what the
    builder would save.
    """
    builder = load_builder(file, template, registry)
    try:
        definition = builder.compile()
    except CompileError as exc:
        err_console.print(f"[red]❌ {exc}[/red]")
        raise typer.Exit(code=1) from exc

    for warning in builder.diagnostics.warnings:
        err_console.print(f"[yellow]⚠ {warning}[/yellow]")
    typer.echo(definition.to_json())


def preview(
    file: FileArg = None,
    template: TemplateOpt = None,
    registry: RegistryOpt = None,
) -> None:
    """Show the automation as plain-language steps."""
    builder = load_builder(file, template, registry)
    console.print(Panel(Text(builder.preview()), title="Preview", border_style="blue"))


def dry_run(
    file: FileArg = None,
    template: TemplateOpt = None,
    registry: RegistryOpt = None,
) -> None:
    """Check every action without running anything.

    Exits with status 1 when the automation would not save or any action
    fails its field checks.
    """
    builder = load_builder(file, template, registry)
    report = builder.dry_run()

    console.print(Panel(Text(report.preview), title="Preview", border_style="blue"))
    styles = {"[PASS]": "green", "[FAIL]": "red", "[BLOCKED]": "red", "[WARN]": "yellow", "[SKIP]": "dim"}
    for line in report.lines():
        tag = line.split(" ", 1)[0]
        style = styles.get(tag, "white")
        console.print(line, style=style, markup=False)

    if not report.passed:
        raise typer.Exit(code=1)
