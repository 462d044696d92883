"""Preview renderer and dry-run simulator."""

from __future__ import annotations

from rulecanvas.preview.renderer import preview_lines, render_preview
from rulecanvas.preview.simulator import DryRunReport, DryRunStep, dry_run

__all__ = [
    "DryRunReport",
    "DryRunStep",
    "dry_run",
    "preview_lines",
    "render_preview",
]
