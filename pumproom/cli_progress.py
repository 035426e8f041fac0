"""Console rendering and progress helpers for pumproom CLI."""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .orchestrator.models import PublishResult
from .services.formatter import format_pumproom_response
from .utils.events import StageEvent

console = Console()

STAGE_LABELS = {
    "folder_validation": "Validating folder names",
    "config_validation": "Validating configuration",
    "archiving": "Building archive",
    "uploading": "Uploading archive",
    "cleanup": "Cleaning up",
}


def mask_secret(value: Optional[str]) -> str:
    if not value:
        return "(missing)"
    if len(value) <= 4:
        return "****"
    return "****" + value[-4:]


def render_configuration_summary(config: Dict[str, Any]) -> None:
    """Render startup configuration summary."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, rendered)

    panel = Panel(
        table,
        title="[bold green]pumproom-publish[/bold green]",
        subtitle="[dim]repository publisher[/dim]",
        border_style="blue",
    )
    console.print(panel)


class PipelineProgressDisplay:
    """One line per pipeline stage, plus the final summary."""

    def __init__(self, out: Optional[Console] = None):
        self._console = out or console
        self._started: Dict[str, float] = {}

    def on_stage_start(self, event: StageEvent) -> None:
        self._started[event.stage] = time.monotonic()
        label = STAGE_LABELS.get(event.stage, event.stage)
        self._console.print(f"[dim][{event.index}/{event.total}][/dim] {label}...")

    def on_stage_complete(self, event: StageEvent) -> None:
        elapsed = time.monotonic() - self._started.get(event.stage, time.monotonic())
        label = STAGE_LABELS.get(event.stage, event.stage)
        self._console.print(f"[green]  done[/green] {label} [dim]({elapsed:.1f}s)[/dim]")

    def on_failed(self, result: PublishResult) -> None:
        stage = result.failed_stage.value if result.failed_stage else "unknown"
        label = STAGE_LABELS.get(stage, stage)
        self._console.print(f"[bold red]  failed[/bold red] {label}")

    def on_finish(self, result: PublishResult) -> None:
        if not result.success:
            self._console.print(
                Panel(Text(result.message), title="[bold red]Publish failed[/bold red]", border_style="red")
            )
            return

        if result.response is not None:
            self._console.print(format_pumproom_response(result.response), markup=False, highlight=False)
        self._console.print(f"[bold green]{result.message}[/bold green]")
