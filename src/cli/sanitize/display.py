"""Display functions for sanitize commands."""

from cli.core.context import Context
from sanitize_db.pipeline import PipelineResult
from sanitize_db.stages import StageResult
from rich.table import Table
from rich import box


def _counts_text(result: StageResult) -> str:
    if not result.counts:
        return "-"
    return ", ".join(f"{key}: {value:,}" for key, value in result.counts.items())


def display_stage_result(ctx: Context, result: StageResult):
    """Display the outcome of a single stage."""
    grid = Table(show_header=False, box=None, padding=(0, 2))
    grid.add_column("Field", style="cyan bold")
    grid.add_column("Value")

    grid.add_row("Stage", result.name)
    grid.add_row("Rows", _counts_text(result))
    if result.failures:
        grid.add_row("Failed records", f"[red]{result.failures:,}[/red]")
    grid.add_row("Elapsed", f"{result.elapsed:.1f}s")

    ctx.console.print(grid)


def display_pipeline_result(ctx: Context, result: PipelineResult):
    """Display a per-stage summary of a full run."""
    table = Table(title="Sanitization Summary", box=box.SIMPLE)
    table.add_column("Stage", style="cyan")
    table.add_column("Status")
    table.add_column("Rows")
    table.add_column("Failed", justify="right")
    table.add_column("Elapsed", justify="right")

    for stage in result.stages:
        status = "[green]done[/green]" if stage.ok else "[red]FAILED[/red]"
        failed = f"[red]{stage.failures:,}[/red]" if stage.failures else "0"
        table.add_row(stage.name, status, _counts_text(stage), failed, f"{stage.elapsed:.1f}s")

    for name in result.skipped:
        table.add_row(name, "[dim]skipped[/dim]", "-", "-", "-")

    for name in result.not_run:
        table.add_row(name, "[yellow]not run[/yellow]", "-", "-", "-")

    ctx.console.print(table)

    if ctx.verbose:
        ctx.console.print(f"Total duration: {result.elapsed:.2f} seconds", style="dim")
