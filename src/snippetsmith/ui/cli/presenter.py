"""Rich presentation helpers for CLI summaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from rich import box
from rich.table import Table

from .state import CLIState


def _format_path(path: Path) -> str:
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def _format_lines(entry: Mapping[str, Any]) -> str:
    start, end = entry.get("lines") or (0, 0)
    return f"{start + 1}-{end}"


def present_snippet_summary(state: CLIState, events: Sequence[Mapping[str, Any]]) -> None:
    """Display the playground snippets found while rendering."""
    if not events:
        state.err_console.print("No playground snippets found.")
        return

    table = Table(title="Playground snippets", box=box.SQUARE, header_style="bold cyan")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Lines")
    table.add_column("Fence")
    for index, entry in enumerate(events, start=1):
        fence = "closed" if entry.get("closed", True) else "[yellow]auto-closed[/yellow]"
        table.add_row(str(index), _format_lines(entry), fence)
    state.err_console.print(table)


def present_export_summary(state: CLIState, paths: Sequence[Path]) -> None:
    """Display the files written by ``extract``."""
    table = Table(title="Extracted snippets", box=box.SQUARE, header_style="bold cyan")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Location", style="bright_cyan")
    for index, path in enumerate(paths, start=1):
        table.add_row(str(index), _format_path(path))
    state.err_console.print(table)


__all__ = ["present_export_summary", "present_snippet_summary"]
