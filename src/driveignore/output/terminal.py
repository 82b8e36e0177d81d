"""Rich terminal reporter: red for missing, yellow for stale."""

from __future__ import annotations

from typing import List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from driveignore.diff.engine import DiffStreams

MISSING_STYLE = "red"
STALE_STYLE = "bright_yellow"


def _print_path(console: Console, rel_path: str, style: str) -> None:
    # paths are printed literally, never parsed as console markup
    console.print(Text(rel_path, style=style), soft_wrap=True)


def render_stream(
    streams: DiffStreams,
    console: Optional[Console] = None,
) -> Tuple[List[str], List[str]]:
    """Print paths as the walks produce them.

    All missing paths are printed before any stale path. A walk error is
    raised as soon as its stream is drained, so a failed missing walk stops
    before stale paths are shown. Returns the printed ``(missing, stale)`` paths.
    """
    console = console or Console()

    missing: List[str] = []
    for rel_path in streams.missing:
        _print_path(console, rel_path, MISSING_STYLE)
        missing.append(rel_path)
    err = streams.missing.wait()
    if err is not None:
        raise err

    stale: List[str] = []
    for rel_path in streams.stale:
        _print_path(console, rel_path, STALE_STYLE)
        stale.append(rel_path)
    err = streams.stale.wait()
    if err is not None:
        raise err

    return missing, stale


def print_summary(
    console: Console,
    missing: int,
    stale: int,
    duration_ms: float,
) -> None:
    console.print()
    console.print(f"[dim]Missing:[/dim]   {missing}")
    console.print(f"[dim]Stale:[/dim]     {stale}")
    console.print(f"[dim]Duration:[/dim]  {duration_ms:.0f}ms")
    console.print()
    if missing == 0 and stale == 0:
        console.print("[bold green]✅ Sync folder matches input.[/bold green]")
    else:
        console.print(
            f"[bold yellow]⚠️  {missing + stale} difference(s) between input and sync folder.[/bold yellow]"
        )
