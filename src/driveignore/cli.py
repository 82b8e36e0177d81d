"""driveignore CLI: Typer application with diff, init, and check-ignore commands."""

from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from driveignore import __version__

app = typer.Typer(
    name="driveignore",
    help="Check that a folder was fully mirrored into a drive sync folder.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load_config(source: Path, config: Optional[str]):
    """Load config for *source*, exit 2 on failure."""
    from driveignore.config.loader import ConfigError, load_config

    try:
        return load_config(source, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _resolve_ignores(source: Path, cfg, *, merge: bool, verbose: bool):
    """Resolve the .driveignore set, exit 2 when none is found and one is required."""
    from driveignore.ignore.loader import IgnoreResolutionError, IgnoreSource, require_ignores

    try:
        ignores, ignore_source = require_ignores(
            source,
            required=cfg.diff.require_ignore_file,
            merge=merge,
            global_file=cfg.ignore.global_file,
            filename=cfg.ignore.filename,
            extra_patterns=cfg.ignore.patterns,
        )
    except IgnoreResolutionError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose:
        if ignore_source is IgnoreSource.GLOBAL:
            console.print("[dim]loaded global .driveignore[/dim]")
        elif ignore_source is IgnoreSource.LOCAL:
            console.print("[dim]loaded local .driveignore[/dim]")
        elif ignore_source is IgnoreSource.MERGED:
            console.print("[dim]loaded merged global and local .driveignore[/dim]")
        else:
            console.print("[dim]no .driveignore found, nothing is ignored[/dim]")
        console.print(f"[dim]Ignore patterns: {len(ignores)}[/dim]")

    return ignores, ignore_source


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command(
    epilog=(
        "Red    - your drive sync folder is missing a file\n\n"
        "Yellow - your drive sync folder has a file that doesnt exist in input"
    ),
)
def diff(
    target: str = typer.Argument(..., help="Drive sync folder path"),
    input: str = typer.Option(".", "--input", "-i", help="Input directory of the files to be compared"),
    merge_ignores: bool = typer.Option(False, "--merge-ignores", "-M", help="Merges global and input dir .driveignore"),
    identity: Optional[str] = typer.Option(None, "--identity", help="File identity: inode | size | exists"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write a JSON report to file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .driveignore.toml"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 when any difference is found"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Compare your directory with the drive sync folder.

    Prints the files present in only one of the input directory and TARGET.
    """
    from driveignore.config.schema import FORMAT_CHOICES, IDENTITY_CHOICES
    from driveignore.diff.engine import diff as start_diff, run_diff
    from driveignore.diff.identity import IdentityMode
    from driveignore.diff.models import ArgumentError, DiffOptions, DiffReport, check_roots
    from driveignore.fs.walker import WalkError
    from driveignore.output import json_report, terminal

    source = Path(input)

    # --- Validate roots before anything touches the trees ---
    try:
        check_roots(str(source), target)
    except ArgumentError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    cfg = _load_config(source, config)

    # --- CLI overrides ---
    if identity:
        if identity not in IDENTITY_CHOICES:
            console.print(f"[bold red]Invalid identity mode:[/bold red] {identity}")
            raise typer.Exit(code=2)
        cfg.diff.identity = identity  # type: ignore[assignment]
    if format:
        if format not in FORMAT_CHOICES:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    merge = merge_ignores or cfg.diff.merge_ignores

    ignores, ignore_source = _resolve_ignores(source, cfg, merge=merge, verbose=verbose)

    options = DiffOptions(
        source_root=str(source),
        target_root=target,
        ignores=ignores,
        identity=IdentityMode(cfg.diff.identity),
        queue_size=cfg.diff.queue_size,
    )

    if verbose:
        console.print(f"[dim]Input: {source.resolve()}[/dim]")
        console.print(f"[dim]Sync folder: {Path(target).resolve()}[/dim]")
        console.print(f"[dim]Identity: {options.identity.value}[/dim]")

    # --- Run diff ---
    try:
        if cfg.output.format == "json":
            report = run_diff(options, ignore_source=ignore_source)
            print(json_report.render(report))
        else:
            start = time.perf_counter()
            missing, stale = terminal.render_stream(start_diff(options))
            report = DiffReport(
                source=options.source_root,
                target=options.target_root,
                missing=missing,
                stale=stale,
                ignore_source=ignore_source,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
    except WalkError as exc:
        console.print(f"[bold red]Walk error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if cfg.output.format == "terminal" and (cfg.output.show_summary or verbose):
        terminal.print_summary(console, len(report.missing), len(report.stale), report.duration_ms)

    # --- Write to file ---
    if output:
        Path(output).write_text(json_report.render(report), encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    # --- Exit code ---
    if strict and not report.clean:
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    input: str = typer.Option(".", "--input", "-i", help="Directory to create the files in"),
    with_config: bool = typer.Option(False, "--with-config", help="Also write a starter .driveignore.toml"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Generate a starter .driveignore in the input directory."""
    from driveignore.config.defaults import DEFAULT_DRIVEIGNORE, DEFAULT_TOML
    from driveignore.config.loader import CONFIG_FILENAME
    from driveignore.ignore.loader import DEFAULT_FILENAME

    root = Path(input)
    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] Input path isnt a directory: {root}")
        raise typer.Exit(code=2)

    targets = [(root / DEFAULT_FILENAME, DEFAULT_DRIVEIGNORE)]
    if with_config:
        targets.append((root / CONFIG_FILENAME, DEFAULT_TOML))

    for path, _ in targets:
        if path.exists() and not force:
            console.print(f"[yellow]⚠[/yellow]  {path.name} already exists at {path}")
            raise typer.Exit(code=1)

    for path, template in targets:
        path.write_text(template, encoding="utf-8")
        console.print(f"[green]✓[/green] Created {path}")


# ── check-ignore ──────────────────────────────────────────────────────────────


@app.command("check-ignore")
def check_ignore(
    paths: List[str] = typer.Argument(..., help="Paths relative to the input directory"),
    input: str = typer.Option(".", "--input", "-i", help="Input directory the paths are relative to"),
    merge_ignores: bool = typer.Option(False, "--merge-ignores", "-M", help="Merges global and input dir .driveignore"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .driveignore.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Print which PATHS the resolved .driveignore excludes.

    Exits 1 when none of them is excluded, like git check-ignore.
    """
    source = Path(input)
    cfg = _load_config(source, config)
    merge = merge_ignores or cfg.diff.merge_ignores
    ignores, _ = _resolve_ignores(source, cfg, merge=merge, verbose=verbose)

    matched = 0
    for rel in paths:
        is_dir = rel.endswith("/") or (source / rel).is_dir()
        if ignores.match(rel, is_dir):
            print(rel)
            matched += 1

    if matched == 0:
        raise typer.Exit(code=1)


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"driveignore {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """driveignore: check that a folder was fully mirrored into a drive sync folder."""
