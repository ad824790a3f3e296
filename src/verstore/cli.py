"""Command-line interface for verstore.

Every command loads the history from a JSON snapshot file, runs one store
operation and writes the snapshot back when the history changed.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from verstore.base import (
    HistoryConfig,
    InvalidCapacityError,
    SnapshotError,
    VersioningError,
    VersionNotFoundError,
)
from verstore.config import get_default_config, resolve_snapshot_path
from verstore.export import history_frame
from verstore.persistence import load_snapshot, save_snapshot
from verstore.store import VersionStore

app = typer.Typer(
    name="verstore",
    help="Bounded version history for a single document",
    add_completion=False,
)


def clean_input(text: str, max_length: int) -> str:
    """Strip the trailing line break and cut text to ``max_length`` characters.

    The default limits of 1023 and 255 characters are what a line read into
    a 1024 or 256 byte buffer can hold.
    """
    return text.rstrip("\r\n")[:max_length]


def _snapshot_path(ctx: typer.Context) -> Path:
    return Path(resolve_snapshot_path(ctx.obj))


def _load_store(ctx: typer.Context) -> VersionStore:
    path = _snapshot_path(ctx)
    try:
        return load_snapshot(path)
    except VersioningError as e:
        typer.echo(f"Error: {e}", err=True)
        if not path.exists():
            typer.echo("Run 'verstore init' to create a history.", err=True)
        raise typer.Exit(1)


def _save_store(ctx: typer.Context, store: VersionStore) -> None:
    try:
        save_snapshot(store, _snapshot_path(ctx))
    except SnapshotError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    snapshot: Annotated[
        Optional[Path],
        typer.Option("--snapshot", "-s", help="Snapshot file holding the history"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Bounded version history for a single document."""
    config = get_default_config()
    if snapshot is not None:
        config.snapshot_path = str(snapshot)

    try:
        config.validate()
    except ValueError as e:
        typer.echo(f"Error: Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    level = "DEBUG" if verbose else config.log_level.upper()
    logging.basicConfig(
        level=logging.getLevelName(level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


@app.command(name="init")
def init_cmd(
    ctx: typer.Context,
    capacity: Annotated[
        Optional[int],
        typer.Option("--capacity", "-c", help="Maximum number of retained versions"),
    ] = None,
    seed: Annotated[
        Optional[str],
        typer.Option("--seed", help="Initial content before the first version"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing history"),
    ] = False,
) -> None:
    """Create a new, empty history."""
    config: HistoryConfig = ctx.obj
    path = _snapshot_path(ctx)

    if path.exists() and not force:
        typer.echo(f"Error: History already exists: {path} (use --force)", err=True)
        raise typer.Exit(1)

    seed_content = config.seed_content if seed is None else seed
    try:
        store = VersionStore(
            capacity if capacity is not None else config.capacity,
            clean_input(seed_content, config.max_content_length),
        )
    except InvalidCapacityError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _save_store(ctx, store)
    typer.echo(f"History initialized with max {store.capacity} versions.")


@app.command(name="add")
def add_cmd(
    ctx: typer.Context,
    content: Annotated[str, typer.Argument(help="New full content of the document")],
    log: Annotated[
        str,
        typer.Option("--log", "-m", help="Description of the change"),
    ] = "",
) -> None:
    """Add a new version."""
    config: HistoryConfig = ctx.obj
    store = _load_store(ctx)

    version_id = store.append(
        clean_input(content, config.max_content_length),
        clean_input(log, config.max_log_length),
    )
    _save_store(ctx, store)
    typer.echo(f"Version {version_id} created successfully!")


@app.command(name="show")
def show_cmd(
    ctx: typer.Context,
    version_id: Annotated[int, typer.Argument(help="Version ID to retrieve")],
) -> None:
    """Show the content of a specific version."""
    store = _load_store(ctx)

    try:
        content = store.reconstruct(version_id)
    except VersionNotFoundError:
        typer.echo(f"Version {version_id} not found.", err=True)
        raise typer.Exit(1)

    typer.echo(content)


@app.command(name="current")
def current_cmd(ctx: typer.Context) -> None:
    """Show the current content and the number of retained versions."""
    view = _load_store(ctx).current_view()
    typer.echo(f"Content: {view.content}")
    typer.echo(f"Total Versions: {view.count}")


@app.command(name="log")
def log_cmd(
    ctx: typer.Context,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (table, json, csv)"),
    ] = "table",
) -> None:
    """Display the change log of all retained versions."""
    store = _load_store(ctx)
    entries = store.all_logs()

    if format == "json":
        typer.echo(json.dumps([e.to_dict() for e in entries], indent=2))
        return
    if format == "csv":
        typer.echo(history_frame(store).write_csv(), nl=False)
        return
    if format != "table":
        typer.echo(f"Error: Unknown format: {format}", err=True)
        raise typer.Exit(1)

    if not entries:
        typer.echo("No versions found.")
        return

    table = Table(title="Version History")
    table.add_column("Version", justify="right", style="cyan")
    table.add_column("Log")
    table.add_column("Delta")
    for entry in entries:
        table.add_row(str(entry.version_id), entry.change_log, entry.summary)

    Console().print(table)


if __name__ == "__main__":
    app()
