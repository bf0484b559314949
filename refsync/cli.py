"""
Command-line interface for refsync.

Commands:
- sync: regenerate the references module from the bibliography
- list: show the entries parsed from the bibliography
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from refsync.config import load_config, get_config_value
from refsync.sync import read_bib_file, sync_references, ReferenceSyncError
from refsync.utils import get_sync_paths

app = typer.Typer(
    help="Sync a site's generated reference data with its BibTeX bibliography.",
    add_completion=False,
)


class Verbosity(str, Enum):
    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def configure_logging(verbosity: Optional[Verbosity], config: dict) -> None:
    """Set up logging from the verbosity option, falling back to the configured level."""
    if verbosity == Verbosity.VERBOSE:
        level = logging.DEBUG
    elif verbosity == Verbosity.QUIET:
        level = logging.ERROR
    elif verbosity == Verbosity.NORMAL:
        level = logging.INFO
    else:
        level = getattr(logging, get_config_value(config, "logging.level", "INFO"), logging.INFO)

    log_file = get_config_value(config, "logging.file")
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', filename=log_file)


@app.callback()
def callback(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to config file (default: ~/.config/refsync/config.yaml)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    repo: Optional[Path] = typer.Option(
        None, "--repo", "-r",
        help="Site repository root (overrides config)",
        file_okay=False, dir_okay=True,
    ),
    verbosity: Optional[Verbosity] = typer.Option(
        None, "--verbosity", "-v",
        help="Set output verbosity level",
    ),
) -> None:
    """Initialize the Typer context with configuration."""
    config = load_config(str(config_file) if config_file else None)
    configure_logging(verbosity, config)
    ctx.obj = {"config": config, "repo": str(repo) if repo else None}


def _resolve_paths(ctx: typer.Context, bib: Optional[Path], output: Optional[Path]):
    config = dict(ctx.obj["config"])
    if bib:
        config["bib_path"] = str(bib)
    if output:
        config["output_path"] = str(output)
    return get_sync_paths(config, ctx.obj["repo"])


@app.command(name="sync")
def sync_command(
    ctx: typer.Context,
    bib: Optional[Path] = typer.Option(None, "--bib", "-b", help="Bibliography file (overrides config)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Generated module path (overrides config)"),
) -> None:
    """Regenerate the references module from the bibliography."""
    bib_path, output_path = _resolve_paths(ctx, bib, output)

    try:
        result = sync_references(bib_path, output_path)
    except ReferenceSyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(result.message)
    if result.skipped_entries:
        typer.echo(f"Skipped {result.skipped_entries} malformed entries")
    if result.defaulted_years:
        typer.echo(f"Defaulted {result.defaulted_years} unparseable years to 0")
    if result.duplicate_keys:
        typer.echo(f"Duplicate keys: {', '.join(result.duplicate_keys)}")


@app.command(name="list")
def list_command(
    ctx: typer.Context,
    bib: Optional[Path] = typer.Option(None, "--bib", "-b", help="Bibliography file (overrides config)"),
    output_format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """List the entries parsed from the bibliography without writing anything."""
    bib_path, _ = _resolve_paths(ctx, bib, None)

    try:
        entries = read_bib_file(bib_path)
    except ReferenceSyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        typer.echo("No entries found")
        return

    key_width = max(len(entry.key) for entry in entries)
    type_width = max(len(entry.entry_type) for entry in entries)
    for entry in entries:
        typer.echo(
            f"{entry.key:<{key_width}}  {entry.entry_type:<{type_width}}  "
            f"{entry.year:<6}  {entry.author[:40]:<40}  {entry.title[:80]}"
        )


def main() -> None:
    """Entry point for command-line use."""
    app()


if __name__ == "__main__":
    main()
