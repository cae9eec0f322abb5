"""Typer-based CLI for autoimport.

Editors call the import commands with the file being edited and the cursor
position; the file is rewritten in place (or a diff is printed with
``--preview``) and the editor reloads it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__, config
from .buffer import Buffer
from .chooser import Chooser, PromptChooser, ScriptedChooser
from .commands import build_project_index, perform_from_import, perform_qualified_import, project_file_lister
from .config_manager import save_index_config
from .diff_engine import DiffEngine
from .models import ImportOutcome
from .resolver import suggest_modules
from .scanner import ScanError

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="📥 Autoimport: add Python imports for the identifier under the cursor.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    help="⚙️  Configuration: indexing extensions, skipped directories, root markers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"autoimport v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log indexing and edit details."),
):
    """Autoimport: insert import statements without leaving your editor."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# ── helpers ──────────────────────────────────────────────────


def print_success(message: str):
    typer.echo(typer.style(f"✅ {message}", fg=typer.colors.GREEN))


def print_error(message: str):
    typer.echo(typer.style(f"❌ {message}", fg=typer.colors.RED), err=True)


def print_warning(message: str):
    typer.echo(typer.style(f"⚠️  {message}", fg=typer.colors.YELLOW), err=True)


def _load_buffer(file: Path, line: Optional[int], column: int, offset: Optional[int]) -> Buffer:
    try:
        buffer = Buffer.from_file(file)
    except (OSError, UnicodeDecodeError) as exc:
        print_error(f"Cannot read {file}: {exc}")
        raise typer.Exit(1)

    if offset is not None:
        buffer.goto(offset)
    elif line is not None:
        try:
            buffer.goto(buffer.offset_for(line, column))
        except ValueError as exc:
            raise typer.BadParameter(str(exc))
    else:
        raise typer.BadParameter("Give the cursor position with --offset or --line/--column.")
    return buffer


def _make_chooser(module: Optional[str], alias: Optional[str] = None) -> Chooser:
    if module is None:
        return PromptChooser(err_console)
    return ScriptedChooser([module, alias if alias is not None else ""])


def _report(buffer: Buffer, outcome: ImportOutcome, preview: bool) -> None:
    for warning in outcome.warnings:
        print_warning(warning)

    if outcome.status == "cancelled":
        typer.echo("Cancelled; nothing changed.")
        return

    if preview:
        diff = DiffEngine().preview_buffer(buffer)
        typer.echo(diff if diff else "No changes.")
        return

    buffer.save()
    if outcome.status == "already_imported":
        typer.echo(f"Already imported: {outcome.statement}")
    elif outcome.status == "extended":
        print_success(f"Added {outcome.name} to 'from {outcome.module} import ...'")
    else:
        print_success(f"Added '{outcome.statement}'")
    if outcome.qualified_usage:
        typer.echo(f"Qualified usage as {outcome.alias or outcome.module}.{outcome.name}")


def _run(command, buffer: Buffer, chooser: Chooser, root: Optional[Path], preview: bool) -> None:
    settings = config.load_settings()
    logger.debug("Running %s on %s at offset %d", command.__name__, buffer.path, buffer.point)
    lister = project_file_lister(buffer.path, settings, root)
    try:
        outcome = command(buffer, chooser, lister)
    except ScanError as exc:
        print_error(str(exc))
        raise typer.Exit(1)
    _report(buffer, outcome, preview)


# ── import commands ──────────────────────────────────────────


@app.command("from-import")
def from_import(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File being edited."),
    line: Optional[int] = typer.Option(None, "--line", "-l", help="Cursor line (1-based)."),
    column: int = typer.Option(0, "--column", "-c", help="Cursor column (0-based)."),
    offset: Optional[int] = typer.Option(None, "--offset", "-o", help="Cursor character offset."),
    module: Optional[str] = typer.Option(None, "--module", "-m", help="Module to import from (skips the prompt)."),
    root: Optional[Path] = typer.Option(None, "--root", file_okay=False, help="Project root (default: auto-detect)."),
    preview: bool = typer.Option(False, "--preview", "-p", help="Print a diff instead of writing the file."),
):
    """Add "from <module> import <name>" for the identifier at the cursor.

    Example:
      autoimport from-import app/main.py --line 12 --column 8
      autoimport from-import app/main.py -o 340 -m utils.helpers --preview
    """
    buffer = _load_buffer(file, line, column, offset)
    _run(perform_from_import, buffer, _make_chooser(module), root, preview)


@app.command("qualified")
def qualified_import(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File being edited."),
    line: Optional[int] = typer.Option(None, "--line", "-l", help="Cursor line (1-based)."),
    column: int = typer.Option(0, "--column", "-c", help="Cursor column (0-based)."),
    offset: Optional[int] = typer.Option(None, "--offset", "-o", help="Cursor character offset."),
    module: Optional[str] = typer.Option(None, "--module", "-m", help="Module to import (skips the prompts)."),
    alias: Optional[str] = typer.Option(None, "--alias", "-a", help="Alias for the module (with --module)."),
    root: Optional[Path] = typer.Option(None, "--root", file_okay=False, help="Project root (default: auto-detect)."),
    preview: bool = typer.Option(False, "--preview", "-p", help="Print a diff instead of writing the file."),
):
    """Add "import <module> as <alias>" and qualify the identifier at the cursor.

    Example:
      autoimport qualified app/main.py --line 12 --column 8
      autoimport qualified app/main.py -o 340 -m utils.helpers -a helpers
    """
    if alias is not None and module is None:
        raise typer.BadParameter("--alias requires --module.", param_hint="--alias")
    buffer = _load_buffer(file, line, column, offset)
    _run(perform_qualified_import, buffer, _make_chooser(module, alias), root, preview)


# ── index inspection ─────────────────────────────────────────


def _index_for(file: Path, root: Optional[Path]):
    try:
        buffer = Buffer.from_file(file)
    except (OSError, UnicodeDecodeError) as exc:
        print_error(f"Cannot read {file}: {exc}")
        raise typer.Exit(1)
    return build_project_index(buffer, project_file_lister(file, config.load_settings(), root))


@app.command("suggest")
def suggest(
    name: str = typer.Argument(..., help="Identifier to look up."),
    file: Path = typer.Option(..., "--file", "-f", exists=True, dir_okay=False, help="File being edited."),
    root: Optional[Path] = typer.Option(None, "--root", file_okay=False, help="Project root (default: auto-detect)."),
):
    """List project modules defining NAME at top level, one per line."""
    for module in suggest_modules(name, _index_for(file, root)):
        typer.echo(module)


@app.command("index")
def show_index(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File being edited."),
    root: Optional[Path] = typer.Option(None, "--root", file_okay=False, help="Project root (default: auto-detect)."),
):
    """Show the module index as seen from FILE."""
    index = _index_for(file, root)
    if not index:
        typer.echo("No modules found.")
        raise typer.Exit(code=0)

    table = Table(title="Module Index", show_lines=False)
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Symbols", justify="right")
    table.add_column("Names")
    for module, symbols in index.items():
        table.add_row(module, str(len(symbols)), ", ".join(symbols))
    console.print(table)


# ── configuration ────────────────────────────────────────────


@config_app.command("show")
def config_show():
    """Show the effective indexing settings."""
    settings = config.load_settings()
    typer.echo(f"Config file:  {config.CONFIG_FILE}")
    typer.echo(f"Extensions:   {', '.join(settings.extensions)}")
    typer.echo(f"Skip dirs:    {', '.join(settings.skip_dirs)}")
    typer.echo(f"Root markers: {', '.join(settings.root_markers)}")


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing indexing settings."),
):
    """Write the default indexing settings to the config file."""
    if config.CONFIG_FILE.exists() and not force:
        print_error(f"{config.CONFIG_FILE} already exists (use --force to overwrite).")
        raise typer.Exit(1)
    defaults = config.Settings()
    path = save_index_config(
        {
            "extensions": defaults.extensions,
            "skip_dirs": defaults.skip_dirs,
            "root_markers": defaults.root_markers,
        }
    )
    print_success(f"Wrote {path}")
