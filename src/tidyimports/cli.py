# src/tidyimports/cli.py

import difflib
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from typing_extensions import Annotated

# CLI argument/option definitions
PATHS = typer.Argument(..., help="Files or directories to tidy")
CHECK = typer.Option(False, "--check", help="Only report files that would change")
SHOW_DIFF = typer.Option(False, "--diff", help="Show a unified diff of each change")
DEBUG = typer.Option(False, "--debug", "-d", help="Show debug information")
CONFIG_PATH = typer.Option(None, "--config", "-c", help="Path to a .tidyimports.yaml file")
INIT_PATH = typer.Argument(help="Where to write the config (default: ./.tidyimports.yaml)", show_default=False)
FORCE = typer.Option("--force", "-f", help="Overwrite an existing file")

app = typer.Typer(name="tidyimports", help="Keep the import block of JS/TS files in canonical order")
console = Console()
err_console = Console(stderr=True)


def _resolve_config(config_path: Optional[Path]):
    from .core.config import find_config, get_default_config, load_config

    if config_path:
        return load_config(config_path)
    found = find_config(Path.cwd())
    if found:
        return load_config(found)
    return get_default_config()


def _print_diff(path: Path, original: str, updated: str) -> None:
    diff = "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
        )
    )
    console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))


@app.command("format")
def format_files(
    paths: List[Path] = PATHS,
    check: bool = CHECK,
    show_diff: bool = SHOW_DIFF,
    debug: bool = DEBUG,
    config_path: Optional[Path] = CONFIG_PATH,
):
    """Reorder the import block of each file."""
    changed: List[Path] = []
    try:
        from .core.diagnostics import CollectingSink, ConsoleSink, LoggingSink
        from .core.host import SaveHandler, format_with_handler, iter_source_files, read_source
        from .core.logging import setup_logging

        config = _resolve_config(config_path)
        setup_logging(Path(config.log_dir) if config.log_dir else None, debug=debug)

        sink = CollectingSink()
        handler = SaveHandler(config, sink)

        for path in iter_source_files(paths, config.extensions):
            original = read_source(path) if show_diff else None
            updated = format_with_handler(handler, path, check=check)
            if updated is None:
                continue

            changed.append(path)
            if show_diff:
                _print_diff(path, original, updated)
            verb = "Would tidy" if check else "Tidied"
            console.print(f"[green]{verb}[/green] {path}")

        ConsoleSink(err_console).report_all(sink.diagnostics)
        if debug:
            LoggingSink().report_all(sink.diagnostics)

        if not changed:
            console.print("[dim]Nothing to do[/dim]")

    except Exception as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if check and changed:
        raise typer.Exit(1)


@app.command()
def config_show(config_path: Optional[Path] = CONFIG_PATH):
    """Show the effective configuration."""
    try:
        config = _resolve_config(config_path)

        table = Table(title="tidyimports configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("log_dir", str(config.log_dir or "-"))
        table.add_row("manual_saves_only", str(config.manual_saves_only))
        table.add_row("extensions", " ".join(config.extensions))
        for key, value in config.policy.to_dict().items():
            table.add_row(f"policy.{key}", str(value))

        console.print(table)
    except Exception as e:
        err_console.print(f"[red]Error reading configuration: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def config_init(
    path: Annotated[Optional[Path], INIT_PATH] = None,
    force: Annotated[bool, FORCE] = False,
):
    """Write a default configuration file."""
    try:
        from .core.config import CONFIG_FILENAME, Config, save_config

        target = path or Path.cwd() / CONFIG_FILENAME
        if target.exists() and not force:
            err_console.print(f"[red]Error: {target} already exists (use --force)[/red]")
            raise typer.Exit(1)

        save_config(Config(), target)
        console.print(f"[green]Wrote {target}[/green]")
    except typer.Exit:
        raise
    except Exception as e:
        err_console.print(f"[red]Error writing configuration: {e}[/red]")
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
