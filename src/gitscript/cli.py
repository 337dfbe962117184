"""Command line interface for gitscript."""

import time
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape

from . import __version__
from .core.commands import fetch_repositories, find_repositories
from .core.config import Config
from .core.dispatcher import FetchDispatcher
from .core.logging import setup_logging
from .core.walker import TraversalError

console = Console()

BANNER = (
    f"Running GitScript {__version__}",
    "Copyright (C) 2023 Abdon Morales",
    "License: Free Research License",
)


def show_banner(delay: float, clear: bool) -> None:
    """Print the startup banner, pausing ``delay`` seconds after each line."""
    for line in BANNER:
        console.print(line, highlight=False)
        if delay:
            time.sleep(delay)
    if clear:
        console.clear()


@click.command()
@click.option(
    "--path",
    "-p",
    "root_path",
    envvar="GITSCRIPT_PATH",
    help="Root path to search for Git repositories",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option("--log-file", help="File to append log messages to (default: gitscript.log)")
@click.option("--git-command", help="Git executable to run (default: git)")
@click.option(
    "--banner-delay",
    type=click.FloatRange(min=0),
    help="Seconds to pause after each banner line",
)
@click.option("--clear/--no-clear", default=None, help="Clear the screen after the banner")
@click.option(
    "--dry-run", is_flag=True, help="List the repositories that would be fetched and exit"
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="gitscript")
def cli(
    root_path: Optional[str],
    config_file: Optional[Path],
    log_file: Optional[str],
    git_command: Optional[str],
    banner_delay: Optional[float],
    clear: Optional[bool],
    dry_run: bool,
    debug: bool,
) -> None:
    """Fetch every Git repository found under a root path.

    The tree below --path is walked recursively. Each directory containing a
    .git entry gets its own `git fetch`, and all fetches run concurrently.
    Results are logged to the console and appended to the log file.

    Examples:

      # Fetch everything under ~/source
      gitscript --path ~/source

      # Show which repositories would be fetched
      gitscript --path ~/source --dry-run

      # Use settings from a file, logging somewhere else
      gitscript --config gitscript.yaml --log-file ~/logs/gitscript.log
    """
    try:
        config = Config(config_file)
        config.update(
            root_path=root_path,
            log_file=log_file,
            git_command=git_command,
            banner_delay=banner_delay,
            clear_screen=clear,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading configuration: {escape(str(e))}")
        raise click.Abort()

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]Error: {escape(error)}")
        raise click.Abort()

    show_banner(config.banner_delay, config.clear_screen)

    try:
        setup_logging(debug=debug, log_file=config.log_file)
    except OSError as e:
        console.print(f"[red]Failed to open log file: {escape(str(e))}")
        raise click.Abort()

    try:
        if dry_run:
            for path in find_repositories(config.root_path, config.junk_files):
                console.print(path, markup=False, highlight=False, soft_wrap=True)
            return

        dispatcher = FetchDispatcher(git_command=config.git_command)
        fetch_repositories(config.root_path, config.junk_files, dispatcher)
    except TraversalError:
        # Already logged
        raise SystemExit(1)


def main() -> None:
    """Entry point for the gitscript CLI."""
    cli()


if __name__ == "__main__":
    main()
