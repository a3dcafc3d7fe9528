"""Cluster logs CLI entry point."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..config.settings import settings
from .commands import node_log, task_log


def setup_logging(verbose: bool = False) -> None:
    """Send log records to a rotating file, never to the console."""
    log_dir = Path(os.path.expanduser(settings.LOG_DIR))
    os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / "cluster-logs.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[file_handler],
        force=True,
    )


# Root typer for `cluster-logs` CLI commands
app = typer.Typer(
    help="Print and follow logs of cluster nodes and tasks", no_args_is_help=True
)

# Sub-typer for `cluster-logs node` commands
app_cmd_node = typer.Typer(help="Commands for cluster nodes", no_args_is_help=True)
app_cmd_node.command(name="log")(node_log)
app.add_typer(app_cmd_node, name="node", help="Node logs")

# Sub-typer for `cluster-logs task` commands
app_cmd_task = typer.Typer(help="Commands for tasks", no_args_is_help=True)
app_cmd_task.command(name="log")(task_log)
app.add_typer(app_cmd_task, name="task", help="Task logs")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cluster-logs version: {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        settings.VERBOSE, "--verbose", "-v", help="Write debug records to the log file"
    ),
) -> None:
    """Cluster logs CLI."""
    setup_logging(verbose)


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
