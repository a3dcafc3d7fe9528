"""Print logs of a task's sandbox files."""

import typer

from cluster_logs.cli.utils import handle_logs_errors, run_async, run_with_client
from cluster_logs.core.constants import OutputFormat
from cluster_logs.logs import RetrievalOptions


@handle_logs_errors
def task_log(
    task_id: str = typer.Argument(..., help="ID of the task"),
    file: str = typer.Argument("stdout", help="Sandbox file to print"),
    follow: bool = typer.Option(
        False, "--follow", "-f", help="Print new log entries as they are produced"
    ),
    lines: int = typer.Option(
        10, "--lines", "-n", min=0, help="Number of entries to print before the end"
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.DEFAULT,
        "--output",
        "-o",
        help="Output format, only applied with --follow",
        case_sensitive=False,
    ),
) -> None:
    """Print logs of a task.

    Examples:
        cluster-logs task log web.1f2e3d stderr --lines 50
        cluster-logs task log web.1f2e3d --follow
    """
    options = RetrievalOptions(follow=follow, format=output, skip=-lines)
    run_async(
        run_with_client(lambda client: client.print_task(task_id, file, options))
    )
