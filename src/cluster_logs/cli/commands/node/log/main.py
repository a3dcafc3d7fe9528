"""Print logs of the system components running on a node."""

from typing import List, Optional

import typer

from cluster_logs.cli.exceptions import CLIError
from cluster_logs.cli.utils import handle_logs_errors, run_async, run_with_client
from cluster_logs.core.constants import OutputFormat
from cluster_logs.logs import RetrievalOptions


def build_route(leader: bool, mesos_id: Optional[str]) -> str:
    """Return the logging API route for the leading master or an agent."""
    if not leader and not mesos_id:
        raise CLIError("'--leader' or '<mesos-id>' must be provided")
    if leader and mesos_id:
        raise CLIError("unable to use --leader and <mesos-id> at the same time")
    if leader:
        return ""
    return f"/agent/{mesos_id}"


def validate_filters(filters: Optional[List[str]]) -> List[str]:
    validated = []
    for expression in filters or []:
        key, sep, value = expression.partition(":")
        if not sep or not key or not value:
            raise CLIError(f"invalid filter '{expression}', expected format KEY:VALUE")
        validated.append(expression)
    return validated


@handle_logs_errors
def node_log(
    mesos_id: Optional[str] = typer.Argument(
        None, help="ID of the agent whose logs are printed"
    ),
    leader: bool = typer.Option(
        False, "--leader", help="Print logs of the leading master"
    ),
    component: Optional[str] = typer.Option(
        None,
        "--component",
        help="Print logs of a specific component (e.g. dcos-mesos-slave)",
    ),
    filters: Optional[List[str]] = typer.Option(
        None,
        "--filter",
        help="Filter logs by field and value, in the form KEY:VALUE. Can be repeated",
    ),
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
        help="Output format",
        case_sensitive=False,
    ),
) -> None:
    """Print logs of a node's system components.

    Examples:
        # Last 10 entries of the leading master
        cluster-logs node log --leader

        # Follow the Mesos agent component of an agent
        cluster-logs node log 1a2b-S0 --component dcos-mesos-slave --follow

        # Errors only, as JSON
        cluster-logs node log --leader --filter PRIORITY:3 --output json
    """
    route = build_route(leader, mesos_id)
    options = RetrievalOptions(
        filters=validate_filters(filters),
        follow=follow,
        format=output,
        skip=-lines,
    )
    run_async(
        run_with_client(
            lambda client: client.print_component(route, component or "", options)
        )
    )
