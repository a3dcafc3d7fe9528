"""Tests for the cluster logs CLI."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from cluster_logs import __version__
from cluster_logs.cli.main import app
from cluster_logs.config.settings import settings
from cluster_logs.core.session import ClusterSession


@pytest.fixture
def runner():
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    """Keep the CLI's log file out of the home directory."""
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))
    return tmp_path / "logs"


@pytest.fixture
def mock_cluster(monkeypatch):
    """Answer the CLI's requests with ``handler`` and record them."""
    state = {"handler": None, "requests": []}

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    def from_settings(cls, _settings):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return cls("https://cluster.example.com", token="tok", client=client)

    monkeypatch.setattr(ClusterSession, "from_settings", classmethod(from_settings))
    return state


def _journal(message: str) -> str:
    return json.dumps(
        {
            "fields": {
                "MESSAGE": message,
                "PRIORITY": "6",
                "SYSLOG_IDENTIFIER": "dcos-mesos-master",
                "_PID": "1",
            },
            "realtime_timestamp": 1_500_000_000_000_000,
        }
    )


def test_version(runner):
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_node_log_help(runner):
    result = runner.invoke(app, ["node", "log", "--help"])

    assert result.exit_code == 0
    assert "--leader" in result.stdout
    assert "--filter" in result.stdout
    assert "--follow" in result.stdout


def test_node_log_requires_leader_or_agent(runner, mock_cluster):
    result = runner.invoke(app, ["node", "log"])

    assert result.exit_code == 1
    assert mock_cluster["requests"] == []


def test_node_log_rejects_leader_and_agent(runner, mock_cluster):
    result = runner.invoke(app, ["node", "log", "S1", "--leader"])

    assert result.exit_code == 1
    assert mock_cluster["requests"] == []


def test_node_log_rejects_malformed_filter(runner, mock_cluster):
    result = runner.invoke(app, ["node", "log", "--leader", "--filter", "nocolon"])

    assert result.exit_code == 1
    assert mock_cluster["requests"] == []


def test_node_log_leader_component(runner, mock_cluster, log_dir):
    mock_cluster["handler"] = lambda request: httpx.Response(
        200, text=_journal("elected") + "\n"
    )

    result = runner.invoke(
        app,
        [
            "node", "log", "--leader",
            "--component", "dcos-mesos-master",
            "--filter", "PRIORITY:6",
            "--lines", "5",
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == "2017-07-14 02:40:00 UTC dcos-mesos-master[1]: elected\n"
    request = mock_cluster["requests"][0]
    assert request.url.path == "/system/v1/logs/v2/component/dcos-mesos-master"
    assert request.url.params["skip"] == "-5"
    assert request.url.params.get_list("filter") == ["PRIORITY:6"]
    assert (log_dir / "cluster-logs.log").exists()


def test_node_log_agent_json_output(runner, mock_cluster):
    mock_cluster["handler"] = lambda request: httpx.Response(200, text=_journal("x"))

    result = runner.invoke(app, ["node", "log", "S1", "--output", "json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["MESSAGE"] == "x"
    assert mock_cluster["requests"][0].url.path == "/system/v1/agent/S1/logs/v2/component"


def test_node_log_no_logs_is_not_a_failure(runner, mock_cluster):
    mock_cluster["handler"] = lambda request: httpx.Response(204)

    result = runner.invoke(app, ["node", "log", "--leader"])

    assert result.exit_code == 0
    assert "UTC" not in result.stdout


def test_node_log_server_error_fails(runner, mock_cluster):
    mock_cluster["handler"] = lambda request: httpx.Response(500, text="boom")

    result = runner.invoke(app, ["node", "log", "--leader"])

    assert result.exit_code == 1


def test_task_log_prints_text(runner, mock_cluster):
    mock_cluster["handler"] = lambda request: httpx.Response(200, text="hello from task\n")

    result = runner.invoke(app, ["task", "log", "web.1", "stderr", "-n", "3"])

    assert result.exit_code == 0, result.output
    assert result.stdout == "hello from task\n"
    request = mock_cluster["requests"][0]
    assert request.url.path == "/system/v1/logs/v2/task/web.1/file/stderr"
    assert request.url.params["cursor"] == "END"
    assert request.url.params["skip"] == "-3"


def test_task_log_follow(runner, mock_cluster):
    mock_cluster["handler"] = lambda request: httpx.Response(
        200, content=f"data:\n\ndata: {_journal('live')}\n\n".encode()
    )

    result = runner.invoke(app, ["task", "log", "web.1", "--follow", "--output", "cat"])

    assert result.exit_code == 0, result.output
    assert result.stdout == "live\n"
    assert mock_cluster["requests"][0].headers["Accept"] == "text/event-stream"
