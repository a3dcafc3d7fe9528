import httpx
import pytest

from cluster_logs.logs import (
    NoLogsFound,
    TransportError,
    UnexpectedStatus,
    error_from_response,
)

URL = "https://cluster.example.com/system/v1/logs/v2/component"


def _response(status: int, text: str = "") -> httpx.Response:
    return httpx.Response(status, text=text, request=httpx.Request("GET", URL))


def test_no_content_means_no_logs():
    error = error_from_response(_response(204))

    assert isinstance(error, NoLogsFound)
    assert str(error) == "no logs found"
    assert error.code == "no_logs"


@pytest.mark.parametrize("status", [201, 206, 302, 304, 399])
def test_other_non_error_statuses_are_unexpected(status):
    error = error_from_response(_response(status))

    assert isinstance(error, UnexpectedStatus)
    assert str(error) == f"unexpected status code {status}"
    assert error.status_code == status


@pytest.mark.parametrize("status", [400, 401, 404, 500, 503])
def test_error_statuses_carry_the_response(status):
    response = _response(status, text="upstream said no")

    error = error_from_response(response)

    assert isinstance(error, TransportError)
    assert error.response is response
    assert error.status_code == status
    assert error.detail == "upstream said no"
    assert URL in str(error)


def test_transport_error_without_request_or_body():
    error = error_from_response(httpx.Response(502))

    assert isinstance(error, TransportError)
    assert error.detail is None
    assert str(error) == "HTTP 502 Bad Gateway"


def test_to_dict():
    error = error_from_response(_response(500, text="boom"))

    assert error.to_dict() == {
        "code": "transport_error",
        "message": f"HTTP 500 Internal Server Error for {URL}",
        "detail": "boom",
    }


def test_transport_error_without_response_has_no_status():
    assert TransportError("connection refused").status_code is None
