import pytest
import requests

from conftest import FakeSession, make_config, make_response
from finreport.data.connection import CancelToken, HttpClient
from finreport.data.errors import Cancelled, NetworkUnreachable


def _client(routes=None, **cfg_overrides):
    session = FakeSession(routes)
    return HttpClient(make_config(**cfg_overrides), session=session), session


def test_successful_json_call():
    http, session = _client({("GET", "/get"): make_response(200, [{"id": "1"}])})

    result = http.request("get", "/get")

    assert result.ok
    assert result.data == [{"id": "1"}]
    assert result.status_code == 200
    assert session.calls[0]["method"] == "GET"


def test_default_timeout_from_config():
    http, session = _client({("GET", "/get"): make_response(200, [])}, api_timeout_ms=1500)

    http.request("GET", "/get")

    assert session.calls[0]["timeout"] == 1.5


def test_url_join_handles_slashes():
    http, _ = _client(api_url="http://api.test/")

    assert http.url("/get/1") == "http://api.test/get/1"
    assert http.url("health") == "http://api.test/health"


@pytest.mark.parametrize(
    "failure",
    [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
        requests.exceptions.InvalidURL("bad"),
    ],
)
def test_transport_errors_become_failed_results(failure):
    http, _ = _client({("GET", "/get"): failure})

    result = http.request("GET", "/get")

    assert not result.ok
    assert isinstance(result.error, NetworkUnreachable)


def test_http_error_keeps_status_code():
    http, _ = _client({("GET", "/get/9"): make_response(404, {"message": "no"})})

    result = http.request("GET", "/get/9")

    assert not result.ok
    assert result.status_code == 404
    assert result.error.status_code == 404


def test_non_json_2xx_body_is_passed_through_as_text():
    http, _ = _client({("GET", "/health"): make_response(200, body=b"OK")})

    result = http.request("GET", "/health")

    assert result.ok
    assert result.data == "OK"
    assert result.status_code == 200


def test_non_json_error_body_is_still_a_failure():
    http, _ = _client({("GET", "/get"): make_response(502, body=b"<html>bad gateway</html>")})

    result = http.request("GET", "/get")

    assert not result.ok
    assert result.status_code == 502


def test_configured_timeout_and_override():
    http, session = _client({("GET", "/health"): make_response(200, body=b"")}, api_timeout_ms=2500)

    http.request("GET", "/health")
    http.request("GET", "/health", timeout_ms=500)

    assert [c["timeout"] for c in session.calls] == [2.5, 0.5]


def test_cancel_token():
    token = CancelToken()
    assert not token.cancelled
    token.raise_if_cancelled()

    token.cancel()

    assert token.cancelled
    with pytest.raises(Cancelled):
        token.raise_if_cancelled()


def test_cancelled_token_skips_the_request():
    http, session = _client({("GET", "/get"): make_response(200, [])})
    token = CancelToken()
    token.cancel()

    with pytest.raises(Cancelled):
        http.request("GET", "/get", cancel_token=token)
    assert session.calls == []
