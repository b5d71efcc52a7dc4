import json

import pytest
import requests

from finreport.config import AppConfig
from finreport.data.cache import CacheStore
from finreport.data.connection import HttpClient
from finreport.data.service import ApiClient, ClientContext


def make_config(**overrides) -> AppConfig:
    values = dict(
        api_url="http://api.test",
        api_timeout_ms=5000,
        health_timeout_ms=2000,
        cache_duration_ms=30000,
        admin_login="root",
        admin_password="s3cret",
        user_login="viewer",
        user_password="view",
        mock_seed=None,
    )
    values.update(overrides)
    return AppConfig(**values)


def make_response(status_code=200, payload=None, body=None):
    resp = requests.Response()
    resp.status_code = status_code
    if body is not None:
        resp._content = body
    else:
        resp._content = json.dumps(payload).encode("utf-8") if payload is not None else b""
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    """
    Stands in for requests.Session.

    `routes` maps (METHOD, path) to a Response, an exception to raise, or a
    callable(method, url, json) returning either. Unrouted calls fail like an
    unreachable server.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = "/" + url.split("://", 1)[-1].split("/", 1)[-1]
        self.calls.append({"method": method, "path": path, "json": json, "timeout": timeout})
        handler = self.routes.get((method, path))
        if handler is None:
            raise requests.ConnectionError(f"connection refused: {url}")
        if callable(handler) and not isinstance(handler, requests.Response):
            handler = handler(method, url, json)
        if isinstance(handler, Exception):
            raise handler
        return handler

    def paths(self, method=None):
        return [c["path"] for c in self.calls if method is None or c["method"] == method]


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def cfg():
    return make_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(cfg, session, clock):
    context = ClientContext(cache=CacheStore(duration_ms=cfg.cache_duration_ms, clock=clock))
    return ApiClient(cfg, context=context, http=HttpClient(cfg, session=session))
