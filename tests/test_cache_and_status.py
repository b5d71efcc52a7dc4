from conftest import FakeClock, make_response
from finreport.data.cache import ORGANIZATIONS, CacheStore
from finreport.data.status import ServerStatus


def test_empty_cache_is_invalid():
    cache = CacheStore(duration_ms=1000, clock=FakeClock())

    assert not cache.is_valid(ORGANIZATIONS)
    assert cache.get(ORGANIZATIONS) is None
    assert not cache.is_valid("unknown")


def test_entry_valid_until_duration_elapses():
    clock = FakeClock()
    cache = CacheStore(duration_ms=1000, clock=clock)
    cache.set(ORGANIZATIONS, ["a"])

    clock.advance(0.999)
    assert cache.get(ORGANIZATIONS) == ["a"]

    clock.advance(0.002)
    assert not cache.is_valid(ORGANIZATIONS)


def test_set_refreshes_timestamp():
    clock = FakeClock()
    cache = CacheStore(duration_ms=1000, clock=clock)
    cache.set(ORGANIZATIONS, ["a"])
    clock.advance(0.8)
    cache.set(ORGANIZATIONS, ["b"])
    clock.advance(0.8)

    assert cache.get(ORGANIZATIONS) == ["b"]


def test_empty_list_is_still_cached_data():
    cache = CacheStore(duration_ms=1000, clock=FakeClock())
    cache.set(ORGANIZATIONS, [])

    assert cache.is_valid(ORGANIZATIONS)


def test_clear_single_and_all():
    cache = CacheStore(duration_ms=1000, clock=FakeClock())
    cache.set(ORGANIZATIONS, ["a"])
    cache.set("other", ["b"])

    cache.clear(ORGANIZATIONS)
    assert not cache.is_valid(ORGANIZATIONS)
    assert cache.is_valid("other")

    cache.clear()
    assert not cache.is_valid("other")
    assert cache.entry("other").duration == 1000


def test_status_transitions():
    status = ServerStatus()
    assert status.available is True
    assert status.check_interval_ms == 60000

    status.mark_unavailable()
    assert status.available is False
    assert status.last_check > 0

    status.mark_available()
    snap = status.snapshot()
    assert snap["available"] is True
    assert set(snap) == {"available", "last_check", "check_interval_ms"}


def test_health_check_success(client, session):
    session.routes[("GET", "/health")] = make_response(200, {"status": "ok"})
    client.status.mark_unavailable()

    assert client.check_server_connection() is True
    assert client.get_server_status() is True
    assert session.calls[0]["timeout"] == 2.0


def test_health_check_failure_never_raises(client, session):
    assert client.check_server_connection() is False
    assert client.get_server_status() is False


def test_health_check_empty_body(client, session):
    session.routes[("GET", "/health")] = make_response(204)

    assert client.check_server_connection() is True


def test_health_check_plain_text_body(client, session):
    session.routes[("GET", "/health")] = make_response(200, body=b"OK")
    client.status.mark_unavailable()

    assert client.check_server_connection() is True
    assert client.get_server_status() is True
