import json

import httpx
import pytest

from userdeck.core.adapters.jsonplaceholder import (
    BROKEN_API_URL,
    DEFAULT_API_URL,
    JsonPlaceholderAdapter,
)
from userdeck.core.users import FetchError, load_users

USERS = [
    {"id": 1, "name": "Leanne Graham", "company": {"name": "Romaguera-Crona"}},
    {"id": 2, "name": "Ervin Howell"},
]


@pytest.fixture(autouse=True)
def _isolated_cache(monkeypatch, tmp_path):
    monkeypatch.setenv("USERDECK_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.delenv("USERDECK_CACHE_DISABLE", raising=False)
    monkeypatch.delenv("USERDECK_CACHE_TTL", raising=False)
    monkeypatch.delenv("USERDECK_API_URL", raising=False)


def _client(handler, calls=None):
    def _handle(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(str(request.url))
        return handler(request)

    return httpx.Client(transport=httpx.MockTransport(_handle))


def _serve_users(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/users":
        return httpx.Response(200, json=USERS)
    if request.url.path == "/users/1":
        return httpx.Response(200, json=USERS[0])
    return httpx.Response(404, json={})


def test_fetch_all_users_parses_records():
    adapter = JsonPlaceholderAdapter(_client(_serve_users))

    users = adapter.fetch_all_users()

    assert [u.id for u in users] == [1, 2]
    assert users[0].company is not None
    assert users[0].company.name == "Romaguera-Crona"
    assert users[1].company is None


def test_fetch_all_users_uses_fresh_cache():
    calls: list[str] = []
    adapter = JsonPlaceholderAdapter(_client(_serve_users, calls))

    first = adapter.fetch_all_users()
    second = adapter.fetch_all_users()

    assert first == second
    assert calls == [DEFAULT_API_URL]


def test_force_refresh_bypasses_cache():
    calls: list[str] = []
    JsonPlaceholderAdapter(_client(_serve_users, calls)).fetch_all_users()

    JsonPlaceholderAdapter(
        _client(_serve_users, calls), force_refresh=True
    ).fetch_all_users()

    assert len(calls) == 2


def test_cache_can_be_disabled(monkeypatch, tmp_path):
    monkeypatch.setenv("USERDECK_CACHE_DISABLE", "true")
    calls: list[str] = []
    adapter = JsonPlaceholderAdapter(_client(_serve_users, calls))

    adapter.fetch_all_users()
    adapter.fetch_all_users()

    assert len(calls) == 2
    assert not (tmp_path / "cache").exists()


def test_expired_cache_is_ignored(monkeypatch, tmp_path):
    calls: list[str] = []
    adapter = JsonPlaceholderAdapter(_client(_serve_users, calls))
    adapter.fetch_all_users()

    cache_file = next((tmp_path / "cache" / "userdeck").iterdir())
    payload = json.loads(cache_file.read_text())
    payload["timestamp"] -= 3600
    cache_file.write_text(json.dumps(payload))

    adapter.fetch_all_users()

    assert len(calls) == 2


@pytest.mark.parametrize(
    "content",
    [b"[]", b"\xff\xfe", b'{"timestamp": "soon"}', b'{"users": 3, "timestamp": 1e18}'],
)
def test_corrupt_cache_is_refetched(content):
    calls: list[str] = []
    adapter = JsonPlaceholderAdapter(_client(_serve_users, calls))
    adapter._cache_path.parent.mkdir(parents=True, exist_ok=True)
    adapter._cache_path.write_bytes(content)

    snapshot = load_users(adapter)

    assert snapshot.is_error is False
    assert [u.id for u in snapshot.users] == [1, 2]
    assert calls == [DEFAULT_API_URL]


def test_fetch_user_by_id():
    adapter = JsonPlaceholderAdapter(_client(_serve_users))

    assert adapter.fetch_user(1).name == "Leanne Graham"


def test_http_error_status_raises_fetch_error():
    adapter = JsonPlaceholderAdapter(_client(_serve_users))

    with pytest.raises(FetchError, match="HTTP 404"):
        adapter.fetch_user(99)


def test_broken_mode_targets_missing_endpoint():
    calls: list[str] = []
    adapter = JsonPlaceholderAdapter(_client(_serve_users, calls), broken=True)

    with pytest.raises(FetchError):
        adapter.fetch_all_users()
    assert calls == [BROKEN_API_URL]


def test_network_error_raises_fetch_error():
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = JsonPlaceholderAdapter(_client(_fail))

    with pytest.raises(FetchError, match="connection refused"):
        adapter.fetch_all_users()


def test_non_json_body_raises_fetch_error():
    adapter = JsonPlaceholderAdapter(
        _client(lambda request: httpx.Response(200, text="<html>"))
    )

    with pytest.raises(FetchError, match="not valid JSON"):
        adapter.fetch_all_users()


def test_malformed_records_are_skipped():
    adapter = JsonPlaceholderAdapter(
        _client(lambda request: httpx.Response(200, json=[{"id": 1}, {"name": "x"}, 3]))
    )

    assert [u.id for u in adapter.fetch_all_users()] == [1]


def test_base_url_from_env(monkeypatch):
    monkeypatch.setenv("USERDECK_API_URL", "http://localhost:3000/users/")
    calls: list[str] = []
    adapter = JsonPlaceholderAdapter(
        _client(lambda request: httpx.Response(200, json=[]), calls)
    )

    adapter.fetch_all_users()

    assert calls == ["http://localhost:3000/users"]
