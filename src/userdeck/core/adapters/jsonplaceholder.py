from __future__ import annotations

import json
import logging
import os
import re
import time
from pathlib import Path
from typing import Any

import httpx

from userdeck.core.users import FetchError, User

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://jsonplaceholder.typicode.com/users"
BROKEN_API_URL = "https://jsonplaceholder.typicode.com/broken-users"


class JsonPlaceholderAdapter:
    """Adapter around the JSONPlaceholder users REST endpoints."""

    _API_URL_ENV = "USERDECK_API_URL"
    _TIMEOUT_ENV = "USERDECK_HTTP_TIMEOUT"
    _CACHE_TTL_ENV = "USERDECK_CACHE_TTL"
    _CACHE_DISABLE_ENV = "USERDECK_CACHE_DISABLE"
    _CACHE_DIR_ENV = "USERDECK_CACHE_DIR"
    _DEFAULT_CACHE_TTL_SECONDS = 300
    _DEFAULT_TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str | None = None,
        broken: bool = False,
        force_refresh: bool = False,
    ):
        """
        Create a users adapter.

        Args:
            client: HTTP client to use; a new one is created when omitted.
            base_url: Users collection URL; defaults to $USERDECK_API_URL or
                the public JSONPlaceholder endpoint.
            broken: Target an endpoint that does not exist, to exercise the
                error path.
            force_refresh: Ignore cached users when reading.
        """
        if broken:
            url = BROKEN_API_URL
        else:
            url = base_url or os.getenv(self._API_URL_ENV) or DEFAULT_API_URL
        self.base_url = url.rstrip("/")
        self.broken = broken
        self.force_refresh = force_refresh
        self.client = client or httpx.Client(timeout=self._timeout_seconds())
        self._cache_path = self._build_cache_path()

    def _timeout_seconds(self) -> float:
        """Return the HTTP timeout, honoring env override."""
        raw = os.getenv(self._TIMEOUT_ENV)
        if raw is None:
            return self._DEFAULT_TIMEOUT_SECONDS
        try:
            return max(float(raw), 0.1)
        except ValueError:
            return self._DEFAULT_TIMEOUT_SECONDS

    def _build_cache_path(self) -> Path:
        """Return the cache file path for this endpoint."""
        cache_root = os.getenv(self._CACHE_DIR_ENV)
        if cache_root:
            base = Path(cache_root)
        else:
            xdg = os.getenv("XDG_CACHE_HOME")
            base = Path(xdg) if xdg else Path.home() / ".cache"
        cache_dir = base / "userdeck"
        safe_key = re.sub(r"[^A-Za-z0-9_.-]+", "_", self.base_url)
        return cache_dir / f"users_{safe_key}.json"

    def _cache_ttl_seconds(self) -> int:
        """Return cache TTL in seconds, honoring env override."""
        raw = os.getenv(self._CACHE_TTL_ENV)
        if raw is None:
            return self._DEFAULT_CACHE_TTL_SECONDS
        try:
            return max(int(raw), 0)
        except ValueError:
            return self._DEFAULT_CACHE_TTL_SECONDS

    def _cache_enabled(self) -> bool:
        """Return True if caching is enabled."""
        disabled = os.getenv(self._CACHE_DISABLE_ENV, "").strip().lower()
        if disabled in {"1", "true", "yes"}:
            return False
        return self._cache_ttl_seconds() > 0

    def _load_cached_users(self) -> list[User] | None:
        """Load cached users if the cache is fresh."""
        if self.force_refresh or not self._cache_enabled():
            return None
        path = self._cache_path
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable users cache %s", path)
            return None
        if not isinstance(payload, dict):
            logger.warning("Ignoring users cache %s with unexpected shape", path)
            return None
        raw_users = payload.get("users")
        if not isinstance(raw_users, list):
            return None
        timestamp = payload.get("timestamp")
        if not isinstance(timestamp, (int, float)):
            return None
        if time.time() - float(timestamp) > self._cache_ttl_seconds():
            return None
        users = []
        for item in raw_users:
            try:
                users.append(User.from_payload(item))
            except (AttributeError, ValueError):
                continue
        logger.debug("Using %d cached users from %s", len(users), path)
        return users

    def _store_cached_users(self, users: list[User]) -> None:
        """Persist users to the cache on disk."""
        if not self._cache_enabled():
            return
        path = self._cache_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            payload = {
                "timestamp": time.time(),
                "users": [user.to_payload() for user in users],
            }
            path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write users cache %s: %s", path, exc)

    def _get_json(self, url: str) -> Any:
        """GET a URL and decode its JSON body, mapping failures to FetchError."""
        logger.debug("GET %s", url)
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"HTTP {exc.response.status_code} from GET {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {url} failed: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Response from {url} is not valid JSON") from exc

    def fetch_all_users(self) -> list[User]:
        """Return all users (cached when enabled)."""
        cached = self._load_cached_users()
        if cached is not None:
            return cached

        data = self._get_json(self.base_url)
        if not isinstance(data, list):
            raise FetchError(f"Expected a list of users from {self.base_url}")

        users: list[User] = []
        for item in data:
            try:
                users.append(User.from_payload(item))
            except (AttributeError, ValueError) as exc:
                logger.warning("Skipping malformed user record: %s", exc)

        self._store_cached_users(users)
        return users

    def fetch_user(self, user_id: int) -> User:
        """Return a single user by id."""
        data = self._get_json(f"{self.base_url}/{user_id}")
        if not isinstance(data, dict):
            raise FetchError(f"Expected a user object for id {user_id}")
        try:
            return User.from_payload(data)
        except ValueError as exc:
            raise FetchError(f"Malformed user record for id {user_id}") from exc
