"""Favorite users bookkeeping.

The favorites set is the durable source of truth for which user ids are
marked as favorite. It lives independently of any fetched users
collection: ids may refer to users that are not in the current snapshot,
and such ids simply do not show up in the derived favorites view.

All mutation is synchronous. Every toggle writes the full set back to
storage before returning. Callers that fire the same toggle twice in a row
get the second one applied as well; avoiding double invocation is up to
them.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Protocol, Sequence

from userdeck.core.users import User

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteUserIds"


class KeyValueStorage(Protocol):
    """Interface for the durable string storage backing the favorites set."""

    def read(self, key: str) -> str | None:
        """Return the stored value for key, or None if there is none."""
        ...

    def write(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...


def decode_favorite_ids(raw: str | None) -> set[int]:
    """
    Decode a persisted favorites value.

    Anything that is not a JSON array yields an empty set. Array entries
    that are not integers are dropped.
    """
    if not raw:
        return set()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring unparsable favorites value: %r", raw[:80])
        return set()
    if not isinstance(data, list):
        logger.warning("Ignoring favorites value that is not a list: %r", raw[:80])
        return set()

    ids: set[int] = set()
    for item in data:
        if isinstance(item, bool) or not isinstance(item, int):
            logger.warning("Dropping non-integer favorite id: %r", item)
            continue
        ids.add(item)
    return ids


def encode_favorite_ids(ids: Iterable[int]) -> str:
    """Encode favorite ids as a sorted, compact JSON array like `[1,2,3]`."""
    return json.dumps(sorted(ids), separators=(",", ":"))


class FavoritesManager:
    """Favorites set synchronized with a key-value storage."""

    def __init__(self, storage: KeyValueStorage, key: str = FAVORITES_KEY) -> None:
        """
        Load the favorites set from storage.

        A missing, unreadable or malformed stored value starts the manager
        with an empty set instead of failing.

        Args:
            storage: Durable storage holding the favorites value.
            key: Storage key owned by this manager.
        """
        self.storage = storage
        self.key = key
        try:
            raw = storage.read(key)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read favorites from storage: %s", exc)
            raw = None
        self._ids = decode_favorite_ids(raw)

    def _commit(self, ids: set[int]) -> None:
        """Write ids to storage, then adopt them; a failed write changes nothing."""
        self.storage.write(self.key, encode_favorite_ids(ids))
        self._ids = ids

    def is_favorite(self, user_id: int) -> bool:
        """Return True if the user id is a favorite."""
        return user_id in self._ids

    def toggle(self, user_id: int) -> bool:
        """
        Flip favorite membership of a user id and persist immediately.

        Returns:
            True if the id is a favorite after the toggle, False otherwise.

        Raises:
            OSError: If storage cannot be written; membership is unchanged.
        """
        now_favorite = user_id not in self._ids
        self._commit(self._ids ^ {user_id})
        logger.debug("Toggled favorite %s -> %s", user_id, now_favorite)
        return now_favorite

    def clear(self) -> None:
        """Remove every favorite and persist the empty set."""
        self._commit(set())

    def all(self) -> frozenset[int]:
        """Return a snapshot of the favorite ids."""
        return frozenset(self._ids)

    def derive(self, collection: Sequence[User]) -> list[User]:
        """
        Return the favorite users of a collection, in collection order.

        Favorite ids without a record in the collection produce no row.
        """
        return [user for user in collection if user.id in self._ids]

    def missing(self, collection: Sequence[User]) -> list[int]:
        """Return favorite ids that have no record in the collection."""
        present = {user.id for user in collection}
        return sorted(i for i in self._ids if i not in present)
