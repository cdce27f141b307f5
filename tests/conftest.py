from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from userdeck.core.users import Address, Company, User  # noqa: E402


class MemoryStorage:
    """In-memory KeyValueStorage that records every write."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append((key, value))


@pytest.fixture
def users() -> list[User]:
    return [
        User(
            id=1,
            name="Leanne Graham",
            username="Bret",
            email="Sincere@april.biz",
            company=Company(name="Romaguera-Crona"),
            address=Address(city="Gwenborough"),
        ),
        User(
            id=2,
            name="Ervin Howell",
            username="Antonette",
            email="Shanna@melissa.tv",
            company=Company(name="Deckow-Crist"),
            address=Address(city="Wisokyburgh"),
        ),
        User(
            id=3,
            name="Clementine Bauch",
            username="Samantha",
            email="Nathan@yesenia.net",
            company=None,
            address=Address(city="McKenziehaven"),
        ),
    ]
