from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR_ENV = "USERDECK_DATA_DIR"


def default_data_dir() -> Path:
    """Return the directory used for durable userdeck state."""
    root = os.getenv(_DATA_DIR_ENV)
    if root:
        return Path(root)
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "userdeck"


class FileStorage:
    """Key-value storage keeping one file per key in a directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = Path(root) if root is not None else default_data_dir()

    def _path_for(self, key: str) -> Path:
        safe_key = re.sub(r"[^A-Za-z0-9_.-]+", "_", key)
        return self.root / f"{safe_key}.json"

    def read(self, key: str) -> str | None:
        """Return the stored value for key, or None if absent or unreadable."""
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

    def write(self, key: str, value: str) -> None:
        """Write value for key, creating the storage directory if needed."""
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")
        logger.debug("Wrote %s", path)
