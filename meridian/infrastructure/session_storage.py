"""Session Storage - tab-lifetime key-value store backing SessionStore.

Invariants:
    - Values are strings; JSON helpers round-trip dicts through json
    - remove_item on a missing key is a no-op
    - get_json on a corrupt value returns None (logged) instead of raising

Design Decisions:
    - Protocol + in-memory implementation: the browser's sessionStorage lives
      exactly as long as the tab, which maps to the client object's lifetime
    - Thread lock around the dict: the fallback expiry timer fires on its own thread
"""

import json
import logging
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class SessionStorage(Protocol):
    """Contract for session persistence - same shape as browser sessionStorage."""
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class MemorySessionStorage:
    """Process-lifetime storage. Pass one instance to several stores to share it."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def get_json(storage: SessionStorage, key: str) -> Any:
    raw = storage.get_item(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"Discarding unreadable session storage value for {key}")
        return None


def set_json(storage: SessionStorage, key: str, value: Any) -> None:
    storage.set_item(key, json.dumps(value, ensure_ascii=False))
