"""In-memory store — nothing survives the process.

Used in tests and for `store: memory`, where a session or key only needs to
last for one command.
"""

from __future__ import annotations

from typing import Optional

from snipreview_store.base import BaseStore


class MemoryStore(BaseStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
