"""Abstract key/value store interface.

Sessions and persisted credentials both live behind this interface. Callers
depend on BaseStore, not on a concrete backend, so an in-memory store can
stand in for a file or database in tests and throwaway runs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class BaseStore(ABC):
    """Single-key string storage.

    Each call reads or writes one key as one operation; there is no
    multi-key transaction.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``. Removing a missing key is a no-op."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional: subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
