"""Credential resolution for the review backend.

Resolution order (stops at first success):
  1. A credential persisted in the key/value store (set via ``set_credential``)
  2. An environment variable supplied from outside the process
  3. Nothing: no remote call may be attempted

Each step is a strategy object, so a further source (a secrets manager, the OS
keyring) is one more entry in the list rather than another branch at every
call site.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class CredentialSource(enum.Enum):
    PERSISTED = "persisted"
    ENVIRONMENT = "environment"
    NONE = "none"


@dataclass(frozen=True)
class Credential:
    value: str
    source: CredentialSource

    @property
    def usable(self) -> bool:
        return self.source is not CredentialSource.NONE


NO_CREDENTIAL = Credential(value="", source=CredentialSource.NONE)


class PersistedStrategy:
    """Read the credential from the key/value store."""

    source = CredentialSource.PERSISTED

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    def lookup(self) -> Optional[str]:
        value = self.store.get(self.key)
        if value and value.strip():
            return value
        return None


class EnvironmentStrategy:
    """Read the credential from the first set environment variable in ``names``."""

    source = CredentialSource.ENVIRONMENT

    def __init__(self, names: Sequence[str], environ=None):
        self.names = list(names)
        self._environ = environ

    def lookup(self) -> Optional[str]:
        environ = self._environ if self._environ is not None else os.environ
        for name in self.names:
            value = environ.get(name)
            if value:
                return value
        return None


class CredentialResolver:
    """Decide whether a remote review call may be attempted, and with what.

    ``store`` and ``key`` identify where ``set_credential``/``clear_credential``
    write. The strategy list defaults to persisted-then-environment.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        env_names: Sequence[str] = (),
        strategies: Optional[list] = None,
    ):
        self.store = store
        self.key = key
        if strategies is None:
            strategies = [PersistedStrategy(store, key), EnvironmentStrategy(env_names)]
        self.strategies = strategies
        self._credential = self.resolve()

    @property
    def credential(self) -> Credential:
        return self._credential

    def resolve(self) -> Credential:
        for strategy in self.strategies:
            value = strategy.lookup()
            if value:
                logger.debug("Resolved credential from %s source.", strategy.source.value)
                self._credential = Credential(value=value, source=strategy.source)
                return self._credential
        self._credential = NO_CREDENTIAL
        return self._credential

    def is_configured(self) -> bool:
        return self._credential.usable

    def set_credential(self, value: str) -> bool:
        """Persist ``value`` and re-resolve. Blank input is ignored.

        Returns True when the value was stored.
        """
        if not value or not value.strip():
            logger.debug("Ignoring blank credential.")
            return False
        self.store.set(self.key, value.strip())
        self.resolve()
        return True

    def clear_credential(self) -> None:
        self.store.remove(self.key)
        self.resolve()
