"""SessionStore — save, restore and clear the working session.

The session is a single JSON value under a fixed key, so a save is one write
and can never be observed half-done. Nothing here runs as part of a review
request; each operation is an explicit user action.

A stored value that is not valid JSON (or not a JSON object) loads as "no
session" and is logged, never raised: a corrupt session should cost the user
their saved snippet, not the ability to start a new one.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from snipreview_store.base import BaseStore
from snipreview_store.models import SessionRecord

logger = logging.getLogger(__name__)

SESSION_KEY = "codeReviewerSession"


class SessionStore:
    def __init__(self, store: BaseStore, key: str = SESSION_KEY):
        self._store = store
        self._key = key
        self.is_session_saved = self.exists()

    def save(self, record: SessionRecord) -> None:
        self._store.set(self._key, json.dumps(record.to_dict()))
        self.is_session_saved = True

    def load(self) -> Optional[SessionRecord]:
        raw = self._store.get(self._key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Saved session is not valid JSON, ignoring it: %s", e)
            return None
        if not isinstance(data, dict):
            logger.warning("Saved session is not a JSON object, ignoring it.")
            return None
        return SessionRecord.from_dict(data)

    def clear(self) -> None:
        self._store.remove(self._key)
        self.is_session_saved = False

    def exists(self) -> bool:
        """True when a session that ``load`` would return is stored."""
        return self.load() is not None
