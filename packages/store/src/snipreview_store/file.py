"""JsonFileStore — every key in one JSON object on disk.

The closest thing to browser local storage: a flat string→string map that a
user can inspect or delete by hand. Writes go to a temporary file in the same
directory and are moved into place with os.replace, so a crash mid-write
leaves the previous contents intact.

An unreadable file is treated as empty rather than raised, matching how a
fresh profile behaves; the next write replaces it.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from snipreview_store.base import BaseStore

logger = logging.getLogger(__name__)


class JsonFileStore(BaseStore):
    def __init__(self, path: str = ".snipreview.json"):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s, treating it as empty: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not contain a JSON object, treating it as empty.", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
