"""JSON file persistence shared by the repositories.

JsonStore raises StorageError on I/O failure. Repositories keep their table in
memory and treat every write as best effort: a failed save is logged and the
in-memory state stays authoritative for the running process.
"""
import json
import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from shop.domain.errors import StorageError

logger = logging.getLogger(__name__)


class JsonStore:
    def __init__(self, path: Path, default_factory: Callable[[], Any] = list):
        self.path = Path(path)
        self._default_factory = default_factory

    def default(self):
        return self._default_factory()

    def load(self):
        """Return the file's JSON content, or a fresh default when the file does not exist yet."""
        if not self.path.exists():
            return self.default()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(self.path, e) from e

    def save(self, data) -> None:
        """Atomic write: dump to a temp file in the same directory, then move it into place."""
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.stem}_", suffix=".json")
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(self.path, e) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def quarantine(self) -> Path | None:
        """Copy an unreadable file aside so the next save does not silently destroy it."""
        if not self.path.exists():
            return None
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        target = self.path.with_name(f"{self.path.stem}_corrupt_{timestamp}{self.path.suffix}")
        try:
            shutil.copy2(self.path, target)
        except OSError as e:
            logger.error("Could not quarantine %s: %s", self.path, e)
            return None
        logger.warning("Unreadable data file copied to %s", target.name)
        return target


class JsonRepository:
    """Base for repositories holding one JSON table in memory."""

    def __init__(self, store: JsonStore):
        self._store = store

    def _load_raw(self):
        try:
            return self._store.load()
        except StorageError as e:
            logger.error("%s; starting with empty data", e)
            self._store.quarantine()
            return self._store.default()

    def _snapshot(self):
        raise NotImplementedError

    def _persist(self) -> bool:
        try:
            self._store.save(self._snapshot())
            return True
        except StorageError as e:
            # Edits stay in memory; the next successful save writes them out
            logger.error("%s; keeping changes in memory", e)
            return False
