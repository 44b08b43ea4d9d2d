"""JSON file backed key-value document stores.

Each store is a single JSON object on disk, named after the store. Opening a
store reads it into memory (creating nothing until the first ``save``),
``get``/``set``/``delete`` act on the in-memory copy and ``save`` flushes it
with a temp file and an atomic rename.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from collections.abc import Callable
from contextlib import suppress
from pathlib import Path
from typing import Any, Protocol

from hushnote.config import get_settings
from hushnote.errors import StoreFlushError, StoreUnavailableError, StoreWriteError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    name: str

    def get(self, key: str) -> Any | None: ...

    def has(self, key: str) -> bool: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> bool: ...

    def save(self) -> None: ...


StoreOpener = Callable[[], DocumentStore]


class JsonDocumentStore:
    def __init__(self, path: Path, data: dict[str, Any] | None = None) -> None:
        self.path = path
        self.name = path.name
        self._data: dict[str, Any] = data if data is not None else {}

    @classmethod
    def open(cls, directory: Path, name: str) -> JsonDocumentStore:
        """Load the store ``name`` from ``directory``, or start an empty one."""
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreUnavailableError(name, f"cannot create {directory}: {exc}") from exc

        path = directory / name
        if not path.exists():
            logger.debug("Store %s not on disk yet; starting empty", name)
            return cls(path)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailableError(name, f"cannot read {path}: {exc}") from exc
        if not raw.strip():
            return cls(path)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            return cls._start_over(path, f"invalid JSON: {exc}")
        if not isinstance(data, dict):
            return cls._start_over(path, "not a JSON object")
        return cls(path, data)

    @classmethod
    def _start_over(cls, path: Path, reason: str) -> JsonDocumentStore:
        """Move an unreadable store file aside and open an empty store in its place."""
        backup = path.with_name(f"{path.name}.corrupt")
        try:
            os.replace(path, backup)
        except OSError as exc:
            raise StoreUnavailableError(
                path.name, f"corrupt store file ({reason}) could not be moved aside: {exc}"
            ) from exc
        logger.warning(
            "Store %s is corrupt (%s); moved it to %s and starting empty",
            path.name,
            reason,
            backup.name,
        )
        return cls(path)

    def get(self, key: str) -> Any | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)

    def set(self, key: str, value: Any) -> None:
        try:
            json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StoreWriteError(f"Value for '{key}' is not JSON serializable: {exc}") from exc
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns False when it was not present."""
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def save(self) -> None:
        directory = self.path.parent
        try:
            fd, temp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.name}.", suffix=".tmp")
        except OSError as exc:
            raise StoreFlushError(f"Failed to save store '{self.name}' to disk: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._data, handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self.path)
        except OSError as exc:
            with suppress(FileNotFoundError):
                os.unlink(temp_path)
            raise StoreFlushError(f"Failed to save store '{self.name}' to disk: {exc}") from exc


def open_document_store(name: str, data_dir: Path | None = None) -> JsonDocumentStore:
    """Open a named store under the configured application data directory."""
    directory = data_dir if data_dir is not None else get_settings().app_data_dir
    return JsonDocumentStore.open(Path(directory), name)


def onboarding_store_opener(data_dir: Path | None = None) -> StoreOpener:
    """Return an opener for the onboarding status store.

    The store is re-read on every call so each operation holds it only for
    its own duration.
    """

    def _open() -> DocumentStore:
        return open_document_store(get_settings().onboarding_store_name, data_dir)

    return _open
