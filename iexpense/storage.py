"""Key-value byte stores backing the expense collection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from .exceptions import PersistenceError


class KeyValueStore(ABC):
    """Persistent string-keyed store of opaque byte blobs."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the bytes stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    def set(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any previous value."""


class MemoryKeyValueStore(KeyValueStore):
    """In-process store; values live as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self._values: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._values.get(key)

    def set(self, key: str, data: bytes) -> None:
        self._values[key] = bytes(data)


class FileKeyValueStore(KeyValueStore):
    """File-backed store keeping one ``<key>.json`` file per key with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

    def set(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("wb") as handle:
                handle.write(data)
                handle.flush()
            # Path.replace is an atomic rename on POSIX.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"Invalid storage key {key!r}")
        return self._base_path / f"{key}.json"

    @property
    def base_path(self) -> Path:
        return self._base_path
