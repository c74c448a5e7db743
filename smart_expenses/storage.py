"""Key-value blob stores backing the ledger snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .exceptions import PersistenceError, StoreReadFailure


class FileBlobStore:
    """File-based blob store with crash-safe writes, one ``<key>.json`` file per key."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return handle.read()
        except UnicodeDecodeError as exc:
            raise StoreReadFailure(f"Undecodable data in {path}") from exc
        except OSError as exc:
            raise StoreReadFailure(f"Unable to read from {path}") from exc

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(blob)
                handle.flush()
            # Use replace for atomic move on POSIX; readers never see a partial file.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc

    def path_for(self, key: str) -> Path:
        return self._base_path / f"{key}.json"

    @property
    def base_path(self) -> Path:
        return self._base_path


class MemoryBlobStore:
    """Dict-backed blob store for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._blobs: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob
        self.writes += 1
