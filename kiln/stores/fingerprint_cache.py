"""Persistent fingerprint store for compiled sources."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from ..logging import get_logger
from ..models import CacheEntry

_CHUNK_SIZE = 1 << 16

logger = get_logger("cache")


def compute_fingerprint(path: Path) -> str:
    """Return the lowercase hex SHA-256 of the file's raw bytes."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class FingerprintCache:
    """Stores source fingerprints and artifact paths keyed by leaf filename."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, CacheEntry] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, name: str) -> Optional[CacheEntry]:
        return self._entries.get(name)

    def store(self, name: str, entry: CacheEntry) -> None:
        self._entries[name] = entry
        self._dirty = True

    def entries(self) -> Dict[str, CacheEntry]:
        return dict(self._entries)

    def persist(self) -> bool:
        """Write the store atomically; return False when the write failed."""
        if not self._dirty or self._path is None:
            return True
        payload = {
            name: {"hash": entry.hash, "class_path": entry.class_path}
            for name, entry in self._entries.items()
        }
        try:
            self._write_atomic(self._path, json.dumps(payload, indent=2, sort_keys=True))
        except OSError as exc:
            logger.warning("Failed to save cache %s: %s", self._path, exc)
            return False
        self._dirty = False
        return True

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable cache %s: %s", path, exc)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring cache %s: expected a JSON object", path)
            return
        valid_entries: Dict[str, CacheEntry] = {}
        for key, raw in data.items():
            if not isinstance(key, str) or not isinstance(raw, dict):
                continue
            file_hash = raw.get("hash")
            class_path = raw.get("class_path")
            if not isinstance(file_hash, str) or not isinstance(class_path, str):
                logger.debug("Dropping malformed cache entry for %s", key)
                continue
            valid_entries[key] = CacheEntry(hash=file_hash, class_path=class_path)
        self._entries = valid_entries
        self._dirty = False

    @staticmethod
    def _write_atomic(path: Path, text: str) -> None:
        directory = path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise


__all__ = ["FingerprintCache", "compute_fingerprint"]
