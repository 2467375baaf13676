"""Tests for the fingerprint store."""

from __future__ import annotations

import hashlib
import json
import os
from pathlib import Path

from kiln.models import CacheEntry
from kiln.stores import FingerprintCache, compute_fingerprint


def test_fingerprint_cache_round_trip(tmp_path: Path) -> None:
    cache_path = tmp_path / "kiln-cache.json"
    cache = FingerprintCache(cache_path)
    cache.store("Main.java", CacheEntry(hash="a" * 64, class_path="out/Main.class"))
    cache.store("Helper.java", CacheEntry(hash="b" * 64, class_path="out/Helper.class"))
    assert cache.persist() is True

    loaded = FingerprintCache(cache_path)

    assert loaded.entries() == cache.entries()
    assert loaded.get("Main.java") == CacheEntry(hash="a" * 64, class_path="out/Main.class")


def test_fingerprint_cache_file_format(tmp_path: Path) -> None:
    cache_path = tmp_path / "kiln-cache.json"
    cache = FingerprintCache(cache_path)
    cache.store("Main.java", CacheEntry(hash="abc", class_path="out/Main.class"))
    cache.persist()

    text = cache_path.read_text(encoding="utf-8")
    assert "\n  " in text
    assert json.loads(text) == {"Main.java": {"hash": "abc", "class_path": "out/Main.class"}}


def test_fingerprint_cache_missing_file_is_empty(tmp_path: Path) -> None:
    cache = FingerprintCache(tmp_path / "absent.json")

    assert len(cache) == 0
    assert cache.get("Main.java") is None


def test_fingerprint_cache_ignores_corrupt_file(tmp_path: Path, caplog) -> None:
    cache_path = tmp_path / "kiln-cache.json"
    cache_path.write_text("{not json", encoding="utf-8")

    cache = FingerprintCache(cache_path)

    assert len(cache) == 0
    assert "Ignoring unreadable cache" in caplog.text


def test_fingerprint_cache_drops_malformed_entries(tmp_path: Path) -> None:
    cache_path = tmp_path / "kiln-cache.json"
    cache_path.write_text(
        json.dumps(
            {
                "Good.java": {"hash": "h", "class_path": "out/Good.class"},
                "NoPath.java": {"hash": "h"},
                "Wrong.java": ["h", "out/Wrong.class"],
            }
        ),
        encoding="utf-8",
    )

    cache = FingerprintCache(cache_path)

    assert set(cache.entries()) == {"Good.java"}


def test_fingerprint_cache_persist_leaves_no_temp_files(tmp_path: Path) -> None:
    cache_path = tmp_path / "nested" / "kiln-cache.json"
    cache = FingerprintCache(cache_path)
    cache.store("Main.java", CacheEntry(hash="h", class_path="out/Main.class"))
    cache.persist()

    assert sorted(os.listdir(cache_path.parent)) == ["kiln-cache.json"]


def test_fingerprint_cache_write_failure_is_logged(tmp_path: Path, caplog) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    cache = FingerprintCache(blocker / "kiln-cache.json")
    cache.store("Main.java", CacheEntry(hash="h", class_path="out/Main.class"))

    assert cache.persist() is False
    assert "Failed to save cache" in caplog.text


def test_compute_fingerprint_depends_only_on_bytes(tmp_path: Path) -> None:
    first = tmp_path / "one" / "Main.java"
    second = tmp_path / "two" / "Other.java"
    first.parent.mkdir()
    second.parent.mkdir()
    payload = b"public class Main {}\n"
    first.write_bytes(payload)
    second.write_bytes(payload)
    os.utime(second, (0, 0))

    assert compute_fingerprint(first) == compute_fingerprint(second)
    assert compute_fingerprint(first) == hashlib.sha256(payload).hexdigest()

    first.write_bytes(payload + b"\n")
    assert compute_fingerprint(first) != compute_fingerprint(second)
