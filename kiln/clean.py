"""Removal of build artifacts and the fingerprint store."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .config import KilnConfig
from .errors import KilnError
from .logging import get_logger


def clean(config: KilnConfig) -> List[Path]:
    """Delete the output directory and cache file; return what was removed."""
    logger = get_logger("clean")
    removed: List[Path] = []

    if config.out_dir.exists():
        try:
            shutil.rmtree(config.out_dir)
        except OSError as exc:
            raise KilnError(f"Failed to remove output directory: {exc}") from exc
        removed.append(config.out_dir)

    if config.cache_file.exists():
        try:
            config.cache_file.unlink()
        except OSError as exc:
            raise KilnError(f"Failed to remove cache file: {exc}") from exc
        removed.append(config.cache_file)

    if removed:
        logger.info("Cleaned build artifacts:")
        for path in removed:
            logger.info("  %s", path)
    else:
        logger.info("Nothing to clean")
    return removed


__all__ = ["clean"]
