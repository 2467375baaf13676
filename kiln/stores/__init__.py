"""Persistent stores used across kiln builds."""

from .fingerprint_cache import FingerprintCache, compute_fingerprint

__all__ = ["FingerprintCache", "compute_fingerprint"]
