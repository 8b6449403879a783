"""Utility helpers for docmanager."""

from .datetime import ensure_utc, utc_now

__all__ = ["ensure_utc", "utc_now"]
