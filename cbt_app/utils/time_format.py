"""Formatting helpers for the exam countdown."""

from __future__ import annotations


def format_remaining(total_seconds: int) -> str:
    """Render remaining seconds as ``HH:MM:SS``."""
    total_seconds = max(0, int(total_seconds))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
