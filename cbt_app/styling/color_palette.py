"""Color palette for ExamQt supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#1E293B", dark="#F1F5F9")
    TEXT_MUTED = ThemeColors(light="#64748B", dark="#94A3B8")

    BACKGROUND_PRIMARY = ThemeColors(light="#F1F5F9", dark="#0F172A")
    BACKGROUND_CARD = ThemeColors(light="#FFFFFF", dark="#1E293B")
    BORDER_PRIMARY = ThemeColors(light="#CBD5E1", dark="#334155")

    # Exam header and countdown
    HEADER_BG = ThemeColors(light="#0F172A", dark="#020617")
    HEADER_TEXT = ThemeColors(light="#FFFFFF", dark="#F8FAFC")
    TIMER_BG = ThemeColors(light="#1E293B", dark="#1E293B")
    TIMER_LOW_BG = ThemeColors(light="#7F1D1D", dark="#991B1B")  # under five minutes
    SUBMIT_BG = ThemeColors(light="#DC2626", dark="#EF4444")

    # Question map sidebar
    MAP_CURRENT = ThemeColors(light="#2563EB", dark="#3B82F6")
    MAP_ANSWERED = ThemeColors(light="#22C55E", dark="#16A34A")
    MAP_UNANSWERED_TEXT = ThemeColors(light="#EF4444", dark="#F87171")

    # Options
    OPTION_SELECTED_BG = ThemeColors(light="#EFF6FF", dark="#1E3A8A")
    OPTION_SELECTED_BORDER = ThemeColors(light="#2563EB", dark="#60A5FA")

    PASSED = ThemeColors(light="#15803D", dark="#4ADE80")
    FAILED = ThemeColors(light="#B91C1C", dark="#F87171")
