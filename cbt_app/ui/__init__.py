"""Qt UI components for the exam client."""

from .dialog_helpers import (
    confirm_submit,
    show_error,
    show_info,
    show_shortcut_help,
    show_warning,
)
from .exam_window import ExamWindow
from .portal_window import PortalWindow
from .question_renderer import render_question

__all__ = [
    "ExamWindow",
    "PortalWindow",
    "confirm_submit",
    "show_error",
    "show_info",
    "show_shortcut_help",
    "show_warning",
    "render_question",
]
