"""Helper functions for common dialog patterns in the exam UI."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cbt_app.constants.ui_constants import (
    SHORTCUT_HELP_TITLE,
    SUBMIT_CONFIRM_TEMPLATE,
    SUBMIT_CONFIRM_TITLE,
)
from cbt_app.core.keyboard import SHORTCUT_REFERENCE
from cbt_app.core.services.exam_session import SubmitSummary
from cbt_app.utils.time_format import format_remaining


def confirm_submit(parent: QWidget, summary: SubmitSummary) -> bool:
    """Show the submit confirmation gate.

    Args:
        parent: Parent widget for the dialog
        summary: Answered/unanswered figures of the running session

    Returns:
        True if the student confirmed, False otherwise
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Warning)
    msg_box.setWindowTitle(SUBMIT_CONFIRM_TITLE)
    msg_box.setText(
        SUBMIT_CONFIRM_TEMPLATE.format(
            unanswered=summary.unanswered,
            time_remaining=format_remaining(summary.time_remaining),
        )
    )
    submit_button = msg_box.addButton("Yes, Submit Exam", QMessageBox.AcceptRole)
    return_button = msg_box.addButton("No, Return to Exam", QMessageBox.RejectRole)
    msg_box.setDefaultButton(return_button)
    msg_box.exec()
    return msg_box.clickedButton() is submit_button


class ShortcutHelpDialog(QDialog):
    """Keyboard reference; closes on Escape, F1 or the Close button."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(SHORTCUT_HELP_TITLE)
        self.setModal(True)
        self.setMinimumWidth(360)

        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()
        for label, keys in SHORTCUT_REFERENCE:
            key_label = QLabel(keys, self)
            key_label.setStyleSheet("font-family: monospace; font-weight: bold;")
            form.addRow(label, key_label)
        layout.addLayout(form)

        close_button = QPushButton("Close", self)
        close_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        layout.addWidget(close_button, alignment=Qt.AlignRight)

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt override
        if event.key() == Qt.Key_F1:
            self.accept()
            return
        super().keyPressEvent(event)


def show_shortcut_help(parent: QWidget) -> None:
    ShortcutHelpDialog(parent).exec()


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog."""
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    """Show information dialog."""
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog."""
    QMessageBox.warning(parent, title, message)
