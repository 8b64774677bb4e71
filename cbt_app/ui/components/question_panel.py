"""Component displaying the current question and its answer controls."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cbt_app.constants.ui_constants import (
    EXAM_FILL_GAP_PLACEHOLDER,
    EXAM_KEY_HINT,
    EXAM_NEXT_BUTTON,
    EXAM_PREV_BUTTON,
)
from cbt_app.core.models import OPTION_LETTERS, Question
from cbt_app.core.services.exam_session import Direction
from cbt_app.styling.styles import Styles
from cbt_app.ui.question_renderer import render_question


class QuestionPanel(QWidget):
    """Question view with option buttons, a fill-gap entry and navigation."""

    def __init__(
        self,
        on_select_option: Callable[[int], None],
        on_fill_gap: Callable[[str], None],
        on_navigate: Callable[[Direction], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_select_option = on_select_option
        self.on_fill_gap = on_fill_gap
        self.on_navigate = on_navigate
        self._font_size: int = 14

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.question_view = QWebEngineView(self)
        self.question_view.setFocusPolicy(Qt.NoFocus)
        layout.addWidget(self.question_view, stretch=2)

        self.option_buttons: list[QPushButton] = []
        for position, letter in enumerate(OPTION_LETTERS):
            button = QPushButton(letter, self)
            button.setFocusPolicy(Qt.NoFocus)
            button.clicked.connect(lambda _=False, pos=position: self.on_select_option(pos))
            layout.addWidget(button)
            self.option_buttons.append(button)

        self.fill_gap_input = QLineEdit(self)
        self.fill_gap_input.setPlaceholderText(EXAM_FILL_GAP_PLACEHOLDER)
        self.fill_gap_input.textEdited.connect(self.on_fill_gap)
        self.fill_gap_input.returnPressed.connect(self.fill_gap_input.clearFocus)
        layout.addWidget(self.fill_gap_input)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(EXAM_PREV_BUTTON, self)
        self.prev_button.setFocusPolicy(Qt.NoFocus)
        self.prev_button.clicked.connect(lambda: self.on_navigate(Direction.PREVIOUS))
        nav_row.addWidget(self.prev_button)

        nav_row.addStretch()
        hint = QLabel(EXAM_KEY_HINT, self)
        hint.setStyleSheet("color: #94A3B8; font-family: monospace;")
        nav_row.addWidget(hint)
        nav_row.addStretch()

        self.next_button = QPushButton(EXAM_NEXT_BUTTON, self)
        self.next_button.setFocusPolicy(Qt.NoFocus)
        self.next_button.clicked.connect(lambda: self.on_navigate(Direction.NEXT))
        nav_row.addWidget(self.next_button)
        layout.addLayout(nav_row)

    def show_empty(self) -> None:
        self.question_view.setHtml("<p>This exam has no questions.</p>")
        for button in self.option_buttons:
            button.setVisible(False)
        self.fill_gap_input.setVisible(False)
        self.prev_button.setEnabled(False)
        self.next_button.setEnabled(False)

    def show_question(
        self,
        question: Question,
        index: int,
        total: int,
        selected_token: str | None,
    ) -> None:
        self.question_view.setHtml(render_question(question, index + 1, total, self._font_size))

        for position, button in enumerate(self.option_buttons):
            visible = question.is_choice and position < len(question.options)
            button.setVisible(visible)
            if not visible:
                continue
            letter = OPTION_LETTERS[position]
            button.setText(f"{letter}.  {question.options[position]}")
            button.setStyleSheet(Styles.get_option_button_style(selected_token == letter))

        self.fill_gap_input.setVisible(not question.is_choice)
        # Leave the field alone while it already shows the recorded answer, so
        # the cursor and trailing spaces survive each keystroke.
        if not question.is_choice and self.fill_gap_input.text().strip() != (selected_token or ""):
            self.fill_gap_input.setText(selected_token or "")

        self.prev_button.setEnabled(index > 0)
        self.next_button.setEnabled(index < total - 1)

    def set_enabled_for_input(self, enabled: bool) -> None:
        for button in self.option_buttons:
            button.setEnabled(enabled)
        self.fill_gap_input.setEnabled(enabled)
        self.prev_button.setEnabled(enabled and self.prev_button.isEnabled())
        self.next_button.setEnabled(enabled and self.next_button.isEnabled())
