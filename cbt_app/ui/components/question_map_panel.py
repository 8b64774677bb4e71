"""Sidebar showing every question grouped by subject."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from cbt_app.constants.ui_constants import SIDEBAR_TITLE
from cbt_app.core.services.exam_session import ExamSession, QuestionMapStatus
from cbt_app.styling.styles import Styles

_COLUMNS = 5


class QuestionMapPanel(QWidget):
    """Grid of question buttons coloured by current / answered / unanswered."""

    def __init__(
        self,
        session: ExamSession,
        on_jump: Callable[[int], None],
        on_help: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.session = session
        self.on_jump = on_jump
        self.on_help = on_help
        self._buttons: dict[str, QPushButton] = {}

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        self.setMinimumWidth(260)

        title_label = QLabel(SIDEBAR_TITLE.upper(), self)
        title_label.setStyleSheet("font-weight: bold; color: #64748B;")
        layout.addWidget(title_label)

        help_button = QPushButton("Keyboard help (F1)", self)
        help_button.setFocusPolicy(Qt.NoFocus)
        help_button.clicked.connect(self.on_help)
        layout.addWidget(help_button)

        container = QWidget(self)
        container_layout = QVBoxLayout()
        container.setLayout(container_layout)

        for subject, entries in self.session.questions_by_subject().items():
            group = QGroupBox(f"► {subject}", container)
            grid = QGridLayout()
            group.setLayout(grid)
            for local_index, (global_index, question) in enumerate(entries):
                button = QPushButton(str(local_index + 1), group)
                button.setFixedSize(36, 30)
                button.setFocusPolicy(Qt.NoFocus)
                button.clicked.connect(lambda _=False, idx=global_index: self.on_jump(idx))
                grid.addWidget(button, local_index // _COLUMNS, local_index % _COLUMNS)
                self._buttons[question.id] = button
            container_layout.addWidget(group)
        container_layout.addStretch()

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(container)
        layout.addWidget(scroll, stretch=1)

        for status, text in (
            (QuestionMapStatus.ANSWERED, "Answered"),
            (QuestionMapStatus.CURRENT, "Current Question"),
            (QuestionMapStatus.UNANSWERED, "Unanswered"),
        ):
            legend = QLabel(f"  {text}", self)
            legend.setStyleSheet(Styles.get_map_button_style(status) + " padding: 2px;")
            layout.addWidget(legend)

    def refresh(self) -> None:
        for question_id, button in self._buttons.items():
            button.setStyleSheet(Styles.get_map_button_style(self.session.status_of(question_id)))
