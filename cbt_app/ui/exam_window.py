"""Qt window in which a student takes one exam."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cbt_app.constants.exam_constants import TICK_INTERVAL_MS
from cbt_app.constants.ui_constants import (
    AUTO_SUBMIT_MESSAGE,
    EXAM_SUBMIT_BUTTON,
    EXAM_WINDOW_TITLE_TEMPLATE,
    MANUAL_SUBMIT_MESSAGE,
)
from cbt_app.core.keyboard import KeyboardController, ModalGate, ModalKind
from cbt_app.core.models import ExamResult
from cbt_app.core.services.exam_session import ExamSession, SessionEvent
from cbt_app.styling.styles import Styles
from cbt_app.ui.components.question_map_panel import QuestionMapPanel
from cbt_app.ui.components.question_panel import QuestionPanel
from cbt_app.ui.dialog_helpers import confirm_submit, show_info, show_shortcut_help

_SPECIAL_KEYS = {
    Qt.Key_Left: "ARROWLEFT",
    Qt.Key_Right: "ARROWRIGHT",
    Qt.Key_F1: "F1",
    Qt.Key_Escape: "ESCAPE",
}


class ExamWindow(QMainWindow):
    """Runs an ``ExamSession``: countdown, question map, answers and submission."""

    def __init__(
        self,
        session: ExamSession,
        candidate_name: str,
        on_finished: Callable[[ExamResult | None], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.session = session
        self.candidate_name = candidate_name
        self.on_finished = on_finished
        self._finished = False

        self._gate = ModalGate()
        self._controller = KeyboardController(
            session,
            self._gate,
            on_open_submit=self._open_submit_gate,
            on_toggle_help=self._handle_help_toggled,
        )

        self.setWindowTitle(EXAM_WINDOW_TITLE_TEMPLATE.format(title=session.exam.title))
        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self._unsubscribe = session.subscribe(self._handle_session_event)
        self._configure_tick_timer()
        self._refresh_question()
        self._refresh_timer_label()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        # Header: title, candidate, countdown, submit
        header = QWidget(self)
        header.setStyleSheet(Styles.get_header_style())
        header_row = QHBoxLayout()
        header.setLayout(header_row)

        title_column = QVBoxLayout()
        title_label = QLabel(self.session.exam.title, header)
        title_label.setStyleSheet(Styles.get_large_label_style())
        title_column.addWidget(title_label)
        candidate_label = QLabel(f"CANDIDATE: {self.candidate_name}", header)
        title_column.addWidget(candidate_label)
        header_row.addLayout(title_column)
        header_row.addStretch()

        self.timer_label = QLabel("", header)
        header_row.addWidget(self.timer_label)

        self.submit_button = QPushButton(EXAM_SUBMIT_BUTTON, header)
        self.submit_button.setFocusPolicy(Qt.NoFocus)
        self.submit_button.setStyleSheet(Styles.get_submit_button_style())
        self.submit_button.clicked.connect(self._open_submit_gate)
        header_row.addWidget(self.submit_button)
        root_layout.addWidget(header)

        body_row = QHBoxLayout()
        self.map_panel = QuestionMapPanel(
            self.session,
            on_jump=self.session.jump_to,
            on_help=self._open_help,
            parent=self,
        )
        body_row.addWidget(self.map_panel)

        self.question_panel = QuestionPanel(
            on_select_option=self.session.select_option,
            on_fill_gap=self._handle_fill_gap,
            on_navigate=self.session.navigate,
            parent=self,
        )
        body_row.addWidget(self.question_panel, stretch=1)
        root_layout.addLayout(body_row, stretch=1)

    def _configure_tick_timer(self) -> None:
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self.session.tick)
        self.tick_timer.start()

    # --- Session events ---

    def _handle_session_event(self, session: ExamSession, event: SessionEvent) -> None:
        if event is SessionEvent.TICKED:
            self._refresh_timer_label()
        elif event in (SessionEvent.ANSWER_SELECTED, SessionEvent.NAVIGATED):
            self._refresh_question()
        elif event is SessionEvent.SUBMITTED:
            self.tick_timer.stop()
            self.question_panel.set_enabled_for_input(False)
            self.submit_button.setEnabled(False)
            # Leave the current handler (possibly inside a dialog) before closing.
            QTimer.singleShot(0, self._finish_after_submit)

    def _refresh_question(self) -> None:
        question = self.session.current_question
        if question is None:
            self.question_panel.show_empty()
        else:
            self.question_panel.show_question(
                question,
                self.session.current_index,
                self.session.question_count,
                self.session.answer_for(question.id),
            )
        self.map_panel.refresh()

    def _refresh_timer_label(self) -> None:
        self.timer_label.setText(self.session.formatted_time_remaining)
        self.timer_label.setStyleSheet(Styles.get_timer_style(self.session.is_time_low))

    def _handle_fill_gap(self, text: str) -> None:
        self.session.enter_text(text)

    # --- Modal dialogs ---

    def _open_submit_gate(self) -> None:
        if self._gate.is_blocked or not self.session.is_in_progress:
            return
        with self._gate.modal(ModalKind.SUBMIT_CONFIRMATION):
            self.session.request_submit(lambda summary: confirm_submit(self, summary))

    def _open_help(self) -> None:
        if self._gate.is_blocked:
            return
        self._gate.push(ModalKind.HELP)
        self._handle_help_toggled(True)

    def _handle_help_toggled(self, visible: bool) -> None:
        if not visible:
            return
        # The dialog is modal and handles its own close keys.
        show_shortcut_help(self)
        self._gate.pop(ModalKind.HELP)

    # --- Qt events ---

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt override
        key_name = _SPECIAL_KEYS.get(event.key())
        if key_name is None and len(event.text()) == 1:
            key_name = event.text().upper()
        if key_name is not None and self._controller.dispatch(key_name):
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        if not self._finished and self.session.is_in_progress:
            reply = QMessageBox.question(
                self,
                "Leave exam",
                "Leave without submitting? No result will be recorded for this attempt.",
                QMessageBox.Yes | QMessageBox.No,
                QMessageBox.No,
            )
            if reply != QMessageBox.Yes:
                event.ignore()
                return
        self._teardown()
        super().closeEvent(event)
        if not self._finished:
            self._finished = True
            self.on_finished(self.session.result)

    def _finish_after_submit(self) -> None:
        result = self.session.result
        message = AUTO_SUBMIT_MESSAGE if result is not None and result.auto_submitted else MANUAL_SUBMIT_MESSAGE
        show_info(self, "Exam submitted", message)
        self._finished = True
        self._teardown()
        self.close()
        self.on_finished(result)

    def _teardown(self) -> None:
        self.tick_timer.stop()
        self._unsubscribe()
