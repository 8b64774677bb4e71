"""Qt main window: pick a candidate, start exams and review their history."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import Qt

from cbt_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from cbt_app.constants.ui_constants import (
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    PORTAL_AVAILABLE_TITLE,
    PORTAL_COMPLETED_TITLE,
    PORTAL_IMPORT_BUTTON,
    PORTAL_NO_EXAMS,
    PORTAL_NO_RESULTS,
    PORTAL_START_BUTTON,
    PORTAL_STUDENT_LABEL,
    PORTAL_WINDOW_TITLE,
)
from cbt_app.core.exam_manager import ExamAccessError, ExamManager, ExamNotFoundError
from cbt_app.core.grading import has_passed, percentage
from cbt_app.core.models import ExamResult
from cbt_app.core.question_importer import QuestionImportError, load_questions_from_file
from cbt_app.styling.styles import Styles
from cbt_app.ui.components.compose_exam_dialog import ComposeExamDialog
from cbt_app.ui.dialog_helpers import show_error, show_info, show_warning
from cbt_app.ui.exam_window import ExamWindow
from cbt_app.utils.time_format import format_remaining

_RESULT_COLUMNS = ("Exam", "Score", "Percentage", "Verdict", "Submitted")


class PortalWindow(QMainWindow):
    """Student dashboard plus the question bank and exam composition actions."""

    def __init__(self, exam_manager: ExamManager, results_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(PORTAL_WINDOW_TITLE)
        self.exam_manager = exam_manager
        self.results_url = results_url
        self._exam_window: ExamWindow | None = None

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self._reload_students()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        central_widget.setLayout(layout)

        top_row = QHBoxLayout()
        top_row.addWidget(QLabel(PORTAL_STUDENT_LABEL, self))
        self.student_combo = QComboBox(self)
        self.student_combo.currentIndexChanged.connect(self._refresh_dashboard)
        top_row.addWidget(self.student_combo, stretch=1)

        self.import_button = QPushButton(PORTAL_IMPORT_BUTTON, self)
        self.import_button.clicked.connect(self._handle_import_questions)
        top_row.addWidget(self.import_button)

        self.compose_button = QPushButton("Compose Exam", self)
        self.compose_button.clicked.connect(self._handle_compose_exam)
        top_row.addWidget(self.compose_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        top_row.addWidget(self.help_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        top_row.addWidget(self.about_button)
        layout.addLayout(top_row)

        if self.results_url:
            url_label = QLabel(f"Results API: {self.results_url}", self)
            url_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
            layout.addWidget(url_label)

        available_group = QGroupBox(PORTAL_AVAILABLE_TITLE, self)
        available_layout = QVBoxLayout()
        available_group.setLayout(available_layout)
        self.exam_list = QListWidget(self)
        self.exam_list.itemDoubleClicked.connect(lambda _item: self._handle_start_exam())
        available_layout.addWidget(self.exam_list)
        self.start_button = QPushButton(PORTAL_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start_exam)
        available_layout.addWidget(self.start_button)
        layout.addWidget(available_group, stretch=1)

        completed_group = QGroupBox(PORTAL_COMPLETED_TITLE, self)
        completed_layout = QVBoxLayout()
        completed_group.setLayout(completed_layout)
        self.results_table = QTableWidget(0, len(_RESULT_COLUMNS), self)
        self.results_table.setHorizontalHeaderLabels(list(_RESULT_COLUMNS))
        self.results_table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.results_table.horizontalHeader().setStretchLastSection(True)
        completed_layout.addWidget(self.results_table)
        layout.addWidget(completed_group, stretch=1)

    # --- Dashboard ---

    def _reload_students(self) -> None:
        self.student_combo.blockSignals(True)
        self.student_combo.clear()
        for student in self.exam_manager.get_students():
            self.student_combo.addItem(f"{student.name} ({student.class_name})", student.id)
        self.student_combo.blockSignals(False)
        self._refresh_dashboard()

    def _selected_student_id(self) -> str | None:
        return self.student_combo.currentData()

    def _refresh_dashboard(self) -> None:
        self.exam_list.clear()
        self.results_table.setRowCount(0)
        student_id = self._selected_student_id()
        if student_id is None:
            self.start_button.setEnabled(False)
            return

        exams = self.exam_manager.available_exams(student_id)
        for exam in exams:
            item = QListWidgetItem(
                f"{exam.title} - {exam.question_count} questions, "
                f"{format_remaining(exam.duration_seconds)}"
            )
            item.setData(Qt.UserRole, exam.id)
            self.exam_list.addItem(item)
        if not exams:
            placeholder = QListWidgetItem(PORTAL_NO_EXAMS)
            placeholder.setFlags(Qt.NoItemFlags)
            self.exam_list.addItem(placeholder)
        self.start_button.setEnabled(bool(exams))

        results = self.exam_manager.completed_results(student_id)
        if not results:
            self.results_table.setRowCount(1)
            self.results_table.setItem(0, 0, QTableWidgetItem(PORTAL_NO_RESULTS))
            return
        self.results_table.setRowCount(len(results))
        for row, result in enumerate(results):
            self._fill_result_row(row, result)

    def _fill_result_row(self, row: int, result: ExamResult) -> None:
        try:
            title = self.exam_manager.get_exam(result.exam_id).title
        except ExamNotFoundError:
            title = "Unknown"
        percent = percentage(result.score, result.total_questions)
        passed = has_passed(percent)
        verdict = QLabel("PASSED" if passed else "FAILED", self.results_table)
        verdict.setStyleSheet(Styles.get_verdict_style(passed))
        self.results_table.setCellWidget(row, 3, verdict)
        cells = (
            QTableWidgetItem(title),
            QTableWidgetItem(f"{result.score} / {result.total_questions}"),
            QTableWidgetItem(f"{percent}%"),
            QTableWidgetItem(),
            QTableWidgetItem(result.submitted_at.astimezone().strftime("%Y-%m-%d %H:%M")),
        )
        for column, cell in enumerate(cells):
            self.results_table.setItem(row, column, cell)

    # --- Actions ---

    def _handle_start_exam(self) -> None:
        student_id = self._selected_student_id()
        item = self.exam_list.currentItem()
        exam_id = item.data(Qt.UserRole) if item is not None else None
        if student_id is None or exam_id is None:
            show_warning(self, "No exam selected", "Select an exam to start.")
            return

        exam = self.exam_manager.get_exam(exam_id)
        reply = QMessageBox.question(
            self,
            exam.title,
            f"{exam.instructions or 'No special instructions.'}\n\n"
            f"Questions: {exam.question_count}\n"
            f"Duration: {format_remaining(exam.duration_seconds)}\n\n"
            "The timer starts as soon as you begin. Start now?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if reply != QMessageBox.Yes:
            return

        try:
            session = self.exam_manager.start_session(exam_id, student_id)
        except (ExamAccessError, ExamNotFoundError) as exc:
            show_error(self, "Cannot start exam", str(exc))
            return

        student = self.exam_manager.get_student(student_id)
        self._exam_window = ExamWindow(
            session,
            candidate_name=student.name if student else student_id,
            on_finished=self._handle_exam_finished,
        )
        self._exam_window.showMaximized()
        self.hide()

    def _handle_exam_finished(self, _result: ExamResult | None) -> None:
        self._exam_window = None
        self._refresh_dashboard()
        self.show()

    def _handle_import_questions(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return
        try:
            imported = load_questions_from_file(Path(file_path))
            self.exam_manager.add_questions(imported.questions)
        except (OSError, QuestionImportError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        except ValueError as exc:
            show_error(self, "Questions rejected", str(exc))
            return
        show_info(
            self,
            "Question bank imported",
            f"Added {len(imported.questions)} questions. "
            f"The bank now holds {self.exam_manager.get_question_count()} questions.",
        )

    def _handle_compose_exam(self) -> None:
        subjects = self.exam_manager.get_subjects()
        if not subjects:
            show_warning(self, "Empty question bank", "Import questions before composing an exam.")
            return
        questions = self.exam_manager.get_questions()
        subject_counts = {s: sum(1 for q in questions if q.subject == s) for s in subjects}
        class_names = sorted({s.class_name for s in self.exam_manager.get_students()})

        dialog = ComposeExamDialog(class_names, subject_counts, self)
        if not dialog.exec():
            return
        try:
            exam = self.exam_manager.create_exam(
                title=dialog.get_title(),
                class_name=dialog.get_class_name(),
                duration_minutes=dialog.get_duration_minutes(),
                instructions=dialog.get_instructions(),
                blueprint=dialog.get_blueprint(),
                config=dialog.get_config(),
            )
        except ValueError as exc:
            show_error(self, "Exam not created", str(exc))
            return
        show_info(
            self,
            "Exam created",
            f'Exam "{exam.title}" created with {exam.question_count} questions '
            f"for {len(exam.assigned_student_ids)} students.",
        )
        self._refresh_dashboard()

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_about(self) -> None:
        show_info(
            self,
            f"About {APP_NAME}",
            f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}",
        )
