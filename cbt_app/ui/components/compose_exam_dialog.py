"""Dialog for composing a new exam from the question bank."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from cbt_app.constants.exam_constants import DEFAULT_BLUEPRINT_COUNT, DEFAULT_DURATION_MINUTES
from cbt_app.core.models import BlueprintEntry, ExamConfig


class ComposeExamDialog(QDialog):
    """Collects title, class, duration, instructions and the per-subject blueprint."""

    def __init__(
        self,
        class_names: list[str],
        subject_counts: dict[str, int],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Compose Exam")
        self.setModal(True)
        self.setMinimumWidth(440)
        self._subject_spinboxes: dict[str, QSpinBox] = {}

        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()
        self.title_input = QLineEdit(self)
        form.addRow("Title:", self.title_input)

        self.class_combo = QComboBox(self)
        self.class_combo.setEditable(True)
        self.class_combo.addItems(class_names)
        form.addRow("Class:", self.class_combo)

        self.duration_spinbox = QSpinBox(self)
        self.duration_spinbox.setRange(1, 600)
        self.duration_spinbox.setValue(DEFAULT_DURATION_MINUTES)
        self.duration_spinbox.setSuffix(" min")
        form.addRow("Duration:", self.duration_spinbox)

        self.instructions_input = QPlainTextEdit(self)
        self.instructions_input.setFixedHeight(70)
        form.addRow("Instructions:", self.instructions_input)
        layout.addLayout(form)

        blueprint_group = QGroupBox("Questions per subject (0 = not included)", self)
        blueprint_form = QFormLayout()
        blueprint_group.setLayout(blueprint_form)
        for subject, available in subject_counts.items():
            spinbox = QSpinBox(self)
            spinbox.setRange(0, 500)
            spinbox.setValue(min(DEFAULT_BLUEPRINT_COUNT, available))
            spinbox.setToolTip(f"{available} question(s) in the bank")
            blueprint_form.addRow(f"{subject} ({available}):", spinbox)
            self._subject_spinboxes[subject] = spinbox
        layout.addWidget(blueprint_group)

        self.shuffle_checkbox = QCheckBox("Shuffle question order per student", self)
        layout.addWidget(self.shuffle_checkbox)

        button_row = QHBoxLayout()
        button_row.addStretch()
        cancel_button = QPushButton("Cancel", self)
        cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(cancel_button)
        create_button = QPushButton("Create", self)
        create_button.setDefault(True)
        create_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        button_row.addWidget(create_button)
        layout.addLayout(button_row)

    def get_title(self) -> str:
        return self.title_input.text()

    def get_class_name(self) -> str:
        return self.class_combo.currentText()

    def get_duration_minutes(self) -> int:
        return self.duration_spinbox.value()

    def get_instructions(self) -> str:
        return self.instructions_input.toPlainText()

    def get_blueprint(self) -> list[BlueprintEntry]:
        return [
            BlueprintEntry(subject=subject, question_count=spinbox.value())
            for subject, spinbox in self._subject_spinboxes.items()
            if spinbox.value() > 0
        ]

    def get_config(self) -> ExamConfig:
        return ExamConfig(shuffle_questions=self.shuffle_checkbox.isChecked())
