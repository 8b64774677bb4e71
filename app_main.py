"""Application entry point for the ExamQt CBT client."""

from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from cbt_app.constants.about import APP_NAME
from cbt_app.constants.exam_constants import DEFAULT_QUESTION_BANK_PATH
from cbt_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from cbt_app.core.exam_manager import ExamManager
from cbt_app.core.models import ExamConfig, blueprint_from_mapping
from cbt_app.core.question_importer import load_questions_from_file
from cbt_app.server.api_server import start_api_server
from cbt_app.ui.portal_window import PortalWindow
from cbt_app.utils.logging_config import configure_logging

_DEMO_STUDENTS = (
    ("s1", "John Doe", "JSS1"),
    ("s2", "Jane Smith", "JSS1"),
    ("s3", "Michael Brown", "JSS1"),
)


def seed_demo_data(exam_manager: ExamManager) -> None:
    """Load the bundled question bank, a JSS1 roster and one active exam."""
    bank_path = Path(__file__).resolve().parent / DEFAULT_QUESTION_BANK_PATH
    exam_manager.load_questions(load_questions_from_file(bank_path).questions)
    for student_id, name, class_name in _DEMO_STUDENTS:
        exam_manager.register_student(name, class_name, student_id=student_id)
    exam_manager.create_exam(
        title="First Term Examination 2024",
        class_name="JSS1",
        duration_minutes=120,
        instructions="Answer all questions carefully.",
        blueprint=blueprint_from_mapping({"Mathematics": 3, "English": 3, "Physics": 2}),
        config=ExamConfig(shuffle_questions=True),
        exam_id="ex1",
    )


def main() -> None:
    """Initialize logging, seed data, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting %s...", APP_NAME)

    exam_manager = ExamManager()
    seed_demo_data(exam_manager)
    start_api_server(exam_manager=exam_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    results_url = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}/results"
    logger.info("Result review API available at %s", results_url)

    app = QApplication(sys.argv)
    window = PortalWindow(exam_manager=exam_manager, results_url=results_url)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
