"""Service that holds created exam instances and their assignments."""

from __future__ import annotations

from cbt_app.core.models import ExamInstance, ExamStatus


class ExamNotFoundError(LookupError):
    """Raised when an exam id is not in the catalog."""


def is_assigned(student_id: str, exam: ExamInstance) -> bool:
    """Return True when the student may attempt the exam."""
    return student_id in exam.assigned_student_ids


class ExamCatalog:
    """Registry of exam instances keyed by id."""

    def __init__(self) -> None:
        self._exams: dict[str, ExamInstance] = {}

    def add_exam(self, exam: ExamInstance) -> None:
        if exam.id in self._exams:
            raise ValueError(f"Exam id {exam.id!r} already exists.")
        self._exams[exam.id] = exam

    def get_exam(self, exam_id: str) -> ExamInstance:
        try:
            return self._exams[exam_id]
        except KeyError:
            raise ExamNotFoundError(f"Exam {exam_id!r} does not exist.") from None

    def get_exams(self) -> list[ExamInstance]:
        return list(self._exams.values())

    def set_status(self, exam_id: str, status: ExamStatus) -> None:
        self.get_exam(exam_id).status = status

    def exams_for_student(self, student_id: str) -> list[ExamInstance]:
        return [exam for exam in self._exams.values() if is_assigned(student_id, exam)]

    def remove_exam(self, exam_id: str) -> None:
        self._exams.pop(exam_id, None)
