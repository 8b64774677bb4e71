"""Business logic for exams shared between the UI and the API."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import hashlib
import logging
import random
from threading import Lock
from uuid import uuid4

from cbt_app.core.grading import ResultAnalysis, analyze_result
from cbt_app.core.interfaces import Clock
from cbt_app.core.models import (
    BlueprintEntry,
    ExamConfig,
    ExamInstance,
    ExamResult,
    ExamStatus,
    Question,
    Student,
)
from cbt_app.core.services.exam_catalog import ExamCatalog, ExamNotFoundError, is_assigned
from cbt_app.core.services.exam_composer import ExamComposer
from cbt_app.core.services.exam_session import ExamSession
from cbt_app.core.services.question_bank import QuestionBank
from cbt_app.core.services.result_store import ResultStore
from cbt_app.core.services.student_roster import StudentRoster

logger = logging.getLogger(__name__)

__all__ = ["ExamAccessError", "ExamManager", "ExamNotFoundError"]


class ExamAccessError(RuntimeError):
    """Raised when a student may not start the requested exam."""


class ExamManager:
    """Facade for exam services: QuestionBank, StudentRoster, ExamCatalog,
    ExamComposer and ResultStore."""

    def __init__(self, composer: ExamComposer | None = None, clock: Clock | None = None) -> None:
        self._lock = Lock()

        # Services
        self._bank = QuestionBank()
        self._roster = StudentRoster()
        self._catalog = ExamCatalog()
        self._results = ResultStore()
        self._composer = composer or ExamComposer()
        self._clock = clock

    # --- Question Bank Delegation ---

    def load_questions(self, questions: Iterable[Question]) -> None:
        with self._lock:
            self._bank.load_questions(questions)

    def add_question(self, question: Question) -> Question:
        with self._lock:
            return self._bank.add_question(question)

    def add_questions(self, questions: Iterable[Question]) -> list[Question]:
        with self._lock:
            return self._bank.add_questions(questions)

    def get_questions(self) -> list[Question]:
        with self._lock:
            return self._bank.get_questions()

    def get_question_count(self) -> int:
        with self._lock:
            return self._bank.get_question_count()

    def get_subjects(self) -> list[str]:
        with self._lock:
            return self._bank.get_subjects()

    # --- Roster Delegation ---

    def register_student(self, name: str, class_name: str, student_id: str | None = None) -> Student:
        with self._lock:
            return self._roster.register_student(name, class_name, student_id)

    def get_students(self) -> list[Student]:
        with self._lock:
            return self._roster.get_students()

    def get_student(self, student_id: str) -> Student | None:
        with self._lock:
            return self._roster.get_student(student_id)

    def students_in_class(self, class_name: str) -> list[Student]:
        with self._lock:
            return self._roster.students_in_class(class_name)

    # --- Exam Catalog ---

    def create_exam(
        self,
        title: str,
        class_name: str,
        duration_minutes: int,
        instructions: str,
        blueprint: Sequence[BlueprintEntry],
        assigned_student_ids: Iterable[str] | None = None,
        config: ExamConfig | None = None,
        status: ExamStatus = ExamStatus.ACTIVE,
        exam_id: str | None = None,
    ) -> ExamInstance:
        """Compose and register a new exam.

        The question sequence is materialized once here and shared by every
        assigned student. Without explicit assignees, every rostered student
        of ``class_name`` is assigned.
        """
        cleaned_title = title.strip()
        if not cleaned_title:
            raise ValueError("Exam title must not be empty.")
        if not class_name.strip():
            raise ValueError("Exam class must not be empty.")
        if duration_minutes <= 0:
            raise ValueError("Exam duration must be a positive number of minutes.")
        if not blueprint:
            raise ValueError("Exam blueprint must name at least one subject.")
        seen_subjects: set[str] = set()
        for entry in blueprint:
            if entry.subject in seen_subjects:
                raise ValueError(f"Blueprint lists subject {entry.subject!r} more than once.")
            seen_subjects.add(entry.subject)

        with self._lock:
            questions = self._composer.compose(self._bank.get_questions(), blueprint)
            if assigned_student_ids is None:
                assignees = frozenset(s.id for s in self._roster.students_in_class(class_name))
            else:
                assignees = frozenset(assigned_student_ids)
            exam = ExamInstance(
                id=exam_id or uuid4().hex,
                title=cleaned_title,
                class_name=class_name.strip(),
                duration_minutes=duration_minutes,
                instructions=instructions.strip(),
                questions=tuple(questions),
                blueprint=tuple(blueprint),
                assigned_student_ids=assignees,
                status=status,
                config=config or ExamConfig(),
            )
            self._catalog.add_exam(exam)
        logger.info(
            "Created exam %r with %d questions for %d students",
            exam.title,
            exam.question_count,
            len(exam.assigned_student_ids),
        )
        return exam

    def get_exam(self, exam_id: str) -> ExamInstance:
        with self._lock:
            return self._catalog.get_exam(exam_id)

    def get_exams(self) -> list[ExamInstance]:
        with self._lock:
            return self._catalog.get_exams()

    def set_exam_status(self, exam_id: str, status: ExamStatus) -> None:
        with self._lock:
            self._catalog.set_status(exam_id, status)

    def is_student_assigned(self, student_id: str, exam_id: str) -> bool:
        with self._lock:
            return is_assigned(student_id, self._catalog.get_exam(exam_id))

    # --- Student Dashboard ---

    def available_exams(self, student_id: str) -> list[ExamInstance]:
        """Active exams assigned to the student that have no result yet."""
        with self._lock:
            return [
                exam
                for exam in self._catalog.exams_for_student(student_id)
                if exam.status is ExamStatus.ACTIVE
                and not self._results.has_result(exam.id, student_id)
            ]

    def completed_results(self, student_id: str) -> list[ExamResult]:
        with self._lock:
            return self._results.for_student(student_id)

    # --- Sessions ---

    def start_session(self, exam_id: str, student_id: str, clock: Clock | None = None) -> ExamSession:
        """Create a session for an assigned student on an active exam."""
        with self._lock:
            exam = self._catalog.get_exam(exam_id)
            if not is_assigned(student_id, exam):
                raise ExamAccessError(f"Student {student_id!r} is not assigned to exam {exam.title!r}.")
            if exam.status is not ExamStatus.ACTIVE:
                raise ExamAccessError(f"Exam {exam.title!r} is not open ({exam.status.value}).")

        order = None
        if exam.config.shuffle_questions:
            order = _per_student_order(exam, student_id)
        logger.info("Starting exam %r for student %s", exam.title, student_id)
        return ExamSession(
            exam,
            student_id,
            result_sink=self,
            clock=clock or self._clock,
            question_order=order,
        )

    # --- Results ---

    def submit_result(self, result: ExamResult) -> None:
        """Result sink used by sessions created through this manager."""
        with self._lock:
            self._results.submit_result(result)

    def get_results(self, exam_id: str | None = None, student_id: str | None = None) -> list[ExamResult]:
        with self._lock:
            results = self._results.all()
        if exam_id is not None:
            results = [r for r in results if r.exam_id == exam_id]
        if student_id is not None:
            results = [r for r in results if r.student_id == student_id]
        return results

    def get_result(self, exam_id: str, student_id: str) -> ExamResult | None:
        with self._lock:
            return self._results.get(exam_id, student_id)

    def analyze_result(self, exam_id: str, student_id: str) -> ResultAnalysis | None:
        with self._lock:
            exam = self._catalog.get_exam(exam_id)
            result = self._results.get(exam_id, student_id)
        if result is None:
            return None
        return analyze_result(exam, result)


def _per_student_order(exam: ExamInstance, student_id: str) -> list[Question]:
    """Stable permutation of the exam's questions for one student."""
    digest = hashlib.sha256(f"{exam.id}:{student_id}".encode("utf-8")).hexdigest()
    order = list(exam.questions)
    random.Random(int(digest[:16], 16)).shuffle(order)
    return order
