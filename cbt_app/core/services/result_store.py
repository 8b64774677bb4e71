"""Service that keeps the graded result of every exam attempt."""

from __future__ import annotations

import logging

from cbt_app.core.models import ExamResult

logger = logging.getLogger(__name__)


class ResultStore:
    """Result sink with one entry per (exam, student) pair."""

    def __init__(self) -> None:
        self._results: dict[tuple[str, str], ExamResult] = {}

    def submit_result(self, result: ExamResult) -> None:
        """Store a result, replacing any earlier one for the same pair."""
        # Re-insert so the replaced result moves to the end of the history.
        previous = self._results.pop(result.key, None)
        if previous is not None:
            logger.info("Replacing result for exam %s / student %s", *result.key)
        self._results[result.key] = result

    def get(self, exam_id: str, student_id: str) -> ExamResult | None:
        return self._results.get((exam_id, student_id))

    def has_result(self, exam_id: str, student_id: str) -> bool:
        return (exam_id, student_id) in self._results

    def for_student(self, student_id: str) -> list[ExamResult]:
        return [r for r in self._results.values() if r.student_id == student_id]

    def for_exam(self, exam_id: str) -> list[ExamResult]:
        return [r for r in self._results.values() if r.exam_id == exam_id]

    def all(self) -> list[ExamResult]:
        return list(self._results.values())

    def clear(self) -> None:
        self._results.clear()
