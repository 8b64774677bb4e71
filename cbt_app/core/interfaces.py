"""Boundary contracts between the exam core and its collaborators."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from cbt_app.core.models import ExamResult, Question


class QuestionPoolProvider(Protocol):
    """Returns the current question bank as a read-only snapshot."""

    def get_questions(self) -> list[Question]: ...


class ResultSink(Protocol):
    """Accepts one result per submission, replacing any earlier result for the same pair.

    Called before the session turns terminal; raising leaves the attempt open.
    """

    def submit_result(self, result: ExamResult) -> None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time as an aware UTC datetime."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
