"""Shared fixtures for the exam core tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cbt_app.core.models import (
    Difficulty,
    ExamInstance,
    ExamResult,
    ExamStatus,
    Question,
    QuestionType,
)


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 9, 16, 9, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += timedelta(seconds=seconds)


class RecordingSink:
    def __init__(self) -> None:
        self.results: list[ExamResult] = []

    def submit_result(self, result: ExamResult) -> None:
        self.results.append(result)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_question():
    def factory(
        question_id: str,
        answer: str = "A",
        subject: str = "Mathematics",
        options: tuple[str, ...] = ("one", "two", "three", "four"),
        question_type: QuestionType = QuestionType.MCQ,
    ) -> Question:
        if question_type is QuestionType.FILL_GAP:
            options = ()
        return Question(
            id=question_id,
            text=f"Question {question_id}",
            correct_answer=answer,
            subject=subject,
            question_type=question_type,
            options=options,
            difficulty=Difficulty.EASY,
        )

    return factory


@pytest.fixture
def make_exam():
    def factory(
        questions,
        duration_minutes: int = 1,
        exam_id: str = "ex1",
        assigned: tuple[str, ...] = ("s1",),
        status: ExamStatus = ExamStatus.ACTIVE,
    ) -> ExamInstance:
        return ExamInstance(
            id=exam_id,
            title="Mid Term Test",
            class_name="JSS1",
            duration_minutes=duration_minutes,
            instructions="Answer all questions.",
            questions=tuple(questions),
            assigned_student_ids=frozenset(assigned),
            status=status,
        )

    return factory


@pytest.fixture
def three_questions(make_question) -> list[Question]:
    """Questions q1..q3 with correct answers A, B and C."""
    return [
        make_question("q1", "A"),
        make_question("q2", "B"),
        make_question("q3", "C"),
    ]
