"""Scoring and result analysis.

Every figure shown in a result review is derived from the exam's question
list and the submitted answer map alone, so a stored ``ExamResult`` can be
re-analysed at any time without the session that produced it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
import math

from cbt_app.core.models import ExamInstance, ExamResult, Question

PASS_MARK_PERCENT: int = 50


class QuestionOutcome(Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class OutcomeSummary:
    """Counts of correct, wrong and skipped questions."""

    correct: int = 0
    wrong: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.wrong + self.skipped


@dataclass(frozen=True, slots=True)
class SubjectScore:
    subject: str
    correct: int
    total: int

    @property
    def percentage(self) -> int:
        return percentage(self.correct, self.total)


@dataclass(frozen=True, slots=True)
class ResultAnalysis:
    """Everything the result review shows for one submission."""

    result: ExamResult
    summary: OutcomeSummary
    percentage: int
    passed: bool
    subjects: tuple[SubjectScore, ...]
    outcomes: Mapping[str, QuestionOutcome]


def classify_answer(question: Question, answers: Mapping[str, str]) -> QuestionOutcome:
    if question.id not in answers:
        return QuestionOutcome.SKIPPED
    if answers[question.id] == question.correct_answer:
        return QuestionOutcome.CORRECT
    return QuestionOutcome.WRONG


def classify_answers(
    questions: Sequence[Question], answers: Mapping[str, str]
) -> dict[str, QuestionOutcome]:
    """Place every question in exactly one outcome class."""
    return {question.id: classify_answer(question, answers) for question in questions}


def summarize_outcomes(questions: Sequence[Question], answers: Mapping[str, str]) -> OutcomeSummary:
    counts = {outcome: 0 for outcome in QuestionOutcome}
    for question in questions:
        counts[classify_answer(question, answers)] += 1
    return OutcomeSummary(
        correct=counts[QuestionOutcome.CORRECT],
        wrong=counts[QuestionOutcome.WRONG],
        skipped=counts[QuestionOutcome.SKIPPED],
    )


def score_answers(questions: Sequence[Question], answers: Mapping[str, str]) -> int:
    """Count the questions answered correctly; skipped and wrong both score zero."""
    return sum(
        1 for question in questions if classify_answer(question, answers) is QuestionOutcome.CORRECT
    )


def percentage(score: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 for an empty exam."""
    if total <= 0:
        return 0
    return math.floor(score / total * 100 + 0.5)


def has_passed(percent: int) -> bool:
    return percent >= PASS_MARK_PERCENT


def subject_breakdown(
    questions: Sequence[Question], answers: Mapping[str, str]
) -> list[SubjectScore]:
    """Per-subject correct/total counts in order of first appearance."""
    totals: dict[str, list[int]] = {}
    for question in questions:
        bucket = totals.setdefault(question.subject, [0, 0])
        bucket[1] += 1
        if classify_answer(question, answers) is QuestionOutcome.CORRECT:
            bucket[0] += 1
    return [
        SubjectScore(subject=subject, correct=correct, total=total)
        for subject, (correct, total) in totals.items()
    ]


def analyze_result(exam: ExamInstance, result: ExamResult) -> ResultAnalysis:
    summary = summarize_outcomes(exam.questions, result.answers)
    percent = percentage(result.score, result.total_questions)
    return ResultAnalysis(
        result=result,
        summary=summary,
        percentage=percent,
        passed=has_passed(percent),
        subjects=tuple(subject_breakdown(exam.questions, result.answers)),
        outcomes=classify_answers(exam.questions, result.answers),
    )
