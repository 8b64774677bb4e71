"""Service for managing the shared question bank."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from uuid import uuid4

from cbt_app.core.models import OPTION_LETTERS, Question

_MIN_OPTIONS = 2
_MAX_OPTIONS = len(OPTION_LETTERS)


class QuestionBank:
    """Stores validated questions and serves them as the exam question pool."""

    def __init__(self) -> None:
        self._questions: list[Question] = []

    def load_questions(self, questions: Iterable[Question]) -> None:
        """Replace the bank with a new set of questions."""
        prepared: list[Question] = []
        for question in questions:
            candidate = self._prepare_question(question)
            if any(q.id == candidate.id for q in prepared):
                raise ValueError(f"Question id {candidate.id!r} appears more than once.")
            prepared.append(candidate)
        self._questions = prepared

    def get_questions(self) -> list[Question]:
        """Return a copy of all stored questions."""
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question(self, question_id: str) -> Question:
        return self._questions[self._index_of(question_id)]

    def get_subjects(self) -> list[str]:
        seen: dict[str, None] = {}
        for question in self._questions:
            seen.setdefault(question.subject, None)
        return list(seen)

    def get_by_subject(self, subject: str) -> list[Question]:
        return [q for q in self._questions if q.subject == subject]

    def add_question(self, question: Question) -> Question:
        prepared = self._prepare_question(question)
        if any(q.id == prepared.id for q in self._questions):
            raise ValueError(f"Question id {prepared.id!r} already exists.")
        self._questions.append(prepared)
        return prepared

    def add_questions(self, questions: Iterable[Question]) -> list[Question]:
        """Add several questions; nothing is stored if any of them is rejected."""
        existing_ids = {q.id for q in self._questions}
        prepared: list[Question] = []
        for question in questions:
            candidate = self._prepare_question(question)
            if candidate.id in existing_ids:
                raise ValueError(f"Question id {candidate.id!r} already exists.")
            existing_ids.add(candidate.id)
            prepared.append(candidate)
        self._questions.extend(prepared)
        return prepared

    def update_question(self, question_id: str, question: Question) -> Question:
        index = self._index_of(question_id)
        # Keep the original id and creation time
        prepared = self._prepare_question(
            replace(question, id=question_id, created_at=self._questions[index].created_at)
        )
        self._questions[index] = prepared
        return prepared

    def delete_question(self, question_id: str) -> None:
        self._questions.pop(self._index_of(question_id))

    def clear(self) -> None:
        self._questions = []

    def _index_of(self, question_id: str) -> int:
        for index, question in enumerate(self._questions):
            if question.id == question_id:
                return index
        raise KeyError(f"Unknown question id {question_id!r}")

    def _prepare_question(self, question: Question) -> Question:
        """Validate and normalize a question before storage."""
        text = question.text.strip()
        if not text:
            raise ValueError("Question text must not be empty.")
        subject = question.subject.strip()
        if not subject:
            raise ValueError("Question subject must not be empty.")
        answer = question.correct_answer.strip()
        if not answer:
            raise ValueError("Correct answer must not be empty.")

        options: tuple[str, ...] = ()
        if question.is_choice:
            options = self._validate_options(question.options)
            answer = answer.upper()
            allowed = tuple(OPTION_LETTERS[: len(options)])
            if answer not in allowed:
                raise ValueError(f"Correct answer must be one of {', '.join(allowed)}.")
        elif question.options:
            raise ValueError("Fill-in-the-gap questions cannot have options.")

        return replace(
            question,
            id=question.id or uuid4().hex,
            text=text,
            subject=subject,
            correct_answer=answer,
            options=options,
        )

    @staticmethod
    def _validate_options(options: Iterable[str]) -> tuple[str, ...]:
        cleaned = tuple(option.strip() for option in options)
        if not _MIN_OPTIONS <= len(cleaned) <= _MAX_OPTIONS:
            raise ValueError(
                f"Choice questions need between {_MIN_OPTIONS} and {_MAX_OPTIONS} options."
            )
        if any(not option for option in cleaned):
            raise ValueError("Option text cannot be empty.")
        return cleaned
