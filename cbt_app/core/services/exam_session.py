"""State machine for one student's attempt at one exam instance."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
import logging
from types import MappingProxyType

from cbt_app.constants.exam_constants import TIME_WARNING_THRESHOLD_SECONDS
from cbt_app.core.grading import score_answers
from cbt_app.core.interfaces import Clock, ResultSink, SystemClock
from cbt_app.core.models import (
    OPTION_LETTERS,
    ExamInstance,
    ExamResult,
    GradingStatus,
    Question,
)
from cbt_app.utils.time_format import format_remaining

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IN_PROGRESS = auto()
    SUBMITTED = auto()


class SessionEvent(Enum):
    """Change notifications emitted to session subscribers."""

    ANSWER_SELECTED = auto()
    NAVIGATED = auto()
    TICKED = auto()
    SUBMITTED = auto()


class Direction(Enum):
    NEXT = auto()
    PREVIOUS = auto()


class QuestionMapStatus(Enum):
    """Colour state of a question in the navigation sidebar."""

    CURRENT = auto()
    ANSWERED = auto()
    UNANSWERED = auto()


class UnknownQuestionError(KeyError):
    """Raised when an answer is given for a question that is not in the exam."""


@dataclass(frozen=True, slots=True)
class SubmitSummary:
    """Figures shown by the submit confirmation prompt."""

    total_questions: int
    answered: int
    unanswered: int
    time_remaining: int


SessionListener = Callable[["ExamSession", SessionEvent], None]
SubmitConfirmation = Callable[[SubmitSummary], bool]


class ExamSession:
    """Owns the position, answers and countdown of a single attempt.

    The session is single-threaded. Timer ticks and user commands are
    serialized by the caller's event loop; the terminal ``SUBMITTED`` state
    alone guarantees that timeout and manual submission cannot both grade
    the attempt.
    """

    def __init__(
        self,
        exam: ExamInstance,
        student_id: str,
        result_sink: ResultSink,
        clock: Clock | None = None,
        question_order: Sequence[Question] | None = None,
    ) -> None:
        questions = tuple(question_order) if question_order is not None else exam.questions
        if len({q.id for q in exam.questions}) != len(exam.questions):
            raise ValueError("Exam contains the same question more than once.")
        if sorted(q.id for q in questions) != sorted(q.id for q in exam.questions):
            raise ValueError("Question order must contain exactly the exam's questions.")

        self._exam = exam
        self._student_id = student_id
        self._sink = result_sink
        self._clock = clock or SystemClock()
        self._questions: tuple[Question, ...] = questions
        self._question_ids: frozenset[str] = frozenset(q.id for q in questions)

        self._state = SessionState.IN_PROGRESS
        self._current_index: int = 0
        self._answers: dict[str, str] = {}
        self._time_remaining: int = exam.duration_seconds
        self._result: ExamResult | None = None
        self._listeners: list[SessionListener] = []
        self._started_at = self._clock.now()

    # --- Observers ---

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(self, event)

    # --- Queries ---

    @property
    def exam(self) -> ExamInstance:
        return self._exam

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_in_progress(self) -> bool:
        return self._state is SessionState.IN_PROGRESS

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def last_index(self) -> int:
        return max(0, len(self._questions) - 1)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> Question | None:
        if not self._questions:
            return None
        return self._questions[self._current_index]

    @property
    def answers(self) -> dict[str, str]:
        return dict(self._answers)

    def answer_for(self, question_id: str) -> str | None:
        return self._answers.get(question_id)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def unanswered_count(self) -> int:
        return len(self._questions) - len(self._answers)

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    @property
    def formatted_time_remaining(self) -> str:
        return format_remaining(self._time_remaining)

    @property
    def is_time_low(self) -> bool:
        return self._time_remaining < TIME_WARNING_THRESHOLD_SECONDS

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def result(self) -> ExamResult | None:
        return self._result

    def status_of(self, question_id: str) -> QuestionMapStatus:
        current = self.current_question
        if current is not None and current.id == question_id:
            return QuestionMapStatus.CURRENT
        if question_id in self._answers:
            return QuestionMapStatus.ANSWERED
        return QuestionMapStatus.UNANSWERED

    def questions_by_subject(self) -> dict[str, list[tuple[int, Question]]]:
        """Group questions by subject, keeping each question's global index."""
        grouped: dict[str, list[tuple[int, Question]]] = {}
        for index, question in enumerate(self._questions):
            grouped.setdefault(question.subject, []).append((index, question))
        return grouped

    def submit_summary(self) -> SubmitSummary:
        return SubmitSummary(
            total_questions=len(self._questions),
            answered=self.answered_count,
            unanswered=self.unanswered_count,
            time_remaining=self._time_remaining,
        )

    # --- Commands ---

    def select_answer(self, question_id: str, token: str) -> bool:
        """Record the chosen token. Returns True when the answer map changed."""
        if not self.is_in_progress:
            logger.debug("Ignoring answer for %s: session already submitted", question_id)
            return False
        if question_id not in self._question_ids:
            raise UnknownQuestionError(question_id)
        if self._answers.get(question_id) == token:
            return False
        self._answers[question_id] = token
        self._notify(SessionEvent.ANSWER_SELECTED)
        return True

    def select_option(self, position: int) -> bool:
        """Answer the current choice question by option position (0 = ``A``)."""
        question = self.current_question
        if question is None or not question.is_choice:
            return False
        if not 0 <= position < min(len(question.options), len(OPTION_LETTERS)):
            return False
        return self.select_answer(question.id, OPTION_LETTERS[position])

    def enter_text(self, text: str) -> bool:
        """Answer the current fill-gap question with typed text.

        Called on every edit. Blank text clears the answer.
        """
        question = self.current_question
        if question is None or question.is_choice:
            return False
        token = text.strip()
        if not token:
            return self.clear_answer(question.id)
        return self.select_answer(question.id, token)

    def clear_answer(self, question_id: str) -> bool:
        """Forget the answer to ``question_id``; it counts as skipped again."""
        if not self.is_in_progress:
            return False
        if question_id not in self._question_ids:
            raise UnknownQuestionError(question_id)
        if self._answers.pop(question_id, None) is None:
            return False
        self._notify(SessionEvent.ANSWER_SELECTED)
        return True

    def navigate(self, direction: Direction) -> bool:
        step = 1 if direction is Direction.NEXT else -1
        return self.jump_to(self._current_index + step)

    def jump_to(self, index: int) -> bool:
        """Move to ``index``, clamped to the question range."""
        if not self.is_in_progress or not self._questions:
            return False
        target = min(max(index, 0), self.last_index)
        if target == self._current_index:
            return False
        self._current_index = target
        self._notify(SessionEvent.NAVIGATED)
        return True

    def tick(self) -> bool:
        """Advance the countdown by one second, auto-submitting at zero."""
        if not self.is_in_progress:
            return False
        self._time_remaining = max(0, self._time_remaining - 1)
        self._notify(SessionEvent.TICKED)
        if self._time_remaining == 0:
            self.submit(auto=True)
        return True

    def request_submit(self, confirm: SubmitConfirmation) -> bool:
        """Ask ``confirm`` before submitting; returns True if this call submitted."""
        if not self.is_in_progress:
            return False
        if not confirm(self.submit_summary()):
            return False
        return self.submit(auto=False) is not None

    def submit(self, auto: bool = False) -> ExamResult | None:
        """Grade the attempt and hand the result to the sink.

        The sink is called before the session turns terminal, so a sink
        error propagates and leaves the attempt in progress for a retry.
        Returns the result, or None when the session was already submitted.
        """
        if not self.is_in_progress:
            return None
        score = score_answers(self._questions, self._answers)
        result = ExamResult(
            exam_id=self._exam.id,
            student_id=self._student_id,
            score=score,
            total_questions=len(self._questions),
            answers=MappingProxyType(dict(self._answers)),
            submitted_at=self._clock.now(),
            status=GradingStatus.GRADED,
            auto_submitted=auto,
        )
        self._sink.submit_result(result)
        self._state = SessionState.SUBMITTED
        self._result = result
        logger.info(
            "Exam %s submitted for student %s (%s): %d/%d",
            self._exam.id,
            self._student_id,
            "timeout" if auto else "manual",
            score,
            result.total_questions,
        )
        self._notify(SessionEvent.SUBMITTED)
        return result
