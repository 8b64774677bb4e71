"""Domain models for the exam application."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class QuestionType(Enum):
    """Kind of question; choice types carry an option list."""

    MCQ = "MCQ"
    IMAGE_MCQ = "IMAGE_MCQ"
    FILL_GAP = "FILL_GAP"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class ExamStatus(Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class GradingStatus(Enum):
    GRADED = "GRADED"
    PENDING = "PENDING"


CHOICE_TYPES = frozenset({QuestionType.MCQ, QuestionType.IMAGE_MCQ})
# Answer tokens for choice questions, by option position.
OPTION_LETTERS: str = "ABCD"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Question:
    """A question bank entry. Immutable once placed into an exam."""

    id: str
    text: str
    correct_answer: str
    subject: str
    question_type: QuestionType = QuestionType.MCQ
    options: tuple[str, ...] = ()
    difficulty: Difficulty = Difficulty.MEDIUM
    image_path: str | None = None
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_choice(self) -> bool:
        return self.question_type in CHOICE_TYPES


@dataclass(frozen=True, slots=True)
class BlueprintEntry:
    """Requested number of questions for one subject."""

    subject: str
    question_count: int


def blueprint_from_mapping(counts: Mapping[str, int]) -> list[BlueprintEntry]:
    """Build a blueprint from ``{subject: count}``, keeping insertion order."""
    return [BlueprintEntry(subject=subject, question_count=count) for subject, count in counts.items()]


@dataclass(frozen=True, slots=True)
class ExamConfig:
    """Delivery options chosen when the exam is created."""

    shuffle_questions: bool = False
    shuffle_options: bool = False
    allow_back_nav: bool = True


@dataclass(slots=True)
class ExamInstance:
    """A concrete exam: metadata plus the frozen question sequence."""

    id: str
    title: str
    class_name: str
    duration_minutes: int
    instructions: str
    questions: tuple[Question, ...]
    blueprint: tuple[BlueprintEntry, ...] = ()
    assigned_student_ids: frozenset[str] = frozenset()
    status: ExamStatus = ExamStatus.DRAFT
    config: ExamConfig = field(default_factory=ExamConfig)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60


@dataclass(frozen=True, slots=True)
class ExamResult:
    """Graded record produced once per submission."""

    exam_id: str
    student_id: str
    score: int
    total_questions: int
    answers: Mapping[str, str]
    submitted_at: datetime
    status: GradingStatus = GradingStatus.GRADED
    auto_submitted: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.exam_id, self.student_id)

    @property
    def answered_count(self) -> int:
        return len(self.answers)


@dataclass(frozen=True, slots=True)
class Student:
    """Roster entry used for class-wide exam assignment."""

    id: str
    name: str
    class_name: str

