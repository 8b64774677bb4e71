"""Utilities for importing a question bank from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text. Additional lines until the next marker are treated
       as part of the question.
    A: First option text
    B: Second option text
    C: Third option text     (options are optional for FILL_GAP)
    D: Fourth option text
    ANSWER: B                (option letter, or the expected text for FILL_GAP)
    SUBJECT: Mathematics
    DIFFICULTY: Easy|Medium|Hard   (optional, defaults to Medium)
    TYPE: MCQ|IMAGE_MCQ|FILL_GAP   (optional, inferred from the options)
    IMAGE: diagrams/triangle.png   (IMAGE_MCQ only)

Example:

    Q: What is $2 + 2$?
    A: 3
    B: 4
    C: 5
    D: 6
    ANSWER: B
    SUBJECT: Mathematics
    DIFFICULTY: Easy
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cbt_app.core.models import OPTION_LETTERS, Difficulty, Question, QuestionType


class QuestionImportError(Exception):
    """Raised when a question bank file cannot be parsed."""


@dataclass(slots=True)
class ImportedQuestionBank:
    """Container for the source path and parsed questions."""

    source_path: Path
    questions: list[Question]


_FIELD_MARKERS = ("ANSWER", "SUBJECT", "DIFFICULTY", "TYPE", "IMAGE")


def load_questions_from_file(file_path: Path) -> ImportedQuestionBank:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_question_bank(text)
    if not questions:
        raise QuestionImportError("Question bank file did not contain any questions.")
    return ImportedQuestionBank(source_path=file_path, questions=questions)


def parse_question_bank(text: str) -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    questions: list[Question] = []
    for number, block in enumerate(blocks, start=1):
        try:
            questions.append(_parse_block(block))
        except QuestionImportError as exc:
            raise QuestionImportError(f"Question {number}: {exc}") from exc
    return questions


def _parse_block(block: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    fields: dict[str, str] = {}
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        marker = next((m for m in _FIELD_MARKERS if upper.startswith(f"{m}:")), None)
        if marker is not None:
            fields[marker] = line.split(":", 1)[1].strip()
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in options:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuestionImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuestionImportError("Question text missing (Q: ...)")

    subject = fields.get("SUBJECT", "")
    if not subject:
        raise QuestionImportError("SUBJECT is required.")

    answer = fields.get("ANSWER", "")
    if not answer:
        raise QuestionImportError("ANSWER is required.")

    question_type = _parse_type(fields.get("TYPE"), has_options=bool(options))
    option_list: tuple[str, ...] = ()
    if question_type is QuestionType.FILL_GAP:
        if options:
            raise QuestionImportError("FILL_GAP questions cannot define options.")
    else:
        expected = OPTION_LETTERS[: len(options)]
        if "".join(sorted(options)) != expected or len(options) < 2:
            raise QuestionImportError("Options must be consecutive letters starting at A (at least A and B).")
        option_list = tuple(options[letter].strip() for letter in expected)
        if any(not option for option in option_list):
            raise QuestionImportError("Option text cannot be empty.")
        answer = answer.upper()
        if answer not in tuple(expected):
            raise QuestionImportError(f"ANSWER must be one of {', '.join(expected)}.")

    image_path = fields.get("IMAGE") or None
    if image_path and question_type is not QuestionType.IMAGE_MCQ:
        raise QuestionImportError("IMAGE is only allowed for IMAGE_MCQ questions.")

    return Question(
        id="",  # assigned by the question bank
        text=question_text,
        correct_answer=answer,
        subject=subject,
        question_type=question_type,
        options=option_list,
        difficulty=_parse_difficulty(fields.get("DIFFICULTY")),
        image_path=image_path,
    )


def _parse_type(raw_value: str | None, has_options: bool) -> QuestionType:
    if not raw_value:
        return QuestionType.MCQ if has_options else QuestionType.FILL_GAP
    try:
        return QuestionType(raw_value.strip().upper())
    except ValueError as exc:
        raise QuestionImportError("TYPE must be one of MCQ, IMAGE_MCQ or FILL_GAP.") from exc


def _parse_difficulty(raw_value: str | None) -> Difficulty:
    if not raw_value:
        return Difficulty.MEDIUM
    for difficulty in Difficulty:
        if difficulty.value.lower() == raw_value.strip().lower():
            return difficulty
    raise QuestionImportError("DIFFICULTY must be Easy, Medium or Hard.")
