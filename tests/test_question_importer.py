from __future__ import annotations

from pathlib import Path

import pytest

from cbt_app.core.models import Difficulty, QuestionType
from cbt_app.core.question_importer import (
    QuestionImportError,
    load_questions_from_file,
    parse_question_bank,
)

_BUNDLED_BANK = Path(__file__).resolve().parents[1] / "cbt_app" / "data" / "question_bank.txt"

_SAMPLE = """
Q: What is $2 + 2$?
A: 3
B: 4
C: 5
D: 6
ANSWER: b
SUBJECT: Mathematics
DIFFICULTY: easy

---
Q: The past tense of "go" is
   ____.
ANSWER: went
SUBJECT: English

Q: Which part of the diagram is the hypotenuse?
A: AB
B: BC
C: AC
ANSWER: C
SUBJECT: Mathematics
TYPE: IMAGE_MCQ
IMAGE: diagrams/triangle.png
"""


def test_parse_sample_bank():
    questions = parse_question_bank(_SAMPLE)

    assert len(questions) == 3
    first, second, third = questions

    assert first.text == "What is $2 + 2$?"
    assert first.options == ("3", "4", "5", "6")
    assert first.correct_answer == "B"
    assert first.difficulty is Difficulty.EASY
    assert first.question_type is QuestionType.MCQ

    assert second.question_type is QuestionType.FILL_GAP
    assert second.text == 'The past tense of "go" is\n____.'
    assert second.options == ()
    assert second.difficulty is Difficulty.MEDIUM

    assert third.question_type is QuestionType.IMAGE_MCQ
    assert third.image_path == "diagrams/triangle.png"
    assert third.options == ("AB", "BC", "AC")


def test_answer_letter_must_exist():
    text = "Q: Pick one\nA: x\nB: y\nANSWER: C\nSUBJECT: Maths"

    with pytest.raises(QuestionImportError, match="ANSWER must be one of A, B"):
        parse_question_bank(text)


def test_options_must_be_consecutive():
    text = "Q: Pick one\nA: x\nC: y\nANSWER: A\nSUBJECT: Maths"

    with pytest.raises(QuestionImportError, match="consecutive"):
        parse_question_bank(text)


def test_errors_name_the_failing_block():
    text = "Q: Fine\nANSWER: yes\nSUBJECT: English\n\nQ: Missing subject\nANSWER: no"

    with pytest.raises(QuestionImportError, match="^Question 2: SUBJECT is required"):
        parse_question_bank(text)


def test_image_only_for_image_questions():
    text = "Q: Pick\nA: x\nB: y\nANSWER: A\nSUBJECT: Maths\nIMAGE: pic.png"

    with pytest.raises(QuestionImportError, match="IMAGE"):
        parse_question_bank(text)


def test_fill_gap_with_options_rejected():
    text = "Q: Pick\nA: x\nB: y\nANSWER: x\nSUBJECT: Maths\nTYPE: FILL_GAP"

    with pytest.raises(QuestionImportError, match="FILL_GAP"):
        parse_question_bank(text)


def test_unknown_difficulty_rejected():
    text = "Q: Gap\nANSWER: x\nSUBJECT: Maths\nDIFFICULTY: Brutal"

    with pytest.raises(QuestionImportError, match="DIFFICULTY"):
        parse_question_bank(text)


def test_stray_text_rejected():
    text = "just some words\nQ: Gap\nANSWER: x\nSUBJECT: Maths"

    with pytest.raises(QuestionImportError, match="outside of a known section"):
        parse_question_bank(text)


def test_empty_file_rejected(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n", encoding="utf-8")

    with pytest.raises(QuestionImportError):
        load_questions_from_file(path)


def test_bundled_question_bank_loads():
    imported = load_questions_from_file(_BUNDLED_BANK)

    subjects = [q.subject for q in imported.questions]
    assert imported.source_path == _BUNDLED_BANK
    assert subjects.count("Mathematics") == 5
    assert subjects.count("English") == 6
    assert subjects.count("Physics") == 3
    assert sum(q.question_type is QuestionType.FILL_GAP for q in imported.questions) == 1
