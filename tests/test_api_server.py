from __future__ import annotations

import random

from fastapi.testclient import TestClient
import pytest

from cbt_app.core.exam_manager import ExamManager
from cbt_app.core.models import blueprint_from_mapping
from cbt_app.core.services.exam_composer import ExamComposer
from cbt_app.server.api_server import create_api_app


@pytest.fixture
def manager(three_questions, clock) -> ExamManager:
    manager = ExamManager(composer=ExamComposer(random.Random(2)), clock=clock)
    manager.load_questions(three_questions)
    manager.register_student("John Doe", "JSS1", student_id="s1")
    manager.register_student("Jane Smith", "JSS1", student_id="s2")
    manager.create_exam(
        title="First Term Examination",
        class_name="JSS1",
        duration_minutes=45,
        instructions="Answer all questions.",
        blueprint=blueprint_from_mapping({"Mathematics": 3}),
        exam_id="ex1",
    )
    return manager


@pytest.fixture
def client(manager) -> TestClient:
    return TestClient(create_api_app(manager))


def _answer_two_of_three(manager: ExamManager) -> None:
    session = manager.start_session("ex1", "s1")
    for question_id in ("q1", "q2"):
        question = next(q for q in session.questions if q.id == question_id)
        session.select_answer(question_id, question.correct_answer)
    session.submit()


def test_list_and_get_exams(client):
    listing = client.get("/exams").json()
    assert [exam["id"] for exam in listing] == ["ex1"]
    assert listing[0]["question_count"] == 3
    assert listing[0]["status"] == "ACTIVE"

    detail = client.get("/exams/ex1").json()
    assert detail["assigned_student_ids"] == ["s1", "s2"]
    assert detail["blueprint"] == [{"subject": "Mathematics", "question_count": 3}]
    assert "questions" not in detail


def test_unknown_exam_is_404(client):
    assert client.get("/exams/missing").status_code == 404
    assert client.get("/results/missing/s1").status_code == 404


def test_student_dashboard(client, manager):
    assert [e["id"] for e in client.get("/students/s1/exams").json()] == ["ex1"]
    assert client.get("/students/nobody/exams").status_code == 404

    _answer_two_of_three(manager)

    assert client.get("/students/s1/exams").json() == []


def test_result_listing_and_analysis(client, manager):
    assert client.get("/results/ex1/s1").status_code == 404

    _answer_two_of_three(manager)

    results = client.get("/results", params={"student_id": "s1"}).json()
    assert len(results) == 1
    assert results[0]["score"] == 2
    assert results[0]["percentage"] == 67
    assert results[0]["passed"] is True
    assert client.get("/results", params={"student_id": "s2"}).json() == []

    analysis = client.get("/results/ex1/s1").json()
    assert (analysis["correct"], analysis["wrong"], analysis["skipped"]) == (2, 0, 1)
    assert analysis["outcomes"]["q3"] == "skipped"
    assert analysis["subjects"] == [
        {"subject": "Mathematics", "correct": 2, "total": 3, "percentage": 67}
    ]
