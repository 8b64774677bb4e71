"""FastAPI server exposing read-only exam and result endpoints."""

from __future__ import annotations

from datetime import datetime
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel
import uvicorn

from cbt_app.constants.about import APP_NAME, APP_VERSION
from cbt_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from cbt_app.core.exam_manager import ExamManager, ExamNotFoundError
from cbt_app.core.grading import has_passed, percentage
from cbt_app.core.models import ExamInstance, ExamResult


class BlueprintEntryModel(BaseModel):
    subject: str
    question_count: int


class ExamSummaryModel(BaseModel):
    """Exam metadata without questions or answer keys."""

    id: str
    title: str
    class_name: str
    duration_minutes: int
    question_count: int
    status: str


class ExamDetailModel(ExamSummaryModel):
    instructions: str
    blueprint: list[BlueprintEntryModel]
    assigned_student_ids: list[str]
    shuffle_questions: bool


class ResultModel(BaseModel):
    exam_id: str
    student_id: str
    score: int
    total_questions: int
    percentage: int
    passed: bool
    answered: int
    auto_submitted: bool
    status: str
    submitted_at: datetime


class SubjectScoreModel(BaseModel):
    subject: str
    correct: int
    total: int
    percentage: int


class ResultAnalysisModel(BaseModel):
    result: ResultModel
    correct: int
    wrong: int
    skipped: int
    subjects: list[SubjectScoreModel]
    outcomes: dict[str, str]


def _exam_summary(exam: ExamInstance) -> ExamSummaryModel:
    return ExamSummaryModel(
        id=exam.id,
        title=exam.title,
        class_name=exam.class_name,
        duration_minutes=exam.duration_minutes,
        question_count=exam.question_count,
        status=exam.status.value,
    )


def _result_model(result: ExamResult) -> ResultModel:
    percent = percentage(result.score, result.total_questions)
    return ResultModel(
        exam_id=result.exam_id,
        student_id=result.student_id,
        score=result.score,
        total_questions=result.total_questions,
        percentage=percent,
        passed=has_passed(percent),
        answered=result.answered_count,
        auto_submitted=result.auto_submitted,
        status=result.status.value,
        submitted_at=result.submitted_at,
    )


def _get_exam_manager_dependency(exam_manager: ExamManager):
    def dependency() -> ExamManager:
        return exam_manager

    return dependency


def create_api_app(exam_manager: ExamManager) -> FastAPI:
    """Create a FastAPI application wired to the provided exam manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    exam_manager_dep = _get_exam_manager_dependency(exam_manager)

    @app.get("/exams", response_model=list[ExamSummaryModel])
    def list_exams(manager: ExamManager = Depends(exam_manager_dep)) -> list[ExamSummaryModel]:
        return [_exam_summary(exam) for exam in manager.get_exams()]

    @app.get("/exams/{exam_id}", response_model=ExamDetailModel)
    def get_exam(exam_id: str, manager: ExamManager = Depends(exam_manager_dep)) -> ExamDetailModel:
        try:
            exam = manager.get_exam(exam_id)
        except ExamNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return ExamDetailModel(
            **_exam_summary(exam).model_dump(),
            instructions=exam.instructions,
            blueprint=[
                BlueprintEntryModel(subject=entry.subject, question_count=entry.question_count)
                for entry in exam.blueprint
            ],
            assigned_student_ids=sorted(exam.assigned_student_ids),
            shuffle_questions=exam.config.shuffle_questions,
        )

    @app.get("/students/{student_id}/exams", response_model=list[ExamSummaryModel])
    def list_available_exams(
        student_id: str,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> list[ExamSummaryModel]:
        if manager.get_student(student_id) is None:
            raise HTTPException(status_code=404, detail=f"Unknown student {student_id!r}")
        return [_exam_summary(exam) for exam in manager.available_exams(student_id)]

    @app.get("/results", response_model=list[ResultModel])
    def list_results(
        exam_id: str | None = None,
        student_id: str | None = None,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> list[ResultModel]:
        return [_result_model(r) for r in manager.get_results(exam_id=exam_id, student_id=student_id)]

    @app.get("/results/{exam_id}/{student_id}", response_model=ResultAnalysisModel)
    def get_result_analysis(
        exam_id: str,
        student_id: str,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> ResultAnalysisModel:
        try:
            analysis = manager.analyze_result(exam_id, student_id)
        except ExamNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        if analysis is None:
            raise HTTPException(
                status_code=404,
                detail=f"No result for student {student_id!r} on exam {exam_id!r}",
            )
        return ResultAnalysisModel(
            result=_result_model(analysis.result),
            correct=analysis.summary.correct,
            wrong=analysis.summary.wrong,
            skipped=analysis.summary.skipped,
            subjects=[
                SubjectScoreModel(
                    subject=s.subject,
                    correct=s.correct,
                    total=s.total,
                    percentage=s.percentage,
                )
                for s in analysis.subjects
            ],
            outcomes={qid: outcome.value for qid, outcome in analysis.outcomes.items()},
        )

    return app


def start_api_server(
    exam_manager: ExamManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(exam_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="ExamApiServer", daemon=True)
    thread.start()
    return thread
