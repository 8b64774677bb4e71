from __future__ import annotations

import pytest

from cbt_app.core.models import GradingStatus, QuestionType
from cbt_app.core.services.exam_session import (
    Direction,
    ExamSession,
    QuestionMapStatus,
    SessionEvent,
    SessionState,
    UnknownQuestionError,
)


@pytest.fixture
def session(three_questions, make_exam, sink, clock) -> ExamSession:
    return ExamSession(make_exam(three_questions), "s1", sink, clock=clock)


def _record_events(session: ExamSession) -> list[SessionEvent]:
    events: list[SessionEvent] = []
    session.subscribe(lambda _session, event: events.append(event))
    return events


def test_new_session_starts_at_first_question_with_full_time(session):
    assert session.state is SessionState.IN_PROGRESS
    assert session.current_index == 0
    assert session.current_question.id == "q1"
    assert session.answers == {}
    assert session.time_remaining == 60
    assert session.formatted_time_remaining == "00:01:00"
    assert session.unanswered_count == 3


def test_select_answer_records_token_without_moving(session):
    events = _record_events(session)

    assert session.select_answer("q2", "D") is True

    assert session.answers == {"q2": "D"}
    assert session.current_index == 0
    assert events == [SessionEvent.ANSWER_SELECTED]


def test_select_answer_overwrites_previous_choice(session):
    session.select_answer("q1", "B")
    session.select_answer("q1", "C")

    assert session.answer_for("q1") == "C"
    assert session.answered_count == 1


def test_reselecting_same_token_is_a_no_op(session):
    session.select_answer("q1", "A")
    events = _record_events(session)

    assert session.select_answer("q1", "A") is False

    assert session.answers == {"q1": "A"}
    assert events == []


def test_answer_for_unknown_question_raises(session):
    with pytest.raises(UnknownQuestionError):
        session.select_answer("nope", "A")
    with pytest.raises(KeyError):
        session.select_answer("nope", "A")


def test_select_option_maps_position_to_letter(session):
    assert session.select_option(1) is True
    assert session.answer_for("q1") == "B"
    assert session.select_option(4) is False
    assert session.select_option(-1) is False


def test_select_option_ignored_for_fill_gap(make_question, make_exam, sink, clock):
    question = make_question("g1", "went", question_type=QuestionType.FILL_GAP)
    session = ExamSession(make_exam([question]), "s1", sink, clock=clock)

    assert session.select_option(0) is False
    assert session.select_answer("g1", "went") is True


def test_typed_text_is_recorded_on_each_edit(make_question, make_exam, sink, clock):
    gap = make_question("g1", "went", question_type=QuestionType.FILL_GAP)
    session = ExamSession(make_exam([gap, make_question("q2")]), "s1", sink, clock=clock)

    assert session.enter_text("w") is True
    assert session.enter_text("went ") is True
    session.navigate(Direction.NEXT)

    assert session.answers == {"g1": "went"}
    assert session.submit().score == 1


def test_clearing_typed_text_marks_question_skipped(make_question, make_exam, sink, clock):
    gap = make_question("g1", "went", question_type=QuestionType.FILL_GAP)
    session = ExamSession(make_exam([gap]), "s1", sink, clock=clock)
    session.enter_text("gone")
    events = _record_events(session)

    assert session.enter_text("   ") is True
    assert session.answer_for("g1") is None
    assert session.unanswered_count == 1
    assert events == [SessionEvent.ANSWER_SELECTED]
    assert session.enter_text("") is False


def test_typed_text_ignored_for_choice_questions_and_after_submit(make_question, make_exam, sink, clock):
    gap = make_question("g1", "went", question_type=QuestionType.FILL_GAP)
    session = ExamSession(make_exam([make_question("q1"), gap]), "s1", sink, clock=clock)

    assert session.enter_text("A") is False
    assert session.answers == {}

    session.navigate(Direction.NEXT)
    session.submit()
    assert session.enter_text("went") is False
    assert session.clear_answer("g1") is False


def test_clear_answer_unknown_question_raises(session):
    with pytest.raises(UnknownQuestionError):
        session.clear_answer("nope")
    assert session.clear_answer("q1") is False


def test_navigation_clamps_at_both_ends(session):
    assert session.navigate(Direction.PREVIOUS) is False
    assert session.current_index == 0

    session.navigate(Direction.NEXT)
    session.navigate(Direction.NEXT)
    assert session.current_index == 2
    assert session.navigate(Direction.NEXT) is False
    assert session.current_index == 2


def test_navigation_never_touches_answers(session):
    session.select_answer("q1", "A")
    session.navigate(Direction.NEXT)
    session.navigate(Direction.PREVIOUS)

    assert session.answers == {"q1": "A"}


def test_jump_to_clamps_out_of_range_indexes(session):
    assert session.jump_to(10) is True
    assert session.current_index == 2
    assert session.jump_to(-5) is True
    assert session.current_index == 0


def test_submit_twice_emits_exactly_one_result(session, sink, clock):
    session.select_answer("q1", "A")
    clock.advance(90)

    first = session.submit()
    second = session.submit()

    assert first is not None
    assert second is None
    assert sink.results == [first]
    assert first.submitted_at == clock.now()
    assert first.status is GradingStatus.GRADED
    assert first.auto_submitted is False
    assert session.result is first
    assert session.state is SessionState.SUBMITTED


class FailingOnceSink:
    def __init__(self) -> None:
        self.calls = 0
        self.results = []

    def submit_result(self, result) -> None:
        self.calls += 1
        if self.calls == 1:
            raise OSError("disk full")
        self.results.append(result)


def test_sink_failure_keeps_attempt_open_for_retry(three_questions, make_exam, clock):
    sink = FailingOnceSink()
    session = ExamSession(make_exam(three_questions), "s1", sink, clock=clock)
    session.select_answer("q1", "A")
    events = _record_events(session)

    with pytest.raises(OSError):
        session.submit()

    assert session.is_in_progress
    assert session.result is None
    assert SessionEvent.SUBMITTED not in events

    result = session.submit()
    assert result is not None
    assert sink.results == [result]
    assert session.state is SessionState.SUBMITTED


def test_submitted_answers_cannot_be_mutated(session):
    session.select_answer("q1", "A")
    result = session.submit()

    with pytest.raises(TypeError):
        result.answers["q1"] = "B"
    assert result.answers == {"q1": "A"}

def test_commands_are_rejected_after_submission(session):
    session.submit()

    assert session.select_answer("q1", "A") is False
    assert session.navigate(Direction.NEXT) is False
    assert session.tick() is False
    assert session.request_submit(lambda _summary: True) is False
    assert session.answers == {}
    assert session.current_index == 0


def test_timeout_submits_once_without_touching_position_or_answers(session, sink):
    session.navigate(Direction.NEXT)
    session.select_answer("q2", "B")

    for _ in range(60):
        session.tick()

    assert session.time_remaining == 0
    assert session.state is SessionState.SUBMITTED
    assert len(sink.results) == 1
    result = sink.results[0]
    assert result.auto_submitted is True
    assert result.answers == {"q2": "B"}
    assert result.score == 1
    assert session.current_index == 1

    assert session.tick() is False
    assert len(sink.results) == 1


def test_ticks_notify_subscribers(session):
    events = _record_events(session)

    session.tick()

    assert events == [SessionEvent.TICKED]
    assert session.time_remaining == 59


def test_request_submit_declined_keeps_session_open(session, sink):
    session.select_answer("q1", "A")
    seen = []

    def decline(summary):
        seen.append(summary)
        return False

    assert session.request_submit(decline) is False
    assert session.is_in_progress
    assert sink.results == []
    assert seen[0].answered == 1
    assert seen[0].unanswered == 2
    assert seen[0].total_questions == 3


def test_request_submit_confirmed_submits(session, sink):
    assert session.request_submit(lambda _summary: True) is True
    assert len(sink.results) == 1
    assert sink.results[0].auto_submitted is False


def test_timeout_while_confirmation_is_open_wins(session, sink):
    def confirm_after_timeout(_summary):
        for _ in range(60):
            session.tick()
        return True

    assert session.request_submit(confirm_after_timeout) is False
    assert len(sink.results) == 1
    assert sink.results[0].auto_submitted is True


def test_empty_exam_scores_zero_of_zero(make_exam, sink, clock):
    session = ExamSession(make_exam([]), "s1", sink, clock=clock)

    assert session.current_question is None
    assert session.navigate(Direction.NEXT) is False
    assert session.current_index == 0

    result = session.submit()
    assert result.score == 0
    assert result.total_questions == 0


def test_question_order_must_be_a_permutation(three_questions, make_question, make_exam, sink):
    exam = make_exam(three_questions)

    with pytest.raises(ValueError):
        ExamSession(exam, "s1", sink, question_order=three_questions[:2])
    with pytest.raises(ValueError):
        ExamSession(exam, "s1", sink, question_order=three_questions[:2] + [make_question("x")])

    reordered = ExamSession(exam, "s1", sink, question_order=list(reversed(three_questions)))
    assert reordered.current_question.id == "q3"


def test_exam_with_repeated_question_is_rejected(make_question, make_exam, sink):
    question = make_question("q1")

    with pytest.raises(ValueError, match="more than once"):
        ExamSession(make_exam([question, question]), "s1", sink)

def test_map_status_reflects_position_and_answers(session):
    session.select_answer("q2", "B")

    assert session.status_of("q1") is QuestionMapStatus.CURRENT
    assert session.status_of("q2") is QuestionMapStatus.ANSWERED
    assert session.status_of("q3") is QuestionMapStatus.UNANSWERED

    session.jump_to(1)
    assert session.status_of("q2") is QuestionMapStatus.CURRENT


def test_questions_grouped_by_subject_keep_global_index(make_question, make_exam, sink):
    questions = [
        make_question("m1", subject="Mathematics"),
        make_question("e1", subject="English"),
        make_question("m2", subject="Mathematics"),
    ]
    session = ExamSession(make_exam(questions), "s1", sink)

    grouped = session.questions_by_subject()

    assert list(grouped) == ["Mathematics", "English"]
    assert [(i, q.id) for i, q in grouped["Mathematics"]] == [(0, "m1"), (2, "m2")]
    assert [(i, q.id) for i, q in grouped["English"]] == [(1, "e1")]


def test_time_low_below_warning_threshold(three_questions, make_exam, sink):
    short = ExamSession(make_exam(three_questions, duration_minutes=1), "s1", sink)
    long = ExamSession(make_exam(three_questions, duration_minutes=10), "s1", sink)

    assert short.is_time_low is True
    assert long.is_time_low is False


def test_unsubscribe_stops_notifications(session):
    events: list[SessionEvent] = []
    unsubscribe = session.subscribe(lambda _session, event: events.append(event))

    unsubscribe()
    session.tick()
    unsubscribe()

    assert events == []
