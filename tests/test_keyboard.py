from __future__ import annotations

import pytest

from cbt_app.core.keyboard import KeyboardController, KeyCommand, ModalGate, ModalKind, resolve_key
from cbt_app.core.services.exam_session import ExamSession


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("a", (KeyCommand.SELECT_OPTION, 0)),
        ("D", (KeyCommand.SELECT_OPTION, 3)),
        ("n", (KeyCommand.NEXT, None)),
        ("ArrowRight", (KeyCommand.NEXT, None)),
        ("P", (KeyCommand.PREVIOUS, None)),
        ("ARROWLEFT", (KeyCommand.PREVIOUS, None)),
        ("s", (KeyCommand.OPEN_SUBMIT, None)),
        ("F1", (KeyCommand.TOGGLE_HELP, None)),
        ("Escape", (KeyCommand.TOGGLE_HELP, None)),
        ("X", None),
        ("E", None),
    ],
)
def test_resolve_key(key, expected):
    assert resolve_key(key) == expected


class _Harness:
    def __init__(self, session: ExamSession) -> None:
        self.session = session
        self.gate = ModalGate()
        self.submit_requests = 0
        self.help_toggles: list[bool] = []
        self.controller = KeyboardController(
            session,
            self.gate,
            on_open_submit=self._open_submit,
            on_toggle_help=self.help_toggles.append,
        )

    def _open_submit(self) -> None:
        self.submit_requests += 1


@pytest.fixture
def harness(three_questions, make_exam, sink, clock) -> _Harness:
    return _Harness(ExamSession(make_exam(three_questions), "s1", sink, clock=clock))


def test_option_keys_answer_current_question(harness):
    assert harness.controller.dispatch("b") is True
    assert harness.session.answer_for("q1") == "B"


def test_navigation_keys_move_position(harness):
    harness.controller.dispatch("N")
    harness.controller.dispatch("ARROWRIGHT")
    assert harness.session.current_index == 2

    harness.controller.dispatch("P")
    assert harness.session.current_index == 1


def test_unknown_key_is_not_consumed(harness):
    assert harness.controller.dispatch("Z") is False


def test_submit_key_opens_confirmation(harness):
    assert harness.controller.dispatch("S") is True
    assert harness.submit_requests == 1
    assert harness.session.is_in_progress


def test_open_modal_blocks_session_commands(harness):
    with harness.gate.modal(ModalKind.SUBMIT_CONFIRMATION):
        assert harness.controller.dispatch("A") is False
        assert harness.controller.dispatch("N") is False
        assert harness.controller.dispatch("S") is False
        assert harness.controller.dispatch("F1") is False

    assert harness.session.answers == {}
    assert harness.session.current_index == 0
    assert harness.submit_requests == 0
    assert not harness.gate.is_blocked


def test_help_toggles_open_and_closed(harness):
    assert harness.controller.dispatch("F1") is True
    assert harness.gate.is_open(ModalKind.HELP)
    assert harness.help_toggles == [True]

    assert harness.controller.dispatch("N") is False
    assert harness.session.current_index == 0

    assert harness.controller.dispatch("Escape") is True
    assert not harness.gate.is_blocked
    assert harness.help_toggles == [True, False]


def test_keys_ignored_after_submission(harness):
    harness.session.submit()

    assert harness.controller.dispatch("A") is False
    assert harness.controller.dispatch("S") is False
    assert harness.submit_requests == 0


def test_modal_context_pops_on_error():
    gate = ModalGate()

    with pytest.raises(RuntimeError):
        with gate.modal(ModalKind.HELP):
            raise RuntimeError("boom")

    assert gate.top is None


def test_gate_pops_most_recent_kind():
    gate = ModalGate()
    gate.push(ModalKind.SUBMIT_CONFIRMATION)
    gate.push(ModalKind.HELP)

    assert gate.pop(ModalKind.SUBMIT_CONFIRMATION) is ModalKind.SUBMIT_CONFIRMATION
    assert gate.top is ModalKind.HELP
    assert gate.pop(ModalKind.SUBMIT_CONFIRMATION) is None
