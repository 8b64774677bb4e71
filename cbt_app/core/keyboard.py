"""Keyboard command surface for the exam session.

Keys are passed around as upper-case names (``"A"``, ``"N"``,
``"ARROWRIGHT"``, ``"F1"``) so the mapping can be tested without a GUI
toolkit. Blocking dialogs are tracked on a ``ModalGate``; the gate is
consulted once in ``KeyboardController.dispatch`` before any command runs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum, auto

from cbt_app.core.models import OPTION_LETTERS
from cbt_app.core.services.exam_session import Direction, ExamSession


class KeyCommand(Enum):
    SELECT_OPTION = auto()
    NEXT = auto()
    PREVIOUS = auto()
    OPEN_SUBMIT = auto()
    TOGGLE_HELP = auto()


class ModalKind(Enum):
    SUBMIT_CONFIRMATION = auto()
    HELP = auto()


_KEY_BINDINGS: dict[str, KeyCommand] = {
    "N": KeyCommand.NEXT,
    "ARROWRIGHT": KeyCommand.NEXT,
    "P": KeyCommand.PREVIOUS,
    "ARROWLEFT": KeyCommand.PREVIOUS,
    "S": KeyCommand.OPEN_SUBMIT,
    "F1": KeyCommand.TOGGLE_HELP,
    "ESCAPE": KeyCommand.TOGGLE_HELP,
}

# (label, keys) pairs shown in the shortcut reference.
SHORTCUT_REFERENCE: tuple[tuple[str, str], ...] = (
    ("Select Option", ", ".join(OPTION_LETTERS)),
    ("Next Question", "N / →"),
    ("Previous Question", "P / ←"),
    ("Submit Exam", "S"),
    ("Show / Close Help", "F1 / ESC"),
)


def resolve_key(key_name: str) -> tuple[KeyCommand, int | None] | None:
    """Map a key name to a command and its option position, if any."""
    key = key_name.upper()
    if len(key) == 1 and key in OPTION_LETTERS:
        return KeyCommand.SELECT_OPTION, OPTION_LETTERS.index(key)
    command = _KEY_BINDINGS.get(key)
    if command is None:
        return None
    return command, None


class ModalGate:
    """Stack of currently visible blocking dialogs."""

    def __init__(self) -> None:
        self._stack: list[ModalKind] = []

    def push(self, kind: ModalKind) -> None:
        self._stack.append(kind)

    def pop(self, kind: ModalKind | None = None) -> ModalKind | None:
        """Close the top dialog (or the most recent ``kind``) and return it."""
        if not self._stack:
            return None
        if kind is None:
            return self._stack.pop()
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index] is kind:
                return self._stack.pop(index)
        return None

    @property
    def top(self) -> ModalKind | None:
        return self._stack[-1] if self._stack else None

    @property
    def is_blocked(self) -> bool:
        return bool(self._stack)

    def is_open(self, kind: ModalKind) -> bool:
        return kind in self._stack

    @contextmanager
    def modal(self, kind: ModalKind) -> Iterator[None]:
        self.push(kind)
        try:
            yield
        finally:
            self.pop(kind)


class KeyboardController:
    """Routes key presses to session commands while no dialog blocks input."""

    def __init__(
        self,
        session: ExamSession,
        gate: ModalGate,
        on_open_submit: Callable[[], None],
        on_toggle_help: Callable[[bool], None],
    ) -> None:
        self._session = session
        self._gate = gate
        self._on_open_submit = on_open_submit
        self._on_toggle_help = on_toggle_help

    def dispatch(self, key_name: str) -> bool:
        """Handle one key press. Returns True when the key was consumed."""
        resolved = resolve_key(key_name)
        if resolved is None or not self._session.is_in_progress:
            return False
        command, position = resolved

        if self._gate.is_blocked:
            if command is KeyCommand.TOGGLE_HELP and self._gate.top is ModalKind.HELP:
                self._gate.pop(ModalKind.HELP)
                self._on_toggle_help(False)
                return True
            return False

        if command is KeyCommand.SELECT_OPTION:
            return self._session.select_option(position)
        if command is KeyCommand.NEXT:
            return self._session.navigate(Direction.NEXT)
        if command is KeyCommand.PREVIOUS:
            return self._session.navigate(Direction.PREVIOUS)
        if command is KeyCommand.OPEN_SUBMIT:
            self._on_open_submit()
            return True
        self._gate.push(ModalKind.HELP)
        self._on_toggle_help(True)
        return True
