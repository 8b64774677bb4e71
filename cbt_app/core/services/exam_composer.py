"""Service that materializes the question sequence of a new exam."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
import random

from cbt_app.core.models import BlueprintEntry, Question

logger = logging.getLogger(__name__)


class ExamComposer:
    """Selects a shuffled set of questions per subject from a shared pool."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def set_seed(self, seed: int | None) -> None:
        self._rng.seed(seed)

    def compose(self, pool: Sequence[Question], blueprint: Iterable[BlueprintEntry]) -> list[Question]:
        """Return the ordered questions for one exam instance.

        Subjects are taken in blueprint order. When a subject has fewer
        questions than requested, every available question is used.
        """
        selected: list[Question] = []
        for entry in blueprint:
            candidates = [question for question in pool if question.subject == entry.subject]
            self._rng.shuffle(candidates)
            wanted = max(0, entry.question_count)
            if len(candidates) < wanted:
                logger.warning(
                    "Only %d %s questions available, blueprint asks for %d",
                    len(candidates),
                    entry.subject,
                    wanted,
                )
            selected.extend(candidates[:wanted])
        return selected
