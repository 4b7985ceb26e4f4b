"""Service grading answer sheets and keeping the submission log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from live_quiz.constants.quiz_constants import PODIUM_SIZE
from live_quiz.core.models import ResultSummary, SubmissionRecord


def grade_answers(answers: Sequence[int], answer_key: Sequence[int]) -> int:
    """Count answers matching the key position by position.

    Answers past the end of the key are ignored.
    """
    return sum(
        1
        for position, answer in enumerate(answers[: len(answer_key)])
        if answer == answer_key[position]
    )


class Scoreboard:
    """Append-only log of graded submissions for the current round."""

    def __init__(self) -> None:
        self._records: list[SubmissionRecord] = []

    def record_submission(
        self,
        display_name: str,
        answers: Sequence[int],
        answer_key: Sequence[int],
    ) -> SubmissionRecord:
        record = SubmissionRecord(
            name=display_name,
            score=grade_answers(answers, answer_key),
            total=len(answer_key),
            submitted_at=datetime.now(timezone.utc),
        )
        self._records.append(record)
        return record

    def get_results(self) -> list[SubmissionRecord]:
        """Most recent submission first."""
        return list(reversed(self._records))

    def get_top_scorers(self, limit: int = PODIUM_SIZE) -> list[SubmissionRecord]:
        """Highest score first; on ties the earlier submission ranks higher."""
        ranked = sorted(self._records, key=lambda r: (-r.score, r.submitted_at))
        return ranked[:limit]

    def get_summary(self) -> ResultSummary:
        return ResultSummary(
            total_submissions=len(self._records),
            perfect_submissions=sum(1 for r in self._records if r.is_perfect),
        )

    def clear(self) -> None:
        self._records.clear()
