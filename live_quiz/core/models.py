"""Domain models for the quiz coordinator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RoundState(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"


@dataclass(slots=True)
class QuizQuestion:
    """Question with the correct option merged into its options."""

    position: int
    prompt: str
    options: list[str]
    correct_option_text: str | None
    correct_option_index: int


@dataclass(slots=True, frozen=True)
class SubmissionRecord:
    """Graded answer sheet; ``total`` is captured when grading happens."""

    name: str
    score: int
    total: int
    submitted_at: datetime

    @property
    def is_perfect(self) -> bool:
        return self.score == self.total

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "score": self.score,
            "total": self.total,
            "timestamp": self.submitted_at.isoformat(),
            "perfect": self.is_perfect,
        }


@dataclass(slots=True, frozen=True)
class QuizStatus:
    """Snapshot polled by participants and the admin dashboard."""

    round_state: RoundState
    lobby: list[str]
    session_id: str

    @property
    def active(self) -> bool:
        return self.round_state is RoundState.ACTIVE


@dataclass(slots=True, frozen=True)
class ResultSummary:
    total_submissions: int
    perfect_submissions: int


@dataclass(slots=True, frozen=True)
class RoundPolicy:
    """Behaviour switches for cases the observed system left undecided."""

    strict_answer_key: bool = False
    accept_waiting_submissions: bool = False
    results_require_token: bool = False
