"""
Data models for flashquiz: the Card entity and the result types produced by
the quiz engine, the stats reporter and the card file importer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Card(BaseModel):
    """
    One term/definition flashcard with its mistake counter.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    term: str = Field(
        ...,
        min_length=1,
        description="Prompt shown during a quiz. Unique within a store.",
    )
    definition: str = Field(
        ...,
        min_length=1,
        description="Expected answer. Unique within a store.",
    )
    mistakes: int = Field(
        default=0,
        ge=0,
        description="Number of wrong answers given for this card.",
    )

    def record_mistake(self) -> None:
        """Increment the mistake counter by one."""
        self.mistakes += 1

    def reset_mistakes(self) -> None:
        self.mistakes = 0


class Verdict(Enum):
    """
    Classification of a single quiz answer.
    """

    CORRECT = "correct"
    WRONG_MATCHES_OTHER = "wrong_matches_other"
    WRONG = "wrong"


@dataclass(frozen=True)
class TrialResult:
    term: str
    expected: str
    answer: str
    verdict: Verdict
    other_term: Optional[str] = None

    @property
    def is_correct(self) -> bool:
        return self.verdict is Verdict.CORRECT


class HardestKind(Enum):
    NO_MISTAKES = "no_mistakes"
    SINGLE = "single"
    TIED = "tied"


@dataclass(frozen=True)
class HardestReport:
    """
    Outcome of a hardest-card scan.

    `terms` lists every card sharing the highest mistake count, in store
    order. It is empty when no card has been missed.
    """

    kind: HardestKind
    terms: Tuple[str, ...] = ()
    count: int = 0


@dataclass
class ImportSummary:
    """Counts produced by a card file import."""

    loaded: int = 0
    skipped: List[int] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
