"""Flashquiz - A terminal flashcard trainer."""

import logging

from .models import Card, Verdict, TrialResult, HardestKind, HardestReport
from .store import CardStore
from .quiz import QuizEngine
from .stats import StatsReporter
from .persistence import CardFileFormat, export_cards, import_cards
from .transcript import SessionTranscript
from .session import SessionController, create_session

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Card",
    "Verdict",
    "TrialResult",
    "HardestKind",
    "HardestReport",
    "CardStore",
    "QuizEngine",
    "StatsReporter",
    "CardFileFormat",
    "export_cards",
    "import_cards",
    "SessionTranscript",
    "SessionController",
    "create_session",
]
