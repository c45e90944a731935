"""
Mistake statistics over a card store.
"""

import logging

from .models import HardestKind, HardestReport
from .store import CardStore

logger = logging.getLogger(__name__)


class StatsReporter:
    """Reports the hardest cards of a store and resets their counters."""

    def __init__(self, store: CardStore):
        self.store = store

    def hardest(self) -> HardestReport:
        """
        Find the card or cards with the highest mistake count.

        Returns:
            HardestReport: `NO_MISTAKES` when no card has been missed,
            `SINGLE` when one card holds the maximum, otherwise `TIED` with
            the terms in store order.
        """
        cards = self.store.all()
        max_mistakes = max((card.mistakes for card in cards), default=0)
        if max_mistakes == 0:
            return HardestReport(kind=HardestKind.NO_MISTAKES)

        terms = tuple(
            card.term for card in cards if card.mistakes == max_mistakes
        )
        kind = HardestKind.SINGLE if len(terms) == 1 else HardestKind.TIED
        return HardestReport(kind=kind, terms=terms, count=max_mistakes)

    def reset_all(self) -> None:
        for card in self.store:
            card.reset_mistakes()
        logger.info(f"Reset mistake counters for {len(self.store)} card(s)")


def describe_hardest(report: HardestReport) -> str:
    """Render a hardest-card report as the sentence shown to the user."""
    if report.kind is HardestKind.NO_MISTAKES:
        return "There are no cards with errors."
    if report.kind is HardestKind.SINGLE:
        return (
            f'The hardest card is "{report.terms[0]}". '
            f"You have {report.count} errors answering it."
        )
    terms = ", ".join(f'"{term}"' for term in report.terms)
    return (
        f"The hardest cards are {terms}. "
        f"You have {report.count} errors answering them."
    )
