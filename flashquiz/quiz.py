"""
This module defines the QuizEngine class, which draws random cards from a
CardStore, grades the answers typed for them and records mistakes.
"""

import logging
import random
from typing import Callable, Iterator, Optional

from .exceptions import InsufficientCardsError, InvalidTrialCountError
from .models import Card, TrialResult, Verdict
from .store import CardStore

logger = logging.getLogger(__name__)

AnswerProvider = Callable[[Card], str]


class QuizEngine:
    """
    Runs quiz trials against a card store.

    Each trial samples one card uniformly from the store as it is at that
    moment. Only mistake counters change while a quiz runs; the store's
    membership and order are left alone.
    """

    def __init__(self, store: CardStore, rng: Optional[random.Random] = None):
        """
        Parameters:
            store (CardStore): Cards to quiz on.
            rng (Optional[random.Random]): Source of randomness. Pass a seeded
                instance for repeatable sessions; defaults to a fresh one.
        """
        self.store = store
        self.rng = rng if rng is not None else random.Random()

    def draw(self) -> Card:
        """
        Pick one card uniformly over the whole store.

        Raises:
            InsufficientCardsError: If the store holds no cards.
        """
        cards = self.store.all()
        if not cards:
            raise InsufficientCardsError("Not enough cards.")
        return cards[self.rng.randrange(len(cards))]

    def grade(self, card: Card, answer: str) -> TrialResult:
        """
        Classify `answer` for `card` and record a mistake when it is wrong.

        An exact match with the card's definition is correct. A wrong answer
        that exactly matches another card's definition names that card's
        term in the result.

        Returns:
            TrialResult: The verdict together with the expected definition.
        """
        if answer == card.definition:
            return TrialResult(
                term=card.term,
                expected=card.definition,
                answer=answer,
                verdict=Verdict.CORRECT,
            )

        card.record_mistake()
        owner = self.store.find_by_definition(answer)
        if owner is not None and owner.term != card.term:
            verdict = Verdict.WRONG_MATCHES_OTHER
            other_term: Optional[str] = owner.term
        else:
            verdict = Verdict.WRONG
            other_term = None
        logger.debug(
            f"Wrong answer for '{card.term}' ({verdict.value}); "
            f"mistakes now {card.mistakes}"
        )
        return TrialResult(
            term=card.term,
            expected=card.definition,
            answer=answer,
            verdict=verdict,
            other_term=other_term,
        )

    def run(
        self, trials: int, answer_for: AnswerProvider
    ) -> Iterator[TrialResult]:
        """
        Run `trials` independent trials, yielding one result per trial in order.

        The store is checked before any trial, so an empty store fails even
        when `trials` is zero. `answer_for` is called with the drawn card and
        must return the user's answer; any exception it raises ends the quiz.

        Raises:
            InsufficientCardsError: If the store holds no cards.
            InvalidTrialCountError: If `trials` is negative.
        """
        if self.store.is_empty():
            raise InsufficientCardsError("Not enough cards.")
        if trials < 0:
            raise InvalidTrialCountError(
                f"Number of questions must not be negative, got {trials}."
            )

        logger.info(
            f"Starting quiz with {trials} trial(s) over {len(self.store)} card(s)"
        )
        return self._trials(trials, answer_for)

    def _trials(
        self, trials: int, answer_for: AnswerProvider
    ) -> Iterator[TrialResult]:
        for _ in range(trials):
            card = self.draw()
            yield self.grade(card, answer_for(card))
