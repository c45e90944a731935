"""
This module defines the CardStore class, the ordered collection that owns
every card of a session and enforces term and definition uniqueness.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from .exceptions import (
    CardNotFoundError,
    DuplicateDefinitionError,
    DuplicateTermError,
)
from .models import Card

logger = logging.getLogger(__name__)


class CardStore:
    """
    Insertion-ordered collection of cards addressed by term.

    Cards live in a dict keyed by term, so removal never shifts the
    identity of the remaining cards and iteration follows insertion order.
    """

    def __init__(self) -> None:
        self._cards: Dict[str, Card] = {}

    def add(self, term: str, definition: str) -> Card:
        """
        Append a new card with zero mistakes.

        Raises:
            DuplicateTermError: If a card already has `term`.
            DuplicateDefinitionError: If a card already has `definition`.
        """
        if self.has_term(term):
            raise DuplicateTermError(term)
        if self.has_definition(definition):
            raise DuplicateDefinitionError(definition)
        card = Card(term=term, definition=definition)
        self._cards[term] = card
        logger.debug(f"Added card '{term}'")
        return card

    def remove(self, term: str) -> Card:
        """
        Delete the card with `term`, keeping the order of the others.

        Raises:
            CardNotFoundError: If no card has `term`.
        """
        try:
            card = self._cards.pop(term)
        except KeyError:
            raise CardNotFoundError(term) from None
        logger.debug(f"Removed card '{term}'")
        return card

    def upsert_from_record(
        self, term: str, definition: str, mistakes: int = 0
    ) -> Card:
        """
        Replace any card holding `term` with a fresh card built from a file record.

        The old card is dropped whatever its definition, and the new card
        goes to the end of the store. Imported records are authoritative, so
        a definition already held by a different card is accepted as is.
        """
        card = Card(term=term, definition=definition, mistakes=mistakes)
        if self._cards.pop(term, None) is not None:
            logger.debug(f"Replacing card '{term}' from imported record")
        holder = self.find_by_definition(definition)
        if holder is not None:
            logger.warning(
                f"Imported card '{term}' shares its definition with '{holder.term}'"
            )
        self._cards[term] = card
        return card

    def get(self, term: str) -> Optional[Card]:
        return self._cards.get(term)

    def find_by_term(self, term: str) -> Optional[int]:
        """Return the position of the card with `term` in store order, or None."""
        for index, existing in enumerate(self._cards):
            if existing == term:
                return index
        return None

    def find_by_definition(self, definition: str) -> Optional[Card]:
        """Return the first card in store order whose definition matches exactly."""
        for card in self._cards.values():
            if card.definition == definition:
                return card
        return None

    def has_term(self, term: str) -> bool:
        return term in self._cards

    def has_definition(self, definition: str) -> bool:
        return self.find_by_definition(definition) is not None

    def all(self) -> Tuple[Card, ...]:
        return tuple(self._cards.values())

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.all())

    def __contains__(self, term: object) -> bool:
        return term in self._cards
