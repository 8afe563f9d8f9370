"""
Group Replacement With Availability.

Replaces every card of a predicate-selected group with one version per card,
for any cards (not only basic lands). There is no fallback sequence: if any
card of the group cannot be covered, the whole replacement is abandoned.

INVARIANTS:
- All-or-nothing: no partial replacement ever reaches the output
- Each card's count is its total across all deck sections
- Counts per section are preserved
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from printforge.models.card import Card
from printforge.models.catalog import CardVersionExtractor
from printforge.models.deck import Deck
from printforge.selection.availability import Availability
from printforge.selection.random_choice import with_salt

logger = logging.getLogger(__name__)

V = TypeVar("V")
T = TypeVar("T")


class GroupReplacementWithAvailability(Generic[V, T]):
    """
    Deck transform replacing a group of cards, subject to availability.

    Args:
        extractor: Maps cards to candidate versions
        output_ctor: Builds an output deck element from a version
        group_predicate: Selects which versions belong to the group
        availability: Checked against the output element of each candidate
            and the card's deck-wide count
        salt: Salt for this call site's seeded choices
    """

    def __init__(
        self,
        extractor: CardVersionExtractor[V],
        output_ctor: Callable[[V], T],
        group_predicate: Callable[[V], bool],
        availability: Availability[T],
        salt: int,
    ) -> None:
        required = (extractor, output_ctor, group_predicate, availability)
        if any(value is None for value in required):
            raise TypeError("extractor, output_ctor, group_predicate and availability are required")
        self.extractor = extractor
        self.output_ctor = output_ctor
        self.group_predicate = group_predicate
        self.availability = availability
        self.salt = salt

    def choose(self, deck: Deck[T]) -> dict[Card, V] | None:
        """
        Pick one version per group card in the deck.

        Returns:
            Card -> version for every card with group candidates, or None
            if any of them has no available candidate
        """
        versioned = deck.flat_transform(lambda element: element.version)
        cards = versioned.to_cards().get_all_cards()

        replacements: list[tuple[Card, list[V]]] = []
        for card in sorted(cards):
            candidates = list(filter(self.group_predicate, self.extractor.from_card(card)))
            if candidates:
                replacements.append((card, candidates))

        seeds = with_salt(self.salt).array_for_deck(versioned, len(replacements))
        choices: dict[Card, V] = {}
        for (card, candidates), seed in zip(replacements, seeds, strict=True):
            count = cards[card]
            choice = next(
                (
                    candidate
                    for candidate in seed.shuffle(candidates)
                    if self.availability(self.output_ctor(candidate), count)
                ),
                None,
            )
            if choice is None:
                logger.debug(
                    "group_replacement_aborted",
                    extra={"card": card.name, "count": count, "candidates": len(candidates)},
                )
                return None
            choices[card] = choice
        return choices

    def __call__(self, deck: Deck[T]) -> Deck[T]:
        choices = self.choose(deck)
        if not choices:
            return deck

        def replace_entry(element: T, count: int) -> dict[T, int] | None:
            version = element.version
            if version is None:
                return None
            choice = choices.get(version.card)
            return None if choice is None else {self.output_ctor(choice): count}

        logger.debug("group_replacement_applied", extra={"cards": len(choices)})
        return deck.transform_cards(replace_entry)
