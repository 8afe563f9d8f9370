"""
In-memory catalog of cards and their printings.

The Spoiler is a read-only snapshot: cards, name lookup, and the editions
of each card in release order. Version extractors turn cards or editions
into the card versions of one kind (paper editions, MTGO, Arena).
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from printforge.models.card import ArenaCard, Card, CardEdition, MtgoCard
from printforge.models.failure import InvariantViolationError

V = TypeVar("V")


class Spoiler:
    """
    Immutable snapshot of the card catalog.

    Built from edition records; each edition's card becomes part of the
    catalog. Two distinct cards may not share a name.
    """

    def __init__(self, editions: Iterable[CardEdition]) -> None:
        by_card: dict[Card, list[CardEdition]] = {}
        by_name: dict[str, Card] = {}
        for edition in editions:
            card = edition.card
            existing = by_name.get(card.name)
            if existing is not None and existing != card:
                raise InvariantViolationError(
                    message=f"Two cards share the name '{card.name}'",
                    detail=f"{existing.oracle_id} and {card.oracle_id}",
                )
            by_name[card.name] = card
            by_card.setdefault(card, []).append(edition)

        self._editions = {card: tuple(sorted(group)) for card, group in by_card.items()}
        self._by_name = by_name

    def get_cards(self) -> frozenset[Card]:
        """All logical cards in the catalog."""
        return frozenset(self._editions)

    def look_up_by_name(self, name: str) -> Card | None:
        """Find a card by exact name. Returns None if absent."""
        return self._by_name.get(name)

    def get_editions(self, card: Card) -> tuple[CardEdition, ...]:
        """Editions of a card in release order (empty if unknown)."""
        return self._editions.get(card, ())

    def basic_lands(self) -> list[Card]:
        """All basic land cards, sorted."""
        return sorted(card for card in self._editions if card.is_basic)

    def __len__(self) -> int:
        return len(self._editions)


class CardVersionExtractor(Generic[V]):
    """
    Maps catalog records to card versions of one kind.

    Args:
        spoiler: Catalog supplying each card's editions
        from_edition: Function yielding the versions of one edition
    """

    def __init__(
        self,
        spoiler: Spoiler,
        from_edition: Callable[[CardEdition], Iterable[V]],
    ) -> None:
        self.spoiler = spoiler
        self._from_edition = from_edition

    def from_edition(self, edition: CardEdition) -> list[V]:
        """Versions of a single printing record."""
        return list(self._from_edition(edition))

    def from_card(self, card: Card) -> list[V]:
        """Versions of every edition of a card, in edition order."""
        return [
            version
            for edition in self.spoiler.get_editions(card)
            for version in self._from_edition(edition)
        ]

    def from_cards(self, cards: Iterable[Card]) -> Iterator[V]:
        for card in cards:
            yield from self.from_card(card)

    def get_all(self) -> list[V]:
        """Versions of every card in the catalog, cards in sorted order."""
        return list(self.from_cards(sorted(self.spoiler.get_cards())))


def card_editions(spoiler: Spoiler) -> CardVersionExtractor[CardEdition]:
    """Extractor whose versions are the edition records themselves."""
    return CardVersionExtractor(spoiler, lambda edition: (edition,))


def mtgo_cards(spoiler: Spoiler) -> CardVersionExtractor[MtgoCard]:
    """Extractor for MTGO products (foil and non-foil) of each edition."""
    return CardVersionExtractor(
        spoiler,
        lambda edition: [
            MtgoCard(edition, mtgo_id, is_foil) for mtgo_id, is_foil in edition.mtgo_ids
        ],
    )


def arena_cards(spoiler: Spoiler) -> CardVersionExtractor[ArenaCard]:
    """Extractor for Arena products; editions not on Arena yield nothing."""
    return CardVersionExtractor(
        spoiler,
        lambda edition: [] if edition.arena_id is None else [ArenaCard(edition, edition.arena_id)],
    )
