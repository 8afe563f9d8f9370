"""
Card and printing models.

A Card is the name-level identity of a card. A card version is one concrete
realization of a Card: the edition record itself (paper), or a digital
product derived from it (MTGO, Arena). Every version kind exposes `.card`
and `.edition`, which is all the selection engine relies on.

INVARIANTS:
- All models are frozen (immutable after construction)
- A version's `.card` is the Card that owns its edition
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True, slots=True, order=True)
class Card:
    """
    A logical card, independent of printing.

    Ordered by name, then oracle ID, so iteration over cards is
    deterministic regardless of input order.

    Attributes:
        name: Canonical card name (e.g., "Forest")
        oracle_id: Scryfall oracle ID (stable across printings)
        type_line: Full type line (e.g., "Basic Land — Forest")
    """

    name: str
    oracle_id: UUID
    type_line: str = field(default="", compare=False)

    @property
    def supertypes(self) -> tuple[str, ...]:
        """Words before the main card type that Scryfall lists as supertypes."""
        front = self.type_line.split("//")[0].split("—")[0]
        return tuple(word for word in front.split() if word in _SUPERTYPES)

    @property
    def is_basic(self) -> bool:
        return "Basic" in self.supertypes

    @property
    def card(self) -> "Card":
        return self


_SUPERTYPES = frozenset({"Basic", "Legendary", "Ongoing", "Snow", "World"})


@dataclass(frozen=True, slots=True, order=True)
class Expansion:
    """
    A released set.

    Attributes:
        release_date: Date the set was released
        code: Set code (e.g., "ZNR")
        name: Set name (e.g., "Zendikar Rising")
    """

    release_date: date
    code: str
    name: str = field(default="", compare=False)


@dataclass(frozen=True, slots=True)
class CardEdition:
    """
    One printing record of a card in one expansion.

    An edition is itself a card version: the paper printing.

    Attributes:
        card: The logical card this edition prints
        scryfall_id: Scryfall ID of this printing
        expansion: Set this printing belongs to
        collector_number: Collector number within the set
        artists: Credited artists, in credit order
        rarity: Printed rarity (e.g., "common")
        frame: Frame style (e.g., "2015")
        watermark: Watermark name, if any
        illustration_id: Scryfall illustration ID, if known
        mtgo_ids: (MTGO catalog ID, is_foil) pairs for this printing
        arena_id: Arena card ID, if the printing exists on Arena
    """

    card: Card
    scryfall_id: UUID
    expansion: Expansion
    collector_number: str
    artists: tuple[str, ...] = ()
    rarity: str = "common"
    frame: str = "2015"
    watermark: str | None = None
    illustration_id: UUID | None = None
    mtgo_ids: tuple[tuple[int, bool], ...] = ()
    arena_id: int | None = None

    @property
    def edition(self) -> "CardEdition":
        return self

    @property
    def sort_key(self) -> tuple[date, str, str, str]:
        return (
            self.expansion.release_date,
            self.expansion.code,
            self.collector_number,
            str(self.scryfall_id),
        )

    def __lt__(self, other: "CardEdition") -> bool:
        if not isinstance(other, CardEdition):
            return NotImplemented
        return self.sort_key < other.sort_key

    def label(self) -> str:
        """Short human-readable label, e.g. "Forest (ZNR) 276"."""
        return f"{self.card.name} ({self.expansion.code}) {self.collector_number}"


@dataclass(frozen=True, slots=True)
class MtgoCard:
    """An MTGO product of an edition (one catalog ID, foil or not)."""

    edition: CardEdition
    mtgo_id: int
    is_foil: bool = False

    @property
    def card(self) -> Card:
        return self.edition.card

    def __lt__(self, other: "MtgoCard") -> bool:
        if not isinstance(other, MtgoCard):
            return NotImplemented
        return (self.edition.sort_key, self.is_foil, self.mtgo_id) < (
            other.edition.sort_key,
            other.is_foil,
            other.mtgo_id,
        )


@dataclass(frozen=True, slots=True)
class ArenaCard:
    """An Arena product of an edition."""

    edition: CardEdition
    arena_id: int

    @property
    def card(self) -> Card:
        return self.edition.card

    def __lt__(self, other: "ArenaCard") -> bool:
        if not isinstance(other, ArenaCard):
            return NotImplemented
        return self.arena_id < other.arena_id


class CardVersion(Protocol):
    """Anything with an owning Card and an edition record."""

    @property
    def card(self) -> Card: ...

    @property
    def edition(self) -> CardEdition: ...
