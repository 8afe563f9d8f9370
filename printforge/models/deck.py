"""
Deck model - an immutable, sectioned multiset.

INVARIANTS:
- Decks are values: every transform returns a new Deck
- Every stored count is >= 1; empty sections are dropped
- transform / flat_transform / transform_cards never change a section's
  total count, except flat_transform dropping elements mapped to None
"""

from collections import Counter
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar

C = TypeVar("C")
D = TypeVar("D")
V = TypeVar("V")


class Section(Enum):
    """Deck sections in canonical order."""

    COMMANDER = "Commander"
    COMPANION = "Companion"
    MAIN_DECK = "Deck"
    SIDEBOARD = "Sideboard"

    @property
    def label(self) -> str:
        return self.value

    @property
    def ordinal(self) -> int:
        return _SECTION_ORDER.index(self)

    @classmethod
    def from_label(cls, label: str) -> "Section | None":
        """Look up a section by label, ignoring case."""
        return _SECTIONS_BY_LABEL.get(label.lower())


_SECTION_ORDER: tuple[Section, ...] = tuple(Section)
_SECTIONS_BY_LABEL = {section.label.lower(): section for section in Section}


class Deck(Generic[C]):
    """
    Immutable mapping of Section -> multiset of elements.

    Elements are usually card versions, or wrappers such as DeckEntry.
    Equality ignores the order of elements within a section.
    """

    __slots__ = ("_sections",)

    def __init__(self, sections: Mapping[Section, Mapping[C, int]] | None = None) -> None:
        stored: dict[Section, Counter[C]] = {}
        for section in _SECTION_ORDER:
            cards = (sections or {}).get(section)
            if not cards:
                continue
            counter: Counter[C] = Counter()
            for element, count in cards.items():
                if count <= 0:
                    raise ValueError(f"Element {element!r} has invalid count {count} (must be > 0)")
                counter[element] += count
            stored[section] = counter
        self._sections = stored

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create_simple(cls, cards: Iterable[C], copies_of_each: int = 1) -> "Deck[C]":
        """Build a main-deck-only deck with the given copies of each card."""
        main: Counter[C] = Counter()
        for card in cards:
            main[card] += copies_of_each
        return cls({Section.MAIN_DECK: main})

    @staticmethod
    def builder() -> "DeckBuilder[Any]":
        return DeckBuilder()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, section: Section) -> Counter[C]:
        """Copy of one section's multiset (empty if absent)."""
        return Counter(self._sections.get(section, {}))

    def sections(self) -> Iterator[tuple[Section, Counter[C]]]:
        """Iterate over non-empty (section, multiset) pairs in canonical order."""
        for section, cards in self._sections.items():
            yield section, Counter(cards)

    def get_all_cards(self) -> Counter[C]:
        """Sum of all sections."""
        total: Counter[C] = Counter()
        for cards in self._sections.values():
            total.update(cards)
        return total

    def total_copies_of(self, element: C) -> int:
        return sum(cards.get(element, 0) for cards in self._sections.values())

    def section_sizes(self) -> dict[Section, int]:
        """Total count per non-empty section."""
        return {section: sum(cards.values()) for section, cards in self._sections.items()}

    def __len__(self) -> int:
        return sum(sum(cards.values()) for cards in self._sections.values())

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def transform(self, function: Callable[[C], D]) -> "Deck[D]":
        """Map every element; elements mapped to the same value merge counts."""
        return Deck(
            {
                section: _merge((function(element), count) for element, count in cards.items())
                for section, cards in self._sections.items()
            }
        )

    def flat_transform(self, function: Callable[[C], D | None]) -> "Deck[D]":
        """Map every element, dropping those mapped to None."""
        sections: dict[Section, Counter[D]] = {}
        for section, cards in self._sections.items():
            mapped = ((function(element), count) for element, count in cards.items())
            sections[section] = _merge(
                (element, count) for element, count in mapped if element is not None
            )
        return Deck(sections)

    def transform_cards(self, function: Callable[[C, int], Mapping[C, int] | None]) -> "Deck[C]":
        """
        Replace each (element, count) entry with a multiset of elements.

        Args:
            function: Receives an element and its count in one section;
                returns the multiset to put in its place, or None to keep
                the entry unchanged

        Returns:
            The transformed deck
        """
        sections: dict[Section, Counter[C]] = {}
        for section, cards in self._sections.items():
            result: Counter[C] = Counter()
            for element, count in cards.items():
                replacement = function(element, count)
                if replacement is None:
                    result[element] += count
                else:
                    result.update(replacement)
            sections[section] = result
        return Deck(sections)

    def to_cards(self) -> "Deck[Any]":
        """Project every element onto its logical card."""
        return self.transform(lambda element: element.card)

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._sections == other._sections

    def __hash__(self) -> int:
        return hash(
            frozenset(
                (section, frozenset(cards.items())) for section, cards in self._sections.items()
            )
        )

    def __repr__(self) -> str:
        parts = []
        for section, cards in self._sections.items():
            entries = "; ".join(f"{count}x {element}" for element, count in cards.items())
            parts.append(f"{section.name}=[{entries}]")
        return f"Deck({', '.join(parts)})"


def _merge(entries: Iterable[tuple[D, int]]) -> Counter[D]:
    merged: Counter[D] = Counter()
    for element, count in entries:
        merged[element] += count
    return merged


class DeckBuilder(Generic[C]):
    """Mutable accumulator for building a Deck."""

    def __init__(self) -> None:
        self._sections: dict[Section, Counter[C]] = {}

    def add_to(self, section: Section, element: C, copies: int = 1) -> "DeckBuilder[C]":
        self._sections.setdefault(section, Counter())[element] += copies
        return self

    def add_all(self, deck: Deck[C]) -> "DeckBuilder[C]":
        for section, cards in deck.sections():
            self._sections.setdefault(section, Counter()).update(cards)
        return self

    def build(self) -> Deck[C]:
        return Deck(self._sections)


@dataclass(frozen=True)
class DeckEntry(Generic[V]):
    """
    A deck element that may resolve to a card version.

    Entries carry payload beyond the version (a display name for unresolved
    entries, a free-form note). Replacing the version keeps the payload.

    Attributes:
        version: The resolved card version, or None if unresolved
        name: Display name of the entry
        note: Free-form annotation carried through transforms
    """

    version: V | None = None
    name: str | None = None
    note: str | None = None

    @property
    def card(self) -> Any:
        if self.version is None:
            raise AttributeError(f"Entry {self.name!r} has no resolved version")
        return self.version.card

    def with_version(self, version: V) -> "DeckEntry[V]":
        """Copy of this entry pointing at another version."""
        return replace(self, version=version, name=version.card.name)

    @classmethod
    def of(cls, version: V) -> "DeckEntry[V]":
        return cls(version=version, name=version.card.name)
