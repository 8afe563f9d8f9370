"""
Artist Diversity Grouper.

Modifies decks to use basic land versions (from a chosen group of editions)
all by the same artist. Such a group usually has some artists illustrating
many lands and some illustrating few. Where possible, use the lands of the
artist with the SMALLEST set; ties are broken by a seeded shuffle.

This gives artists who illustrated fewer lands more exposure whenever a
deck needs only those lands.

INVARIANTS:
- Within one predicate, a smaller artist group always precedes a larger one
- Random order is kept only among groups of equal size
- Every edition feeding the grouper credits exactly one artist
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, Generic, TypeVar

from printforge.config import BASIC_LAND_TYPES, SNOW_COVERED_PREFIX, settings
from printforge.models.card import Card, CardEdition
from printforge.models.catalog import CardVersionExtractor, Spoiler
from printforge.models.deck import Deck, Section
from printforge.models.failure import ArtistAttributionError, CardNotFoundError
from printforge.selection.availability import unlimited_availability
from printforge.selection.preference_sequence import PreferenceContext, PreferenceSequence
from printforge.selection.random_choice import DeckRandomChoice, with_salt

logger = logging.getLogger(__name__)

V = TypeVar("V")

EditionPredicate = Callable[[CardEdition], bool]
DeckModifier = Callable[[Deck[Any]], Deck[Any]]


def _look_up_all(spoiler: Spoiler, names: Iterable[str]) -> list[Card]:
    cards = []
    for name in names:
        card = spoiler.look_up_by_name(name)
        if card is None:
            raise CardNotFoundError(name)
        cards.append(card)
    return cards


def _all_cards(_spoiler: Spoiler) -> list[Card]:
    raise NotImplementedError("The ALL_CARDS scope is not supported")


class Scope(Enum):
    """Which cards the grouper considers."""

    NORMAL_BASIC_LANDS = "normal_basic_lands"
    BASIC_SNOW_LANDS = "basic_snow_lands"
    ALL_BASIC_LANDS = "all_basic_lands"
    ALL_CARDS = "all_cards"

    def cards(self, spoiler: Spoiler) -> list[Card]:
        """Cards in scope, in a stable order."""
        if self is Scope.NORMAL_BASIC_LANDS:
            return _look_up_all(spoiler, BASIC_LAND_TYPES)
        if self is Scope.BASIC_SNOW_LANDS:
            return _look_up_all(spoiler, (SNOW_COVERED_PREFIX + name for name in BASIC_LAND_TYPES))
        if self is Scope.ALL_BASIC_LANDS:
            return spoiler.basic_lands()
        return _all_cards(spoiler)


class ArtistGroupCategory(Generic[V]):
    """The artist groups of one edition predicate; groups never overlap."""

    def __init__(self, groups: Sequence[frozenset[V]]) -> None:
        self.groups = tuple(groups)

    def shuffle(self, choice: DeckRandomChoice) -> list[Callable[[V], bool]]:
        """
        Order groups smallest-first, random among equal sizes.

        Returns:
            One membership predicate per group, in preference order
        """
        order = list(self.groups)
        if len(order) > 1:
            order = choice.shuffle(order)
            order.sort(key=len)
        return [group.__contains__ for group in order]

    def __len__(self) -> int:
        return len(self.groups)


class MinimalArtistGrouper(Generic[V]):
    """
    Builds a preference sequence of same-artist groups, smallest first.

    Args:
        spoiler: Catalog snapshot
        extractor: Maps editions to versions of the target kind
        predicates: Edition predicates, each typically one expansion;
            all of the first predicate's groups precede the second's
        scope: Which cards to group
        default_to_any_artist: If no single artist covers the deck, fall
            back to mixing every group's versions
    """

    def __init__(
        self,
        spoiler: Spoiler,
        extractor: CardVersionExtractor[V],
        predicates: Iterable[EditionPredicate],
        scope: Scope = Scope.NORMAL_BASIC_LANDS,
        default_to_any_artist: bool = False,
    ) -> None:
        if spoiler is None or extractor is None or scope is None:
            raise TypeError("spoiler, extractor and scope are required")
        self.spoiler = spoiler
        self.extractor = extractor
        self.predicates = tuple(predicates)
        self.scope = scope
        self.default_to_any_artist = default_to_any_artist

    def get_artist_groups(self, predicate: EditionPredicate) -> ArtistGroupCategory[V]:
        """
        Partition the in-scope versions matching a predicate by artist.

        Raises:
            ArtistAttributionError: If a matched edition does not credit
                exactly one artist
        """
        by_artist: dict[str, dict[V, None]] = {}
        for card in self.scope.cards(self.spoiler):
            for edition in self.spoiler.get_editions(card):
                if not predicate(edition):
                    continue
                for version in self.extractor.from_edition(edition):
                    artists = version.edition.artists
                    if len(artists) != 1:
                        raise ArtistAttributionError(version.edition.label(), artists)
                    by_artist.setdefault(artists[0], {})[version] = None

        logger.debug(
            "artist_groups_built",
            extra={
                "artists": len(by_artist),
                "sizes": sorted(len(group) for group in by_artist.values()),
            },
        )
        return ArtistGroupCategory([frozenset(group) for group in by_artist.values()])

    def build_sequence(
        self,
        deck: Deck[Any],
        categories: Sequence[ArtistGroupCategory[V]],
    ) -> PreferenceSequence[V]:
        """Preference sequence for one deck: every category's groups, in order."""
        seeds = with_salt(settings.artist_grouper_salt).array_for_deck(deck, len(categories))
        criteria: list[Callable[[V], bool]] = []
        for category, seed in zip(categories, seeds, strict=True):
            criteria.extend(category.shuffle(seed))
        context = PreferenceContext(
            self.spoiler,
            self.extractor,
            unlimited_availability(),
            cards=self.scope.cards(self.spoiler),
        )
        return context.build(criteria, default_by_mixing_all=self.default_to_any_artist)

    def get_modifier(self) -> DeckModifier:
        """Deck -> deck transform; groups are computed once, up front."""
        categories = [self.get_artist_groups(predicate) for predicate in self.predicates]

        def modify(deck: Deck[Any]) -> Deck[Any]:
            return self.build_sequence(deck, categories).apply(deck)

        return modify

    @classmethod
    def for_commander(cls, spoiler: Spoiler, extractor: CardVersionExtractor[V]) -> DeckModifier:
        """
        Match basic lands to the commander's expansion.

        If the commander section is printed in exactly one expansion, group
        all basic lands of that expansion by artist, falling back to mixing
        artists. Otherwise the deck passes through unchanged.
        """

        def modify(deck: Deck[Any]) -> Deck[Any]:
            expansions = {version.edition.expansion for version in deck.get(Section.COMMANDER)}
            if len(expansions) != 1:
                return deck
            (expansion,) = expansions
            grouper = cls(
                spoiler,
                extractor,
                [lambda edition: edition.expansion == expansion],
                scope=Scope.ALL_BASIC_LANDS,
                default_to_any_artist=True,
            )
            return grouper.get_modifier()(deck)

        return modify
