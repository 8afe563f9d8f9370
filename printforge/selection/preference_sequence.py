"""
Preference Sequence Engine.

Chooses one version per card for a whole deck by trying an ordered list of
preference steps. A step succeeds only if EVERY applicable card in the deck
gets a version that the availability function accepts for that card's
deck-wide count; the first successful step wins.

INVARIANTS:
- Step priority: once step k succeeds, later steps are never consulted
- Cards are processed in sorted order, so results never depend on the
  deck's element order
- Ties among a step's candidates are broken by a per-card seeded shuffle
- An assignment never maps a card to another card's version
- A miss is not an error: apply() returns the deck unchanged
"""

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from printforge.config import settings
from printforge.models.card import Card
from printforge.models.catalog import CardVersionExtractor, Spoiler
from printforge.models.deck import Deck
from printforge.models.failure import InvariantViolationError
from printforge.selection.availability import Availability
from printforge.selection.random_choice import DeckRandomChoice, with_salt

logger = logging.getLogger(__name__)

V = TypeVar("V")
E = TypeVar("E")

Predicate = Callable[[V], bool]
Assignment = dict[Card, V]


def _dedupe(versions: Iterable[V]) -> tuple[V, ...]:
    return tuple(dict.fromkeys(versions))


@dataclass(frozen=True)
class PreferenceStep(Generic[V]):
    """
    One stage of the fallback sequence: admissible versions per card.

    INVARIANT: every version is indexed under its own card.
    Violations are raised at construction time.
    """

    versions: Mapping[Card, tuple[V, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {
            card: tuple(candidates) for card, candidates in self.versions.items() if candidates
        }
        for card, candidates in frozen.items():
            for version in candidates:
                owner = version.card
                if owner != card:
                    raise InvariantViolationError(
                        message=f"Version of '{owner.name}' indexed under '{card.name}'",
                        detail=repr(version),
                    )
        object.__setattr__(self, "versions", frozen)

    def get(self, card: Card) -> tuple[V, ...]:
        return self.versions.get(card, ())

    @classmethod
    def from_versions(cls, versions: Iterable[V]) -> "PreferenceStep[V]":
        """Index a flat list of versions by their cards."""
        grouped: dict[Card, list[V]] = {}
        for version in versions:
            grouped.setdefault(version.card, []).append(version)
        return cls({card: tuple(group) for card, group in grouped.items()})


class PreferenceSequence(Generic[V]):
    """
    Ordered preference steps plus an availability constraint.

    Args:
        steps: Steps in priority order
        availability: (version, requested count) -> bool
        default_by_mixing_all: After every step fails, try once more with
            each card's candidates pooled across all steps
    """

    def __init__(
        self,
        steps: Sequence[PreferenceStep[V]],
        availability: Availability[V],
        default_by_mixing_all: bool = False,
    ) -> None:
        if availability is None:
            raise TypeError("availability must not be None")
        self.steps = tuple(steps)
        self.availability = availability
        self.default_by_mixing_all = default_by_mixing_all

        pooled: dict[Card, list[V]] = {}
        for step in self.steps:
            for card, candidates in step.versions.items():
                pooled.setdefault(card, []).extend(candidates)
        self._applicable: dict[Card, tuple[V, ...]] = {
            card: _dedupe(candidates) for card, candidates in pooled.items()
        }

    @property
    def applicable_cards(self) -> frozenset[Card]:
        """Cards with at least one candidate in some step."""
        return frozenset(self._applicable)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, deck: Deck[Any]) -> Assignment[V] | None:
        """
        Choose a version for every applicable card in the deck.

        Args:
            deck: Deck whose elements expose `.card`

        Returns:
            Card -> chosen version, or None if no step (and no pooled
            fallback, when enabled) covers the whole deck
        """
        seed = with_salt(settings.preference_sequence_salt).for_deck(deck)
        all_cards = deck.to_cards().get_all_cards()
        in_deck = Counter(
            {card: count for card, count in all_cards.items() if card in self._applicable}
        )

        for index, step in enumerate(self.steps):
            chosen = self._attempt_choice(in_deck, step.get, seed)
            if chosen is not None:
                logger.debug(
                    "preference_step_matched",
                    extra={"step": index, "step_count": len(self.steps), "cards": len(chosen)},
                )
                return chosen

        if self.default_by_mixing_all:
            chosen = self._attempt_choice(in_deck, self._pooled_candidates, seed)
            if chosen is not None:
                logger.debug(
                    "preference_sequence_fallback_matched",
                    extra={"step_count": len(self.steps), "cards": len(chosen)},
                )
                return chosen

        logger.debug(
            "preference_sequence_unmatched",
            extra={"step_count": len(self.steps), "cards": len(in_deck)},
        )
        return None

    def _pooled_candidates(self, card: Card) -> tuple[V, ...]:
        return self._applicable.get(card, ())

    def _attempt_choice(
        self,
        in_deck: Counter[Card],
        candidates_for: Callable[[Card], Sequence[V]],
        seed: DeckRandomChoice,
    ) -> Assignment[V] | None:
        """Full-assignment attempt for one step; None on the first uncovered card."""
        chosen: Assignment[V] = {}
        for card in sorted(in_deck):
            count = in_deck[card]
            shuffled = seed.for_card(card).shuffle(candidates_for(card))
            match = next(
                (version for version in shuffled if self.availability(version, count)), None
            )
            if match is None:
                return None
            chosen[card] = match
        return chosen

    # -------------------------------------------------------------------------
    # Deck transforms
    # -------------------------------------------------------------------------

    def apply(self, deck: Deck[V]) -> Deck[V]:
        """Replace every matched version; unchanged deck on a miss."""
        chosen = self.resolve(deck)
        if chosen is None:
            return deck
        return deck.transform(lambda version: chosen.get(version.card, version))

    def apply_to_elements(
        self,
        deck: Deck[E],
        element_ctor: Callable[[V], E] | None = None,
    ) -> Deck[E]:
        """
        Replace the version inside each matched deck element.

        Elements without a version take no part in the resolution and pass
        through unchanged, as do elements whose card was not matched.

        Args:
            deck: Deck of elements exposing an optional `.version`
            element_ctor: Builds the output element for a chosen version.
                If None, each element is re-wrapped with `with_version`,
                which keeps its payload (name, note)
        """
        versioned: Deck[V] = deck.flat_transform(lambda element: element.version)
        chosen = self.resolve(versioned)
        if chosen is None:
            return deck

        def replace_element(element: E) -> E:
            version = element.version
            if version is None:
                return element
            replacement = chosen.get(version.card)
            if replacement is None:
                return element
            if element_ctor is None:
                return element.with_version(replacement)
            return element_ctor(replacement)

        return deck.transform(replace_element)

    def __call__(self, deck: Deck[V]) -> Deck[V]:
        return self.apply(deck)


class PreferenceContext(Generic[V]):
    """
    Shared inputs for building preference sequences over one catalog.

    Args:
        spoiler: Catalog snapshot
        extractor: Maps cards to versions of the target kind
        availability: Availability constraint applied to every sequence
        cards: Cards the sequences cover; defaults to the catalog's basic lands
    """

    def __init__(
        self,
        spoiler: Spoiler,
        extractor: CardVersionExtractor[V],
        availability: Availability[V],
        cards: Iterable[Card] | None = None,
    ) -> None:
        if spoiler is None or extractor is None or availability is None:
            raise TypeError("spoiler, extractor and availability are required")
        self.spoiler = spoiler
        self.extractor = extractor
        self.availability = availability
        if cards is None:
            self.cards = tuple(spoiler.basic_lands())
        else:
            self.cards = tuple(sorted(set(cards)))

    def step_for(self, criterion: Predicate[V]) -> PreferenceStep[V]:
        """Versions of each covered card that satisfy the criterion."""
        return PreferenceStep(
            {
                card: tuple(filter(criterion, self.extractor.from_card(card)))
                for card in self.cards
            }
        )

    def build(
        self,
        criteria: Iterable[Predicate[V]],
        default_by_mixing_all: bool = False,
    ) -> PreferenceSequence[V]:
        """One step per criterion, in the given order."""
        steps = [self.step_for(criterion) for criterion in criteria]
        return PreferenceSequence(steps, self.availability, default_by_mixing_all)
