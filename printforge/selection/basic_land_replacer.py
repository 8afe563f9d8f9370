"""
Forced basic land replacement.

Unlike the preference sequence, these replacers do not degrade to a no-op:
the caller asserts that every basic land in the deck is covered, and a gap
raises CoverageGapError.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from printforge.config import settings
from printforge.models.card import Card
from printforge.models.deck import Deck
from printforge.models.failure import CoverageGapError, InvariantViolationError
from printforge.selection.random_choice import MinimalRng, with_salt

logger = logging.getLogger(__name__)

V = TypeVar("V")

BasicLandReplacer = Callable[[Deck[V]], Deck[V]]


def from_versions(versions: Iterable[V]) -> BasicLandReplacer[V]:
    """
    Replace every basic land with its mapped version.

    Args:
        versions: At most one version per card

    Raises:
        InvariantViolationError: If two versions share a card (at construction)
        CoverageGapError: If the deck holds a basic land with no mapped
            version (when applied)
    """
    by_card: dict[Card, V] = {}
    for version in versions:
        card = version.card
        if card in by_card:
            raise InvariantViolationError(
                message=f"More than one replacement version for '{card.name}'",
                detail=f"{by_card[card]!r} and {version!r}",
            )
        by_card[card] = version

    def replace(deck: Deck[V]) -> Deck[V]:
        missing = {
            element.card.name
            for element in deck.get_all_cards()
            if element.card.is_basic and element.card not in by_card
        }
        if missing:
            logger.warning("forced_replacement_coverage_gap", extra={"missing": sorted(missing)})
            raise CoverageGapError(missing)
        return deck.transform(
            lambda version: by_card[version.card] if version.card.is_basic else version
        )

    return replace


def _sorted_if_orderable(group: list[V]) -> list[V]:
    try:
        return sorted(group)
    except TypeError:
        return group


def _group_by_card(versions: Iterable[V]) -> dict[Card, list[V]]:
    grouped: dict[Card, list[V]] = {}
    for version in versions:
        grouped.setdefault(version.card, []).append(version)
    return {card: _sorted_if_orderable(grouped[card]) for card in sorted(grouped)}


def _replace_with_random_choices(
    deck: Deck[V],
    versions_by_card: dict[Card, list[V]],
    rng: MinimalRng,
) -> Deck[V]:
    cards_in_deck = {element.card for element in deck.get_all_cards()}
    choices = [
        rng.choose(group) for card, group in versions_by_card.items() if card in cards_in_deck
    ]
    return from_versions(choices)(deck)


def from_versions_chosen_randomly(versions: Iterable[V]) -> BasicLandReplacer[V]:
    """
    Replace each basic land with one of its given versions, chosen per deck.

    Choices are drawn from one seeded stream in card order. Coverage gaps
    raise CoverageGapError exactly as in from_versions.
    """
    by_card = _group_by_card(versions)

    def replace(deck: Deck[V]) -> Deck[V]:
        rng = with_salt(settings.random_replacer_salt).for_deck(deck).stateful_rng()
        return _replace_with_random_choices(deck, by_card, rng)

    return replace


def choose_random_set(
    version_groups: Sequence[Iterable[V]],
    default_versions: Iterable[V],
) -> BasicLandReplacer[V]:
    """
    Pick one whole set of versions per deck, then one version per card.

    Args:
        version_groups: Alternative sets (e.g., one per art series)
        default_versions: Fill-ins for cards a chosen set lacks
    """
    defaults = list(default_versions)
    group_maps: list[dict[Card, list[V]]] = []
    for group in version_groups:
        by_card = _group_by_card(group)
        for version in defaults:
            by_card.setdefault(version.card, [version])
        group_maps.append({card: by_card[card] for card in sorted(by_card)})
    if not group_maps:
        raise ValueError("version_groups must not be empty")

    def replace(deck: Deck[Any]) -> Deck[Any]:
        set_choice, card_choice = with_salt(settings.random_set_salt).array_for_deck(deck, 2)
        chosen_group = set_choice.choose(group_maps)
        return _replace_with_random_choices(deck, chosen_group, card_choice.stateful_rng())

    return replace
