"""
Tests for the deterministic choice source.

These tests verify:
- Same salt + deck → same seed, shuffle and pick
- Seeds ignore element order and printing choice within a deck
- Different salts, decks and cards get different seeds
- Shuffles are permutations; draws stay in bounds
"""

from collections import Counter
from uuid import UUID

import pytest

from printforge.models.card import Card, CardEdition
from printforge.models.deck import Deck, Section
from printforge.selection.random_choice import (
    MASK_64,
    DeckRandomChoice,
    SplitMix64,
    generate_salt,
    with_salt,
)

SALT = 0x1234_5678_9ABC_DEF0


@pytest.fixture
def deck(editions: dict[str, CardEdition]) -> Deck[CardEdition]:
    return (
        Deck.builder()
        .add_to(Section.MAIN_DECK, editions["M21 Forest"], 4)
        .add_to(Section.MAIN_DECK, editions["M21 Island"], 4)
        .add_to(Section.MAIN_DECK, editions["M21 Llanowar Elves"], 4)
        .build()
    )


# =============================================================================
# SPLITMIX64
# =============================================================================


class TestSplitMix64:
    def test_same_seed_same_stream(self) -> None:
        first = SplitMix64(42)
        second = SplitMix64(42)

        assert [first.next_int64() for _ in range(5)] == [second.next_int64() for _ in range(5)]

    def test_outputs_are_64_bit(self) -> None:
        rng = SplitMix64(MASK_64)

        for _ in range(100):
            assert 0 <= rng.next_int64() <= MASK_64

    def test_generate_int_within_bound(self) -> None:
        rng = SplitMix64(7)

        draws = [rng.generate_int(6) for _ in range(600)]

        assert all(0 <= draw < 6 for draw in draws)
        assert set(draws) == set(range(6))

    def test_generate_int_rejects_non_positive_bound(self) -> None:
        with pytest.raises(ValueError):
            SplitMix64(1).generate_int(0)

    def test_adjacent_seeds_diverge(self) -> None:
        """Adjacent seeds must not produce correlated first draws."""
        first_bits = {SplitMix64(1000 + n).generate_int(2) for n in range(32)}

        assert first_bits == {0, 1}


# =============================================================================
# SHUFFLE / CHOOSE
# =============================================================================


class TestShuffleAndChoose:
    def test_shuffle_is_permutation(self) -> None:
        items = list(range(20))

        shuffled = DeckRandomChoice(99).shuffle(items)

        assert sorted(shuffled) == items
        assert items == list(range(20))  # input untouched

    def test_shuffle_is_pure(self) -> None:
        choice = DeckRandomChoice(99)

        assert choice.shuffle("abcdefgh") == choice.shuffle("abcdefgh")

    def test_choose_is_pure(self) -> None:
        choice = DeckRandomChoice(1234)

        assert choice.choose(["a", "b", "c", "d"]) == choice.choose(["a", "b", "c", "d"])

    def test_choose_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            DeckRandomChoice(1).choose([])

    def test_shuffle_of_short_lists(self) -> None:
        assert DeckRandomChoice(5).shuffle([]) == []
        assert DeckRandomChoice(5).shuffle(["only"]) == ["only"]

    def test_different_seeds_give_different_orders(self) -> None:
        items = list(range(10))

        orders = {tuple(DeckRandomChoice(seed).shuffle(items)) for seed in range(8)}

        assert len(orders) > 1


# =============================================================================
# DECK HASHING
# =============================================================================


class TestDeckHasher:
    def test_same_deck_same_seed(self, deck: Deck[CardEdition]) -> None:
        assert with_salt(SALT).for_deck(deck).seed == with_salt(SALT).for_deck(deck).seed

    def test_seed_ignores_element_order(self, editions: dict[str, CardEdition]) -> None:
        forward = Deck(
            {Section.MAIN_DECK: {editions["M21 Forest"]: 4, editions["M21 Island"]: 3}}
        )
        backward = Deck(
            {Section.MAIN_DECK: {editions["M21 Island"]: 3, editions["M21 Forest"]: 4}}
        )

        assert with_salt(SALT).digest_deck(forward) == with_salt(SALT).digest_deck(backward)

    def test_seed_depends_on_cards_not_printings(self, editions: dict[str, CardEdition]) -> None:
        """Re-printing a deck keeps its seed, so resolution is idempotent."""
        m21 = Deck.create_simple([editions["M21 Forest"]], 4)
        znr = Deck.create_simple([editions["ZNR Forest 278"]], 4)

        assert with_salt(SALT).digest_deck(m21) == with_salt(SALT).digest_deck(znr)

    def test_mixed_printings_ignore_insertion_order(
        self, editions: dict[str, CardEdition]
    ) -> None:
        """Equal decks holding two printings of one card hash equal."""
        hasher = with_salt(SALT)
        m21, znr = editions["M21 Forest"], editions["ZNR Forest 276"]

        for n in range(1, 40):
            forward = Deck({Section.MAIN_DECK: {m21: n, znr: n + 1}})
            backward = Deck({Section.MAIN_DECK: {znr: n + 1, m21: n}})

            assert forward == backward
            assert hasher.digest_deck(forward) == hasher.digest_deck(backward)

    def test_mixed_printings_hash_like_one_printing(
        self, editions: dict[str, CardEdition]
    ) -> None:
        """A deck hashes like its output once every Forest shares one printing."""
        mixed = Deck(
            {Section.MAIN_DECK: {editions["ZNR Forest 276"]: 2, editions["ZNR Forest 278"]: 2}}
        )
        single = Deck.create_simple([editions["M21 Forest"]], 4)

        assert with_salt(SALT).digest_deck(mixed) == with_salt(SALT).digest_deck(single)

    def test_seed_depends_on_counts_and_sections(
        self, editions: dict[str, CardEdition]
    ) -> None:
        hasher = with_salt(SALT)
        four = Deck.create_simple([editions["M21 Forest"]], 4)
        five = Deck.create_simple([editions["M21 Forest"]], 5)
        sideboard = Deck({Section.SIDEBOARD: {editions["M21 Forest"]: 4}})

        assert len({hasher.digest_deck(d) for d in (four, five, sideboard)}) == 3

    def test_different_salts_different_seeds(self, deck: Deck[CardEdition]) -> None:
        assert with_salt(1).for_deck(deck).seed != with_salt(2).for_deck(deck).seed

    def test_card_decks_hash_like_version_decks(
        self, deck: Deck[CardEdition], cards: dict[str, Card]
    ) -> None:
        card_deck = Deck(
            {
                Section.MAIN_DECK: Counter(
                    {cards["Forest"]: 4, cards["Island"]: 4, cards["Llanowar Elves"]: 4}
                )
            }
        )

        assert with_salt(SALT).digest_deck(card_deck) == with_salt(SALT).digest_deck(deck)

    def test_array_for_deck_is_indexed(self, deck: Deck[CardEdition]) -> None:
        hasher = with_salt(SALT)
        base = hasher.for_deck(deck).seed

        seeds = [choice.seed for choice in hasher.array_for_deck(deck, 3)]

        assert seeds == [base, (base + 1) & MASK_64, (base + 2) & MASK_64]

    def test_array_for_deck_rejects_negative_length(self, deck: Deck[CardEdition]) -> None:
        with pytest.raises(ValueError):
            with_salt(SALT).array_for_deck(deck, -1)

    def test_for_card_gives_independent_streams(
        self, deck: Deck[CardEdition], cards: dict[str, Card]
    ) -> None:
        choice = with_salt(SALT).for_deck(deck)

        forest = choice.for_card(cards["Forest"])
        island = choice.for_card(cards["Island"])

        assert forest.seed != island.seed
        assert forest.seed == choice.for_card(cards["Forest"]).seed

    def test_for_card_accepts_versions(
        self, deck: Deck[CardEdition], cards: dict[str, Card], editions: dict[str, CardEdition]
    ) -> None:
        choice = with_salt(SALT).for_deck(deck)

        printing = choice.for_card(editions["ZNR Forest 276"])

        assert printing.seed == choice.for_card(cards["Forest"]).seed


class TestGenerateSalt:
    def test_salt_literal_format(self) -> None:
        salt = generate_salt()

        assert salt.startswith("0x")
        assert len(salt) == 18
        assert int(salt, 16) <= MASK_64


# =============================================================================
# KNOWN ANSWERS
# =============================================================================


class TestKnownAnswers:
    """
    Fixed outputs of the pinned derivation.

    A change to the byte layout, the digest mixing or the generator changes
    every deck's printings, and must fail here.
    """

    def test_splitmix64_reference_stream(self) -> None:
        rng = SplitMix64(1234567)

        assert [rng.next_int64() for _ in range(5)] == [
            6457827717110365317,
            3203168211198807973,
            9817491932198370423,
            4593380528125082431,
            16408922859458223821,
        ]

    def test_bounded_draw(self) -> None:
        assert DeckRandomChoice(42).generate_int(6) == 5

    def test_shuffle(self) -> None:
        assert DeckRandomChoice(42).shuffle(range(10)) == [5, 2, 4, 0, 8, 9, 7, 6, 3, 1]

    def test_deck_digest(self) -> None:
        forest = Card("Forest", UUID(int=1), "Basic Land — Forest")
        island = Card("Island", UUID(int=2), "Basic Land — Island")
        deck = Deck({Section.MAIN_DECK: {island: 3, forest: 4}})

        assert with_salt(0).digest_deck(deck) == 0x278E2E7A20E9AB55
        assert with_salt(SALT).digest_deck(deck) == 0x35BA7802BA5575A5
