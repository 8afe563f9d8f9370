"""
Deterministic Choice Source.

Reproducible pseudo-random choices seeded by a per-call-site salt and the
content of a deck. The same (salt, deck, card, items) always produce the same
shuffle or pick, across runs and processes; different salts or decks do not
correlate.

Seed derivation (pinned, version 1):
- SHA-256 over each non-empty section in canonical order: the section
  ordinal (4 bytes big-endian), then one entry per logical card (counts of
  its printings summed), sorted by oracle ID, as count (4 bytes big-endian)
  + oracle ID (16 bytes)
- first 8 digest bytes read little-endian, XOR salt
- per card: seed XOR low 64 bits of the card's oracle ID
- per index: seed + index
All arithmetic is modulo 2**64. Draws come from SplitMix64, which diffuses
adjacent seeds well.
"""

import hashlib
import secrets
from collections import Counter
from collections.abc import Sequence
from typing import Any, TypeVar
from uuid import UUID

from printforge.models.card import Card
from printforge.models.deck import Deck

T = TypeVar("T")

MASK_64 = (1 << 64) - 1
_GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_MAX_SIGNED_63 = (1 << 63) - 1


class MinimalRng:
    """Shuffle and choose on top of a bounded integer draw."""

    def generate_int(self, bound: int) -> int:
        raise NotImplementedError

    def choose(self, items: Sequence[T]) -> T:
        """Pick one element."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.generate_int(len(items))]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a permuted copy (forward Fisher-Yates)."""
        result = list(items)
        size = len(result)
        for i in range(size - 1):
            j = i + self.generate_int(size - i)
            result[i], result[j] = result[j], result[i]
        return result


class SplitMix64(MinimalRng):
    """Stateful SplitMix64 generator (Vigna, 2015; public domain)."""

    def __init__(self, seed: int) -> None:
        self._state = seed & MASK_64

    def next_int64(self) -> int:
        self._state = (self._state + _GOLDEN_GAMMA) & MASK_64
        z = self._state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK_64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK_64
        return z ^ (z >> 31)

    def generate_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        # Reject draws from the final partial block to avoid modulo bias.
        limit = _MAX_SIGNED_63 - (_MAX_SIGNED_63 + 1) % bound
        while True:
            choice = self.next_int64() & _MAX_SIGNED_63
            if choice <= limit:
                return choice % bound


class DeckRandomChoice(MinimalRng):
    """
    A seed derived from a deck.

    Every draw method starts a fresh SplitMix64 stream from the seed, so
    each call is a pure function of the seed and its arguments.
    """

    __slots__ = ("seed",)

    def __init__(self, seed: int) -> None:
        self.seed = seed & MASK_64

    def for_card(self, card: Card | Any) -> "DeckRandomChoice":
        """Independent choice for one card of the deck."""
        return DeckRandomChoice(self.seed ^ (card.card.oracle_id.int & MASK_64))

    def stateful_rng(self) -> SplitMix64:
        """Fresh generator for a sequence of dependent draws."""
        return SplitMix64(self.seed)

    def generate_int(self, bound: int) -> int:
        return self.stateful_rng().generate_int(bound)

    def choose(self, items: Sequence[T]) -> T:
        return self.stateful_rng().choose(items)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        return self.stateful_rng().shuffle(items)

    def __repr__(self) -> str:
        return f"DeckRandomChoice(0x{self.seed:016x})"


class DeckHasher:
    """Factory of DeckRandomChoice for one salt."""

    def __init__(self, salt: int) -> None:
        self.salt = salt & MASK_64

    def digest_deck(self, deck: Deck[Any]) -> int:
        """Stable 64-bit fingerprint of the deck's cards, mixed with the salt."""
        sink = hashlib.sha256()
        for section, cards in deck.sections():
            sink.update(section.ordinal.to_bytes(4, "big"))
            # Printings of one card collapse into a single entry.
            per_card: Counter[UUID] = Counter()
            for element, count in cards.items():
                per_card[element.card.oracle_id] += count
            for oracle_id, count in sorted(per_card.items(), key=lambda entry: entry[0].bytes):
                sink.update(count.to_bytes(4, "big"))
                sink.update(oracle_id.bytes)
        return int.from_bytes(sink.digest()[:8], "little") ^ self.salt

    def for_deck(self, deck: Deck[Any]) -> DeckRandomChoice:
        return DeckRandomChoice(self.digest_deck(deck))

    def array_for_deck(self, deck: Deck[Any], length: int) -> list[DeckRandomChoice]:
        """`length` independent choices for one deck, keyed by index."""
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        seed = self.digest_deck(deck)
        return [DeckRandomChoice(seed + n) for n in range(length)]


def with_salt(salt: int) -> DeckHasher:
    return DeckHasher(salt)


def generate_salt() -> str:
    """A fresh salt literal for a new call site."""
    return f"0x{secrets.randbits(64):016X}"
