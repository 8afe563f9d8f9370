from printforge.models.card import ArenaCard, Card, CardEdition, CardVersion, Expansion, MtgoCard
from printforge.models.catalog import (
    CardVersionExtractor,
    Spoiler,
    arena_cards,
    card_editions,
    mtgo_cards,
)
from printforge.models.deck import Deck, DeckBuilder, DeckEntry, Section
from printforge.models.failure import (
    ArtistAttributionError,
    CardNotFoundError,
    CoverageGapError,
    FailureDetail,
    FailureKind,
    InvariantViolationError,
    KnownError,
)

__all__ = [
    "ArenaCard",
    "ArtistAttributionError",
    "Card",
    "CardEdition",
    "CardNotFoundError",
    "CardVersion",
    "CardVersionExtractor",
    "CoverageGapError",
    "Deck",
    "DeckBuilder",
    "DeckEntry",
    "Expansion",
    "FailureDetail",
    "FailureKind",
    "InvariantViolationError",
    "KnownError",
    "MtgoCard",
    "Section",
    "Spoiler",
    "arena_cards",
    "card_editions",
    "mtgo_cards",
]
