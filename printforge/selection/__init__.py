"""
Printing selection.

Preference sequences choose one version per card under an availability
constraint; the artist grouper builds such sequences from artist groups;
group replacement and the forced replacers are simpler one-pass siblings.
All randomness comes from the deck-seeded choice source.
"""

from printforge.selection.artist_grouper import (
    ArtistGroupCategory,
    MinimalArtistGrouper,
    Scope,
)
from printforge.selection.availability import (
    Availability,
    from_count,
    from_multiset,
    unlimited_availability,
    unlimited_availability_if,
)
from printforge.selection.basic_land_replacer import (
    choose_random_set,
    from_versions,
    from_versions_chosen_randomly,
)
from printforge.selection.group_replacement import GroupReplacementWithAvailability
from printforge.selection.preference_sequence import (
    PreferenceContext,
    PreferenceSequence,
    PreferenceStep,
)
from printforge.selection.random_choice import (
    DeckHasher,
    DeckRandomChoice,
    SplitMix64,
    generate_salt,
    with_salt,
)

__all__ = [
    # Deterministic choice source
    "DeckHasher",
    "DeckRandomChoice",
    "SplitMix64",
    "generate_salt",
    "with_salt",
    # Availability policies
    "Availability",
    "from_count",
    "from_multiset",
    "unlimited_availability",
    "unlimited_availability_if",
    # Preference sequence engine
    "PreferenceContext",
    "PreferenceSequence",
    "PreferenceStep",
    # Artist diversity grouper
    "ArtistGroupCategory",
    "MinimalArtistGrouper",
    "Scope",
    # One-pass replacers
    "GroupReplacementWithAvailability",
    "choose_random_set",
    "from_versions",
    "from_versions_chosen_randomly",
]
