from datetime import date
from uuid import NAMESPACE_URL, uuid5

import pytest

from printforge.models.card import Card, CardEdition, Expansion
from printforge.models.catalog import CardVersionExtractor, Spoiler, card_editions

ZNR = Expansion(date(2020, 9, 25), "ZNR", "Zendikar Rising")
M21 = Expansion(date(2020, 7, 3), "M21", "Core Set 2021")


def make_card(name: str, type_line: str) -> Card:
    return Card(name=name, oracle_id=uuid5(NAMESPACE_URL, f"oracle/{name}"), type_line=type_line)


def make_edition(
    card: Card,
    expansion: Expansion,
    number: int,
    *artists: str,
    mtgo_id: int | None = None,
    arena_id: int | None = None,
) -> CardEdition:
    return CardEdition(
        card=card,
        scryfall_id=uuid5(NAMESPACE_URL, f"printing/{expansion.code}/{number}"),
        expansion=expansion,
        collector_number=str(number),
        artists=artists,
        mtgo_ids=((mtgo_id, False),) if mtgo_id is not None else (),
        arena_id=arena_id,
    )


@pytest.fixture
def cards() -> dict[str, Card]:
    """Logical cards by name."""
    basics = {
        name: make_card(name, f"Basic Land — {name}")
        for name in ("Plains", "Island", "Swamp", "Mountain", "Forest")
    }
    return {
        **basics,
        "Llanowar Elves": make_card("Llanowar Elves", "Creature — Elf Druid"),
        "Omnath, Locus of Creation": make_card(
            "Omnath, Locus of Creation", "Legendary Creature — Elemental"
        ),
        "Jolrael, Mwonvuli Recluse": make_card(
            "Jolrael, Mwonvuli Recluse", "Legendary Creature — Human Druid"
        ),
    }


@pytest.fixture
def editions(cards: dict[str, Card]) -> dict[str, CardEdition]:
    """
    Printings keyed by "<set> <card>" or "<set> <card> <number>".

    ZNR basics: Forest by Adam Paquette (x2) and Tianhua X (x1),
    Island by Alayna Danner and Sam Burley, Plains by Johannes Voss.
    M21 prints every basic once, all by Rob Alexander.
    """
    return {
        "ZNR Forest 276": make_edition(cards["Forest"], ZNR, 276, "Adam Paquette", mtgo_id=8276),
        "ZNR Forest 277": make_edition(cards["Forest"], ZNR, 277, "Adam Paquette", mtgo_id=8277),
        "ZNR Forest 278": make_edition(cards["Forest"], ZNR, 278, "Tianhua X", mtgo_id=8278),
        "ZNR Island 266": make_edition(cards["Island"], ZNR, 266, "Alayna Danner", mtgo_id=8266),
        "ZNR Island 267": make_edition(cards["Island"], ZNR, 267, "Sam Burley", mtgo_id=8267),
        "ZNR Plains 260": make_edition(cards["Plains"], ZNR, 260, "Johannes Voss", mtgo_id=8260),
        "ZNR Omnath": make_edition(cards["Omnath, Locus of Creation"], ZNR, 229, "Chris Rahn"),
        "M21 Plains": make_edition(cards["Plains"], M21, 260, "Rob Alexander", mtgo_id=7260),
        "M21 Island": make_edition(cards["Island"], M21, 264, "Rob Alexander", mtgo_id=7264),
        "M21 Swamp": make_edition(cards["Swamp"], M21, 268, "Rob Alexander", mtgo_id=7268),
        "M21 Mountain": make_edition(cards["Mountain"], M21, 272, "Rob Alexander", mtgo_id=7272),
        "M21 Forest": make_edition(cards["Forest"], M21, 274, "Rob Alexander", mtgo_id=7274),
        "M21 Llanowar Elves": make_edition(cards["Llanowar Elves"], M21, 193, "Chris Rahn"),
        "M21 Jolrael": make_edition(cards["Jolrael, Mwonvuli Recluse"], M21, 191, "Wisnu Tan"),
    }


@pytest.fixture
def spoiler(editions: dict[str, CardEdition]) -> Spoiler:
    return Spoiler(editions.values())


@pytest.fixture
def extractor(spoiler: Spoiler) -> CardVersionExtractor[CardEdition]:
    return card_editions(spoiler)
