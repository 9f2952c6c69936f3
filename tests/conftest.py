from io import BytesIO
from typing import Any

import pytest
from PIL import Image

from proxyprinter.models.card import CardRecord
from proxyprinter.models.deck import Deck
from proxyprinter.models.layout import PageLayoutConfig
from proxyprinter.services.deck_store import apply_quantity_change

# A4 in points, with the card size the print view uses
A4_WIDTH = 595.28
A4_HEIGHT = 841.89
CARD_WIDTH = 178.58
CARD_HEIGHT = 249.45


@pytest.fixture
def a4_config() -> PageLayoutConfig:
    """A4 page, 0.5pt spacing, 26pt padding (fits a 3x3 grid)."""
    return PageLayoutConfig(
        page_width=A4_WIDTH,
        page_height=A4_HEIGHT,
        item_width=CARD_WIDTH,
        item_height=CARD_HEIGHT,
        spacing=0.5,
        padding=26.0,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG in card proportions."""
    buffer = BytesIO()
    Image.new("RGB", (63, 88), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def bolt_json() -> dict[str, Any]:
    """Scryfall card object for Lightning Bolt."""
    return {
        "object": "card",
        "id": "bolt-leb",
        "name": "Lightning Bolt",
        "mana_cost": "{R}",
        "type_line": "Instant",
        "set": "leb",
        "set_name": "Limited Edition Beta",
        "image_uris": {
            "small": "https://cards.scryfall.io/small/bolt.jpg",
            "normal": "https://cards.scryfall.io/normal/bolt.jpg",
            "png": "https://cards.scryfall.io/png/bolt.png",
        },
        "prints_search_uri": "https://api.scryfall.com/cards/search?q=oracleid%3Abolt&unique=prints",
    }


@pytest.fixture
def delver_json() -> dict[str, Any]:
    """Scryfall card object for a double-faced card (no top-level images)."""
    return {
        "object": "card",
        "id": "delver-isd",
        "name": "Delver of Secrets // Insectile Aberration",
        "type_line": "Creature — Human Wizard // Creature — Human Insect",
        "set": "isd",
        "set_name": "Innistrad",
        "card_faces": [
            {
                "name": "Delver of Secrets",
                "mana_cost": "{U}",
                "type_line": "Creature — Human Wizard",
                "image_uris": {
                    "small": "https://cards.scryfall.io/small/delver-front.jpg",
                    "normal": "https://cards.scryfall.io/normal/delver-front.jpg",
                },
            },
            {
                "name": "Insectile Aberration",
                "mana_cost": "",
                "type_line": "Creature — Human Insect",
                "image_uris": {
                    "normal": "https://cards.scryfall.io/normal/delver-back.jpg",
                },
            },
        ],
    }


@pytest.fixture
def bolt_card(bolt_json: dict[str, Any]) -> CardRecord:
    return CardRecord.from_scryfall(bolt_json)


@pytest.fixture
def two_card_deck() -> Deck:
    """Deck with A x2 then B x3 (total 5)."""
    deck = Deck.empty()
    deck = apply_quantity_change(deck, "A", "Alpha", "https://img/a.png", "Instant", "{R}", 2)
    deck = apply_quantity_change(deck, "B", "Beta", "https://img/b.png", "Creature — Elf", "{G}", 3)
    return deck
