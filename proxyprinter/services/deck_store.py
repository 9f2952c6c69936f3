"""
Deck state management.

Every function here is pure: it takes a Deck snapshot and returns a new one.
The input Deck and its entries dict are never modified, so UI callers that
still hold an older snapshot keep seeing consistent data.

INVARIANT: deck.total == sum(entry.quantity for entry in deck.entries.values())
and no entry is ever stored with quantity <= 0.
"""

from collections.abc import Iterable

from proxyprinter.models.card import CardRecord
from proxyprinter.models.deck import Deck, DeckEntry
from proxyprinter.models.failure import DeckInvariantError

# List-view groups in display order, with the type_line keyword that selects each.
# First match wins, so "Artifact Creature" lands in Creatures.
TYPE_GROUPS: tuple[tuple[str, str], ...] = (
    ("planeswalker", "Planeswalkers"),
    ("creature", "Creatures"),
    ("sorcery", "Sorceries"),
    ("instant", "Instants"),
    ("enchantment", "Enchantments"),
    ("artifact", "Artifacts"),
    ("land", "Lands"),
)
OTHER_GROUP = "Other"


def apply_quantity_change(
    deck: Deck,
    card_id: str,
    name: str,
    image_url: str | None,
    type_line: str | None,
    mana_cost: str | None,
    delta: int,
) -> Deck:
    """
    Add `delta` copies of a card to the deck (negative removes).

    The display fields are only used when the entry is (re)written; they
    overwrite whatever the entry held before, so fresher card data wins.

    Args:
        deck: Current deck snapshot
        card_id: Entry key
        name: Card name
        image_url: Image for the entry
        type_line: Type line for the entry
        mana_cost: Mana cost for the entry
        delta: Change in quantity (typically +1 or -1)

    Returns:
        New deck. If the resulting quantity is <= 0 the entry is removed and
        the total drops by the entry's previous quantity.
    """
    existing = deck.entries.get(card_id)
    previous = existing.quantity if existing else 0
    new_quantity = previous + delta

    if new_quantity <= 0:
        if existing is None:
            return Deck(entries=dict(deck.entries), total=deck.total)
        entries = {key: entry for key, entry in deck.entries.items() if key != card_id}
        return Deck(entries=entries, total=deck.total - previous)

    entries = dict(deck.entries)
    entries[card_id] = DeckEntry(
        id=card_id,
        name=name,
        quantity=new_quantity,
        image_url=image_url,
        type_line=type_line,
        mana_cost=mana_cost,
    )
    return Deck(entries=entries, total=deck.total + delta)


def change_card_quantity(deck: Deck, card: CardRecord | DeckEntry, delta: int) -> Deck:
    """
    Apply a quantity change from either a search result or an existing entry.

    Search results contribute their default printing's image; deck entries
    keep the printing the user already picked.
    """
    return apply_quantity_change(
        deck,
        card.id,
        card.name,
        card.image_url,
        card.type_line or None,
        card.mana_cost or None,
        delta,
    )


def set_preferred_image(deck: Deck, card_id: str, image_url: str) -> Deck:
    """
    Select a different printing's image for an entry.

    Unknown ids are not an error: the same deck is returned.
    """
    entry = deck.entries.get(card_id)
    if entry is None:
        return deck

    entries = dict(deck.entries)
    entries[card_id] = DeckEntry(
        id=entry.id,
        name=entry.name,
        quantity=entry.quantity,
        image_url=image_url,
        type_line=entry.type_line,
        mana_cost=entry.mana_cost,
    )
    return Deck(entries=entries, total=deck.total)


def build_deck_from_import_results(results: Iterable[tuple[CardRecord, int]]) -> Deck:
    """
    Fold import lookups into a brand-new deck.

    Quantities here are absolute, not deltas. The same card appearing more
    than once (e.g., listed in two sections) has its quantities summed; each
    display field keeps the last non-empty value seen.

    Args:
        results: (card, quantity) pairs in deck-list order

    Returns:
        New deck with total equal to the sum of all positive quantities
    """
    entries: dict[str, DeckEntry] = {}
    total = 0

    for card, quantity in results:
        if quantity <= 0:
            continue

        previous = entries.get(card.id)
        if previous is None:
            entries[card.id] = DeckEntry(
                id=card.id,
                name=card.name,
                quantity=quantity,
                image_url=card.image_url,
                type_line=card.type_line or None,
                mana_cost=card.mana_cost or None,
            )
        else:
            entries[card.id] = DeckEntry(
                id=card.id,
                name=card.name or previous.name,
                quantity=previous.quantity + quantity,
                image_url=card.image_url or previous.image_url,
                type_line=card.type_line or previous.type_line,
                mana_cost=card.mana_cost or previous.mana_cost,
            )
        total += quantity

    return Deck(entries=entries, total=total)


def classify_type_line(type_line: str | None) -> str:
    """Map a type line to its list-view group name."""
    if not type_line:
        return OTHER_GROUP

    lowered = type_line.lower()
    for keyword, group in TYPE_GROUPS:
        if keyword in lowered:
            return group

    return OTHER_GROUP


def group_entries_by_type(deck: Deck) -> list[tuple[str, list[DeckEntry]]]:
    """
    Group entries for the list view.

    Returns:
        (group name, entries sorted by name) in display order; empty groups
        are left out.
    """
    groups: dict[str, list[DeckEntry]] = {group: [] for _, group in TYPE_GROUPS}
    groups[OTHER_GROUP] = []

    for entry in deck.entries.values():
        groups[classify_type_line(entry.type_line)].append(entry)

    return [
        (group, sorted(entries, key=lambda e: e.name.lower()))
        for group, entries in groups.items()
        if entries
    ]


def verify_deck_total(deck: Deck) -> None:
    """
    Check the deck invariant.

    Raises:
        DeckInvariantError: If total drifted or an entry has quantity <= 0
    """
    for card_id, entry in deck.entries.items():
        if entry.quantity <= 0:
            raise DeckInvariantError(f"Entry {card_id!r} has quantity {entry.quantity}")
        if entry.id != card_id:
            raise DeckInvariantError(f"Entry keyed {card_id!r} has id {entry.id!r}")

    computed = deck.computed_total()
    if computed != deck.total:
        raise DeckInvariantError(f"total is {deck.total}, quantities sum to {computed}")
