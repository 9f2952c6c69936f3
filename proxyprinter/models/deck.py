from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """
    One distinct card in a deck.

    Attributes:
        id: Card ID from the provider, unique within a deck
        name: Card name, kept for display without a lookup
        quantity: Number of copies (always >= 1 while in a deck)
        image_url: Selected printing's image (last chosen wins)
        type_line: Type line, used for list-view grouping
        mana_cost: Display mana cost
    """

    id: str
    name: str
    quantity: int
    image_url: str | None = None
    type_line: str | None = None
    mana_cost: str | None = None


@dataclass(frozen=True)
class Deck:
    """
    A snapshot of the user's deck.

    Snapshots are never modified in place: every change builds a new Deck
    (and a new entries dict), so callers can keep references to old values.

    INVARIANT: total == sum of entry quantities, and every quantity >= 1.
    """

    entries: dict[str, DeckEntry] = field(default_factory=dict)
    total: int = 0

    @classmethod
    def empty(cls) -> "Deck":
        return cls(entries={}, total=0)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self.entries

    def __len__(self) -> int:
        """Number of distinct entries."""
        return len(self.entries)

    def quantity_of(self, card_id: str) -> int:
        entry = self.entries.get(card_id)
        return entry.quantity if entry else 0

    def computed_total(self) -> int:
        """Sum of quantities, re-derived from the entries."""
        return sum(entry.quantity for entry in self.entries.values())
