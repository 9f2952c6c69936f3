"""
Parser for plain-text deck lists.

Format, one card per line:
    [<quantity>[x] ]<card name>[ [<set_code>]]

Examples:
    4 Lightning Bolt
    4x Lightning Bolt [LEB]
    Sol Ring

Quantity defaults to 1. Anything after the name that is not a bracketed
set code (e.g., "<foil>") is ignored.
"""

import re
from dataclasses import dataclass

# Groups: (quantity, card_name, set_code)
# The name stops at the first '[' or '<'; the set code is the first [...] after it.
DECK_LINE_PATTERN = re.compile(
    r"^(?:(\d+)x?\s+)?([^<\[]+)(?:.*?\[([^\]]+)\])?",
    re.IGNORECASE,
)

COMMENT_PREFIXES = ("#", "//")


@dataclass(frozen=True, slots=True)
class DeckListLine:
    """One parsed deck-list line."""

    quantity: int
    name: str
    set_code: str | None = None


def parse_deck_line(line: str) -> DeckListLine | None:
    """
    Parse a single deck-list line.

    Returns:
        The parsed line, or None for blank, comment or malformed lines
    """
    line = line.strip()
    if not line or line.startswith(COMMENT_PREFIXES):
        return None

    match = DECK_LINE_PATTERN.match(line)
    if not match:
        return None

    quantity_str, name, set_code = match.groups()
    name = name.strip()
    if not name:
        return None

    quantity = int(quantity_str) if quantity_str else 1
    if quantity <= 0:
        return None

    set_code = set_code.strip().lower() if set_code and set_code.strip() else None
    return DeckListLine(quantity=quantity, name=name, set_code=set_code)


def parse_deck_list(text: str) -> list[DeckListLine]:
    """
    Parse a deck list.

    Lines that don't match the grammar are dropped silently.

    Args:
        text: Raw deck-list text (clipboard paste)

    Returns:
        Parsed lines in input order. Empty list if input is empty/whitespace.
    """
    if not text or not text.strip():
        return []

    lines: list[DeckListLine] = []
    for raw in text.splitlines():
        parsed = parse_deck_line(raw)
        if parsed is not None:
            lines.append(parsed)

    return lines
