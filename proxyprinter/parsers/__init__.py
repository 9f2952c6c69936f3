from proxyprinter.parsers.deck_list import (
    DeckListLine,
    parse_deck_line,
    parse_deck_list,
)

__all__ = [
    "DeckListLine",
    "parse_deck_line",
    "parse_deck_list",
]
