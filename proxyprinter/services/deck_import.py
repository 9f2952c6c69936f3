"""
Deck-list import.

Parses pasted deck-list text, looks every line up with the card provider
(one request at a time, rate-limited) and folds the hits into a new Deck.

A line with a set code that cannot be found in that set is retried once by
name alone. Lines that still cannot be resolved are reported by name; they
never abort the import.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from proxyprinter.config import settings
from proxyprinter.models.card import CardRecord
from proxyprinter.models.deck import Deck
from proxyprinter.models.failure import FailureDetail, FailureKind, ProviderError
from proxyprinter.parsers.deck_list import DeckListLine, parse_deck_list
from proxyprinter.services.deck_store import build_deck_from_import_results
from proxyprinter.services.task_queue import SequentialTaskQueue

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """Exact-name card lookup (ScryfallClient satisfies this)."""

    async def named(self, name: str, set_code: str | None = None) -> CardRecord | None: ...


@dataclass
class ImportResult:
    """
    Outcome of a deck-list import.

    Attributes:
        deck: The new deck built from every resolved line
        not_found: Names that could not be resolved, in deck-list order
    """

    deck: Deck
    not_found: list[str] = field(default_factory=list)

    @property
    def failure(self) -> FailureDetail | None:
        """The aggregated not-found report, or None if every line resolved."""
        if not self.not_found:
            return None
        count = len(self.not_found)
        return FailureDetail(
            kind=FailureKind.NOT_FOUND,
            message=f"{count} card{'' if count == 1 else 's'} could not be found.",
            detail=", ".join(self.not_found),
            suggestion="Check the spelling and set codes, then import those lines again.",
        )


async def lookup_line(
    provider: CardLookup,
    line: DeckListLine,
    delay: float = 0.0,
) -> CardRecord | None:
    """
    Resolve one deck-list line to a card.

    Tries name + set first; if that misses (not found or a provider error)
    and a set code was given, retries once by name alone after `delay`.

    Returns:
        The card, or None if it could not be resolved
    """
    try:
        card = await provider.named(line.name, line.set_code)
    except ProviderError as e:
        logger.warning("Lookup of %r [%s] failed: %s", line.name, line.set_code, e.detail)
        card = None

    if card is not None or not line.set_code:
        return card

    logger.debug("%r not found in set %s, retrying without set", line.name, line.set_code)
    if delay > 0:
        await asyncio.sleep(delay)

    try:
        return await provider.named(line.name)
    except ProviderError as e:
        logger.warning("Lookup of %r failed: %s", line.name, e.detail)
        return None


async def import_deck_list(
    text: str,
    provider: CardLookup,
    delay: float | None = None,
) -> ImportResult:
    """
    Build a new deck from deck-list text.

    Args:
        text: Raw deck-list text
        provider: Card lookup used for every line
        delay: Seconds between provider requests (settings.rate_limit_delay
            if omitted)

    Returns:
        The new deck and the names that could not be found
    """
    delay = settings.rate_limit_delay if delay is None else delay
    lines = parse_deck_list(text)
    if not lines:
        return ImportResult(deck=Deck.empty())

    queue = SequentialTaskQueue(delay=delay)
    tasks = [lambda line=line: lookup_line(provider, line, delay) for line in lines]
    outcomes = await queue.run(tasks)

    found: list[tuple[CardRecord, int]] = []
    not_found: list[str] = []
    for line, outcome in zip(lines, outcomes, strict=True):
        if outcome.ok and outcome.value is not None:
            found.append((outcome.value, line.quantity))
        else:
            if outcome.error is not None:
                logger.warning("Lookup of %r raised: %s", line.name, outcome.error)
            not_found.append(line.name)

    deck = build_deck_from_import_results(found)
    logger.info(
        "Imported %d of %d lines (%d cards), %d not found",
        len(found),
        len(lines),
        deck.total,
        len(not_found),
    )
    return ImportResult(deck=deck, not_found=not_found)
