"""
Scryfall card-data provider.

Card search, exact-name lookup, alternate printings and autocomplete.

API docs: https://scryfall.com/docs/api/cards

Search-style calls never raise: network trouble comes back as an empty
result with an error message. Exact-name lookup distinguishes "no such card"
(None) from "could not ask" (ProviderError) so import can fall back.
"""

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any

import httpx

from proxyprinter.config import settings
from proxyprinter.models.card import CardRecord
from proxyprinter.models.failure import ProviderError

logger = logging.getLogger(__name__)

# Autocomplete needs at least this many characters
MIN_AUTOCOMPLETE_LENGTH = 2


@dataclass
class SearchResult:
    """Cards returned by a search, or the reason there are none."""

    cards: list[CardRecord] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScryfallClient:
    """
    Async client for the Scryfall API.

    Pass an httpx.AsyncClient to share connections; otherwise one is created
    on first use and closed by aclose() / the async context manager.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ScryfallClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": settings.user_agent,
                    "Accept": "application/json",
                },
                follow_redirects=True,
                timeout=settings.request_timeout,
            )
        return self._client

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any] | None:
        """
        GET a JSON document.

        Returns:
            Parsed body, or None on HTTP 404

        Raises:
            ProviderError: On network failure or any other HTTP error
        """
        try:
            response = await self._get_client().get(url, params=params)
        except httpx.RequestError as e:
            raise ProviderError("Could not reach Scryfall", detail=str(e)) from e

        if response.status_code == 404:
            return None

        try:
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                "Scryfall returned an error", detail=f"HTTP {e.response.status_code}"
            ) from e
        except ValueError as e:
            raise ProviderError("Scryfall returned invalid JSON", detail=str(e)) from e

        return data

    async def search(self, query: str) -> SearchResult:
        """
        Full-text card search.

        Scryfall answers 404 when nothing matches; that is an empty result,
        not an error.
        """
        query = query.strip()
        if not query:
            return SearchResult()

        try:
            data = await self._get_json(f"{self.base_url}/cards/search", {"q": query})
        except ProviderError as e:
            logger.warning("Card search for %r failed: %s (%s)", query, e.message, e.detail)
            return SearchResult(error=e.message)

        if data is None:
            return SearchResult()
        return SearchResult(cards=_parse_cards(data))

    async def autocomplete(self, query: str) -> list[str]:
        """Card names starting with the query (empty on error or short input)."""
        query = query.strip()
        if len(query) < MIN_AUTOCOMPLETE_LENGTH:
            return []

        try:
            data = await self._get_json(f"{self.base_url}/cards/autocomplete", {"q": query})
        except ProviderError as e:
            logger.warning("Autocomplete for %r failed: %s", query, e.detail)
            return []

        if data is None:
            return []
        return [str(name) for name in data.get("data", [])]

    async def named(self, name: str, set_code: str | None = None) -> CardRecord | None:
        """
        Look up a card by exact name, optionally restricted to one set.

        Returns:
            The card, or None if Scryfall has no such card (in that set)

        Raises:
            ProviderError: On network failure or an unexpected HTTP error
        """
        data = await self._named_json(name, set_code)
        if data is None:
            return None
        return CardRecord.from_scryfall(data)

    async def _named_json(self, name: str, set_code: str | None = None) -> dict[str, Any] | None:
        params = {"exact": name, "format": "json"}
        if set_code:
            params["set"] = set_code.lower()
        return await self._get_json(f"{self.base_url}/cards/named", params)

    async def printings(self, name: str) -> SearchResult:
        """
        All printings of a card, for choosing alternate art.

        Resolves the card by exact name, then follows its prints_search_uri.
        """
        try:
            card = await self._named_json(name)
            if card is None or not card.get("prints_search_uri"):
                return SearchResult()

            data = await self._get_json(str(card["prints_search_uri"]))
        except ProviderError as e:
            logger.warning("Printings lookup for %r failed: %s (%s)", name, e.message, e.detail)
            return SearchResult(error=e.message)

        if data is None:
            return SearchResult()
        return SearchResult(cards=_parse_cards(data))


def _parse_cards(data: dict[str, Any]) -> list[CardRecord]:
    cards: list[CardRecord] = []
    for raw in data.get("data", []):
        try:
            cards.append(CardRecord.from_scryfall(raw))
        except KeyError:
            # Skip malformed entries rather than failing the whole page
            logger.debug("Skipping card without id/name: %r", raw)
    return cards
