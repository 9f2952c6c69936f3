"""
Card lookup endpoints.

Thin wrappers over the Scryfall client. Provider outages come back as an
empty list with an `error` message rather than an HTTP error, so the search
box keeps working.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from proxyprinter.api.dependencies import get_card_provider
from proxyprinter.api.schemas import CardModel
from proxyprinter.services.card_provider import ScryfallClient, SearchResult

router = APIRouter(prefix="/cards", tags=["cards"])


class CardListResponse(BaseModel):
    """Response model for card searches."""

    cards: list[CardModel] = Field(default_factory=list)
    count: int = 0
    error: str | None = None


class AutocompleteResponse(BaseModel):
    suggestions: list[str] = Field(default_factory=list)


def _to_response(result: SearchResult) -> CardListResponse:
    return CardListResponse(
        cards=[CardModel.from_domain(card) for card in result.cards],
        count=len(result.cards),
        error=result.error,
    )


@router.get("/search", response_model=CardListResponse)
async def search_cards(
    provider: Annotated[ScryfallClient, Depends(get_card_provider)],
    q: Annotated[str, Query(min_length=1, description="Scryfall search query")],
) -> CardListResponse:
    """Full-text card search."""
    return _to_response(await provider.search(q))


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    provider: Annotated[ScryfallClient, Depends(get_card_provider)],
    q: str = "",
) -> AutocompleteResponse:
    """Card-name suggestions. Fewer than 2 characters yields no suggestions."""
    return AutocompleteResponse(suggestions=await provider.autocomplete(q))


@router.get("/printings", response_model=CardListResponse)
async def printings(
    provider: Annotated[ScryfallClient, Depends(get_card_provider)],
    name: Annotated[str, Query(min_length=1)],
) -> CardListResponse:
    """All printings of a card, for choosing alternate art."""
    return _to_response(await provider.printings(name))
