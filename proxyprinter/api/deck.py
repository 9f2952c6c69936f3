"""
Deck API endpoints.

Stateless deck editing: every request carries the current deck snapshot and
the response is the new snapshot.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from proxyprinter.api.dependencies import get_card_provider
from proxyprinter.api.schemas import DeckEntryModel, DeckModel
from proxyprinter.models.failure import FailureDetail
from proxyprinter.services.card_provider import ScryfallClient
from proxyprinter.services.deck_import import import_deck_list
from proxyprinter.services.deck_store import (
    apply_quantity_change,
    group_entries_by_type,
    set_preferred_image,
)

router = APIRouter(prefix="/deck", tags=["deck"])


class CardRef(BaseModel):
    """The card being added or removed, with the display data to store."""

    id: str = Field(..., min_length=1)
    name: str
    image_url: str | None = None
    type_line: str | None = None
    mana_cost: str | None = None


class QuantityChangeRequest(BaseModel):
    """Request model for adding or removing copies of a card."""

    deck: DeckModel = Field(default_factory=DeckModel)
    card: CardRef
    delta: int = Field(..., description="Copies to add (negative removes)", examples=[1, -1])


class PreferredImageRequest(BaseModel):
    """Request model for picking another printing's image."""

    deck: DeckModel
    id: str
    image_url: str = Field(..., min_length=1)


class ImportRequest(BaseModel):
    """Request model for importing a deck list."""

    text: str = Field(
        ...,
        description="Deck list, one '[quantity ]name[ [set]]' per line",
        examples=["4 Lightning Bolt [LEB]\n1 Sol Ring"],
    )


class ImportResponse(BaseModel):
    """Response model for deck-list import."""

    deck: DeckModel
    not_found: list[str] = Field(default_factory=list)
    failure: FailureDetail | None = Field(
        default=None,
        description="Aggregated not-found report, present when any line was not resolved",
    )


class GroupsRequest(BaseModel):
    deck: DeckModel


class CardGroup(BaseModel):
    """One list-view group."""

    type: str
    cards: list[DeckEntryModel]


@router.post("/quantity", response_model=DeckModel)
async def change_quantity(request: QuantityChangeRequest) -> DeckModel:
    """
    Add or remove copies of a card.

    Dropping to zero (or below) removes the entry.
    """
    deck = apply_quantity_change(
        request.deck.to_domain(),
        request.card.id,
        request.card.name,
        request.card.image_url,
        request.card.type_line,
        request.card.mana_cost,
        request.delta,
    )
    return DeckModel.from_domain(deck)


@router.post("/printing", response_model=DeckModel)
async def change_printing(request: PreferredImageRequest) -> DeckModel:
    """Select another printing's image for an entry. Unknown ids are ignored."""
    deck = set_preferred_image(request.deck.to_domain(), request.id, request.image_url)
    return DeckModel.from_domain(deck)


@router.post("/import", response_model=ImportResponse)
async def import_deck(
    request: ImportRequest,
    provider: Annotated[ScryfallClient, Depends(get_card_provider)],
) -> ImportResponse:
    """
    Build a new deck from deck-list text.

    Each line is looked up with the card provider, one request at a time.
    Names that cannot be found are listed in `not_found` and summarised in
    `failure`.
    """
    result = await import_deck_list(request.text, provider)
    return ImportResponse(
        deck=DeckModel.from_domain(result.deck),
        not_found=result.not_found,
        failure=result.failure,
    )


@router.post("/groups", response_model=list[CardGroup])
async def deck_groups(request: GroupsRequest) -> list[CardGroup]:
    """Group entries by card type for the list view."""
    return [
        CardGroup(type=group, cards=[DeckEntryModel.from_domain(e) for e in entries])
        for group, entries in group_entries_by_type(request.deck.to_domain())
    ]
