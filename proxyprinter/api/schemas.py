"""
Wire models shared by the API routers.

The host is stateless: clients send the deck they hold and get the new one
back. These models convert between JSON and the frozen domain dataclasses.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from proxyprinter.config import PAPER_SIZES_PT, default_layout_config
from proxyprinter.models.card import CardRecord
from proxyprinter.models.deck import Deck, DeckEntry
from proxyprinter.models.layout import GuideStyle, PageLayoutConfig, PositionedDocument

PaperSize = Literal["a4", "letter", "legal"]


class DeckEntryModel(BaseModel):
    """One distinct card in a deck."""

    id: str = Field(..., min_length=1)
    name: str
    quantity: int = Field(..., ge=1)
    image_url: str | None = None
    type_line: str | None = None
    mana_cost: str | None = None

    @classmethod
    def from_domain(cls, entry: DeckEntry) -> "DeckEntryModel":
        return cls(
            id=entry.id,
            name=entry.name,
            quantity=entry.quantity,
            image_url=entry.image_url,
            type_line=entry.type_line,
            mana_cost=entry.mana_cost,
        )

    def to_domain(self) -> DeckEntry:
        return DeckEntry(
            id=self.id,
            name=self.name,
            quantity=self.quantity,
            image_url=self.image_url,
            type_line=self.type_line,
            mana_cost=self.mana_cost,
        )


class DeckModel(BaseModel):
    """A deck snapshot as sent over the wire."""

    entries: dict[str, DeckEntryModel] = Field(default_factory=dict)
    total: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_consistency(self) -> "DeckModel":
        for key, entry in self.entries.items():
            if key != entry.id:
                raise ValueError(f"Entry keyed {key!r} has id {entry.id!r}")
        computed = sum(entry.quantity for entry in self.entries.values())
        if computed != self.total:
            raise ValueError(f"total is {self.total}, quantities sum to {computed}")
        return self

    @classmethod
    def from_domain(cls, deck: Deck) -> "DeckModel":
        return cls(
            entries={key: DeckEntryModel.from_domain(e) for key, e in deck.entries.items()},
            total=deck.total,
        )

    def to_domain(self) -> Deck:
        return Deck(
            entries={key: entry.to_domain() for key, entry in self.entries.items()},
            total=self.total,
        )


class CardModel(BaseModel):
    """A card from the provider, flattened for display."""

    id: str
    name: str
    mana_cost: str = ""
    type_line: str = ""
    image_url: str | None = None
    thumbnail_url: str | None = None
    set_code: str | None = None
    set_name: str | None = None

    @classmethod
    def from_domain(cls, card: CardRecord) -> "CardModel":
        return cls(
            id=card.id,
            name=card.name,
            mana_cost=card.mana_cost,
            type_line=card.type_line,
            image_url=card.image_url,
            thumbnail_url=card.thumbnail_url,
            set_code=card.set_code,
            set_name=card.set_name,
        )


class LayoutModel(BaseModel):
    """
    Page layout overrides.

    Omitted fields come from the configured defaults (settings.paper_size
    etc.); `paper_size` picks the page dimensions unless both are given.
    """

    paper_size: PaperSize | None = None
    page_width: float | None = Field(default=None, gt=0)
    page_height: float | None = Field(default=None, gt=0)
    item_width: float | None = Field(default=None, gt=0)
    item_height: float | None = Field(default=None, gt=0)
    spacing: float | None = Field(default=None, ge=0)
    padding: float | None = Field(default=None, ge=0)
    guide_style: GuideStyle | None = None
    crosshair_arm_length: float | None = Field(default=None, ge=0)

    def to_config(self) -> PageLayoutConfig:
        base = default_layout_config()
        page_width, page_height = base.page_width, base.page_height
        if self.paper_size is not None:
            page_width, page_height = PAPER_SIZES_PT[self.paper_size]

        return PageLayoutConfig(
            page_width=self.page_width or page_width,
            page_height=self.page_height or page_height,
            item_width=self.item_width or base.item_width,
            item_height=self.item_height or base.item_height,
            spacing=base.spacing if self.spacing is None else self.spacing,
            padding=base.padding if self.padding is None else self.padding,
            guide_style=self.guide_style or base.guide_style,
            crosshair_arm_length=(
                base.crosshair_arm_length
                if self.crosshair_arm_length is None
                else self.crosshair_arm_length
            ),
        )


class PrintRequest(BaseModel):
    """Request model for layout preview and PDF export."""

    deck: DeckModel
    layout: LayoutModel = Field(default_factory=LayoutModel)


class PlacedItemModel(BaseModel):
    entry_id: str
    column: int
    row: int
    x: float
    y: float
    width: float
    height: float
    image_source: str | None = None


class GuideLineModel(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class PageModel(BaseModel):
    index: int
    items: list[PlacedItemModel]
    guides: list[GuideLineModel]


class DocumentModel(BaseModel):
    """Positioned pages, in top-left page coordinates (points)."""

    page_width: float
    page_height: float
    page_count: int
    pages: list[PageModel]

    @classmethod
    def from_domain(cls, document: PositionedDocument) -> "DocumentModel":
        return cls(
            page_width=document.config.page_width,
            page_height=document.config.page_height,
            page_count=document.page_count,
            pages=[
                PageModel(
                    index=page.index,
                    items=[
                        PlacedItemModel(
                            entry_id=item.entry_id,
                            column=item.column,
                            row=item.row,
                            x=item.x,
                            y=item.y,
                            width=item.width,
                            height=item.height,
                            image_source=item.image_source,
                        )
                        for item in page.items
                    ],
                    guides=[
                        GuideLineModel(x1=g.x1, y1=g.y1, x2=g.x2, y2=g.y2)
                        for g in page.guides
                    ],
                )
                for page in document.pages
            ],
        )
