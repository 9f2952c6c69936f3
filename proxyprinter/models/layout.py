"""
Print-sheet geometry types.

All lengths are PDF points (1/72 inch). Positions use a top-left origin
with y growing downward; the renderer flips them for PDF output.
"""

from dataclasses import dataclass, field
from enum import Enum


class GuideStyle(str, Enum):
    """How cut lines are marked on a page."""

    NONE = "none"
    BORDER_LINES = "border-lines"
    CROSSHAIR_MARKS = "crosshair-marks"


@dataclass(frozen=True)
class PageLayoutConfig:
    """
    Immutable page geometry for a print sheet.

    Attributes:
        page_width: Page width
        page_height: Page height
        item_width: Width of one card image
        item_height: Height of one card image
        spacing: Gap between neighbouring cards (ignored for crosshair marks)
        padding: Distance from every page edge to the grid
        guide_style: Cut guide rendering mode
        crosshair_arm_length: Full length of each crosshair segment
    """

    page_width: float
    page_height: float
    item_width: float
    item_height: float
    spacing: float = 0.0
    padding: float = 0.0
    guide_style: GuideStyle = GuideStyle.NONE
    crosshair_arm_length: float = 10.0

    def __post_init__(self) -> None:
        for name in ("page_width", "page_height", "item_width", "item_height"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in ("spacing", "padding", "crosshair_arm_length"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        # Accept plain strings ("border-lines") from callers
        object.__setattr__(self, "guide_style", GuideStyle(self.guide_style))

    @property
    def effective_spacing(self) -> float:
        """Spacing actually reserved between cards."""
        if self.guide_style == GuideStyle.CROSSHAIR_MARKS:
            return 0.0
        return self.spacing

    @property
    def usable_width(self) -> float:
        return self.page_width - 2 * self.padding

    @property
    def usable_height(self) -> float:
        return self.page_height - 2 * self.padding


@dataclass(frozen=True, slots=True)
class GridDimensions:
    """How many cards fit on one page."""

    items_per_row: int
    items_per_column: int
    items_per_page: int


@dataclass(frozen=True, slots=True)
class GridPosition:
    """Grid cell and top-left corner of a card on its page."""

    column: int
    row: int
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Placement:
    """One card copy awaiting a position (after quantity expansion)."""

    entry_id: str
    image_source: str | None = None


@dataclass(frozen=True, slots=True)
class PlacedItem:
    """A single card rectangle on a page."""

    entry_id: str
    page_index: int
    column: int
    row: int
    x: float
    y: float
    width: float
    height: float
    image_source: str | None = None


@dataclass(frozen=True, slots=True)
class GuideLine:
    """A straight cut-guide segment from (x1, y1) to (x2, y2)."""

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class PositionedPage:
    """A page with its placed cards and cut guides."""

    index: int
    items: tuple[PlacedItem, ...] = field(default_factory=tuple)
    guides: tuple[GuideLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PositionedDocument:
    """Fully positioned print document, ready for serialization."""

    config: PageLayoutConfig
    pages: tuple[PositionedPage, ...] = field(default_factory=tuple)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def image_sources(self) -> set[str]:
        """All distinct image sources referenced by the document."""
        return {
            item.image_source
            for page in self.pages
            for item in page.items
            if item.image_source
        }
