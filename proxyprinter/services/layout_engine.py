"""
Print-sheet layout engine.

Packs fixed-size card rectangles onto fixed-size pages.

Placement policy (used for cards AND guides, never mixed):
    The grid is anchored at the top-left corner, `padding` in from both page
    edges. Padding is subtracted on both sides when counting how many cards
    fit; any leftover space ends up on the right and bottom edges. The grid
    is never re-centered.

Grid size:
    items_per_row    = floor((page_width  - 2*padding + s) / (item_width  + s))
    items_per_column = floor((page_height - 2*padding + s) / (item_height + s))

where s is the effective spacing (0 in crosshair mode). Cards that would
only partially fit are dropped from the grid, never clipped.
"""

import logging
import math
from collections.abc import Sequence
from typing import TypeVar

from proxyprinter.models.deck import Deck
from proxyprinter.models.layout import (
    GridDimensions,
    GridPosition,
    GuideLine,
    GuideStyle,
    PageLayoutConfig,
    PlacedItem,
    Placement,
    PositionedDocument,
    PositionedPage,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Tolerate float noise when cards fit exactly (e.g. 3 * 178.58 / 178.58)
_FIT_EPSILON = 1e-9


def _fit_count(usable: float, item: float, spacing: float) -> int:
    count = math.floor((usable + spacing) / (item + spacing) + _FIT_EPSILON)
    return max(count, 0)


def compute_grid(config: PageLayoutConfig) -> GridDimensions:
    """
    Count how many cards fit on one page.

    Args:
        config: Page geometry

    Returns:
        Cards per row, per column, and per page (0 if a card cannot fit)
    """
    spacing = config.effective_spacing
    per_row = _fit_count(config.usable_width, config.item_width, spacing)
    per_column = _fit_count(config.usable_height, config.item_height, spacing)

    return GridDimensions(
        items_per_row=per_row,
        items_per_column=per_column,
        items_per_page=per_row * per_column,
    )


def paginate(items: Sequence[T], items_per_page: int) -> list[list[T]]:
    """
    Split a flat list into consecutive pages.

    Order is preserved; only the last page may be partially filled.
    Empty input yields no pages.

    Raises:
        ValueError: If items_per_page is not positive
    """
    if items_per_page <= 0:
        raise ValueError(f"items_per_page must be positive, got {items_per_page}")

    return [
        list(items[start : start + items_per_page])
        for start in range(0, len(items), items_per_page)
    ]


def position_item(
    page_local_index: int,
    config: PageLayoutConfig,
    grid: GridDimensions | None = None,
) -> GridPosition:
    """
    Compute the grid cell and top-left corner of the n-th card on a page.

    Cards fill rows left to right, then top to bottom. Spacing is only
    inserted between cards; nothing is subtracted after the last column.

    Args:
        page_local_index: Index of the card on its page
        config: Page geometry
        grid: Precomputed grid (computed from config if omitted)

    Raises:
        ValueError: If no card fits on the page or the index is off the page
    """
    grid = grid or compute_grid(config)
    if grid.items_per_page == 0:
        raise ValueError("No card fits on the configured page")
    if not 0 <= page_local_index < grid.items_per_page:
        raise ValueError(
            f"Index {page_local_index} outside page capacity {grid.items_per_page}"
        )

    spacing = config.effective_spacing
    column = page_local_index % grid.items_per_row
    row = page_local_index // grid.items_per_row

    return GridPosition(
        column=column,
        row=row,
        x=config.padding + column * (config.item_width + spacing),
        y=config.padding + row * (config.item_height + spacing),
    )


def compute_guide_geometry(config: PageLayoutConfig) -> list[GuideLine]:
    """
    Compute the cut guides for one page.

    border-lines:
        One vertical line per column boundary (items_per_row + 1 lines) and
        one horizontal line per row boundary, each running through the middle
        of the spacing gap. The outermost lines therefore sit half a gap
        outside the card edges.

    crosshair-marks:
        At every grid intersection, a vertical and a horizontal segment of
        crosshair_arm_length centered on the corner. Spacing is zero in this
        mode, so corners are shared by neighbouring cards.

    Returns:
        Guide segments in page coordinates (empty for GuideStyle.NONE or
        when no card fits)
    """
    grid = compute_grid(config)
    if config.guide_style == GuideStyle.NONE or grid.items_per_page == 0:
        return []

    if config.guide_style == GuideStyle.BORDER_LINES:
        return _border_lines(config, grid)

    return _crosshair_marks(config, grid)


def _border_lines(config: PageLayoutConfig, grid: GridDimensions) -> list[GuideLine]:
    spacing = config.effective_spacing
    half_gap = spacing / 2
    step_x = config.item_width + spacing
    step_y = config.item_height + spacing

    top = config.padding - half_gap
    bottom = config.padding + grid.items_per_column * step_y - half_gap
    left = config.padding - half_gap
    right = config.padding + grid.items_per_row * step_x - half_gap

    guides: list[GuideLine] = []
    for i in range(grid.items_per_row + 1):
        x = config.padding + i * step_x - half_gap
        guides.append(GuideLine(x1=x, y1=top, x2=x, y2=bottom))

    for j in range(grid.items_per_column + 1):
        y = config.padding + j * step_y - half_gap
        guides.append(GuideLine(x1=left, y1=y, x2=right, y2=y))

    return guides


def _crosshair_marks(config: PageLayoutConfig, grid: GridDimensions) -> list[GuideLine]:
    arm = config.crosshair_arm_length / 2

    guides: list[GuideLine] = []
    for row in range(grid.items_per_column + 1):
        y = config.padding + row * config.item_height
        for col in range(grid.items_per_row + 1):
            x = config.padding + col * config.item_width
            guides.append(GuideLine(x1=x, y1=y - arm, x2=x, y2=y + arm))
            guides.append(GuideLine(x1=x - arm, y1=y, x2=x + arm, y2=y))

    return guides


def expand_placements(deck: Deck) -> list[Placement]:
    """
    Expand deck quantities into one placement per physical card.

    Entries are taken in storage order; each contributes `quantity`
    consecutive identical placements.
    """
    placements: list[Placement] = []
    for entry in deck.entries.values():
        placements.extend(
            Placement(entry_id=entry.id, image_source=entry.image_url or None)
            for _ in range(entry.quantity)
        )
    return placements


def layout_document(
    placements: Sequence[Placement],
    config: PageLayoutConfig,
) -> PositionedDocument:
    """
    Position every placement on its page.

    Returns:
        Document with one PositionedPage per page. No pages if there is
        nothing to place or no card fits.
    """
    grid = compute_grid(config)
    if not placements or grid.items_per_page == 0:
        return PositionedDocument(config=config)

    guides = tuple(compute_guide_geometry(config))
    pages: list[PositionedPage] = []

    for page_index, page_items in enumerate(paginate(placements, grid.items_per_page)):
        placed = []
        for local_index, placement in enumerate(page_items):
            position = position_item(local_index, config, grid)
            placed.append(
                PlacedItem(
                    entry_id=placement.entry_id,
                    page_index=page_index,
                    column=position.column,
                    row=position.row,
                    x=position.x,
                    y=position.y,
                    width=config.item_width,
                    height=config.item_height,
                    image_source=placement.image_source,
                )
            )
        pages.append(PositionedPage(index=page_index, items=tuple(placed), guides=guides))

    logger.debug(
        "Laid out %d cards on %d pages (%dx%d grid)",
        len(placements),
        len(pages),
        grid.items_per_row,
        grid.items_per_column,
    )
    return PositionedDocument(config=config, pages=tuple(pages))
