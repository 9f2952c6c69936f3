"""Tests for the print-sheet layout engine."""

import pytest

from proxyprinter.models.deck import Deck
from proxyprinter.models.layout import (
    GridDimensions,
    GuideStyle,
    PageLayoutConfig,
    Placement,
)
from proxyprinter.services.layout_engine import (
    compute_grid,
    compute_guide_geometry,
    expand_placements,
    layout_document,
    paginate,
    position_item,
)


def _config(**overrides: object) -> PageLayoutConfig:
    values: dict = {
        "page_width": 100.0,
        "page_height": 100.0,
        "item_width": 30.0,
        "item_height": 40.0,
        "spacing": 0.0,
        "padding": 0.0,
    }
    values.update(overrides)
    return PageLayoutConfig(**values)


class TestComputeGrid:
    """Tests for grid capacity."""

    def test_a4_grid(self, a4_config: PageLayoutConfig) -> None:
        """Three by three cards fit on A4 with 26pt padding."""
        assert compute_grid(a4_config) == GridDimensions(
            items_per_row=3, items_per_column=3, items_per_page=9
        )

    def test_deterministic(self, a4_config: PageLayoutConfig) -> None:
        assert compute_grid(a4_config) == compute_grid(a4_config)

    def test_exact_fit(self) -> None:
        """Cards that fill the page exactly are all counted."""
        config = _config(page_width=90.0, page_height=80.0)

        grid = compute_grid(config)

        assert grid.items_per_row == 3
        assert grid.items_per_column == 2

    def test_spacing_only_between_cards(self) -> None:
        # 3 cards + 2 gaps = 3*30 + 2*5 = 100
        config = _config(spacing=5.0)

        assert compute_grid(config).items_per_row == 3

    def test_padding_on_both_sides(self) -> None:
        # 100 - 2*6 = 88 usable, only two 30pt cards fit
        config = _config(padding=6.0)

        assert compute_grid(config).items_per_row == 2

    def test_card_too_large(self) -> None:
        config = _config(item_width=120.0)

        grid = compute_grid(config)

        assert grid.items_per_row == 0
        assert grid.items_per_page == 0

    def test_padding_larger_than_page(self) -> None:
        config = _config(padding=60.0)

        assert compute_grid(config).items_per_page == 0

    def test_crosshair_ignores_spacing(self) -> None:
        with_gaps = _config(spacing=10.0, guide_style=GuideStyle.BORDER_LINES)
        crosshair = _config(spacing=10.0, guide_style=GuideStyle.CROSSHAIR_MARKS)

        assert compute_grid(with_gaps).items_per_row == 2
        assert compute_grid(crosshair).items_per_row == 3


class TestPaginate:
    """Tests for splitting items into pages."""

    def test_scenario(self) -> None:
        pages = paginate(["A", "A", "B", "B", "B"], 3)

        assert pages == [["A", "A", "B"], ["B", "B"]]

    def test_empty(self) -> None:
        assert paginate([], 9) == []

    @pytest.mark.parametrize("per_page", [0, -1])
    def test_invalid_page_size(self, per_page: int) -> None:
        with pytest.raises(ValueError):
            paginate([1, 2], per_page)


class TestPositionItem:
    """Tests for item positioning."""

    def test_first_item_at_padding(self, a4_config: PageLayoutConfig) -> None:
        position = position_item(0, a4_config)

        assert (position.column, position.row) == (0, 0)
        assert position.x == pytest.approx(26.0)
        assert position.y == pytest.approx(26.0)

    def test_row_major_order(self, a4_config: PageLayoutConfig) -> None:
        position = position_item(4, a4_config)

        assert (position.column, position.row) == (1, 1)
        assert position.x == pytest.approx(26.0 + 178.58 + 0.5)
        assert position.y == pytest.approx(26.0 + 249.45 + 0.5)

    def test_last_item(self, a4_config: PageLayoutConfig) -> None:
        position = position_item(8, a4_config)

        assert (position.column, position.row) == (2, 2)
        assert position.x + a4_config.item_width <= a4_config.page_width - a4_config.padding

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_out_of_range(self, index: int, a4_config: PageLayoutConfig) -> None:
        with pytest.raises(ValueError):
            position_item(index, a4_config)

    def test_empty_grid(self) -> None:
        with pytest.raises(ValueError, match="No card fits"):
            position_item(0, _config(item_width=500.0))


class TestGuideGeometry:
    """Tests for cut guides."""

    def test_none(self, a4_config: PageLayoutConfig) -> None:
        assert compute_guide_geometry(a4_config) == []

    def test_border_line_count(self) -> None:
        config = _config(guide_style=GuideStyle.BORDER_LINES)

        guides = compute_guide_geometry(config)

        # 3 columns -> 4 verticals, 2 rows -> 3 horizontals
        assert len(guides) == 4 + 3

    def test_border_lines_span_grid(self) -> None:
        config = _config(spacing=4.0, padding=2.0, item_width=20.0, guide_style=GuideStyle.BORDER_LINES)
        grid = compute_grid(config)

        guides = compute_guide_geometry(config)

        first_vertical = guides[0]
        assert first_vertical.x1 == pytest.approx(0.0)
        assert first_vertical.y1 == pytest.approx(0.0)
        assert first_vertical.y2 == pytest.approx(2.0 + grid.items_per_column * 44.0 - 2.0)

        first_horizontal = guides[grid.items_per_row + 1]
        assert first_horizontal.x2 == pytest.approx(2.0 + grid.items_per_row * 24.0 - 2.0)

    def test_crosshair_count(self) -> None:
        config = _config(guide_style=GuideStyle.CROSSHAIR_MARKS)

        guides = compute_guide_geometry(config)

        # (3+1) x (2+1) intersections, two segments each
        assert len(guides) == 4 * 3 * 2

    def test_crosshair_centered_on_corners(self) -> None:
        config = _config(
            padding=5.0,
            item_width=20.0,
            guide_style=GuideStyle.CROSSHAIR_MARKS,
            crosshair_arm_length=6.0,
        )

        vertical, horizontal = compute_guide_geometry(config)[:2]

        assert (vertical.x1, vertical.y1, vertical.x2, vertical.y2) == (5.0, 2.0, 5.0, 8.0)
        assert (horizontal.x1, horizontal.y1, horizontal.x2, horizontal.y2) == (2.0, 5.0, 8.0, 5.0)

    def test_empty_grid_has_no_guides(self) -> None:
        config = _config(item_width=500.0, guide_style=GuideStyle.BORDER_LINES)

        assert compute_guide_geometry(config) == []


class TestExpandPlacements:
    """Tests for quantity expansion."""

    def test_scenario(self, two_card_deck: Deck) -> None:
        placements = expand_placements(two_card_deck)

        assert [p.entry_id for p in placements] == ["A", "A", "B", "B", "B"]
        assert placements[0].image_source == "https://img/a.png"

    def test_empty_deck(self) -> None:
        assert expand_placements(Deck.empty()) == []


class TestLayoutDocument:
    """Tests for whole-document layout."""

    def test_scenario_three_per_page(self, two_card_deck: Deck) -> None:
        config = _config(page_width=90.0, page_height=40.0)

        document = layout_document(expand_placements(two_card_deck), config)

        assert document.page_count == 2
        assert [i.entry_id for i in document.pages[0].items] == ["A", "A", "B"]
        assert [i.entry_id for i in document.pages[1].items] == ["B", "B"]
        assert [i.page_index for i in document.pages[1].items] == [1, 1]

    def test_items_carry_geometry(self, a4_config: PageLayoutConfig) -> None:
        placements = [Placement(entry_id=str(n), image_source=f"https://img/{n}") for n in range(10)]

        document = layout_document(placements, a4_config)

        assert document.page_count == 2
        tenth = document.pages[1].items[0]
        assert tenth.entry_id == "9"
        assert (tenth.column, tenth.row) == (0, 0)
        assert tenth.width == a4_config.item_width
        assert tenth.height == a4_config.item_height

    def test_every_page_gets_guides(self, a4_config: PageLayoutConfig) -> None:
        config = PageLayoutConfig(
            page_width=a4_config.page_width,
            page_height=a4_config.page_height,
            item_width=a4_config.item_width,
            item_height=a4_config.item_height,
            spacing=a4_config.spacing,
            padding=a4_config.padding,
            guide_style=GuideStyle.BORDER_LINES,
        )
        placements = [Placement(entry_id="x")] * 12

        document = layout_document(placements, config)

        assert len(document.pages[0].guides) == 8
        assert document.pages[0].guides == document.pages[1].guides

    def test_image_sources(self, two_card_deck: Deck, a4_config: PageLayoutConfig) -> None:
        document = layout_document(expand_placements(two_card_deck), a4_config)

        assert document.image_sources() == {"https://img/a.png", "https://img/b.png"}

    def test_empty_input(self, a4_config: PageLayoutConfig) -> None:
        assert layout_document([], a4_config).page_count == 0

    def test_nothing_fits(self) -> None:
        document = layout_document([Placement(entry_id="x")], _config(item_width=500.0))

        assert document.page_count == 0
