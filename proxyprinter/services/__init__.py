"""
ProxyPrinter services.

Deck editing, card lookup, page layout and print-job orchestration.
"""

from proxyprinter.services.card_provider import ScryfallClient, SearchResult
from proxyprinter.services.deck_import import ImportResult, import_deck_list
from proxyprinter.services.deck_store import (
    apply_quantity_change,
    build_deck_from_import_results,
    change_card_quantity,
    classify_type_line,
    group_entries_by_type,
    set_preferred_image,
    verify_deck_total,
)
from proxyprinter.services.image_resolver import ImageResolver
from proxyprinter.services.layout_engine import (
    compute_grid,
    compute_guide_geometry,
    expand_placements,
    layout_document,
    paginate,
    position_item,
)
from proxyprinter.services.pdf_renderer import DocumentRenderer, render_pdf
from proxyprinter.services.print_coordinator import (
    PrintCoordinator,
    PrintJobResult,
    progress_percent,
)
from proxyprinter.services.task_queue import (
    SequentialTaskQueue,
    TaskOutcome,
    TaskQueueCancelledError,
)

__all__ = [
    # Deck state
    "apply_quantity_change",
    "build_deck_from_import_results",
    "change_card_quantity",
    "classify_type_line",
    "group_entries_by_type",
    "set_preferred_image",
    "verify_deck_total",
    # Card data
    "ImportResult",
    "ScryfallClient",
    "SearchResult",
    "import_deck_list",
    # Layout
    "compute_grid",
    "compute_guide_geometry",
    "expand_placements",
    "layout_document",
    "paginate",
    "position_item",
    # Printing
    "DocumentRenderer",
    "ImageResolver",
    "PrintCoordinator",
    "PrintJobResult",
    "progress_percent",
    "render_pdf",
    # Scheduling
    "SequentialTaskQueue",
    "TaskOutcome",
    "TaskQueueCancelledError",
]
