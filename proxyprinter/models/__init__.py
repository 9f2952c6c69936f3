from proxyprinter.models.card import CardRecord
from proxyprinter.models.deck import Deck, DeckEntry
from proxyprinter.models.failure import (
    DeckInvariantError,
    FailureDetail,
    FailureKind,
    ImageResolutionError,
    KnownError,
    NothingToPrintError,
    PrintJobCancelledError,
    ProviderError,
)
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

__all__ = [
    "CardRecord",
    "Deck",
    "DeckEntry",
    "DeckInvariantError",
    "FailureDetail",
    "FailureKind",
    "GridDimensions",
    "GridPosition",
    "GuideLine",
    "GuideStyle",
    "ImageResolutionError",
    "KnownError",
    "NothingToPrintError",
    "PageLayoutConfig",
    "PlacedItem",
    "Placement",
    "PositionedDocument",
    "PositionedPage",
    "PrintJobCancelledError",
    "ProviderError",
]
