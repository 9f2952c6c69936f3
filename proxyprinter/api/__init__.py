from proxyprinter.api.cards import router as cards_router
from proxyprinter.api.deck import router as deck_router
from proxyprinter.api.health import router as health_router
from proxyprinter.api.printing import router as printing_router

__all__ = [
    "cards_router",
    "deck_router",
    "health_router",
    "printing_router",
]
