"""Request-scoped collaborators, overridable in tests via app.dependency_overrides."""

from collections.abc import AsyncGenerator

from proxyprinter.services.card_provider import ScryfallClient
from proxyprinter.services.image_resolver import ImageResolver


async def get_card_provider() -> AsyncGenerator[ScryfallClient, None]:
    async with ScryfallClient() as client:
        yield client


async def get_image_resolver() -> AsyncGenerator[ImageResolver, None]:
    async with ImageResolver() as resolver:
        yield resolver
