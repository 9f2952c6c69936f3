"""
Card image loading.

Image sources are either HTTP(S) URLs (provider images) or paths to local
files (custom art). Both resolve to raw image bytes for the renderer.
"""

import asyncio
import logging
from pathlib import Path
from types import TracebackType

import httpx

from proxyprinter.config import settings
from proxyprinter.models.failure import ImageResolutionError

logger = logging.getLogger(__name__)


def is_remote_source(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class ImageResolver:
    """
    Loads image bytes for a source.

    Reuses one httpx.AsyncClient for every download. Pass a client to share
    connections (or to inject a mocked transport); otherwise one is created
    lazily and closed by aclose() / the async context manager.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ImageResolver":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": settings.user_agent},
                follow_redirects=True,
                timeout=settings.request_timeout,
            )
        return self._client

    async def resolve(self, source: str) -> bytes:
        """
        Load the image behind `source`.

        Raises:
            ImageResolutionError: If the source is empty, missing, or the
                download fails
        """
        if not source:
            raise ImageResolutionError(source, "Empty image source")

        if is_remote_source(source):
            return await self._download(source)

        path = Path(source)
        if not path.is_file():
            raise ImageResolutionError(source, "File not found")
        return await asyncio.to_thread(path.read_bytes)

    async def _download(self, url: str) -> bytes:
        logger.debug("Downloading image %s", url)
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageResolutionError(url, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ImageResolutionError(url, str(e)) from e

        if not response.content:
            raise ImageResolutionError(url, "Empty response body")
        return response.content
