"""
Print job orchestration.

Turns a deck into a printable document:

1. Expand quantities into one placement per physical card.
2. Resolve every distinct image source, one at a time with a pause between
   requests (provider rate limit). Failures are logged and leave their cards
   blank; they never abort the job.
3. Lay out the placements on pages.
4. Hand the positioned document and the resolved images to a renderer.

Progress (0-100) is reported after every resolution attempt so a progress
bar can follow the slow step.
"""

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field

from proxyprinter.config import settings
from proxyprinter.models.deck import Deck
from proxyprinter.models.failure import PrintJobCancelledError
from proxyprinter.models.layout import PageLayoutConfig, PositionedDocument
from proxyprinter.services.image_resolver import ImageResolver
from proxyprinter.services.layout_engine import (
    compute_grid,
    expand_placements,
    layout_document,
)
from proxyprinter.services.pdf_renderer import DocumentRenderer, render_pdf
from proxyprinter.services.task_queue import (
    SequentialTaskQueue,
    TaskOutcome,
    TaskQueueCancelledError,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def progress_percent(completed: int, total: int) -> int:
    """Percentage of work done, rounded half up."""
    if total <= 0:
        return 100
    return math.floor(completed * 100 / total + 0.5)


@dataclass
class PrintJobResult:
    """
    Outcome of a print job.

    Attributes:
        document: The positioned document handed to the renderer
        output: Rendered file content (e.g., PDF bytes)
        failed_sources: Image sources that could not be loaded, in the order
            they were attempted; their cards were printed blank
    """

    document: PositionedDocument
    output: bytes
    failed_sources: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return self.document.page_count


class PrintCoordinator:
    """
    Runs one print job at a time.

    A second run() while a job is in progress raises RuntimeError. A cancel()
    issued before the job gets to run still dismisses it; the flag is cleared
    only once that job has finished.

    Args:
        resolver: Loads image bytes for a source
        renderer: Serializes the positioned document (PDF by default)
        on_progress: Receives the completion percentage after each image
        delay: Seconds between image requests
        timeout: Per-image timeout in seconds; expiry counts as a failure
    """

    def __init__(
        self,
        resolver: ImageResolver,
        renderer: DocumentRenderer = render_pdf,
        on_progress: ProgressCallback | None = None,
        delay: float | None = None,
        timeout: float | None = None,
    ) -> None:
        self.resolver = resolver
        self.renderer = renderer
        self.on_progress = on_progress
        self.delay = settings.rate_limit_delay if delay is None else delay
        self.timeout = settings.image_timeout if timeout is None else timeout
        self._queue: SequentialTaskQueue | None = None
        self._cancelled = False
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def cancel(self) -> None:
        """
        Dismiss the current (or about to start) job.

        Pending image requests are dropped and no document is emitted.
        The deck passed to run() is never touched.
        """
        self._cancelled = True
        if self._queue is not None:
            self._queue.cancel()

    async def run(self, deck: Deck, config: PageLayoutConfig) -> PrintJobResult | None:
        """
        Build and render the print document for a deck.

        Returns:
            The job result, or None if there is nothing to print (empty deck
            or a page too small for a single card)

        Raises:
            PrintJobCancelledError: If cancel() was called before rendering
            RuntimeError: If another job is already running on this coordinator
        """
        if self._running:
            raise RuntimeError("A print job is already running")

        self._running = True
        try:
            return await self._run(deck, config)
        finally:
            self._running = False
            self._cancelled = False

    async def _run(self, deck: Deck, config: PageLayoutConfig) -> PrintJobResult | None:
        if self._cancelled:
            raise PrintJobCancelledError()

        placements = expand_placements(deck)
        if not placements:
            logger.info("Deck is empty, nothing to print")
            return None

        grid = compute_grid(config)
        if grid.items_per_page == 0:
            logger.warning(
                "No %.1fx%.1f card fits on a %.1fx%.1f page with %.1f padding",
                config.item_width,
                config.item_height,
                config.page_width,
                config.page_height,
                config.padding,
            )
            return None

        # Each distinct image is fetched once, in first-appearance order
        sources = list(dict.fromkeys(p.image_source for p in placements if p.image_source))
        images, failed = await self._resolve_images(sources)

        if self._cancelled:
            raise PrintJobCancelledError()

        document = layout_document(placements, config)
        logger.info(
            "Rendering %d cards on %d pages (%d images, %d failed)",
            len(placements),
            document.page_count,
            len(images),
            len(failed),
        )
        # Image decoding and page encoding are CPU-bound; keep them off the event loop
        output = await asyncio.to_thread(self.renderer, document, images)

        if self._cancelled:
            raise PrintJobCancelledError()

        return PrintJobResult(document=document, output=output, failed_sources=failed)

    async def _resolve_images(self, sources: list[str]) -> tuple[dict[str, bytes], list[str]]:
        images: dict[str, bytes] = {}
        failed: list[str] = []
        if not sources:
            self._report(100)
            return images, failed

        logger.info("Resolving %d card images", len(sources))
        queue = SequentialTaskQueue(delay=self.delay, timeout=self.timeout)
        self._queue = queue
        if self._cancelled:
            queue.cancel()

        def record(outcome: TaskOutcome[bytes]) -> None:
            source = sources[outcome.index]
            if outcome.ok and outcome.value:
                images[source] = outcome.value
            else:
                logger.warning("Image for %s failed, printing blank: %s", source, outcome.error)
                failed.append(source)

        tasks = [lambda source=source: self.resolver.resolve(source) for source in sources]

        try:
            await queue.run(
                tasks,
                on_complete=lambda done, total: self._report(progress_percent(done, total)),
                on_outcome=record,
            )
        except TaskQueueCancelledError as e:
            logger.info("Print job cancelled: %s", e)
            raise PrintJobCancelledError() from e
        finally:
            self._queue = None

        return images, failed

    def _report(self, percent: int) -> None:
        if self.on_progress is not None:
            self.on_progress(percent)
