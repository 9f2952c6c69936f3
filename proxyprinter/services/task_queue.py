"""
Sequential, rate-limited task queue.

Runs async tasks strictly one at a time with a fixed pause between them,
which is what the card-data provider's rate limit asks for (10 requests per
second). Running them concurrently would get us throttled.

Each task gets its own timeout; a task that fails or times out is recorded
as a failed outcome and the queue moves on. Cancelling the queue abandons
the in-flight task and every pending one.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Rate limit: max 10 requests per second, so delay 100ms between requests
DEFAULT_DELAY = 0.1


class TaskQueueCancelledError(Exception):
    """Raised by SequentialTaskQueue.run when the queue is cancelled."""

    pass


@dataclass
class TaskOutcome(Generic[T]):
    """Result of one queued task: either a value or the error it failed with."""

    index: int
    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _discard_result(task: "asyncio.Future[object]") -> None:
    # Retrieve the outcome of an abandoned task so asyncio does not warn
    if not task.cancelled():
        task.exception()


class SequentialTaskQueue:
    """
    Runs task factories one after another.

    Args:
        delay: Seconds to wait between two tasks
        timeout: Per-task timeout in seconds (None waits forever)
    """

    def __init__(self, delay: float = DEFAULT_DELAY, timeout: float | None = None) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self.delay = delay
        self.timeout = timeout
        self._cancelled = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Abandon the in-flight task and everything still pending."""
        self._cancelled.set()

    async def run(
        self,
        tasks: Sequence[Callable[[], Awaitable[T]]],
        on_complete: Callable[[int, int], None] | None = None,
        on_outcome: Callable[[TaskOutcome[T]], None] | None = None,
    ) -> list[TaskOutcome[T]]:
        """
        Run every task in order.

        Args:
            tasks: Zero-argument callables returning awaitables
            on_complete: Called with (completed, total) after each task,
                whether it succeeded or failed
            on_outcome: Called with each task's outcome as soon as it is known,
                before on_complete

        Returns:
            One outcome per task, in task order

        Raises:
            TaskQueueCancelledError: If cancel() was called before all tasks ran
        """
        outcomes: list[TaskOutcome[T]] = []
        total = len(tasks)

        for index, factory in enumerate(tasks):
            if index > 0 and self.delay > 0:
                await self._pause()
            if self.cancelled:
                raise TaskQueueCancelledError(f"Cancelled after {index} of {total} tasks")

            outcome = await self._run_one(index, factory)
            outcomes.append(outcome)

            if on_outcome is not None:
                on_outcome(outcome)

            if on_complete is not None:
                on_complete(len(outcomes), total)

        return outcomes

    async def _pause(self) -> None:
        """Sleep for the inter-task delay, waking early on cancel."""
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=self.delay)
        except asyncio.TimeoutError:
            pass

    async def _run_one(
        self, index: int, factory: Callable[[], Awaitable[T]]
    ) -> TaskOutcome[T]:
        try:
            task = asyncio.ensure_future(factory())
        except Exception as e:
            return TaskOutcome(index=index, error=e)

        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            task.add_done_callback(_discard_result)
            raise
        finally:
            waiter.cancel()

        if task in done:
            if task.cancelled():
                return TaskOutcome(index=index, error=asyncio.CancelledError())
            error = task.exception()
            if error is not None:
                return TaskOutcome(index=index, error=error)
            return TaskOutcome(index=index, value=task.result())

        task.cancel()
        task.add_done_callback(_discard_result)

        if self.cancelled:
            raise TaskQueueCancelledError(f"Cancelled while running task {index}")

        logger.debug("Task %d timed out after %ss", index, self.timeout)
        return TaskOutcome(
            index=index,
            error=asyncio.TimeoutError(f"Task timed out after {self.timeout}s"),
        )
