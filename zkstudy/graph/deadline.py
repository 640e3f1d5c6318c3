"""
Deadline race.

Runs an awaitable against a wall-clock timer and returns control to the
caller as soon as either finishes.
"""

import asyncio
import logging
from typing import Awaitable, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeadlineExceeded(Exception):
    """Raised when the timer wins the race."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Deadline of {timeout_seconds:g}s exceeded")


def _discard_result(task: "asyncio.Future") -> None:
    # Retrieve the loser's outcome so it is never reported as unhandled
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Abandoned task finished with {type(exc).__name__}: {exc}")


async def race_deadline(awaitable: Awaitable[T], timeout_seconds: float) -> T:
    """
    Await `awaitable`, giving up after `timeout_seconds`.

    When the timer wins, the task is cancelled but not awaited: the caller
    gets DeadlineExceeded immediately and whatever the task eventually
    produces is discarded.

    Args:
        awaitable: Work to run
        timeout_seconds: Deadline in seconds

    Returns:
        The awaitable's result, if it finished in time

    Raises:
        DeadlineExceeded: If the deadline elapsed first
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return task.result()

    task.cancel()
    task.add_done_callback(_discard_result)
    raise DeadlineExceeded(timeout_seconds)
