"""
Bounded Worker Pool.

Runs one coroutine per item with a fixed number in flight. A failing task
yields its fallback value and never cancels its siblings.
"""

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

from config import logger

T = TypeVar("T")
R = TypeVar("R")


async def run_bounded(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    limit: int,
    fallback: Callable[[], R],
    label: Callable[[T], str] = str,
) -> List[R]:
    """
    Apply an async worker to every item with bounded concurrency.

    Args:
        items (Sequence[T]): Work items
        worker (Callable[[T], Awaitable[R]]): Coroutine function run per item
        limit (int): Maximum number of workers in flight
        fallback (Callable[[], R]): Factory for the result of a failed task
        label (Callable[[T], str]): Item description used in failure logs

    Returns:
        List[R]: Results in the order of ``items``
    """
    semaphore = asyncio.Semaphore(max(1, limit))

    async def guarded(item: T) -> R:
        async with semaphore:
            try:
                return await worker(item)
            except Exception as e:
                logger.error(
                    {
                        "message": "Worker task failed, using empty result",
                        "item": label(item),
                        "error": str(e),
                    }
                )
                return fallback()

    return list(await asyncio.gather(*(guarded(item) for item in items)))
