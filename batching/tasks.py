"""Sequential and batched execution of deferred tasks.

A deferred task is any zero-argument callable returning an awaitable. Nothing
here starts work until a task is invoked, and results always come back in the
order the tasks were given.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from batching.errors import BatchConfigurationError
from batching.results import chunk_list, flatten
from config.settings import DEFAULT_CONCURRENCY_RATE

T = TypeVar("T")

DeferredTask = Callable[[], Awaitable[T]]

logger = logging.getLogger(__name__)


async def _cancel_pending(futures: list[asyncio.Future]) -> None:
    for fut in futures:
        if not fut.done():
            fut.cancel()
    # Let cancelled siblings unwind; their outcomes are discarded.
    await asyncio.gather(*futures, return_exceptions=True)


def combine_deferred_tasks(tasks: Iterable[DeferredTask[T]]) -> DeferredTask[list[T]]:
    """Merge deferred tasks into one deferred task that runs them all at once.

    Invoking the result starts every task concurrently and resolves to their
    results in input order. If any task fails, siblings still running are
    cancelled and the first exception is re-raised.
    """
    snapshot = list(tasks)

    async def _combined() -> list[T]:
        futures: list[asyncio.Future] = []
        try:
            for task in snapshot:
                futures.append(asyncio.ensure_future(task()))
            return list(await asyncio.gather(*futures))
        except BaseException:
            await _cancel_pending(futures)
            raise

    return _combined


async def execute_sequential(tasks: Iterable[DeferredTask[T]]) -> list[T]:
    """Run deferred tasks one after another, collecting results in order.

    The next task is not invoked until the previous one has resolved. The first
    failure propagates and nothing after it is started.
    """
    results: list[T] = []
    for task in tasks:
        results.append(await task())
    return results


async def execute_in_batches(
    tasks: Iterable[DeferredTask[T]],
    concurrency_rate: int = DEFAULT_CONCURRENCY_RATE,
) -> list[T]:
    """Run deferred tasks ``concurrency_rate`` at a time, batch after batch.

    Useful for throttling requests against a rate-limited API. Output order
    matches input order. A failure aborts the call and later batches are
    never started; wrap tasks with ``with_default_error_handler`` for
    best-effort runs.
    """
    if isinstance(concurrency_rate, bool) or not isinstance(concurrency_rate, int):
        raise BatchConfigurationError(f"concurrency_rate must be an int, got {concurrency_rate!r}")
    if concurrency_rate < 1:
        raise BatchConfigurationError(f"concurrency_rate must be >= 1, got {concurrency_rate}")

    batches = chunk_list(tasks, concurrency_rate)
    logger.debug(
        f"Executing {sum(len(b) for b in batches)} tasks in {len(batches)} batches "
        f"(concurrency_rate={concurrency_rate})"
    )

    batch_results = await execute_sequential([combine_deferred_tasks(batch) for batch in batches])
    return flatten(batch_results)
