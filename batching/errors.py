"""Error types and the opt-in best-effort wrapper for deferred tasks."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar

from config.settings import log_tracebacks_enabled

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BatchConfigurationError(ValueError):
    """Raised when a chunk size or concurrency rate is not a positive integer."""


async def default_error_handler(
    awaitable: Awaitable[T],
    log: Optional[logging.Logger] = None,
) -> Optional[T]:
    """Await a result, converting any failure into None.

    The failure is reported on ``log`` (this module's logger when omitted).
    Cancellation is not intercepted.
    """
    log = log or logger
    try:
        return await awaitable
    except Exception as e:
        log.error(
            f"Deferred task failed ({type(e).__name__}): {e}",
            exc_info=log_tracebacks_enabled(),
        )
        return None


def with_default_error_handler(
    task: Callable[[], Awaitable[T]],
    log: Optional[logging.Logger] = None,
) -> Callable[[], Awaitable[Optional[T]]]:
    """Wrap a deferred task so a failure resolves to None instead of raising."""

    async def _invoke() -> T:
        # Calling inside the coroutine routes synchronous raises through the handler too.
        return await task()

    def _deferred() -> Awaitable[Optional[T]]:
        return default_error_handler(_invoke(), log=log)

    return _deferred
