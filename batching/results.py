"""Chunking and result-shaping helpers for batched execution."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable, Sequence
from typing import Optional, TypeVar

from batching.errors import BatchConfigurationError

T = TypeVar("T")


def chunk_list(items: Iterable[T], chunk_size: int) -> list[list[T]]:
    """Split items into consecutive chunks of ``chunk_size``.

    The last chunk holds the remainder. The caller's sequence is never mutated.
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise BatchConfigurationError(f"chunk_size must be an int, got {chunk_size!r}")
    if chunk_size < 1:
        raise BatchConfigurationError(f"chunk_size must be >= 1, got {chunk_size}")

    snapshot = list(items)
    return [snapshot[start:start + chunk_size] for start in range(0, len(snapshot), chunk_size)]


def not_empty(value: Optional[T]) -> bool:
    """True for any value other than None (falsy values like 0 or "" count as present)."""
    return value is not None


def filter_empty(values: Iterable[Optional[T]]) -> list[T]:
    """Drop None entries, keeping the order of everything else."""
    return [v for v in values if not_empty(v)]


def flatten(nested: Iterable[Sequence[T]]) -> list[T]:
    flat: list[T] = []
    for inner in nested:
        flat.extend(inner)
    return flat


async def resolve_all_and_filter_empty(awaitables: Iterable[Awaitable[Optional[T]]]) -> list[T]:
    """Await everything concurrently, then drop None results.

    All-or-fail: the first exception propagates and no results are returned.
    """
    resolved = await asyncio.gather(*awaitables)
    return filter_empty(resolved)
