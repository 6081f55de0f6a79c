import logging
import time
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from batching import execute_in_batches, filter_empty, with_default_error_handler
from batching.tasks import DeferredTask
from config.settings import DEFAULT_CONCURRENCY_RATE

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": "batching-demo/0.1 (+https://example.com)",
    "Accept": "text/html,application/json;q=0.9,*/*;q=0.8",
}
_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class UrlStatus(BaseModel):
    """Outcome of one status check."""

    url: str = Field(description="URL that was requested")
    status_code: int = Field(description="Final HTTP status code")
    elapsed_ms: float = Field(default=0.0, ge=0, description="Wall time for the request")


def build_status_tasks(urls: list[str], client: httpx.AsyncClient) -> list[DeferredTask[UrlStatus]]:
    """One deferred GET per URL; nothing is requested until a task is invoked."""

    def _make(url: str) -> DeferredTask[UrlStatus]:
        async def _check() -> UrlStatus:
            started = time.perf_counter()
            resp = await client.get(url)
            resp.raise_for_status()
            elapsed = (time.perf_counter() - started) * 1000
            logger.debug(f"{url} -> {resp.status_code} in {elapsed:.0f}ms")
            return UrlStatus(url=url, status_code=resp.status_code, elapsed_ms=elapsed)

        return _check

    return [_make(url) for url in urls]


async def check_urls(
    urls: list[str],
    concurrency_rate: int = DEFAULT_CONCURRENCY_RATE,
    best_effort: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> list[UrlStatus]:
    """Check URLs a batch at a time.

    With ``best_effort`` failed requests are logged and left out of the
    result; otherwise the first failure aborts the run.
    """
    if client is None:
        async with httpx.AsyncClient(headers=_HEADERS, timeout=_TIMEOUT, follow_redirects=True) as owned:
            return await check_urls(urls, concurrency_rate, best_effort, client=owned)

    tasks = build_status_tasks(urls, client)
    if not best_effort:
        return await execute_in_batches(tasks, concurrency_rate)

    results = await execute_in_batches([with_default_error_handler(t, log=logger) for t in tasks], concurrency_rate)
    statuses = filter_empty(results)
    if len(statuses) < len(urls):
        logger.warning(f"{len(urls) - len(statuses)} of {len(urls)} status checks failed")
    return statuses
