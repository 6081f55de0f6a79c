"""Tests for the default error handler."""

import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from batching.errors import default_error_handler, with_default_error_handler


async def _ok(value):
    return value


async def _fail(message="rate limited"):
    raise RuntimeError(message)


class TestDefaultErrorHandler:
    @pytest.mark.asyncio
    async def test_success_passes_through(self):
        assert await default_error_handler(_ok({"id": 1})) == {"id": 1}

    @pytest.mark.asyncio
    async def test_falsy_success_is_not_converted(self):
        assert await default_error_handler(_ok(0)) == 0

    @pytest.mark.asyncio
    async def test_failure_becomes_none_and_is_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="batching.errors"):
            assert await default_error_handler(_fail()) is None

        assert "RuntimeError" in caplog.text
        assert "rate limited" in caplog.text

    @pytest.mark.asyncio
    async def test_uses_injected_logger(self, caplog):
        log = logging.getLogger("tests.injected")
        with caplog.at_level(logging.ERROR, logger="tests.injected"):
            await default_error_handler(_fail("quota exceeded"), log=log)

        records = [r for r in caplog.records if r.name == "tests.injected"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert "quota exceeded" in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_tracebacks_follow_settings(self, caplog, monkeypatch):
        monkeypatch.setenv("BATCH_LOG_TRACEBACKS", "true")
        with caplog.at_level(logging.ERROR, logger="batching.errors"):
            await default_error_handler(_fail())

        assert caplog.records[-1].exc_info is not None

    @pytest.mark.asyncio
    async def test_unrelated_bad_settings_do_not_break_handler(self, monkeypatch):
        monkeypatch.setenv("BATCH_CONCURRENCY_RATE", "0")
        monkeypatch.setenv("LOG_LEVEL", "bogus")
        assert await default_error_handler(_fail()) is None

    @pytest.mark.asyncio
    async def test_cancellation_is_not_swallowed(self):
        async def _cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await default_error_handler(_cancelled())

    @pytest.mark.asyncio
    async def test_accepts_futures(self):
        loop = asyncio.get_running_loop()
        fut = loop.create_future()
        fut.set_exception(ConnectionError("reset"))
        assert await default_error_handler(fut) is None


class TestWithDefaultErrorHandler:
    @pytest.mark.asyncio
    async def test_wraps_deferred_task(self):
        calls = []

        async def _task():
            calls.append(1)
            raise TimeoutError("slow upstream")

        wrapped = with_default_error_handler(_task)
        assert calls == []
        assert await wrapped() is None
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_synchronous_raise_is_handled(self):
        def _broken():
            raise TypeError("not awaitable")

        assert await with_default_error_handler(_broken)() is None

    @pytest.mark.asyncio
    async def test_success_unchanged(self):
        assert await with_default_error_handler(lambda: _ok("done"))() == "done"
