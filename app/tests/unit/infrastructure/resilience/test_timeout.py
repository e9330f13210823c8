"""Unit tests for the abandon-on-deadline timeout guard."""

import asyncio

import pytest

from infrastructure.resilience import OperationTimeoutError, with_timeout
from infrastructure.resilience.timeout import _ABANDONED

pytestmark = pytest.mark.unit


async def _value(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(delay=0.0):
    await asyncio.sleep(delay)
    raise ValueError("bad query")


class TestWithTimeout:
    @pytest.mark.asyncio
    async def test_returns_result_before_deadline(self):
        assert await with_timeout(_value("ok"), 1.0) == "ok"

    @pytest.mark.asyncio
    async def test_propagates_operation_error(self):
        with pytest.raises(ValueError, match="bad query"):
            await with_timeout(_fail(), 1.0)

    @pytest.mark.asyncio
    async def test_raises_on_deadline(self):
        with pytest.raises(OperationTimeoutError) as exc_info:
            await with_timeout(_value("late", delay=0.05), 0.01, label="slow query")

        assert exc_info.value.label == "slow query"
        assert exc_info.value.timeout_seconds == 0.01
        assert "slow query timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_abandoned_operation_keeps_running(self):
        finished = asyncio.Event()

        async def slow():
            await asyncio.sleep(0.05)
            finished.set()
            return "late"

        pending = len(_ABANDONED)

        with pytest.raises(OperationTimeoutError):
            await with_timeout(slow(), 0.01)
        assert len(_ABANDONED) == pending + 1

        await asyncio.wait_for(finished.wait(), 1.0)
        await asyncio.sleep(0.01)
        assert len(_ABANDONED) == pending

    @pytest.mark.asyncio
    async def test_abandoned_failure_is_not_raised(self):
        pending = len(_ABANDONED)

        with pytest.raises(OperationTimeoutError):
            await with_timeout(_fail(delay=0.05), 0.01)

        await asyncio.sleep(0.1)
        assert len(_ABANDONED) == pending

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout", [None, 0, -1])
    async def test_no_deadline(self, timeout):
        assert await with_timeout(_value("ok", delay=0.02), timeout) == "ok"
