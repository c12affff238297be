"""Unit-Tests fuer RetryExecutor (Backoff, Timeout, Erschoepfung)."""

import asyncio

import pytest
from fakes import RecordingSleep, ScriptedModel

from idea_radar.domain.exceptions import (
    InputValidationError,
    ParseError,
    RetryExhaustedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from idea_radar.infrastructure.retry import RetryExecutor, RetryPolicy


class TestRetryPolicy:
    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.attempts == 3
        assert policy.timeout_ms is None

    def test_exponential_delays(self):
        policy = RetryPolicy(base_delay_ms=1000)
        assert [policy.delay_seconds(i) for i in range(3)] == [1.0, 2.0, 4.0]


class TestRetryExecutor:
    async def test_success_first_try(self, retry: RetryExecutor, sleep: RecordingSleep):
        model = ScriptedModel("ok")
        result = await retry.execute(lambda: model.generate("p"), RetryPolicy())
        assert result == "ok"
        assert model.calls == 1
        assert sleep.delays == []

    async def test_fail_fail_succeed(self, retry: RetryExecutor, sleep: RecordingSleep):
        model = ScriptedModel(UpstreamError("boom"), UpstreamError("boom"), "ok")
        result = await retry.execute(lambda: model.generate("p"), RetryPolicy())
        assert result == "ok"
        assert model.calls == 3
        assert sleep.delays == [1.0, 2.0]

    async def test_three_failures_aggregate_error(self, retry: RetryExecutor):
        model = ScriptedModel(UpstreamError("first"), UpstreamError("second"), UpstreamError("last one"))
        with pytest.raises(RetryExhaustedError) as exc_info:
            await retry.execute(lambda: model.generate("p"), RetryPolicy(), label="Research")
        err = exc_info.value
        assert "3" in str(err)
        assert "last one" in str(err)
        assert str(err).startswith("Research failed after 3 attempts")
        assert err.attempts == 3
        assert isinstance(err.last_error, UpstreamError)
        assert err.__cause__ is err.last_error
        assert model.calls == 3

    async def test_zero_retries_single_attempt(self, retry: RetryExecutor, sleep: RecordingSleep):
        model = ScriptedModel(UpstreamError("nope"))
        with pytest.raises(RetryExhaustedError):
            await retry.execute(lambda: model.generate("p"), RetryPolicy(max_retries=0))
        assert model.calls == 1
        assert sleep.delays == []

    @pytest.mark.parametrize("error", [ParseError("bad json"), InputValidationError("bad input")])
    async def test_non_retryable_propagates(self, retry: RetryExecutor, error):
        model = ScriptedModel(error, "ok")
        with pytest.raises(type(error)):
            await retry.execute(lambda: model.generate("p"), RetryPolicy())
        assert model.calls == 1

    async def test_retry_on_restricts_retryable(self, retry: RetryExecutor):
        model = ScriptedModel(KeyError("x"), "ok")
        with pytest.raises(KeyError):
            await retry.execute(
                lambda: model.generate("p"), RetryPolicy(), retry_on=(UpstreamError,)
            )
        assert model.calls == 1

    async def test_timeout_counts_as_failure(self, retry: RetryExecutor):
        calls = 0

        async def slow() -> str:
            nonlocal calls
            calls += 1
            await asyncio.sleep(1)
            return "late"

        policy = RetryPolicy(max_retries=1, timeout_ms=10)
        with pytest.raises(RetryExhaustedError) as exc_info:
            await retry.execute(slow, policy, label="Research")
        assert calls == 2
        assert isinstance(exc_info.value.last_error, UpstreamTimeoutError)
        assert "timeout" in str(exc_info.value)

    async def test_timeout_then_success(self, retry: RetryExecutor):
        attempts = 0

        async def flaky() -> str:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                await asyncio.sleep(1)
            return "done"

        result = await retry.execute(flaky, RetryPolicy(timeout_ms=20))
        assert result == "done"
        assert attempts == 2
