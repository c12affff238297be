"""Generischer Retry mit Timeout pro Versuch und exponentiellem Backoff."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from idea_radar.domain.exceptions import (
    InputValidationError,
    ParseError,
    RetryExhaustedError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fehler, die ein weiterer Versuch nicht behebt
NON_RETRYABLE: tuple[type[BaseException], ...] = (ParseError, InputValidationError)


@dataclass(frozen=True)
class RetryPolicy:
    """max_retries=2 heisst 3 Versuche insgesamt. timeout_ms=None: kein Limit."""

    max_retries: int = 2
    base_delay_ms: int = 1000
    timeout_ms: int | None = None

    @property
    def attempts(self) -> int:
        return self.max_retries + 1

    def delay_seconds(self, attempt: int) -> float:
        """Wartezeit nach Versuch ``attempt`` (0-basiert): base * 2^attempt."""
        return self.base_delay_ms * (2 ** attempt) / 1000


class RetryExecutor:
    """Fuehrt eine async Operation mit Retry-Policy aus.

    ``sleep`` ist injizierbar, damit Tests ohne echte Wartezeiten laufen.
    """

    def __init__(
        self, sleep: Callable[[float], Awaitable[object]] = asyncio.sleep
    ) -> None:
        self._sleep = sleep

    async def _attempt(
        self, operation: Callable[[], Awaitable[T]], policy: RetryPolicy, label: str
    ) -> T:
        if policy.timeout_ms is None:
            return await operation()
        try:
            return await asyncio.wait_for(operation(), timeout=policy.timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            raise UpstreamTimeoutError(
                f"{label} timeout after {policy.timeout_ms}ms"
            ) from e

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        policy: RetryPolicy | None = None,
        *,
        label: str = "Operation",
        retry_on: tuple[type[BaseException], ...] = (Exception,),
    ) -> T:
        """Operation bis zu ``policy.attempts`` mal ausfuehren.

        Nicht wiederholbare Fehler (ParseError, InputValidationError oder
        nicht in ``retry_on``) werden sofort weitergereicht. Nach dem
        letzten Fehlversuch: ``RetryExhaustedError``.
        """
        policy = policy or RetryPolicy()
        last_error: BaseException | None = None

        for attempt in range(policy.attempts):
            try:
                return await self._attempt(operation, policy, label)
            except NON_RETRYABLE:
                raise
            except retry_on as e:
                last_error = e
                logger.warning(
                    "%s attempt %d/%d failed: %s",
                    label, attempt + 1, policy.attempts, e,
                )
                if attempt < policy.max_retries:
                    await self._sleep(policy.delay_seconds(attempt))

        raise RetryExhaustedError(
            f"{label} failed after {policy.attempts} attempts: {last_error}",
            attempts=policy.attempts,
            last_error=last_error,
        ) from last_error
