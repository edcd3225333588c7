"""Retry policy for OpenRouter calls: capped exponential backoff via tenacity."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from app.modules.flashcards.errors import OpenRouterError

T = TypeVar("T")

BASE_DELAY_SECONDS = 1
MAX_DELAY_SECONDS = 10

Sleep = Callable[[float], Awaitable[None]]


def is_retryable(error: BaseException) -> bool:
    return isinstance(error, OpenRouterError) and error.retryable


def _log_before_sleep(logger: logging.Logger, max_attempts: int):
    def log(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        kind = error.kind.value if isinstance(error, OpenRouterError) else "unknown"
        logger.warning(
            "Generation attempt %d/%d failed (%s); retrying in %.1fs",
            state.attempt_number,
            max_attempts,
            kind,
            state.next_action.sleep if state.next_action else 0.0,
        )

    return log


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int,
    logger: logging.Logger,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or the attempt budget runs out.

    Only ``OpenRouterError`` instances whose kind is retryable are retried;
    any other error, and the last retryable one, propagates unchanged.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=BASE_DELAY_SECONDS, max=MAX_DELAY_SECONDS),
        retry=retry_if_exception(is_retryable),
        sleep=sleep,
        before_sleep=_log_before_sleep(logger, max_attempts),
        reraise=True,
    )
    return await retrying(operation)
