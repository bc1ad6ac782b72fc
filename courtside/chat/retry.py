"""Exponential backoff for transient service failures."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from .errors import is_transient

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    initial_delay: float = 2.0,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Await ``operation`` and retry it on 429/503 failures.

    Each retry waits twice as long as the previous one. Non-transient
    errors, and the last transient error once retries run out, are raised
    unchanged.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt.
        max_retries: Retries allowed after the first attempt.
        initial_delay: Seconds to wait before the first retry.
        sleep: Awaitable used for the backoff delay.
    """
    retries = max_retries
    delay = initial_delay
    while True:
        try:
            return await operation()
        except Exception as exc:
            if retries <= 0 or not is_transient(exc):
                raise
            logger.warning(
                "Rate limit hit. Retrying in %.1fs... (%d retries left)", delay, retries
            )
            await sleep(delay)
            retries -= 1
            delay *= 2
