"""Retrying payload creators with tenacity."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import tenacity

from stateslice.thunks.models import RetryPolicy


def build_retryer(policy: RetryPolicy) -> tenacity.AsyncRetrying:
    """Build a tenacity retryer from RetryPolicy configuration.

    The last failure is re-raised once attempts are exhausted.
    """
    stop = tenacity.stop_after_attempt(policy.max_attempts)

    wait: tenacity.wait.wait_base
    if policy.backoff == "exponential":
        wait = tenacity.wait_exponential(multiplier=policy.base_delay, min=policy.base_delay)
    elif policy.backoff == "linear":
        wait = tenacity.wait_incrementing(start=policy.base_delay, increment=policy.base_delay)
    else:
        wait = tenacity.wait_none()

    return tenacity.AsyncRetrying(
        stop=stop,
        wait=wait,
        retry=tenacity.retry_if_exception_type(policy.retry_on),
        reraise=True,
    )


async def call_with_retry(
    policy: RetryPolicy | None,
    call: Callable[[], Awaitable[Any]],
) -> Any:
    """Await `call()`, retrying per `policy` when it raises."""
    if policy is None or policy.max_attempts <= 1:
        return await call()

    async for attempt in build_retryer(policy):
        with attempt:
            return await call()

    return None  # pragma: no cover
