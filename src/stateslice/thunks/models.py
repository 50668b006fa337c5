"""Thunk models: lifecycle payload wrappers, serialized errors, and retry policy."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from stateslice.thunks.cancellation import CancellationToken


@dataclass(frozen=True, slots=True)
class SerializedError:
    """Plain description of a failure, carried in `rejected.error`."""

    name: str | None = None
    message: str | None = None
    stack: str | None = None
    code: str | None = None


@dataclass(frozen=True, slots=True)
class RejectWithValue:
    """Returned from a payload creator to reject with a custom payload."""

    payload: Any
    meta: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class FulfillWithMeta:
    """Returned from a payload creator to fulfill with extra meta fields."""

    payload: Any
    meta: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Configuration for retrying a failing payload creator.

    Useful for payload creators that call external APIs with transient failures.
    """

    max_attempts: int = 1
    """Maximum attempts (1 = no retry). Default: no retry."""

    backoff: Literal["none", "linear", "exponential"] = "none"
    """Backoff strategy between retries."""

    base_delay: float = 0.1
    """Base delay in seconds for backoff calculation."""

    retry_on: tuple[type[BaseException], ...] = (Exception,)
    """Exception types that trigger another attempt."""


@dataclass(frozen=True, slots=True)
class ConditionApi:
    """Read-only helpers passed to a thunk's `condition` callback."""

    get_state: Callable[[], Any]
    extra: Any = None


@dataclass(frozen=True, slots=True)
class ThunkApi:
    """Helpers passed to a payload creator as its second argument."""

    get_state: Callable[[], Any]
    dispatch: Callable[[Any], Any]
    request_id: str
    cancellation_token: CancellationToken
    extra: Any = None

    def reject_with_value(
        self, value: Any, meta: Mapping[str, Any] | None = None
    ) -> RejectWithValue:
        """Wrap `value` so the thunk rejects with it as payload."""
        return RejectWithValue(payload=value, meta=meta)

    def fulfill_with_value(
        self, value: Any, meta: Mapping[str, Any] | None = None
    ) -> FulfillWithMeta:
        """Wrap `value` so the thunk fulfills with it and extra meta fields."""
        return FulfillWithMeta(payload=value, meta=meta)
