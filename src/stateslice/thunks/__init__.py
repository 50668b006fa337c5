"""Async action lifecycles: pending / fulfilled / rejected."""

from stateslice.thunks.cancellation import AbortError, CancellationToken
from stateslice.thunks.core import (
    AsyncThunk,
    ThunkAction,
    ThunkHandle,
    create_async_thunk,
    unwrap_result,
)
from stateslice.thunks.models import (
    ConditionApi,
    FulfillWithMeta,
    RejectWithValue,
    RetryPolicy,
    SerializedError,
    ThunkApi,
)
from stateslice.thunks.serialization import generate_request_id, mini_serialize_error

__all__ = [
    "AsyncThunk",
    "ThunkAction",
    "ThunkHandle",
    "create_async_thunk",
    "unwrap_result",
    # Cancellation
    "AbortError",
    "CancellationToken",
    # Models
    "ConditionApi",
    "FulfillWithMeta",
    "RejectWithValue",
    "RetryPolicy",
    "SerializedError",
    "ThunkApi",
    # Serialization
    "generate_request_id",
    "mini_serialize_error",
]
