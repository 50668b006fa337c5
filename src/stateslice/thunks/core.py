"""Async thunks: one asynchronous call turned into lifecycle actions.

Usage:
    fetch_books = create_async_thunk("books/fetch", fetch_books_from_api)

    handle = store.dispatch(fetch_books(page))  # "books/fetch/pending" already dispatched
    action = await handle                      # fulfilled or rejected action
    books = unwrap_result(action)              # payload, or raises RejectedActionError

    builder.add_case(fetch_books.pending, on_pending)
    builder.add_case(fetch_books.fulfilled, on_loaded)

Each invocation mints its own request id, carried in `meta["request_id"]` of
all its lifecycle actions. Failures of the payload creator never escape: they
become a `rejected` action, which is also the value the handle resolves to.
Discarding stale responses is up to consumers, by comparing request ids.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Generator, Mapping
from typing import Any

from stateslice.config import ThunkSettings
from stateslice.core.action import (
    Action,
    ActionCreator,
    RequestStatus,
    create_action,
    is_async_thunk_action,
)
from stateslice.core.errors import DispatchError, RejectedActionError
from stateslice.thunks.cancellation import CancellationToken
from stateslice.thunks.models import (
    ConditionApi,
    FulfillWithMeta,
    RejectWithValue,
    RetryPolicy,
    SerializedError,
    ThunkApi,
)
from stateslice.thunks.retry import call_with_retry
from stateslice.thunks.serialization import generate_request_id, mini_serialize_error

logger = logging.getLogger(__name__)

PayloadCreator = Callable[[Any, ThunkApi], Any]
Condition = Callable[[Any, ConditionApi], bool]

CONDITION_MESSAGE = "Aborted due to condition callback returning false."


def _lifecycle_meta(
    request_id: str,
    arg: Any,
    status: RequestStatus,
    meta: Mapping[str, Any] | None,
) -> dict[str, Any]:
    return {**(meta or {}), "arg": arg, "request_id": request_id, "request_status": str(status)}


class ThunkHandle:
    """Awaitable result of dispatching a thunk action.

    Awaiting it yields the terminal (fulfilled or rejected) action.
    """

    def __init__(
        self,
        future: asyncio.Future[Action],
        request_id: str,
        arg: Any,
        token: CancellationToken,
    ) -> None:
        self._future = future
        self._request_id = request_id
        self._arg = arg
        self._token = token

    @property
    def request_id(self) -> str:
        return self._request_id

    @property
    def arg(self) -> Any:
        return self._arg

    def __await__(self) -> Generator[Any, None, Action]:
        return self._future.__await__()

    def done(self) -> bool:
        return self._future.done()

    def abort(self, reason: str | None = None) -> None:
        """Request cancellation; the thunk rejects with `meta["aborted"] = True`."""
        self._token.cancel(reason)

    async def unwrap(self) -> Any:
        """Await the terminal action and return its payload, raising if rejected."""
        return unwrap_result(await self)


class ThunkAction:
    """Dispatchable unit for one invocation of an AsyncThunk.

    The store calls it with `(dispatch, get_state, extra)`; it must run inside
    a running event loop.
    """

    def __init__(self, thunk: AsyncThunk[Any, Any], arg: Any) -> None:
        self._thunk = thunk
        self._arg = arg

    @property
    def thunk(self) -> AsyncThunk[Any, Any]:
        return self._thunk

    @property
    def arg(self) -> Any:
        return self._arg

    def __call__(
        self,
        dispatch: Callable[[Any], Any],
        get_state: Callable[[], Any],
        extra: Any = None,
    ) -> ThunkHandle:
        return self._thunk._start(self._arg, dispatch, get_state, extra)

    def __repr__(self) -> str:
        return f"ThunkAction({self._thunk.type_prefix!r}, arg={self._arg!r})"


class AsyncThunk[Returned, ThunkArg]:
    """Lifecycle action creators plus the orchestrator for one async operation.

    Calling the thunk with an argument yields a ThunkAction to dispatch.

    Args:
        type_prefix: Prefix of the generated `/pending`, `/fulfilled`, `/rejected` types.
        payload_creator: `(arg, api) -> result`, sync or async.
        condition: Optional `(arg, api) -> bool`; returning False skips the run.
        dispatch_condition_rejection: Dispatch the rejected action when the
            condition skips the run.
        id_generator: Optional `(arg) -> str` replacing random request ids.
        serialize_error: Optional replacement for mini_serialize_error.
        get_pending_meta: Optional `(arg, api) -> mapping` merged into pending meta.
        retry_policy: Optional tenacity-driven retry of the payload creator.
        settings: Thunk settings; loaded from the environment when omitted.
    """

    def __init__(
        self,
        type_prefix: str,
        payload_creator: PayloadCreator,
        *,
        condition: Condition | None = None,
        dispatch_condition_rejection: bool = False,
        id_generator: Callable[[Any], str] | None = None,
        serialize_error: Callable[[Any], Any] | None = None,
        get_pending_meta: Callable[[Any, ConditionApi], Mapping[str, Any]] | None = None,
        retry_policy: RetryPolicy | None = None,
        settings: ThunkSettings | None = None,
    ) -> None:
        if not type_prefix:
            raise ValueError("type_prefix is required for create_async_thunk")
        self._type_prefix = type_prefix
        self._payload_creator = payload_creator
        self._condition = condition
        self._dispatch_condition_rejection = dispatch_condition_rejection
        self._id_generator = id_generator
        self._serialize_error = serialize_error or mini_serialize_error
        self._get_pending_meta = get_pending_meta
        self._retry_policy = retry_policy
        self._settings = settings or ThunkSettings()

        self.pending: ActionCreator = create_action(
            f"{type_prefix}/pending",
            lambda request_id, arg, meta=None: {
                "payload": None,
                "meta": _lifecycle_meta(request_id, arg, RequestStatus.PENDING, meta),
            },
        )
        self.fulfilled: ActionCreator = create_action(
            f"{type_prefix}/fulfilled",
            lambda payload, request_id, arg, meta=None: {
                "payload": payload,
                "meta": _lifecycle_meta(request_id, arg, RequestStatus.FULFILLED, meta),
            },
        )
        self.rejected: ActionCreator = create_action(
            f"{type_prefix}/rejected",
            self._prepare_rejected,
        )

    @property
    def type_prefix(self) -> str:
        return self._type_prefix

    def __call__(self, arg: ThunkArg | None = None) -> ThunkAction:
        return ThunkAction(self, arg)

    def match(self, action: Any) -> bool:
        """True for any pending, fulfilled, or rejected action of this thunk."""
        return is_async_thunk_action(self)(action)

    def _prepare_rejected(
        self,
        error: Any,
        request_id: str,
        arg: Any,
        payload: Any = None,
        meta: Mapping[str, Any] | None = None,
        rejected_with_value: bool = False,
    ) -> dict[str, Any]:
        name = getattr(error, "name", None)
        return {
            "payload": payload,
            "error": error,
            "meta": {
                **_lifecycle_meta(request_id, arg, RequestStatus.REJECTED, meta),
                "rejected_with_value": rejected_with_value,
                "aborted": name == "AbortError",
                "condition": name == "ConditionError",
            },
        }

    def _start(
        self,
        arg: Any,
        dispatch: Callable[[Any], Any],
        get_state: Callable[[], Any],
        extra: Any,
    ) -> ThunkHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise DispatchError(
                f"Thunk '{self._type_prefix}' must be dispatched from a running event loop"
            ) from None

        if self._id_generator is not None:
            request_id = self._id_generator(arg)
        else:
            request_id = generate_request_id(self._settings.request_id_size)
        token = CancellationToken()

        skipped = self._check_condition(arg, request_id, dispatch, get_state, extra)
        if skipped is not None:
            future: asyncio.Future[Action] = loop.create_future()
            future.set_result(skipped)
            return ThunkHandle(future, request_id, arg, token)

        pending_meta = None
        if self._get_pending_meta is not None:
            pending_meta = self._get_pending_meta(arg, ConditionApi(get_state, extra))
        dispatch(self.pending(request_id, arg, pending_meta))
        logger.debug("%s pending (request %s)", self._type_prefix, request_id)

        api = ThunkApi(
            get_state=get_state,
            dispatch=dispatch,
            request_id=request_id,
            cancellation_token=token,
            extra=extra,
        )
        task = loop.create_task(self._run(arg, api, dispatch))
        return ThunkHandle(task, request_id, arg, token)

    def _check_condition(
        self,
        arg: Any,
        request_id: str,
        dispatch: Callable[[Any], Any],
        get_state: Callable[[], Any],
        extra: Any,
    ) -> Action | None:
        """Evaluate `condition`; return the rejected action if the run is skipped."""
        if self._condition is None:
            return None
        try:
            proceed = self._condition(arg, ConditionApi(get_state, extra))
        except Exception as exc:
            logger.debug("%s condition raised", self._type_prefix, exc_info=True)
            rejected = self.rejected(self._serialize_error(exc), request_id, arg)
            dispatch(rejected)
            return rejected
        if proceed is not False:
            return None

        logger.debug("%s skipped by condition (request %s)", self._type_prefix, request_id)
        rejected = self.rejected(
            SerializedError(name="ConditionError", message=CONDITION_MESSAGE), request_id, arg
        )
        if self._dispatch_condition_rejection:
            dispatch(rejected)
        return rejected

    async def _invoke(self, arg: Any, api: ThunkApi) -> Any:
        result = self._payload_creator(arg, api)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _run(self, arg: Any, api: ThunkApi, dispatch: Callable[[Any], Any]) -> Action:
        token = api.cancellation_token
        work = asyncio.ensure_future(
            call_with_retry(self._retry_policy, lambda: self._invoke(arg, api))
        )
        aborted = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({work, aborted}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            aborted.cancel()

        if token.cancelled or work.cancelled():
            work.cancel()
            work.add_done_callback(self._log_late_result)
            final = self.rejected(
                SerializedError(
                    name="AbortError", message=token.reason or self._settings.abort_message
                ),
                api.request_id,
                arg,
            )
        else:
            final = self._settle(work, api.request_id, arg)

        logger.debug(
            "%s %s (request %s)",
            self._type_prefix,
            final.meta["request_status"] if final.meta else "settled",
            api.request_id,
        )
        dispatch(final)
        return final

    def _settle(self, work: asyncio.Future[Any], request_id: str, arg: Any) -> Action:
        """Turn the finished payload task into the terminal action."""
        exc = work.exception()
        if exc is not None:
            logger.debug("%s payload creator failed", self._type_prefix, exc_info=exc)
            return self.rejected(self._serialize_error(exc), request_id, arg)

        result = work.result()
        if isinstance(result, RejectWithValue):
            return self.rejected(
                SerializedError(message="Rejected"),
                request_id,
                arg,
                payload=result.payload,
                meta=result.meta,
                rejected_with_value=True,
            )
        if isinstance(result, FulfillWithMeta):
            return self.fulfilled(result.payload, request_id, arg, result.meta)
        return self.fulfilled(result, request_id, arg)

    def _log_late_result(self, work: asyncio.Future[Any]) -> None:
        if work.cancelled():
            return
        if work.exception() is not None:
            logger.debug(
                "%s payload creator failed after abort",
                self._type_prefix,
                exc_info=work.exception(),
            )


def create_async_thunk(
    type_prefix: str,
    payload_creator: PayloadCreator,
    **options: Any,
) -> AsyncThunk[Any, Any]:
    """Create an AsyncThunk. See AsyncThunk for the accepted options."""
    return AsyncThunk(type_prefix, payload_creator, **options)


def unwrap_result(action: Action) -> Any:
    """Return the payload of a fulfilled action.

    Raises:
        RejectedActionError: If `action` is a rejected lifecycle action. Its
            `payload` holds the value given to reject_with_value, if any.
    """
    meta = action.meta or {}
    if meta.get("request_status") == RequestStatus.REJECTED:
        raise RejectedActionError(action.error, action.payload)
    return action.payload
