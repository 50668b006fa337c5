"""stateslice: normalized entity state, composable reducers, async action lifecycles.

Usage:
    from stateslice import (
        configure_store,
        create_async_thunk,
        create_entity_adapter,
        create_slice,
    )

    adapter = create_entity_adapter(
        sort_comparer=lambda a, b: (a["title"] > b["title"]) - (a["title"] < b["title"]),
    )
    fetch_books = create_async_thunk("books/fetch", load_books)

    def on_loaded(state, action):
        if action.meta["request_id"] == state["last_request_id"]:
            return {**adapter.set_all(state, action.payload), "last_request_id": None}

    books = create_slice(
        name="books",
        initial_state=adapter.get_initial_state({"last_request_id": None}),
        reducers={"add_one": adapter.add_one},
        extra_reducers=lambda builder: builder.add_case(fetch_books.fulfilled, on_loaded),
    )

    store = configure_store({"books": books.reducer})
    await store.dispatch(fetch_books())
"""

__version__ = "0.1.0"

# Core primitives
from stateslice.core import (
    NOTHING,
    Action,
    ActionCreator,
    DispatchError,
    DuplicateCaseError,
    EntityId,
    InvalidSliceError,
    RejectedActionError,
    RequestStatus,
    StateMutationError,
    StateSliceError,
    create_action,
    current,
    is_action,
    is_all_of,
    is_any_of,
    is_async_thunk_action,
    is_fulfilled,
    is_pending,
    is_rejected,
    is_rejected_with_value,
    produce,
)

# Configuration
from stateslice.config import StoreSettings, ThunkSettings

# Entities
from stateslice.entities import (
    EntityAdapter,
    EntitySelectors,
    EntityState,
    Update,
    create_entity_adapter,
)

# Reducers
from stateslice.reducers import (
    ActionReducerMapBuilder,
    Reducer,
    Slice,
    create_reducer,
    create_slice,
    prepared_reducer,
)

# Store
from stateslice.store import LocalStore, Store, combine_reducers, configure_store

# Thunks
from stateslice.thunks import (
    AsyncThunk,
    CancellationToken,
    RetryPolicy,
    SerializedError,
    ThunkAction,
    ThunkApi,
    ThunkHandle,
    create_async_thunk,
    unwrap_result,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Action",
    "ActionCreator",
    "EntityId",
    "RequestStatus",
    "create_action",
    "is_action",
    "is_any_of",
    "is_all_of",
    "is_pending",
    "is_fulfilled",
    "is_rejected",
    "is_rejected_with_value",
    "is_async_thunk_action",
    "NOTHING",
    "current",
    "produce",
    # Errors
    "StateSliceError",
    "DuplicateCaseError",
    "InvalidSliceError",
    "DispatchError",
    "StateMutationError",
    "RejectedActionError",
    # Config
    "StoreSettings",
    "ThunkSettings",
    # Entities
    "EntityAdapter",
    "EntitySelectors",
    "EntityState",
    "Update",
    "create_entity_adapter",
    # Reducers
    "ActionReducerMapBuilder",
    "Reducer",
    "Slice",
    "create_reducer",
    "create_slice",
    "prepared_reducer",
    # Store
    "Store",
    "LocalStore",
    "combine_reducers",
    "configure_store",
    # Thunks
    "AsyncThunk",
    "CancellationToken",
    "RetryPolicy",
    "SerializedError",
    "ThunkAction",
    "ThunkApi",
    "ThunkHandle",
    "create_async_thunk",
    "unwrap_result",
]
