"""Store integration: reference store, reducer combination, and the dispatch protocol."""

from stateslice.store.combine import combine_reducers
from stateslice.store.protocol import (
    Dispatch,
    Dispatchable,
    GetState,
    Listener,
    RootReducer,
    Store,
    Thunk,
)
from stateslice.store.store import INIT_ACTION_TYPE, LocalStore, configure_store

__all__ = [
    "Store",
    "LocalStore",
    "configure_store",
    "combine_reducers",
    "INIT_ACTION_TYPE",
    # Types
    "Dispatch",
    "Dispatchable",
    "GetState",
    "Listener",
    "RootReducer",
    "Thunk",
]
