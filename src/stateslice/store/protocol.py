"""Store protocol: the dispatch boundary reducers and thunks are written against.

A dispatchable value is one of two variants:
- Action: plain data, run through the root reducer synchronously
- Thunk: a callable `(dispatch, get_state, extra) -> Any`, executed by the
  store; ThunkAction (from AsyncThunk) is the built-in kind

Usage:
    def run(store: Store) -> None:
        store.dispatch(add_book({"id": "a"}))
        handle = store.dispatch(fetch_books())
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from stateslice.core.action import Action

type Dispatch = Callable[[Any], Any]
type GetState = Callable[[], Any]
type Thunk = Callable[[Dispatch, GetState, Any], Any]
type Dispatchable = Action | Thunk
type RootReducer = Callable[[Any, Action], Any]
type Listener = Callable[[], None]


@runtime_checkable
class Store(Protocol):
    """Holds the state tree and executes dispatched actions and thunks."""

    def dispatch(self, action: Dispatchable) -> Any:
        """Reduce a plain action (returns it) or run a thunk (returns its result)."""
        ...

    def get_state(self) -> Any:
        """Current full state tree."""
        ...

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` after every reduced action. Returns an unsubscribe callable."""
        ...
