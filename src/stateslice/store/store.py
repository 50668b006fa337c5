"""Reference store executing actions and thunks against a root reducer.

Usage:
    store = configure_store({"books": books_slice.reducer})

    store.dispatch(books_slice.actions.add_one({"id": "a", "title": "First"}))
    action = await store.dispatch(fetch_books())
    store.get_state()["books"]["ids"]

Dispatch is synchronous and totally ordered: each action is fully reduced
before the next one starts. Thunks run their synchronous prefix inside
`dispatch`; async thunks suspend only inside their payload creator.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any

from stateslice.config import StoreSettings
from stateslice.core.action import Action
from stateslice.core.errors import DispatchError, StateMutationError
from stateslice.store.combine import combine_reducers
from stateslice.store.protocol import Dispatchable, Listener, RootReducer

logger = logging.getLogger(__name__)

INIT_ACTION_TYPE = "@@stateslice/INIT"


class LocalStore:
    """In-process store holding one immutable state tree.

    Args:
        reducer: Root reducer.
        preloaded_state: Initial tree passed to the first reducer call.
        extra_argument: Value handed to thunks as their `extra` argument.
        settings: Store settings; loaded from the environment when omitted.
    """

    def __init__(
        self,
        reducer: RootReducer,
        preloaded_state: Any = None,
        extra_argument: Any = None,
        settings: StoreSettings | None = None,
    ) -> None:
        self._reducer = reducer
        self._state = preloaded_state
        self._extra = extra_argument
        self._settings = settings or StoreSettings()
        self._listeners: list[Listener] = []
        self._reducing = False
        self._committed: Any = None
        self._reduce(Action(INIT_ACTION_TYPE))

    def get_state(self) -> Any:
        """Current state tree. Treat it as read-only."""
        return self._state

    def dispatch(self, action: Dispatchable) -> Any:
        """Reduce a plain action or execute a thunk.

        Returns:
            The action itself for plain actions; whatever the thunk returns
            otherwise (a ThunkHandle for async thunks).

        Raises:
            DispatchError: If called from inside a reducer.
            TypeError: If `action` is neither an Action nor callable.
        """
        if isinstance(action, Action):
            self._reduce(action)
            for listener in list(self._listeners):
                listener()
            return action
        if callable(action):
            return action(self.dispatch, self.get_state, self._extra)
        raise TypeError(
            f"Expected an Action or thunk, got {type(action).__name__}. "
            "Wrap plain data with create_action()."
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable removing it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace_reducer(self, reducer: RootReducer) -> None:
        """Swap the root reducer and re-run initialization against current state."""
        self._reducer = reducer
        self._reduce(Action(INIT_ACTION_TYPE))

    def _reduce(self, action: Action) -> None:
        if self._reducing:
            raise DispatchError("Reducers may not dispatch actions.")
        self._check_mutation()
        if self._settings.log_dispatches:
            logger.debug("Dispatching %s", action.type)

        self._reducing = True
        try:
            self._state = self._reducer(self._state, action)
        finally:
            self._reducing = False

        if self._settings.immutability_check:
            self._committed = copy.deepcopy(self._state)

    def _check_mutation(self) -> None:
        if not self._settings.immutability_check or self._committed is None:
            return
        if self._state != self._committed:
            raise StateMutationError(
                "State was mutated between dispatches. Return new values from reducers instead."
            )


def configure_store(
    reducer: RootReducer | Mapping[str, RootReducer],
    preloaded_state: Any = None,
    extra_argument: Any = None,
    settings: StoreSettings | None = None,
) -> LocalStore:
    """Create a LocalStore, combining a mapping of slice reducers if given.

    Args:
        reducer: Root reducer, or state key -> reducer mapping.
        preloaded_state: Initial tree.
        extra_argument: Value passed to thunks as `extra`.
        settings: Store settings.

    Returns:
        Configured LocalStore.
    """
    root = combine_reducers(reducer) if isinstance(reducer, Mapping) else reducer
    return LocalStore(
        root,
        preloaded_state=preloaded_state,
        extra_argument=extra_argument,
        settings=settings,
    )
