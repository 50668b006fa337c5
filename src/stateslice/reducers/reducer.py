"""Composed reducer built from a CaseTable.

Usage:
    counter = create_reducer(
        {"value": 0},
        lambda builder: builder.add_case(increment, lambda state, action: {
            "value": state["value"] + action.payload,
        }),
    )
    counter(None, increment(2))  # {"value": 2}
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from stateslice.core.draft import produce
from stateslice.reducers.builder import ActionReducerMapBuilder
from stateslice.reducers.models import CaseTable

BuilderCallback = Callable[[ActionReducerMapBuilder], Any]


class Reducer:
    """Case-dispatching reducer: `(state, action) -> next_state`.

    Unmatched actions return the given state object itself. Matched handlers
    run against a draft (see `produce`), so they may edit in place or return
    a replacement; either way values visible to the caller stay untouched.
    Handler exceptions propagate to the caller.

    Args:
        initial_state: State used when called with `state=None`. May be a
            zero-argument callable producing it.
        table: Compiled handlers.
    """

    def __init__(self, initial_state: Any, table: CaseTable) -> None:
        self._initial_state = initial_state
        self._table = table

    def get_initial_state(self) -> Any:
        if callable(self._initial_state):
            return self._initial_state()
        return self._initial_state

    def __call__(self, state: Any, action: Any) -> Any:
        if state is None:
            state = self.get_initial_state()
        handler = self._table.resolve(action)
        if handler is None:
            return state
        return produce(state, lambda draft: handler(draft, action))


def create_reducer(initial_state: Any, builder_callback: BuilderCallback | None = None) -> Reducer:
    """Build a Reducer from handlers registered on a fresh builder.

    Args:
        initial_state: Initial state value or zero-argument factory.
        builder_callback: Receives an ActionReducerMapBuilder to register cases.

    Returns:
        Composed Reducer.

    Raises:
        DuplicateCaseError: On conflicting registrations.
    """
    builder = ActionReducerMapBuilder()
    if builder_callback is not None:
        builder_callback(builder)
    return Reducer(initial_state, builder.build())
