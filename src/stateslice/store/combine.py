"""Combining per-key reducers into one root reducer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from stateslice.core.action import Action
from stateslice.store.protocol import RootReducer


def combine_reducers(reducers: Mapping[str, RootReducer]) -> RootReducer:
    """Build a root reducer delegating each key of the state mapping to its reducer.

    Returns the previous state object itself when no child state changed
    (compared by identity).

    Args:
        reducers: State key -> reducer for that key.

    Returns:
        Root reducer over a dict state.
    """
    if not reducers:
        raise ValueError("combine_reducers needs at least one reducer")
    children = dict(reducers)

    def combination(state: Mapping[str, Any] | None, action: Action) -> Mapping[str, Any]:
        previous = state if state is not None else {}
        next_state: dict[str, Any] = {}
        changed = state is None or len(previous) != len(children)
        for key, reducer in children.items():
            before = previous.get(key)
            after = reducer(before, action)
            next_state[key] = after
            changed = changed or after is not before
        return next_state if changed else previous

    return combination
