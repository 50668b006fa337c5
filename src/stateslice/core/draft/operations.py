"""Scoped mutable drafts committed to a new value on exit.

A recipe receives a structural clone of the base value. Editing the clone in
place never touches anything reachable from outside the call. The recipe's
outcome decides the next value:

- returns a value: that value wins, edits to the draft are discarded
- returns None: the edited draft is committed
- returns NOTHING: the next value is None

Usage:
    next_state = produce(state, lambda draft: draft.update(loading="pending"))
"""

from __future__ import annotations

import copy as cp
from collections.abc import Callable
from typing import Any, Final, TypeVar

from stateslice.core.types import Copy

T = TypeVar("T")


class _Nothing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING: Final = _Nothing()
"""Return from a recipe to replace the state with None."""


def current(value: T) -> Copy[T]:
    """Take a detached snapshot of a draft (or any value)."""
    return cp.deepcopy(value)


def produce(base: T, recipe: Callable[[T], Any]) -> T:
    """Run `recipe` against a clone of `base` and return the next value.

    Nested `produce` calls inside a recipe do not write into the outer draft;
    their result has to be returned (or assigned) explicitly.

    Args:
        base: Current value. Never mutated.
        recipe: Callable receiving the draft.

    Returns:
        The recipe's explicit return value, else the committed draft, else
        `base` itself when the draft ended up equal to it.
    """
    draft = cp.deepcopy(base)
    result = recipe(draft)
    if result is NOTHING:
        return None  # type: ignore[return-value]
    if result is not None and result is not draft:
        return result
    if draft == base:
        return base
    return draft
