"""Action creators.

Usage:
    add_book = create_action("books/add")
    add_book({"id": "a"})  # Action(type="books/add", payload={"id": "a"})
    add_book.match(action)

    # With a prepare callback shaping payload and meta
    add_todo = create_action("todos/add", lambda text: {"payload": text, "meta": {"n": 1}})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from stateslice.core.action.models import Action

PrepareAction = Callable[..., Mapping[str, Any]]


def is_action(value: Any) -> bool:
    """Check whether a value is a plain dispatchable action."""
    return isinstance(value, Action)


class ActionCreator:
    """Factory for actions of one type.

    Exposes the generated `type` string and a `match(action)` predicate so it
    can be passed to `add_case` / `add_matcher` in place of a raw type.

    Args:
        type: Action type produced by this creator.
        prepare: Optional callable turning call arguments into a mapping with a
            `payload` key and optional `meta` / `error` keys.
    """

    __slots__ = ("_type", "_prepare")

    def __init__(self, type: str, prepare: PrepareAction | None = None) -> None:
        self._type = type
        self._prepare = prepare

    @property
    def type(self) -> str:
        return self._type

    def __call__(self, *args: Any, **kwargs: Any) -> Action:
        if self._prepare is None:
            if kwargs or len(args) > 1:
                raise TypeError(
                    f"Action creator '{self._type}' takes at most one payload argument"
                )
            return Action(self._type, payload=args[0] if args else None)

        prepared = self._prepare(*args, **kwargs)
        if not isinstance(prepared, Mapping) or "payload" not in prepared:
            raise TypeError(
                f"prepare for '{self._type}' must return a mapping with a 'payload' key"
            )
        return Action(
            self._type,
            payload=prepared["payload"],
            meta=prepared.get("meta"),
            error=prepared.get("error"),
        )

    def match(self, action: Any) -> bool:
        """Check whether `action` was produced by this creator (by type)."""
        return is_action(action) and action.type == self._type

    def __str__(self) -> str:
        return self._type

    def __repr__(self) -> str:
        return f"ActionCreator({self._type!r})"


def create_action(type: str, prepare: PrepareAction | None = None) -> ActionCreator:
    """Create an action creator for `type`.

    Args:
        type: Action type string.
        prepare: Optional payload/meta preparation callback.

    Returns:
        ActionCreator producing `Action(type, ...)`.
    """
    return ActionCreator(type, prepare)
