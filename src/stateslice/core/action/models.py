"""Action models: the dispatchable envelope and matcher protocol.

Usage:
    action = Action("books/addOne", payload={"id": "a", "title": "First"})
    action.type  # "books/addOne"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


class RequestStatus(StrEnum):
    """Lifecycle status carried in `meta["request_status"]` of thunk actions."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class Action:
    """Plain descriptive data dispatched to reducers.

    `type` is the dispatch discriminator. Lifecycle actions carry correlation
    data (request id, original argument) in `meta`; rejected actions carry a
    serialized failure in `error`.
    """

    type: str
    payload: Any = None
    meta: Mapping[str, Any] | None = None
    error: Any = None

    def with_meta(self, **extra: Any) -> Action:
        """Return a copy of this action with `extra` merged into its meta."""
        return replace(self, meta={**(self.meta or {}), **extra})


@runtime_checkable
class Matcher(Protocol):
    """Anything exposing a `match(action) -> bool` predicate (action creators, thunks)."""

    def match(self, action: Any) -> bool: ...
