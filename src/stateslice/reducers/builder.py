"""Builder collecting exact-type cases, matchers, and a default case.

Usage:
    def extra_reducers(builder: ActionReducerMapBuilder) -> None:
        builder.add_case(upsert_book, lambda state, action: adapter.upsert_one(state, action))
        builder.add_case(fetch_books.pending, on_pending)
        builder.add_matcher(is_rejected(fetch_books), on_failure)
        builder.add_default_case(lambda state, action: None)

All registration errors are raised immediately, never at dispatch time.
"""

from __future__ import annotations

import logging
from typing import Any, Self

from stateslice.core.action.matchers import as_predicate
from stateslice.core.errors import DuplicateCaseError
from stateslice.reducers.models import CaseReducer, CaseTable, MatcherCase

logger = logging.getLogger(__name__)


def action_type_of(type_or_creator: Any) -> str:
    """Resolve a raw type string or anything exposing a string `.type`."""
    if isinstance(type_or_creator, str):
        return type_or_creator
    action_type = getattr(type_or_creator, "type", None)
    if isinstance(action_type, str):
        return action_type
    raise TypeError(
        f"Expected an action type or action creator, got {type(type_or_creator).__name__}"
    )


class ActionReducerMapBuilder:
    """Collects handlers into a CaseTable. Methods return the builder for chaining."""

    def __init__(self) -> None:
        self._table = CaseTable()

    def add_case(self, type_or_creator: Any, reducer: CaseReducer) -> Self:
        """Handle actions whose type equals `type_or_creator` exactly.

        Raises:
            DuplicateCaseError: If a handler for this type already exists.
        """
        action_type = action_type_of(type_or_creator)
        if not action_type:
            raise ValueError("add_case cannot be called with an empty action type")
        if action_type in self._table.cases:
            raise DuplicateCaseError(
                f"add_case cannot be called with two reducers for the same action type "
                f"'{action_type}'"
            )
        self._table.cases[action_type] = reducer
        logger.debug("Registered case reducer for %s", action_type)
        return self

    def add_matcher(self, matcher: Any, reducer: CaseReducer) -> Self:
        """Handle actions accepted by `matcher` when no exact case applies.

        Matchers are tried in registration order; only the first match runs.
        """
        self._table.matchers.append(MatcherCase(predicate=as_predicate(matcher), reducer=reducer))
        return self

    def add_default_case(self, reducer: CaseReducer) -> Self:
        """Handle actions that no case or matcher accepted.

        Raises:
            DuplicateCaseError: If a default case was already registered.
        """
        if self._table.default is not None:
            raise DuplicateCaseError("add_default_case can only be called once")
        self._table.default = reducer
        return self

    def build(self) -> CaseTable:
        """Snapshot the collected handlers into an independent CaseTable."""
        return CaseTable(
            cases=dict(self._table.cases),
            matchers=list(self._table.matchers),
            default=self._table.default,
        )
