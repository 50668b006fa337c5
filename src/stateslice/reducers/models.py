"""Reducer models: case handler signatures and the compiled dispatch table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from stateslice.core.action import Action

CaseReducer = Callable[[Any, Action], Any]
"""Signature: (draft_state, action) -> next_state | None.

Returning a value replaces the state outright. Returning None commits the
in-place edits made to the draft.
"""

ActionPredicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class MatcherCase:
    """Predicate-guarded handler, tried after exact cases in registration order."""

    predicate: ActionPredicate
    reducer: CaseReducer


@dataclass(slots=True)
class CaseTable:
    """Compiled dispatch table: exact cases, then matchers, then the default."""

    cases: dict[str, CaseReducer] = field(default_factory=dict)
    matchers: list[MatcherCase] = field(default_factory=list)
    default: CaseReducer | None = None

    def resolve(self, action: Any) -> CaseReducer | None:
        """Find the handler for `action`, or None when nothing applies.

        Exact type lookup first; otherwise the first matcher whose predicate
        accepts the action; otherwise the default case.
        """
        action_type = getattr(action, "type", None)
        if isinstance(action_type, str):
            handler = self.cases.get(action_type)
            if handler is not None:
                return handler
        for matcher in self.matchers:
            if matcher.predicate(action):
                return matcher.reducer
        return self.default


@dataclass(frozen=True, slots=True)
class PreparedCaseReducer:
    """Slice reducer entry paired with a prepare callback for its action creator."""

    reducer: CaseReducer
    prepare: Callable[..., Any]
