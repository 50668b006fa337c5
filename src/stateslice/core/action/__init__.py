"""Action envelopes, action creators, and matchers."""

from stateslice.core.action.core import ActionCreator, create_action, is_action
from stateslice.core.action.matchers import (
    is_all_of,
    is_any_of,
    is_async_thunk_action,
    is_fulfilled,
    is_pending,
    is_rejected,
    is_rejected_with_value,
)
from stateslice.core.action.models import Action, Matcher, RequestStatus

__all__ = [
    "Action",
    "ActionCreator",
    "Matcher",
    "RequestStatus",
    "create_action",
    "is_action",
    # Matchers
    "is_any_of",
    "is_all_of",
    "is_pending",
    "is_fulfilled",
    "is_rejected",
    "is_rejected_with_value",
    "is_async_thunk_action",
]
