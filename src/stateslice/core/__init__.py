"""Core functionalities: stateless primitives.

Architecture Note:
    core/ contains pure, stateless building blocks: the action envelope,
    action creators and matchers, copy-on-write drafts, and shared errors.
    For the composed pieces, see entities/, reducers/, thunks/, and store/.
"""

from stateslice.core.action import (
    Action,
    ActionCreator,
    Matcher,
    RequestStatus,
    create_action,
    is_action,
    is_all_of,
    is_any_of,
    is_async_thunk_action,
    is_fulfilled,
    is_pending,
    is_rejected,
    is_rejected_with_value,
)
from stateslice.core.draft import NOTHING, current, produce
from stateslice.core.errors import (
    DispatchError,
    DuplicateCaseError,
    InvalidSliceError,
    RejectedActionError,
    StateMutationError,
    StateSliceError,
)
from stateslice.core.types import Copy, EntityId

__all__ = [
    # Types
    "Copy",
    "EntityId",
    # Actions
    "Action",
    "ActionCreator",
    "Matcher",
    "RequestStatus",
    "create_action",
    "is_action",
    "is_any_of",
    "is_all_of",
    "is_pending",
    "is_fulfilled",
    "is_rejected",
    "is_rejected_with_value",
    "is_async_thunk_action",
    # Drafts
    "NOTHING",
    "current",
    "produce",
    # Errors
    "StateSliceError",
    "DuplicateCaseError",
    "InvalidSliceError",
    "DispatchError",
    "StateMutationError",
    "RejectedActionError",
]
