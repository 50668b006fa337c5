"""Exception hierarchy shared by all stateslice modules."""

from __future__ import annotations

from typing import Any


class StateSliceError(Exception):
    """Base class for errors raised by stateslice."""

    pass


class DuplicateCaseError(StateSliceError, ValueError):
    """Raised when a builder receives a second handler for the same action type."""

    pass


class InvalidSliceError(StateSliceError, ValueError):
    """Raised when slice options cannot be compiled into a reducer."""

    pass


class DispatchError(StateSliceError, RuntimeError):
    """Raised when an action cannot be dispatched in the current context."""

    pass


class StateMutationError(StateSliceError, RuntimeError):
    """Raised when committed state was mutated outside of a reducer."""

    pass


class RejectedActionError(StateSliceError):
    """Raised by unwrap_result() for a rejected lifecycle action.

    Attributes:
        error: Serialized error carried by the rejected action.
        payload: Value passed to reject_with_value(), if any.
    """

    def __init__(self, error: Any, payload: Any = None) -> None:
        message = getattr(error, "message", None) or "Rejected"
        super().__init__(message)
        self.error = error
        self.payload = payload
