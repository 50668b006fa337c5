"""Reducer composition: builder, composed reducer, and slices."""

from stateslice.reducers.builder import ActionReducerMapBuilder, action_type_of
from stateslice.reducers.models import CaseReducer, CaseTable, MatcherCase, PreparedCaseReducer
from stateslice.reducers.reducer import Reducer, create_reducer
from stateslice.reducers.slice import Slice, SliceActions, create_slice, prepared_reducer

__all__ = [
    # Builder
    "ActionReducerMapBuilder",
    "action_type_of",
    # Models
    "CaseReducer",
    "CaseTable",
    "MatcherCase",
    "PreparedCaseReducer",
    # Reducers
    "Reducer",
    "create_reducer",
    # Slices
    "Slice",
    "SliceActions",
    "create_slice",
    "prepared_reducer",
]
