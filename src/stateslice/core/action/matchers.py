"""Composable action predicates for `add_matcher`.

Usage:
    builder.add_matcher(is_any_of(add_book, upsert_book), on_book_change)
    builder.add_matcher(is_pending(fetch_books, fetch_authors), on_loading)
    builder.add_matcher(is_rejected(), on_any_failure)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from stateslice.core.action.core import is_action
from stateslice.core.action.models import Matcher, RequestStatus

if TYPE_CHECKING:
    from stateslice.thunks import AsyncThunk

ActionPredicate = Callable[[Any], bool]


def as_predicate(matcher: Matcher | ActionPredicate) -> ActionPredicate:
    """Normalize an object with `.match` or a bare callable into a predicate."""
    if isinstance(matcher, Matcher):
        return matcher.match
    if callable(matcher):
        return matcher
    raise TypeError(f"Expected a matcher or predicate, got {type(matcher).__name__}")


def is_any_of(*matchers: Matcher | ActionPredicate) -> ActionPredicate:
    """Match when at least one of `matchers` matches."""
    predicates = [as_predicate(m) for m in matchers]
    return lambda action: any(p(action) for p in predicates)


def is_all_of(*matchers: Matcher | ActionPredicate) -> ActionPredicate:
    """Match when every one of `matchers` matches."""
    predicates = [as_predicate(m) for m in matchers]
    return lambda action: all(p(action) for p in predicates)


def _has_lifecycle_meta(action: Any, statuses: tuple[RequestStatus, ...]) -> bool:
    if not is_action(action) or not action.meta:
        return False
    return "request_id" in action.meta and action.meta.get("request_status") in statuses


def _lifecycle_matcher(
    thunks: tuple[AsyncThunk[Any, Any], ...],
    statuses: tuple[RequestStatus, ...],
) -> ActionPredicate:
    if not thunks:
        return lambda action: _has_lifecycle_meta(action, statuses)
    creators = [getattr(thunk, str(status)) for thunk in thunks for status in statuses]
    return is_any_of(*creators)


def is_pending(*thunks: AsyncThunk[Any, Any]) -> ActionPredicate:
    """Match pending actions of `thunks`, or of any thunk when none are given."""
    return _lifecycle_matcher(thunks, (RequestStatus.PENDING,))


def is_fulfilled(*thunks: AsyncThunk[Any, Any]) -> ActionPredicate:
    """Match fulfilled actions of `thunks`, or of any thunk when none are given."""
    return _lifecycle_matcher(thunks, (RequestStatus.FULFILLED,))


def is_rejected(*thunks: AsyncThunk[Any, Any]) -> ActionPredicate:
    """Match rejected actions of `thunks`, or of any thunk when none are given."""
    return _lifecycle_matcher(thunks, (RequestStatus.REJECTED,))


def is_rejected_with_value(*thunks: AsyncThunk[Any, Any]) -> ActionPredicate:
    """Match rejected actions produced through `reject_with_value`."""
    rejected = is_rejected(*thunks)
    return lambda action: rejected(action) and bool(action.meta.get("rejected_with_value"))


def is_async_thunk_action(*thunks: AsyncThunk[Any, Any]) -> ActionPredicate:
    """Match any lifecycle action of `thunks`, or of any thunk when none are given."""
    return _lifecycle_matcher(thunks, tuple(RequestStatus))
