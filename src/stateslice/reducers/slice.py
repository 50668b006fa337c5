"""Slices: named reducers with generated action creators.

Usage:
    books = create_slice(
        name="books",
        initial_state=adapter.get_initial_state({"loading": "initial"}),
        reducers={
            "add_one": adapter.add_one,
            "remove_one": lambda state, action: adapter.remove_one(state, action),
            "rename": prepared_reducer(on_rename, lambda book_id, title: {
                "payload": {"id": book_id, "changes": {"title": title}},
            }),
        },
        extra_reducers=lambda builder: builder.add_case(upsert_book, on_upsert),
    )
    books.actions.add_one({"id": "c", "title": "Middle"})  # type "books/add_one"
    books.reducer(state, action)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from stateslice.core.action import ActionCreator, create_action
from stateslice.core.errors import InvalidSliceError
from stateslice.reducers.builder import ActionReducerMapBuilder
from stateslice.reducers.models import CaseReducer, PreparedCaseReducer
from stateslice.reducers.reducer import Reducer

logger = logging.getLogger(__name__)

ExtraReducers = Callable[[ActionReducerMapBuilder], Any] | Mapping[str, CaseReducer]


def prepared_reducer(reducer: CaseReducer, prepare: Callable[..., Any]) -> PreparedCaseReducer:
    """Pair a case reducer with a prepare callback for its generated action creator."""
    return PreparedCaseReducer(reducer=reducer, prepare=prepare)


class SliceActions(Mapping[str, ActionCreator]):
    """Generated action creators, reachable by key or attribute."""

    def __init__(self, creators: Mapping[str, ActionCreator]) -> None:
        self._creators = dict(creators)

    def __getitem__(self, name: str) -> ActionCreator:
        return self._creators[name]

    def __getattr__(self, name: str) -> ActionCreator:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._creators[name]
        except KeyError:
            raise AttributeError(f"Slice has no action {name!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._creators)

    def __len__(self) -> int:
        return len(self._creators)


@dataclass(frozen=True)
class Slice:
    """Compiled slice.

    Attributes:
        name: Prefix of every generated action type.
        reducer: Composed reducer handling slice cases and extra reducers.
        actions: Action creators, one per entry in `reducers`.
        case_reducers: Generated action type -> slice case handler.
    """

    name: str
    reducer: Reducer
    actions: SliceActions
    case_reducers: Mapping[str, CaseReducer]

    @property
    def initial_state(self) -> Any:
        return self.reducer.get_initial_state()

    def get_initial_state(self) -> Any:
        return self.reducer.get_initial_state()


def _unpack_entry(slice_name: str, case_name: str, entry: Any) -> PreparedCaseReducer | None:
    if isinstance(entry, PreparedCaseReducer):
        return entry
    if isinstance(entry, Mapping):
        if "reducer" not in entry or "prepare" not in entry:
            raise InvalidSliceError(
                f"Reducer entry '{slice_name}/{case_name}' needs both 'reducer' and 'prepare'"
            )
        return PreparedCaseReducer(reducer=entry["reducer"], prepare=entry["prepare"])
    if not callable(entry):
        raise InvalidSliceError(
            f"Reducer entry '{slice_name}/{case_name}' must be callable, "
            f"got {type(entry).__name__}"
        )
    return None


def create_slice(
    name: str,
    initial_state: Any,
    reducers: Mapping[str, Any] | None = None,
    extra_reducers: ExtraReducers | None = None,
) -> Slice:
    """Compile named case reducers and extra handlers into a Slice.

    Each `reducers` entry named `case` becomes action type `f"{name}/{case}"`
    with a matching action creator. `extra_reducers` receives the same
    builder (or is a mapping of action type -> handler) and may register
    handlers for actions defined elsewhere, including thunk lifecycles.

    Args:
        name: Slice name, used as action type prefix.
        initial_state: Initial state value or zero-argument factory.
        reducers: Case name -> handler or prepared reducer entry.
        extra_reducers: Builder callback or mapping of external handlers.

    Returns:
        Compiled Slice.

    Raises:
        InvalidSliceError: Empty name or malformed reducer entry.
        DuplicateCaseError: Two handlers for one exact action type.
    """
    if not name:
        raise InvalidSliceError("`name` is a required option for create_slice")

    builder = ActionReducerMapBuilder()
    creators: dict[str, ActionCreator] = {}
    case_reducers: dict[str, CaseReducer] = {}

    for case_name, entry in (reducers or {}).items():
        action_type = f"{name}/{case_name}"
        prepared = _unpack_entry(name, case_name, entry)
        if prepared is None:
            handler: CaseReducer = entry
            creators[case_name] = create_action(action_type)
        else:
            handler = prepared.reducer
            creators[case_name] = create_action(action_type, prepared.prepare)
        case_reducers[action_type] = handler
        builder.add_case(action_type, handler)

    if isinstance(extra_reducers, Mapping):
        for action_type, handler in extra_reducers.items():
            builder.add_case(action_type, handler)
    elif extra_reducers is not None:
        extra_reducers(builder)

    logger.debug("Created slice %s with %d case reducers", name, len(case_reducers))
    return Slice(
        name=name,
        reducer=Reducer(initial_state, builder.build()),
        actions=SliceActions(creators),
        case_reducers=case_reducers,
    )
