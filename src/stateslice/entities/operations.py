"""Pure helpers behind the entity adapter.

Stateless functions for unpacking arguments, merging record changes, and
deriving sorted id order. None of them mutates its inputs.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Iterable, Mapping
from functools import cmp_to_key
from typing import Any

from stateslice.core.action import Action
from stateslice.core.types import EntityId
from stateslice.entities.models import EntityState, SelectId, SortComparer


def unwrap_payload(value: Any) -> Any:
    """Return `action.payload` for actions, the value itself otherwise.

    Lets adapter methods double as case reducers: `(state, action)`.
    """
    if isinstance(value, Action):
        return value.payload
    return value


def as_entity_list(entities: Iterable[Any] | Mapping[EntityId, Any]) -> list[Any]:
    """Accept a sequence of records or an id-keyed mapping of records."""
    if isinstance(entities, Mapping):
        return list(entities.values())
    return list(entities)


def as_id_list(entity_ids: Any) -> list[EntityId]:
    """Unwrap a collection of ids, rejecting a bare string or scalar."""
    entity_ids = unwrap_payload(entity_ids)
    if isinstance(entity_ids, (str, bytes)) or not isinstance(entity_ids, Iterable):
        raise TypeError(
            f"Expected a collection of ids, got {type(entity_ids).__name__}; "
            "use remove_one for a single id"
        )
    return list(entity_ids)


def default_select_id(entity: Any) -> EntityId:
    """Read `entity["id"]` for mappings, `entity.id` otherwise."""
    if isinstance(entity, Mapping):
        return entity["id"]
    return entity.id


def _change_fields(changes: Any) -> dict[str, Any]:
    if isinstance(changes, Mapping):
        return dict(changes)
    if dataclasses.is_dataclass(changes) and not isinstance(changes, type):
        return {f.name: getattr(changes, f.name) for f in dataclasses.fields(changes)}
    return dict(vars(changes))


def merge_changes(entity: Any, changes: Any) -> Any:
    """Shallow-merge `changes` into a new copy of `entity`.

    Args:
        entity: Existing record (mapping, dataclass, or plain object).
        changes: Mapping or object whose fields override the record's.

    Returns:
        New record; `entity` is left untouched.
    """
    fields = _change_fields(changes)
    if isinstance(entity, Mapping):
        return {**entity, **fields}
    if dataclasses.is_dataclass(entity) and not isinstance(entity, type):
        return dataclasses.replace(entity, **fields)
    merged = copy.copy(entity)
    for name, value in fields.items():
        setattr(merged, name, value)
    return merged


def unpack(state: EntityState) -> tuple[list[EntityId], dict[EntityId, Any]]:
    """Copy the id list and entity mapping so they can be edited freely."""
    return list(state["ids"]), dict(state["entities"])


def sorted_ids(
    ids: list[EntityId],
    entities: Mapping[EntityId, Any],
    sort_comparer: SortComparer[Any],
) -> list[EntityId]:
    """Re-derive id order from current records.

    Stable: records that compare equal keep their relative order in `ids`.
    """
    key = cmp_to_key(sort_comparer)
    return sorted(ids, key=lambda entity_id: key(entities[entity_id]))


def dedupe(ids: Iterable[EntityId]) -> list[EntityId]:
    """Drop repeated ids, keeping first occurrences in order."""
    return list(dict.fromkeys(ids))


def commit(
    state: EntityState,
    ids: list[EntityId],
    entities: dict[EntityId, Any],
    sort_comparer: SortComparer[Any] | None,
) -> EntityState:
    """Build the next collection value, preserving extra state fields."""
    if sort_comparer is not None:
        ids = sorted_ids(ids, entities, sort_comparer)
    return {**state, "ids": ids, "entities": entities}


def rekey_ids(ids: list[EntityId], renames: Mapping[EntityId, EntityId]) -> list[EntityId]:
    """Replace renamed ids in place, dropping duplicates created by collisions."""
    return dedupe(renames.get(entity_id, entity_id) for entity_id in ids)


def select_id_checked(select_id: SelectId[Any], entity: Any) -> EntityId:
    """Derive an id, rejecting records whose id is None."""
    entity_id = select_id(entity)
    if entity_id is None:
        raise ValueError(f"select_id returned None for entity {entity!r}")
    return entity_id
