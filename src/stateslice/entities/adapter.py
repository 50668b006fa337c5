"""Entity adapter: CRUD and sorted-order maintenance over normalized state.

Usage:
    adapter = create_entity_adapter(
        select_id=lambda book: book["id"],
        sort_comparer=lambda a, b: (a["title"] > b["title"]) - (a["title"] < b["title"]),
    )
    state = adapter.get_initial_state({"loading": "initial"})
    state = adapter.add_one(state, {"id": "a", "title": "First"})
    state = adapter.update_one(state, {"id": "a", "changes": {"title": "Renamed"}})

    # Methods accept an action whose payload is the argument, so they can be
    # used directly as case reducers:
    create_slice(name="books", initial_state=state, reducers={"add_one": adapter.add_one})

Every operation is pure: the input collection is never mutated and a new
collection is returned. Operations that change nothing return the input as-is.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from stateslice.core.types import EntityId
from stateslice.entities import operations as ops
from stateslice.entities.models import (
    EntitySelectors,
    EntityState,
    SelectId,
    SortComparer,
    Update,
)
from stateslice.entities.selectors import build_selectors


class EntityAdapter[T]:
    """Operations over an `{"ids": [...], "entities": {...}}` collection.

    When `sort_comparer` is set, `ids` is re-derived after every mutating
    operation using a stable sort over the current records, so records that
    compare equal keep their insertion order. Without a comparer, insertion
    order is preserved.

    Unknown ids passed to update or remove operations are ignored.

    Args:
        select_id: Derives a record's id. Defaults to `record["id"]` / `record.id`.
        sort_comparer: Optional three-way comparison over records.
    """

    def __init__(
        self,
        select_id: SelectId[T] | None = None,
        sort_comparer: SortComparer[T] | None = None,
    ) -> None:
        self._select_id: SelectId[T] = select_id or ops.default_select_id
        self._sort_comparer = sort_comparer

    @property
    def select_id(self) -> SelectId[T]:
        return self._select_id

    @property
    def sort_comparer(self) -> SortComparer[T] | None:
        return self._sort_comparer

    def _id(self, entity: T) -> EntityId:
        return ops.select_id_checked(self._select_id, entity)

    def _commit(
        self, state: EntityState, ids: list[EntityId], entities: dict[EntityId, T]
    ) -> EntityState:
        return ops.commit(state, ids, entities, self._sort_comparer)

    def get_initial_state(self, extra: Mapping[str, Any] | None = None) -> EntityState:
        """Empty collection merged with caller-supplied extra fields."""
        return {"ids": [], "entities": {}, **(extra or {})}

    # Insert

    def add_one(self, state: EntityState, entity: Any) -> EntityState:
        """Insert a record unless its id is already present."""
        return self.add_many(state, [ops.unwrap_payload(entity)])

    def add_many(self, state: EntityState, entities: Any) -> EntityState:
        """Insert each record whose id is absent. First occurrence wins."""
        ids, records = ops.unpack(state)
        added = False
        for entity in ops.as_entity_list(ops.unwrap_payload(entities)):
            key = self._id(entity)
            if key in records:
                continue
            records[key] = entity
            ids.append(key)
            added = True
        if not added:
            return state
        return self._commit(state, ids, records)

    # Replace

    def set_one(self, state: EntityState, entity: Any) -> EntityState:
        """Insert or fully replace a record (no field merge)."""
        return self.set_many(state, [ops.unwrap_payload(entity)])

    def set_many(self, state: EntityState, entities: Any) -> EntityState:
        """Insert or fully replace each record. Last occurrence wins."""
        entity_list = ops.as_entity_list(ops.unwrap_payload(entities))
        if not entity_list:
            return state
        ids, records = ops.unpack(state)
        for entity in entity_list:
            key = self._id(entity)
            if key not in records:
                ids.append(key)
            records[key] = entity
        return self._commit(state, ids, records)

    def set_all(self, state: EntityState, entities: Any) -> EntityState:
        """Replace the whole collection with `entities`, deduplicated by id.

        Ids keep first-occurrence order (then sorted, if configured); the
        record kept for a repeated id is its last occurrence.
        """
        entity_list = ops.as_entity_list(ops.unwrap_payload(entities))
        records: dict[EntityId, T] = {}
        for entity in entity_list:
            records[self._id(entity)] = entity
        return self._commit(state, list(records), records)

    # Upsert / update

    def upsert_one(self, state: EntityState, entity: Any) -> EntityState:
        """Insert a record, or shallow-merge its fields into the existing one."""
        return self.upsert_many(state, [ops.unwrap_payload(entity)])

    def upsert_many(self, state: EntityState, entities: Any) -> EntityState:
        """Batched upsert_one."""
        entity_list = ops.as_entity_list(ops.unwrap_payload(entities))
        if not entity_list:
            return state
        ids, records = ops.unpack(state)
        for entity in entity_list:
            key = self._id(entity)
            if key in records:
                records[key] = ops.merge_changes(records[key], entity)
            else:
                records[key] = entity
                ids.append(key)
        return self._commit(state, ids, records)

    def update_one(self, state: EntityState, update: Any) -> EntityState:
        """Shallow-merge `update.changes` into an existing record.

        No-op if the id is unknown. If the merged record derives a different
        id, it is re-keyed in place.
        """
        return self.update_many(state, [ops.unwrap_payload(update)])

    def update_many(self, state: EntityState, updates: Any) -> EntityState:
        """Batched update_one. Several updates to one id are applied in order."""
        ids, records = ops.unpack(state)
        pending: dict[EntityId, Any] = {}
        for raw in ops.unwrap_payload(updates):
            update = Update.coerce(raw)
            if update.id not in records:
                continue
            base = pending.get(update.id, records[update.id])
            pending[update.id] = ops.merge_changes(base, update.changes)
        if not pending:
            return state

        renames: dict[EntityId, EntityId] = {}
        for original_id, entity in pending.items():
            new_id = self._id(entity)
            if new_id != original_id:
                renames[original_id] = new_id
        # Vacate renamed keys first: a batch may swap or chain ids.
        for original_id in renames:
            del records[original_id]
        for original_id, entity in pending.items():
            records[renames.get(original_id, original_id)] = entity
        if renames:
            ids = ops.rekey_ids(ids, renames)
        return self._commit(state, ids, records)

    # Remove

    def remove_one(self, state: EntityState, entity_id: Any) -> EntityState:
        """Delete a record. No-op if the id is unknown."""
        return self.remove_many(state, [ops.unwrap_payload(entity_id)])

    def remove_many(self, state: EntityState, entity_ids: Any) -> EntityState:
        """Delete every listed record; unknown ids are skipped."""
        targets = {key for key in ops.as_id_list(entity_ids) if key in state["entities"]}
        if not targets:
            return state
        ids, records = ops.unpack(state)
        for key in targets:
            del records[key]
        ids = [key for key in ids if key not in targets]
        return {**state, "ids": ids, "entities": records}

    def remove_all(self, state: EntityState, _action: Any = None) -> EntityState:
        """Empty both `ids` and `entities`, keeping extra fields."""
        return {**state, "ids": [], "entities": {}}

    # Read

    def get_selectors(
        self, select_state: Callable[[Any], EntityState] | None = None
    ) -> EntitySelectors[T]:
        """Selectors over this collection, optionally through a root-state accessor."""
        return build_selectors(select_state)


def create_entity_adapter[T](
    select_id: SelectId[T] | None = None,
    sort_comparer: SortComparer[T] | None = None,
) -> EntityAdapter[T]:
    """Create an EntityAdapter.

    Args:
        select_id: Derives a record's id. Defaults to `record["id"]` / `record.id`.
        sort_comparer: Optional three-way comparison keeping `ids` sorted.

    Returns:
        Configured EntityAdapter.
    """
    return EntityAdapter(select_id=select_id, sort_comparer=sort_comparer)
