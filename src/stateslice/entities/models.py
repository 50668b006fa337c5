"""Entity models: normalized state shape, updates, and selector bundles.

Usage:
    state = {"ids": ["a"], "entities": {"a": {"id": "a", "title": "First"}}}
    update = Update(id="a", changes={"title": "Renamed"})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from stateslice.core.types import EntityId

type EntityState = dict[str, Any]
"""Normalized collection: `{"ids": [...], "entities": {id: record}, **extra}`.

`ids` defines enumeration order and always holds exactly the keys of `entities`.
"""

type SelectId[T] = Callable[[T], EntityId]
"""Pure function deriving a record's id. Must be stable for the record's lifetime."""

type SortComparer[T] = Callable[[T, T], int]
"""Three-way comparison: negative if a < b, zero if equal, positive if a > b."""


@dataclass(frozen=True, slots=True)
class Update:
    """Partial change for one existing record.

    `changes` is shallow-merged into the record; it may be a mapping or an
    object whose fields are copied.
    """

    id: EntityId
    changes: Any

    @classmethod
    def coerce(cls, value: Update | Mapping[str, Any]) -> Update:
        """Accept either an Update or a `{"id": ..., "changes": ...}` mapping."""
        if isinstance(value, Update):
            return value
        if isinstance(value, Mapping) and "id" in value and "changes" in value:
            return cls(id=value["id"], changes=value["changes"])
        raise TypeError(f"Expected Update or {{'id', 'changes'}} mapping, got {value!r}")


@dataclass(frozen=True, slots=True)
class EntitySelectors[T]:
    """Read helpers over a normalized collection (or a root state containing one)."""

    select_ids: Callable[[Any], list[EntityId]]
    select_entities: Callable[[Any], dict[EntityId, T]]
    select_all: Callable[[Any], list[T]]
    select_total: Callable[[Any], int]
    select_by_id: Callable[[Any, EntityId], T | None]
