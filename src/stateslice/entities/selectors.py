"""Read helpers over normalized collections.

Usage:
    select_all(state)           # records in ids order
    select_by_id(state, "a")    # record or None

    selectors = build_selectors(lambda root: root["books"])
    selectors.select_total(store.get_state())
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from stateslice.core.types import EntityId
from stateslice.entities.models import EntitySelectors, EntityState


def select_ids(state: EntityState) -> list[EntityId]:
    return state["ids"]


def select_entities(state: EntityState) -> dict[EntityId, Any]:
    return state["entities"]


def select_all(state: EntityState) -> list[Any]:
    """Records in `ids` order."""
    entities = state["entities"]
    return [entities[entity_id] for entity_id in state["ids"]]


def select_total(state: EntityState) -> int:
    return len(state["ids"])


def select_by_id(state: EntityState, entity_id: EntityId) -> Any | None:
    return state["entities"].get(entity_id)


def build_selectors(
    select_state: Callable[[Any], EntityState] | None = None,
) -> EntitySelectors[Any]:
    """Bundle the read helpers, optionally composed with a root-state accessor.

    Args:
        select_state: Maps a root state to the collection. None means the
            selectors receive the collection itself.

    Returns:
        EntitySelectors reading through `select_state`.
    """
    if select_state is None:
        return EntitySelectors(
            select_ids=select_ids,
            select_entities=select_entities,
            select_all=select_all,
            select_total=select_total,
            select_by_id=select_by_id,
        )

    return EntitySelectors(
        select_ids=lambda root: select_ids(select_state(root)),
        select_entities=lambda root: select_entities(select_state(root)),
        select_all=lambda root: select_all(select_state(root)),
        select_total=lambda root: select_total(select_state(root)),
        select_by_id=lambda root, entity_id: select_by_id(select_state(root), entity_id),
    )
