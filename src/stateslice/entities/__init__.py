"""Normalized entity collections."""

from stateslice.entities.adapter import EntityAdapter, create_entity_adapter
from stateslice.entities.models import (
    EntitySelectors,
    EntityState,
    SelectId,
    SortComparer,
    Update,
)
from stateslice.entities.selectors import (
    build_selectors,
    select_all,
    select_by_id,
    select_entities,
    select_ids,
    select_total,
)

__all__ = [
    "EntityAdapter",
    "create_entity_adapter",
    # Models
    "EntityState",
    "EntitySelectors",
    "SelectId",
    "SortComparer",
    "Update",
    # Selectors
    "build_selectors",
    "select_all",
    "select_by_id",
    "select_entities",
    "select_ids",
    "select_total",
]
