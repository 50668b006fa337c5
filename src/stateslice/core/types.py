"""Core type definitions for stateslice."""

from collections.abc import Hashable

type EntityId = Hashable
"""Primitive identifying one record in a normalized collection (usually str or int)."""

type Copy[T] = T
"""Type alias indicating a value is a detached copy.

When you see `Copy[T]` in a return type, the returned value is a deep copy.
Mutations to this copy do NOT affect committed state. To persist changes,
return them from a case reducer or dispatch an action.
"""
