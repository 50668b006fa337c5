"""Copy-on-write drafts for case reducers."""

from stateslice.core.draft.operations import NOTHING, current, produce

__all__ = [
    "NOTHING",
    "current",
    "produce",
]
