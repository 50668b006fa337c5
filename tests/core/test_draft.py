"""Tests for copy-on-write drafts.

Critical Invariants:
- The base value is never mutated
- An explicit return overrides edits made to the draft
- Unchanged drafts return the base object itself
"""

from stateslice import NOTHING, current, produce


def test_in_place_edits_are_committed():
    base = {"loading": "initial", "items": [1]}

    def recipe(draft):
        draft["loading"] = "pending"
        draft["items"].append(2)

    result = produce(base, recipe)

    assert result == {"loading": "pending", "items": [1, 2]}
    assert base == {"loading": "initial", "items": [1]}


def test_explicit_return_overrides_edits():
    base = {"value": 1}

    def recipe(draft):
        draft["value"] = 100
        return {"value": 2}

    assert produce(base, recipe) == {"value": 2}
    assert base == {"value": 1}


def test_unchanged_draft_returns_base():
    base = {"value": 1}

    assert produce(base, lambda draft: None) is base


def test_returning_the_draft_commits_it():
    base = {"value": 1}

    def recipe(draft):
        draft["value"] = 2
        return draft

    assert produce(base, recipe) == {"value": 2}


def test_nothing_replaces_state_with_none():
    assert produce({"value": 1}, lambda draft: NOTHING) is None


def test_nested_produce_does_not_write_into_outer_draft():
    base = {"inner": {"count": 0}}

    def recipe(draft):
        produce(draft, lambda inner: inner["inner"].update(count=1))

    assert produce(base, recipe) is base


def test_current_detaches_snapshot():
    draft = {"items": [1]}
    snapshot = current(draft)
    draft["items"].append(2)

    assert snapshot == {"items": [1]}
