"""Tests for entity adapter CRUD without a sort comparer.

Critical Invariants:
- Inputs are never mutated
- ids and entities always hold the same keys, without duplicates
- Unknown ids on update/remove are silent no-ops
"""

import copy

import pytest

from stateslice import Action, Update, create_entity_adapter


@pytest.fixture
def state(adapter, books):
    return adapter.add_many(adapter.get_initial_state(), books)


# Initial state


def test_initial_state_is_empty(adapter):
    assert adapter.get_initial_state() == {"ids": [], "entities": {}}


def test_initial_state_merges_extra_fields(adapter):
    state = adapter.get_initial_state({"loading": "initial", "last_request_id": None})

    assert state == {"ids": [], "entities": {}, "loading": "initial", "last_request_id": None}


def test_default_select_id_reads_id_key_and_attribute(book_cls):
    adapter = create_entity_adapter()
    state = adapter.add_many(
        adapter.get_initial_state(), [{"id": "a", "title": "A"}, book_cls(id="b", title="B")]
    )

    assert state["ids"] == ["a", "b"]


# Insert


def test_add_one_inserts_record(adapter):
    book = {"id": "a", "title": "First"}

    state = adapter.add_one(adapter.get_initial_state(), book)

    assert state["ids"] == ["a"]
    assert state["entities"] == {"a": book}


def test_add_one_does_not_mutate_input(adapter, state):
    before = copy.deepcopy(state)

    adapter.add_one(state, {"id": "new", "title": "New"})

    assert state == before


def test_add_one_keeps_existing_record(adapter, state):
    """add_one never overwrites: the id is already present."""
    result = adapter.add_one(state, {"id": "tgg", "title": "Changed"})

    assert result["entities"]["tgg"]["title"] == "The Great Gatsby"
    assert result is state


def test_add_one_accepts_action_payload(adapter):
    action = Action("books/add_one", payload={"id": "a", "title": "First"})

    state = adapter.add_one(adapter.get_initial_state(), action)

    assert state["ids"] == ["a"]


def test_add_many_preserves_insertion_order(adapter, books):
    state = adapter.add_many(adapter.get_initial_state(), books)

    assert state["ids"] == ["tgg", "aclockwork", "th"]


def test_add_many_accepts_id_keyed_mapping(adapter, books):
    state = adapter.add_many(adapter.get_initial_state(), {b["id"]: b for b in books})

    assert state["ids"] == ["tgg", "aclockwork", "th"]


def test_add_many_first_duplicate_wins(adapter):
    state = adapter.add_many(
        adapter.get_initial_state(),
        [{"id": "a", "title": "One"}, {"id": "a", "title": "Two"}],
    )

    assert state["ids"] == ["a"]
    assert state["entities"]["a"]["title"] == "One"


def test_add_one_rejects_missing_id():
    adapter = create_entity_adapter(select_id=lambda book: book.get("id"))

    with pytest.raises(ValueError):
        adapter.add_one(adapter.get_initial_state(), {"title": "Anonymous"})


# Replace


def test_set_all_replaces_collection(adapter, state):
    result = adapter.set_all(state, [{"id": "x", "title": "X"}])

    assert result["ids"] == ["x"]
    assert result["entities"] == {"x": {"id": "x", "title": "X"}}


def test_set_all_deduplicates_by_id(adapter):
    books = [
        {"id": "a", "title": "One"},
        {"id": "b", "title": "Two"},
        {"id": "a", "title": "Three"},
    ]

    state = adapter.set_all(adapter.get_initial_state(), books)

    assert state["ids"] == ["a", "b"]
    assert state["entities"] == {"a": books[2], "b": books[1]}


def test_set_all_keeps_extra_fields(adapter):
    state = adapter.get_initial_state({"loading": "pending"})

    result = adapter.set_all(state, [{"id": "a", "title": "A"}])

    assert result["loading"] == "pending"


def test_set_one_replaces_without_merging(adapter):
    state = adapter.add_one(
        adapter.get_initial_state(), {"id": "a", "title": "Old", "author": "Someone"}
    )

    result = adapter.set_one(state, {"id": "a", "title": "New"})

    assert result["entities"]["a"] == {"id": "a", "title": "New"}


def test_set_many_appends_new_ids(adapter, state):
    result = adapter.set_many(state, [{"id": "th", "title": "Hobbit"}, {"id": "z", "title": "Z"}])

    assert result["ids"] == ["tgg", "aclockwork", "th", "z"]
    assert result["entities"]["th"]["title"] == "Hobbit"


# Upsert


def test_upsert_one_inserts_when_absent(adapter, state):
    result = adapter.upsert_one(state, {"id": "new", "title": "New"})

    assert result["ids"][-1] == "new"


def test_upsert_one_merges_when_present(adapter):
    state = adapter.add_one(
        adapter.get_initial_state(), {"id": "a", "title": "Old", "author": "Someone"}
    )

    result = adapter.upsert_one(state, {"id": "a", "title": "New"})

    assert result["entities"]["a"] == {"id": "a", "title": "New", "author": "Someone"}
    assert state["entities"]["a"]["title"] == "Old"


def test_upsert_many_merges_dataclass_records(book_cls):
    adapter = create_entity_adapter()
    state = adapter.add_one(adapter.get_initial_state(), book_cls(id="a", title="Old", author="X"))

    result = adapter.upsert_many(state, [book_cls(id="a", title="New")])

    assert result["entities"]["a"] == book_cls(id="a", title="New", author="unknown")


# Update


def test_update_one_merges_changes(adapter, state):
    result = adapter.update_one(state, {"id": "th", "changes": {"title": "There and Back"}})

    assert result["entities"]["th"] == {"id": "th", "title": "There and Back"}
    assert state["entities"]["th"]["title"] == "The Hobbit"


def test_update_one_accepts_update_model(adapter, state):
    result = adapter.update_one(state, Update(id="th", changes={"pages": 310}))

    assert result["entities"]["th"]["pages"] == 310


def test_update_one_unknown_id_is_noop(adapter, state):
    result = adapter.update_one(state, {"id": "missing", "changes": {"title": "?"}})

    assert result is state


def test_update_one_can_change_id(adapter, state):
    """Re-keyed records keep their position in ids."""
    result = adapter.update_one(state, {"id": "aclockwork", "changes": {"id": "aco"}})

    assert result["ids"] == ["tgg", "aco", "th"]
    assert "aclockwork" not in result["entities"]
    assert result["entities"]["aco"]["title"] == "A Clockwork Orange"


def test_update_many_merges_repeated_ids_in_order(adapter, state):
    result = adapter.update_many(
        state,
        [
            {"id": "th", "changes": {"title": "First"}},
            {"id": "th", "changes": {"title": "Second", "pages": 1}},
        ],
    )

    assert result["entities"]["th"] == {"id": "th", "title": "Second", "pages": 1}


def test_update_many_swaps_ids(adapter, state):
    result = adapter.update_many(
        state,
        [
            {"id": "tgg", "changes": {"id": "th"}},
            {"id": "th", "changes": {"id": "tgg"}},
        ],
    )

    assert result["ids"] == ["th", "aclockwork", "tgg"]
    assert set(result["entities"]) == set(result["ids"])
    assert result["entities"]["th"]["title"] == "The Great Gatsby"
    assert result["entities"]["tgg"]["title"] == "The Hobbit"
    assert adapter.get_selectors().select_all(result)[0]["title"] == "The Great Gatsby"


def test_update_many_chains_ids(adapter, state):
    result = adapter.update_many(
        state,
        [
            {"id": "tgg", "changes": {"id": "aclockwork"}},
            {"id": "aclockwork", "changes": {"id": "aco"}},
        ],
    )

    assert result["ids"] == ["aclockwork", "aco", "th"]
    assert set(result["entities"]) == set(result["ids"])
    assert result["entities"]["aclockwork"]["title"] == "The Great Gatsby"
    assert result["entities"]["aco"]["title"] == "A Clockwork Orange"


def test_update_one_with_dataclass_record(book_cls):
    adapter = create_entity_adapter()
    state = adapter.add_one(adapter.get_initial_state(), book_cls(id="a", title="Old"))

    result = adapter.update_one(state, Update(id="a", changes={"author": "Me"}))

    assert result["entities"]["a"] == book_cls(id="a", title="Old", author="Me")


# Remove


def test_remove_one_deletes_record(adapter, state):
    result = adapter.remove_one(state, "tgg")

    assert result["ids"] == ["aclockwork", "th"]
    assert "tgg" not in result["entities"]


def test_remove_one_unknown_id_is_noop(adapter, state):
    before = copy.deepcopy(state)

    result = adapter.remove_one(state, "missing")

    assert result == before


def test_remove_one_accepts_action_payload(adapter, state):
    result = adapter.remove_one(state, Action("books/remove_one", payload="th"))

    assert result["ids"] == ["tgg", "aclockwork"]


def test_remove_many_skips_unknown_ids(adapter, state):
    result = adapter.remove_many(state, ["tgg", "missing", "th"])

    assert result["ids"] == ["aclockwork"]
    assert list(result["entities"]) == ["aclockwork"]


def test_remove_many_rejects_bare_string(adapter, state):
    with pytest.raises(TypeError):
        adapter.remove_many(state, "tgg")

    with pytest.raises(TypeError):
        adapter.remove_many(state, Action("books/remove_many", payload="tgg"))


def test_remove_all_keeps_extra_fields(adapter):
    state = adapter.add_one(adapter.get_initial_state({"loading": "finished"}), {"id": "a"})

    result = adapter.remove_all(state)

    assert result == {"ids": [], "entities": {}, "loading": "finished"}
