"""End-to-end: entity adapter, slice, and async thunk working through a store.

Critical Invariants:
- A fetched, sorted collection lands in state after the thunk resolves
- Slice and external cases keep ids sorted
- Responses whose request id is stale leave dependent fields unchanged
"""

import asyncio

import pytest

from stateslice import (
    configure_store,
    create_action,
    create_async_thunk,
    create_entity_adapter,
    create_slice,
    is_rejected,
)


def compare_titles(a: dict, b: dict) -> int:
    return (a["title"] > b["title"]) - (a["title"] < b["title"])


FAKE_BOOKS = [
    {"id": "b", "title": "Second"},
    {"id": "a", "title": "First"},
]


def build_books(payload_creator):
    adapter = create_entity_adapter(select_id=lambda book: book["id"], sort_comparer=compare_titles)
    upsert_book = create_action("otherBooks/upsert")
    fetch_books = create_async_thunk("books/fetch", payload_creator)

    def remove_one(state, action):
        return adapter.remove_one(state, action)

    def on_pending(state, action):
        state["loading"] = "pending"
        state["last_request_id"] = action.meta["request_id"]

    def on_fulfilled(state, action):
        if state["loading"] == "pending" and action.meta["request_id"] == state["last_request_id"]:
            return {
                **adapter.set_all(state, action.payload),
                "loading": "finished",
                "last_request_id": None,
            }
        return None

    def on_failed(state, action):
        state["loading"] = "failed"

    def extra_reducers(builder):
        builder.add_case(upsert_book, lambda state, action: adapter.upsert_one(state, action))
        builder.add_case(fetch_books.pending, on_pending)
        builder.add_case(fetch_books.fulfilled, on_fulfilled)
        builder.add_matcher(is_rejected(fetch_books), on_failed)

    books_slice = create_slice(
        name="books",
        initial_state=adapter.get_initial_state({"loading": "initial", "last_request_id": None}),
        reducers={"add_one": adapter.add_one, "remove_one": remove_one},
        extra_reducers=extra_reducers,
    )
    return books_slice, fetch_books, upsert_book


@pytest.mark.asyncio
async def test_entity_and_async_features_work_together():
    async def fetch(arg, api):
        api.get_state()
        return FAKE_BOOKS

    books_slice, fetch_books, upsert_book = build_books(fetch)
    store = configure_store({"books": books_slice.reducer})

    await store.dispatch(fetch_books())

    books = store.get_state()["books"]
    assert books["ids"] == ["a", "b"], "Sorted, so 'First' goes first"
    assert books["last_request_id"] is None
    assert books["loading"] == "finished"

    store.dispatch(books_slice.actions.add_one({"id": "c", "title": "Middle"}))
    assert store.get_state()["books"]["ids"] == ["a", "c", "b"]

    store.dispatch(upsert_book({"id": "c", "title": "Zeroth"}))
    assert store.get_state()["books"]["ids"] == ["a", "b", "c"]

    store.dispatch(books_slice.actions.remove_one("b"))
    assert store.get_state()["books"]["ids"] == ["a", "c"]


@pytest.mark.asyncio
async def test_pending_state_visible_while_fetch_in_flight():
    release = asyncio.Event()

    async def fetch(arg, api):
        await release.wait()
        return FAKE_BOOKS

    books_slice, fetch_books, _ = build_books(fetch)
    store = configure_store({"books": books_slice.reducer})

    handle = store.dispatch(fetch_books())

    books = store.get_state()["books"]
    assert books["loading"] == "pending"
    assert books["last_request_id"] == handle.request_id

    release.set()
    await handle
    assert store.get_state()["books"]["loading"] == "finished"


@pytest.mark.asyncio
async def test_stale_fulfilled_is_ignored():
    books_slice, fetch_books, _ = build_books(lambda arg, api: FAKE_BOOKS)
    store = configure_store({"books": books_slice.reducer})
    store.dispatch(fetch_books.pending("current", None))
    before = store.get_state()

    store.dispatch(fetch_books.fulfilled(FAKE_BOOKS, "stale", None))

    after = store.get_state()
    assert after is before
    assert after["books"]["loading"] == "pending"
    assert after["books"]["last_request_id"] == "current"
    assert after["books"]["ids"] == []


@pytest.mark.asyncio
async def test_superseded_request_does_not_overwrite_newer_one():
    gates = {"first": asyncio.Event(), "second": asyncio.Event()}

    async def fetch(arg, api):
        await gates[arg].wait()
        return [{"id": arg, "title": arg}]

    books_slice, fetch_books, _ = build_books(fetch)
    store = configure_store({"books": books_slice.reducer})

    first = store.dispatch(fetch_books("first"))
    second = store.dispatch(fetch_books("second"))
    assert first.request_id != second.request_id

    gates["second"].set()
    await second
    assert store.get_state()["books"]["ids"] == ["second"]

    gates["first"].set()
    await first
    assert store.get_state()["books"]["ids"] == ["second"]


@pytest.mark.asyncio
async def test_failed_fetch_marks_state_failed():
    async def fetch(arg, api):
        raise ConnectionError("offline")

    books_slice, fetch_books, _ = build_books(fetch)
    store = configure_store({"books": books_slice.reducer})

    action = await store.dispatch(fetch_books())

    assert action.type == "books/fetch/rejected"
    assert store.get_state()["books"]["loading"] == "failed"
