"""Tests for pydantic-settings configuration."""

import pytest
from pydantic import ValidationError

from stateslice import StoreSettings, ThunkSettings, create_async_thunk


def test_defaults():
    assert StoreSettings().immutability_check is False
    assert StoreSettings().log_dispatches is False
    assert ThunkSettings().request_id_size == 21
    assert ThunkSettings().abort_message == "Aborted"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STATESLICE_STORE_IMMUTABILITY_CHECK", "true")
    monkeypatch.setenv("STATESLICE_THUNK_REQUEST_ID_SIZE", "10")

    assert StoreSettings().immutability_check is True
    assert ThunkSettings().request_id_size == 10


def test_request_id_size_is_bounded():
    with pytest.raises(ValidationError):
        ThunkSettings(request_id_size=2)


@pytest.mark.asyncio
async def test_thunk_uses_request_id_size():
    thunk = create_async_thunk(
        "books/fetch", lambda arg, api: None, settings=ThunkSettings(request_id_size=8)
    )
    actions = []

    handle = thunk()(actions.append, lambda: None)
    await handle

    assert len(handle.request_id) == 8
