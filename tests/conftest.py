"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from stateslice import EntityAdapter, create_entity_adapter


def compare_titles(a: dict, b: dict) -> int:
    """Three-way comparison of book titles."""
    return (a["title"] > b["title"]) - (a["title"] < b["title"])


@dataclass(frozen=True, slots=True)
class FixtureBook:
    id: str
    title: str
    author: str = "unknown"


@pytest.fixture
def adapter() -> EntityAdapter:
    """Unsorted adapter keyed by `book["id"]`."""
    return create_entity_adapter(select_id=lambda book: book["id"])


@pytest.fixture
def sorted_adapter() -> EntityAdapter:
    """Adapter keeping ids sorted by title."""
    return create_entity_adapter(select_id=lambda book: book["id"], sort_comparer=compare_titles)


@pytest.fixture
def books() -> list[dict]:
    return [
        {"id": "tgg", "title": "The Great Gatsby"},
        {"id": "aclockwork", "title": "A Clockwork Orange"},
        {"id": "th", "title": "The Hobbit"},
    ]


@pytest.fixture
def book_cls():
    return FixtureBook
