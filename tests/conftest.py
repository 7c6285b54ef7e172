"""ABOUTME: Pytest configuration and shared fixtures for item picker tests.

Provides a small item store (users, pages, files), backends built on it and
mocked collaborators for the selection controller.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from item_picker.controller import HeadlessDialog, SelectionController
from item_picker.resolve import BUILTIN_KINDS, ItemStore, get_picker_backend


SAMPLE_DATA = {
    "users": [
        {"id": "u-grace", "username": "grace", "email": "grace@example.com", "name": "Grace Hopper"},
        {"id": "u-ada", "username": "Ada", "email": "ada@example.com", "name": "Ada Lovelace"},
        {"id": "u-linus", "username": "linus", "email": "linus@example.org", "name": "Linus Torvalds"},
        {"id": "u-barbara", "username": "barbara", "email": "barbara@example.org", "name": "Barbara Liskov"},
        {"id": "u-alan", "username": "alan", "email": "alan@example.com", "name": "Alan Turing"},
    ],
    "pages": [
        {"id": "home", "title": "Home", "slug": "home"},
        {"id": "blog", "title": "Blog", "slug": "blog"},
        {"id": "post-b", "parent": "blog", "title": "Second post", "slug": "second-post"},
        {"id": "post-a", "parent": "blog", "title": "First post", "slug": "first-post"},
    ],
    "files": [
        {"id": "f-hero", "parent": "home", "filename": "hero.jpg", "template": "image"},
        {"id": "f-cover", "parent": "blog", "filename": "cover.png", "template": "image"},
        {"id": "f-terms", "parent": "home", "filename": "Terms.pdf", "template": "document"},
        {"id": "f-notes", "parent": "post-a", "filename": "notes.txt", "template": "document"},
    ],
}


@pytest.fixture
def sample_data():
    """Fixture providing raw store data keyed by collection."""
    return SAMPLE_DATA


@pytest.fixture
def store(sample_data):
    """Fixture providing an ItemStore with the built-in kinds and sample items."""
    return ItemStore.from_dict(sample_data, BUILTIN_KINDS)


@pytest.fixture
def user_backend(store):
    return get_picker_backend("user", store)


@pytest.fixture
def file_backend(store):
    return get_picker_backend("file", store)


def make_response(ids, page=1, limit=20, total=None):
    """Build a fetcher response holding minimal items with the given ids."""
    return {
        "data": [{"id": item_id, "text": item_id.upper()} for item_id in ids],
        "pagination": {"page": page, "limit": limit, "total": len(ids) if total is None else total},
    }


@pytest.fixture
def mock_fetcher():
    """Fixture providing a fetcher whose get() is an AsyncMock.

    Returns:
        MagicMock with get returning five items a-e
    """
    fetcher = MagicMock()
    fetcher.get = AsyncMock(return_value=make_response(["a", "b", "c", "d", "e"]))
    return fetcher


@pytest.fixture
def mock_reporter():
    return MagicMock()


@pytest.fixture
def controller(mock_fetcher, mock_reporter):
    """Fixture providing a SelectionController wired to mocked collaborators."""
    return SelectionController(mock_fetcher, reporter=mock_reporter, dialog=HeadlessDialog())
