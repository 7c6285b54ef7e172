"""ABOUTME: Item resolution infrastructure - store, queries, pipeline and backend."""

from .backend import ItemPickerBackend
from .factory import BUILTIN_KINDS, create_store, get_picker_backend
from .models import (
    Context,
    EntityContext,
    Item,
    ItemCollection,
    ItemKind,
    Pagination,
    PickerPage,
    SiteContext,
)
from .query import QueryResolver, default_query
from .store import ItemStore, load_store

__all__ = [
    "ItemPickerBackend",
    "BUILTIN_KINDS",
    "create_store",
    "get_picker_backend",
    "Context",
    "EntityContext",
    "Item",
    "ItemCollection",
    "ItemKind",
    "Pagination",
    "PickerPage",
    "SiteContext",
    "QueryResolver",
    "default_query",
    "ItemStore",
    "load_store",
]
