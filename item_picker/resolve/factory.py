"""ABOUTME: Kind registry and backend factory.

Provides the built-in user, page and file kinds and a factory for creating a
picker backend for a kind at runtime.
"""

import logging
from typing import Iterable, Optional

from ..error_handling import NotFoundError
from .backend import ItemPickerBackend
from .models import ItemKind
from .store import ItemStore

# Configure logging
logger = logging.getLogger(__name__)


USER_KIND = ItemKind(
    name="user",
    collection="users",
    sort_field="username",
    search_fields=("username", "email", "name"),
    text="{{ item.username }}",
    info="{{ item.email }}",
    fallback_query="site.users",
)

PAGE_KIND = ItemKind(
    name="page",
    collection="pages",
    sort_field="title",
    search_fields=("title", "slug"),
    text="{{ item.title }}",
    info="{{ item.slug }}",
    fallback_query="site.pages",
)

# Files live inside their parent; a site context resolves model.files to all files.
FILE_KIND = ItemKind(
    name="file",
    collection="files",
    sort_field="filename",
    search_fields=("filename", "template"),
    text="{{ item.filename }}",
    info="{{ item.template }}",
    fallback_query="model.files",
)

BUILTIN_KINDS: tuple[ItemKind, ...] = (USER_KIND, PAGE_KIND, FILE_KIND)


def create_store(kinds: Optional[Iterable[ItemKind]] = None) -> ItemStore:
    """Create an empty store with the given kinds (built-ins by default)."""
    return ItemStore(BUILTIN_KINDS if kinds is None else kinds)


def get_picker_backend(kind_name: str, store: ItemStore) -> ItemPickerBackend:
    """Create and return the picker backend for a kind.

    Args:
        kind_name: Name of the item kind (e.g., "user")
        store: Store holding the items

    Returns:
        ItemPickerBackend instance

    Raises:
        NotFoundError: If the kind is not registered in the store
    """
    logger.debug(f"Creating picker backend: {kind_name}")

    try:
        kind = store.kind(kind_name)
    except NotFoundError:
        supported = ", ".join(k.name for k in store.kinds)
        raise NotFoundError(f"Unknown picker kind: {kind_name}. Supported: {supported}") from None

    return ItemPickerBackend(store, kind)
