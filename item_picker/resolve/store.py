"""ABOUTME: In-memory item store backing the picker queries.

Holds items grouped by kind in insertion order and answers the relations the
query language needs: whole collections, children of an entity and siblings
of an entity. Stores can be built from a dict or loaded from a JSON file of
the form {"users": [{"id": "ada", "username": "ada", ...}], "files": [...]}.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ..error_handling import NotFoundError
from ..validation import split_parent_reference
from .models import Context, EntityContext, Item, ItemCollection, ItemKind, SiteContext

logger = logging.getLogger(__name__)


class ItemStore:
    """Items of every registered kind, queryable by relation."""

    def __init__(self, kinds: Iterable[ItemKind], items: Iterable[Item] = ()):
        self._kinds: dict[str, ItemKind] = {}
        self._collections: dict[str, ItemKind] = {}
        self._items: dict[str, dict[str, Item]] = {}

        for kind in kinds:
            self.register_kind(kind)

        for item in items:
            self.add(item)

    def register_kind(self, kind: ItemKind) -> None:
        if kind.name in self._kinds or kind.collection in self._collections:
            raise ValueError(f"Kind already registered: {kind.name} ({kind.collection})")
        self._kinds[kind.name] = kind
        self._collections[kind.collection] = kind
        self._items[kind.name] = {}

    def add(self, item: Item) -> None:
        if item.kind not in self._kinds:
            raise ValueError(f"Unknown kind '{item.kind}' for item '{item.id}'")
        bucket = self._items[item.kind]
        if item.id in bucket:
            raise ValueError(f"Duplicate {item.kind} id: {item.id}")
        bucket[item.id] = item

    @property
    def kinds(self) -> list[ItemKind]:
        return list(self._kinds.values())

    def kind(self, name: str) -> ItemKind:
        """Return the kind registered under name.

        Raises:
            NotFoundError: If no such kind is registered
        """
        try:
            return self._kinds[name]
        except KeyError:
            raise NotFoundError(f"Kind not found: {name}") from None

    def kind_for_collection(self, collection: str) -> Optional[ItemKind]:
        return self._collections.get(collection)

    def find(self, kind: str, item_id: str) -> Item:
        """Return one item by kind and id.

        Raises:
            NotFoundError: If the kind or the item does not exist
        """
        bucket = self._items.get(self.kind(kind).name, {})
        try:
            return bucket[item_id]
        except KeyError:
            raise NotFoundError(f"{kind.capitalize()} not found: {item_id}") from None

    def find_any(self, item_id: str) -> Optional[Item]:
        """First item with this id across kinds, in kind registration order."""
        for bucket in self._items.values():
            if item_id in bucket:
                return bucket[item_id]
        return None

    def all(self, kind: str) -> ItemCollection:
        return ItemCollection(kind=kind, items=list(self._items[self.kind(kind).name].values()))

    def children(self, parent_id: str, kind: str) -> ItemCollection:
        return ItemCollection(
            kind=kind,
            items=[item for item in self._items[self.kind(kind).name].values() if item.parent == parent_id]
        )

    def siblings(self, item: Item) -> ItemCollection:
        """Items of the same kind sharing the item's parent, the item included."""
        return ItemCollection(
            kind=item.kind,
            items=[other for other in self._items[self.kind(item.kind).name].values() if other.parent == item.parent]
        )

    def context(self, parent: Optional[str] = None) -> Context:
        """Build the resolution context for a "<kind>/<id>" reference.

        None means the global site scope.
        """
        if not parent:
            return SiteContext()
        kind, item_id = split_parent_reference(parent)
        try:
            return EntityContext(self.find(kind, item_id))
        except NotFoundError:
            raise NotFoundError(f"Parent not found: {parent}") from None

    @classmethod
    def from_dict(cls, data: dict, kinds: Iterable[ItemKind]) -> "ItemStore":
        """Build a store from {"<collection>": [record, ...]} data.

        Each record needs an "id"; "parent" is optional; every other key
        becomes a field.
        """
        store = cls(kinds)

        for collection, records in data.items():
            kind = store.kind_for_collection(collection)
            if kind is None:
                logger.warning(f"Skipping unknown collection in data: {collection}")
                continue

            for record in records:
                payload = dict(record)
                item_id = payload.pop("id", None)
                if item_id is None:
                    raise ValueError(f"Record without id in collection '{collection}'")
                parent = payload.pop("parent", None)
                store.add(Item(id=str(item_id), kind=kind.name, parent=parent, fields=payload))

        logger.info(
            "Loaded item store: "
            + ", ".join(f"{kind.collection}={len(store._items[kind.name])}" for kind in store.kinds)
        )
        return store


def load_store(path: Union[str, Path], kinds: Iterable[ItemKind]) -> ItemStore:
    """Load an item store from a JSON file."""
    path = Path(path)
    logger.info(f"Loading item store from {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Item data in {path} must be a JSON object of collections")
    return ItemStore.from_dict(data, kinds)
