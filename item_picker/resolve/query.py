"""ABOUTME: Query resolution - turns a query expression into candidate items.

Queries are dotted paths evaluated against a context:

    site.users        every user
    model.siblings    items of the context's kind sharing its parent
    model.files       files whose parent is the context entity
    model.parent      the context's parent entity (not a collection)

The root "site" is the global scope; "model" is the context entity, or the
site itself when the picker runs without a parent.
"""

import logging
from typing import Any, Optional

from ..error_handling import QueryError, ResolutionTypeError
from .models import Context, EntityContext, Item, ItemCollection, ItemKind
from .store import ItemStore

logger = logging.getLogger(__name__)

SIBLINGS_QUERY = "model.siblings"


def default_query(kind: ItemKind, context: Context) -> str:
    """Pick the query used when the picker is configured without one.

    A context of the picker's own kind scopes to its siblings; any other
    context falls back to the kind's configured query.
    """
    if context.kind == kind.name:
        return SIBLINGS_QUERY
    return kind.default_fallback_query


class QueryResolver:
    """Evaluates query expressions against an item store."""

    def __init__(self, store: ItemStore):
        self.store = store

    def resolve(self, kind: ItemKind, context: Context, query: Optional[str] = None) -> ItemCollection:
        """Resolve the candidates for a picker of the given kind.

        Raises:
            QueryError: If the expression is malformed or references unknown members
            ResolutionTypeError: If the result is not a collection of kind's items
        """
        if query is None or not query.strip():
            query = default_query(kind, context)
            logger.debug(f"Using default query '{query}' for {kind.name} picker in {context.kind} context")

        result = self.evaluate(query, context)

        if not isinstance(result, ItemCollection) or result.kind != kind.name:
            raise ResolutionTypeError(f"Your query must return a set of {kind.collection}")

        return result

    def evaluate(self, query: str, context: Context) -> Any:
        """Evaluate an expression and return whatever it points at."""
        parts = query.strip().split(".")
        if any(not part.strip() for part in parts):
            raise QueryError(f"Malformed query: '{query}'")

        root, *members = (part.strip() for part in parts)
        value = self._root(root, context)

        for member in members:
            value = self._member(value, member, query)

        return value

    def _root(self, name: str, context: Context) -> Any:
        if name == "site":
            return self.store
        if name == "model":
            if isinstance(context, EntityContext):
                return context.item
            return self.store
        raise QueryError(f"Unknown query root '{name}'")

    def _member(self, value: Any, name: str, query: str) -> Any:
        if isinstance(value, ItemStore):
            kind = self.store.kind_for_collection(name)
            if kind is None:
                raise QueryError(f"Unknown collection '{name}' in query '{query}'")
            return self.store.all(kind.name)

        if isinstance(value, Item):
            return self._item_member(value, name, query)

        if value is None:
            raise QueryError(f"Cannot read '{name}' of nothing in query '{query}'")

        raise QueryError(f"Cannot read '{name}' in query '{query}'")

    def _item_member(self, item: Item, name: str, query: str) -> Any:
        if name == "siblings":
            return self.store.siblings(item)

        if name == "parent":
            if item.parent is None:
                return None
            return self.store.find_any(item.parent)

        kind = self.store.kind_for_collection(name)
        if kind is not None:
            return self.store.children(item.id, kind.name)

        if name == "id" or name in item.fields:
            return item.get(name)

        raise QueryError(f"Unknown member '{name}' on {item.kind} '{item.id}' in query '{query}'")
