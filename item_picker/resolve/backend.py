"""ABOUTME: Item picker backend - resolves one page of eligible items.

Composes query resolution, search filtering, sorting and pagination into the
single operation the picker service exposes. Resolution is a pure read: the
store is never mutated and identical arguments give identical pages.
"""

import logging
from typing import Any, Optional

from ..validation import DEFAULT_LIMIT, FIRST_PAGE
from .models import Context, ItemKind, PickerPage
from .query import QueryResolver
from .store import ItemStore
from .utils import filter_by_search, item_to_dict, paginate, sort_items

# Configure logging
logger = logging.getLogger(__name__)


class ItemPickerBackend:
    """Server side of a picker for one item kind."""

    def __init__(
        self,
        store: ItemStore,
        kind: ItemKind,
        resolver: Optional[QueryResolver] = None
    ):
        self.store = store
        self.kind = kind
        self.resolver = resolver or QueryResolver(store)

    @property
    def name(self) -> str:
        return self.kind.name

    def resolve(
        self,
        context: Context,
        query: Optional[str] = None,
        search: Optional[str] = None,
        page: int = FIRST_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> PickerPage:
        """Resolve, filter, sort and paginate the candidate items.

        Args:
            context: Scope the query is evaluated in
            query: Query expression; None selects the context-dependent default
            search: Free-text search term; empty means no filter
            page: 1-based page (0 means first page)
            limit: Page size

        Returns:
            PickerPage with the page's items and pagination info

        Raises:
            QueryError: If the query expression is invalid
            ResolutionTypeError: If the query does not yield items of this kind
        """
        candidates = self.resolver.resolve(self.kind, context, query)
        filtered = filter_by_search(candidates, search, self.kind.search_fields)
        ordered = sort_items(filtered, self.kind.sort_field)
        items, pagination = paginate(ordered, page, limit)

        logger.info(
            f"Resolved {self.kind.name} picker: {len(candidates)} candidates, "
            f"{pagination.total} matching, page {pagination.page}/{pagination.pages} "
            f"({len(items)} items)"
        )

        return PickerPage(
            items=items,
            pagination=pagination,
            kind=self.kind.name,
            query=query,
            search=search,
        )

    def to_response(self, page: PickerPage) -> dict[str, Any]:
        """Render a page into the wire format {data, pagination}."""
        return {
            "data": [item_to_dict(item, self.kind) for item in page.items],
            "pagination": page.pagination.to_dict(),
        }

    def fetch(
        self,
        parent: Optional[str] = None,
        query: Optional[str] = None,
        search: Optional[str] = None,
        page: int = FIRST_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> dict[str, Any]:
        """Resolve a page for a "<kind>/<id>" parent reference and render it."""
        context = self.store.context(parent)
        return self.to_response(self.resolve(context, query, search, page, limit))
