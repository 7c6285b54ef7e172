"""ABOUTME: Item pipeline utilities - search filtering, sorting, pagination and rendering.

Each step is a pure function over an ItemCollection and accepts empty input.
"""

import logging
import re
from typing import Any, Iterable, Optional

from ..validation import DEFAULT_LIMIT, FIRST_PAGE
from .models import Item, ItemCollection, ItemKind, Pagination

# Configure logging
logger = logging.getLogger(__name__)

TEMPLATE_PATTERN = re.compile(r"\{\{\s*item\.([A-Za-z0-9_]+)\s*\}\}")


# ===========================
# Filtering Functions
# ===========================

def normalize_term(term: Optional[str]) -> str:
    """Collapse a search term to its comparable form ("" means no filter)."""
    if not term:
        return ""
    return term.strip().casefold()


def matches_search(item: Item, term: str, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match of a normalized term against fields."""
    for name in fields:
        value = item.get(name)
        if value is None:
            continue
        if term in str(value).casefold():
            return True
    return False


def filter_by_search(
    collection: ItemCollection,
    term: Optional[str],
    fields: Iterable[str]
) -> ItemCollection:
    """Keep items whose searchable fields contain the term.

    Args:
        collection: Candidate items
        term: Free-text search term; empty or whitespace-only means no filter
        fields: Names of the searchable fields

    Returns:
        Filtered collection in original order
    """
    needle = normalize_term(term)
    if not needle:
        return collection

    fields = tuple(fields)
    filtered = [item for item in collection if matches_search(item, needle, fields)]

    logger.debug(f"Search filter '{needle}': {len(collection)} → {len(filtered)} items")
    return ItemCollection(kind=collection.kind, items=filtered)


# ===========================
# Sorting Functions
# ===========================

def sort_key(item: Item, field_name: str) -> str:
    """Collation key: casefolded field value, missing values sort first."""
    value = item.get(field_name)
    if value is None:
        return ""
    return str(value).casefold()


def sort_items(collection: ItemCollection, field_name: str) -> ItemCollection:
    """Sort ascending by field; ties keep their original relative order."""
    ordered = sorted(collection.items, key=lambda item: sort_key(item, field_name))
    return ItemCollection(kind=collection.kind, items=ordered)


# ===========================
# Pagination Functions
# ===========================

def paginate(
    collection: ItemCollection,
    page: int = FIRST_PAGE,
    limit: int = DEFAULT_LIMIT
) -> tuple[list[Item], Pagination]:
    """Slice one page out of the collection.

    Pages below 1 (including the unset page 0) are served as page 1.
    Pages past the end return an empty slice.
    """
    page = max(FIRST_PAGE, page)
    limit = max(1, limit)
    pagination = Pagination(page=page, limit=limit, total=len(collection))

    start = pagination.offset
    return collection.items[start:start + limit], pagination


# ===========================
# Rendering Functions
# ===========================

def render_template(template: str, item: Item) -> str:
    """Render "{{ item.field }}" placeholders; unknown fields render empty."""
    def replace(match: re.Match) -> str:
        value = item.get(match.group(1))
        return "" if value is None else str(value)

    return TEMPLATE_PATTERN.sub(replace, template)


def item_to_dict(item: Item, kind: ItemKind) -> dict[str, Any]:
    """Wire format of a single picker item."""
    return {
        "id": item.id,
        "kind": item.kind,
        "text": render_template(kind.text, item),
        "info": render_template(kind.info, item),
    }
