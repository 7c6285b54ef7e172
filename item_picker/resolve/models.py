"""ABOUTME: Data classes shared by the item resolution pipeline.

Defines items, item kinds, homogeneous item collections, resolution contexts
and the page/pagination result returned by the backend.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union


@dataclass(frozen=True)
class Item:
    """A uniquely identified entity eligible for selection.

    Attributes:
        id: Stable identifier, unique within its kind
        kind: Kind name (e.g., "user", "page", "file")
        parent: Id of the owning entity, if any (e.g., the page a file belongs to)
        fields: Opaque payload (username, title, filename, ...)
    """
    id: str
    kind: str
    parent: Optional[str] = None
    fields: dict = field(default_factory=dict, compare=False, hash=False)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a field, treating "id" and "parent" as fields too."""
        if name == "id":
            return self.id
        if name == "parent":
            return self.parent
        return self.fields.get(name, default)


@dataclass(frozen=True)
class ItemKind:
    """Describes one kind of pickable item.

    Attributes:
        name: Kind name used in contexts and parent references ("user")
        collection: Collection name used in queries ("users")
        sort_field: Field the picker sorts by, ascending
        search_fields: Fields matched against the search term
        text: Template rendered as the item's display text
        info: Template rendered as the item's secondary line
        fallback_query: Default query when the context is not of this kind
    """
    name: str
    collection: str
    sort_field: str
    search_fields: tuple[str, ...]
    text: str = "{{ item.id }}"
    info: str = ""
    fallback_query: Optional[str] = None

    @property
    def default_fallback_query(self) -> str:
        return self.fallback_query or f"site.{self.collection}"


@dataclass
class ItemCollection:
    """Homogeneous, ordered collection of items of a single kind."""
    kind: str
    items: list[Item] = field(default_factory=list)

    def __post_init__(self):
        for item in self.items:
            if item.kind != self.kind:
                raise ValueError(
                    f"Collection of kind '{self.kind}' cannot hold item '{item.id}' of kind '{item.kind}'"
                )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def ids(self) -> list[str]:
        return [item.id for item in self.items]


@dataclass(frozen=True)
class SiteContext:
    """Global scope: queries see every collection."""
    kind: str = "site"


@dataclass(frozen=True)
class EntityContext:
    """Scope of a single entity (e.g., the user or page the picker belongs to)."""
    item: Item

    @property
    def kind(self) -> str:
        return self.item.kind


Context = Union[SiteContext, EntityContext]


@dataclass
class Pagination:
    """Pagination info for one resolved page.

    Attributes:
        page: 1-based page number actually served
        limit: Page size
        total: Number of items after filtering, before slicing
    """
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        """Number of pages available (at least 1, even when empty)."""
        if self.total <= 0:
            return 1
        return math.ceil(self.total / self.limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "pages": self.pages,
        }


@dataclass
class PickerPage:
    """One page of resolved items plus its pagination info."""
    items: list[Item]
    pagination: Pagination
    kind: Optional[str] = None
    query: Optional[str] = None
    search: Optional[str] = None
