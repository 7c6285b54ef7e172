"""ABOUTME: Picker dialog state - pagination, search, fetch results and the selection set.

The SelectionController owns everything a picker dialog needs between open()
and submit(): the current page of items, the pagination cursor, the search
query, the last fetch issue and the id-keyed selection. Fetching goes through
an injected fetcher (PickerClient over HTTP, BackendFetcher in-process);
errors are reported through an injected reporter and never raised.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .client import Fetcher
from .validation import (
    DEFAULT_LIMIT,
    FIRST_PAGE,
    UNSET_PAGE,
    validate_max_selection_field,
    validate_page_field,
    validate_parent_field,
)

logger = logging.getLogger(__name__)


def item_id_of(item: Any) -> str:
    """Id of a picker item given as a mapping or as an object with .id."""
    if isinstance(item, Mapping):
        return item["id"]
    return item.id


# ============================================================================
# Options and pagination
# ============================================================================

class PickerOptions(BaseModel):
    """Picker configuration. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    endpoint: Optional[str] = Field(default=None, description="Picker endpoint the items are fetched from")
    max: Optional[int] = Field(default=None, description="Upper bound on the selection size")
    multiple: bool = Field(default=True, description="Allow selecting more than one item")
    parent: Optional[str] = Field(default=None, description="Context entity as '<kind>/<id>'")
    selected: list[str] = Field(default_factory=list, description="Ids to preselect")

    @field_validator("max")
    @classmethod
    def validate_max(cls, v: Optional[int]) -> Optional[int]:
        return validate_max_selection_field(v)

    @field_validator("parent")
    @classmethod
    def validate_parent(cls, v: Optional[str]) -> Optional[str]:
        return validate_parent_field(v)

    @property
    def single(self) -> bool:
        """True when at most one item can be selected."""
        return self.multiple is False or self.max == 1

    def merge(self, other: Union["PickerOptions", Mapping, None]) -> "PickerOptions":
        """Return a copy with other's explicitly set fields applied on top."""
        if other is None:
            return self.model_copy(deep=True)
        if not isinstance(other, PickerOptions):
            other = PickerOptions.model_validate(dict(other))
        return self.model_copy(update=other.model_dump(exclude_unset=True), deep=True)


class PaginationState(BaseModel):
    """Pagination cursor. Page 0 means "unset, the server picks the first page"."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=FIRST_PAGE)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    total: int = Field(default=0, ge=0)

    @field_validator("page")
    @classmethod
    def validate_page(cls, v: int) -> int:
        return validate_page_field(v)

    @property
    def pages(self) -> int:
        if self.total <= 0:
            return 1
        return -(-self.total // self.limit)


# ============================================================================
# Selection set
# ============================================================================

class SelectionSet:
    """Id-keyed set of selected items, iterated in insertion order."""

    def __init__(self):
        self._items: dict[str, Any] = {}

    @classmethod
    def seeded(cls, ids: Iterable[str]) -> "SelectionSet":
        """Selection holding a minimal {"id": id} entry per id."""
        selection = cls()
        for item_id in ids:
            selection.insert(item_id, {"id": item_id})
        return selection

    def insert(self, item_id: str, item: Any) -> None:
        if item_id_of(item) != item_id:
            raise ValueError(f"Selection key '{item_id}' does not match item id '{item_id_of(item)}'")
        self._items[item_id] = item

    def remove(self, item_id: str) -> Optional[Any]:
        return self._items.pop(item_id, None)

    def clear(self) -> None:
        self._items.clear()

    def get(self, item_id: str) -> Optional[Any]:
        return self._items.get(item_id)

    def refresh(self, items: Iterable[Any]) -> None:
        """Replace entries with fuller data for ids that are already selected."""
        for item in items:
            item_id = item_id_of(item)
            if item_id in self._items:
                self._items[item_id] = item

    def ids(self) -> list[str]:
        return list(self._items)

    def values(self) -> list[Any]:
        return list(self._items.values())

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)


# ============================================================================
# Collaborators
# ============================================================================

class ErrorReporter(Protocol):
    def report(self, error: BaseException, fatal: bool = True) -> None:
        ...


class LoggingErrorReporter:
    """Reports picker errors to the log."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.logger = log or logger

    def report(self, error: BaseException, fatal: bool = True) -> None:
        if fatal:
            self.logger.error(f"Picker error: {error}", exc_info=error)
        else:
            self.logger.warning(f"Picker error: {error}")


class Dialog(Protocol):
    def open(self) -> None:
        ...

    def close(self) -> None:
        ...


class HeadlessDialog:
    """Dialog stand-in that only remembers whether it is open."""

    def __init__(self):
        self.is_open = False

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False


@dataclass(frozen=True)
class ToggleButtonState:
    """How the select/deselect button of an item should look.

    title is a translation key, not display text.
    """
    selected: bool
    icon: str
    title: str
    theme: Optional[str] = None


# ============================================================================
# Controller
# ============================================================================

class SelectionController:
    """State machine behind a picker dialog."""

    def __init__(
        self,
        fetcher: Fetcher,
        reporter: Optional[ErrorReporter] = None,
        dialog: Optional[Dialog] = None,
        fetch_params: Optional[dict] = None,
        on_fetched: Optional[Callable[[dict], None]] = None
    ):
        """
        Initialize the controller.

        Args:
            fetcher: Capability used to fetch picker pages
            reporter: Receives fetch errors (logged by default)
            dialog: Dialog chrome opened by open() and closed by submit()
            fetch_params: Extra static parameters sent with every fetch
            on_fetched: Called with the raw response after each successful fetch
        """
        self.fetcher = fetcher
        self.reporter = reporter or LoggingErrorReporter()
        self.dialog = dialog or HeadlessDialog()
        self.fetch_params = dict(fetch_params or {})
        self.on_fetched = on_fetched

        self.models: list[Any] = []
        self.issue: Optional[str] = None
        self.query: str = ""
        self.options = PickerOptions()
        self.selected = SelectionSet()
        self.pagination = PaginationState()

        self._fetch_sequence = 0
        self._submit_listeners: list[Callable[[list], None]] = []

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def item(self, model: Any) -> Any:
        """Map a raw model to the item shown in the list. Identity by default."""
        return model

    @property
    def items(self) -> list[Any]:
        return [self.item(model) for model in self.models]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(
        self,
        items_or_options: Union[list, tuple, PickerOptions, Mapping, None] = None,
        options: Union[PickerOptions, Mapping, None] = None
    ) -> None:
        """Reset the dialog state and show the dialog.

        A list of items is adopted as the current page without fetching;
        anything else is treated as the options and triggers a fetch.
        """
        self.pagination.page = UNSET_PAGE
        self.query = ""
        self.issue = None
        # Results of fetches started before this open belong to the previous dialog.
        self._fetch_sequence += 1

        fetch = True
        if isinstance(items_or_options, (list, tuple)):
            self.models = list(items_or_options)
            fetch = False
        else:
            self.models = []
            options = items_or_options

        self.options = self.options.merge(options)
        self.selected = SelectionSet.seeded(self.options.selected)

        logger.debug(
            f"Opening picker: endpoint={self.options.endpoint}, fetch={fetch}, "
            f"preselected={len(self.selected)}"
        )

        if fetch:
            await self.fetch()

        self.dialog.open()

    def on_submit(self, listener: Callable[[list], None]) -> None:
        """Register a listener for the submitted selection."""
        self._submit_listeners.append(listener)

    def submit(self) -> list[Any]:
        """Emit the selected items in selection order and close the dialog."""
        values = self.selected.values()
        for listener in self._submit_listeners:
            listener(values)
        self.dialog.close()
        return values

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _request_params(self) -> dict:
        params = {
            "page": self.pagination.page,
            "limit": self.pagination.limit,
            "search": self.query,
        }
        if self.options.parent:
            params["parent"] = self.options.parent
        params.update(self.fetch_params)
        return params

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._fetch_sequence:
            logger.debug(f"Discarding result of superseded fetch #{sequence}")
            return True
        return False

    async def fetch(self) -> None:
        """Fetch the current page. Failures end up in self.issue, never raised."""
        self._fetch_sequence += 1
        sequence = self._fetch_sequence

        try:
            response = await self.fetcher.get(self.options.endpoint, self._request_params())
            if self._is_stale(sequence):
                return

            self.models = list(response["data"])
            self.pagination = PaginationState.model_validate(response["pagination"])
            self.issue = None
            self.selected.refresh(self.models)

            if self.on_fetched is not None:
                self.on_fetched(response)

        except Exception as e:
            if self._is_stale(sequence):
                return
            self.reporter.report(e, fatal=False)
            self.models = []
            self.issue = getattr(e, "message", None) or str(e)

    async def search(self, query: Optional[str] = None) -> None:
        """Restart from the first page for the (optionally new) search query."""
        if query is not None:
            self.query = query
        self.pagination.page = UNSET_PAGE
        await self.fetch()

    async def paginate(self, pagination: Union[PaginationState, Mapping]) -> None:
        """Move to another page; changing the page size restarts at page 1."""
        if isinstance(pagination, PaginationState):
            pagination = pagination.model_dump()

        limit = pagination.get("limit", self.pagination.limit)
        page = pagination.get("page", self.pagination.page)
        if limit != self.pagination.limit:
            page = FIRST_PAGE

        self.pagination.page = page
        self.pagination.limit = limit
        await self.fetch()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def is_selected(self, item: Any) -> bool:
        return item_id_of(item) in self.selected

    def toggle(self, item: Any) -> None:
        """Select or deselect an item.

        Single-select pickers drop the previous selection first. Selecting
        past the max bound is ignored.
        """
        if self.options.single:
            self.selected.clear()

        item_id = item_id_of(item)

        if item_id in self.selected:
            self.selected.remove(item_id)
            return

        if self.options.max is not None and len(self.selected) >= self.options.max:
            logger.debug(f"Selection limit of {self.options.max} reached, ignoring {item_id}")
            return

        self.selected.insert(item_id, item)

    def toggle_button_state(self, item: Any) -> ToggleButtonState:
        if self.is_selected(item):
            multi = self.options.multiple is True and self.options.max != 1
            return ToggleButtonState(
                selected=True,
                icon="check" if multi else "circle-filled",
                title="remove",
                theme="info",
            )
        return ToggleButtonState(selected=False, icon="circle-outline", title="select")
