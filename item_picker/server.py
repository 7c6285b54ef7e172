"""ABOUTME: Item picker FastAPI service.

Provides the REST endpoint the picker dialog talks to:

    GET /pickers/{kind}?page=&limit=&search=&query=&parent=

Each request resolves the query in the parent's context, filters by the search
term, sorts and returns one page as {"data": [...], "pagination": {...}}.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import PickerSettings
from .error_handling import (
    PickerError,
    create_picker_error,
    create_validation_error,
    status_code_for,
)
from .resolve import ItemStore, create_store, get_picker_backend, load_store
from .resolve.factory import BUILTIN_KINDS
from .service_base import PickerServiceBase
from .validation import UNSET_PAGE, validate_parent_reference, validate_search_term


class PickerItemModel(BaseModel):
    """A single item as shown in the picker."""
    id: str
    kind: str
    text: str
    info: str = ""


class PaginationModel(BaseModel):
    """Pagination info for the returned page."""
    page: int
    limit: int
    total: int
    pages: int


class PickerResponse(BaseModel):
    """Response model for picker requests."""
    data: list[PickerItemModel]
    pagination: PaginationModel


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Load the item store unless one was injected.
    """
    service: PickerServiceBase = app.state.service
    logger = service.get_logger()

    if app.state.store is None:
        data_file = service.settings.data_file
        if data_file:
            app.state.store = load_store(data_file, BUILTIN_KINDS)
        else:
            logger.warning("PICKER_DATA_FILE not set, serving an empty item store")
            app.state.store = create_store()

    yield

    logger.info("Shutting down item picker service")


def create_app(
    store: Optional[ItemStore] = None,
    settings: Optional[PickerSettings] = None
) -> FastAPI:
    """Build the picker service.

    Args:
        store: Item store to serve; loaded from settings.data_file on startup when omitted
        settings: Service settings; read from the environment when omitted
    """
    service = PickerServiceBase(
        "item-picker",
        settings,
        description="Search, sort and paginate items for picker dialogs",
        version="1.0.0",
        lifespan=lifespan,
    )
    settings = service.settings
    app = service.get_app()
    app.state.service = service
    app.state.store = store

    @app.exception_handler(PickerError)
    async def handle_picker_error(request: Request, exc: PickerError) -> JSONResponse:
        service.log_request_error(
            "pick",
            exc.code,
            exc.message,
            path=request.url.path,
            query=request.url.query,
        )
        return JSONResponse(status_code=status_code_for(exc), content=create_picker_error(exc))

    @app.get("/pickers/{kind}", response_model=PickerResponse)
    async def pick(
        kind: str,
        page: int = Query(default=UNSET_PAGE, ge=UNSET_PAGE),
        limit: Optional[int] = Query(default=None, ge=1, le=settings.max_limit),
        search: Optional[str] = Query(default=None),
        query: Optional[str] = Query(default=None),
        parent: Optional[str] = Query(default=None),
    ):
        """
        Resolve one page of items for a picker.

        Steps:
        1. Evaluate the query (or the default for the parent's context)
        2. Filter by the search term
        3. Sort by the kind's sort field
        4. Slice the requested page
        """
        service.log_request_start("pick", kind=kind, page=page, limit=limit, search=search, parent=parent)

        is_valid, error = validate_search_term(search)
        if not is_valid:
            return JSONResponse(
                status_code=422,
                content=create_validation_error("search", error),
            )

        if parent:
            is_valid, error = validate_parent_reference(parent)
            if not is_valid:
                return JSONResponse(
                    status_code=422,
                    content=create_validation_error("parent", error, parent),
                )

        backend = get_picker_backend(kind, app.state.store)
        response = backend.fetch(
            parent=parent,
            query=query,
            search=search,
            page=page,
            limit=limit or settings.default_limit,
        )

        service.log_request_complete(
            "pick",
            items=len(response["data"]),
            total=response["pagination"]["total"],
        )
        return response

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        store = app.state.store
        return {
            "status": "healthy",
            "service": service.service_name,
            "store_ready": store is not None,
            "kinds": [kind.name for kind in store.kinds] if store is not None else [],
        }

    return app
