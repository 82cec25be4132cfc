"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from snowadapter.adapter import AdapterProperties, ServiceNowAdapter
from snowadapter.api.dependencies import (
    close_adapter,
    close_event_manager,
    init_adapter,
    init_event_manager,
)
from snowadapter.api.exceptions import EmptyResultError
from snowadapter.api.models import APIResponse
from snowadapter.api.routes import events, health, records
from snowadapter.config import load_properties_from_env
from snowadapter.connector import ConnectorError, InstanceHibernatingError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    event_manager = init_event_manager()
    adapter = app.state.adapter
    if adapter is None:
        properties = app.state.properties or load_properties_from_env()
        adapter = ServiceNowAdapter(app.state.adapter_id, properties)
    adapter.event_manager = event_manager
    init_adapter(adapter)
    adapter.connect()

    yield

    close_adapter()
    close_event_manager()


def register_exception_handlers(app: FastAPI) -> None:
    """Map connector and adapter failures onto API responses."""

    @app.exception_handler(InstanceHibernatingError)
    async def hibernating_handler(
        _request: Request, exc: InstanceHibernatingError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(ConnectorError)
    async def connector_error_handler(_request: Request, exc: ConnectorError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(EmptyResultError)
    async def empty_result_handler(_request: Request, exc: EmptyResultError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )


def create_app(
    properties: AdapterProperties | None = None,
    adapter_id: str = "servicenow",
    adapter: ServiceNowAdapter | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        properties: Adapter properties. Read from SERVICENOW_* variables at
            startup when omitted.
        adapter_id: ID sent with the adapter's status events
        adapter: Ready-made adapter to serve instead of building one
    """
    app = FastAPI(
        title="snowadapter API",
        description="ServiceNow change request adapter",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.properties = properties
    app.state.adapter_id = adapter_id
    app.state.adapter = adapter

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(records.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
