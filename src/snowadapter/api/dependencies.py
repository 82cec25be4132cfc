"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from snowadapter.adapter import ServiceNowAdapter

if TYPE_CHECKING:
    from snowadapter.events import EventManager

# Global adapter instance (initialized on app startup)
_adapter: ServiceNowAdapter | None = None


def init_adapter(adapter: ServiceNowAdapter) -> ServiceNowAdapter:
    """Initialize the global ServiceNowAdapter instance."""
    global _adapter  # noqa: PLW0603
    _adapter = adapter
    return _adapter


def close_adapter() -> None:
    """Close the global ServiceNowAdapter instance."""
    global _adapter  # noqa: PLW0603
    if _adapter is not None:
        _adapter.close()
        _adapter = None


def get_adapter() -> Generator[ServiceNowAdapter, None, None]:
    """Dependency that provides the ServiceNowAdapter instance."""
    if _adapter is None:
        raise RuntimeError("Adapter not initialized. Call init_adapter() first.")
    yield _adapter


# Type alias for dependency injection
AdapterDep = Annotated[ServiceNowAdapter, Depends(get_adapter)]

# Global EventManager instance
_event_manager: EventManager | None = None


def init_event_manager() -> EventManager:
    """Initialize the global EventManager instance."""
    from snowadapter.events import EventManager as EM  # noqa: PLC0415

    global _event_manager  # noqa: PLW0603
    _event_manager = EM()
    return _event_manager


def close_event_manager() -> None:
    """Drop the global EventManager instance."""
    global _event_manager  # noqa: PLW0603
    _event_manager = None


def get_event_manager() -> Generator[EventManager, None, None]:
    """Dependency that provides the EventManager instance."""
    if _event_manager is None:
        raise RuntimeError("EventManager not initialized. Call init_event_manager() first.")
    yield _event_manager
