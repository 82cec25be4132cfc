"""Adapter status stream over Server-Sent Events (SSE)."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from snowadapter.adapter.models import AdapterStatus
from snowadapter.api.dependencies import AdapterDep, get_event_manager

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from snowadapter.events import EventManager

EventManagerDep = Annotated["EventManager", Depends(get_event_manager)]

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/stream")
async def event_stream(
    adapter: AdapterDep,
    event_manager: EventManagerDep,
    status: Annotated[
        list[AdapterStatus] | None,
        Query(description="Only stream these statuses (repeatable)"),
    ] = None,
) -> StreamingResponse:
    """Stream the adapter's ONLINE/OFFLINE transitions.

    The adapter's last known status is sent first, so a new client does not
    wait for the next healthcheck. A heartbeat is sent whenever no status
    event arrived for 30 seconds.
    """
    em: EventManager = event_manager
    subscriber = em.subscribe(adapter.id, statuses=status)
    if adapter.status is not None:
        current = em.create_status_event(adapter.status.value, adapter.id)
        if subscriber.wants(current):
            subscriber.queue.put_nowait(current)

    async def generate() -> AsyncGenerator[str, None]:
        try:
            while True:
                try:
                    event = await asyncio.wait_for(
                        subscriber.queue.get(),
                        timeout=em._heartbeat_interval,
                    )
                    yield event.to_sse()
                except TimeoutError:
                    yield em.create_heartbeat_event().to_sse()
        finally:
            em.unsubscribe(subscriber.id)

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
