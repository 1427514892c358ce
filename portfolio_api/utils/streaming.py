"""
Server-sent-event helpers for live collection queries.
"""
import json
import logging
from typing import Any, AsyncIterator, Callable

from fastapi import Request
from fastapi.responses import StreamingResponse

logger = logging.getLogger(__name__)


def format_event(payload: Any, event: str = "snapshot") -> str:
    """Encode one SSE frame."""
    return f"event: {event}\ndata: {json.dumps(payload, separators=(',', ':'))}\n\n"


def snapshot_stream(
    request: Request,
    snapshots: AsyncIterator[Any],
    render: Callable[[Any], Any],
) -> StreamingResponse:
    """
    Relay a live subscription to the client as ``text/event-stream``.

    The subscription is closed as soon as the client goes away.
    """

    async def _events() -> AsyncIterator[str]:
        try:
            async for snapshot in snapshots:
                if await request.is_disconnected():
                    break
                yield format_event(render(snapshot))
        finally:
            await snapshots.aclose()
            logger.debug("Event stream for %s closed", request.url.path)

    return StreamingResponse(
        _events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
