"""Server-Sent Events change stream of managed clusters.

Each connection gets its own controller and its own watch. The controller
writes into an unbuffered channel drained by the SSE response, so every
frame reaches the connection before the controller continues.
"""

from __future__ import annotations

import anyio
from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from ocm_shared.config import Settings
from ocm_shared.observability import get_logger

from ..clients import MANAGED_CLUSTERS
from ..converters import convert_cluster
from ..services import ChangeStreamController, SnapshotMaterializer, SSESink

logger = get_logger(__name__)

router = APIRouter()

# The controller writes its own keepalives; push the built-in ping out of the way.
BUILTIN_PING_SECONDS = 24 * 60 * 60


@router.get("/stream/clusters", summary="Stream managed cluster snapshots")
async def stream_clusters(request: Request) -> EventSourceResponse:
    settings: Settings = request.app.state.settings
    client = request.app.state.ocm_client

    controller = ChangeStreamController(
        client.watch_source if client is not None else None,
        SnapshotMaterializer(client, convert_cluster) if client is not None else None,
        MANAGED_CLUSTERS,
        keepalive_interval=settings.streaming.keepalive_seconds,
    )
    send_stream, receive_stream = anyio.create_memory_object_stream(0)
    sink = SSESink(send_stream, settings.streaming.cluster_event_name)
    shutdown_event = request.app.state.shutdown_event

    async def produce() -> None:
        async with send_stream:
            try:
                await controller.run(sink, shutdown_event)
            except (anyio.BrokenResourceError, anyio.ClosedResourceError):
                logger.info("Stream client went away")

    logger.info("Cluster stream requested", client=request.client.host if request.client else None)
    return EventSourceResponse(
        receive_stream,
        data_sender_callable=produce,
        headers={"Cache-Control": "no-cache"},
        ping=BUILTIN_PING_SECONDS,
    )
