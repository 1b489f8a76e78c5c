"""Change stream controller.

One controller serves one client connection. It owns a single watch
subscription for the life of the session and turns every change
notification into a freshly listed snapshot pushed to the sink.

States move ``INITIALIZING -> STREAMING -> CLOSED`` and never back.
While streaming, the controller waits on three sources at once: the next
watch event, the cancellation signal and the keepalive deadline.

Error handling per session:

- no client available: one error frame, no watch is opened
- watch cannot be opened: one error frame, session ends
- initial snapshot fails: one error frame, watch closed, session ends
- later snapshot fails: logged and skipped, session continues
- ERROR watch event: one error frame, session continues
- watch exhausted or cancellation: watch closed, session ends

Every collection change triggers a full re-list rather than patching the
single changed item. Cost grows with collection size.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

import anyio

from ocm_shared.models import WatchEvent
from ocm_shared.observability import get_logger

from ..clients import OCMClientError, ResourceCollection, ResourceWatchSource, WatchSubscription
from .materializer import SnapshotMaterializer
from .sse_sink import StreamSink

logger = get_logger(__name__)

CLIENT_UNAVAILABLE_MESSAGE = "Kubernetes client not initialized"
DEFAULT_WATCH_ERROR_MESSAGE = "Watch error occurred"
DEFAULT_KEEPALIVE_SECONDS = 30.0


class StreamState(str, Enum):
    """Lifecycle of a stream session."""

    INITIALIZING = "initializing"
    STREAMING = "streaming"
    CLOSED = "closed"


async def _next_event(subscription: WatchSubscription) -> WatchEvent | None:
    """Next event, or None once the subscription is exhausted."""
    try:
        return await anext(subscription)
    except StopAsyncIteration:
        return None


class ChangeStreamController:
    """Streams snapshots of one collection to one sink."""

    def __init__(
        self,
        watch_source: ResourceWatchSource | None,
        materializer: SnapshotMaterializer[Any] | None,
        collection: ResourceCollection,
        *,
        keepalive_interval: float = DEFAULT_KEEPALIVE_SECONDS,
    ):
        """Initialize the controller.

        Args:
            watch_source: Opens the session's watch; None when no client is configured
            materializer: Produces snapshots of ``collection``
            collection: The watched collection
            keepalive_interval: Seconds of silence before a ping frame is written
        """
        self._watch_source = watch_source
        self._materializer = materializer
        self._collection = collection
        self._keepalive_interval = keepalive_interval
        self.state = StreamState.INITIALIZING

    async def run(self, sink: StreamSink, cancel_event: asyncio.Event | None = None) -> None:
        """Run the session until it closes.

        Client disconnect arrives as task cancellation; ``cancel_event``
        is an additional stop signal (e.g. server shutdown). Either way the
        watch is closed exactly once before this returns.

        Args:
            sink: Receives every frame of the session
            cancel_event: Optional signal that ends the session when set
        """
        if self.state is not StreamState.INITIALIZING:
            raise RuntimeError(f"stream already {self.state.value}")

        if self._watch_source is None or self._materializer is None:
            logger.error("Stream requested without a Kubernetes client")
            self.state = StreamState.CLOSED
            await sink.write_error(CLIENT_UNAVAILABLE_MESSAGE)
            return

        try:
            subscription = await self._watch_source.open(self._collection)
        except OCMClientError as e:
            logger.warning("Failed to open watch", collection=str(self._collection), error=str(e))
            self.state = StreamState.CLOSED
            await sink.write_error(str(e))
            return

        logger.info("Stream session opened", collection=str(self._collection))
        try:
            try:
                snapshot = await self._materializer.materialize(self._collection)
            except OCMClientError as e:
                logger.warning(
                    "Initial snapshot failed", collection=str(self._collection), error=str(e)
                )
                await sink.write_error(str(e))
                return

            await sink.write_snapshot(snapshot)
            self.state = StreamState.STREAMING
            await self._stream(subscription, sink, cancel_event)
        finally:
            self.state = StreamState.CLOSED
            # A disconnecting client cancels the enclosing task group;
            # the watch must still be released.
            with anyio.CancelScope(shield=True):
                await subscription.close()
            logger.info("Stream session closed", collection=str(self._collection))

    async def _stream(
        self,
        subscription: WatchSubscription,
        sink: StreamSink,
        cancel_event: asyncio.Event | None,
    ) -> None:
        loop = asyncio.get_running_loop()
        cancelled = asyncio.ensure_future(cancel_event.wait()) if cancel_event else None
        pending_event: asyncio.Future[WatchEvent | None] | None = None
        last_write = loop.time()

        try:
            while True:
                if pending_event is None:
                    pending_event = asyncio.ensure_future(_next_event(subscription))
                waiters: set[asyncio.Future[Any]] = {pending_event}
                if cancelled is not None:
                    waiters.add(cancelled)

                timeout = max(0.0, last_write + self._keepalive_interval - loop.time())
                done, _ = await asyncio.wait(
                    waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
                )

                if cancelled is not None and cancelled in done:
                    logger.info("Stream cancelled", collection=str(self._collection))
                    return

                if pending_event in done:
                    event = pending_event.result()
                    pending_event = None
                    if event is None:
                        logger.info("Watch channel closed", collection=str(self._collection))
                        return
                    if await self._handle_event(event, sink):
                        last_write = loop.time()
                    continue

                await sink.write_keepalive()
                last_write = loop.time()
        finally:
            for waiter in (pending_event, cancelled):
                if waiter is not None and not waiter.done():
                    waiter.cancel()

    async def _handle_event(self, event: WatchEvent, sink: StreamSink) -> bool:
        """React to one watch event. Returns True if a frame was written."""
        if not event.type.is_change:
            logger.warning(
                "Watch reported an error",
                collection=str(self._collection),
                message=event.message,
            )
            await sink.write_error(event.message or DEFAULT_WATCH_ERROR_MESSAGE)
            return True

        try:
            snapshot = await self._materializer.materialize(self._collection)
        except OCMClientError as e:
            logger.warning(
                "Skipping snapshot after watch event",
                collection=str(self._collection),
                event_type=event.type.value,
                error=str(e),
            )
            return False

        await sink.write_snapshot(snapshot)
        return True
