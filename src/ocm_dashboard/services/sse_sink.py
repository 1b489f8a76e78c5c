"""Server-Sent Events output for change streams.

Frames on the wire:

    event: <name>\\ndata: <JSON array>\\n\\n    snapshot
    event: error\\ndata: <message>\\n\\n       error
    : ping\\n\\n                              keepalive
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence

from anyio.streams.memory import MemoryObjectSendStream
from sse_starlette.sse import ServerSentEvent

from ocm_shared.models import DashboardBaseModel

ERROR_EVENT = "error"
KEEPALIVE_COMMENT = "ping"
LINE_SEPARATOR = "\n"


class StreamSink(ABC):
    """Destination of one stream session's frames."""

    @abstractmethod
    async def write_snapshot(self, items: Sequence[DashboardBaseModel]) -> None:
        pass

    @abstractmethod
    async def write_error(self, message: str) -> None:
        pass

    @abstractmethod
    async def write_keepalive(self) -> None:
        pass


def snapshot_event(event_name: str, items: Sequence[DashboardBaseModel]) -> ServerSentEvent:
    payload = json.dumps([item.to_api() for item in items], separators=(",", ":"))
    return ServerSentEvent(data=payload, event=event_name, sep=LINE_SEPARATOR)


def error_event(message: str) -> ServerSentEvent:
    return ServerSentEvent(data=message, event=ERROR_EVENT, sep=LINE_SEPARATOR)


def keepalive_event() -> ServerSentEvent:
    return ServerSentEvent(comment=KEEPALIVE_COMMENT, sep=LINE_SEPARATOR)


class SSESink(StreamSink):
    """Sends frames into the channel an ``EventSourceResponse`` drains.

    The channel is expected to be unbuffered, so each write returns once
    the response has taken the frame. The response writes every frame to
    the connection as its own body chunk; nothing is coalesced.
    """

    def __init__(self, send_stream: MemoryObjectSendStream[ServerSentEvent], event_name: str):
        self._send_stream = send_stream
        self._event_name = event_name

    async def write_snapshot(self, items: Sequence[DashboardBaseModel]) -> None:
        await self._send_stream.send(snapshot_event(self._event_name, items))

    async def write_error(self, message: str) -> None:
        await self._send_stream.send(error_event(message))

    async def write_keepalive(self) -> None:
        await self._send_stream.send(keepalive_event())
