"""Services for the OCM dashboard."""

from .materializer import SnapshotMaterializer, convert_items
from .sse_sink import SSESink, StreamSink, error_event, keepalive_event, snapshot_event
from .stream_controller import (
    CLIENT_UNAVAILABLE_MESSAGE,
    DEFAULT_WATCH_ERROR_MESSAGE,
    ChangeStreamController,
    StreamState,
)

__all__ = [
    "SnapshotMaterializer",
    "convert_items",
    "StreamSink",
    "SSESink",
    "snapshot_event",
    "error_event",
    "keepalive_event",
    "ChangeStreamController",
    "StreamState",
    "CLIENT_UNAVAILABLE_MESSAGE",
    "DEFAULT_WATCH_ERROR_MESSAGE",
]
