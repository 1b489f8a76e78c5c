"""Test doubles and fixtures for the dashboard service."""

import asyncio
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sse_starlette.sse import AppStatus

from ocm_dashboard.clients import (
    BaseOCMClient,
    ResourceCollection,
    ResourceNotFoundError,
    ResourceWatchSource,
    WatchSubscription,
)
from ocm_shared.config import DashboardSettings, Settings, StreamingSettings
from ocm_shared.models import WatchEvent

_END = object()


class FakeSubscription(WatchSubscription):
    """Watch subscription fed by the test.

    Events queued up front are delivered in order. Unless ``hold_open`` is
    set the subscription is exhausted after them.
    """

    def __init__(self, events: list[WatchEvent] | None = None, hold_open: bool = False):
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        for event in events or []:
            self._queue.put_nowait(event)
        if not hold_open:
            self._queue.put_nowait(_END)
        self.close_calls = 0
        self.released = False

    def push(self, event: WatchEvent) -> None:
        self._queue.put_nowait(event)

    def end(self) -> None:
        self._queue.put_nowait(_END)

    async def __anext__(self) -> WatchEvent:
        item = await self._queue.get()
        if item is _END:
            self._queue.put_nowait(_END)
            raise StopAsyncIteration
        return item

    async def close(self) -> None:
        self.close_calls += 1
        await asyncio.sleep(0)
        self.released = True


class FakeWatchSource(ResourceWatchSource):
    def __init__(self, subscription: FakeSubscription | None = None, error: Exception | None = None):
        self.subscription = subscription or FakeSubscription()
        self.error = error
        self.open_calls: list[ResourceCollection] = []

    async def open(self, collection: ResourceCollection) -> WatchSubscription:
        self.open_calls.append(collection)
        if self.error is not None:
            raise self.error
        return self.subscription


class FakeOCMClient(BaseOCMClient):
    """In-memory client keyed by collection plural.

    ``list_errors`` is consumed one entry per list call; an exception entry
    is raised, None lets the call succeed.
    """

    def __init__(self, items: dict[str, list[Any]] | None = None):
        self.items: dict[str, list[Any]] = items or {}
        self.list_errors: list[Exception | None] = []
        self.list_calls: list[tuple[ResourceCollection, str | None]] = []
        self.tokens: dict[str, str] = {}
        self.review_error: Exception | None = None
        self.source = FakeWatchSource()
        self.closed = False

    @property
    def watch_source(self) -> ResourceWatchSource:
        return self.source

    async def list(
        self,
        collection: ResourceCollection,
        label_selector: str | None = None,
    ) -> list[Any]:
        self.list_calls.append((collection, label_selector))
        if self.list_errors:
            error = self.list_errors.pop(0)
            if error is not None:
                raise error
        items = self.items.get(collection.plural, [])
        if collection.namespace:
            items = [
                i for i in items
                if isinstance(i, dict) and i.get("metadata", {}).get("namespace") == collection.namespace
            ]
        return list(items)

    async def get(self, collection: ResourceCollection, name: str) -> dict[str, Any]:
        for item in await self.list(collection):
            if isinstance(item, dict) and item.get("metadata", {}).get("name") == name:
                return item
        raise ResourceNotFoundError(collection.kind, name)

    async def review_token(self, token: str) -> str | None:
        if self.review_error is not None:
            raise self.review_error
        return self.tokens.get(token)

    async def close(self) -> None:
        self.closed = True


class RecordingSink:
    """Records frames as ``(kind, payload)`` tuples."""

    def __init__(self, on_write: Callable[[str, Any], None] | None = None):
        self.frames: list[tuple[str, Any]] = []
        self._on_write = on_write

    def _record(self, kind: str, payload: Any) -> None:
        self.frames.append((kind, payload))
        if self._on_write is not None:
            self._on_write(kind, payload)

    async def write_snapshot(self, items) -> None:
        self._record("snapshot", list(items))

    async def write_error(self, message: str) -> None:
        self._record("error", message)

    async def write_keepalive(self) -> None:
        self._record("keepalive", None)

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.frames]


@pytest.fixture(autouse=True)
def reset_sse_app_status():
    """sse_starlette keeps a process-wide exit event bound to the first loop."""
    AppStatus.should_exit_event = None
    yield
    AppStatus.should_exit_event = None


@pytest.fixture
def fake_client() -> FakeOCMClient:
    return FakeOCMClient()


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def dashboard_settings() -> Settings:
    return Settings(
        dashboard=DashboardSettings(bypass_auth=True),
        streaming=StreamingSettings(keepalive_seconds=30, cluster_event_name="clusters"),
    )


@pytest.fixture
def dashboard_app(dashboard_settings, fake_client):
    from ocm_dashboard.main import create_app

    app = create_app(dashboard_settings)
    app.state.ocm_client = fake_client
    return app


@pytest_asyncio.fixture
async def api_client(dashboard_app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app without running its lifespan."""
    transport = ASGITransport(app=dashboard_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_subscription():
    return FakeSubscription


@pytest.fixture
def make_watch_source():
    return FakeWatchSource


@pytest.fixture
def make_sink():
    return RecordingSink
