"""Unit tests for the change stream controller."""

import asyncio

import anyio
import pytest

from ocm_dashboard.clients import MANAGED_CLUSTERS, OCMClientError, WatchOpenError
from ocm_dashboard.converters import convert_cluster
from ocm_dashboard.services import (
    CLIENT_UNAVAILABLE_MESSAGE,
    ChangeStreamController,
    SnapshotMaterializer,
    StreamState,
)
from ocm_shared.models import ClusterStatus, WatchEvent, WatchEventType

MODIFIED = WatchEvent(type=WatchEventType.MODIFIED)
ADDED = WatchEvent(type=WatchEventType.ADDED)
DELETED = WatchEvent(type=WatchEventType.DELETED)


@pytest.fixture
def controller_factory(fake_client):
    def build(source, keepalive_interval: float = 30.0) -> ChangeStreamController:
        return ChangeStreamController(
            source,
            SnapshotMaterializer(fake_client, convert_cluster),
            MANAGED_CLUSTERS,
            keepalive_interval=keepalive_interval,
        )

    return build


class TestSnapshots:
    """Test snapshot frames."""

    async def test_initial_snapshot_then_one_per_change(
        self, fake_client, online_cluster, make_subscription, make_watch_source, controller_factory, recording_sink
    ) -> None:
        fake_client.items["managedclusters"] = [online_cluster]
        subscription = make_subscription([MODIFIED, ADDED, DELETED])
        controller = controller_factory(make_watch_source(subscription))

        await controller.run(recording_sink)

        assert recording_sink.kinds() == ["snapshot"] * 4
        assert subscription.close_calls == 1
        assert controller.state == StreamState.CLOSED

    async def test_snapshot_reflects_current_state(
        self,
        fake_client,
        online_cluster,
        offline_cluster,
        make_subscription,
        make_watch_source,
        make_sink,
        controller_factory,
    ) -> None:
        """Test a change event produces a freshly listed snapshot."""
        fake_client.items["managedclusters"] = [online_cluster]
        subscription = make_subscription(hold_open=True)

        def on_write(kind, payload):
            if len(sink.frames) == 1:
                fake_client.items["managedclusters"] = [online_cluster, offline_cluster]
                subscription.push(ADDED)
                subscription.end()

        sink = make_sink(on_write)
        await controller_factory(make_watch_source(subscription)).run(sink)

        first, second = sink.frames
        assert [c.name for c in first[1]] == ["cluster-east"]
        assert [(c.name, c.status) for c in second[1]] == [
            ("cluster-east", ClusterStatus.ONLINE),
            ("cluster-west", ClusterStatus.OFFLINE),
        ]

    async def test_watch_opened_once_per_session(
        self, make_subscription, make_watch_source, controller_factory, recording_sink
    ) -> None:
        source = make_watch_source(make_subscription([MODIFIED, MODIFIED]))
        await controller_factory(source).run(recording_sink)
        assert source.open_calls == [MANAGED_CLUSTERS]

    async def test_controller_cannot_be_reused(
        self, make_watch_source, controller_factory, recording_sink
    ) -> None:
        controller = controller_factory(make_watch_source())
        await controller.run(recording_sink)
        with pytest.raises(RuntimeError):
            await controller.run(recording_sink)


class TestErrors:
    """Test error frames and failure handling."""

    async def test_no_client(self, recording_sink) -> None:
        """Test a session without a client writes one error and opens nothing."""
        controller = ChangeStreamController(None, None, MANAGED_CLUSTERS)
        await controller.run(recording_sink)
        assert recording_sink.frames == [("error", CLIENT_UNAVAILABLE_MESSAGE)]
        assert controller.state == StreamState.CLOSED

    async def test_no_materializer_opens_nothing(self, make_watch_source, recording_sink) -> None:
        source = make_watch_source()
        await ChangeStreamController(source, None, MANAGED_CLUSTERS).run(recording_sink)
        assert source.open_calls == []
        assert recording_sink.frames == [("error", CLIENT_UNAVAILABLE_MESSAGE)]

    async def test_open_failure(self, fake_client, make_watch_source, controller_factory, recording_sink) -> None:
        source = make_watch_source(error=WatchOpenError("failed to watch managedclusters: 403 Forbidden"))
        await controller_factory(source).run(recording_sink)
        assert recording_sink.frames == [("error", "failed to watch managedclusters: 403 Forbidden")]
        assert fake_client.list_calls == []

    async def test_initial_snapshot_failure_closes_watch(
        self, fake_client, make_subscription, make_watch_source, controller_factory, recording_sink
    ) -> None:
        fake_client.list_errors = [OCMClientError("failed to list managedclusters")]
        subscription = make_subscription([MODIFIED], hold_open=True)
        await controller_factory(make_watch_source(subscription)).run(recording_sink)
        assert recording_sink.frames == [("error", "failed to list managedclusters")]
        assert subscription.close_calls == 1

    async def test_error_events(
        self, make_subscription, make_watch_source, controller_factory, recording_sink
    ) -> None:
        """Test each ERROR event becomes one error frame and the stream continues."""
        subscription = make_subscription(
            [WatchEvent.error("too old resource version"), WatchEvent.error(None), MODIFIED]
        )
        await controller_factory(make_watch_source(subscription)).run(recording_sink)
        assert recording_sink.kinds() == ["snapshot", "error", "error", "snapshot"]
        assert recording_sink.frames[1] == ("error", "too old resource version")
        assert recording_sink.frames[2] == ("error", "Watch error occurred")

    async def test_later_snapshot_failure_is_skipped(
        self, fake_client, make_subscription, make_watch_source, controller_factory, recording_sink
    ) -> None:
        fake_client.list_errors = [None, OCMClientError("transient"), None]
        subscription = make_subscription([MODIFIED, MODIFIED])
        await controller_factory(make_watch_source(subscription)).run(recording_sink)
        assert recording_sink.kinds() == ["snapshot", "snapshot"]
        assert len(fake_client.list_calls) == 3
        assert subscription.close_calls == 1


class TestLifecycle:
    """Test cancellation and keepalives."""

    async def test_cancel_event_stops_session(
        self, make_subscription, make_watch_source, make_sink, controller_factory
    ) -> None:
        cancel = asyncio.Event()
        subscription = make_subscription(hold_open=True)
        sink = make_sink(lambda kind, payload: cancel.set())

        await controller_factory(make_watch_source(subscription)).run(sink, cancel)

        assert sink.kinds() == ["snapshot"]
        assert subscription.close_calls == 1

    async def test_cancel_wins_over_pending_event(
        self, make_subscription, make_watch_source, make_sink, controller_factory
    ) -> None:
        """Test no frame is written after cancellation is observed."""
        cancel = asyncio.Event()
        cancel.set()
        subscription = make_subscription([MODIFIED, MODIFIED])
        sink = make_sink()

        await controller_factory(make_watch_source(subscription)).run(sink, cancel)

        assert sink.kinds() == ["snapshot"]
        assert subscription.close_calls == 1

    async def test_task_cancellation_closes_watch(
        self, make_subscription, make_watch_source, make_sink, controller_factory
    ) -> None:
        started = asyncio.Event()
        subscription = make_subscription(hold_open=True)
        sink = make_sink(lambda kind, payload: started.set())
        controller = controller_factory(make_watch_source(subscription))

        task = asyncio.create_task(controller.run(sink))
        await asyncio.wait_for(started.wait(), timeout=1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert subscription.close_calls == 1
        assert controller.state == StreamState.CLOSED
        assert sink.kinds() == ["snapshot"]

    async def test_task_group_cancellation_finishes_close(
        self, make_subscription, make_watch_source, make_sink, controller_factory
    ) -> None:
        """Test that a cancelled task group still lets the watch release."""
        started = asyncio.Event()
        subscription = make_subscription(hold_open=True)
        sink = make_sink(lambda kind, payload: started.set())
        controller = controller_factory(make_watch_source(subscription))

        async with anyio.create_task_group() as tg:
            tg.start_soon(controller.run, sink)
            await asyncio.wait_for(started.wait(), timeout=1)
            tg.cancel_scope.cancel()

        assert subscription.close_calls == 1
        assert subscription.released is True
        assert controller.state == StreamState.CLOSED

    async def test_keepalive_after_idle_interval(
        self, make_subscription, make_watch_source, make_sink, controller_factory
    ) -> None:
        cancel = asyncio.Event()
        subscription = make_subscription(hold_open=True)

        def on_write(kind, payload):
            if kind == "keepalive":
                cancel.set()

        sink = make_sink(on_write)
        await controller_factory(make_watch_source(subscription), keepalive_interval=0.05).run(sink, cancel)

        assert sink.kinds() == ["snapshot", "keepalive"]
        assert subscription.close_calls == 1

    async def test_no_keepalive_while_busy(
        self, make_subscription, make_watch_source, controller_factory, recording_sink
    ) -> None:
        subscription = make_subscription([MODIFIED] * 5)
        await controller_factory(make_watch_source(subscription), keepalive_interval=5).run(recording_sink)
        assert "keepalive" not in recording_sink.kinds()
