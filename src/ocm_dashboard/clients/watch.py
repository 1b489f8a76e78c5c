"""Watch subscriptions over hub resource collections.

A subscription is a single-consumer async iterator of ``WatchEvent``.
It cannot be restarted: once closed or exhausted, a new one must be
opened. Nothing here reconnects on its own.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import aiohttp
import anyio
from kubernetes_asyncio import client, watch
from kubernetes_asyncio.client.rest import ApiException

from ocm_shared.models import WatchEvent, WatchEventType
from ocm_shared.observability import get_logger

from .errors import WatchOpenError
from .resources import ResourceCollection

logger = get_logger(__name__)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def collection_list_call(
    custom_api: client.CustomObjectsApi,
    collection: ResourceCollection,
) -> tuple[Callable[..., Awaitable[Any]], tuple[str, ...]]:
    """Pick the CustomObjectsApi list function and positional args for a collection."""
    if collection.namespace:
        return custom_api.list_namespaced_custom_object, (
            collection.group,
            collection.version,
            collection.namespace,
            collection.plural,
        )
    return custom_api.list_cluster_custom_object, (
        collection.group,
        collection.version,
        collection.plural,
    )


class WatchSubscription(ABC):
    """An open watch. Iterate it for events, then ``close()`` it."""

    def __aiter__(self) -> AsyncIterator[WatchEvent]:
        return self

    @abstractmethod
    async def __anext__(self) -> WatchEvent:
        """Wait for the next event; raises StopAsyncIteration once exhausted."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the watch. Safe to call more than once."""
        pass


class ResourceWatchSource(ABC):
    """Opens watch subscriptions."""

    @abstractmethod
    async def open(self, collection: ResourceCollection) -> WatchSubscription:
        """Open a watch on ``collection``.

        Raises:
            WatchOpenError: If the watch cannot be established
        """
        pass


class KubernetesWatchSubscription(WatchSubscription):
    """Adapts a ``kubernetes_asyncio`` watch stream to ``WatchEvent``s.

    A transport drop or API error mid-stream is reported as one ERROR
    event, after which the subscription is exhausted.
    """

    def __init__(
        self,
        watcher: watch.Watch,
        stream: AsyncIterator[dict[str, Any]],
        collection: ResourceCollection,
    ):
        self._watch = watcher
        self._stream = stream
        self._collection = collection
        self._exhausted = False
        self._closed = False

    async def __anext__(self) -> WatchEvent:
        while True:
            if self._exhausted or self._closed:
                raise StopAsyncIteration
            try:
                raw = await anext(self._stream)
            except StopAsyncIteration:
                self._exhausted = True
                raise
            except ApiException as e:
                self._exhausted = True
                logger.warning(
                    "Watch failed",
                    collection=str(self._collection),
                    status=e.status,
                    reason=e.reason,
                )
                return WatchEvent.error(f"watch failed: {e.status} {e.reason}")
            except TRANSPORT_ERRORS as e:
                self._exhausted = True
                logger.warning("Watch connection lost", collection=str(self._collection), error=str(e))
                return WatchEvent.error(f"watch connection lost: {e}")

            event = self._translate(raw)
            if event is not None:
                return event

    def _translate(self, raw: Any) -> WatchEvent | None:
        if not isinstance(raw, dict):
            return None
        event_type = raw.get("type")
        if event_type == "BOOKMARK":
            return None

        obj = raw.get("object")
        if not isinstance(obj, dict):
            obj = raw.get("raw_object")
        if not isinstance(obj, dict):
            obj = None

        if event_type == WatchEventType.ERROR.value:
            message = obj.get("message") if obj else None
            return WatchEvent.error(message if isinstance(message, str) else None)

        try:
            kind = WatchEventType(event_type)
        except ValueError:
            logger.debug("Ignoring unknown watch event type", event_type=event_type)
            return None
        return WatchEvent(type=kind, object=obj)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._watch.stop()
        # Release the response before the first await so a cancelled caller
        # still frees the connection.
        resp = self._watch.resp
        if resp is not None:
            self._watch.resp = None
            resp.release()
        with anyio.CancelScope(shield=True):
            await self._watch.close()
        logger.debug("Watch closed", collection=str(self._collection))


class KubernetesWatchSource(ResourceWatchSource):
    """Watch source backed by the hub API server.

    ``open`` lists a single item first. That fails fast when the
    collection is unreachable or forbidden and yields the resourceVersion
    the watch starts from, so the stream does not replay existing objects.
    """

    def __init__(
        self,
        custom_api: client.CustomObjectsApi,
        request_timeout: float = 30.0,
        watch_timeout: int = 1800,
    ):
        self._custom_api = custom_api
        self._request_timeout = request_timeout
        self._watch_timeout = watch_timeout

    async def open(self, collection: ResourceCollection) -> WatchSubscription:
        list_func, args = collection_list_call(self._custom_api, collection)
        try:
            probe = await list_func(*args, limit=1, _request_timeout=self._request_timeout)
        except ApiException as e:
            raise WatchOpenError(
                f"failed to watch {collection}: {e.status} {e.reason}"
            ) from e
        except TRANSPORT_ERRORS as e:
            raise WatchOpenError(f"failed to watch {collection}: {e}") from e

        resource_version = None
        if isinstance(probe, dict):
            resource_version = (probe.get("metadata") or {}).get("resourceVersion")

        watcher = watch.Watch()
        # Without timeout_seconds the library re-watches on its own when the
        # server ends the stream.
        kwargs: dict[str, Any] = {
            "allow_watch_bookmarks": True,
            "timeout_seconds": self._watch_timeout,
        }
        if resource_version:
            kwargs["resource_version"] = resource_version
        stream = watcher.stream(list_func, *args, **kwargs)

        logger.info(
            "Watch opened",
            collection=str(collection),
            resource_version=resource_version,
        )
        return KubernetesWatchSubscription(watcher, stream, collection)
