"""Hub API access for OCM custom resources.

The client is shared read-only by every request and every stream
session; each call is an independent request to the API server.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

from kubernetes_asyncio import client, config
from kubernetes_asyncio.client.api_client import ApiClient
from kubernetes_asyncio.client.rest import ApiException

from ocm_shared.config import Settings
from ocm_shared.observability import (
    get_logger,
    log_external_call_end,
    log_external_call_start,
)

from .errors import OCMClientError, ResourceNotFoundError
from .resources import ResourceCollection
from .watch import (
    TRANSPORT_ERRORS,
    KubernetesWatchSource,
    ResourceWatchSource,
    WatchSubscription,
    collection_list_call,
)

logger = get_logger(__name__)

API_SERVER = "kube-apiserver"


class BaseOCMClient(ABC):
    """Read access to OCM resources."""

    @property
    @abstractmethod
    def watch_source(self) -> ResourceWatchSource:
        """Source used to open watch subscriptions."""
        pass

    @abstractmethod
    async def list(
        self,
        collection: ResourceCollection,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List raw items of a collection.

        Raises:
            OCMClientError: If the list request fails
        """
        pass

    @abstractmethod
    async def get(self, collection: ResourceCollection, name: str) -> dict[str, Any]:
        """Fetch one raw item.

        Raises:
            ResourceNotFoundError: If the item does not exist
            OCMClientError: If the request fails
        """
        pass

    @abstractmethod
    async def review_token(self, token: str) -> str | None:
        """Validate a bearer token.

        Returns:
            The authenticated user name, or None when the token is rejected
        """
        pass

    async def watch(self, collection: ResourceCollection) -> WatchSubscription:
        return await self.watch_source.open(collection)

    async def close(self) -> None:
        pass


class OCMClient(BaseOCMClient):
    """``kubernetes_asyncio`` backed client using CustomObjectsApi."""

    def __init__(
        self,
        api_client: ApiClient,
        request_timeout: float = 30.0,
        watch_timeout: int = 1800,
    ):
        self._api_client = api_client
        self._custom = client.CustomObjectsApi(api_client)
        self._auth = client.AuthenticationV1Api(api_client)
        self._request_timeout = request_timeout
        self._watch_source = KubernetesWatchSource(self._custom, request_timeout, watch_timeout)

    @property
    def watch_source(self) -> ResourceWatchSource:
        return self._watch_source

    async def list(
        self,
        collection: ResourceCollection,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        list_func, args = collection_list_call(self._custom, collection)
        kwargs: dict[str, Any] = {"_request_timeout": self._request_timeout}
        if label_selector:
            kwargs["label_selector"] = label_selector

        operation = f"list {collection}"
        start = time.monotonic()
        log_external_call_start(logger, API_SERVER, operation)
        try:
            response = await list_func(*args, **kwargs)
        except ApiException as e:
            log_external_call_end(
                logger, API_SERVER, operation, False, _elapsed_ms(start), error=str(e.reason)
            )
            raise OCMClientError(f"failed to list {collection}: {e.status} {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            log_external_call_end(
                logger, API_SERVER, operation, False, _elapsed_ms(start), error=str(e)
            )
            raise OCMClientError(f"failed to list {collection}: {e}") from e

        log_external_call_end(logger, API_SERVER, operation, True, _elapsed_ms(start))
        items = response.get("items") if isinstance(response, dict) else None
        return list(items or [])

    async def get(self, collection: ResourceCollection, name: str) -> dict[str, Any]:
        operation = f"get {collection}/{name}"
        start = time.monotonic()
        log_external_call_start(logger, API_SERVER, operation)
        try:
            if collection.namespace:
                item = await self._custom.get_namespaced_custom_object(
                    collection.group,
                    collection.version,
                    collection.namespace,
                    collection.plural,
                    name,
                    _request_timeout=self._request_timeout,
                )
            else:
                item = await self._custom.get_cluster_custom_object(
                    collection.group,
                    collection.version,
                    collection.plural,
                    name,
                    _request_timeout=self._request_timeout,
                )
        except ApiException as e:
            log_external_call_end(
                logger, API_SERVER, operation, False, _elapsed_ms(start), error=str(e.reason)
            )
            if e.status == 404:
                raise ResourceNotFoundError(collection.kind, name) from e
            raise OCMClientError(f"failed to get {collection.kind} {name}: {e.status} {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            log_external_call_end(
                logger, API_SERVER, operation, False, _elapsed_ms(start), error=str(e)
            )
            raise OCMClientError(f"failed to get {collection.kind} {name}: {e}") from e

        log_external_call_end(logger, API_SERVER, operation, True, _elapsed_ms(start))
        return item

    async def review_token(self, token: str) -> str | None:
        body = client.V1TokenReview(spec=client.V1TokenReviewSpec(token=token))
        try:
            review = await self._auth.create_token_review(
                body, _request_timeout=self._request_timeout
            )
        except ApiException as e:
            raise OCMClientError(f"token review failed: {e.status} {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            raise OCMClientError(f"token review failed: {e}") from e

        status = review.status
        if status is None or not status.authenticated:
            return None
        return status.user.username if status.user else ""

    async def close(self) -> None:
        await self._api_client.close()


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000


async def create_ocm_client(settings: Settings) -> BaseOCMClient:
    """Build the client the service runs with.

    Mock mode returns fixture data. Otherwise the in-cluster service
    account is tried first, then the kubeconfig.

    Raises:
        OCMClientError: If no usable Kubernetes configuration is found
    """
    if settings.dashboard.use_mock:
        from .mock import MockOCMClient

        logger.info("Using mock OCM client")
        return MockOCMClient(update_interval=settings.streaming.mock_update_interval_seconds)

    kube = settings.kubernetes
    configuration = client.Configuration()
    loaded = False

    if kube.in_cluster is not False:
        try:
            config.load_incluster_config(client_configuration=configuration)
            loaded = True
            logger.info("Kubernetes client configured from in-cluster service account")
        except config.ConfigException as e:
            if kube.in_cluster:
                raise OCMClientError(f"in-cluster configuration unavailable: {e}") from e

    if not loaded:
        try:
            await config.load_kube_config(
                config_file=kube.kubeconfig,
                context=kube.context,
                client_configuration=configuration,
            )
        except (config.ConfigException, OSError) as e:
            raise OCMClientError(f"kubeconfig unavailable: {e}") from e
        logger.info(
            "Kubernetes client configured from kubeconfig",
            kubeconfig=kube.kubeconfig,
            context=kube.context,
        )

    return OCMClient(
        ApiClient(configuration=configuration),
        kube.request_timeout_seconds,
        kube.watch_timeout_seconds,
    )
