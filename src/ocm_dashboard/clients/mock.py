"""Fixture-backed OCM client for running the dashboard without a hub.

Objects are held in their raw API form, so every route and the change
stream exercise the same converters as against a real API server. The
mock watch periodically flips the availability condition of one managed
cluster and reports it as a MODIFIED event.
"""

from __future__ import annotations

import asyncio
import copy
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any

from ocm_shared.models import WatchEvent, WatchEventType
from ocm_shared.observability import get_logger

from ..converters.cluster import CLUSTER_AVAILABLE_CONDITION
from .errors import ResourceNotFoundError
from .ocm import BaseOCMClient
from .resources import (
    MANAGED_CLUSTER_ADDONS,
    MANAGED_CLUSTER_SET_BINDINGS,
    MANAGED_CLUSTER_SETS,
    MANAGED_CLUSTERS,
    MANIFEST_WORKS,
    PLACEMENT_DECISIONS,
    PLACEMENTS,
    ResourceCollection,
)
from .watch import ResourceWatchSource, WatchSubscription

logger = get_logger(__name__)

MOCK_USER = "mock-user"


def _timestamp(days_ago: int = 0) -> str:
    moment = datetime.now(timezone.utc) - timedelta(days=days_ago)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def _metadata(
    name: str,
    uid: str,
    namespace: str | None = None,
    labels: dict[str, str] | None = None,
    days_ago: int = 30,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "name": name,
        "uid": uid,
        "creationTimestamp": _timestamp(days_ago),
        "resourceVersion": "1",
    }
    if namespace:
        metadata["namespace"] = namespace
    if labels:
        metadata["labels"] = labels
    return metadata


def _condition(type_: str, status: str, reason: str, message: str) -> dict[str, str]:
    return {
        "type": type_,
        "status": status,
        "reason": reason,
        "message": message,
        "lastTransitionTime": _timestamp(),
    }


def _managed_cluster(name: str, available: bool, clusterset: str, vendor: str) -> dict[str, Any]:
    return {
        "apiVersion": MANAGED_CLUSTERS.api_version,
        "kind": MANAGED_CLUSTERS.kind,
        "metadata": _metadata(
            name,
            f"{name}-uid",
            labels={
                "cluster.open-cluster-management.io/clusterset": clusterset,
                "vendor": vendor,
                "name": name,
            },
        ),
        "spec": {
            "hubAcceptsClient": True,
            "managedClusterClientConfigs": [{"url": f"https://api.{name}.example.com:6443"}],
        },
        "status": {
            "version": {"kubernetes": "v1.28.5"},
            "capacity": {"cpu": "16", "memory": "64Gi"},
            "allocatable": {"cpu": "15", "memory": "60Gi"},
            "clusterClaims": [
                {"name": "id.k8s.io", "value": name},
                {"name": "platform.open-cluster-management.io", "value": "AWS"},
            ],
            "conditions": [
                _condition(
                    "HubAcceptedManagedCluster",
                    "True",
                    "HubClusterAdminAccepted",
                    "Accepted by hub cluster admin",
                ),
                _condition(
                    "ManagedClusterJoined",
                    "True",
                    "ManagedClusterJoined",
                    "Managed cluster joined",
                ),
                _availability(available),
            ],
        },
    }


def _availability(available: bool) -> dict[str, str]:
    if available:
        return _condition(
            CLUSTER_AVAILABLE_CONDITION,
            "True",
            "ManagedClusterAvailable",
            "Managed cluster is available",
        )
    return _condition(
        CLUSTER_AVAILABLE_CONDITION,
        "Unknown",
        "ManagedClusterLeaseUpdateStopped",
        "Registration agent stopped updating its lease",
    )


def build_fixtures() -> dict[str, list[dict[str, Any]]]:
    """Raw objects keyed by collection plural."""
    clusters = [
        _managed_cluster("mock-cluster-1", True, "default", "OpenShift"),
        _managed_cluster("mock-cluster-2", False, "production", "EKS"),
    ]
    cluster_sets = [
        {
            "apiVersion": MANAGED_CLUSTER_SETS.api_version,
            "kind": MANAGED_CLUSTER_SETS.kind,
            "metadata": _metadata("default", "clusterset-default-uid"),
            "spec": {"clusterSelector": {"selectorType": "ExclusiveClusterSetLabel"}},
            "status": {
                "conditions": [
                    _condition("ClusterSetEmpty", "False", "ClustersSelected", "1 ManagedClusters selected")
                ]
            },
        },
        {
            "apiVersion": MANAGED_CLUSTER_SETS.api_version,
            "kind": MANAGED_CLUSTER_SETS.kind,
            "metadata": _metadata("production", "clusterset-production-uid"),
            "spec": {"clusterSelector": {"selectorType": "ExclusiveClusterSetLabel"}},
            "status": {
                "conditions": [
                    _condition("ClusterSetEmpty", "False", "ClustersSelected", "1 ManagedClusters selected")
                ]
            },
        },
        {
            "apiVersion": MANAGED_CLUSTER_SETS.api_version,
            "kind": MANAGED_CLUSTER_SETS.kind,
            "metadata": _metadata("global", "clusterset-global-uid"),
            "spec": {"clusterSelector": {"selectorType": "LabelSelector", "labelSelector": {}}},
        },
    ]
    bindings = [
        {
            "apiVersion": MANAGED_CLUSTER_SET_BINDINGS.api_version,
            "kind": MANAGED_CLUSTER_SET_BINDINGS.kind,
            "metadata": _metadata("default", "binding-default-uid", namespace="default"),
            "spec": {"clusterSet": "default"},
            "status": {
                "conditions": [_condition("Bound", "True", "ClusterSetBound", "")]
            },
        },
    ]
    placements = [
        {
            "apiVersion": PLACEMENTS.api_version,
            "kind": PLACEMENTS.kind,
            "metadata": _metadata("placement-all", "placement-all-uid", namespace="default"),
            "spec": {
                "clusterSets": ["default", "production"],
                "predicates": [
                    {
                        "requiredClusterSelector": {
                            "labelSelector": {"matchLabels": {"vendor": "OpenShift"}}
                        }
                    }
                ],
                "tolerations": [
                    {"key": "cluster.open-cluster-management.io/unreachable", "operator": "Exists"}
                ],
            },
            "status": {
                "numberOfSelectedClusters": 1,
                "decisionGroups": [
                    {
                        "decisionGroupIndex": 0,
                        "decisionGroupName": "",
                        "decisions": ["placement-all-decision-1"],
                        "clusterCount": 1,
                    }
                ],
                "conditions": [
                    _condition(
                        "PlacementSatisfied",
                        "True",
                        "AllDecisionsScheduled",
                        "All cluster decisions scheduled",
                    )
                ],
            },
        },
    ]
    decisions = [
        {
            "apiVersion": PLACEMENT_DECISIONS.api_version,
            "kind": PLACEMENT_DECISIONS.kind,
            "metadata": _metadata(
                "placement-all-decision-1",
                "placement-all-decision-1-uid",
                namespace="default",
                labels={"cluster.open-cluster-management.io/placement": "placement-all"},
            ),
            "status": {"decisions": [{"clusterName": "mock-cluster-1", "reason": ""}]},
        },
    ]
    addons = [
        {
            "apiVersion": MANAGED_CLUSTER_ADDONS.api_version,
            "kind": MANAGED_CLUSTER_ADDONS.kind,
            "metadata": _metadata(addon, f"{cluster}-{addon}-uid", namespace=cluster),
            "spec": {"installNamespace": "open-cluster-management-agent-addon"},
            "status": {
                "conditions": [_condition("Available", "True", "ManagedClusterAddOnLeaseUpdated", "")],
                "registrations": [
                    {
                        "signerName": "kubernetes.io/kube-apiserver-client",
                        "subject": {
                            "user": f"system:open-cluster-management:cluster:{cluster}:addon:{addon}",
                            "groups": [f"system:open-cluster-management:addon:{addon}"],
                        },
                    }
                ],
                "supportedConfigs": [
                    {"group": "addon.open-cluster-management.io", "resource": "addondeploymentconfigs"}
                ],
            },
        }
        for cluster in ("mock-cluster-1", "mock-cluster-2")
        for addon in ("application-manager", "governance-policy-framework")
    ]
    works = [
        {
            "apiVersion": MANIFEST_WORKS.api_version,
            "kind": MANIFEST_WORKS.kind,
            "metadata": _metadata(
                "nginx-deployment",
                "mock-cluster-1-nginx-uid",
                namespace="mock-cluster-1",
                labels={"app": "nginx"},
            ),
            "spec": {
                "workload": {
                    "manifests": [
                        {
                            "apiVersion": "apps/v1",
                            "kind": "Deployment",
                            "metadata": {"name": "nginx", "namespace": "default"},
                            "spec": {"replicas": 1},
                        }
                    ]
                }
            },
            "status": {
                "conditions": [_condition("Applied", "True", "AppliedManifestWorkComplete", "")],
                "resourceStatus": {
                    "manifests": [
                        {
                            "resourceMeta": {
                                "ordinal": 0,
                                "group": "apps",
                                "version": "v1",
                                "kind": "Deployment",
                                "resource": "deployments",
                                "name": "nginx",
                                "namespace": "default",
                            },
                            "conditions": [_condition("Available", "True", "ResourceAvailable", "")],
                        }
                    ]
                },
            },
        },
    ]
    return {
        MANAGED_CLUSTERS.plural: clusters,
        MANAGED_CLUSTER_SETS.plural: cluster_sets,
        MANAGED_CLUSTER_SET_BINDINGS.plural: bindings,
        PLACEMENTS.plural: placements,
        PLACEMENT_DECISIONS.plural: decisions,
        MANAGED_CLUSTER_ADDONS.plural: addons,
        MANIFEST_WORKS.plural: works,
    }


def _matches(item: dict[str, Any], label_selector: str | None) -> bool:
    """Equality-based selector matching (``k=v,k2=v2``)."""
    if not label_selector:
        return True
    labels = item.get("metadata", {}).get("labels") or {}
    for requirement in label_selector.split(","):
        key, _, value = requirement.partition("=")
        if labels.get(key.strip()) != value.strip():
            return False
    return True


class MockWatchSubscription(WatchSubscription):
    """Emits a MODIFIED event every ``interval`` seconds until closed."""

    def __init__(self, client: MockOCMClient, collection: ResourceCollection, interval: float):
        self._client = client
        self._collection = collection
        self._interval = interval
        self._closed = False

    async def __anext__(self) -> WatchEvent:
        if self._closed:
            raise StopAsyncIteration
        await asyncio.sleep(self._interval)
        if self._closed:
            raise StopAsyncIteration
        changed = self._client.tick(self._collection)
        if changed is None:
            # Only managed clusters change in mock mode
            await asyncio.Event().wait()
        return WatchEvent(type=WatchEventType.MODIFIED, object=changed)

    async def close(self) -> None:
        self._closed = True


class MockWatchSource(ResourceWatchSource):
    def __init__(self, client: MockOCMClient, interval: float):
        self._client = client
        self._interval = interval

    async def open(self, collection: ResourceCollection) -> WatchSubscription:
        logger.info("Mock watch opened", collection=str(collection))
        return MockWatchSubscription(self._client, collection, self._interval)


class MockOCMClient(BaseOCMClient):
    """In-memory client serving ``build_fixtures()`` objects."""

    def __init__(self, update_interval: float = 5.0):
        self._store = build_fixtures()
        self._watch_source = MockWatchSource(self, update_interval)
        self._flip_order = itertools.cycle(range(len(self._store[MANAGED_CLUSTERS.plural])))

    @property
    def watch_source(self) -> ResourceWatchSource:
        return self._watch_source

    def _items(self, collection: ResourceCollection) -> list[dict[str, Any]]:
        items = self._store.get(collection.plural, [])
        if collection.namespace:
            items = [i for i in items if i["metadata"].get("namespace") == collection.namespace]
        return items

    async def list(
        self,
        collection: ResourceCollection,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        return [copy.deepcopy(i) for i in self._items(collection) if _matches(i, label_selector)]

    async def get(self, collection: ResourceCollection, name: str) -> dict[str, Any]:
        for item in self._items(collection):
            if item["metadata"]["name"] == name:
                return copy.deepcopy(item)
        raise ResourceNotFoundError(collection.kind, name)

    async def review_token(self, token: str) -> str | None:
        return MOCK_USER if token else None

    def tick(self, collection: ResourceCollection) -> dict[str, Any] | None:
        """Flip the availability of the next managed cluster.

        Returns:
            A copy of the changed cluster, or None for other collections
        """
        if collection.plural != MANAGED_CLUSTERS.plural:
            return None
        cluster = self._store[MANAGED_CLUSTERS.plural][next(self._flip_order)]
        conditions = cluster["status"]["conditions"]
        for index, condition in enumerate(conditions):
            if condition["type"] == CLUSTER_AVAILABLE_CONDITION:
                conditions[index] = _availability(condition["status"] != "True")
        version = int(cluster["metadata"]["resourceVersion"]) + 1
        cluster["metadata"]["resourceVersion"] = str(version)
        logger.debug("Mock cluster flipped", cluster=cluster["metadata"]["name"])
        return copy.deepcopy(cluster)
