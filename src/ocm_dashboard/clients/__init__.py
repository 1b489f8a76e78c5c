"""Clients for the OCM hub API."""

from .errors import OCMClientError, ResourceNotFoundError, WatchOpenError
from .mock import MockOCMClient
from .ocm import BaseOCMClient, OCMClient, create_ocm_client
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
from .watch import (
    KubernetesWatchSource,
    KubernetesWatchSubscription,
    ResourceWatchSource,
    WatchSubscription,
)

__all__ = [
    # Clients
    "BaseOCMClient",
    "OCMClient",
    "MockOCMClient",
    "create_ocm_client",
    # Errors
    "OCMClientError",
    "ResourceNotFoundError",
    "WatchOpenError",
    # Watches
    "ResourceWatchSource",
    "WatchSubscription",
    "KubernetesWatchSource",
    "KubernetesWatchSubscription",
    # Collections
    "ResourceCollection",
    "MANAGED_CLUSTERS",
    "MANAGED_CLUSTER_SETS",
    "MANAGED_CLUSTER_SET_BINDINGS",
    "PLACEMENTS",
    "PLACEMENT_DECISIONS",
    "MANAGED_CLUSTER_ADDONS",
    "MANIFEST_WORKS",
]
