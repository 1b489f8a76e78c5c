"""Managed cluster models.

``Cluster`` is the item type carried by the cluster change stream: one
entry per ManagedCluster, with a status derived from its availability
condition.
"""

from enum import Enum

from pydantic import Field

from .base import DashboardBaseModel
from .common import Condition, ObjectIdentity


class ClusterStatus(str, Enum):
    """Derived availability of a managed cluster."""

    ONLINE = "Online"
    OFFLINE = "Offline"
    UNKNOWN = "Unknown"


class ClusterClaim(DashboardBaseModel):
    """A claim reported by the managed cluster agent."""

    name: str = ""
    value: str = ""


class Taint(DashboardBaseModel):
    """A taint set on the managed cluster."""

    key: str = ""
    value: str | None = None
    effect: str = ""


class ManagedClusterClientConfig(DashboardBaseModel):
    """API server endpoint of a managed cluster."""

    url: str = ""
    ca_bundle: str | None = None


class Cluster(ObjectIdentity):
    """Flattened ManagedCluster."""

    status: ClusterStatus = ClusterStatus.UNKNOWN
    version: str | None = Field(default=None, description="Kubernetes version")
    labels: dict[str, str] | None = None
    conditions: list[Condition] = Field(default_factory=list)
    hub_accepted: bool = False
    capacity: dict[str, str] | None = None
    allocatable: dict[str, str] | None = None
    cluster_claims: list[ClusterClaim] | None = None
    taints: list[Taint] | None = None
    managed_cluster_client_configs: list[ManagedClusterClientConfig] | None = None
    creation_timestamp: str | None = None
