"""Cluster set and cluster set binding models."""

from pydantic import Field

from .base import DashboardBaseModel
from .common import Condition, LabelSelector, ObjectIdentity


class ClusterSelector(DashboardBaseModel):
    """How a cluster set picks its members."""

    selector_type: str = "ExclusiveClusterSetLabel"
    label_selector: LabelSelector | None = None


class ClusterSetSpec(DashboardBaseModel):
    cluster_selector: ClusterSelector = Field(default_factory=ClusterSelector)


class ClusterSetStatus(DashboardBaseModel):
    conditions: list[Condition] = Field(default_factory=list)


class ClusterSet(ObjectIdentity):
    """Flattened ManagedClusterSet."""

    cluster_count: int = 0
    labels: dict[str, str] | None = None
    spec: ClusterSetSpec = Field(default_factory=ClusterSetSpec)
    status: ClusterSetStatus = Field(default_factory=ClusterSetStatus)
    creation_timestamp: str | None = None


class ClusterSetBindingSpec(DashboardBaseModel):
    cluster_set: str = ""


class ClusterSetBindingStatus(DashboardBaseModel):
    conditions: list[Condition] = Field(default_factory=list)


class ClusterSetBinding(ObjectIdentity):
    """ManagedClusterSetBinding: makes a cluster set usable from a namespace."""

    namespace: str = ""
    spec: ClusterSetBindingSpec = Field(default_factory=ClusterSetBindingSpec)
    status: ClusterSetBindingStatus = Field(default_factory=ClusterSetBindingStatus)
    creation_timestamp: str | None = None
