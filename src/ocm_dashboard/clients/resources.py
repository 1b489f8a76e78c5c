"""Resource collections served by the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ResourceCollection:
    """One custom resource type, optionally narrowed to a namespace.

    A namespaced kind with ``namespace`` unset addresses every namespace.
    """

    kind: str
    group: str
    version: str
    plural: str
    namespaced: bool = False
    namespace: str | None = None

    def in_namespace(self, namespace: str) -> ResourceCollection:
        if not self.namespaced:
            raise ValueError(f"{self.kind} is cluster scoped")
        return replace(self, namespace=namespace)

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.plural}.{self.group} in {self.namespace}"
        return f"{self.plural}.{self.group}"


CLUSTER_GROUP = "cluster.open-cluster-management.io"
ADDON_GROUP = "addon.open-cluster-management.io"
WORK_GROUP = "work.open-cluster-management.io"

MANAGED_CLUSTERS = ResourceCollection(
    kind="ManagedCluster",
    group=CLUSTER_GROUP,
    version="v1",
    plural="managedclusters",
)
MANAGED_CLUSTER_SETS = ResourceCollection(
    kind="ManagedClusterSet",
    group=CLUSTER_GROUP,
    version="v1beta2",
    plural="managedclustersets",
)
MANAGED_CLUSTER_SET_BINDINGS = ResourceCollection(
    kind="ManagedClusterSetBinding",
    group=CLUSTER_GROUP,
    version="v1beta2",
    plural="managedclustersetbindings",
    namespaced=True,
)
PLACEMENTS = ResourceCollection(
    kind="Placement",
    group=CLUSTER_GROUP,
    version="v1beta1",
    plural="placements",
    namespaced=True,
)
PLACEMENT_DECISIONS = ResourceCollection(
    kind="PlacementDecision",
    group=CLUSTER_GROUP,
    version="v1beta1",
    plural="placementdecisions",
    namespaced=True,
)
MANAGED_CLUSTER_ADDONS = ResourceCollection(
    kind="ManagedClusterAddOn",
    group=ADDON_GROUP,
    version="v1alpha1",
    plural="managedclusteraddons",
    namespaced=True,
)
MANIFEST_WORKS = ResourceCollection(
    kind="ManifestWork",
    group=WORK_GROUP,
    version="v1",
    plural="manifestworks",
    namespaced=True,
)
