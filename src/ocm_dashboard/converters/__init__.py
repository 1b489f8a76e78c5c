"""Converters from raw Kubernetes objects to dashboard models."""

from .addon import convert_addon
from .cluster import (
    CLUSTER_AVAILABLE_CONDITION,
    HUB_ACCEPTED_CONDITION,
    convert_cluster,
    derive_status,
)
from .clusterset import (
    CLUSTERSET_LABEL,
    cluster_labels,
    convert_cluster_set,
    convert_cluster_set_binding,
    count_members,
)
from .common import ItemConversionError, decode_item
from .manifestwork import convert_manifest_work
from .placement import (
    PLACEMENT_LABEL,
    convert_placement,
    convert_placement_decision,
)

__all__ = [
    # Errors
    "ItemConversionError",
    "decode_item",
    # Clusters
    "CLUSTER_AVAILABLE_CONDITION",
    "HUB_ACCEPTED_CONDITION",
    "convert_cluster",
    "derive_status",
    # Cluster sets
    "CLUSTERSET_LABEL",
    "cluster_labels",
    "convert_cluster_set",
    "convert_cluster_set_binding",
    "count_members",
    # Placements
    "PLACEMENT_LABEL",
    "convert_placement",
    "convert_placement_decision",
    # Addons and works
    "convert_addon",
    "convert_manifest_work",
]
