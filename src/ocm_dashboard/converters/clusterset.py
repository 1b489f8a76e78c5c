"""ManagedClusterSet and ManagedClusterSetBinding conversion."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ocm_shared.models import (
    ClusterSelector,
    ClusterSet,
    ClusterSetBinding,
    ClusterSetBindingSpec,
    ClusterSetBindingStatus,
    ClusterSetSpec,
    ClusterSetStatus,
    LabelSelector,
)

from .common import (
    ItemConversionError,
    convert_conditions,
    creation_timestamp,
    decode_item,
    object_labels,
    object_name,
    object_namespace,
    object_uid,
)
from .fields import nested, nested_map, nested_str, string_map

CLUSTERSET_LABEL = "cluster.open-cluster-management.io/clusterset"
EXCLUSIVE_LABEL_SELECTOR = "ExclusiveClusterSetLabel"
LABEL_SELECTOR = "LabelSelector"


def _cluster_selector(spec: Mapping[str, Any] | None) -> ClusterSelector:
    raw = nested_map(spec, "clusterSelector")
    label_selector = None
    raw_label_selector = nested_map(raw, "labelSelector")
    if raw_label_selector is not None:
        label_selector = LabelSelector(
            match_labels=string_map(raw_label_selector.get("matchLabels"))
        )
    return ClusterSelector(
        selector_type=nested_str(raw, "selectorType", default=EXCLUSIVE_LABEL_SELECTOR),
        label_selector=label_selector,
    )


def count_members(
    name: str,
    selector: ClusterSelector,
    cluster_labels: Iterable[Mapping[str, str] | None],
) -> int:
    """Count the managed clusters a cluster set selects.

    Exclusive sets own the clusters labelled with their name. Label
    selector sets match on ``matchLabels``; an empty selector selects
    every cluster. Any other selector type counts nothing.
    """
    if selector.selector_type == EXCLUSIVE_LABEL_SELECTOR:
        return sum(1 for labels in cluster_labels if (labels or {}).get(CLUSTERSET_LABEL) == name)
    if selector.selector_type == LABEL_SELECTOR:
        wanted = (selector.label_selector.match_labels if selector.label_selector else None) or {}
        return sum(
            1
            for labels in cluster_labels
            if all((labels or {}).get(k) == v for k, v in wanted.items())
        )
    return 0


def cluster_labels(items: Iterable[Any]) -> list[dict[str, str] | None]:
    """Labels of every decodable managed cluster in ``items``."""
    labels = []
    for raw in items:
        try:
            labels.append(object_labels(decode_item(raw)))
        except ItemConversionError:
            continue
    return labels


def convert_cluster_set(
    raw: Any,
    cluster_labels: Iterable[Mapping[str, str] | None] = (),
) -> ClusterSet:
    """Convert a raw ManagedClusterSet.

    Args:
        raw: The ManagedClusterSet object
        cluster_labels: Labels of every managed cluster, used for ``clusterCount``
    """
    item = decode_item(raw)
    name = object_name(item)
    selector = _cluster_selector(nested_map(item, "spec"))
    return ClusterSet(
        id=object_uid(item),
        name=name,
        cluster_count=count_members(name, selector, cluster_labels),
        labels=object_labels(item),
        spec=ClusterSetSpec(cluster_selector=selector),
        status=ClusterSetStatus(conditions=convert_conditions(nested(item, "status", "conditions"))),
        creation_timestamp=creation_timestamp(item),
    )


def convert_cluster_set_binding(raw: Any) -> ClusterSetBinding:
    item = decode_item(raw)
    return ClusterSetBinding(
        id=object_uid(item),
        name=object_name(item),
        namespace=object_namespace(item),
        spec=ClusterSetBindingSpec(
            cluster_set=nested_str(item, "spec", "clusterSet", default="")
        ),
        status=ClusterSetBindingStatus(
            conditions=convert_conditions(nested(item, "status", "conditions"))
        ),
        creation_timestamp=creation_timestamp(item),
    )
