"""ManagedCluster conversion.

The cluster status shown in the UI is derived from a single condition
type. Availability is the only signal considered; joined, accepted or
clock-sync conditions do not influence it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ocm_shared.models import (
    Cluster,
    ClusterClaim,
    ClusterStatus,
    Condition,
    ManagedClusterClientConfig,
    Taint,
)

from .common import (
    CONDITION_TRUE,
    convert_conditions,
    creation_timestamp,
    decode_item,
    object_labels,
    object_name,
    object_uid,
)
from .fields import mappings, nested, nested_bool, nested_map, nested_str, string_map

CLUSTER_AVAILABLE_CONDITION = "ManagedClusterConditionAvailable"
HUB_ACCEPTED_CONDITION = "HubAcceptedManagedCluster"


def derive_status(
    conditions: Iterable[Condition],
    condition_type: str = CLUSTER_AVAILABLE_CONDITION,
) -> ClusterStatus:
    """Derive the cluster status from its conditions.

    A single pass over ``conditions``; if ``condition_type`` appears more
    than once the last occurrence decides.

    Args:
        conditions: Conditions in source order
        condition_type: The availability condition type

    Returns:
        ONLINE when the condition status is exactly "True", OFFLINE for
        any other status (including "true"), UNKNOWN when the condition is absent
    """
    status = ClusterStatus.UNKNOWN
    for condition in conditions:
        if condition.type != condition_type:
            continue
        if condition.status == CONDITION_TRUE:
            status = ClusterStatus.ONLINE
        else:
            status = ClusterStatus.OFFLINE
    return status


def _hub_accepted(spec: Mapping[str, Any] | None, conditions: list[Condition]) -> bool:
    explicit = nested_bool(spec, "hubAcceptsClient")
    if explicit is not None:
        return explicit
    return any(
        c.type == HUB_ACCEPTED_CONDITION and c.status == CONDITION_TRUE for c in conditions
    )


def convert_cluster(
    raw: Any,
    *,
    available_condition: str = CLUSTER_AVAILABLE_CONDITION,
) -> Cluster:
    """Convert a raw ManagedCluster into a ``Cluster``.

    Missing or mistyped fields come out absent. Only an item that is not a
    structured object at all is rejected.

    Raises:
        ItemConversionError: If ``raw`` cannot be decoded as an object
    """
    item = decode_item(raw)
    spec = nested_map(item, "spec")
    status = nested_map(item, "status")

    conditions = convert_conditions(nested(status, "conditions"))

    claims = [
        ClusterClaim(
            name=nested_str(claim, "name", default=""),
            value=nested_str(claim, "value", default=""),
        )
        for claim in mappings(nested(status, "clusterClaims"))
    ]
    taints = [
        Taint(
            key=nested_str(taint, "key", default=""),
            value=nested_str(taint, "value"),
            effect=nested_str(taint, "effect", default=""),
        )
        for taint in mappings(nested(spec, "taints"))
    ]
    client_configs = [
        ManagedClusterClientConfig(
            url=nested_str(cfg, "url", default=""),
            ca_bundle=nested_str(cfg, "caBundle"),
        )
        for cfg in mappings(nested(spec, "managedClusterClientConfigs"))
    ]

    return Cluster(
        id=object_uid(item),
        name=object_name(item),
        status=derive_status(conditions, available_condition),
        version=nested_str(status, "version", "kubernetes") or None,
        labels=object_labels(item),
        conditions=conditions,
        hub_accepted=_hub_accepted(spec, conditions),
        capacity=string_map(nested(status, "capacity"), stringify=True),
        allocatable=string_map(nested(status, "allocatable"), stringify=True),
        cluster_claims=claims or None,
        taints=taints or None,
        managed_cluster_client_configs=client_configs or None,
        creation_timestamp=creation_timestamp(item),
    )
