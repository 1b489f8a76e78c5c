"""Cluster set endpoints.

``clusterCount`` is computed from the current managed clusters, so each
request lists both collections.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..clients import MANAGED_CLUSTER_SETS, MANAGED_CLUSTERS
from ..converters import cluster_labels, convert_cluster_set
from ..services import convert_items
from .deps import OCMClientDep, get_converted, list_raw

router = APIRouter()


@router.get("/clustersets", summary="List managed cluster sets")
async def list_cluster_sets(client: OCMClientDep) -> list[dict[str, Any]]:
    sets = await list_raw(client, MANAGED_CLUSTER_SETS)
    labels = cluster_labels(await list_raw(client, MANAGED_CLUSTERS))
    converted = convert_items(
        sets, lambda raw: convert_cluster_set(raw, labels), MANAGED_CLUSTER_SETS.kind
    )
    return [cluster_set.to_api() for cluster_set in converted]


@router.get("/clustersets/{name}", summary="Get a managed cluster set")
async def get_cluster_set(name: str, client: OCMClientDep) -> dict[str, Any]:
    labels = cluster_labels(await list_raw(client, MANAGED_CLUSTERS))
    return await get_converted(
        client, MANAGED_CLUSTER_SETS, name, lambda raw: convert_cluster_set(raw, labels)
    )
