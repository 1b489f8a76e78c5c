"""Managed cluster endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..clients import MANAGED_CLUSTER_ADDONS, MANAGED_CLUSTERS
from ..converters import convert_addon, convert_cluster
from .deps import OCMClientDep, get_converted, list_converted

router = APIRouter()


@router.get("/clusters", summary="List managed clusters")
async def list_clusters(client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(client, MANAGED_CLUSTERS, convert_cluster)


@router.get("/clusters/{name}", summary="Get a managed cluster")
async def get_cluster(name: str, client: OCMClientDep) -> dict[str, Any]:
    return await get_converted(client, MANAGED_CLUSTERS, name, convert_cluster)


@router.get("/clusters/{name}/addons", summary="List addons of a cluster")
async def list_cluster_addons(name: str, client: OCMClientDep) -> list[dict[str, Any]]:
    """Addons live in the namespace named after their cluster."""
    return await list_converted(client, MANAGED_CLUSTER_ADDONS.in_namespace(name), convert_addon)


@router.get("/clusters/{name}/addons/{addon}", summary="Get one addon of a cluster")
async def get_cluster_addon(name: str, addon: str, client: OCMClientDep) -> dict[str, Any]:
    return await get_converted(
        client, MANAGED_CLUSTER_ADDONS.in_namespace(name), addon, convert_addon
    )
