"""Cluster set binding endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..clients import MANAGED_CLUSTER_SET_BINDINGS
from ..converters import convert_cluster_set_binding
from .deps import OCMClientDep, get_converted, list_converted

router = APIRouter()


@router.get("/clustersetbindings", summary="List bindings in all namespaces")
async def list_all_bindings(client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(client, MANAGED_CLUSTER_SET_BINDINGS, convert_cluster_set_binding)


@router.get("/namespaces/{namespace}/clustersetbindings", summary="List bindings in a namespace")
async def list_bindings(namespace: str, client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(
        client,
        MANAGED_CLUSTER_SET_BINDINGS.in_namespace(namespace),
        convert_cluster_set_binding,
    )


@router.get("/namespaces/{namespace}/clustersetbindings/{name}", summary="Get a binding")
async def get_binding(namespace: str, name: str, client: OCMClientDep) -> dict[str, Any]:
    return await get_converted(
        client,
        MANAGED_CLUSTER_SET_BINDINGS.in_namespace(namespace),
        name,
        convert_cluster_set_binding,
    )
