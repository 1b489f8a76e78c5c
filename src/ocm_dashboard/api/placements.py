"""Placement endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..clients import PLACEMENT_DECISIONS, PLACEMENTS
from ..converters import PLACEMENT_LABEL, convert_placement, convert_placement_decision
from .deps import OCMClientDep, get_converted, list_converted

router = APIRouter()


@router.get("/placements", summary="List placements in all namespaces")
async def list_all_placements(client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(client, PLACEMENTS, convert_placement)


@router.get("/namespaces/{namespace}/placements", summary="List placements in a namespace")
async def list_placements(namespace: str, client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(client, PLACEMENTS.in_namespace(namespace), convert_placement)


@router.get("/namespaces/{namespace}/placements/{name}", summary="Get a placement")
async def get_placement(namespace: str, name: str, client: OCMClientDep) -> dict[str, Any]:
    return await get_converted(client, PLACEMENTS.in_namespace(namespace), name, convert_placement)


@router.get(
    "/namespaces/{namespace}/placements/{name}/decisions",
    summary="List the decisions of a placement",
)
async def list_placement_decisions(
    namespace: str,
    name: str,
    client: OCMClientDep,
) -> list[dict[str, Any]]:
    """Decisions are found through the placement label the scheduler sets on them."""
    return await list_converted(
        client,
        PLACEMENT_DECISIONS.in_namespace(namespace),
        convert_placement_decision,
        label_selector=f"{PLACEMENT_LABEL}={name}",
    )
