"""Placement decision endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..clients import PLACEMENT_DECISIONS
from ..converters import convert_placement_decision
from .deps import OCMClientDep, get_converted, list_converted

router = APIRouter()


@router.get("/placementdecisions", summary="List decisions in all namespaces")
async def list_all_decisions(client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(client, PLACEMENT_DECISIONS, convert_placement_decision)


@router.get("/namespaces/{namespace}/placementdecisions", summary="List decisions in a namespace")
async def list_decisions(namespace: str, client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(
        client, PLACEMENT_DECISIONS.in_namespace(namespace), convert_placement_decision
    )


@router.get("/namespaces/{namespace}/placementdecisions/{name}", summary="Get a decision")
async def get_decision(namespace: str, name: str, client: OCMClientDep) -> dict[str, Any]:
    return await get_converted(
        client, PLACEMENT_DECISIONS.in_namespace(namespace), name, convert_placement_decision
    )
