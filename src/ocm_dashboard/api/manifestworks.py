"""ManifestWork endpoints. Works live in the namespace of their target cluster."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..clients import MANIFEST_WORKS
from ..converters import convert_manifest_work
from .deps import OCMClientDep, get_converted, list_converted

router = APIRouter()


@router.get("/namespaces/{namespace}/manifestworks", summary="List manifest works")
async def list_manifest_works(namespace: str, client: OCMClientDep) -> list[dict[str, Any]]:
    return await list_converted(client, MANIFEST_WORKS.in_namespace(namespace), convert_manifest_work)


@router.get("/namespaces/{namespace}/manifestworks/{name}", summary="Get a manifest work")
async def get_manifest_work(namespace: str, name: str, client: OCMClientDep) -> dict[str, Any]:
    return await get_converted(
        client, MANIFEST_WORKS.in_namespace(namespace), name, convert_manifest_work
    )
