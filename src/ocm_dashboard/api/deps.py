"""Shared helpers for the resource routers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from ocm_shared.models import DashboardBaseModel
from ocm_shared.observability import get_logger

from ..clients import BaseOCMClient, OCMClientError, ResourceCollection, ResourceNotFoundError
from ..converters import ItemConversionError
from ..services import CLIENT_UNAVAILABLE_MESSAGE, convert_items

logger = get_logger(__name__)

Converter = Callable[[Any], DashboardBaseModel]


def get_ocm_client(request: Request) -> BaseOCMClient:
    """Dependency returning the shared client, or 500 when none is configured."""
    client = request.app.state.ocm_client
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CLIENT_UNAVAILABLE_MESSAGE,
        )
    return client


OCMClientDep = Annotated[BaseOCMClient, Depends(get_ocm_client)]


async def list_raw(
    client: BaseOCMClient,
    collection: ResourceCollection,
    label_selector: str | None = None,
) -> list[dict[str, Any]]:
    try:
        return await client.list(collection, label_selector)
    except OCMClientError as e:
        logger.error("List failed", collection=str(collection), error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e


async def list_converted(
    client: BaseOCMClient,
    collection: ResourceCollection,
    converter: Converter,
    label_selector: str | None = None,
) -> list[dict[str, Any]]:
    """List a collection and render every convertible item."""
    items = await list_raw(client, collection, label_selector)
    return [model.to_api() for model in convert_items(items, converter, collection.kind)]


async def get_raw(client: BaseOCMClient, collection: ResourceCollection, name: str) -> dict[str, Any]:
    try:
        return await client.get(collection, name)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except OCMClientError as e:
        logger.error("Get failed", collection=str(collection), name=name, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e


async def get_converted(
    client: BaseOCMClient,
    collection: ResourceCollection,
    name: str,
    converter: Converter,
) -> dict[str, Any]:
    """Fetch one item and render it."""
    raw = await get_raw(client, collection, name)
    try:
        return converter(raw).to_api()
    except ItemConversionError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
