"""Full-collection snapshots.

Every snapshot is a fresh list of the whole collection, converted item by
item. Nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from ocm_shared.observability import get_logger

from ..clients import BaseOCMClient, ResourceCollection
from ..converters import ItemConversionError

logger = get_logger(__name__)

T = TypeVar("T")


def convert_items(
    items: Iterable[Any],
    converter: Callable[[Any], T],
    kind: str = "",
) -> list[T]:
    """Convert raw items, dropping those that are not structured objects."""
    converted: list[T] = []
    for raw in items:
        try:
            converted.append(converter(raw))
        except ItemConversionError as e:
            logger.debug("Dropping unconvertible item", kind=kind, error=str(e))
    return converted


class SnapshotMaterializer(Generic[T]):
    """Lists a collection and converts every item."""

    def __init__(self, client: BaseOCMClient, converter: Callable[[Any], T]):
        self._client = client
        self._converter = converter

    async def materialize(self, collection: ResourceCollection) -> list[T]:
        """Take one snapshot of ``collection``.

        Raises:
            OCMClientError: If the list call fails
        """
        items = await self._client.list(collection)
        snapshot = convert_items(items, self._converter, collection.kind)
        logger.debug(
            "Snapshot materialized",
            collection=str(collection),
            listed=len(items),
            converted=len(snapshot),
        )
        return snapshot
