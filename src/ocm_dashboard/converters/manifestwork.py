"""ManifestWork conversion."""

from __future__ import annotations

from typing import Any

from ocm_shared.models import (
    Manifest,
    ManifestCondition,
    ManifestResourceMeta,
    ManifestResourceStatus,
    ManifestWork,
)

from .common import (
    convert_conditions,
    creation_timestamp,
    decode_item,
    object_labels,
    object_name,
    object_namespace,
    object_uid,
)
from .fields import mappings, nested, nested_int, nested_map, nested_str


def _resource_meta(raw: Any) -> ManifestResourceMeta:
    return ManifestResourceMeta(
        ordinal=nested_int(raw, "ordinal") or 0,
        group=nested_str(raw, "group"),
        version=nested_str(raw, "version"),
        kind=nested_str(raw, "kind"),
        resource=nested_str(raw, "resource"),
        name=nested_str(raw, "name"),
        namespace=nested_str(raw, "namespace"),
    )


def convert_manifest_work(raw: Any) -> ManifestWork:
    item = decode_item(raw)
    manifests = [
        Manifest(raw_extension=dict(manifest))
        for manifest in mappings(nested(item, "spec", "workload", "manifests"))
    ]
    statuses = [
        ManifestCondition(
            resource_meta=_resource_meta(nested_map(entry, "resourceMeta")),
            conditions=convert_conditions(entry.get("conditions")),
        )
        for entry in mappings(nested(item, "status", "resourceStatus", "manifests"))
    ]
    return ManifestWork(
        id=object_uid(item),
        name=object_name(item),
        namespace=object_namespace(item),
        labels=object_labels(item),
        manifests=manifests or None,
        conditions=convert_conditions(nested(item, "status", "conditions")),
        resource_status=ManifestResourceStatus(manifests=statuses or None),
        creation_timestamp=creation_timestamp(item),
    )
