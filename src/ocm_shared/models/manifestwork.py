"""ManifestWork models."""

from typing import Any

from pydantic import Field

from .base import DashboardBaseModel
from .common import Condition, ObjectIdentity


class Manifest(DashboardBaseModel):
    """One workload manifest, kept as the raw object."""

    raw_extension: dict[str, Any] | None = None


class ManifestResourceMeta(DashboardBaseModel):
    ordinal: int = 0
    group: str | None = None
    version: str | None = None
    kind: str | None = None
    resource: str | None = None
    name: str | None = None
    namespace: str | None = None


class ManifestCondition(DashboardBaseModel):
    resource_meta: ManifestResourceMeta = Field(default_factory=ManifestResourceMeta)
    conditions: list[Condition] = Field(default_factory=list)


class ManifestResourceStatus(DashboardBaseModel):
    manifests: list[ManifestCondition] | None = None


class ManifestWork(ObjectIdentity):
    """Flattened ManifestWork from a cluster namespace."""

    namespace: str = ""
    labels: dict[str, str] | None = None
    manifests: list[Manifest] | None = None
    conditions: list[Condition] = Field(default_factory=list)
    resource_status: ManifestResourceStatus = Field(default_factory=ManifestResourceStatus)
    creation_timestamp: str | None = None
