"""Managed cluster addon models."""

from pydantic import Field

from .base import DashboardBaseModel
from .common import Condition, ObjectIdentity


class AddonRegistrationSubject(DashboardBaseModel):
    groups: list[str] = Field(default_factory=list)
    user: str = ""


class AddonRegistration(DashboardBaseModel):
    signer_name: str = ""
    subject: AddonRegistrationSubject = Field(default_factory=AddonRegistrationSubject)


class AddonSupportedConfig(DashboardBaseModel):
    group: str = ""
    resource: str = ""


class ManagedClusterAddon(ObjectIdentity):
    """Flattened ManagedClusterAddOn living in a cluster namespace."""

    namespace: str = ""
    install_namespace: str = ""
    creation_timestamp: str | None = None
    conditions: list[Condition] = Field(default_factory=list)
    registrations: list[AddonRegistration] | None = None
    supported_configs: list[AddonSupportedConfig] | None = None
