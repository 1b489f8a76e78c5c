"""ManagedClusterAddOn conversion."""

from __future__ import annotations

from typing import Any

from ocm_shared.models import (
    AddonRegistration,
    AddonRegistrationSubject,
    AddonSupportedConfig,
    ManagedClusterAddon,
)

from .common import (
    convert_conditions,
    creation_timestamp,
    decode_item,
    object_name,
    object_namespace,
    object_uid,
)
from .fields import mappings, nested, nested_str, string_list


def convert_addon(raw: Any) -> ManagedClusterAddon:
    item = decode_item(raw)
    registrations = [
        AddonRegistration(
            signer_name=nested_str(reg, "signerName", default=""),
            subject=AddonRegistrationSubject(
                groups=string_list(nested(reg, "subject", "groups")) or [],
                user=nested_str(reg, "subject", "user", default=""),
            ),
        )
        for reg in mappings(nested(item, "status", "registrations"))
    ]
    supported_configs = [
        AddonSupportedConfig(
            group=nested_str(cfg, "group", default=""),
            resource=nested_str(cfg, "resource", default=""),
        )
        for cfg in mappings(nested(item, "status", "supportedConfigs"))
    ]
    return ManagedClusterAddon(
        id=object_uid(item),
        name=object_name(item),
        namespace=object_namespace(item),
        install_namespace=nested_str(item, "spec", "installNamespace", default=""),
        creation_timestamp=creation_timestamp(item),
        conditions=convert_conditions(nested(item, "status", "conditions")),
        registrations=registrations or None,
        supported_configs=supported_configs or None,
    )
