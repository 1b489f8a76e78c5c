"""Conversion pieces shared by every resource kind."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ocm_shared.models import Condition, LabelSelectorWithExpressions, MatchExpression

from .fields import mappings, nested_map, nested_str, string_list, string_map

# Kubernetes condition statuses are case-sensitive.
CONDITION_TRUE = "True"


class ItemConversionError(ValueError):
    """Raised when a raw item cannot be decoded into a structured object."""

    pass


def decode_item(raw: Any) -> Mapping[str, Any]:
    """Return ``raw`` as a mapping, decoding JSON text when needed.

    Raises:
        ItemConversionError: If the item is not a mapping and not a JSON object
    """
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            decoded = json.loads(raw)
        except ValueError as e:
            raise ItemConversionError(f"item is not valid JSON: {e}") from e
        if isinstance(decoded, Mapping):
            return decoded
        raise ItemConversionError(f"item decodes to {type(decoded).__name__}, not an object")
    raise ItemConversionError(f"item of type {type(raw).__name__} is not an object")


def object_uid(item: Mapping[str, Any]) -> str:
    return nested_str(item, "metadata", "uid", default="")


def object_name(item: Mapping[str, Any]) -> str:
    return nested_str(item, "metadata", "name", default="")


def object_namespace(item: Mapping[str, Any]) -> str:
    return nested_str(item, "metadata", "namespace", default="")


def object_labels(item: Mapping[str, Any]) -> dict[str, str] | None:
    return string_map(nested_map(item, "metadata", "labels"))


def creation_timestamp(item: Mapping[str, Any]) -> str | None:
    return nested_str(item, "metadata", "creationTimestamp")


def convert_condition(raw: Mapping[str, Any]) -> Condition:
    return Condition(
        type=nested_str(raw, "type", default=""),
        status=nested_str(raw, "status", default=""),
        reason=nested_str(raw, "reason", default=""),
        message=nested_str(raw, "message", default=""),
        last_transition_time=nested_str(raw, "lastTransitionTime", default=""),
    )


def convert_conditions(raw: Any) -> list[Condition]:
    """Convert a condition list, keeping source order.

    Entries that are not mappings are skipped.
    """
    return [convert_condition(entry) for entry in mappings(raw)]


def convert_match_expressions(raw: Any) -> list[MatchExpression] | None:
    expressions = [
        MatchExpression(
            key=nested_str(entry, "key", default=""),
            operator=nested_str(entry, "operator", default=""),
            values=string_list(entry.get("values")),
        )
        for entry in mappings(raw)
    ]
    return expressions or None


def convert_label_selector(raw: Any) -> LabelSelectorWithExpressions | None:
    if not isinstance(raw, Mapping):
        return None
    return LabelSelectorWithExpressions(
        match_labels=string_map(raw.get("matchLabels")),
        match_expressions=convert_match_expressions(raw.get("matchExpressions")),
    )
