"""Base model configuration for all Pydantic models.

Conventions:
- Python attributes are snake_case, JSON on the wire is camelCase
- Optional fields left as None are omitted from API responses
- Timestamps are passed through as the RFC 3339 strings the API server sends
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DashboardBaseModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_api(self) -> dict[str, Any]:
        """Render the model the way the UI expects it."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
