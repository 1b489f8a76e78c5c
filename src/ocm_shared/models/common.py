"""Building blocks shared by several resource models."""

from pydantic import Field

from .base import DashboardBaseModel


class Condition(DashboardBaseModel):
    """A status condition copied from a Kubernetes object.

    Every field is a plain string; anything missing in the source object
    becomes an empty string.
    """

    type: str = ""
    status: str = ""
    reason: str = ""
    message: str = ""
    last_transition_time: str = ""


class LabelSelector(DashboardBaseModel):
    """Kubernetes label selector restricted to exact matches."""

    match_labels: dict[str, str] | None = None


class MatchExpression(DashboardBaseModel):
    """Label or claim expression."""

    key: str = ""
    operator: str = ""
    values: list[str] | None = None


class LabelSelectorWithExpressions(DashboardBaseModel):
    """Label selector with set-based expressions."""

    match_labels: dict[str, str] | None = None
    match_expressions: list[MatchExpression] | None = None


class ObjectIdentity(DashboardBaseModel):
    """Identity fields every converted resource carries."""

    id: str = Field(default="", description="Object UID")
    name: str = Field(default="", description="Object name")
