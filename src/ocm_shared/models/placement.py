"""Placement and placement decision models."""

from pydantic import Field

from .base import DashboardBaseModel
from .common import Condition, LabelSelectorWithExpressions, MatchExpression, ObjectIdentity


class ClaimSelectorWithExpressions(DashboardBaseModel):
    match_expressions: list[MatchExpression] | None = None


class CelSelectorWithExpressions(DashboardBaseModel):
    cel_expressions: list[str] | None = None


class RequiredClusterSelector(DashboardBaseModel):
    label_selector: LabelSelectorWithExpressions | None = None
    claim_selector: ClaimSelectorWithExpressions | None = None
    cel_selector: CelSelectorWithExpressions | None = None


class Predicate(DashboardBaseModel):
    required_cluster_selector: RequiredClusterSelector | None = None


class AddOnScore(DashboardBaseModel):
    resource_name: str = ""
    score_name: str = ""


class ScoreCoordinate(DashboardBaseModel):
    type: str | None = None
    built_in: str | None = None
    add_on: AddOnScore | None = None


class PrioritizerConfig(DashboardBaseModel):
    score_coordinate: ScoreCoordinate | None = None
    weight: int | None = None


class PrioritizerPolicy(DashboardBaseModel):
    mode: str | None = None
    configurations: list[PrioritizerConfig] | None = None


class GroupClusterSelector(DashboardBaseModel):
    label_selector: LabelSelectorWithExpressions | None = None


class DecisionGroup(DashboardBaseModel):
    group_name: str | None = None
    group_cluster_selector: GroupClusterSelector = Field(default_factory=GroupClusterSelector)


class GroupStrategy(DashboardBaseModel):
    decision_groups: list[DecisionGroup] | None = None
    clusters_per_decision_group: str | None = None


class DecisionStrategy(DashboardBaseModel):
    group_strategy: GroupStrategy = Field(default_factory=GroupStrategy)


class PlacementToleration(DashboardBaseModel):
    key: str | None = None
    operator: str | None = None
    value: str | None = None
    effect: str | None = None
    toleration_seconds: int | None = None


class DecisionGroupStatus(DashboardBaseModel):
    decision_group_index: int = 0
    decision_group_name: str | None = None
    decisions: list[str] | None = None
    cluster_count: int = 0


class Placement(ObjectIdentity):
    """Flattened Placement.

    ``satisfied`` mirrors a ``PlacementSatisfied`` condition with status
    ``True``.
    """

    namespace: str = ""
    creation_timestamp: str | None = None
    cluster_sets: list[str] | None = None
    number_of_clusters: int | None = None
    predicates: list[Predicate] | None = None
    prioritizer_policy: PrioritizerPolicy | None = None
    tolerations: list[PlacementToleration] | None = None
    decision_strategy: DecisionStrategy | None = None
    number_of_selected_clusters: int = 0
    decision_groups: list[DecisionGroupStatus] | None = None
    conditions: list[Condition] = Field(default_factory=list)
    satisfied: bool = False
    reason_message: str | None = None


class ClusterDecision(DashboardBaseModel):
    cluster_name: str = ""
    reason: str = ""


class PlacementDecision(ObjectIdentity):
    """Flattened PlacementDecision."""

    namespace: str = ""
    decisions: list[ClusterDecision] = Field(default_factory=list)
