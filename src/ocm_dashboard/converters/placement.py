"""Placement and PlacementDecision conversion."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ocm_shared.models import (
    AddOnScore,
    CelSelectorWithExpressions,
    ClaimSelectorWithExpressions,
    ClusterDecision,
    DecisionGroup,
    DecisionGroupStatus,
    DecisionStrategy,
    GroupClusterSelector,
    GroupStrategy,
    Placement,
    PlacementDecision,
    PlacementToleration,
    Predicate,
    PrioritizerConfig,
    PrioritizerPolicy,
    RequiredClusterSelector,
    ScoreCoordinate,
)

from .common import (
    CONDITION_TRUE,
    convert_conditions,
    convert_label_selector,
    convert_match_expressions,
    creation_timestamp,
    decode_item,
    object_name,
    object_namespace,
    object_uid,
)
from .fields import mappings, nested, nested_int, nested_map, nested_str, string_list

PLACEMENT_LABEL = "cluster.open-cluster-management.io/placement"
PLACEMENT_SATISFIED_CONDITION = "PlacementSatisfied"
DEFAULT_DECISION_REASON = "Selected by placement"


def _predicate(raw: Mapping[str, Any]) -> Predicate:
    required = nested_map(raw, "requiredClusterSelector")
    if required is None:
        return Predicate()

    claim_selector = None
    raw_claims = nested_map(required, "claimSelector")
    if raw_claims is not None:
        claim_selector = ClaimSelectorWithExpressions(
            match_expressions=convert_match_expressions(raw_claims.get("matchExpressions"))
        )

    cel_selector = None
    raw_cel = nested_map(required, "celSelector")
    if raw_cel is not None:
        cel_selector = CelSelectorWithExpressions(
            cel_expressions=string_list(raw_cel.get("celExpressions"))
        )

    return Predicate(
        required_cluster_selector=RequiredClusterSelector(
            label_selector=convert_label_selector(required.get("labelSelector")),
            claim_selector=claim_selector,
            cel_selector=cel_selector,
        )
    )


def _prioritizer_policy(raw: Mapping[str, Any] | None) -> PrioritizerPolicy | None:
    if raw is None:
        return None
    configurations = []
    for cfg in mappings(raw.get("configurations")):
        coordinate = None
        raw_coordinate = nested_map(cfg, "scoreCoordinate")
        if raw_coordinate is not None:
            add_on = None
            raw_add_on = nested_map(raw_coordinate, "addOn")
            if raw_add_on is not None:
                add_on = AddOnScore(
                    resource_name=nested_str(raw_add_on, "resourceName", default=""),
                    score_name=nested_str(raw_add_on, "scoreName", default=""),
                )
            coordinate = ScoreCoordinate(
                type=nested_str(raw_coordinate, "type"),
                built_in=nested_str(raw_coordinate, "builtIn"),
                add_on=add_on,
            )
        configurations.append(
            PrioritizerConfig(score_coordinate=coordinate, weight=nested_int(cfg, "weight"))
        )
    return PrioritizerPolicy(
        mode=nested_str(raw, "mode"),
        configurations=configurations or None,
    )


def _decision_strategy(raw: Mapping[str, Any] | None) -> DecisionStrategy | None:
    if raw is None:
        return None
    group_strategy = nested_map(raw, "groupStrategy")
    groups = [
        DecisionGroup(
            group_name=nested_str(group, "groupName"),
            group_cluster_selector=GroupClusterSelector(
                label_selector=convert_label_selector(
                    nested(group, "groupClusterSelector", "labelSelector")
                )
            ),
        )
        for group in mappings(nested(group_strategy, "decisionGroups"))
    ]
    # clustersPerDecisionGroup is an int-or-string field
    per_group = nested_str(group_strategy, "clustersPerDecisionGroup")
    if per_group is None:
        count = nested_int(group_strategy, "clustersPerDecisionGroup")
        per_group = str(count) if count is not None else None
    return DecisionStrategy(
        group_strategy=GroupStrategy(
            decision_groups=groups or None,
            clusters_per_decision_group=per_group,
        )
    )


def _tolerations(raw: Any) -> list[PlacementToleration] | None:
    tolerations = [
        PlacementToleration(
            key=nested_str(tol, "key"),
            operator=nested_str(tol, "operator"),
            value=nested_str(tol, "value"),
            effect=nested_str(tol, "effect"),
            toleration_seconds=nested_int(tol, "tolerationSeconds"),
        )
        for tol in mappings(raw)
    ]
    return tolerations or None


def _decision_groups(raw: Any) -> list[DecisionGroupStatus] | None:
    groups = [
        DecisionGroupStatus(
            decision_group_index=nested_int(group, "decisionGroupIndex") or 0,
            decision_group_name=nested_str(group, "decisionGroupName"),
            decisions=string_list(group.get("decisions")),
            cluster_count=nested_int(group, "clusterCount") or 0,
        )
        for group in mappings(raw)
    ]
    return groups or None


def convert_placement(raw: Any) -> Placement:
    """Convert a raw Placement.

    ``satisfied`` is true when a ``PlacementSatisfied`` condition reports
    "True"; ``reasonMessage`` carries that condition's message.
    """
    item = decode_item(raw)
    spec = nested_map(item, "spec")
    status = nested_map(item, "status")
    conditions = convert_conditions(nested(status, "conditions"))

    satisfied = False
    reason_message = None
    for condition in conditions:
        if condition.type == PLACEMENT_SATISFIED_CONDITION:
            satisfied = condition.status == CONDITION_TRUE
            reason_message = condition.message or None

    predicates = [_predicate(pred) for pred in mappings(nested(spec, "predicates"))]

    return Placement(
        id=object_uid(item),
        name=object_name(item),
        namespace=object_namespace(item),
        creation_timestamp=creation_timestamp(item),
        cluster_sets=string_list(nested(spec, "clusterSets")),
        number_of_clusters=nested_int(spec, "numberOfClusters"),
        predicates=predicates or None,
        prioritizer_policy=_prioritizer_policy(nested_map(spec, "prioritizerPolicy")),
        tolerations=_tolerations(nested(spec, "tolerations")),
        decision_strategy=_decision_strategy(nested_map(spec, "decisionStrategy")),
        number_of_selected_clusters=nested_int(status, "numberOfSelectedClusters") or 0,
        decision_groups=_decision_groups(nested(status, "decisionGroups")),
        conditions=conditions,
        satisfied=satisfied,
        reason_message=reason_message,
    )


def convert_placement_decision(raw: Any) -> PlacementDecision:
    """Convert a raw PlacementDecision.

    A decision without a reason reports ``Selected by placement``.
    """
    item = decode_item(raw)
    decisions = [
        ClusterDecision(
            cluster_name=nested_str(entry, "clusterName", default=""),
            reason=nested_str(entry, "reason") or DEFAULT_DECISION_REASON,
        )
        for entry in mappings(nested(item, "status", "decisions"))
    ]
    return PlacementDecision(
        id=object_uid(item),
        name=object_name(item),
        namespace=object_namespace(item),
        decisions=decisions,
    )
