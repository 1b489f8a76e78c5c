"""Shared data models.

All UI-facing models serialize to camelCase JSON through
``DashboardBaseModel.to_api()``.
"""

from .addon import (
    AddonRegistration,
    AddonRegistrationSubject,
    AddonSupportedConfig,
    ManagedClusterAddon,
)
from .base import DashboardBaseModel
from .cluster import (
    Cluster,
    ClusterClaim,
    ClusterStatus,
    ManagedClusterClientConfig,
    Taint,
)
from .clusterset import (
    ClusterSelector,
    ClusterSet,
    ClusterSetBinding,
    ClusterSetBindingSpec,
    ClusterSetBindingStatus,
    ClusterSetSpec,
    ClusterSetStatus,
)
from .common import (
    Condition,
    LabelSelector,
    LabelSelectorWithExpressions,
    MatchExpression,
    ObjectIdentity,
)
from .events import WatchEvent, WatchEventType
from .manifestwork import (
    Manifest,
    ManifestCondition,
    ManifestResourceMeta,
    ManifestResourceStatus,
    ManifestWork,
)
from .placement import (
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

__all__ = [
    # Base
    "DashboardBaseModel",
    "ObjectIdentity",
    # Common
    "Condition",
    "LabelSelector",
    "LabelSelectorWithExpressions",
    "MatchExpression",
    # Cluster
    "Cluster",
    "ClusterStatus",
    "ClusterClaim",
    "Taint",
    "ManagedClusterClientConfig",
    # Cluster sets
    "ClusterSet",
    "ClusterSetSpec",
    "ClusterSetStatus",
    "ClusterSelector",
    "ClusterSetBinding",
    "ClusterSetBindingSpec",
    "ClusterSetBindingStatus",
    # Placement
    "Placement",
    "Predicate",
    "RequiredClusterSelector",
    "ClaimSelectorWithExpressions",
    "CelSelectorWithExpressions",
    "PrioritizerPolicy",
    "PrioritizerConfig",
    "ScoreCoordinate",
    "AddOnScore",
    "PlacementToleration",
    "DecisionStrategy",
    "GroupStrategy",
    "DecisionGroup",
    "GroupClusterSelector",
    "DecisionGroupStatus",
    "PlacementDecision",
    "ClusterDecision",
    # Addons
    "ManagedClusterAddon",
    "AddonRegistration",
    "AddonRegistrationSubject",
    "AddonSupportedConfig",
    # Manifest works
    "ManifestWork",
    "Manifest",
    "ManifestCondition",
    "ManifestResourceMeta",
    "ManifestResourceStatus",
    # Events
    "WatchEvent",
    "WatchEventType",
]
