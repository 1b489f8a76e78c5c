"""HTTP routers for the OCM dashboard."""

from . import (
    clusters,
    clustersetbindings,
    clustersets,
    health,
    manifestworks,
    placementdecisions,
    placements,
    streaming,
)

__all__ = [
    "clusters",
    "clustersets",
    "clustersetbindings",
    "placements",
    "placementdecisions",
    "manifestworks",
    "streaming",
    "health",
]
