"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"
os.environ.setdefault("DASHBOARD_USE_MOCK", "false")
os.environ.setdefault("DASHBOARD_BYPASS_AUTH", "false")


def make_condition(
    type_: str,
    status: str,
    reason: str = "",
    message: str = "",
    last_transition_time: str = "2024-05-01T10:00:00Z",
) -> dict[str, str]:
    return {
        "type": type_,
        "status": status,
        "reason": reason,
        "message": message,
        "lastTransitionTime": last_transition_time,
    }


def make_managed_cluster(
    name: str,
    available: str | None = "True",
    labels: dict[str, str] | None = None,
    version: str | None = "v1.29.2",
    extra_conditions: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    """Raw ManagedCluster as the API server returns it."""
    conditions = list(extra_conditions or [])
    if available is not None:
        conditions.append(
            make_condition("ManagedClusterConditionAvailable", available, "ManagedClusterAvailable")
        )
    metadata: dict[str, Any] = {
        "name": name,
        "uid": f"{name}-uid",
        "creationTimestamp": "2024-04-01T08:00:00Z",
    }
    if labels is not None:
        metadata["labels"] = labels
    status: dict[str, Any] = {"conditions": conditions}
    if version is not None:
        status["version"] = {"kubernetes": version}
    return {
        "apiVersion": "cluster.open-cluster-management.io/v1",
        "kind": "ManagedCluster",
        "metadata": metadata,
        "spec": {"hubAcceptsClient": True},
        "status": status,
    }


@pytest.fixture
def online_cluster() -> dict[str, Any]:
    return make_managed_cluster("cluster-east", "True", labels={"region": "east"})


@pytest.fixture
def offline_cluster() -> dict[str, Any]:
    return make_managed_cluster("cluster-west", "False", labels={"region": "west"})


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: Slow tests")


@pytest.fixture
def condition_factory():
    return make_condition


@pytest.fixture
def cluster_factory():
    return make_managed_cluster
