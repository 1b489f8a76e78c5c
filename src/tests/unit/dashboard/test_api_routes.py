"""Unit tests for the resource endpoints."""

import pytest

from ocm_dashboard.clients import OCMClientError

CLUSTERSET_LABEL = "cluster.open-cluster-management.io/clusterset"


@pytest.fixture
def hub(fake_client, cluster_factory):
    """Populate the fake client with a small hub."""
    fake_client.items = {
        "managedclusters": [
            cluster_factory("east", "True", labels={CLUSTERSET_LABEL: "prod"}),
            cluster_factory("west", "False", labels={CLUSTERSET_LABEL: "prod"}),
            "not-an-object",
        ],
        "managedclustersets": [
            {
                "metadata": {"name": "prod", "uid": "prod-uid"},
                "spec": {"clusterSelector": {"selectorType": "ExclusiveClusterSetLabel"}},
            }
        ],
        "managedclustersetbindings": [
            {"metadata": {"name": "prod", "namespace": "apps"}, "spec": {"clusterSet": "prod"}}
        ],
        "placements": [
            {"metadata": {"name": "web", "namespace": "apps"}, "spec": {"clusterSets": ["prod"]}},
            {"metadata": {"name": "db", "namespace": "data"}},
        ],
        "placementdecisions": [
            {
                "metadata": {"name": "web-decision-1", "namespace": "apps"},
                "status": {"decisions": [{"clusterName": "east"}]},
            }
        ],
        "managedclusteraddons": [
            {"metadata": {"name": "application-manager", "namespace": "east"}},
            {"metadata": {"name": "application-manager", "namespace": "west"}},
        ],
        "manifestworks": [{"metadata": {"name": "nginx", "namespace": "east"}}],
    }
    return fake_client


class TestClusterRoutes:
    """Test managed cluster endpoints."""

    async def test_list_clusters(self, api_client, hub) -> None:
        response = await api_client.get("/api/clusters")
        assert response.status_code == 200
        body = response.json()
        assert [(c["name"], c["status"]) for c in body] == [("east", "Online"), ("west", "Offline")]

    async def test_get_cluster(self, api_client, hub) -> None:
        response = await api_client.get("/api/clusters/east")
        assert response.status_code == 200
        assert response.json()["version"] == "v1.29.2"

    async def test_get_cluster_not_found(self, api_client, hub) -> None:
        response = await api_client.get("/api/clusters/north")
        assert response.status_code == 404
        assert response.json() == {"error": "ManagedCluster north not found"}

    async def test_cluster_addons(self, api_client, hub) -> None:
        response = await api_client.get("/api/clusters/west/addons")
        assert [a["namespace"] for a in response.json()] == ["west"]

    async def test_cluster_addon(self, api_client, hub) -> None:
        response = await api_client.get("/api/clusters/east/addons/application-manager")
        assert response.status_code == 200
        assert response.json()["name"] == "application-manager"

    async def test_list_failure(self, api_client, hub) -> None:
        hub.list_errors = [OCMClientError("failed to list managedclusters: 500 Internal Server Error")]
        response = await api_client.get("/api/clusters")
        assert response.status_code == 500
        assert response.json() == {"error": "failed to list managedclusters: 500 Internal Server Error"}

    async def test_no_client(self, api_client, dashboard_app) -> None:
        dashboard_app.state.ocm_client = None
        response = await api_client.get("/api/clusters")
        assert response.status_code == 500
        assert response.json() == {"error": "Kubernetes client not initialized"}


class TestClusterSetRoutes:
    """Test cluster set and binding endpoints."""

    async def test_list_cluster_sets_counts_members(self, api_client, hub) -> None:
        body = (await api_client.get("/api/clustersets")).json()
        assert body[0]["name"] == "prod"
        assert body[0]["clusterCount"] == 2

    async def test_get_cluster_set(self, api_client, hub) -> None:
        response = await api_client.get("/api/clustersets/prod")
        assert response.json()["clusterCount"] == 2

    async def test_bindings(self, api_client, hub) -> None:
        everywhere = (await api_client.get("/api/clustersetbindings")).json()
        in_apps = (await api_client.get("/api/namespaces/apps/clustersetbindings")).json()
        one = (await api_client.get("/api/namespaces/apps/clustersetbindings/prod")).json()
        assert len(everywhere) == len(in_apps) == 1
        assert one["spec"]["clusterSet"] == "prod"


class TestPlacementRoutes:
    """Test placement and decision endpoints."""

    async def test_list_all_placements(self, api_client, hub) -> None:
        body = (await api_client.get("/api/placements")).json()
        assert {p["name"] for p in body} == {"web", "db"}

    async def test_list_namespace_placements(self, api_client, hub) -> None:
        body = (await api_client.get("/api/namespaces/apps/placements")).json()
        assert [p["name"] for p in body] == ["web"]

    async def test_get_placement(self, api_client, hub) -> None:
        body = (await api_client.get("/api/namespaces/apps/placements/web")).json()
        assert body["clusterSets"] == ["prod"]
        assert body["satisfied"] is False

    async def test_placement_decisions_use_label_selector(self, api_client, hub) -> None:
        response = await api_client.get("/api/namespaces/apps/placements/web/decisions")
        assert response.status_code == 200
        collection, selector = hub.list_calls[-1]
        assert collection.plural == "placementdecisions"
        assert collection.namespace == "apps"
        assert selector == "cluster.open-cluster-management.io/placement=web"

    async def test_get_decision(self, api_client, hub) -> None:
        body = (await api_client.get("/api/namespaces/apps/placementdecisions/web-decision-1")).json()
        assert body["decisions"] == [{"clusterName": "east", "reason": "Selected by placement"}]


class TestManifestWorkRoutes:
    """Test manifest work endpoints."""

    async def test_list(self, api_client, hub) -> None:
        body = (await api_client.get("/api/namespaces/east/manifestworks")).json()
        assert [w["name"] for w in body] == ["nginx"]

    async def test_get_missing(self, api_client, hub) -> None:
        response = await api_client.get("/api/namespaces/west/manifestworks/nginx")
        assert response.status_code == 404


class TestServiceRoutes:
    """Test health and root endpoints."""

    async def test_health(self, api_client) -> None:
        body = (await api_client.get("/health")).json()
        assert body["status"] == "healthy"
        assert body["kubernetes"] is True
        assert body["mock"] is False

    async def test_health_without_client(self, api_client, dashboard_app) -> None:
        dashboard_app.state.ocm_client = None
        assert (await api_client.get("/health")).json()["kubernetes"] is False

    async def test_healthz(self, api_client) -> None:
        assert (await api_client.get("/healthz")).json() == {"status": "ok"}

    async def test_root(self, api_client) -> None:
        body = (await api_client.get("/")).json()
        assert body["service"] == "ocm-dashboard"

    async def test_request_id_generated(self, api_client) -> None:
        response = await api_client.get("/healthz")
        assert len(response.headers["x-request-id"]) == 32

    async def test_request_id_propagated(self, api_client) -> None:
        response = await api_client.get("/healthz", headers={"X-Request-ID": "req-123"})
        assert response.headers["x-request-id"] == "req-123"
