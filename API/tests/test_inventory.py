import pytest
from unittest.mock import AsyncMock

from docklite_agent.domain.container import LifecycleState
from docklite_agent.domain.templates import TemplateKind
from docklite_agent.services.inventory_service import InventoryService

LABELLED_DB = {
    "Id": "db1",
    "Names": ["/docklite-db-shop"],
    "Image": "postgres:16-alpine",
    "State": "running",
    "Status": "Up 2 hours",
    "Created": 1700000000,
    "Labels": {
        "docklite.managed": "true",
        "docklite.database": "shop",
        "docklite.type": "postgres",
        "docklite.username": "docklite",
        "docklite.password": "pw",
        "docklite.db.port": "5433",
    },
    "Ports": [{"PrivatePort": 5432, "PublicPort": 5433, "Type": "tcp"}],
}

LEGACY_DB = {
    "Id": "db2",
    "Names": ["/old-postgres"],
    "Image": "postgres:14",
    "State": "exited",
    "Status": "Exited (0) 3 days ago",
    "Created": 1600000000,
    "Labels": {},
    "Ports": [{"PrivatePort": 5432, "PublicPort": 49160, "Type": "tcp"}],
}

UNRELATED = {
    "Id": "web1",
    "Names": ["/nginx-proxy"],
    "Image": "nginx:alpine",
    "State": "running",
    "Status": "Up 5 minutes",
    "Created": 1700000100,
    "Labels": {"com.example.owner": "ops"},
    "Ports": [{"PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"}],
}

SITE = {
    "Id": "site1",
    "Names": ["/docklite-site-example-com"],
    "Image": "node:20-alpine",
    "State": "created",
    "Status": "Created",
    "Created": 1700000200,
    "Labels": {
        "docklite.managed": "true",
        "docklite.domain": "example.com",
        "docklite.type": "node",
        "traefik.enable": "true",
        "traefik.http.routers.docklite-example-com.rule": "Host(`example.com`)",
        "traefik.http.services.docklite-example-com.loadbalancer.server.port": "3000",
    },
    "Ports": [],
}


@pytest.mark.asyncio
async def test_list_databases_over_mixed_inventory():
    docker_runtime = AsyncMock()
    docker_runtime.list_containers = AsyncMock(return_value=[LABELLED_DB, LEGACY_DB, UNRELATED])

    records = await InventoryService(docker_runtime).list_databases()

    assert [r.id for r in records] == ["db1", "db2"]
    shop, legacy = records
    assert (shop.name, shop.port, shop.username, shop.password) == ("shop", 5433, "docklite", "pw")
    assert shop.status == "Up 2 hours"
    # No labels: name comes from the container, port from the published mapping
    assert (legacy.name, legacy.port, legacy.username, legacy.password) == ("old-postgres", 49160, "", "")
    docker_runtime.list_containers.assert_awaited_once_with(all=True, labels=None)


@pytest.mark.asyncio
async def test_database_label_alone_marks_a_database():
    entry = dict(UNRELATED, Id="db3", Labels={"docklite.database": "crm"})
    docker_runtime = AsyncMock()
    docker_runtime.list_containers = AsyncMock(return_value=[entry])

    records = await InventoryService(docker_runtime).list_databases()

    assert [r.name for r in records] == ["crm"]
    assert records[0].port == 0


@pytest.mark.asyncio
async def test_list_containers_builds_resources():
    docker_runtime = AsyncMock()
    docker_runtime.list_containers = AsyncMock(return_value=[SITE, UNRELATED])

    resources = await InventoryService(docker_runtime).list_containers(all=False)

    site, other = resources
    assert site.name == "docklite-site-example-com"
    assert site.state is LifecycleState.CREATED
    assert site.kind is TemplateKind.NODE
    assert site.managed
    assert site.metadata.routing.port == 3000
    assert other.name == "nginx-proxy"
    assert other.kind is None
    assert not other.managed
    assert other.public_port(80) == 8080
    docker_runtime.list_containers.assert_awaited_once_with(all=False, labels=None)


@pytest.mark.asyncio
async def test_list_managed_containers_filters_by_label():
    docker_runtime = AsyncMock()
    docker_runtime.list_containers = AsyncMock(return_value=[SITE])

    await InventoryService(docker_runtime).list_containers(managed_only=True)

    docker_runtime.list_containers.assert_awaited_once_with(all=True, labels=["docklite.managed=true"])


def test_lifecycle_state_folding():
    assert LifecycleState.from_engine("exited") is LifecycleState.STOPPED
    assert LifecycleState.from_engine("dead") is LifecycleState.STOPPED
    assert LifecycleState.from_engine("restarting") is LifecycleState.RUNNING
    assert LifecycleState.from_engine("removing") is LifecycleState.REMOVED
