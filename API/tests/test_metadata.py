from docklite_agent.domain.metadata import ResourceMetadata, RoutingRule
from docklite_agent.domain.templates import TemplateKind


def test_site_labels_are_namespaced_by_router():
    metadata = ResourceMetadata(
        kind=TemplateKind.STATIC,
        domain="example.com",
        routing=RoutingRule(router="docklite-example-com", rule="Host(`example.com`)", port=80),
    )

    labels = metadata.to_labels()

    assert labels == {
        "docklite.managed": "true",
        "docklite.domain": "example.com",
        "docklite.type": "static",
        "traefik.enable": "true",
        "traefik.http.routers.docklite-example-com.rule": "Host(`example.com`)",
        "traefik.http.routers.docklite-example-com.entrypoints": "websecure",
        "traefik.http.routers.docklite-example-com.tls": "true",
        "traefik.http.routers.docklite-example-com.tls.certresolver": "letsencrypt",
        "traefik.http.services.docklite-example-com.loadbalancer.server.port": "80",
    }


def test_site_labels_read_back():
    original = ResourceMetadata(
        kind=TemplateKind.NODE,
        domain="app.io",
        routing=RoutingRule(
            router="docklite-app-io",
            rule="Host(`app.io`,`www.app.io`)",
            port=4000,
            entrypoint="web",
            tls=False,
            cert_resolver="staging",
        ),
    )

    parsed = ResourceMetadata.from_labels(original.to_labels())

    assert parsed == original


def test_database_kind_is_written_as_postgres():
    labels = ResourceMetadata(
        kind=TemplateKind.DATABASE,
        database="shop",
        username="docklite",
        password="secret",
        db_port=5433,
    ).to_labels()

    assert labels["docklite.type"] == "postgres"
    assert labels["docklite.db.port"] == "5433"
    assert "traefik.enable" not in labels


def test_database_kind_accepts_both_spellings():
    for value in ("postgres", "database"):
        metadata = ResourceMetadata.from_labels({"docklite.type": value})
        assert metadata.kind is TemplateKind.DATABASE
        assert metadata.is_database


def test_unrelated_labels_parse_to_unmanaged():
    metadata = ResourceMetadata.from_labels({"com.example.owner": "someone", "docklite.db.port": "x"})

    assert metadata.managed is False
    assert metadata.kind is None
    assert metadata.routing is None
    assert metadata.db_port is None
    assert not metadata.is_database


def test_password_is_not_in_repr():
    assert "hunter2" not in repr(ResourceMetadata(password="hunter2"))
