"""
Typed view over the label bag attached to every container.

Labels are the only metadata channel this agent has: workload kind, Traefik
routing and database credentials all live there. Everything that writes labels
goes through ResourceMetadata.to_labels() and everything that reads them goes
through ResourceMetadata.from_labels(), so key names exist in one place.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, Mapping

from docklite_agent.domain.templates import TemplateKind

MANAGED_LABEL = "docklite.managed"
DOMAIN_LABEL = "docklite.domain"
TYPE_LABEL = "docklite.type"
DATABASE_LABEL = "docklite.database"
USERNAME_LABEL = "docklite.username"
PASSWORD_LABEL = "docklite.password"
DB_PORT_LABEL = "docklite.db.port"

TRAEFIK_ENABLE_LABEL = "traefik.enable"

# Databases were always labelled "postgres"; keep writing that so older
# containers and new ones read back the same way.
_KIND_TO_LABEL = {
    TemplateKind.STATIC: "static",
    TemplateKind.PHP: "php",
    TemplateKind.NODE: "node",
    TemplateKind.DATABASE: "postgres",
}
_LABEL_TO_KIND = {v: k for k, v in _KIND_TO_LABEL.items()}
_LABEL_TO_KIND["database"] = TemplateKind.DATABASE

_ROUTER_RULE = re.compile(r"^traefik\.http\.routers\.(?P<router>[^.]+)\.rule$")


def _router_key(router: str, suffix: str) -> str:
    return f"traefik.http.routers.{router}.{suffix}"


def _service_port_key(router: str) -> str:
    return f"traefik.http.services.{router}.loadbalancer.server.port"


def _parse_int(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass
class RoutingRule:
    router: str
    rule: str
    port: int
    entrypoint: str = "websecure"
    tls: bool = True
    cert_resolver: str = "letsencrypt"

    def to_labels(self) -> Dict[str, str]:
        return {
            TRAEFIK_ENABLE_LABEL: "true",
            _router_key(self.router, "rule"): self.rule,
            _router_key(self.router, "entrypoints"): self.entrypoint,
            _router_key(self.router, "tls"): "true" if self.tls else "false",
            _router_key(self.router, "tls.certresolver"): self.cert_resolver,
            _service_port_key(self.router): str(self.port),
        }

    @classmethod
    def from_labels(cls, labels: Mapping[str, str]) -> "RoutingRule | None":
        if labels.get(TRAEFIK_ENABLE_LABEL) != "true":
            return None
        for key, value in labels.items():
            match = _ROUTER_RULE.match(key)
            if not match:
                continue
            router = match.group("router")
            return cls(
                router=router,
                rule=value,
                port=_parse_int(labels.get(_service_port_key(router))) or 0,
                entrypoint=labels.get(_router_key(router, "entrypoints"), ""),
                tls=labels.get(_router_key(router, "tls")) == "true",
                cert_resolver=labels.get(_router_key(router, "tls.certresolver"), ""),
            )
        return None


@dataclass
class ResourceMetadata:
    managed: bool = True
    kind: TemplateKind | None = None
    domain: str | None = None
    routing: RoutingRule | None = None
    database: str | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    db_port: int | None = None

    @property
    def is_database(self) -> bool:
        return self.kind is TemplateKind.DATABASE or bool(self.database)

    def to_labels(self) -> Dict[str, str]:
        labels: Dict[str, str] = {}
        if self.managed:
            labels[MANAGED_LABEL] = "true"
        if self.domain is not None:
            labels[DOMAIN_LABEL] = self.domain
        if self.kind is not None:
            labels[TYPE_LABEL] = _KIND_TO_LABEL[self.kind]
        if self.database is not None:
            labels[DATABASE_LABEL] = self.database
        if self.username is not None:
            labels[USERNAME_LABEL] = self.username
        if self.password is not None:
            labels[PASSWORD_LABEL] = self.password
        if self.db_port:
            labels[DB_PORT_LABEL] = str(self.db_port)
        if self.routing is not None:
            labels.update(self.routing.to_labels())
        return labels

    @classmethod
    def from_labels(cls, labels: Mapping[str, str] | None) -> "ResourceMetadata":
        labels = labels or {}
        return cls(
            managed=labels.get(MANAGED_LABEL) == "true",
            kind=_LABEL_TO_KIND.get(labels.get(TYPE_LABEL, "")),
            domain=labels.get(DOMAIN_LABEL) or None,
            routing=RoutingRule.from_labels(labels),
            database=labels.get(DATABASE_LABEL) or None,
            username=labels.get(USERNAME_LABEL) or None,
            password=labels.get(PASSWORD_LABEL) or None,
            db_port=_parse_int(labels.get(DB_PORT_LABEL)),
        )
