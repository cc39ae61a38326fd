import logging
import time
from pathlib import Path
from typing import Dict, Optional

from docklite_agent.core.config import Settings
from docklite_agent.core.errors import ValidationError
from docklite_agent.domain.container import ContainerCreateSpec, SiteSpec
from docklite_agent.domain.metadata import ResourceMetadata, RoutingRule
from docklite_agent.domain.naming import (
    build_host_rule,
    sanitize_domain,
    site_container_name,
    validate_domain,
    validate_port,
)
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.domain.templates import (
    TEMPLATES,
    TemplateKind,
    parse_site_kind,
)
from docklite_agent.services.image_service import ImageService
from docklite_agent.services.network_service import NetworkService
from docklite_agent.services.provisioning import create_with_conflict_retry
from docklite_agent.services.site_files import seed_site_files

logger = logging.getLogger(__name__)


def _timestamp_suffix(name: str) -> str:
    return f"{name}-{int(time.time())}"


class SiteService:
    def __init__(
        self,
        docker_runtime: ContainerEngine,
        network_service: NetworkService,
        image_service: ImageService,
        settings: Settings,
    ):
        self.docker_runtime = docker_runtime
        self.network_service = network_service
        self.image_service = image_service
        self.settings = settings

    def build_spec(
        self,
        domain: str,
        template: Optional[str],
        include_www: bool = True,
        port: Optional[int] = None,
    ) -> SiteSpec:
        """Validate a site request. Raises ValidationError before any engine call."""
        kind = parse_site_kind(template)
        domain = validate_domain(domain)
        profile = TEMPLATES[kind]

        internal_port = profile.default_port
        if kind is TemplateKind.NODE:
            internal_port = validate_port(port if port is not None else profile.default_port)

        base_dir = self.settings.SITES_BASE_DIR.resolve()
        source_path = (base_dir / domain).resolve()
        if source_path.parent != base_dir:
            raise ValidationError(f"invalid domain: {domain!r}")

        return SiteSpec(
            domain=domain,
            kind=kind,
            include_www=include_www,
            internal_port=internal_port,
            source_path=str(source_path),
            read_only=not profile.writable,
        )

    def site_labels(self, site: SiteSpec) -> Dict[str, str]:
        metadata = ResourceMetadata(
            kind=site.kind,
            domain=site.domain,
            routing=RoutingRule(
                router=f"docklite-{sanitize_domain(site.domain)}",
                rule=build_host_rule(site.domain, site.include_www),
                port=site.internal_port,
                entrypoint=self.settings.TRAEFIK_ENTRYPOINT,
                tls=True,
                cert_resolver=self.settings.TRAEFIK_CERT_RESOLVER,
            ),
        )
        return metadata.to_labels()

    def container_spec(self, site: SiteSpec, image: str) -> ContainerCreateSpec:
        profile = TEMPLATES[site.kind]
        mode = "ro" if site.read_only else "rw"
        return ContainerCreateSpec(
            name=site_container_name(site.domain),
            image=image,
            container_port=site.internal_port,
            labels=self.site_labels(site),
            environment=profile.environment(site.internal_port),
            command=profile.command,
            working_dir=profile.working_dir,
            host_port=None,
            binds=[f"{site.source_path}:{profile.mount_target}:{mode}"],
            network=self.settings.NETWORK_NAME,
        )

    async def create_site(
        self,
        domain: str,
        template: Optional[str] = None,
        include_www: bool = True,
        port: Optional[int] = None,
    ) -> str:
        site = self.build_spec(domain, template, include_www, port)

        if self.settings.SEED_SITE_FILES:
            await seed_site_files(
                Path(site.source_path),
                site.domain,
                site.kind,
                site.internal_port,
            )

        await self.network_service.ensure_network(self.settings.NETWORK_NAME)
        image = self.image_service.image_for(site.kind)
        await self.image_service.ensure_image(image)

        spec = self.container_spec(site, image)
        container_id = await create_with_conflict_retry(
            self.docker_runtime, spec, _timestamp_suffix
        )
        # A failed start leaves the container in "created"; nothing is rolled back.
        await self.docker_runtime.start(container_id)

        logger.info(f"[Site] Started {site.kind.value} site {site.domain} ({container_id[:12]})")
        return container_id
