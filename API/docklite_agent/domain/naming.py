import re

from docklite_agent.core.errors import ValidationError

SITE_PREFIX = "docklite-site"
DATABASE_PREFIX = "docklite-db"

_NOT_ALNUM = re.compile(r"[^A-Za-z0-9]")
_NOT_DB_SAFE = re.compile(r"[^A-Za-z0-9_]")
_DOMAIN_CHARS = re.compile(r"[A-Za-z0-9.-]+")


def sanitize_domain(domain: str) -> str:
    """
    Turn a domain into a token safe for container names and label keys.

    Every character that is not an ASCII letter or digit becomes "-", dashes
    at either end are dropped and the result is lower-cased. Falls back to
    "site" when nothing is left.
    """
    token = _NOT_ALNUM.sub("-", domain).strip("-").lower()
    return token or "site"


def sanitize_database_name(name: str) -> str:
    sanitized = _NOT_DB_SAFE.sub("_", name.strip()).strip("_")
    if not sanitized:
        raise ValidationError("invalid database name")
    return sanitized


def validate_domain(domain: str) -> str:
    domain = (domain or "").strip()
    if not domain:
        raise ValidationError("domain is required")
    # Used as a directory name under the sites root and inside a bind spec.
    if domain in (".", "..") or not _DOMAIN_CHARS.fullmatch(domain):
        raise ValidationError(f"invalid domain: {domain!r}")
    return domain


def validate_port(port: int) -> int:
    if port < 1 or port > 65535:
        raise ValidationError(f"invalid port: {port}")
    return port


def build_host_rule(domain: str, include_www: bool) -> str:
    normalized = domain.strip().lower()
    if include_www and not normalized.startswith("www."):
        return f"Host(`{normalized}`,`www.{normalized}`)"
    return f"Host(`{normalized}`)"


def site_container_name(domain: str) -> str:
    return f"{SITE_PREFIX}-{sanitize_domain(domain)}"


def database_container_name(name: str) -> str:
    return f"{DATABASE_PREFIX}-{sanitize_domain(name)}"
