"""
Identifier normalization.

Turns whatever the user typed (bare domain, domain with a path, full URL)
into the origin Fastmail stores in MaskedEmail.forDomain, and into a key
for matching existing aliases against it.
"""
import re
from urllib.parse import urlsplit

DEFAULT_SCHEME = "https"

_ADDRESS_RE = re.compile(r"^[^@\s/]+@[^@\s/]+\.[^@\s/]+$")


def looks_like_address(identifier: str) -> bool:
    """Return True if the identifier is an email address rather than a site."""
    return bool(_ADDRESS_RE.match(identifier.strip()))


def _split(identifier: str):
    value = identifier.strip()
    if not value:
        raise ValueError("identifier must not be empty")
    if "://" not in value:
        value = f"{DEFAULT_SCHEME}://{value}"
    parts = urlsplit(value)
    if not parts.hostname:
        raise ValueError(f"cannot determine a domain from {identifier!r}")
    return parts


def normalize_origin(identifier: str) -> str:
    """
    Normalize an identifier to scheme://host[:port].

    Examples:
        "Example.com/login"          -> "https://example.com"
        "http://example.com:8080/x"  -> "http://example.com:8080"
    """
    parts = _split(identifier)
    origin = f"{parts.scheme.lower()}://{parts.hostname}"
    if parts.port:
        origin = f"{origin}:{parts.port}"
    return origin


def site_key(value: str) -> str:
    """Host used to match aliases to a site ("www." is ignored)."""
    host = _split(value).hostname
    if host.startswith("www."):
        host = host[len("www."):]
    return host
