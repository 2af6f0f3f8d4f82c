"""Validation helpers for operator input."""

import ipaddress
import re

from hosting_automator.errors import ValidationError

LABEL_PATTERN = r"[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?"
DOMAIN_RE = re.compile(rf"^({LABEL_PATTERN}\.)+{LABEL_PATTERN}$")
LABEL_RE = re.compile(rf"^{LABEL_PATTERN}$")


def is_ip_address(value: str) -> bool:
    """Return True for a valid IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def normalize_domain(domain: str) -> str:
    """
    Normalise and validate an apex domain.

    Whitespace is trimmed, the name lower-cased and a trailing dot dropped.
    Raises ValidationError when the result is empty or not a DNS name with
    at least two labels.
    """
    normalized = (domain or "").strip().lower().rstrip(".")
    if not normalized:
        raise ValidationError("Domain cannot be empty.")
    if not DOMAIN_RE.match(normalized):
        raise ValidationError(f"'{domain}' is not a valid root domain (e.g., example.com).")
    return normalized


def validate_subdomain_name(name: str) -> str:
    """A single DNS label, excluding 'www' which is served from the www tree."""
    normalized = (name or "").strip().lower()
    if not normalized:
        raise ValidationError("Subdomain name cannot be empty.")
    if not LABEL_RE.match(normalized):
        raise ValidationError(f"'{name}' is not a valid subdomain label.")
    if normalized == "www":
        raise ValidationError("'www' is served from the main site directory.")
    return normalized
