import pytest

from hosting_automator.errors import ValidationError
from hosting_automator.validators import (
    is_ip_address,
    normalize_domain,
    validate_subdomain_name,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("example.com", "example.com"),
        ("  Example.COM  ", "example.com"),
        ("example.com.", "example.com"),
        ("my-site.co.uk", "my-site.co.uk"),
    ],
)
def test_normalize_domain(raw, expected):
    assert normalize_domain(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "   ", "localhost", "*.example.com", "https://example.com", "exa mple.com", "-bad.com"]
)
def test_normalize_domain_rejects(raw):
    with pytest.raises(ValidationError):
        normalize_domain(raw)


def test_subdomain_name():
    assert validate_subdomain_name(" Portfolio ") == "portfolio"


@pytest.mark.parametrize("name", ["", "www", "a.b", "bad_name", "-x"])
def test_subdomain_name_rejects(name):
    with pytest.raises(ValidationError):
        validate_subdomain_name(name)


def test_is_ip_address():
    assert is_ip_address("93.136.180.191")
    assert is_ip_address("2001:db8::1")
    assert not is_ip_address("<html>")
    assert not is_ip_address("256.1.1.1")
