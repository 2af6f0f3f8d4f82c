from datetime import date

import pytest

from hosting_automator import certificates
from hosting_automator.errors import CertificateError, ExecutionError

from .conftest import DOMAIN, ENDDATE


def test_request_wildcard_certificate_runs_interactively(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen.update(kwargs)

    monkeypatch.setattr(certificates, "run_command", fake_run)
    certificates.request_wildcard_certificate(DOMAIN)
    assert seen["cmd"] == [
        "certbot", "certonly", "--manual", "--preferred-challenges=dns",
        "-d", "example.com", "-d", "*.example.com",
    ]
    assert seen["capture_output"] is False
    assert seen["timeout"] is None


def test_certbot_failure_propagates(fake_run):
    fake_run.set_result("certbot", returncode=1)
    with pytest.raises(ExecutionError):
        certificates.request_wildcard_certificate(DOMAIN)


def test_verify_certificate(config, issuing_certbot):
    with pytest.raises(CertificateError):
        certificates.verify_certificate(config, DOMAIN)
    certificates.request_wildcard_certificate(DOMAIN)
    assert certificates.verify_certificate(config, DOMAIN) == config.fullchain(DOMAIN)


def test_write_ssl_options(config):
    path = certificates.write_ssl_options(config)
    assert "ssl_protocols TLSv1.2 TLSv1.3;" in path.read_text()


def test_ensure_dhparams(config, fake_run):
    assert certificates.ensure_dhparams(config) is True
    assert fake_run.calls == [["openssl", "dhparam", "-out", str(config.dhparams_file), "2048"]]
    config.dhparams_file.write_text("PARAMS")
    assert certificates.ensure_dhparams(config) is False
    assert len(fake_run.calls) == 1


@pytest.mark.parametrize(
    "output,expected",
    [
        (ENDDATE, date(2027, 1, 17)),
        ("notAfter=Mar  5 23:59:59 2027 GMT", date(2027, 3, 5)),
    ],
)
def test_parse_openssl_enddate(output, expected):
    assert certificates.parse_openssl_enddate(output) == expected


def test_parse_openssl_enddate_rejects_garbage():
    with pytest.raises(CertificateError):
        certificates.parse_openssl_enddate("unable to load certificate")


def test_write_renewal_note(config, issuing_certbot):
    config.home.mkdir(parents=True)
    path = certificates.write_renewal_note(config, DOMAIN, date(2026, 10, 19))
    text = path.read_text()
    assert path == config.renewal_note
    assert "19.10.2026" in text
    assert "17.01.2027" in text
    assert issuing_certbot.calls[-1] == [
        "openssl", "x509", "-enddate", "-noout", "-in", str(config.cert(DOMAIN)),
    ]


def test_remove_certificate_store(config):
    config.live_dir(DOMAIN).mkdir(parents=True)
    assert certificates.remove_certificate_store(config) == config.letsencrypt_dir
    assert not config.letsencrypt_dir.exists()
    assert certificates.remove_certificate_store(config) is None
