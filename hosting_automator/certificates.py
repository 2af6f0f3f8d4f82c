"""
Wildcard certificate issuance through Certbot's manual DNS challenge, plus
the TLS support files nginx includes and the operator's renewal reminder.
"""

import logging
import os
import shutil
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from hosting_automator.config import DH_PARAM_BITS, HostingConfig
from hosting_automator.errors import CertificateError
from hosting_automator.system import run_command
from hosting_automator.templates import OPTIONS_SSL_NGINX, render_renewal_note

logger = logging.getLogger("hosting_automator")

OPENSSL_DATE_FORMAT = "%b %d %H:%M:%S %Y %Z"


def request_wildcard_certificate(domain: str) -> None:
    """
    Run Certbot interactively for <domain> and *.<domain>.

    Certbot pauses to show the TXT record(s) the operator must publish, so
    its output goes straight to the terminal and no timeout applies.
    """
    run_command(
        [
            "certbot",
            "certonly",
            "--manual",
            "--preferred-challenges=dns",
            "-d",
            domain,
            "-d",
            f"*.{domain}",
        ],
        capture_output=False,
        timeout=None,
    )


def verify_certificate(config: HostingConfig, domain: str) -> Path:
    fullchain = config.fullchain(domain)
    if not fullchain.is_file():
        raise CertificateError(
            f"Certbot failed. Certificate not created: {fullchain}"
        )
    return fullchain


def write_ssl_options(config: HostingConfig) -> Path:
    os.makedirs(config.letsencrypt_dir, exist_ok=True)
    with open(config.ssl_options_file, "w") as f:
        f.write(OPTIONS_SSL_NGINX)
    return config.ssl_options_file


def ensure_dhparams(config: HostingConfig, bits: int = DH_PARAM_BITS) -> bool:
    """Generate Diffie-Hellman parameters unless a file is already present."""
    if config.dhparams_file.exists():
        logger.info(f"Reusing existing DH parameters at {config.dhparams_file}")
        return False
    os.makedirs(config.letsencrypt_dir, exist_ok=True)
    run_command(
        ["openssl", "dhparam", "-out", str(config.dhparams_file), str(bits)],
        timeout=None,
    )
    return True


def parse_openssl_enddate(output: str) -> date:
    """Parse 'notAfter=Mar 15 12:00:00 2025 GMT' into a date."""
    value = output.strip()
    if "=" in value:
        value = value.split("=", 1)[1]
    value = " ".join(value.split())
    try:
        return datetime.strptime(value, OPENSSL_DATE_FORMAT).date()
    except ValueError:
        raise CertificateError(f"Unrecognised certificate end date: {output.strip()!r}")


def read_certificate_expiry(config: HostingConfig, domain: str) -> date:
    result = run_command(
        ["openssl", "x509", "-enddate", "-noout", "-in", str(config.cert(domain))]
    )
    return parse_openssl_enddate(result.stdout)


def write_renewal_note(
    config: HostingConfig, domain: str, today: Optional[date] = None
) -> Path:
    created = today or date.today()
    expires = read_certificate_expiry(config, domain)
    with open(config.renewal_note, "w") as f:
        f.write(render_renewal_note(domain, created, expires, config))
    logger.info(f"Certificate for {domain} expires on {expires.isoformat()}")
    return config.renewal_note


def remove_certificate_store(config: HostingConfig) -> Optional[Path]:
    if config.letsencrypt_dir.exists():
        shutil.rmtree(config.letsencrypt_dir)
        return config.letsencrypt_dir
    return None


def remove_renewal_note(config: HostingConfig) -> Optional[Path]:
    if config.renewal_note.exists():
        config.renewal_note.unlink()
        return config.renewal_note
    return None
