"""
Configuration, constants and saved state for the hosting automator.

Every path the tool reads, writes or deletes is derived from a handful of
roots on HostingConfig, so a test can point the whole layout at a temporary
directory.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("hosting_automator")

# ----------------------------------------------------------------
# Configuration & Constants
# ----------------------------------------------------------------
PACKAGES: List[str] = ["nginx", "certbot", "python3-certbot-nginx", "ufw", "curl"]
PURGE_PACKAGES: List[str] = [
    "nginx",
    "nginx-common",
    "certbot",
    "python3-certbot-nginx",
    "curl",
]
FIREWALL_PROFILES: List[str] = ["OpenSSH", "Nginx Full"]
NGINX_FIREWALL_PROFILE: str = "Nginx Full"

IP_ECHO_URL: str = "https://icanhazip.com"
WEB_USER: str = "www-data"
DH_PARAM_BITS: int = 2048
EXAMPLE_SUBDOMAIN: str = "blog"
OPERATION_TIMEOUT: int = 600

DEFAULT_LOG_FILE: str = "/var/log/hosting_automator.log"
DEFAULT_LOG_LEVEL: str = "WARNING"
RENEWAL_NOTE_NAME: str = "certbot-renewal-information.txt"


@dataclass
class HostingConfig:
    """Filesystem roots and runtime settings."""

    home: Path = field(default_factory=Path.home)
    nginx_dir: Path = Path("/etc/nginx")
    letsencrypt_dir: Path = Path("/etc/letsencrypt")
    log_file: Path = Path(DEFAULT_LOG_FILE)
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "HostingConfig":
        """Build a config honouring HOSTING_AUTOMATOR_LOG and LOG_LEVEL."""
        return cls(
            log_file=Path(os.environ.get("HOSTING_AUTOMATOR_LOG", DEFAULT_LOG_FILE)),
            log_level=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    # Content tree
    @property
    def server_root(self) -> Path:
        return self.home / "SERVER"

    @property
    def www_dir(self) -> Path:
        return self.server_root / "www"

    @property
    def subdomains_dir(self) -> Path:
        return self.server_root / "subdomains"

    def subdomain_dir(self, name: str) -> Path:
        return self.subdomains_dir / name

    # Nginx
    @property
    def sites_available(self) -> Path:
        return self.nginx_dir / "sites-available"

    @property
    def sites_enabled(self) -> Path:
        return self.nginx_dir / "sites-enabled"

    @property
    def default_site_link(self) -> Path:
        return self.sites_enabled / "default"

    def site_available(self, domain: str) -> Path:
        return self.sites_available / domain

    def site_enabled(self, domain: str) -> Path:
        return self.sites_enabled / domain

    # Certificates
    def live_dir(self, domain: str) -> Path:
        return self.letsencrypt_dir / "live" / domain

    def fullchain(self, domain: str) -> Path:
        return self.live_dir(domain) / "fullchain.pem"

    def privkey(self, domain: str) -> Path:
        return self.live_dir(domain) / "privkey.pem"

    def cert(self, domain: str) -> Path:
        return self.live_dir(domain) / "cert.pem"

    @property
    def ssl_options_file(self) -> Path:
        return self.letsencrypt_dir / "options-ssl-nginx.conf"

    @property
    def dhparams_file(self) -> Path:
        return self.letsencrypt_dir / "ssl-dhparams.pem"

    # Operator files
    @property
    def renewal_note(self) -> Path:
        return self.home / RENEWAL_NOTE_NAME

    @property
    def state_dir(self) -> Path:
        return self.home / ".config" / "hosting_automator"

    @property
    def state_file(self) -> Path:
        return self.state_dir / "config.json"


# ----------------------------------------------------------------
# Saved State
# ----------------------------------------------------------------
@dataclass
class HostingState:
    domain: str = ""
    server_ip: str = ""
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_state(config: HostingConfig) -> HostingState:
    """Load the state of the last successful setup, or an empty state."""
    try:
        if config.state_file.exists():
            with open(config.state_file, "r") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                logger.warning(f"Ignoring malformed state file {config.state_file}")
                return HostingState()
            known = {
                k: v
                for k, v in data.items()
                if k in HostingState.__dataclass_fields__ and isinstance(v, str)
            }
            return HostingState(**known)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load saved state: {e}")
    return HostingState()


def save_state(config: HostingConfig, state: HostingState) -> None:
    os.makedirs(config.state_dir, exist_ok=True)
    with open(config.state_file, "w") as f:
        json.dump(state.to_dict(), f, indent=2)
    logger.debug(f"Saved state to {config.state_file}")


def clear_state(config: HostingConfig) -> Optional[Path]:
    """Remove the saved state file. Returns the path removed, if any."""
    if config.state_file.exists():
        config.state_file.unlink()
        if not any(config.state_dir.iterdir()):
            config.state_dir.rmdir()
        return config.state_file
    return None
