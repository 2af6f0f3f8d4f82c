import logging
import os
from pathlib import Path
from typing import List

from hosting_automator.config import HostingConfig
from hosting_automator.system import reload_service, run_command
from hosting_automator.templates import render_final_site, render_temporary_site

logger = logging.getLogger("hosting_automator")


def _write_site(path: Path, content: str) -> Path:
    os.makedirs(path.parent, exist_ok=True)
    with open(path, "w") as f:
        f.write(content)
    logger.debug(f"Wrote nginx site {path}")
    return path


def remove_default_site(config: HostingConfig) -> None:
    link = config.default_site_link
    if os.path.lexists(link):
        link.unlink()


def write_temporary_site(config: HostingConfig, domain: str) -> Path:
    return _write_site(config.site_available(domain), render_temporary_site(domain))


def write_final_site(config: HostingConfig, domain: str) -> Path:
    return _write_site(config.site_available(domain), render_final_site(domain, config))


def enable_site(config: HostingConfig, domain: str) -> Path:
    """Symlink sites-available/<domain> into sites-enabled, replacing a stale link."""
    link = config.site_enabled(domain)
    os.makedirs(link.parent, exist_ok=True)
    if os.path.lexists(link):
        link.unlink()
    link.symlink_to(config.site_available(domain))
    return link


def check_config() -> None:
    run_command(["nginx", "-t"])


def reload() -> None:
    check_config()
    reload_service("nginx")


def remove_site(config: HostingConfig, domain: str) -> List[Path]:
    """Delete the enabled link (dangling or not) and the available file."""
    removed = []
    for path in (config.site_enabled(domain), config.site_available(domain)):
        if os.path.lexists(path):
            path.unlink()
            removed.append(path)
    return removed
