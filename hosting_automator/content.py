import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from hosting_automator.config import EXAMPLE_SUBDOMAIN, HostingConfig
from hosting_automator.errors import ValidationError
from hosting_automator.system import chown_tree
from hosting_automator.templates import render_index_page
from hosting_automator.validators import validate_subdomain_name

logger = logging.getLogger("hosting_automator")


def _write_index(directory: Path, title: str, url: str) -> Path:
    os.makedirs(directory, exist_ok=True)
    index = directory / "index.html"
    with open(index, "w") as f:
        f.write(render_index_page(title, url))
    return index


def create_content_tree(config: HostingConfig, domain: str) -> None:
    """
    Create the web directory structure:

        $HOME/SERVER/www/index.html               -> www.<domain>
        $HOME/SERVER/subdomains/blog/index.html   -> blog.<domain>

    and hand the whole tree to the web server user.
    """
    _write_index(config.www_dir, "WWW Main Site", f"https://www.{domain}")
    _write_index(
        config.subdomain_dir(EXAMPLE_SUBDOMAIN),
        f"{EXAMPLE_SUBDOMAIN.title()} Subdomain",
        f"https://{EXAMPLE_SUBDOMAIN}.{domain}",
    )
    chown_tree(config.server_root)
    logger.info(f"Created web directory structure at {config.server_root}")


def add_subdomain(config: HostingConfig, domain: str, name: str) -> Path:
    """Create the directory and placeholder page served for <name>.<domain>."""
    name = validate_subdomain_name(name)
    directory = config.subdomain_dir(name)
    if directory.exists():
        raise ValidationError(f"Subdomain directory already exists: {directory}")
    _write_index(directory, f"{name.title()} Subdomain", f"https://{name}.{domain}")
    chown_tree(directory)
    logger.info(f"Added subdomain {name}.{domain} at {directory}")
    return directory


def remove_content_tree(config: HostingConfig) -> Optional[Path]:
    if config.server_root.exists():
        shutil.rmtree(config.server_root)
        return config.server_root
    return None
