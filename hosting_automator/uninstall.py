"""
Uninstall: a complete removal of everything the setup created.

Stopping services, purging packages and deleting the firewall rule are
best-effort so a partially configured host can still be cleaned up. File
removal is fail-fast.
"""

import logging
from typing import Optional

from rich.prompt import Confirm, Prompt

from hosting_automator import certificates, nginx
from hosting_automator.config import HostingConfig, clear_state, load_state
from hosting_automator.content import remove_content_tree
from hosting_automator.errors import ValidationError
from hosting_automator.system import (
    disable_service,
    purge_packages,
    remove_firewall_rules,
    stop_service,
)
from hosting_automator.ui import (
    NordColors,
    display_panel,
    print_section,
    print_step,
    print_success,
    print_warning,
)
from hosting_automator.validators import normalize_domain

logger = logging.getLogger("hosting_automator")


def prompt_uninstall_domain(config: HostingConfig, domain: Optional[str] = None) -> str:
    if domain is None:
        saved = load_state(config).domain
        domain = Prompt.ask(
            "Please enter the root domain you used during setup (e.g., example.com)",
            default=saved,
            show_default=bool(saved),
        )
    if not (domain or "").strip():
        raise ValidationError("Domain cannot be empty.")
    return normalize_domain(domain)


def run_uninstall(
    config: HostingConfig, domain: Optional[str] = None, assume_yes: bool = False
) -> bool:
    """
    Roll back all changes made by setup for <domain>.

    Returns False when the operator declines the confirmation, True once
    everything has been removed.
    """
    print_section("UNINSTALL / ROLLBACK")
    domain = prompt_uninstall_domain(config, domain)

    if not assume_yes and not Confirm.ask(
        f"Are you sure you want to remove all Nginx, Certbot, and related files for {domain}?",
        default=False,
    ):
        print_warning("Uninstall cancelled.")
        return False

    print_step("Stopping and disabling services...")
    if not stop_service("nginx"):
        print_warning("Could not stop nginx; continuing.")
    if not disable_service("nginx"):
        print_warning("Could not disable nginx; continuing.")

    print_step("Removing packages...")
    if not purge_packages():
        print_warning("Package removal reported errors; continuing.")

    print_step("Deleting Let's Encrypt certificates and files...")
    certificates.remove_certificate_store(config)

    print_step("Resetting Firewall (UFW)...")
    if remove_firewall_rules():
        print_success("Firewall rule for Nginx removed.")
    else:
        print_warning("Firewall rule for Nginx could not be removed; continuing.")

    print_step("Removing files and directories...")
    nginx.remove_site(config, domain)
    remove_content_tree(config)
    certificates.remove_renewal_note(config)
    clear_state(config)

    display_panel(
        "UNINSTALL COMPLETE",
        "All associated packages, configurations, and files have been removed.",
        NordColors.GREEN,
    )
    logger.info(f"Uninstall complete for {domain}")
    return True