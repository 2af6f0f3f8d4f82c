"""
Setup: a full installation and configuration of the web server.

Every step is fail-fast. The first SetupError marks its step as failed in
the status report and propagates to the caller; nothing after it runs.
"""

import logging
from datetime import date
from typing import Any, Callable, Optional, Tuple

from rich.markup import escape
from rich.prompt import Prompt

from hosting_automator import certificates, nginx
from hosting_automator.config import (
    EXAMPLE_SUBDOMAIN,
    HostingConfig,
    HostingState,
    save_state,
)
from hosting_automator.content import create_content_tree
from hosting_automator.errors import NetworkError, SetupError, ValidationError
from hosting_automator.system import (
    configure_firewall,
    detect_public_ip,
    install_packages,
    update_system,
)
from hosting_automator.ui import (
    NordColors,
    StatusReport,
    console,
    display_panel,
    dns_instructions,
    pause,
    print_section,
    print_step,
    print_success,
    print_warning,
)
from hosting_automator.validators import normalize_domain

logger = logging.getLogger("hosting_automator")

SETUP_STEPS = (
    "packages",
    "firewall",
    "content",
    "temporary_site",
    "certificate",
    "final_site",
    "renewal_note",
)


def collect_setup_input(
    domain: Optional[str] = None, ip: Optional[str] = None
) -> Tuple[str, str]:
    """
    Determine the server IP and the root domain.

    The IP comes from --ip, else the external echo service, else the operator.
    Raises ValidationError when either value ends up empty; nothing on the
    host has been changed at that point.
    """
    print_section("Initial Configuration")
    server_ip = (ip or "").strip()
    if not server_ip:
        try:
            server_ip = detect_public_ip()
        except NetworkError as e:
            print_warning(str(e))
            server_ip = Prompt.ask(
                "Please enter your server's public IP address (e.g., 93.136.180.191)",
                default="",
                show_default=False,
            ).strip()

    if domain is None:
        domain = Prompt.ask(
            "Please enter your root domain (e.g., example.com)",
            default="",
            show_default=False,
        )

    if not (domain or "").strip() or not server_ip:
        raise ValidationError("Could not determine Domain or Server IP.")
    return normalize_domain(domain), server_ip


def _run_step(
    report: StatusReport,
    name: str,
    description: str,
    func: Callable[[], Any],
    spinner: bool = True,
) -> Any:
    report.mark(name, "in_progress")
    print_step(description)
    try:
        if spinner:
            with console.status(f"[section]{description}[/section]"):
                result = func()
        else:
            result = func()
    except SetupError as e:
        report.mark(name, "failed", (str(e).splitlines() or [""])[0])
        console.print(report.render())
        raise
    except OSError as e:
        report.mark(name, "failed", str(e))
        console.print(report.render())
        raise SetupError(f"{description} failed: {e}") from e
    report.mark(name, "success")
    return result


def _install_temporary_site(config: HostingConfig, domain: str) -> None:
    nginx.remove_default_site(config)
    nginx.write_temporary_site(config, domain)
    nginx.enable_site(config, domain)
    nginx.reload()


def _obtain_certificate(config: HostingConfig, domain: str) -> None:
    display_panel(
        "ACTION REQUIRED: Certbot DNS Challenge",
        "Certbot will now request your wildcard SSL certificate.\n"
        "It will pause and show a [bold]TXT record[/] to add at your DNS provider.\n"
        f"[{NordColors.RED}]IMPORTANT:[/] Certbot may ask for a SECOND TXT record. "
        "If it does, you must ADD the second record. DO NOT replace the first one.\n"
        "Wait 2-5 minutes for the record to propagate before confirming in Certbot.",
        NordColors.YELLOW,
    )
    pause("Press [Enter] to begin the interactive Certbot process")
    certificates.request_wildcard_certificate(domain)
    certificates.verify_certificate(config, domain)


def _install_final_site(config: HostingConfig, domain: str) -> None:
    certificates.write_ssl_options(config)
    certificates.ensure_dhparams(config)
    nginx.write_final_site(config, domain)
    nginx.reload()


def print_summary(config: HostingConfig, domain: str) -> None:
    example = config.subdomain_dir("portfolio")
    display_panel(
        "SETUP COMPLETE!",
        "Your server is now configured with the following structure:\n"
        f"  - [bold]{domain}[/] permanently redirects to [bold]www.{domain}[/]\n"
        f"  - [bold]www.{domain}[/] is served from [path]{config.www_dir}/[/]\n"
        f"  - [bold]<name>.{domain}[/] is served from [path]{config.subdomains_dir}/<name>/[/]\n\n"
        f"To add a new dynamic subdomain (e.g., https://portfolio.{domain}), run:\n"
        "  [command]hosting-automator --add-subdomain portfolio[/]\n"
        "or by hand:\n"
        f"  [command]mkdir {example}[/]\n"
        f"  [command]echo '<h1>Portfolio</h1>' > {example}/index.html[/]\n"
        f"  [command]chown -R www-data:www-data {example}[/]\n\n"
        "[warning]IMPORTANT: Remember to manually renew your SSL certificate! "
        f"See details in {config.renewal_note}[/]",
        NordColors.GREEN,
    )


def run_setup(
    config: HostingConfig,
    domain: Optional[str] = None,
    ip: Optional[str] = None,
    today: Optional[date] = None,
) -> HostingState:
    domain, server_ip = collect_setup_input(domain, ip)
    print_success("Configuration successful.")
    console.print(f"  - Domain: [bold {NordColors.YELLOW}]{domain}[/]")
    console.print(f"  - Public IP: [bold {NordColors.YELLOW}]{escape(server_ip)}[/]")

    print_section("ACTION REQUIRED: DNS Setup")
    console.print("Before we proceed, you [warning]MUST[/] configure the following DNS records.")
    console.print(dns_instructions(domain, server_ip))
    console.print("DNS changes can take a few minutes to propagate.")
    pause("Press [Enter] to continue once you have set the A records")

    report = StatusReport("Setup Status")
    report.add(*SETUP_STEPS)

    def install() -> None:
        update_system()
        install_packages()

    _run_step(report, "packages", "Updating system and installing required packages", install)
    _run_step(report, "firewall", "Configuring Firewall (UFW)", configure_firewall)
    print_success("Firewall is active and allows SSH, HTTP, and HTTPS traffic.")
    _run_step(
        report,
        "content",
        "Creating web directory structure",
        lambda: create_content_tree(config, domain),
    )
    _run_step(
        report,
        "temporary_site",
        f"Setting up a temporary Nginx site for {domain}",
        lambda: _install_temporary_site(config, domain),
    )
    _run_step(
        report,
        "certificate",
        "Obtaining wildcard SSL certificate",
        lambda: _obtain_certificate(config, domain),
        spinner=False,
    )
    print_success("SSL Certificate successfully obtained!")
    _run_step(
        report,
        "final_site",
        "Applying final Nginx configuration",
        lambda: _install_final_site(config, domain),
    )

    today = today or date.today()
    state = HostingState(domain=domain, server_ip=server_ip, created_at=today.isoformat())

    def record() -> None:
        certificates.write_renewal_note(config, domain, today)
        save_state(config, state)

    _run_step(report, "renewal_note", "Creating renewal information file", record)
    print_success(f"Renewal information saved to {config.renewal_note}")

    console.print(report.render())
    print_summary(config, domain)
    logger.info(f"Setup complete for {domain} (example subdomain: {EXAMPLE_SUBDOMAIN})")
    return state
