"""
Command-line entry point.

Without --action an interactive menu offers:
  1) SETUP      Run the full installation and configuration.
  2) UNINSTALL  Roll back all changes made by setup.
"""

import argparse
import signal
import sys
from typing import List, Optional

from rich.align import Align
from rich.prompt import Prompt
from rich.text import Text

from hosting_automator import APP_SUBTITLE, VERSION
from hosting_automator.config import HostingConfig, load_state
from hosting_automator.content import add_subdomain
from hosting_automator.errors import SetupError, ValidationError
from hosting_automator.log import setup_logging
from hosting_automator.provision import run_setup
from hosting_automator.system import check_root
from hosting_automator.ui import (
    NordColors,
    clear_screen,
    console,
    create_header,
    print_error,
    print_success,
    print_warning,
)
from hosting_automator.uninstall import run_uninstall
from hosting_automator.validators import normalize_domain

MENU_ACTIONS = {"1": "setup", "2": "uninstall"}


# ----------------------------------------------------------------
# Signal Handling
# ----------------------------------------------------------------
def signal_handler(sig, frame) -> None:
    try:
        sig_name = signal.Signals(sig).name
        print_warning(f"Process interrupted by {sig_name}")
    except ValueError:
        print_warning(f"Process interrupted by signal {sig}")
    sys.exit(128 + sig)


def install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


# ----------------------------------------------------------------
# Argument Parsing & Menu
# ----------------------------------------------------------------
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hosting-automator",
        description="Install Nginx with a wildcard Let's Encrypt certificate for a root "
        "domain and its subdomains, or roll the installation back.",
    )
    parser.add_argument(
        "--action",
        choices=["setup", "uninstall"],
        help="run an action directly instead of showing the menu",
    )
    parser.add_argument("--domain", help="root domain, e.g. example.com")
    parser.add_argument("--ip", help="public IP address of this server (skips detection)")
    parser.add_argument(
        "--yes", action="store_true", help="do not ask for confirmation before uninstalling"
    )
    parser.add_argument(
        "--add-subdomain",
        metavar="NAME",
        help="create the content directory for NAME.<domain> and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def choose_action() -> Optional[str]:
    """Show the banner and main menu; None for an invalid choice."""
    clear_screen()
    console.print(create_header())
    console.print(Align.center(Text(APP_SUBTITLE, style=f"bold {NordColors.SNOW_STORM_2}")))
    console.print()
    console.print("Please choose an action to perform:")
    console.print(f"  [bold]1)[/] [bold {NordColors.GREEN}]SETUP[/]:     Run the full installation and configuration.")
    console.print(f"  [bold]2)[/] [bold {NordColors.RED}]UNINSTALL[/]: Roll back all changes made by this tool.")
    console.print()
    choice = Prompt.ask("Enter your choice (1 or 2)", default="", show_default=False)
    return MENU_ACTIONS.get(choice.strip())


def run_add_subdomain(config: HostingConfig, name: str, domain: Optional[str]) -> None:
    domain = domain or load_state(config).domain
    if not domain:
        raise ValidationError("No domain given and no saved setup found; pass --domain.")
    domain = normalize_domain(domain)
    directory = add_subdomain(config, domain, name)
    print_success(f"Created {directory} for https://{name.strip().lower()}.{domain}")


# ----------------------------------------------------------------
# Main Entry Point
# ----------------------------------------------------------------
def main(argv: Optional[List[str]] = None, config: Optional[HostingConfig] = None) -> None:
    args = parse_args(argv)
    config = config or HostingConfig.from_env()
    setup_logging(config)
    install_signal_handlers()

    try:
        check_root()
        if args.add_subdomain:
            run_add_subdomain(config, args.add_subdomain, args.domain)
            return

        action = args.action or choose_action()
        if action is None:
            print_error("Invalid choice. Please run the tool again and enter 1 or 2.")
            sys.exit(1)
        if action == "setup":
            run_setup(config, domain=args.domain, ip=args.ip)
        else:
            run_uninstall(config, domain=args.domain, assume_yes=args.yes)
    except SetupError as e:
        print_error(f"Error: {e}")
        sys.exit(1)
    except OSError as e:
        print_error(f"Filesystem error: {e}")
        sys.exit(1)
