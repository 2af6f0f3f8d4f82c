"""
System interaction: command execution, package manager, services, firewall
and public IP detection.

Mandatory steps run with check=True and raise ExecutionError on failure.
Best-effort cleanup steps run with check=False and only log a warning.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Union

import requests

from hosting_automator.config import (
    FIREWALL_PROFILES,
    IP_ECHO_URL,
    NGINX_FIREWALL_PROFILE,
    OPERATION_TIMEOUT,
    PACKAGES,
    PURGE_PACKAGES,
    WEB_USER,
)
from hosting_automator.errors import ExecutionError, NetworkError, SetupError
from hosting_automator.validators import is_ip_address

logger = logging.getLogger("hosting_automator")


# ----------------------------------------------------------------
# Command Execution Helpers
# ----------------------------------------------------------------
def run_command(
    cmd: List[str],
    check: bool = True,
    capture_output: bool = True,
    timeout: Optional[int] = OPERATION_TIMEOUT,
) -> subprocess.CompletedProcess:
    """
    Execute a system command and return the CompletedProcess.

    Args:
        cmd: Command and arguments as a list
        check: Raise ExecutionError on a non-zero exit or a missing program
        capture_output: Capture stdout/stderr; interactive tools need False
        timeout: Seconds before the command is abandoned, None to wait forever

    Raises:
        ExecutionError: If the command times out, or fails or cannot be
            started with check=True
    """
    cmd_str = " ".join(cmd)
    logger.debug(f"Executing: {cmd_str}")
    try:
        result = subprocess.run(
            cmd,
            check=False,
            text=True,
            capture_output=capture_output,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ExecutionError(f"Command timed out after {timeout} seconds: {cmd_str}")
    except OSError as e:
        error_msg = f"Error executing command: {cmd_str}: {e}"
        if check:
            raise ExecutionError(error_msg)
        logger.warning(error_msg)
        return subprocess.CompletedProcess(cmd, 127, "", str(e))

    if result.returncode != 0:
        error_msg = f"Command failed ({result.returncode}): {cmd_str}"
        if result.stdout:
            error_msg += f"\nOutput: {result.stdout.strip()}"
        if result.stderr:
            error_msg += f"\nError: {result.stderr.strip()}"
        if check:
            raise ExecutionError(error_msg)
        logger.warning(error_msg)
    return result


def check_root() -> None:
    """Ensure the tool is run as root."""
    if os.geteuid() != 0:
        raise SetupError("This tool must be run as root (e.g., with sudo).")


# ----------------------------------------------------------------
# Network
# ----------------------------------------------------------------
def detect_public_ip(url: str = IP_ECHO_URL) -> str:
    """Ask an external echo service for this server's public IP address."""
    try:
        response = requests.get(url, timeout=10)
        response.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(f"Failed to retrieve public IP address: {e}")
    ip = response.text.strip()
    if not is_ip_address(ip):
        raise NetworkError(f"Invalid IP address returned by {url}: {ip!r}")
    return ip


# ----------------------------------------------------------------
# Packages & Services
# ----------------------------------------------------------------
def update_system() -> None:
    run_command(["apt", "update"])
    run_command(["apt", "upgrade", "-y"])


def install_packages(packages: List[str] = PACKAGES) -> None:
    run_command(["apt", "install", "-y"] + list(packages))


def purge_packages(packages: List[str] = PURGE_PACKAGES) -> bool:
    result = run_command(
        ["apt", "purge", "--auto-remove", "-y"] + list(packages), check=False
    )
    return result.returncode == 0


def reload_service(name: str) -> None:
    run_command(["systemctl", "reload", name])


def stop_service(name: str) -> bool:
    return run_command(["systemctl", "stop", name], check=False).returncode == 0


def disable_service(name: str) -> bool:
    return run_command(["systemctl", "disable", name], check=False).returncode == 0


# ----------------------------------------------------------------
# Firewall
# ----------------------------------------------------------------
def configure_firewall(profiles: List[str] = FIREWALL_PROFILES) -> None:
    """Allow SSH, HTTP and HTTPS through UFW and enable it without prompting."""
    for profile in profiles:
        run_command(["ufw", "allow", profile])
    run_command(["ufw", "--force", "enable"])


def remove_firewall_rules(profile: str = NGINX_FIREWALL_PROFILE) -> bool:
    return run_command(["ufw", "delete", "allow", profile], check=False).returncode == 0


# ----------------------------------------------------------------
# Files
# ----------------------------------------------------------------
def chown_tree(path: Union[str, Path], owner: str = WEB_USER) -> None:
    run_command(["chown", "-R", f"{owner}:{owner}", str(path)])
