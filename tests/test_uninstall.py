import os
from datetime import date

import pytest

from hosting_automator.config import HostingState, save_state
from hosting_automator.errors import ValidationError
from hosting_automator.provision import run_setup
from hosting_automator.uninstall import run_uninstall

from .conftest import DOMAIN, SERVER_IP


@pytest.fixture
def provisioned(config, answers, issuing_certbot):
    run_setup(config, domain=DOMAIN, ip=SERVER_IP, today=date(2026, 10, 19))
    issuing_certbot.calls.clear()
    return config


def test_uninstall_removes_everything_setup_created(provisioned, answers, fake_run):
    config = provisioned
    answers.confirm(True)
    assert run_uninstall(config, domain=DOMAIN) is True

    assert not config.server_root.exists()
    assert not os.path.lexists(config.site_enabled(DOMAIN))
    assert not config.site_available(DOMAIN).exists()
    assert not config.renewal_note.exists()
    assert not config.letsencrypt_dir.exists()
    assert not config.state_file.exists()
    assert fake_run.commands == [
        "systemctl stop nginx",
        "systemctl disable nginx",
        "apt purge --auto-remove -y nginx nginx-common certbot python3-certbot-nginx curl",
        "ufw delete allow Nginx Full",
    ]


def test_uninstall_defaults_to_saved_domain(provisioned, answers):
    answers.confirm(True)
    assert run_uninstall(provisioned) is True
    assert not provisioned.site_available(DOMAIN).exists()


def test_uninstall_cancelled_changes_nothing(provisioned, answers, fake_run):
    answers.confirm(False)
    assert run_uninstall(provisioned, domain=DOMAIN) is False
    assert provisioned.server_root.exists()
    assert provisioned.site_available(DOMAIN).exists()
    assert fake_run.calls == []


def test_uninstall_requires_domain(config, answers, fake_run):
    answers.prompts("")
    with pytest.raises(ValidationError):
        run_uninstall(config)
    assert fake_run.calls == []


def test_uninstall_best_effort_on_partial_host(config, answers, fake_run):
    fake_run.set_result("systemctl", returncode=5, stderr="Unit nginx.service not loaded.")
    fake_run.set_result("apt", "purge", returncode=100)
    fake_run.set_result("ufw", returncode=1, stderr="Could not delete non-existent rule")
    save_state(config, HostingState(domain=DOMAIN))
    config.www_dir.mkdir(parents=True)

    assert run_uninstall(config, domain=DOMAIN, assume_yes=True) is True
    assert not config.server_root.exists()
    assert len(fake_run.calls) == 4


def test_uninstall_continues_without_firewall_or_systemd(config, answers, fake_run):
    def missing(cmd):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    fake_run.on("ufw", hook=missing)
    fake_run.on("systemctl", hook=missing)
    save_state(config, HostingState(domain=DOMAIN))
    config.www_dir.mkdir(parents=True)
    config.site_available(DOMAIN).parent.mkdir(parents=True)
    config.site_available(DOMAIN).write_text("server {}\n")

    assert run_uninstall(config, domain=DOMAIN, assume_yes=True) is True
    assert not config.server_root.exists()
    assert not config.site_available(DOMAIN).exists()
    assert not config.state_file.exists()
    assert fake_run.ran("ufw", "delete", "allow")
