import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import pytest
from rich.prompt import Confirm, Prompt

from hosting_automator.config import HostingConfig

DOMAIN = "example.com"
SERVER_IP = "203.0.113.10"
ENDDATE = "notAfter=Jan 17 10:00:00 2027 GMT\n"


class FakeRunner:
    """Stands in for subprocess.run and records every command."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.results: Dict[Tuple[str, ...], Tuple[int, str, str]] = {}
        self.hooks: Dict[Tuple[str, ...], Callable[[List[str]], None]] = {}

    def set_result(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.results[prefix] = (returncode, stdout, stderr)

    def on(self, *prefix: str, hook: Callable[[List[str]], None]) -> None:
        self.hooks[prefix] = hook

    def _match(self, table, cmd):
        matches = [p for p in table if tuple(cmd[: len(p)]) == p]
        return max(matches, key=len) if matches else None

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        hook = self._match(self.hooks, cmd)
        if hook is not None:
            self.hooks[hook](cmd)
        result = self._match(self.results, cmd)
        returncode, stdout, stderr = self.results[result] if result else (0, "", "")
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    def ran(self, *prefix: str) -> bool:
        return any(tuple(c[: len(prefix)]) == prefix for c in self.calls)

    @property
    def commands(self) -> List[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def config(tmp_path: Path) -> HostingConfig:
    return HostingConfig(
        home=tmp_path / "home",
        nginx_dir=tmp_path / "etc" / "nginx",
        letsencrypt_dir=tmp_path / "etc" / "letsencrypt",
        log_file=tmp_path / "log" / "hosting_automator.log",
    )


@pytest.fixture
def fake_run(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("hosting_automator.system.subprocess.run", runner)
    return runner


@pytest.fixture
def answers(monkeypatch):
    """Script the operator's answers; unanswered prompts take their default."""
    queue: List[str] = []
    confirms: List[bool] = []

    def fake_ask(*args, **kwargs):
        return queue.pop(0) if queue else kwargs.get("default", "")

    def fake_confirm(*args, **kwargs):
        return confirms.pop(0) if confirms else kwargs.get("default", False)

    monkeypatch.setattr(Prompt, "ask", fake_ask)
    monkeypatch.setattr(Confirm, "ask", fake_confirm)

    class Answers:
        def prompts(self, *values: str) -> None:
            queue.extend(values)

        def confirm(self, *values: bool) -> None:
            confirms.extend(values)

    return Answers()


@pytest.fixture
def issuing_certbot(fake_run, config):
    """Make certbot produce the live certificate files like a successful challenge."""

    def issue(cmd):
        domain = cmd[cmd.index("-d") + 1]
        live = config.live_dir(domain)
        live.mkdir(parents=True, exist_ok=True)
        for name in ("fullchain.pem", "privkey.pem", "cert.pem"):
            (live / name).write_text("-----BEGIN CERTIFICATE-----\n")

    fake_run.on("certbot", hook=issue)
    fake_run.set_result("openssl", "x509", stdout=ENDDATE)
    return fake_run
