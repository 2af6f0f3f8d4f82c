from rich.console import Console

from hosting_automator.ui import StatusReport, dns_instructions


def _render(renderable) -> str:
    console = Console(width=120, record=True)
    console.print(renderable)
    return console.export_text()


def test_dns_instructions_show_ip_literally():
    text = _render(dns_instructions("example.com", "203.0.113.10[/]"))
    assert text.count("203.0.113.10[/]") == 2
    assert "@" in text and "*" in text


def test_status_report_renders_messages_literally():
    report = StatusReport("Setup Status")
    report.add("firewall")
    report.mark("firewall", "failed", "ERROR: [bold]iptables[/bold]")
    assert "ERROR: [bold]iptables[/bold]" in _render(report.render())
