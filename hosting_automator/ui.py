"""Nord-themed terminal output built on Rich and Pyfiglet."""

import logging
import shutil
from dataclasses import dataclass, field
from typing import Dict, List

import pyfiglet
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from hosting_automator import APP_NAME, VERSION

logger = logging.getLogger("hosting_automator")


# ----------------------------------------------------------------
# Nord-Themed Colors
# ----------------------------------------------------------------
class NordColors:
    POLAR_NIGHT_1: str = "#2E3440"
    POLAR_NIGHT_4: str = "#4C566A"
    SNOW_STORM_1: str = "#D8DEE9"
    SNOW_STORM_2: str = "#E5E9F0"
    FROST_1: str = "#8FBCBB"
    FROST_2: str = "#88C0D0"
    FROST_3: str = "#81A1C1"
    FROST_4: str = "#5E81AC"
    RED: str = "#BF616A"
    ORANGE: str = "#D08770"
    YELLOW: str = "#EBCB8B"
    GREEN: str = "#A3BE8C"
    PURPLE: str = "#B48EAD"

    @classmethod
    def get_frost_gradient(cls, steps: int = 4) -> List[str]:
        frosts = [cls.FROST_1, cls.FROST_2, cls.FROST_3, cls.FROST_4]
        return frosts[:steps]


console: Console = Console(
    theme=Theme(
        {
            "info": f"bold {NordColors.FROST_2}",
            "warning": f"bold {NordColors.YELLOW}",
            "error": f"bold {NordColors.RED}",
            "success": f"bold {NordColors.GREEN}",
            "section": f"{NordColors.FROST_3} bold",
            "step": f"{NordColors.FROST_2}",
            "command": f"bold {NordColors.YELLOW}",
            "path": f"italic {NordColors.FROST_1}",
        }
    )
)
install_rich_traceback(console=console, show_locals=False)


# ----------------------------------------------------------------
# UI Helper Functions
# ----------------------------------------------------------------
def clear_screen() -> None:
    console.clear()


def create_header() -> Panel:
    """
    Create a dynamic ASCII banner header using Pyfiglet.
    The banner adapts to terminal width and applies a Nord-themed gradient.
    """
    term_width, _ = shutil.get_terminal_size((80, 24))
    fonts: List[str] = ["slant", "small", "mini"]
    font_to_use: str = fonts[0]
    if term_width < 40:
        font_to_use = fonts[2]
    elif term_width < 60:
        font_to_use = fonts[1]
    try:
        fig = pyfiglet.Figlet(font=font_to_use, width=min(term_width - 10, 120))
        ascii_art = fig.renderText(APP_NAME)
    except pyfiglet.FigletError:
        ascii_art = f"  {APP_NAME}  "
    ascii_lines = [line for line in ascii_art.splitlines() if line.strip()]
    colors = NordColors.get_frost_gradient(len(ascii_lines))
    combined_text = Text()
    for i, line in enumerate(ascii_lines):
        color = colors[i % len(colors)]
        combined_text.append(Text(line, style=f"bold {color}"))
        if i < len(ascii_lines) - 1:
            combined_text.append("\n")
    return Panel(
        combined_text,
        border_style=NordColors.FROST_1,
        padding=(1, 2),
        title=Text(f"v{VERSION}", style=f"bold {NordColors.SNOW_STORM_2}"),
        title_align="right",
        box=box.ROUNDED,
    )


def print_message(
    text: str, style: str = NordColors.FROST_2, prefix: str = "•"
) -> None:
    console.print(f"[{style}]{prefix} {escape(text)}[/{style}]")


def print_step(text: str) -> None:
    print_message(text, NordColors.FROST_3, "➜")
    logger.info(text)


def print_success(text: str) -> None:
    print_message(text, NordColors.GREEN, "✓")
    logger.info(f"SUCCESS: {text}")


def print_warning(text: str) -> None:
    print_message(text, NordColors.YELLOW, "⚠")
    logger.warning(text)


def print_error(text: str) -> None:
    print_message(text, NordColors.RED, "✗")
    logger.error(text)


def print_section(title: str) -> None:
    console.print()
    console.print(f"[section]--- {title} ---[/section]")
    logger.info(f"--- {title} ---")


def display_panel(title: str, message: str, style: str = NordColors.FROST_2) -> None:
    panel = Panel(
        message,
        title=title,
        border_style=style,
        padding=(1, 2),
        box=box.ROUNDED,
    )
    console.print(panel)


def pause(message: str = "Press [Enter] to continue") -> None:
    """Block until the operator presses Enter."""
    Prompt.ask(message, default="", show_default=False)


def dns_instructions(domain: str, server_ip: str) -> Table:
    """The two A records the operator has to create before setup continues."""
    table = Table(
        show_header=True,
        header_style=f"bold {NordColors.FROST_1}",
        box=box.ROUNDED,
        title=f"DNS Records for {domain}",
        padding=(0, 1),
    )
    table.add_column("#", style=f"bold {NordColors.FROST_4}", width=3, justify="right")
    table.add_column("Record", style=f"bold {NordColors.FROST_1}")
    table.add_column("Type", justify="center")
    table.add_column("Name", justify="center")
    table.add_column("Value", style=f"{NordColors.YELLOW}")
    value = escape(server_ip)
    table.add_row("1", "Root Domain (for redirect)", "A", "@", value)
    table.add_row("2", "Wildcard Domain", "A", "*", value)
    return table


# ----------------------------------------------------------------
# Status Report
# ----------------------------------------------------------------
STATUS_ICONS: Dict[str, str] = {
    "success": "✓",
    "failed": "✗",
    "pending": "?",
    "in_progress": "⋯",
}


@dataclass
class StepStatus:
    status: str = "pending"
    message: str = ""


@dataclass
class StatusReport:
    """Ordered per-step status for a setup or uninstall run."""

    title: str
    steps: Dict[str, StepStatus] = field(default_factory=dict)

    def add(self, *names: str) -> None:
        for name in names:
            self.steps.setdefault(name, StepStatus())

    def mark(self, name: str, status: str, message: str = "") -> None:
        self.steps[name] = StepStatus(status, message)
        logger.debug(f"[{self.title}] {name}: {status} {message}".rstrip())

    def status_of(self, name: str) -> str:
        return self.steps[name].status

    def render(self) -> Table:
        table = Table(
            show_header=True,
            header_style=f"bold {NordColors.FROST_1}",
            expand=True,
            title=f"[bold {NordColors.FROST_2}]{self.title}[/]",
            border_style=NordColors.FROST_3,
        )
        table.add_column("Task", style=f"bold {NordColors.FROST_2}")
        table.add_column("Status", style=f"bold {NordColors.FROST_3}")
        table.add_column("Message", style=f"{NordColors.SNOW_STORM_1}")
        for name, step in self.steps.items():
            icon = STATUS_ICONS.get(step.status, "?")
            style = (
                "success"
                if step.status == "success"
                else "error"
                if step.status == "failed"
                else "warning"
                if step.status == "in_progress"
                else "step"
            )
            table.add_row(
                name.replace("_", " ").title(),
                f"[{style}]{icon} {step.status.upper()}[/]",
                escape(step.message),
            )
        return table
