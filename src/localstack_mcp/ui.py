# localstack_mcp/ui.py
"""
Rich Terminal Output Utilities

All output goes to stderr so it never mixes with JSON-RPC traffic on stdout.
"""

from typing import Any, Optional

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console(stderr=True)


def banner(title: str, role: str, emoji: str = "☁️", border_style: str = "green") -> Panel:
    """Server startup banner."""
    content = Text()
    content.append(f"{emoji}  ", "cyan")
    content.append(title, "bold green")
    content.append("\n\n", "")
    content.append(role, "dim")

    return Panel(
        content,
        title=f"[bold green]{title}[/]",
        subtitle="System Ready",
        border_style=border_style,
        box=ROUNDED,
        padding=(1, 2),
    )


def success(message: str) -> None:
    console.print(f"[green]✅[/] {message}")


def error(message: str) -> None:
    console.print(f"[red]❌[/] {message}")


def warning(message: str) -> None:
    console.print(f"[yellow]⚠️[/] {message}")


def tool_registered(module: str) -> None:
    console.print(f"[green]✓[/] [bold]{module}[/] tools registered")


def tool_failed(module: str, error: str) -> None:
    console.print(f"[red]✗[/] [bold]{module}[/] tools failed: {error}")


def key_value_table(title: str, data: dict[str, Any], skip: Optional[set[str]] = None) -> Table:
    """Two-column table of a flat result document."""
    table = Table(title=title, box=ROUNDED, style="cyan", show_header=False)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in data.items():
        if skip and key in skip:
            continue
        table.add_row(key, ", ".join(map(str, value)) if isinstance(value, list) else str(value))
    return table


__all__ = [
    "banner",
    "console",
    "error",
    "key_value_table",
    "success",
    "tool_failed",
    "tool_registered",
    "warning",
]
