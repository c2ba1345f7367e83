"""Rich console utilities for job progress output.

All progress lines of a run go through the shared console defined here,
so a CronJob log reads the same whichever phase produced the line.
Namespaces are always shown as ``[name]`` and secrets as
``[namespace/name]``.
"""

from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "cyan bold",
        "namespace": "magenta",
        "muted": "dim",
    }
)

# Shared console instance
console = Console(theme=_THEME, highlight=False)


def info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[info]ℹ[/info] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓[/success] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]⚠[/warning] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗[/error] {message}")


def action(message: str) -> None:
    """Print a phase message."""
    console.print(f"[info]→[/info] {message}")


def step(message: str) -> None:
    """Print a per-namespace sub-step message."""
    console.print(f"[muted]•[/muted] {message}")


def highlight(text: str) -> str:
    """Return text wrapped in highlight markup."""
    return f"[highlight]{escape(text)}[/highlight]"


def namespace_tag(namespace: str, secret_name: str | None = None) -> str:
    """Return the bracketed label for a namespace or a namespaced secret.

    Args:
        namespace: The namespace name.
        secret_name: Optional secret name, rendered as ``namespace/name``.

    Returns:
        The label wrapped in namespace markup, brackets escaped.

    """
    label = f"{namespace}/{secret_name}" if secret_name else namespace
    return f"[namespace]{escape(f'[{label}]')}[/namespace]"


def run_started(when: datetime) -> None:
    """Print the opening line of a run with its UTC start time."""
    info(f"Running at {when.isoformat()}")


def namespace_result(namespace: str, failure: str | None = None) -> None:
    """Print the outcome of updating the secret in one namespace.

    Args:
        namespace: The namespace that was processed.
        failure: The error message, or None when the update succeeded.

    """
    prefix = f"Updating secret in namespace {namespace_tag(namespace)}..."
    if failure is None:
        step(f"{prefix} success")
    else:
        error(f"{prefix} failed: {escape(failure)}")


@contextmanager
def spinner(message: str) -> Generator[None, None, None]:
    """Show a spinner while an outbound call is in flight.

    Args:
        message: The status message to display.

    Yields:
        None

    """
    with console.status(f"[info]{message}[/info]", spinner="dots"):
        yield


def summary_panel(title: str, items: dict[str, str], *, failed: bool = False) -> None:
    """Print the end-of-run panel with key-value pairs.

    Args:
        title: Title for the panel.
        items: Dictionary of label -> value pairs to display.
        failed: Draw the panel border in the error color.

    """
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column(style="cyan")

    for label, value in items.items():
        table.add_row(f"{label}:", escape(value))

    border = "red" if failed else "green"
    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style=border))
