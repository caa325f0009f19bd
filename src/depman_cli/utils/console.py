"""Console output helpers built on rich."""

from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def _get_console() -> Console:
    """Return the shared console, created on first use."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def _rich_echo(message: str, style: Optional[str] = None) -> None:
    _get_console().print(message, style=style, markup=False)


def _rich_success(message: str) -> None:
    _rich_echo(f"✅ {message}", style="green")


def _rich_error(message: str) -> None:
    _rich_echo(f"❌ {message}", style="bold red")


def _rich_warning(message: str) -> None:
    _rich_echo(f"⚠️  {message}", style="yellow")


def _rich_info(message: str) -> None:
    _rich_echo(f"💡 {message}", style="cyan")
