"""Shared Rich console for tunedeck output.

Everything the user sees (command results through output.log and the
interactive prompt banner) goes through one Console, so tests can swap in a
recording console and read back what a command printed.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """The shared console, created on first use."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console | None) -> None:
    """Install a console (e.g. Console(record=True)); None restores the default."""
    global _console
    _console = console


def safe_print(message: str, style: str | None = None) -> None:
    """Print one line to the shared console in an optional Rich style."""
    get_console().print(message, style=style)
