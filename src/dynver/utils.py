"""Core utility functions: console output, diagnostics logging, command execution."""

import subprocess

from rich.console import Console

console = Console()
err_console = Console(stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Turn diagnostic logging on or off for the whole process."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def log(message: str, style: str = "") -> None:
    """Write a diagnostic message to stderr when verbose logging is enabled."""
    if not _verbose:
        return
    try:
        if style:
            err_console.print(message, style=style, highlight=False)
        else:
            err_console.print(message, highlight=False)
    except Exception:
        pass  # Never break version derivation over logging


def run_cmd(args: list[str], cwd: str | None = None) -> subprocess.CompletedProcess:
    """Run a command with stdout and stderr captured as text.

    Bytes that are not valid UTF-8 are replaced rather than raising.
    """
    return subprocess.run(
        args,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
