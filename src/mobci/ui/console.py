"""Console output formatting utilities for mobci."""

from __future__ import annotations

import sys
from typing import Optional

import click


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_build_started(
        self,
        platform: str,
        profile: str,
        workflow: str,
    ) -> None:
        """Print build start information."""
        print("\nBUILD STARTED")
        print(f"Platform: {platform}")
        print(f"Profile: {profile}")
        print(f"Workflow: {workflow}")
        print()

    def print_build_submitted(self, platform: str, build_id: str) -> None:
        """Print build submission message."""
        print("\nBUILD SUBMITTED")
        print(f"Platform: {platform}")
        print(f"Build ID: {build_id}")

    def print_newline(self) -> None:
        print()

    def print_warning(self, message: str) -> None:
        """Print a warning to stderr."""
        click.echo(click.style(message, fg="yellow"), err=True)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


def bold(text: str) -> str:
    return click.style(text, bold=True)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
