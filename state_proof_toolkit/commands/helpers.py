"""Shared command helpers and utilities."""

import sys

from rich import print as rprint

from state_proof_toolkit.shared.exceptions import NonRetryableException
from state_proof_toolkit.shared.results import Result


def handle_command_error(error: Exception) -> None:
    """
    Standard error handling for commands.

    Args:
        error: The exception that occurred
    """
    if isinstance(error, (ValueError, NonRetryableException)):
        rprint(f"[red]Error:[/red] {str(error)}")
    else:
        rprint(f"[red]Unexpected error:[/red] {str(error)}")

    sys.exit(1)


def exit_on_failure(result: Result) -> None:
    """Print every error of a failed result and exit with status 1."""
    if result.success:
        return
    for error in result.errors:
        rprint(
            f"[red]{error.severity.value.upper()}[/red] "
            f"[dim]{error.source}[/dim] {error.message}"
        )
    sys.exit(1)
