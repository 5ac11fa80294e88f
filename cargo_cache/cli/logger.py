"""
CLI logger adapter - implements LoggerProtocol for command-line usage.

Progress goes to stdout; warnings and errors go to stderr.
"""

from __future__ import annotations

import typer


class CLILogger:
    """
    Logger implementation for CLI (implements LoggerProtocol from services).

    Outputs messages to stdout/stderr with optional verbose mode.
    """

    def __init__(self, verbose: bool = False) -> None:
        """
        Initialize CLI logger.

        Args:
            verbose: If True, show info messages. If False, only progress, warnings and errors.
        """
        self.verbose = verbose

    def echo(self, message: str) -> None:
        """Print a progress line."""
        typer.echo(message)

    def info(self, message: str) -> None:
        """Log info message (only if verbose)."""
        if self.verbose:
            typer.echo(f'[INFO] {message}')

    def warning(self, message: str) -> None:
        """Log warning message."""
        typer.secho(message, fg=typer.colors.YELLOW, err=True)

    def error(self, message: str) -> None:
        """Log error message."""
        typer.secho(f'Error: {message}', fg=typer.colors.RED, err=True)
