"""
Shared protocols for cargo-cache services.

Services report progress through a LoggerProtocol instead of printing
directly, so the same code drives the CLI and the test suite.
"""

from __future__ import annotations

from typing import Protocol


class LoggerProtocol(Protocol):
    """
    Protocol for user-facing output.

    Implementations:
    - CLILogger (cli/logger.py): typer output with optional verbose mode
    - NullLogger (below): No-op implementation for when output is not wanted

    `echo` is for progress lines that are always shown (removal messages,
    totals); `info` is verbose-only detail.
    """

    def echo(self, message: str) -> None: ...
    def info(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class NullLogger:
    """
    No-op logger implementation for when output is optional.

    Use this when a function requires a LoggerProtocol but the caller
    doesn't need the output.
    """

    def echo(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
