# topmark:header:start
#
#   project      : CartSniff
#   file         : errors.py
#   file_relpath : src/cartsniff/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the CartSniff CLI.

Each error carries the `ExitCode` Click exits with. When a project console is
stored in the Click context, errors are printed through it so they follow the
``--color`` setting.
"""

from __future__ import annotations

from typing import IO, Any

import click

from cartsniff.cli.exit_codes import ExitCode


class CartsniffError(click.ClickException):
    """Base class for all CartSniff CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class CartsniffUsageError(CartsniffError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class CartsniffConfigError(CartsniffError):
    """Error for unreadable or malformed configuration files."""

    exit_code = ExitCode.CONFIG_ERROR


class CartsniffFileNotFoundError(CartsniffError):
    """Error when a ROM path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class CartsniffPermissionDeniedError(CartsniffError):
    """Error when a ROM is not readable."""

    exit_code = ExitCode.PERMISSION_DENIED


class CartsniffIOError(CartsniffError):
    """Error for other failures while reading a ROM."""

    exit_code = ExitCode.IO_ERROR
