# topmark:header:start
#
#   project      : cmfront
#   file         : errors.py
#   file_relpath : src/cmfront/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for cmfront.

Usage:
    Raise these exceptions while resolving arguments, probing tools, planning or
    executing commands. Click catches them at the top level, calls `show()` and exits
    with the class-specific `exit_code`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.

Failing external commands are reported through `CommandFailedError`, whose exit code
is the child's own so the top-level process can mirror it.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from cmfront.config.logging import get_logger
from cmfront.core.exit_codes import ExitCode
from cmfront.core.keys import ArgKey

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cmfront.config.logging import CmLogger

logger: CmLogger = get_logger(__name__)


class CmError(click.ClickException):
    """Base class for all cmfront errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get(ArgKey.CONSOLE)
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class ConfigParseError(CmError):
    """An explicitly configured config file could not be read or decoded."""

    exit_code = ExitCode.CONFIG_ERROR


class AmbiguousOrUnknownValueError(CmError):
    """A fuzzy-matched value resolved to zero or several known values.

    Attributes:
        value (str): The raw value supplied by the user.
        candidates (tuple[str, ...]): Known values the raw value was a prefix of.
        valid_values (tuple[str, ...]): Everything that would have been accepted,
            including the open ``prefix*`` namespace if there is one.
    """

    exit_code = ExitCode.USAGE_ERROR

    def __init__(
        self,
        value: str,
        *,
        candidates: Sequence[str],
        valid_values: Sequence[str],
    ) -> None:
        self.value = value
        self.candidates = tuple(candidates)
        self.valid_values = tuple(valid_values)
        if self.candidates:
            detail = f"ambiguous, could be any of: {', '.join(self.candidates)}"
        else:
            detail = "no known value matches"
        super().__init__(
            f"invalid value '{value}' ({detail}). "
            f"Possible values: {', '.join(self.valid_values)}"
        )


class FeatureProbeError(CmError):
    """A feature probe could not run for a reason other than "tool not found"."""

    exit_code = ExitCode.UNAVAILABLE


class ResultDBUnavailableError(CmError):
    """The lit ResultDB snapshot is missing or malformed."""

    exit_code = ExitCode.DATA_ERROR


class ExecutionError(CmError):
    """A planned program could not be started at all."""

    exit_code = ExitCode.FAILURE


class CommandFailedError(CmError):
    """A planned command exited unsuccessfully.

    The process exit code mirrors the child's. When the child reported no exit code
    (it was killed by a signal) the sentinel
    [`ExitCode.UNKNOWN_CHILD_STATUS`][cmfront.core.exit_codes.ExitCode] is used.

    Attributes:
        returncode (int | None): The child's exit code, if it had one.
    """

    def __init__(self, returncode: int | None) -> None:
        self.returncode = returncode
        self.exit_code = returncode if returncode is not None else ExitCode.UNKNOWN_CHILD_STATUS
        if returncode is None:
            message = "command failed with unknown code"
        else:
            message = f"command failed with code {returncode}"
        super().__init__(message)

    def show(self, file: IO[Any] | None = None) -> None:
        """Stay silent: the failing tool already reported its own error."""
        logger.debug("%s", self.format_message())
