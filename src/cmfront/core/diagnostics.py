# topmark:header:start
#
#   project      : cmfront
#   file         : diagnostics.py
#   file_relpath : src/cmfront/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics support.

Non-fatal conditions found while planning (for example an unreadable ResultDB) are
returned as `Diagnostic` values next to the plan rather than printed from the core,
so the CLI decides how to show them.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import cast

from yachalk import chalk


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during planning."""

    INFO = "info"
    WARNING = "warning"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level."""
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str

    def render(self, *, color: bool = False) -> str:
        """Return ``"<level>: <message>"``, colored by severity when requested."""
        text = f"{self.level.value}: {self.message}"
        return self.level.color(text) if color else text
