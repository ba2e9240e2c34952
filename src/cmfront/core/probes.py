# topmark:header:start
#
#   project      : cmfront
#   file         : probes.py
#   file_relpath : src/cmfront/core/probes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tool availability and compiler flag probes used while planning ``configure``.

Probes are blocking subprocess invocations with all standard streams redirected to
the null device. "Not found" is a negative result, any other failure to start the
process is fatal ([`FeatureProbeError`][cmfront.core.errors.FeatureProbeError]).

When ``$CM_TESTING`` is set, every tool is reported as present so plans are
reproducible regardless of the host. Compiler flag probes are unaffected: tests pin
them with ``CC=/bin/false``.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING, Protocol

from cmfront.config.logging import CmLogger, get_logger
from cmfront.core.errors import FeatureProbeError
from cmfront.core.keys import EnvVar

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger: CmLogger = get_logger(__name__)

DEFAULT_CC = "cc"


class FeatureProbes(Protocol):
    """Capability queries the planner needs from the host."""

    def has_command(self, name: str) -> bool:
        """Return True if ``name`` can be executed."""
        ...

    def has_cc_flag(self, flag: str) -> bool:
        """Return True if the C compiler accepts ``flag``."""
        ...


def _run_quietly(argv: Sequence[str]) -> subprocess.CompletedProcess[bytes] | None:
    """Run ``argv`` with null stdio; return None if the program does not exist."""
    try:
        return subprocess.run(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise FeatureProbeError(f"failed to probe {argv[0]!r}: {exc}") from exc


class SubprocessProbes:
    """Probe the host by spawning processes.

    Args:
        environ (Mapping[str, str] | None): Environment used for ``$CC`` and
            ``$CM_TESTING``; defaults to ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def has_command(self, name: str) -> bool:
        """Return True if ``name`` can be spawned (always True under ``CM_TESTING``)."""
        if EnvVar.TESTING in self._environ:
            return True
        found = _run_quietly([name]) is not None
        logger.debug("probe command %s: %s", name, found)
        return found

    def has_cc_flag(self, flag: str) -> bool:
        """Return True if ``$CC`` compiles an empty C file with ``flag``."""
        cc = self._environ.get(EnvVar.CC, DEFAULT_CC)
        result = _run_quietly([cc, "-x", "c", "-", "-o", "-", "-c", flag])
        accepted = result is not None and result.returncode == 0
        logger.debug("probe %s %s: %s", cc, flag, accepted)
        return accepted
