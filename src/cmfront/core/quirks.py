# topmark:header:start
#
#   project      : cmfront
#   file         : quirks.py
#   file_relpath : src/cmfront/core/quirks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Project-shape detection ("quirks mode") and path defaults.

A quirks mode is a named heuristic profile that adjusts default paths and cache
variable names for a particular host project shape. Two modes exist:

- ``none``: a generic CMake project whose root ``CMakeLists.txt`` is the source dir.
- ``llvm``: an LLVM monorepo checkout, where the CMake root lives in ``llvm/``.

Detection is best-effort and only consulted when the user gave no explicit mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cmfront.config.logging import CmLogger, get_logger
from cmfront.constants import (
    CMAKE_ROOT_MARKER,
    DEFAULT_BINARY_DIR,
    DEFAULT_LLVM_SOURCE_DIR,
    DEFAULT_SOURCE_DIR,
    LLVM_SUBDIR_MARKER,
)

logger: CmLogger = get_logger(__name__)


class Quirks(str, Enum):
    """Project quirks modes.

    Attributes:
        NONE: Generic CMake project.
        LLVM: LLVM monorepo.
    """

    NONE = "none"
    LLVM = "llvm"


def detect_quirks(source: str | Path | None) -> Quirks:
    """Classify the project shape at ``source`` (``.`` when None).

    The LLVM mode is inferred when no root ``CMakeLists.txt`` exists at the candidate
    path but an ``llvm`` subdirectory does.
    """
    candidate = Path(source if source is not None else DEFAULT_SOURCE_DIR)
    if not (candidate / CMAKE_ROOT_MARKER).is_file() and (candidate / LLVM_SUBDIR_MARKER).is_dir():
        logger.debug("detected LLVM quirks mode at %s", candidate)
        return Quirks.LLVM
    logger.debug("no quirks detected at %s", candidate)
    return Quirks.NONE


@dataclass(frozen=True)
class ResolvedPaths:
    """Absolute source and binary directories for one invocation."""

    source: Path
    binary: Path

    @classmethod
    def resolve(
        cls,
        *,
        source: str | Path | None,
        binary: str | Path | None,
        quirks: Quirks,
    ) -> ResolvedPaths:
        """Apply quirks-dependent defaults and make both paths absolute.

        Directories need not exist yet: `Path.resolve` is non-strict.
        """
        if source is None:
            source = DEFAULT_LLVM_SOURCE_DIR if quirks is Quirks.LLVM else DEFAULT_SOURCE_DIR
        if binary is None:
            binary = DEFAULT_BINARY_DIR
        return cls(source=Path(source).resolve(), binary=Path(binary).resolve())
