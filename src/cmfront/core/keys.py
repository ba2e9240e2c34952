# topmark:header:start
#
#   project      : cmfront
#   file         : keys.py
#   file_relpath : src/cmfront/core/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared canonical names: subcommands, argument keys and environment variables.

Centralizing these values avoids string duplication between the resolver, the Click
layer and the planner.

Notes:
    - Keep this module behavior-free; it should remain a pure namespace for
      constants so it can be imported from anywhere without causing cycles.
"""

from __future__ import annotations

from typing import Final


class CliCmd:
    """Subcommand names exposed by the ``cm`` CLI, with their visible aliases."""

    CONFIGURE: Final[str] = "configure"
    BUILD: Final[str] = "build"
    LIT: Final[str] = "lit"
    ACTIVATE: Final[str] = "activate"
    DEACTIVATE: Final[str] = "deactivate"

    ALIASES: Final[dict[str, str]] = {
        "c": CONFIGURE,
        "b": BUILD,
        "l": LIT,
        "a": ACTIVATE,
        "d": DEACTIVATE,
    }


class ArgKey:
    """Canonical destination keys stored in ``ctx.obj`` by the Click layer.

    Values are Python identifiers (snake_case), not CLI spellings.
    """

    SOURCE: Final[str] = "source"
    BINARY: Final[str] = "binary"
    CONFIG: Final[str] = "config"
    QUIRKS: Final[str] = "quirks"
    DRY_RUN: Final[str] = "dry_run"

    LOG_LEVEL: Final[str] = "log_level"
    COLOR_ENABLED: Final[str] = "color_enabled"
    CONSOLE: Final[str] = "console"
    RESOLVED_ARGS: Final[str] = "resolved_args"


class EnvVar:
    """Environment variables read (or exported) by cmfront."""

    SOURCE: Final[str] = "CM_SRC"
    BINARY: Final[str] = "CM_BIN"
    CONFIG: Final[str] = "CM_CFG"
    QUIRKS: Final[str] = "CM_QUIRKS"

    CONFIG_PATH: Final[str] = "CM_CONFIG_PATH"
    TESTING: Final[str] = "CM_TESTING"

    CC: Final[str] = "CC"
    CFLAGS: Final[str] = "CFLAGS"
    CXXFLAGS: Final[str] = "CXXFLAGS"

    LIT_OPTS: Final[str] = "LIT_OPTS"
    FILECHECK_OPTS: Final[str] = "FILECHECK_OPTS"
