# topmark:header:start
#
#   project      : cmfront
#   file         : __init__.py
#   file_relpath : src/cmfront/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront CLI package.

This package groups all Click command definitions and supporting utilities
for the ``cm`` command-line interface.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        cm = "cmfront.cli.main:main"

All subcommands live in [`cmfront.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
