# topmark:header:start
#
#   project      : cmfront
#   file         : __init__.py
#   file_relpath : src/cmfront/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront package.

cmfront is a subcommand-based frontend for configuring, building and testing CMake
projects, with special support for LLVM. It resolves options from a config file,
the environment and the command line, then plans the external commands (``cmake``,
``llvm-lit``, ...) to run, or prints them in dry-run mode.
"""

from __future__ import annotations
