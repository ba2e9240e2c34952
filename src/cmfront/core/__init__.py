# topmark:header:start
#
#   project      : cmfront
#   file         : __init__.py
#   file_relpath : src/cmfront/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, Click-free building blocks of cmfront.

The modules in this package resolve layered arguments, detect the project shape,
and plan external commands. Apart from [`cmfront.core.errors`][] (which builds on
``click.ClickException`` so the CLI can map failures to exit codes), none of them
depend on the CLI layer.
"""

from __future__ import annotations
