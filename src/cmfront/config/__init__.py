# topmark:header:start
#
#   project      : cmfront
#   file         : __init__.py
#   file_relpath : src/cmfront/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration sources for cmfront.

- [`cmfront.config.rcfile`][]: the line-oriented ``cm.rc`` directive file.
- [`cmfront.config.logging`][]: logging setup (TRACE level, colored output).
"""

from __future__ import annotations
