# topmark:header:start
#
#   project      : cmfront
#   file         : __main__.py
#   file_relpath : src/cmfront/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running cmfront via ``python -m cmfront``.

Delegates to [`cmfront.cli.main.main`][], the same function behind the ``cm``
console script, so argument resolution (config file, environment) is identical.

Examples:
    Print the configure plan without running it::

        python -m cmfront -# configure
"""

from __future__ import annotations

from cmfront.cli.main import main

if __name__ == "__main__":
    main()
