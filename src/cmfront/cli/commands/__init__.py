# topmark:header:start
#
#   project      : cmfront
#   file         : __init__.py
#   file_relpath : src/cmfront/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the ``cm`` CLI, one module per subcommand."""
