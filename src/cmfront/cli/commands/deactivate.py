# topmark:header:start
#
#   project      : cmfront
#   file         : deactivate.py
#   file_relpath : src/cmfront/cli/commands/deactivate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront `deactivate` command.

Prints shell code undoing ``activate``. Removing ``$CM_BIN/bin`` from ``PATH`` is a
plain string substitution and only reliably undoes a single prior activation.
"""

from __future__ import annotations

import click

from cmfront.cli.cmd_common import run_request
from cmfront.cli.options import CmCommand, global_options
from cmfront.core.keys import CliCmd
from cmfront.core.planner import DeactivateRequest


@click.command(
    name=CliCmd.DEACTIVATE,
    cls=CmCommand,
    help="Print shell commands to deactivate global options set via activate (alias: d).",
)
@global_options
@click.pass_context
def deactivate_command(ctx: click.Context) -> None:
    """Print the deactivation snippet."""
    run_request(ctx, DeactivateRequest())
