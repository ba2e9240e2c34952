# topmark:header:start
#
#   project      : cmfront
#   file         : build.py
#   file_relpath : src/cmfront/cli/commands/build.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront `build` command."""

from __future__ import annotations

import click

from cmfront.cli.cmd_common import run_request
from cmfront.cli.options import CmCommand, global_options
from cmfront.core.keys import CliCmd
from cmfront.core.planner import BuildRequest


@click.command(
    name=CliCmd.BUILD,
    cls=CmCommand,
    help="CMake build (alias: b). ARGS are forwarded to the build tool.",
)
@global_options
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def build_command(ctx: click.Context, *, args: tuple[str, ...]) -> None:
    """Run ``cmake --build`` over the binary directory."""
    run_request(ctx, BuildRequest(args=args))
