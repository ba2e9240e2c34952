# topmark:header:start
#
#   project      : cmfront
#   file         : configure.py
#   file_relpath : src/cmfront/cli/commands/configure.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront `configure` command.

Clears the CMake cache in the binary directory, then runs ``cmake -S <src> -B <bin>``
with the generator, build type, prefix path, compiler launcher, linker, sanitizer and
LLVM project/runtime/target selection derived from the options and quirks mode.
"""

from __future__ import annotations

import click

from cmfront.cli.cmd_common import run_request
from cmfront.cli.options import CmCommand, global_options, options_from_specs
from cmfront.core.keys import CliCmd
from cmfront.core.planner import ConfigureRequest
from cmfront.core.schema import CONFIGURE_OPTIONS


@click.command(
    name=CliCmd.CONFIGURE,
    cls=CmCommand,
    help="CMake configure (alias: c). ARGS are forwarded to cmake.",
)
@global_options
@options_from_specs(CONFIGURE_OPTIONS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def configure_command(
    ctx: click.Context,
    *,
    prefix_path: tuple[str, ...] | None,
    generator: str,
    makefiles: bool,
    shared_libs: bool,
    san: bool,
    linker: str | None,
    flag: tuple[str, ...],
    expensive_checks: bool,
    enable_projects: tuple[str, ...] | None,
    enable_runtimes: tuple[str, ...] | None,
    targets_to_build: tuple[str, ...] | None,
    disable_implicit_native: bool,
    args: tuple[str, ...],
) -> None:
    """Plan and run the configure step."""
    request = ConfigureRequest(
        generator=generator,
        makefiles=makefiles,
        prefix_path=prefix_path or (),
        shared_libs=shared_libs,
        san=san,
        linker=linker,
        flags=flag,
        expensive_checks=expensive_checks,
        enable_projects=enable_projects,
        enable_runtimes=enable_runtimes,
        targets_to_build=targets_to_build,
        disable_implicit_native=disable_implicit_native,
        args=args,
    )
    run_request(ctx, request)
