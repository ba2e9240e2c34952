# topmark:header:start
#
#   project      : cmfront
#   file         : main.py
#   file_relpath : src/cmfront/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The ``cm`` command group.

Key ideas:
- Before Click parses anything, the raw arguments are layered (config file,
  environment, command line) by [`resolve_args`][cmfront.core.resolver.resolve_args],
  so every value reaches the subcommand as an ordinary option and Click's "last
  occurrence wins" implements precedence.
- Shared state (console, color, log level) is initialized once and placed into
  ``ctx.obj``.
- Subcommands may be abbreviated to a visible alias or any unambiguous prefix.
"""

from __future__ import annotations

from typing import Any

import click

from cmfront.cli.commands.activate import activate_command
from cmfront.cli.commands.build import build_command
from cmfront.cli.commands.configure import configure_command
from cmfront.cli.commands.deactivate import deactivate_command
from cmfront.cli.commands.lit import lit_command
from cmfront.cli.console import ClickConsole, resolve_color_enabled
from cmfront.cli.options import global_options, normalize_option_tokens
from cmfront.config.logging import CmLogger, get_logger, resolve_env_log_level, setup_logging
from cmfront.constants import CMFRONT_VERSION, PROGRAM_NAME
from cmfront.core.keys import ArgKey
from cmfront.core.resolver import resolve_args
from cmfront.core.schema import canonical_subcommand

logger: CmLogger = get_logger(__name__)


def init_common_state(ctx: click.Context) -> None:
    """Initialize shared state (logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
    """
    obj = ctx.ensure_object(dict)

    # Configure internal logging via env:
    level_env = resolve_env_log_level()
    obj[ArgKey.LOG_LEVEL] = level_env
    setup_logging(level=level_env)

    enable_color = resolve_color_enabled()
    obj[ArgKey.COLOR_ENABLED] = enable_color
    ctx.color = enable_color
    obj[ArgKey.CONSOLE] = ClickConsole(enable_color=enable_color)


class CmGroup(click.Group):
    """Command group with argument layering and abbreviated subcommands."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Layer config, environment and command line before Click parses."""
        init_common_state(ctx)
        resolved = resolve_args(args)
        if resolved is not None:
            ctx.obj[ArgKey.RESOLVED_ARGS] = resolved
            args = resolved.argv
        args = normalize_option_tokens(self.get_params(ctx), args)
        return super().parse_args(ctx, args)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Look up ``cmd_name`` by name, alias or unambiguous prefix."""
        return super().get_command(ctx, canonical_subcommand(cmd_name) or cmd_name)

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return the subcommands in declaration order."""
        return list(self.commands)


@click.group(
    name=PROGRAM_NAME,
    cls=CmGroup,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "A CMake front end. Options are read, weakest first, from the config file "
        "(cm.rc), the environment (CM_SRC, CM_BIN, CM_CFG, CM_QUIRKS) and the command line."
    ),
)
@click.version_option(CMFRONT_VERSION, "-V", "--version", prog_name=PROGRAM_NAME)
@global_options
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Entry point for the ``cm`` CLI."""
    logger.trace(
        "invoking subcommand %s, layered from %s",
        ctx.invoked_subcommand,
        ctx.obj.get(ArgKey.RESOLVED_ARGS),
    )


cli.add_command(configure_command)

cli.add_command(build_command)

cli.add_command(lit_command)

cli.add_command(activate_command)

cli.add_command(deactivate_command)


def main(**kwargs: Any) -> Any:
    """Console script entry point."""
    return cli(prog_name=PROGRAM_NAME, **kwargs)


if __name__ == "__main__":
    main()
