# topmark:header:start
#
#   project      : cmfront
#   file         : activate.py
#   file_relpath : src/cmfront/cli/commands/activate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront `activate` command.

Prints shell code to be evaluated by the caller:

```sh
eval "$(cm -s src -b build -c Debug activate)"
```

The code exports ``CM_SRC``, ``CM_BIN`` and ``CM_CFG`` (read back as global option
defaults by later ``cm`` invocations), prepends ``$CM_BIN/bin`` to ``PATH`` and
aliases ``cm`` to pass the three values explicitly.
"""

from __future__ import annotations

import click

from cmfront.cli.cmd_common import run_request
from cmfront.cli.options import CmCommand, global_options
from cmfront.core.keys import CliCmd
from cmfront.core.planner import ActivateRequest


@click.command(
    name=CliCmd.ACTIVATE,
    cls=CmCommand,
    help="Print shell commands to activate a set of global options (alias: a).",
)
@global_options
@click.pass_context
def activate_command(ctx: click.Context) -> None:
    """Print the activation snippet."""
    run_request(ctx, ActivateRequest())
