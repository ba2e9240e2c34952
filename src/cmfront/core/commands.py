# topmark:header:start
#
#   project      : cmfront
#   file         : commands.py
#   file_relpath : src/cmfront/core/commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable external command specifications.

An ordered list of `CommandSpec` values is a *plan*. Plans are built by
[`cmfront.core.planner`][] and consumed by [`cmfront.core.executor`][].
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class CommandSpec:
    """One external invocation.

    Attributes:
        program (str): Program name or path.
        args (tuple[str, ...]): Arguments, in order.
        env (tuple[tuple[str, str], ...]): Environment overrides, in insertion order.
    """

    program: str
    args: tuple[str, ...] = ()
    env: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def with_args(self, args: Iterable[str]) -> CommandSpec:
        """Return a copy with ``args`` appended."""
        return CommandSpec(self.program, (*self.args, *args), self.env)

    def with_env(self, key: str, value: str) -> CommandSpec:
        """Return a copy with the ``key`` override set (replacing an earlier one)."""
        env = tuple((k, v) for k, v in self.env if k != key) + ((key, value),)
        return CommandSpec(self.program, self.args, env)

    @property
    def argv(self) -> list[str]:
        """Return ``[program, *args]``."""
        return [self.program, *self.args]

    def render(self) -> str:
        """Return a shell-ready line: ``KEY=value ... program args``, each part quoted.

        Every part round-trips through shell word splitting unchanged.
        """
        parts = [f"{shlex.quote(k)}={shlex.quote(v)}" for k, v in self.env]
        parts.extend(shlex.quote(part) for part in self.argv)
        return " ".join(parts)
