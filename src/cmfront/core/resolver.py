# topmark:header:start
#
#   project      : cmfront
#   file         : resolver.py
#   file_relpath : src/cmfront/core/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layered argument resolution.

The command-line parser only understands "last occurrence wins". Layering is therefore
implemented by *re-ordering* arguments before parsing, weakest first:

```text
[subcommand,
 <config file arguments in scope for the subcommand>,
 <global options typed before the subcommand, else from the environment,
  each re-expressed as --long=value>,
 <-h / --help if typed before the subcommand>,
 <everything typed after the subcommand>]
```

A pre-scan walks the tokens before the subcommand using only the global option
schema. If that prefix contains anything else (an unknown option, a missing value,
no subcommand at all), resolution is skipped and the arguments are passed through
unchanged, so the regular parser reports the problem.

Note:
    Global options typed *after* the subcommand are not lifted: they are part of the
    literal tail and therefore already strongest.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cmfront.config.logging import CmLogger, get_logger
from cmfront.config.rcfile import ConfigFile
from cmfront.core.schema import (
    GLOBAL_OPTIONS,
    HELP_SPELLINGS,
    OptionKind,
    OptionSpec,
    canonical_subcommand,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger: CmLogger = get_logger(__name__)

BOOL_SPELLINGS: dict[str, bool] = {"true": True, "false": False}


class PrescanError(ValueError):
    """The tokens before the subcommand are not made of global options only."""


@dataclass
class PrescanResult:
    """Outcome of scanning the tokens before the subcommand.

    Attributes:
        subcommand (str): The subcommand token, as typed.
        values (dict[str, str]): Last value per global option name, rendered as text.
        help_args (list[str]): Help spellings seen, deduplicated, short first.
        rest (list[str]): Tokens after the subcommand.
    """

    subcommand: str
    values: dict[str, str] = field(default_factory=dict)
    help_args: list[str] = field(default_factory=list)
    rest: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedArgs:
    """The layered argument vector, kept in its segments for diagnostics."""

    subcommand: str
    config_args: tuple[str, ...]
    global_args: tuple[str, ...]
    help_args: tuple[str, ...]
    rest: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        """Return the flattened argument vector (without program name)."""
        return [
            self.subcommand,
            *self.config_args,
            *self.global_args,
            *self.help_args,
            *self.rest,
        ]


def _parse_bool(spec: OptionSpec, raw: str) -> str:
    if raw not in BOOL_SPELLINGS:
        raise PrescanError(f"invalid boolean {raw!r} for {spec.long}")
    return raw


def prescan(args: Sequence[str], options: Sequence[OptionSpec] = GLOBAL_OPTIONS) -> PrescanResult:
    """Split ``args`` at the subcommand, collecting the global options before it.

    Raises:
        PrescanError: If a token before the subcommand is not a known global option
            (or help flag), a value is missing, or there is no subcommand.
    """
    by_long = {spec.long: spec for spec in options}
    by_short = {spec.short: spec for spec in options if spec.short}
    values: dict[str, str] = {}
    helps: set[str] = set()

    i = 0
    while i < len(args):
        tok = args[i]
        if tok in HELP_SPELLINGS:
            helps.add(tok)
            i += 1
            continue
        if tok == "--" or tok == "-":
            raise PrescanError(f"unexpected {tok!r} before subcommand")
        if tok.startswith("--"):
            name, sep, raw = tok.partition("=")
            spec = by_long.get(name)
            if spec is None:
                raise PrescanError(f"unknown option {name!r}")
            if spec.kind is OptionKind.SETTABLE_BOOL:
                values[spec.name] = _parse_bool(spec, raw) if sep else "true"
                i += 1
            elif sep:
                values[spec.name] = raw
                i += 1
            elif i + 1 < len(args):
                values[spec.name] = args[i + 1]
                i += 2
            else:
                raise PrescanError(f"missing value for {spec.long}")
            continue
        if tok.startswith("-"):
            i = _scan_short_cluster(args, i, by_short, values, helps)
            continue
        result = PrescanResult(subcommand=tok, values=values, rest=list(args[i + 1 :]))
        result.help_args = [h for h in HELP_SPELLINGS if h in helps]
        return result
    raise PrescanError("no subcommand")


def _scan_short_cluster(
    args: Sequence[str],
    i: int,
    by_short: dict[str, OptionSpec],
    values: dict[str, str],
    helps: set[str],
) -> int:
    """Consume a cluster such as ``-#sDIR`` starting at ``args[i]``; return the next index."""
    tok = args[i]
    j = 1
    while j < len(tok):
        flag = f"-{tok[j]}"
        if flag in HELP_SPELLINGS:
            helps.add(flag)
            j += 1
            continue
        spec = by_short.get(flag)
        if spec is None:
            raise PrescanError(f"unknown option {flag!r}")
        tail = tok[j + 1 :]
        if spec.kind is OptionKind.SETTABLE_BOOL:
            if tail.startswith("="):
                values[spec.name] = _parse_bool(spec, tail[1:])
                return i + 1
            values[spec.name] = "true"
            j += 1
            continue
        if tail:
            values[spec.name] = tail[1:] if tail.startswith("=") else tail
            return i + 1
        if i + 1 < len(args):
            values[spec.name] = args[i + 1]
            return i + 2
        raise PrescanError(f"missing value for {spec.long}")
    return i + 1


def global_defaults(
    prescanned: Mapping[str, str],
    environ: Mapping[str, str],
    options: Sequence[OptionSpec] = GLOBAL_OPTIONS,
) -> list[str]:
    """Render global options as ``--long=value`` tokens, CLI values before environment.

    Empty environment values count as unset.
    """
    out: list[str] = []
    for spec in options:
        value = prescanned.get(spec.name)
        if value is None and spec.env_var is not None:
            value = environ.get(spec.env_var) or None
        if value is not None:
            out.append(spec.render(value))
    return out


def resolve_args(
    args: Sequence[str],
    *,
    environ: Mapping[str, str] | None = None,
    config: ConfigFile | None = None,
) -> ResolvedArgs | None:
    """Layer config file, environment and command line into one argument vector.

    Args:
        args (Sequence[str]): Raw arguments, without the program name.
        environ (Mapping[str, str] | None): Environment; defaults to ``os.environ``.
        config (ConfigFile | None): Config file; located via ``environ`` when None.

    Returns:
        ResolvedArgs | None: The layered arguments, or None when the raw arguments do
            not start with global options followed by a subcommand. Callers then use
            the raw arguments as-is.

    Raises:
        ConfigParseError: If an explicitly configured config file cannot be read.
    """
    env = os.environ if environ is None else environ
    try:
        scanned = prescan(args)
    except PrescanError as exc:
        logger.debug("argument layering skipped: %s", exc)
        return None

    if config is None:
        config = ConfigFile.from_env(env)
    full_name = canonical_subcommand(scanned.subcommand) or scanned.subcommand
    config_args: list[str] = []
    config.slurp_into(full_name, config_args)

    resolved = ResolvedArgs(
        subcommand=scanned.subcommand,
        config_args=tuple(config_args),
        global_args=tuple(global_defaults(scanned.values, env)),
        help_args=tuple(scanned.help_args),
        rest=tuple(scanned.rest),
    )
    logger.debug("resolved argv: %s", resolved.argv)
    return resolved
