# topmark:header:start
#
#   project      : cmfront
#   file         : options.py
#   file_relpath : src/cmfront/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click options generated from the option schema.

[`cmfront.core.schema`][] declares every option once; this module turns each
[`OptionSpec`][cmfront.core.schema.OptionSpec] into a `click.option` decorator:

- ``VALUE``: single-valued, last occurrence wins (Click's default).
- ``SETTABLE_BOOL``: a ``--x/--no-x`` flag pair; [`CmCommand`][cmfront.cli.options.CmCommand]
  rewrites ``--x=true`` / ``--x=false`` (and ``-x=...``) onto the pair before parsing.
  Value-taking short options also accept ``-x=value``.
- ``OVERRIDING_LIST``: single-valued option of
  [`OverridingListParam`][cmfront.cli.cli_types.OverridingListParam] type.
- ``APPEND_LIST``: ``multiple=True``.

Global options are attached to the group and to every subcommand. They do not reach
the command callbacks: a callback stores explicitly given values into ``ctx.obj``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, TypeVar

import click
from click.core import ParameterSource

from cmfront.cli.cli_types import EnumChoiceParam, FuzzyParam, OverridingListParam
from cmfront.core.resolver import BOOL_SPELLINGS
from cmfront.core.schema import GLOBAL_OPTIONS, OptionKind, OptionSpec

if TYPE_CHECKING:
    from collections.abc import Sequence

F = TypeVar("F", bound=Callable[..., Any])

FORWARD_ARGS_META_KEY = "cmfront.forward_args"


class SettableBoolOption(click.Option):
    """A boolean flag with an explicit ``--no-<name>`` secondary spelling."""

    @property
    def false_spelling(self) -> str:
        """The ``--no-<name>`` spelling."""
        return self.secondary_opts[0]


def _param_type(spec: OptionSpec) -> click.ParamType | None:
    if spec.kind is OptionKind.OVERRIDING_LIST:
        return OverridingListParam(spec.matcher)
    if spec.enum_cls is not None:
        return EnumChoiceParam(spec.enum_cls)
    if spec.matcher is not None:
        return FuzzyParam(spec.matcher)
    return None


def option_from_spec(spec: OptionSpec, **overrides: Any) -> Callable[[F], F]:
    """Return a ``click.option`` decorator for ``spec``."""
    decls: list[str] = [spec.name]
    if spec.short:
        decls.append(spec.short)
    kwargs: dict[str, Any] = {
        "help": spec.help,
        "show_default": spec.default_doc if spec.default_doc else False,
    }
    if spec.kind is OptionKind.SETTABLE_BOOL:
        decls.append(f"{spec.long}/--no-{spec.long[2:]}")
        kwargs.update(cls=SettableBoolOption, is_flag=True, default=bool(spec.default))
    else:
        decls.append(spec.long)
        kwargs["default"] = spec.default
        param_type = _param_type(spec)
        if param_type is not None:
            kwargs["type"] = param_type
        if spec.metavar:
            kwargs["metavar"] = spec.metavar
        if spec.kind is OptionKind.APPEND_LIST:
            kwargs["multiple"] = True
            kwargs["default"] = ()
    kwargs.update(overrides)
    return click.option(*decls, **kwargs)


def options_from_specs(specs: Sequence[OptionSpec]) -> Callable[[F], F]:
    """Apply ``option_from_spec`` for every spec, keeping declaration order in help."""

    def decorator(f: F) -> F:
        for spec in reversed(specs):
            f = option_from_spec(spec)(f)
        return f

    return decorator


def _store_global(ctx: click.Context, param: click.Parameter, value: Any) -> None:
    """Store an explicitly given global option into ``ctx.obj``."""
    if param.name is None:
        return
    if ctx.get_parameter_source(param.name) in (ParameterSource.DEFAULT, None):
        return
    ctx.ensure_object(dict)[param.name] = value


def global_options(f: F) -> F:
    """Attach every global option, routed into ``ctx.obj``."""
    for spec in reversed(GLOBAL_OPTIONS):
        f = option_from_spec(
            spec,
            expose_value=False,
            callback=_store_global,
            is_eager=False,
        )(f)
    return f


def normalize_option_tokens(params: Sequence[click.Parameter], args: Sequence[str]) -> list[str]:
    """Rewrite spellings Click does not parse natively.

    - ``--x=true|false`` / ``-x=true|false`` on a settable boolean become ``--x`` or
      ``--no-x``.
    - ``-x=value`` on a value-taking short option becomes ``-x value``.

    Scanning stops at ``--``. The token following a value-taking option spelled without
    ``=`` is its value and is left alone.

    Raises:
        click.BadParameter: For a boolean value other than ``true`` or ``false``.
    """
    bools: dict[str, SettableBoolOption] = {}
    takes_value: set[str] = set()
    for param in params:
        if isinstance(param, SettableBoolOption):
            for opt in param.opts:
                bools[opt] = param
        elif isinstance(param, click.Option) and not param.is_flag:
            takes_value.update(param.opts)

    out: list[str] = []
    skip_next = False
    for i, tok in enumerate(args):
        if skip_next:
            out.append(tok)
            skip_next = False
            continue
        if tok == "--":
            out.extend(args[i:])
            break
        name, sep, raw = tok.partition("=")
        if sep and name in bools:
            if raw not in BOOL_SPELLINGS:
                raise click.BadParameter(
                    f"invalid value '{raw}', expected 'true' or 'false'",
                    param=bools[name],
                    param_hint=name,
                )
            out.append(name if BOOL_SPELLINGS[raw] else bools[name].false_spelling)
            continue
        if sep and len(name) == 2 and not name.startswith("--") and name in takes_value:
            out.extend((name, raw))
            continue
        if tok in takes_value:
            skip_next = True
        out.append(tok)
    return out


class CmCommand(click.Command):
    """A subcommand accepting ``--x=true|false`` on booleans and ``-x=value`` on short options.

    Args:
        forward_after_separator (bool): If True, tokens after ``--`` are not parsed
            but kept aside for forwarding (see `forward_args`).
    """

    def __init__(self, *args: Any, forward_after_separator: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.forward_after_separator = forward_after_separator

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Normalize boolean spellings and split off the arguments after ``--``."""
        args = normalize_option_tokens(self.get_params(ctx), args)
        if self.forward_after_separator and "--" in args:
            idx = args.index("--")
            ctx.meta[FORWARD_ARGS_META_KEY] = tuple(args[idx + 1 :])
            args = args[:idx]
        return super().parse_args(ctx, args)


def forward_args(ctx: click.Context) -> tuple[str, ...]:
    """Return the tokens found after ``--`` by a ``forward_after_separator`` command."""
    return tuple(ctx.meta.get(FORWARD_ARGS_META_KEY, ()))
