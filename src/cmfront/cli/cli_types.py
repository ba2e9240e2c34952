# topmark:header:start
#
#   project      : cmfront
#   file         : cli_types.py
#   file_relpath : src/cmfront/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types for cmfront.

- `EnumChoiceParam`: closed, case-insensitive choice mapped onto an Enum.
- `FuzzyParam`: open domain with known values (see
  [`FuzzyMatcher`][cmfront.core.fuzzy.FuzzyMatcher]).
- `OverridingListParam`: comma-separated list whose occurrences replace each other.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Iterable, NoReturn, Protocol, TypeVar, cast

import click

from cmfront.constants import OPTION_LIST_DELIMITER
from cmfront.core.errors import AmbiguousOrUnknownValueError

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    from cmfront.core.fuzzy import FuzzyMatcher

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

# Type variable bounded to Enum for generic EnumParam
E = TypeVar("E", bound=Enum)


def _completion_items(values: Iterable[str], incomplete: str) -> list[ClickCompletionItem]:
    # Runtime import to avoid import-time dependency for non-completion paths
    from click.shell_completion import CompletionItem as RuntimeCompletionItem

    return [RuntimeCompletionItem(v) for v in values if v.startswith(incomplete or "")]


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum (case-insensitive)."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }

        key = str(value).lower()
        if key in lookup:
            return lookup[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_CM_COMPLETE=bash_source cm)"`
        Zsh: `eval "$(_CM_COMPLETE=zsh_source cm)"`
        """
        return _completion_items(self.choices, (incomplete or "").lower())

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumParam({self.enum_cls.__name__})"


class FuzzyParam(ParamTypeBase):
    """Resolve a value through a `FuzzyMatcher`.

    Completion offers the known values only; the open ``prefix*`` namespace is
    mentioned in the error message but never completed.
    """

    name = "value"

    def __init__(self, matcher: FuzzyMatcher) -> None:
        self.matcher = matcher

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> str:
        """Resolve ``value`` against the matcher, failing with a usage error."""
        try:
            return self.matcher.resolve(str(value))
        except AmbiguousOrUnknownValueError as exc:
            self.fail(exc.message, param, ctx)

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Complete from the known values only."""
        return _completion_items(self.matcher.known_values, incomplete)

    def __repr__(self) -> str:
        return f"FuzzyParam({', '.join(self.matcher.valid_values())})"


class OverridingListParam(ParamTypeBase):
    """A comma-separated list, each element optionally fuzzy-resolved.

    Used with a single-valued option, so Click's "last occurrence wins" makes every
    occurrence replace the whole list. An empty value yields an empty list.
    """

    name = "list"

    def __init__(self, matcher: FuzzyMatcher | None = None) -> None:
        self.matcher = matcher

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> tuple[str, ...]:
        """Split ``value`` on commas and resolve each item."""
        if isinstance(value, tuple):
            return value
        items = [item for item in str(value).split(OPTION_LIST_DELIMITER) if item]
        if self.matcher is None:
            return tuple(items)
        try:
            return tuple(self.matcher.resolve(item) for item in items)
        except AmbiguousOrUnknownValueError as exc:
            self.fail(exc.message, param, ctx)

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Complete the last list item, keeping the items before it."""
        if self.matcher is None:
            return []
        head, sep, last = (incomplete or "").rpartition(OPTION_LIST_DELIMITER)
        prefix = f"{head}{sep}"
        return _completion_items(
            (f"{prefix}{v}" for v in self.matcher.known_values), f"{prefix}{last}"
        )

    def __repr__(self) -> str:
        return "OverridingListParam()"
