# topmark:header:start
#
#   project      : cmfront
#   file         : fuzzy.py
#   file_relpath : src/cmfront/core/fuzzy.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fuzzy value matching for partially-open option domains.

Many options have a list of *known* values that is useful for completion and for
normalizing case, but any other string is still legal (for example a CMake build type
the project defines itself). A second family of options, such as LLVM's ``check-*``
test groups, has an *inferable prefix*: users may type any unambiguous prefix of a
known value without the prefix, or any string that already carries the prefix.

`FuzzyMatcher` implements both modes:

- **Without inferable prefix**: a token equal to exactly one known value, ignoring
  case, resolves to that value's canonical spelling; anything else is returned as-is.
- **With inferable prefix**: tokens already starting with the prefix are returned
  unchanged; otherwise the token must be a (case-sensitive) prefix of exactly one known
  value, which resolves to ``prefix + value``. Zero or several matches raise
  [`AmbiguousOrUnknownValueError`][cmfront.core.errors.AmbiguousOrUnknownValueError].

Example:
    ```python
    builds = FuzzyMatcher(["Release", "Debug"])
    assert builds.resolve("debug") == "Debug"
    assert builds.resolve("Profile") == "Profile"

    groups = FuzzyMatcher(["all", "llvm"], inferable_prefix="check-")
    assert groups.resolve("a") == "check-all"
    assert groups.resolve("check-mlir") == "check-mlir"
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cmfront.core.errors import AmbiguousOrUnknownValueError

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class FuzzyMatcher:
    """Resolve raw tokens against a known-value set.

    Attributes:
        known_values (Iterable[str]): Known values in their canonical spelling, in
            declaration order.
        inferable_prefix (str | None): Prefix of the open namespace, if any.
    """

    known_values: Iterable[str]
    inferable_prefix: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "known_values", tuple(self.known_values))

    @property
    def open_namespace(self) -> str | None:
        """Return the ``prefix*`` pattern of the open namespace, or None.

        Kept apart from `known_values` so completion generators only ever see the
        finite set.
        """
        if self.inferable_prefix is None:
            return None
        return f"{self.inferable_prefix}*"

    def valid_values(self) -> list[str]:
        """Return every accepted spelling for error messages (open namespace first)."""
        out: list[str] = []
        if self.open_namespace is not None:
            out.append(self.open_namespace)
        out.extend(self.known_values)
        return out

    def resolve(self, value: str) -> str:
        """Resolve ``value`` to its canonical form.

        Args:
            value (str): The raw token.

        Returns:
            str: The canonical value.

        Raises:
            AmbiguousOrUnknownValueError: In inferable-prefix mode, when ``value`` does
                not carry the prefix and is a prefix of zero or several known values.
        """
        if self.inferable_prefix is None:
            return self._resolve_open(value)
        return self._resolve_with_prefix(value, self.inferable_prefix)

    def _resolve_open(self, value: str) -> str:
        folded = value.casefold()
        matching = [known for known in self.known_values if known.casefold() == folded]
        if len(matching) == 1:
            return matching[0]
        return value

    def _resolve_with_prefix(self, value: str, prefix: str) -> str:
        if value.startswith(prefix):
            return value
        matching = [known for known in self.known_values if known.startswith(value)]
        if len(matching) == 1:
            return f"{prefix}{matching[0]}"
        raise AmbiguousOrUnknownValueError(
            value,
            candidates=matching,
            valid_values=self.valid_values(),
        )
