# topmark:header:start
#
#   project      : cmfront
#   file         : schema.py
#   file_relpath : src/cmfront/core/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Explicit option schema shared by the argument resolver and the Click layer.

Every option is declared once here as an `OptionSpec` descriptor: its spellings, its
kind (which also fixes how repeated occurrences combine), its default, an optional
environment variable and an optional fuzzy matcher.

- [`cmfront.core.resolver`][] scans raw argv with `GLOBAL_OPTIONS` to lift global
  options out from before the subcommand and to merge environment defaults.
- [`cmfront.cli.options`][] turns descriptors into Click options.

Declaring the grammar is therefore decoupled from resolving layered values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from cmfront.constants import DEFAULT_BINARY_DIR, DEFAULT_BUILD_TYPE, DEFAULT_GENERATOR
from cmfront.core.keys import ArgKey, CliCmd, EnvVar
from cmfront.core.known_values import (
    BUILD_TYPE_MATCHER,
    LINKER_MATCHER,
    LIT_GROUP_MATCHER,
    PROJECT_MATCHER,
    RUNTIME_MATCHER,
    TARGET_MATCHER,
)
from cmfront.core.quirks import Quirks

if TYPE_CHECKING:
    from cmfront.core.fuzzy import FuzzyMatcher


class OptionKind(str, Enum):
    """How an option consumes values and how repeated occurrences combine.

    Attributes:
        VALUE: Takes exactly one value (``--opt=v``, ``--opt v``, ``-ov``, ``-o v``);
            the last occurrence wins.
        SETTABLE_BOOL: Bare flag means true; ``--opt=true`` / ``--opt=false`` set it
            explicitly; the last occurrence wins.
        OVERRIDING_LIST: Comma-separated list; each occurrence replaces the whole
            list.
        APPEND_LIST: Repeatable; occurrences accumulate in order.
    """

    VALUE = "value"
    SETTABLE_BOOL = "settable-bool"
    OVERRIDING_LIST = "overriding-list"
    APPEND_LIST = "append-list"


@dataclass(frozen=True)
class OptionSpec:
    """Descriptor for one option.

    Attributes:
        name (str): Destination key.
        long (str): Long spelling, including ``--``.
        short (str | None): Short spelling, including ``-``.
        kind (OptionKind): Value/precedence class.
        default (object): Value used when the option is absent everywhere.
        env_var (str | None): Environment variable supplying a default, if any.
        default_doc (str | None): Human-readable default shown in help.
        matcher (FuzzyMatcher | None): Fuzzy matcher applied to each value.
        enum_cls (type[Enum] | None): Closed set of accepted values, if any.
        metavar (str | None): Value placeholder shown in help.
        help (str): Help text.
    """

    name: str
    long: str
    short: str | None
    kind: OptionKind
    default: object = None
    env_var: str | None = None
    default_doc: str | None = None
    matcher: FuzzyMatcher | None = None
    enum_cls: type[Enum] | None = None
    metavar: str | None = None
    help: str = ""

    def render(self, value: str) -> str:
        """Re-express ``value`` as a single explicit ``--long=value`` token."""
        return f"{self.long}={value}"


# --- Global options (accepted before or after any subcommand) ---

GLOBAL_OPTIONS: Final[tuple[OptionSpec, ...]] = (
    OptionSpec(
        name=ArgKey.SOURCE,
        long="--source",
        short="-s",
        kind=OptionKind.VALUE,
        env_var=EnvVar.SOURCE,
        default_doc=". (llvm in LLVM quirks mode)",
        metavar="DIR",
        help="CMake source directory.",
    ),
    OptionSpec(
        name=ArgKey.BINARY,
        long="--binary",
        short="-b",
        kind=OptionKind.VALUE,
        env_var=EnvVar.BINARY,
        default_doc=f"./{DEFAULT_BINARY_DIR}",
        metavar="DIR",
        help="CMake binary directory.",
    ),
    OptionSpec(
        name=ArgKey.CONFIG,
        long="--config",
        short="-c",
        kind=OptionKind.VALUE,
        env_var=EnvVar.CONFIG,
        default_doc=DEFAULT_BUILD_TYPE,
        matcher=BUILD_TYPE_MATCHER,
        metavar="CONFIG",
        help="CMake build config.",
    ),
    OptionSpec(
        name=ArgKey.QUIRKS,
        long="--quirks",
        short="-q",
        kind=OptionKind.VALUE,
        env_var=EnvVar.QUIRKS,
        default_doc="detected",
        enum_cls=Quirks,
        help="Disable quirks mode detection and specify one explicitly.",
    ),
    OptionSpec(
        name=ArgKey.DRY_RUN,
        long="--dry-run",
        short="-#",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="Perform a dry run, only printing the generated command lines.",
    ),
)

HELP_SPELLINGS: Final[tuple[str, ...]] = ("-h", "--help")


# --- configure ---

CONFIGURE_OPTIONS: Final[tuple[OptionSpec, ...]] = (
    OptionSpec(
        name="prefix_path",
        long="--prefix-path",
        short=None,
        kind=OptionKind.OVERRIDING_LIST,
        metavar="DIR[,DIR...]",
        help="Set CMAKE_PREFIX_PATH.",
    ),
    OptionSpec(
        name="generator",
        long="--generator",
        short="-g",
        kind=OptionKind.VALUE,
        default=DEFAULT_GENERATOR,
        default_doc=DEFAULT_GENERATOR,
        help="CMake generator.",
    ),
    OptionSpec(
        name="makefiles",
        long="--makefiles",
        short=None,
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help='Use the "Unix Makefiles" generator (overrides --generator).',
    ),
    OptionSpec(
        name="shared_libs",
        long="--shared-libs",
        short=None,
        kind=OptionKind.SETTABLE_BOOL,
        default=True,
        default_doc="true",
        help="Set BUILD_SHARED_LIBS.",
    ),
    OptionSpec(
        name="san",
        long="--san",
        short=None,
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="Enable ASan and UBSan.",
    ),
    OptionSpec(
        name="linker",
        long="--linker",
        short=None,
        kind=OptionKind.VALUE,
        matcher=LINKER_MATCHER,
        help=(
            "Set the preferred linker. Honored on a best-effort basis, currently only in "
            "LLVM quirks mode, where the default is to use lld or gold when available. "
            'Specify "default" to disable automatic linker selection.'
        ),
    ),
    OptionSpec(
        name="flag",
        long="--flag",
        short=None,
        kind=OptionKind.APPEND_LIST,
        metavar="FLAG",
        help="Extra compiler flag for CMAKE_C_FLAGS and CMAKE_CXX_FLAGS (repeatable).",
    ),
    OptionSpec(
        name="expensive_checks",
        long="--expensive-checks",
        short=None,
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="[LLVM] Enable expensive checks.",
    ),
    OptionSpec(
        name="enable_projects",
        long="--enable-projects",
        short="-p",
        kind=OptionKind.OVERRIDING_LIST,
        default_doc="llvm,clang,lld",
        matcher=PROJECT_MATCHER,
        metavar="PROJECT[,PROJECT...]",
        help="[LLVM] Set LLVM_ENABLE_PROJECTS.",
    ),
    OptionSpec(
        name="enable_runtimes",
        long="--enable-runtimes",
        short="-r",
        kind=OptionKind.OVERRIDING_LIST,
        default_doc='""',
        matcher=RUNTIME_MATCHER,
        metavar="RUNTIME[,RUNTIME...]",
        help="[LLVM] Set LLVM_ENABLE_RUNTIMES.",
    ),
    OptionSpec(
        name="targets_to_build",
        long="--targets-to-build",
        short="-t",
        kind=OptionKind.OVERRIDING_LIST,
        default_doc="all",
        matcher=TARGET_MATCHER,
        metavar="TARGET[,TARGET...]",
        help=(
            "[LLVM] Set LLVM_TARGETS_TO_BUILD. If any target is specified, the default "
            'set is ignored and the specified targets as well as the "Native" target '
            "are enabled."
        ),
    ),
    OptionSpec(
        name="disable_implicit_native",
        long="--disable-implicit-native",
        short="-T",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help='[LLVM] Disable the implicit "Native" target in --targets-to-build.',
    ),
)


# --- lit ---

LIT_OPTIONS: Final[tuple[OptionSpec, ...]] = (
    OptionSpec(
        name="print_only",
        long="--print-only",
        short="-p",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="Print the tests that would be run.",
    ),
    OptionSpec(
        name="xfail_export",
        long="--xfail-export",
        short="-x",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="Print a command line exporting LIT_XFAIL for the failing tests.",
    ),
    OptionSpec(
        name="update_resultdb",
        long="--update-resultdb",
        short="-u",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        default_doc="true unless --first or TESTS are given",
        help="Update the ResultDB file.",
    ),
    OptionSpec(
        name="group",
        long="--group",
        short="-g",
        kind=OptionKind.VALUE,
        matcher=LIT_GROUP_MATCHER,
        help=(
            'Run the named "check-*" test group. Known groups may omit the "check-" '
            "prefix and be abbreviated to any unambiguous prefix."
        ),
    ),
    OptionSpec(
        name="first",
        long="--first",
        short="-1",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="Only consider at most the first failing test in the ResultDB.",
    ),
    OptionSpec(
        name="verbose",
        long="--verbose",
        short="-v",
        kind=OptionKind.SETTABLE_BOOL,
        default=False,
        help="Be as verbose as possible (FileCheck input dumps, all lit output).",
    ),
)


@dataclass(frozen=True)
class SubcommandSpec:
    """Descriptor for one subcommand: full name plus visible aliases."""

    name: str
    aliases: tuple[str, ...] = ()


SUBCOMMANDS: Final[tuple[SubcommandSpec, ...]] = tuple(
    SubcommandSpec(
        name=name,
        aliases=tuple(alias for alias, target in CliCmd.ALIASES.items() if target == name),
    )
    for name in (CliCmd.CONFIGURE, CliCmd.BUILD, CliCmd.LIT, CliCmd.ACTIVATE, CliCmd.DEACTIVATE)
)


def canonical_subcommand(
    token: str,
    subcommands: tuple[SubcommandSpec, ...] = SUBCOMMANDS,
) -> str | None:
    """Return the full subcommand name for ``token``, or None if it names none.

    ``token`` may be a full name, a visible alias, or an unambiguous prefix of a full
    name.
    """
    for sub in subcommands:
        if token == sub.name or token in sub.aliases:
            return sub.name
    matching = [sub.name for sub in subcommands if token and sub.name.startswith(token)]
    if len(matching) == 1:
        return matching[0]
    return None
