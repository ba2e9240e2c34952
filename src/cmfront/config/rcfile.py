# topmark:header:start
#
#   project      : cmfront
#   file         : rcfile.py
#   file_relpath : src/cmfront/config/rcfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-oriented ``cm.rc`` configuration file.

Each line of the file is one directive:

- a **comment**: blank, or starting with ``#`` after leading whitespace;
- an **argument**: starting with ``-``; taken verbatim (no quoting, no splitting);
- a **section marker**: anything else; the full line becomes the current section.

Arguments before any section marker are global and apply to every invocation.
Arguments under a section apply when the section label is a prefix of the full
subcommand name (so ``configure``, ``conf`` and ``c`` all scope to ``configure``).

Example:
    ```text
    # make the default source dir path be src
    --source=src

    configure
    --prefix-path=/some/absolute/dir
    --generator=Unix Makefiles

    lit
    --update-resultdb=false
    ```

Location:
    1. ``$CM_CONFIG_PATH`` if set: the empty string disables the file, any other value
       names the file, which must then be readable.
    2. Otherwise no file at all when ``$CM_TESTING`` is set.
    3. Otherwise ``cm.rc`` in the platform user config directory. A missing or
       unreadable default file is silently ignored.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Union

from cmfront.config.logging import CmLogger, get_logger
from cmfront.constants import CONFIG_FILE_NAME
from cmfront.core.errors import ConfigParseError
from cmfront.core.keys import EnvVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger: CmLogger = get_logger(__name__)


@dataclass(frozen=True)
class Comment:
    """A blank or ``#`` line."""

    text: str


@dataclass(frozen=True)
class SectionMarker:
    """A line switching the current section."""

    label: str


@dataclass(frozen=True)
class Argument:
    """A literal argument token and the section it was declared under."""

    token: str
    section: str

    def applies_to(self, subcommand: str) -> bool:
        """Return True if this argument is in scope for the full ``subcommand`` name."""
        return self.section == "" or subcommand.startswith(self.section)


ConfigDirective = Union[Comment, SectionMarker, Argument]


def classify_line(line: str, section: str) -> ConfigDirective:
    """Classify one line read while ``section`` is current.

    The ``-`` test runs on the untrimmed line, so an indented ``-x`` is a section label.
    """
    if line.startswith("-"):
        return Argument(token=line, section=section)
    if line.lstrip().startswith("#") or not line.strip():
        return Comment(text=line)
    return SectionMarker(label=line)


def scan(lines: Iterable[str]) -> Iterator[ConfigDirective]:
    """Yield the directives of ``lines`` in file order.

    The current section is threaded through the scan as a local accumulator.
    """
    section = ""
    for line in lines:
        directive = classify_line(line, section)
        if isinstance(directive, SectionMarker):
            section = directive.label
        yield directive


def user_config_dir(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the platform user config directory, or None if it cannot be determined."""
    env = os.environ if environ is None else environ
    if sys.platform == "win32":
        appdata = env.get("APPDATA")
        return Path(appdata) if appdata else None
    try:
        home = Path.home()
    except RuntimeError:
        home = None
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" if home else None
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config" if home else None


@dataclass(frozen=True)
class ConfigFile:
    """An immutable snapshot of the config file lines (possibly none).

    Attributes:
        path (Path | None): The file the lines were read from, if any.
        lines (tuple[str, ...]): Raw lines without line terminators.
    """

    path: Path | None = None
    lines: tuple[str, ...] = ()

    @classmethod
    def from_path(cls, path: str | Path) -> ConfigFile:
        """Read ``path``.

        Raises:
            ConfigParseError: If the file cannot be read or is not valid UTF-8.
        """
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigParseError(f"cannot read config file {p}: {exc}") from exc
        logger.debug("read config file %s", p)
        return cls(path=p, lines=tuple(text.splitlines()))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ConfigFile:
        """Locate and read the config file according to the environment.

        Raises:
            ConfigParseError: If ``$CM_CONFIG_PATH`` names an unreadable file.
        """
        env = os.environ if environ is None else environ
        explicit = env.get(EnvVar.CONFIG_PATH)
        if explicit is not None:
            if explicit == "":
                logger.debug("config file disabled by empty %s", EnvVar.CONFIG_PATH)
                return cls()
            return cls.from_path(explicit)
        if EnvVar.TESTING in env:
            logger.debug("%s set, ignoring default config file", EnvVar.TESTING)
            return cls()
        base = user_config_dir(env)
        if base is None:
            return cls()
        try:
            return cls.from_path(base / CONFIG_FILE_NAME)
        except ConfigParseError as exc:
            logger.debug("no default config file: %s", exc)
            return cls()

    def arguments_for(self, subcommand: str) -> list[str]:
        """Return the argument tokens in scope for the full ``subcommand`` name."""
        return [
            d.token
            for d in scan(self.lines)
            if isinstance(d, Argument) and d.applies_to(subcommand)
        ]

    def slurp_into(self, subcommand: str, out: list[str]) -> None:
        """Append the arguments in scope for ``subcommand`` to ``out``, in file order."""
        args = self.arguments_for(subcommand)
        logger.trace("config args for %s: %s", subcommand, args)
        out.extend(args)
