# topmark:header:start
#
#   project      : cmfront
#   file         : test_resolver.py
#   file_relpath : tests/core/test_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for argument layering (config file, environment, command line)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cmfront.config.rcfile import ConfigFile
from cmfront.core.resolver import PrescanError, prescan, resolve_args
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path

NO_CONFIG = ConfigFile()


def test_layering_order() -> None:
    """Config args first, then globals, then help, then the literal tail."""
    config = ConfigFile(lines=("--source=from-rc", "build", "-j8", "lit", "-v"))
    resolved = resolve_args(
        ["-b", "out", "--help", "b", "install"],
        environ={"CM_SRC": "from-env"},
        config=config,
    )
    assert resolved is not None
    assert resolved.argv == [
        "b",
        "--source=from-rc",
        "-j8",
        "--source=from-env",
        "--binary=out",
        "--help",
        "install",
    ]


def test_cli_global_before_subcommand_beats_environment() -> None:
    resolved = resolve_args(
        ["--config", "Debug", "build"],
        environ={"CM_CFG": "Release"},
        config=NO_CONFIG,
    )
    assert resolved is not None
    assert resolved.global_args == ("--config=Debug",)


def test_empty_environment_value_counts_as_unset() -> None:
    resolved = resolve_args(["build"], environ={"CM_BIN": ""}, config=NO_CONFIG)
    assert resolved is not None
    assert resolved.global_args == ()


def test_globals_after_subcommand_stay_in_the_tail() -> None:
    resolved = resolve_args(
        ["configure", "-s", "src"], environ={"CM_SRC": "env"}, config=NO_CONFIG
    )
    assert resolved is not None
    assert resolved.global_args == ("--source=env",)
    assert resolved.rest == ("-s", "src")


@parametrize(
    "args, expected",
    [
        (["-#", "build"], {"dry_run": "true"}),
        (["-#=false", "build"], {"dry_run": "false"}),
        (["--dry-run=true", "build"], {"dry_run": "true"}),
        (["-#sSRC", "build"], {"dry_run": "true", "source": "SRC"}),
        (["-s=SRC", "build"], {"source": "SRC"}),
        (["-qllvm", "build"], {"quirks": "llvm"}),
        (["-c", "Debug", "-c", "Release", "build"], {"config": "Release"}),
    ],
)
def test_prescan_spellings(args: list[str], expected: dict[str, str]) -> None:
    assert prescan(args).values == expected


def test_prescan_collects_help_in_canonical_order() -> None:
    scanned = prescan(["--help", "-h", "lit"])
    assert scanned.help_args == ["-h", "--help"]
    assert scanned.subcommand == "lit"


@parametrize(
    "args",
    [
        [],
        ["--version"],
        ["-s"],
        ["--dry-run=maybe", "build"],
        ["-x", "build"],
        ["--", "build"],
    ],
)
def test_prescan_rejects(args: list[str]) -> None:
    with pytest.raises(PrescanError):
        prescan(args)


def test_unresolvable_arguments_are_passed_through() -> None:
    """Anything the pre-scan cannot handle is left for the real parser to report."""
    assert resolve_args(["--version"], environ={}, config=NO_CONFIG) is None


def test_config_sections_follow_the_full_subcommand_name() -> None:
    """An abbreviated or aliased subcommand still picks up its section."""
    config = ConfigFile(lines=("configure", "--san"))
    for token in ("c", "conf", "configure"):
        resolved = resolve_args([token], environ={}, config=config)
        assert resolved is not None
        assert resolved.config_args == ("--san",)


def test_config_file_located_from_environment(tmp_path: Path) -> None:
    rc = tmp_path / "cm.rc"
    rc.write_text("--binary=from-rc\n", encoding="utf-8")
    resolved = resolve_args(["build"], environ={"CM_CONFIG_PATH": str(rc)})
    assert resolved is not None
    assert resolved.config_args == ("--binary=from-rc",)
