# topmark:header:start
#
#   project      : cmfront
#   file         : test_configure.py
#   file_relpath : tests/cli/test_configure.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for ``cm configure`` in dry-run mode.

The test environment reports every tool as present and every compiler flag as
rejected, so ccache is always used and no color-diagnostics flag is added.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, planned, run_cli
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path


def cmake_line(argv: list[str]) -> list[str]:
    result = run_cli(argv)
    assert_SUCCESS(result)
    lines = planned(result)
    assert len(lines) == 2
    assert lines[0][:2] == ["rm", "-rf"]
    assert lines[1][0] == "cmake"
    return lines[1]


def defines(line: list[str]) -> dict[str, str]:
    return dict(arg[2:].partition("=")[::2] for arg in line if arg.startswith("-D"))


@mark_cli
def test_generic_project_plan(cmake_project: Path) -> None:
    result = run_cli(["-#", "configure"])
    assert_SUCCESS(result)
    bin_dir = cmake_project / "build"
    assert planned(result) == [
        ["rm", "-rf", f"{bin_dir}/CMakeCache.txt", f"{bin_dir}/CMakeFiles"],
        [
            "cmake",
            "-S",
            str(cmake_project),
            "-B",
            str(bin_dir),
            "-G",
            "Ninja",
            "-DCMAKE_BUILD_TYPE=RelWithDebInfo",
            "-DCMAKE_PREFIX_PATH=",
            "-DCMAKE_INSTALL_PREFIX=dist",
            "-DCMAKE_EXPORT_COMPILE_COMMANDS=On",
            "-DCMAKE_C_COMPILER_LAUNCHER=ccache",
            "-DCMAKE_CXX_COMPILER_LAUNCHER=ccache",
            "-DBUILD_SHARED_LIBS=On",
            "-DLLVM_ENABLE_PROJECTS=llvm;clang;lld",
            "-DLLVM_ENABLE_RUNTIMES=",
            "-DLLVM_TARGETS_TO_BUILD=all",
            "-DCMAKE_C_FLAGS=",
            "-DCMAKE_CXX_FLAGS=",
        ],
    ]


@mark_cli
def test_llvm_checkout_plan(llvm_checkout: Path) -> None:
    line = cmake_line(["-#", "configure"])
    assert line[1:5] == ["-S", str(llvm_checkout / "llvm"), "-B", str(llvm_checkout / "build")]
    d = defines(line)
    assert d["LLVM_ENABLE_ASSERTIONS"] == "On"
    assert d["LLVM_OPTIMIZED_TABLEGEN"] == "On"
    assert d["LLVM_ENABLE_SPHINX"] == "On"
    assert d["LLVM_CCACHE_BUILD"] == "On"
    # lld and gold are present, but the compiler rejects -fuse-ld
    assert "LLVM_USE_LINKER" not in d


@mark_cli
def test_explicit_quirks_override_detection(llvm_checkout: Path) -> None:
    line = cmake_line(["-#", "-q", "none", "configure"])
    assert line[2] == str(llvm_checkout)
    assert "LLVM_ENABLE_ASSERTIONS" not in defines(line)


@mark_cli
def test_invalid_quirks_mode(cmake_project: Path) -> None:
    assert_USAGE_ERROR(run_cli(["-#", "-q", "gcc", "configure"]))


@mark_cli
@parametrize(
    "options, key, expected",
    [
        (["-t", "x86,arm"], "LLVM_TARGETS_TO_BUILD", "X86;ARM;Native"),
        (["-t", "x86", "-T"], "LLVM_TARGETS_TO_BUILD", "X86"),
        (["-t", "x86", "-t", "RISCV"], "LLVM_TARGETS_TO_BUILD", "RISCV;Native"),
        (["--targets-to-build=MyTarget"], "LLVM_TARGETS_TO_BUILD", "MyTarget;Native"),
        (["-p", "MLIR,clang"], "LLVM_ENABLE_PROJECTS", "mlir;clang"),
        (["-p", ""], "LLVM_ENABLE_PROJECTS", ""),
        (["-r", "libcxx,libcxxabi"], "LLVM_ENABLE_RUNTIMES", "libcxx;libcxxabi"),
        (["--prefix-path=/a,/b", "--prefix-path", "/c"], "CMAKE_PREFIX_PATH", "/c"),
        (["--shared-libs=false"], "BUILD_SHARED_LIBS", "Off"),
        (["--no-shared-libs", "--shared-libs"], "BUILD_SHARED_LIBS", "On"),
        (["--flag", "-g", "--flag=-O1"], "CMAKE_C_FLAGS", "-g -O1"),
        (["--san"], "CMAKE_CXX_FLAGS", "-fsanitize=address,undefined"),
        (["-c", "debug"], "CMAKE_BUILD_TYPE", "Debug"),
        (["-c", "Coverage"], "CMAKE_BUILD_TYPE", "Coverage"),
    ],
)
def test_configure_options(
    cmake_project: Path, options: list[str], key: str, expected: str
) -> None:
    assert defines(cmake_line(["-#", "configure", *options]))[key] == expected


@mark_cli
def test_generator_and_makefiles(cmake_project: Path) -> None:
    assert cmake_line(["-#", "configure", "-g", "Xcode"])[6] == "Xcode"
    assert cmake_line(["-#", "configure", "-g", "Xcode", "--makefiles"])[6] == "Unix Makefiles"
    assert cmake_line(["-#", "configure", "--makefiles=false"])[6] == "Ninja"


@mark_cli
def test_linker_fuzzy_and_llvm_only(llvm_checkout: Path) -> None:
    assert defines(cmake_line(["-#", "configure", "--linker", "LLD"]))["LLVM_USE_LINKER"] == "lld"
    assert "LLVM_USE_LINKER" not in defines(cmake_line(["-#", "configure", "--linker=default"]))


@mark_cli
def test_linker_in_generic_mode_is_reported(cmake_project: Path) -> None:
    result = run_cli(["-#", "configure", "--linker=mold"])
    assert_SUCCESS(result)
    assert "only honored in LLVM quirks mode" in result.stderr
    assert not any(a.startswith("-DLLVM_USE_LINKER") for a in planned(result)[1])


@mark_cli
def test_environment_compiler_flags_are_appended(cmake_project: Path) -> None:
    result = run_cli(["-#", "configure", "--flag=-g"], env={"CFLAGS": "-Wall"})
    assert_SUCCESS(result)
    d = defines(planned(result)[1])
    assert d["CMAKE_C_FLAGS"] == "-g -Wall"
    assert d["CMAKE_CXX_FLAGS"] == "-g"


@mark_cli
def test_trailing_arguments_are_forwarded(cmake_project: Path) -> None:
    line = cmake_line(["-#", "configure", "--san", "--", "-DFOO=1", "--fresh"])
    assert line[-2:] == ["-DFOO=1", "--fresh"]


@mark_cli
def test_invalid_boolean_spelling(cmake_project: Path) -> None:
    result = run_cli(["-#", "configure", "--san=yes"])
    assert_USAGE_ERROR(result)
    assert "expected 'true' or 'false'" in result.output


@mark_cli
def test_subcommand_help_lists_options(cmake_project: Path) -> None:
    result = run_cli(["-h", "configure"])
    assert_SUCCESS(result)
    assert "--targets-to-build" in result.output
    assert "--dry-run" in result.output
