# topmark:header:start
#
#   project      : cmfront
#   file         : known_values.py
#   file_relpath : src/cmfront/core/known_values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Known values for fuzzy-matched options.

The LLVM lists mirror ``LLVM_ALL_PROJECTS``, ``LLVM_ALL_RUNTIMES`` and
``LLVM_ALL_TARGETS`` from ``llvm/CMakeLists.txt`` and
``llvm/runtimes/CMakeLists.txt``. They only drive completion and case
normalization: any other value is still passed through to CMake.
"""

from __future__ import annotations

from typing import Final

from cmfront.core.fuzzy import FuzzyMatcher

BUILD_TYPES: Final[tuple[str, ...]] = ("Release", "Debug", "RelWithDebInfo", "MinSizeRel")

LINKERS: Final[tuple[str, ...]] = ("lld", "gold", "mold", "bfd", "default")

# Explicit "no linker preference" spelling for --linker
DEFAULT_LINKER: Final[str] = "default"

LLVM_ALL_PROJECTS: Final[tuple[str, ...]] = (
    "bolt",
    "clang",
    "clang-tools-extra",
    "compiler-rt",
    "cross-project-tests",
    "libc",
    "libclc",
    "lld",
    "lldb",
    "mlir",
    "openmp",
    "polly",
    "pstl",
    "flang",
)

LLVM_ALL_RUNTIMES: Final[tuple[str, ...]] = (
    "libc",
    "libunwind",
    "libcxxabi",
    "libcxx",
    "compiler-rt",
    "openmp",
    "llvm-libgcc",
    "offload",
    "flang-rt",
)

NATIVE_TARGET: Final[str] = "Native"

LLVM_ALL_TARGETS: Final[tuple[str, ...]] = (
    NATIVE_TARGET,
    "AArch64",
    "AMDGPU",
    "ARM",
    "AVR",
    "BPF",
    "Hexagon",
    "Lanai",
    "LoongArch",
    "Mips",
    "MSP430",
    "NVPTX",
    "PowerPC",
    "RISCV",
    "Sparc",
    "SPIRV",
    "SystemZ",
    "VE",
    "WebAssembly",
    "X86",
    "XCore",
)

LIT_GROUP_PREFIX: Final[str] = "check-"
LIT_GROUPS: Final[tuple[str, ...]] = ("all", "llvm", "clang", "lld")

# Defaults written to the cache when the matching option is not given
DEFAULT_ENABLE_PROJECTS: Final[tuple[str, ...]] = ("llvm", "clang", "lld")
DEFAULT_ENABLE_RUNTIMES: Final[tuple[str, ...]] = ()
DEFAULT_TARGETS_TO_BUILD: Final[tuple[str, ...]] = ("all",)

BUILD_TYPE_MATCHER: Final[FuzzyMatcher] = FuzzyMatcher(BUILD_TYPES)
LINKER_MATCHER: Final[FuzzyMatcher] = FuzzyMatcher(LINKERS)
PROJECT_MATCHER: Final[FuzzyMatcher] = FuzzyMatcher(LLVM_ALL_PROJECTS)
RUNTIME_MATCHER: Final[FuzzyMatcher] = FuzzyMatcher(LLVM_ALL_RUNTIMES)
TARGET_MATCHER: Final[FuzzyMatcher] = FuzzyMatcher(LLVM_ALL_TARGETS)
LIT_GROUP_MATCHER: Final[FuzzyMatcher] = FuzzyMatcher(LIT_GROUPS, inferable_prefix=LIT_GROUP_PREFIX)
