# topmark:header:start
#
#   project      : cmfront
#   file         : constants.py
#   file_relpath : src/cmfront/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

CMFRONT_VERSION: str = get_version("cmfront")

PROGRAM_NAME: str = "cm"

CONFIG_FILE_NAME: str = "cm.rc"
RESULTDB_FILE_NAME: str = "lit.json"

DEFAULT_SOURCE_DIR: str = "."
DEFAULT_LLVM_SOURCE_DIR: str = "llvm"
DEFAULT_BINARY_DIR: str = "build"
DEFAULT_BUILD_TYPE: str = "RelWithDebInfo"
DEFAULT_GENERATOR: str = "Ninja"
MAKEFILES_GENERATOR: str = "Unix Makefiles"

# Filesystem markers used by quirks detection
CMAKE_ROOT_MARKER: str = "CMakeLists.txt"
LLVM_SUBDIR_MARKER: str = "llvm"

CMAKE_LIST_SEPARATOR: str = ";"
OPTION_LIST_DELIMITER: str = ","
