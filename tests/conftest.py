# topmark:header:start
#
#   project      : cmfront
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the cmfront test suite.

Every test runs with a scrubbed environment: no ``CM_*`` globals, no config file,
``CM_TESTING`` set (tool probes report every tool as present) and ``CC=/bin/false``
(compiler flag probes report every flag as rejected). Planned command lines are
therefore identical on every host.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from cmfront.config import logging

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

SCRUBBED_ENV_VARS: tuple[str, ...] = (
    "CM_SRC",
    "CM_BIN",
    "CM_CFG",
    "CM_QUIRKS",
    "CM_CONFIG_PATH",
    "CM_LOG_LEVEL",
    "CFLAGS",
    "CXXFLAGS",
    "LIT_OPTS",
    "FILECHECK_OPTS",
    "FORCE_COLOR",
)


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def hermetic_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Scrub the environment of anything that changes planning or output.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    for name in SCRUBBED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CM_TESTING", "1")
    monkeypatch.setenv("CC", "/bin/false")
    monkeypatch.setenv("NO_COLOR", "1")


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failures come with the full resolution trail."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory.

    Returns:
        Path: The resolved working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd.resolve()


@pytest.fixture
def llvm_checkout(isolation: Path) -> Path:
    """An LLVM-shaped checkout: no root CMakeLists.txt, but an ``llvm/`` subdirectory.

    Returns:
        Path: The checkout root (also the working directory).
    """
    (isolation / "llvm").mkdir()
    (isolation / "llvm" / "CMakeLists.txt").write_text("project(LLVM)\n", encoding="utf-8")
    return isolation


@pytest.fixture
def cmake_project(isolation: Path) -> Path:
    """A generic CMake project with a root CMakeLists.txt.

    Returns:
        Path: The project root (also the working directory).
    """
    (isolation / "CMakeLists.txt").write_text("project(demo)\n", encoding="utf-8")
    return isolation
