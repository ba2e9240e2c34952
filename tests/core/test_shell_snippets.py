# topmark:header:start
#
#   project      : cmfront
#   file         : test_shell_snippets.py
#   file_relpath : tests/core/test_shell_snippets.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Evaluate the ``activate``/``deactivate`` shell code in a real bash."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from cmfront.core.planner import PlanContext, plan_activate, plan_deactivate
from cmfront.core.quirks import Quirks, ResolvedPaths

BASH = shutil.which("bash")

pytestmark = [
    pytest.mark.skipif(BASH is None, reason="needs bash"),
    pytest.mark.integration,
]


def run_bash(script: str) -> list[str]:
    assert BASH is not None
    completed = subprocess.run(
        [BASH, "--norc", "--noprofile", "-c", script],
        capture_output=True,
        text=True,
        check=True,
        env={"PATH": "/usr/bin:/bin"},
    )
    return completed.stdout.splitlines()


def test_activate_then_deactivate_restores_the_shell() -> None:
    context = PlanContext(
        paths=ResolvedPaths(source=Path("/w/my src"), binary=Path("/w/my build")),
        quirks=Quirks.NONE,
        config="Debug",
    )
    (activate,) = plan_activate(context).commands
    (deactivate,) = plan_deactivate().commands
    script = "; ".join(
        [
            f'eval "$({activate.render()})"',
            'echo "$CM_SRC|$CM_BIN|$CM_CFG"',
            'echo "$PATH"',
            "alias cm",
            f'eval "$({deactivate.render()})"',
            'echo "[$CM_SRC$CM_BIN$CM_CFG]"',
            'echo "$PATH"',
            "alias cm 2>/dev/null || echo unaliased",
        ]
    )
    lines = run_bash(script)
    assert lines[0] == "/w/my src|/w/my build|Debug"
    assert lines[1] == "/w/my build/bin:/usr/bin:/bin"
    assert lines[2].startswith("alias cm=")
    assert lines[3:] == ["[]", "/usr/bin:/bin", "unaliased"]


def test_module_marks_are_pytest_marks() -> None:
    assert all(isinstance(mark, pytest.MarkDecorator) for mark in pytestmark)
