# topmark:header:start
#
#   project      : cmfront
#   file         : planner.py
#   file_relpath : src/cmfront/core/planner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command planning: resolved options to an ordered list of external commands.

Each subcommand has a request type and a ``plan_*`` function. Planning performs no
side effects; the only host queries are the injected feature probes (``configure``),
the environment mapping (``configure`` reads ``CFLAGS``/``CXXFLAGS``) and, for
``lit``, reading the ResultDB snapshot.

The result is a [`Plan`][cmfront.core.planner.Plan]: the commands plus any non-fatal
diagnostics for the CLI to show.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from cmfront.config.logging import CmLogger, get_logger
from cmfront.constants import CMAKE_LIST_SEPARATOR, MAKEFILES_GENERATOR, RESULTDB_FILE_NAME
from cmfront.core.commands import CommandSpec
from cmfront.core.diagnostics import Diagnostic, DiagnosticLevel
from cmfront.core.keys import EnvVar
from cmfront.core.known_values import (
    DEFAULT_ENABLE_PROJECTS,
    DEFAULT_ENABLE_RUNTIMES,
    DEFAULT_LINKER,
    DEFAULT_TARGETS_TO_BUILD,
    NATIVE_TARGET,
)
from cmfront.core.quirks import Quirks
from cmfront.core.resultdb import ResultDB, default_update_resultdb, select_tests

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from cmfront.core.probes import FeatureProbes
    from cmfront.core.quirks import ResolvedPaths

logger: CmLogger = get_logger(__name__)

CMAKE = "cmake"
PRINTF = "printf"
PRINTF_LINES = "%s\\n"

ACTIVATE_TEMPLATE = (
    "CM_SRC=%s CM_BIN=%s CM_CFG=%s;\\n"
    "export CM_SRC CM_BIN CM_CFG;\\n"
    'PATH="$CM_BIN/bin:$PATH";\\n'
    "alias cm='cm -s \"$CM_SRC\" -b \"$CM_BIN\" -c \"$CM_CFG\"';\\n"
)

DEACTIVATE_TEMPLATE = (
    "unalias cm;\\n"
    '[ -z "$CM_BIN" ] || PATH="${PATH/$CM_BIN\\/bin:/}";\\n'
    "unset -v CM_SRC CM_BIN CM_CFG;\\n"
)

COLOR_DIAGNOSTICS_FLAG = "-fcolor-diagnostics"
SANITIZE_FLAG = "-fsanitize=address,undefined"


@dataclass(frozen=True)
class PlanContext:
    """Inputs shared by every subcommand.

    Attributes:
        paths (ResolvedPaths): Absolute source and binary directories.
        quirks (Quirks): The active quirks mode.
        config (str): The build type (``CMAKE_BUILD_TYPE`` / ``--config``).
    """

    paths: ResolvedPaths
    quirks: Quirks
    config: str

    @property
    def resultdb_path(self) -> Path:
        """Location of the ``lit.json`` snapshot in the binary directory."""
        return self.paths.binary / RESULTDB_FILE_NAME


@dataclass(frozen=True)
class ConfigureRequest:
    """Options of ``cm configure``. ``None`` list values mean "use the default set"."""

    generator: str
    makefiles: bool = False
    prefix_path: tuple[str, ...] = ()
    shared_libs: bool = True
    san: bool = False
    linker: str | None = None
    flags: tuple[str, ...] = ()
    expensive_checks: bool = False
    enable_projects: tuple[str, ...] | None = None
    enable_runtimes: tuple[str, ...] | None = None
    targets_to_build: tuple[str, ...] | None = None
    disable_implicit_native: bool = False
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildRequest:
    """Options of ``cm build``."""

    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class LitRequest:
    """Options of ``cm lit``.

    ``update_resultdb`` is None when the user did not choose; see
    [`default_update_resultdb`][cmfront.core.resultdb.default_update_resultdb].
    """

    print_only: bool = False
    xfail_export: bool = False
    update_resultdb: bool | None = None
    group: str | None = None
    first: bool = False
    verbose: bool = False
    tests: tuple[str, ...] = ()
    args: tuple[str, ...] = ()

    @property
    def effective_update_resultdb(self) -> bool:
        """The explicit ``--update-resultdb`` value, or the default for the selection."""
        if self.update_resultdb is not None:
            return self.update_resultdb
        return default_update_resultdb(self.tests, first_only=self.first)


@dataclass(frozen=True)
class ActivateRequest:
    """``cm activate`` takes no options."""


@dataclass(frozen=True)
class DeactivateRequest:
    """``cm deactivate`` takes no options."""


PlanRequest = Union[ConfigureRequest, BuildRequest, LitRequest, ActivateRequest, DeactivateRequest]


@dataclass
class Plan:
    """Ordered commands plus non-fatal diagnostics."""

    commands: list[CommandSpec] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _join_list(values: Sequence[str]) -> str:
    return CMAKE_LIST_SEPARATOR.join(values)


def _targets(request: ConfigureRequest) -> tuple[str, ...]:
    if request.targets_to_build is None:
        return DEFAULT_TARGETS_TO_BUILD
    targets = request.targets_to_build
    if not request.disable_implicit_native and NATIVE_TARGET not in targets:
        targets = (*targets, NATIVE_TARGET)
    return targets


def _linker_args(request: ConfigureRequest, probes: FeatureProbes) -> list[str]:
    """Select ``LLVM_USE_LINKER`` in LLVM quirks mode."""
    if request.linker == DEFAULT_LINKER:
        return []
    if request.linker is not None:
        return [f"-DLLVM_USE_LINKER={request.linker}"]
    for candidate in ("lld", "gold"):
        if probes.has_command(candidate) and probes.has_cc_flag(f"-fuse-ld={candidate}"):
            return [f"-DLLVM_USE_LINKER={candidate}"]
    return []


def plan_configure(
    request: ConfigureRequest,
    context: PlanContext,
    probes: FeatureProbes,
    environ: Mapping[str, str],
) -> Plan:
    """Plan ``rm -rf <cache>`` followed by ``cmake -S ... -B ...``.

    Args:
        request (ConfigureRequest): The configure options.
        context (PlanContext): Paths, quirks and build type.
        probes (FeatureProbes): Host capability queries.
        environ (Mapping[str, str]): Environment for ``CFLAGS`` and ``CXXFLAGS``.

    Returns:
        Plan: The cache removal and the configure invocation.

    Raises:
        FeatureProbeError: If a probe fails for a reason other than "not found".
    """
    plan = Plan()
    llvm = context.quirks is Quirks.LLVM
    binary = context.paths.binary
    generator = MAKEFILES_GENERATOR if request.makefiles else request.generator

    args: list[str] = [
        "-S",
        str(context.paths.source),
        "-B",
        str(binary),
        "-G",
        generator,
        f"-DCMAKE_BUILD_TYPE={context.config}",
        f"-DCMAKE_PREFIX_PATH={_join_list(request.prefix_path)}",
        "-DCMAKE_INSTALL_PREFIX=dist",
        "-DCMAKE_EXPORT_COMPILE_COMMANDS=On",
    ]
    flags: list[str] = []

    if llvm:
        args += ["-DLLVM_ENABLE_ASSERTIONS=On", "-DLLVM_OPTIMIZED_TABLEGEN=On"]
        if probes.has_command("sphinx-build"):
            args.append("-DLLVM_ENABLE_SPHINX=On")
        args += _linker_args(request, probes)
    elif request.linker not in (None, DEFAULT_LINKER):
        plan.diagnostics.append(
            Diagnostic(
                DiagnosticLevel.INFO,
                f"--linker={request.linker} is only honored in LLVM quirks mode",
            )
        )

    if probes.has_command("ccache"):
        if llvm:
            args.append("-DLLVM_CCACHE_BUILD=On")
        else:
            args += [
                "-DCMAKE_C_COMPILER_LAUNCHER=ccache",
                "-DCMAKE_CXX_COMPILER_LAUNCHER=ccache",
            ]

    if probes.has_cc_flag(COLOR_DIAGNOSTICS_FLAG):
        flags.append(COLOR_DIAGNOSTICS_FLAG)

    if request.san:
        if llvm:
            args += ["-DLLVM_USE_SANITIZER=Address;Undefined", "-DLLVM_USE_SANITIZE_COVERAGE=Yes"]
        else:
            flags.append(SANITIZE_FLAG)

    if request.expensive_checks:
        args += ["-DLLVM_ENABLE_EXPENSIVE_CHECKS=On", "-DLLVM_ENABLE_WERROR=Off"]

    args.append(f"-DBUILD_SHARED_LIBS={'On' if request.shared_libs else 'Off'}")

    projects = request.enable_projects
    if projects is None:
        projects = DEFAULT_ENABLE_PROJECTS
    runtimes = request.enable_runtimes
    if runtimes is None:
        runtimes = DEFAULT_ENABLE_RUNTIMES
    args += [
        f"-DLLVM_ENABLE_PROJECTS={_join_list(projects)}",
        f"-DLLVM_ENABLE_RUNTIMES={_join_list(runtimes)}",
        f"-DLLVM_TARGETS_TO_BUILD={_join_list(_targets(request))}",
    ]

    joined = " ".join([*flags, *request.flags])
    for var, inherited_var in (
        ("CMAKE_C_FLAGS", EnvVar.CFLAGS),
        ("CMAKE_CXX_FLAGS", EnvVar.CXXFLAGS),
    ):
        inherited = environ.get(inherited_var)
        if inherited is None:
            value = joined
        elif joined:
            value = f"{joined} {inherited}"
        else:
            value = inherited
        args.append(f"-D{var}={value}")

    args += request.args

    plan.commands = [
        CommandSpec("rm", ("-rf", str(binary / "CMakeCache.txt"), str(binary / "CMakeFiles"))),
        CommandSpec(CMAKE, tuple(args)),
    ]
    return plan


def _build_command(context: PlanContext) -> CommandSpec:
    return CommandSpec(
        CMAKE,
        ("--build", str(context.paths.binary), "--config", context.config, "--"),
    )


def plan_build(request: BuildRequest, context: PlanContext) -> Plan:
    """Plan ``cmake --build <binary> --config <config> -- <args>``."""
    return Plan(commands=[_build_command(context).with_args(request.args)])


def _with_resultdb_output(command: CommandSpec, context: PlanContext) -> CommandSpec:
    return command.with_env(
        EnvVar.LIT_OPTS, f"--resultdb-output {shlex.quote(str(context.resultdb_path))}"
    )


def plan_lit(request: LitRequest, context: PlanContext) -> Plan:
    """Plan a lit run.

    Modes, first match wins:

    1. ``--xfail-export``: print ``export LIT_XFAIL="<failing ids>"``. The ResultDB is
       required here.
    2. ``--group``: build the group's ``check-*`` target.
    3. Otherwise run ``llvm-lit`` on the explicit tests, or on the failing tests of
       the ResultDB; nothing to run means an empty plan.

    Raises:
        ResultDBUnavailableError: In ``--xfail-export`` mode, if the ResultDB is
            unusable.
    """
    if request.xfail_export:
        db = ResultDB.load(context.resultdb_path)
        ids = ";".join(t.test_id for t in db.failing())
        return Plan(commands=[CommandSpec(PRINTF, (PRINTF_LINES, f'export LIT_XFAIL="{ids}"'))])

    update = request.effective_update_resultdb

    if request.group is not None:
        command = _build_command(context).with_args([request.group])
        if update:
            command = _with_resultdb_output(command, context)
        return Plan(commands=[command])

    selection = select_tests(
        request.tests,
        first_only=request.first,
        resultdb_path=context.resultdb_path,
        source=context.paths.source,
    )
    plan = Plan(diagnostics=selection.diagnostics)
    args = [*selection.tests, *request.args]
    if not args:
        logger.info("no tests to run")
        return plan

    if request.print_only:
        plan.commands = [CommandSpec(PRINTF, (PRINTF_LINES, *args))]
        return plan

    command = CommandSpec(str(context.paths.binary / "bin" / "llvm-lit"))
    if request.verbose:
        command = command.with_env(EnvVar.FILECHECK_OPTS, "--dump-input always").with_args(["-a"])
    command = command.with_args(args)
    if update:
        command = _with_resultdb_output(command, context)
    plan.commands = [command]
    return plan


def plan_activate(context: PlanContext) -> Plan:
    """Plan a ``printf`` of shell code exporting the paths and build type."""
    return Plan(
        commands=[
            CommandSpec(
                PRINTF,
                (
                    ACTIVATE_TEMPLATE,
                    shlex.quote(str(context.paths.source)),
                    shlex.quote(str(context.paths.binary)),
                    shlex.quote(context.config),
                ),
            )
        ]
    )


def plan_deactivate() -> Plan:
    """Plan a ``printf`` of shell code undoing ``activate``."""
    return Plan(commands=[CommandSpec(PRINTF, (DEACTIVATE_TEMPLATE,))])


def plan(
    request: PlanRequest,
    context: PlanContext,
    probes: FeatureProbes,
    environ: Mapping[str, str],
) -> Plan:
    """Dispatch ``request`` to its subcommand planner."""
    if isinstance(request, ConfigureRequest):
        return plan_configure(request, context, probes, environ)
    if isinstance(request, BuildRequest):
        return plan_build(request, context)
    if isinstance(request, LitRequest):
        return plan_lit(request, context)
    if isinstance(request, ActivateRequest):
        return plan_activate(context)
    if isinstance(request, DeactivateRequest):
        return plan_deactivate()
    raise TypeError(f"unsupported plan request: {type(request).__name__}")
