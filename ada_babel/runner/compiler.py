"""
compiler.py: compile a block with the Ada compiler, then run it.

Flow:
  allocate source -> expand body -> write source -> clean stale artifacts
  (named units only) -> compile -> run binary

Compiler invocation:
  <compile-cmd> [-gnat<version>] [-gnata] -o <binary> <source>

The compiler runs inside the artifact root so its .ali/.o files land next to
the source, where clean_stale_artifacts() looks for them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ada_babel.artifacts import clean_stale_artifacts, temp_file
from ada_babel.config import ASSERTIONS_FLAG, SOURCE_PREFIX, SOURCE_SUFFIX, Settings
from ada_babel.context import EvalContext
from ada_babel.expander import expand_body
from ada_babel.models import BlockParams, EvalResult

from .process import run_command

logger = logging.getLogger(__name__)


def effective_version(settings: Settings, params: BlockParams) -> int:
    """Block version if explicitly positive, else the process default."""
    if params.version > 0:
        return params.version
    return settings.default_version


def build_compile_command(
    settings: Settings,
    params: BlockParams,
    source: Path,
    binary: Path,
) -> list[str]:
    cmd = list(settings.compile_cmd)
    version = effective_version(settings, params)
    if version > 0:
        cmd.append(f"-gnat{version}")
    if params.assertions:
        cmd.append(ASSERTIONS_FLAG)
    cmd.extend(["-o", str(binary), str(source)])
    return cmd


def build_run_command(binary: Path) -> list[str]:
    return [str(binary)]


def write_source(
    ctx: EvalContext,
    body: str,
    params: BlockParams,
) -> Path:
    """Allocate the block's source file and write the expanded body into it.

    Shared by the execute and prove paths.
    """
    source = temp_file(ctx, SOURCE_PREFIX, SOURCE_SUFFIX, unit=params.unit)
    expanded = expand_body(body, params, ctx.templates, unit_name=source.stem)
    source.write_text(expanded, encoding="utf-8")
    return source


def execute(ctx: EvalContext, body: str, params: BlockParams) -> EvalResult:
    """Compile the block and run the produced binary.

    Returns the compile result if compilation failed, otherwise the run
    result. Tool output is surfaced verbatim either way.
    """
    source = write_source(ctx, body, params)
    if params.unit:
        clean_stale_artifacts(ctx, params.unit)
    binary = temp_file(ctx, SOURCE_PREFIX, "", unit=params.unit, no_inc=True)

    root = ctx.temp_root()
    compiled = run_command(
        build_compile_command(ctx.settings, params, source, binary),
        cwd=root,
        timeout=ctx.settings.timeout,
    )
    if not compiled.ok:
        logger.info("Compilation of %s failed (%s)", source.name, compiled.status.value)
        return EvalResult(stage="compile", tool=compiled)

    ran = run_command(
        build_run_command(binary),
        cwd=root,
        timeout=ctx.settings.timeout,
    )
    return EvalResult(stage="run", tool=ran)
