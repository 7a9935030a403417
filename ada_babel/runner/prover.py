"""
prover.py: check a block with the SPARK prover.

Flow:
  allocate source -> expand body -> write source -> write project descriptor
  -> delete the prover's working directory -> prove

Prover invocation:
  <prove-cmd> -P<project> [--assumptions] [--level=<n>] [--mode=<m>]
              [--pedantic] [--report=<r>] [--warnings=<w>] -u <source>

Optional flags are emitted only when the block asks for something other than
the default. The prover's working directory is wiped before every run so
results never come from a stale analysis of an earlier block.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ada_babel.artifacts import temp_file
from ada_babel.config import PROJECT_SUFFIX, PROVER_WORK_DIR, SOURCE_PREFIX, Settings
from ada_babel.context import EvalContext
from ada_babel.expander import ada_identifier
from ada_babel.models import DEFAULT_PARAMS, BlockParams, EvalResult

from .compiler import write_source
from .process import run_command

logger = logging.getLogger(__name__)


def project_name(stem: str) -> str:
    return ada_identifier(stem)


def render_project(source: Path) -> str:
    """A project descriptor naming one file as both its source and its main."""
    name = project_name(source.stem)
    return (
        f"project {name} is\n"
        f'   for Source_Dirs use (".");\n'
        f'   for Source_Files use ("{source.name}");\n'
        f'   for Main use ("{source.name}");\n'
        f"end {name};\n"
    )


def build_prove_command(
    settings: Settings,
    params: BlockParams,
    project: Path,
    source: Path,
) -> list[str]:
    cmd = list(settings.prove_cmd)
    cmd.append(f"-P{project}")
    if params.assumptions:
        cmd.append("--assumptions")
    if params.level != DEFAULT_PARAMS["level"]:
        cmd.append(f"--level={params.level}")
    if params.mode != DEFAULT_PARAMS["mode"]:
        cmd.append(f"--mode={params.mode}")
    if params.pedantic:
        cmd.append("--pedantic")
    if params.report != DEFAULT_PARAMS["report"]:
        cmd.append(f"--report={params.report}")
    if params.warnings is not None:
        cmd.append(f"--warnings={params.warnings}")
    cmd.extend(["-u", str(source)])
    return cmd


def clear_prover_state(root: Path) -> None:
    work_dir = root / PROVER_WORK_DIR
    if work_dir.is_dir():
        logger.debug("Removing prover working directory %s", work_dir)
        shutil.rmtree(work_dir)


def prove(ctx: EvalContext, body: str, params: BlockParams) -> EvalResult:
    """Run the prover on the block and return its output verbatim."""
    source = write_source(ctx, body, params)
    project = temp_file(ctx, SOURCE_PREFIX, PROJECT_SUFFIX, unit=params.unit, no_inc=True)
    project.write_text(render_project(source), encoding="utf-8")

    root = ctx.temp_root()
    clear_prover_state(root)

    proved = run_command(
        build_prove_command(ctx.settings, params, project, source),
        cwd=root,
        timeout=ctx.settings.timeout,
    )
    return EvalResult(stage="prove", tool=proved)
