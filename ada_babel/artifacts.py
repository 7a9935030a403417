"""
Temp artifact naming and cleanup.

Naming rule:
  unit given    -> <root>/<unit><suffix>               (stable across calls)
  unit absent   -> <root>/<prefix><NNNNNN><suffix>     (per-context counter)

The counter is bumped before use unless no_inc is set, so a first call with
no_inc=False allocates a fresh number and a following call with no_inc=True
reproduces the same basename (used to name the binary after its source).
"""

from __future__ import annotations

import logging
from pathlib import Path

from ada_babel.config import COUNTER_WIDTH, STALE_ARTIFACT_SUFFIXES
from ada_babel.context import EvalContext

logger = logging.getLogger(__name__)


def temp_file(
    ctx: EvalContext,
    prefix: str,
    suffix: str = "",
    unit: str | None = None,
    no_inc: bool = False,
) -> Path:
    """Return an absolute artifact path, creating the file empty if missing."""
    root = ctx.temp_root()
    if unit:
        name = f"{unit}{suffix}"
    else:
        number = ctx.next_counter(increment=not no_inc)
        name = f"{prefix}{number:0{COUNTER_WIDTH}d}{suffix}"

    path = (root / name).resolve()
    path.touch(exist_ok=True)
    logger.debug("Allocated artifact %s", path)
    return path


def clean_stale_artifacts(ctx: EvalContext, unit: str) -> list[Path]:
    """Delete the binary, .ali and .o files left by a previous build of unit."""
    root = ctx.temp_root()
    removed: list[Path] = []
    for suffix in STALE_ARTIFACT_SUFFIXES:
        path = root / f"{unit}{suffix}"
        if path.is_file():
            path.unlink()
            removed.append(path)
    if removed:
        logger.debug("Removed stale artifacts: %s", ", ".join(p.name for p in removed))
    return removed
