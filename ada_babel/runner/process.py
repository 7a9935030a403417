"""
process.py: synchronous external tool invocation.

Every compile, run and prove step goes through run_command(). The tool's
output is never interpreted here; it is captured verbatim and classified
only by what the process itself signalled:

  OK         exit code 0 and nothing on stderr
  FAILED     nonzero exit code, or any stderr text
  NOT_FOUND  the executable could not be launched
  TIMED_OUT  a timeout was configured and exceeded
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from ada_babel.models import ToolResult, ToolStatus

logger = logging.getLogger(__name__)


def run_command(
    argv: Sequence[str],
    cwd: Path | None = None,
    timeout: float | None = None,
) -> ToolResult:
    argv = tuple(str(a) for a in argv)
    logger.info("Running: %s", " ".join(argv))

    try:
        result = subprocess.run(
            list(argv),
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        return ToolResult(
            argv=argv,
            status=ToolStatus.TIMED_OUT,
            stdout=_as_text(exc.stdout),
            stderr=f"{argv[0]} timed out after {timeout}s",
        )
    except (FileNotFoundError, PermissionError) as exc:
        return ToolResult(
            argv=argv,
            status=ToolStatus.NOT_FOUND,
            stderr=f"Could not launch {argv[0]!r}: {exc.strerror or exc}",
        )

    failed = result.returncode != 0 or bool(result.stderr.strip())
    if failed:
        logger.debug("%s exited with %d", argv[0], result.returncode)
    return ToolResult(
        argv=argv,
        status=ToolStatus.FAILED if failed else ToolStatus.OK,
        exit_code=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def _as_text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
