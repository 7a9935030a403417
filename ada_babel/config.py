"""
Shared configuration for ada_babel.

Defines the external tool defaults, artifact naming constants, and the
process settings loaded from the environment (and `.env`, see __main__).
"""

from __future__ import annotations

import os
import shlex
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from ada_babel.models import VERSIONS


TOOL_VERSION = "0.1.0"

# External toolchain.
DEFAULT_COMPILE_CMD = "gnatmake"
DEFAULT_PROVE_CMD = "gnatprove"
DEFAULT_LANGUAGE_VERSION = 2012
ASSERTIONS_FLAG = "-gnata"

# Artifact naming.
SOURCE_PREFIX = "ada_src_"
SOURCE_SUFFIX = ".adb"
PROJECT_SUFFIX = ".gpr"
COUNTER_WIDTH = 6
STALE_ARTIFACT_SUFFIXES = ("", ".ali", ".o")

# gnatprove keeps its analysis state here, relative to the project file.
PROVER_WORK_DIR = "gnatprove"

DEFAULT_TEMP_DIR = Path(tempfile.gettempdir()) / "ada_babel"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings for block evaluation."""
    compile_cmd: tuple[str, ...] = (DEFAULT_COMPILE_CMD,)
    prove_cmd: tuple[str, ...] = (DEFAULT_PROVE_CMD,)
    default_version: int = DEFAULT_LANGUAGE_VERSION
    temp_dir: Path = DEFAULT_TEMP_DIR
    remote_temp_dir: Path | None = None
    timeout: float | None = None


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ADA_BABEL_* environment variables.

    Unset or empty variables fall back to the module defaults.
    """
    env = os.environ if environ is None else environ

    compile_cmd = env.get("ADA_BABEL_COMPILE_CMD", "").strip() or DEFAULT_COMPILE_CMD
    prove_cmd = env.get("ADA_BABEL_PROVE_CMD", "").strip() or DEFAULT_PROVE_CMD
    temp_dir = env.get("ADA_BABEL_TMPDIR", "").strip()
    remote_temp_dir = env.get("ADA_BABEL_REMOTE_TMPDIR", "").strip()

    timeout: float | None = None
    raw_timeout = env.get("ADA_BABEL_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"ADA_BABEL_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None

    default_version = _int_env(env, "ADA_BABEL_VERSION", DEFAULT_LANGUAGE_VERSION)
    if default_version not in VERSIONS:
        raise ValueError(
            f"ADA_BABEL_VERSION must be one of {', '.join(map(str, VERSIONS))}, "
            f"got {default_version}"
        )

    return Settings(
        compile_cmd=tuple(shlex.split(compile_cmd)),
        prove_cmd=tuple(shlex.split(prove_cmd)),
        default_version=default_version,
        temp_dir=Path(temp_dir) if temp_dir else DEFAULT_TEMP_DIR,
        remote_temp_dir=Path(remote_temp_dir) if remote_temp_dir else None,
        timeout=timeout,
    )


@dataclass(frozen=True)
class RunMetadata:
    """Stamps generated files with tool version and timestamp."""
    version: str
    generated_at: str


def build_metadata(version: str = TOOL_VERSION) -> RunMetadata:
    return RunMetadata(
        version=version,
        generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )
