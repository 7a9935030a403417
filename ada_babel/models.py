"""
Data models for Ada/SPARK block evaluation.

Defines the block parameters (with their documented defaults), the resolver
that merges per-block options over those defaults, and the result types
returned by the external tool runners.

Option values arrive as raw strings from the host document or the CLI;
BlockParams.from_options coerces them into typed values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ParameterError(ValueError):
    """Raised when a block option has a value outside its documented range."""


# Option name -> default. `version` 0 means "use the process default".
DEFAULT_PARAMS: dict[str, Any] = {
    "assumptions": False,
    "assertions": True,
    "level": 4,
    "mode": "all",
    "pedantic": False,
    "prove": False,
    "report": "all",
    "template": None,
    "unit": None,
    "var": (),
    "version": 0,
    "warnings": None,
    "with": (),
}

LEVELS = (0, 1, 2, 3, 4)
MODES = ("check", "check_all", "flow", "prove", "all")
REPORTS = ("fail", "all", "provers", "statistics")
VERSIONS = (0, 83, 95, 2005, 2012, 2022)
WARNINGS = ("off", "continue", "error")

_TRUE = {"t", "true", "yes", "on", "1"}
_FALSE = {"nil", "false", "no", "off", "0", ""}


def resolve_params(
    options: Mapping[str, Any],
    defaults: Mapping[str, Any] = DEFAULT_PARAMS,
) -> dict[str, Any]:
    """Merge explicit options over the defaults.

    Every default key is present in the result. Explicit values always win,
    and keys the defaults do not know about are passed through untouched.
    """
    resolved = dict(defaults)
    resolved.update(options)
    return resolved


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ParameterError(f"Option '{name}' expects a boolean, got {value!r}")


def _as_int(name: str, value: Any, allowed: tuple[int, ...]) -> int:
    if isinstance(value, bool):
        raise ParameterError(f"Option '{name}' expects an integer, got {value!r}")
    try:
        number = int(str(value).strip()) if not isinstance(value, int) else value
    except ValueError:
        raise ParameterError(
            f"Option '{name}' expects an integer, got {value!r}"
        ) from None
    if number not in allowed:
        raise ParameterError(
            f"Option '{name}' must be one of {', '.join(map(str, allowed))}, got {number}"
        )
    return number


def _as_choice(name: str, value: Any, allowed: tuple[str, ...]) -> str:
    text = str(value).strip()
    if text not in allowed:
        raise ParameterError(
            f"Option '{name}' must be one of {', '.join(allowed)}, got {value!r}"
        )
    return text


def _as_optional_name(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() in ("nil", "none"):
        return None
    return text


def _as_unit_list(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    # Each element may itself hold several space-separated names.
    return tuple(u for v in value for u in str(v).split())


def _as_variables(value: Any) -> tuple[tuple[str, Any], ...]:
    """Normalize `var` into ordered (name, value) pairs.

    Accepts a mapping, a sequence of pairs, or NAME=VALUE strings.
    """
    if not value:
        return ()
    if isinstance(value, Mapping):
        return tuple((str(k), v) for k, v in value.items())
    if isinstance(value, str):
        value = [value]
    pairs: list[tuple[str, Any]] = []
    for item in value:
        if isinstance(item, str):
            name, sep, literal = item.partition("=")
            if not sep or not name.strip():
                raise ParameterError(f"Option 'var' expects NAME=VALUE, got {item!r}")
            pairs.append((name.strip(), literal.strip()))
        else:
            name, literal = item
            pairs.append((str(name), literal))
    return tuple(pairs)


@dataclass(frozen=True)
class BlockParams:
    """Typed, fully resolved options for one source block."""
    assumptions: bool = False
    assertions: bool = True
    level: int = 4
    mode: str = "all"
    pedantic: bool = False
    prove: bool = False
    report: str = "all"
    template: str | None = None
    unit: str | None = None
    variables: tuple[tuple[str, Any], ...] = ()
    version: int = 0
    warnings: str | None = None
    with_units: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> BlockParams:
        resolved = resolve_params(options or {})
        warnings = _as_optional_name(resolved["warnings"])
        return cls(
            assumptions=_as_bool("assumptions", resolved["assumptions"]),
            assertions=_as_bool("assertions", resolved["assertions"]),
            level=_as_int("level", resolved["level"], LEVELS),
            mode=_as_choice("mode", resolved["mode"], MODES),
            pedantic=_as_bool("pedantic", resolved["pedantic"]),
            prove=_as_bool("prove", resolved["prove"]),
            report=_as_choice("report", resolved["report"], REPORTS),
            template=_as_optional_name(resolved["template"]),
            unit=_as_optional_name(resolved["unit"]),
            variables=_as_variables(resolved["var"]),
            version=_as_int("version", resolved["version"] or 0, VERSIONS),
            warnings=None if warnings is None else _as_choice("warnings", warnings, WARNINGS),
            with_units=_as_unit_list(resolved["with"]),
            extra={k: v for k, v in resolved.items() if k not in DEFAULT_PARAMS},
        )


# ---------------------------------------------------------------------------
# External tool results
# ---------------------------------------------------------------------------

class ToolStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"        # tool ran and reported problems
    NOT_FOUND = "not_found"  # tool could not be launched at all
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a single external process invocation."""
    argv: tuple[str, ...]
    status: ToolStatus
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ToolStatus.OK

    @property
    def output(self) -> str:
        """Combined output, as the document shows it."""
        if self.stdout and self.stderr:
            sep = "" if self.stdout.endswith("\n") else "\n"
            return f"{self.stdout}{sep}{self.stderr}"
        return self.stdout or self.stderr


@dataclass(frozen=True)
class EvalResult:
    """Result of evaluating a block: the last stage reached and its tool result."""
    stage: str  # "compile", "run" or "prove"
    tool: ToolResult

    @property
    def ok(self) -> bool:
        return self.tool.ok

    @property
    def output(self) -> str:
        if self.stage == "run" and self.tool.ok:
            return self.tool.stdout
        return self.tool.output

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "status": self.tool.status.value,
            "exit_code": self.tool.exit_code,
            "argv": list(self.tool.argv),
            "output": self.output,
        }
