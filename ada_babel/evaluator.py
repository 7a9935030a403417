"""
Top-level block evaluation.

evaluate() is the one call a host document integration makes per block:
it validates the options, then dispatches to the prove path when the block
sets `prove`, and to the execute path otherwise.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ada_babel.context import EvalContext
from ada_babel.models import BlockParams, EvalResult
from ada_babel.runner.compiler import execute
from ada_babel.runner.prover import prove

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised for block options that can never be honoured, such as sessions."""


def _check_session(options: Mapping[str, Any]) -> None:
    session = options.get("session")
    if session is None:
        return
    if str(session).strip().lower() in ("", "none"):
        return
    raise ConfigurationError(
        f"Ada/SPARK blocks do not support sessions (got session={session!r})"
    )


def evaluate(
    ctx: EvalContext,
    body: str,
    options: Mapping[str, Any] | None = None,
) -> EvalResult:
    """Evaluate one source block and return the captured tool output.

    Raises:
        ConfigurationError: a session was requested.
        ParameterError: an option value is out of range.
        TemplateNotFoundError: the block names an unregistered template.
    """
    options = dict(options or {})
    _check_session(options)
    options.pop("session", None)

    params = BlockParams.from_options(options)
    if params.extra:
        logger.warning("Ignoring unrecognized options: %s", ", ".join(sorted(params.extra)))

    if params.prove:
        logger.info("Proving block (unit=%s)", params.unit or "<anonymous>")
        return prove(ctx, body, params)

    logger.info("Executing block (unit=%s)", params.unit or "<anonymous>")
    return execute(ctx, body, params)
