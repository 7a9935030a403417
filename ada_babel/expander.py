"""
Body expansion: variable substitution and template wrapping.

Variables are substituted textually (not scoped): every literal occurrence of
a bound name is replaced. All names are matched in a single pass, longest
name first, so `Count` never clobbers part of `Count_Max` and substituted
values are never rescanned.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Sequence

from ada_babel.models import BlockParams
from ada_babel.templates import TemplateRegistry

logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Render a bound value as Ada source text."""
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def substitute_variables(body: str, variables: Sequence[tuple[str, Any]]) -> str:
    bindings: dict[str, str] = {}
    for name, value in variables:
        if not name:
            continue
        # A later binding of the same name wins.
        bindings[name] = format_value(value)
    if not bindings:
        return body

    names = sorted(bindings, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(n) for n in names))
    return pattern.sub(lambda m: bindings[m.group(0)], body)


def ada_identifier(stem: str) -> str:
    """Turn a file stem into a legal Ada identifier."""
    name = re.sub(r"\W", "_", stem, flags=re.ASCII)
    if not name or not name[0].isalpha():
        name = "P_" + name
    return name


def render_with_clauses(units: Iterable[str]) -> str:
    return "\n".join(f"with {u}; use {u};" for u in units)


def expand_body(
    body: str,
    params: BlockParams,
    registry: TemplateRegistry,
    unit_name: str = "Main",
) -> str:
    """Expand a block body into the source text that gets written to disk.

    Raises:
        TemplateNotFoundError: params.template names an unregistered template.
    """
    expanded = substitute_variables(body, params.variables)

    if params.template is None:
        if params.with_units:
            logger.warning(
                "Ignoring with=%s: it only applies together with a template",
                " ".join(params.with_units),
            )
        return expanded

    template = registry.get(params.template)
    return template.render(
        expanded,
        imports=render_with_clauses(params.with_units),
        unit=unit_name,
    )
