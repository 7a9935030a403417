"""
Tangle (export) support.

Exported source files carry a "generated, DO NOT EDIT" banner. The banner is
installed by before_tangle(), which swaps the context's header generator and
keeps the previous one in a one-deep backup slot; after_tangle() puts it
back. Prefer the tangling() context manager, which restores the setting even
when the export fails.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping

from ada_babel.config import build_metadata
from ada_babel.context import EvalContext
from ada_babel.expander import ada_identifier, expand_body
from ada_babel.models import BlockParams

logger = logging.getLogger(__name__)

_RULE = "-" * 72


def generated_banner(source_document: str) -> str:
    metadata = build_metadata()
    return "\n".join([
        _RULE,
        f"-- Generated by ada_babel {metadata.version} from {source_document}",
        f"-- on {metadata.generated_at}.",
        "--",
        "-- DO NOT EDIT: changes are overwritten on the next export.",
        _RULE,
        "",
    ])


def before_tangle(ctx: EvalContext) -> None:
    ctx.push_header_generator(generated_banner)


def after_tangle(ctx: EvalContext) -> None:
    ctx.pop_header_generator()


@contextmanager
def tangling(ctx: EvalContext) -> Iterator[EvalContext]:
    before_tangle(ctx)
    try:
        yield ctx
    finally:
        after_tangle(ctx)


def tangle_block(
    ctx: EvalContext,
    body: str,
    options: Mapping[str, Any] | None,
    target: Path,
    source_document: str,
) -> Path:
    """Write one expanded block to target, headed by the current header generator."""
    params = BlockParams.from_options(options)
    text = expand_body(body, params, ctx.templates, unit_name=ada_identifier(target.stem))
    if ctx.header_generator is not None:
        text = ctx.header_generator(source_document) + text

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    logger.info("Tangled %s -> %s", source_document, target)
    return target
