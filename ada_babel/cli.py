"""
CLI entry point for ada_babel.

Usage:
    python -m ada_babel eval hello.adb --unit hello
    python -m ada_babel eval snippet.adb --template main --with Ada.Text_IO
    python -m ada_babel eval counter.adb --prove --level 2 --mode flow
    python -m ada_babel eval hello.adb --json
    python -m ada_babel tangle snippet.adb src/hello.adb --document notes.org \\
        --template main --with Ada.Text_IO

A block body is read from a file, or from stdin when the path is "-".
The CLI only maps flags onto block options; evaluation lives in evaluator.py.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ada_babel.config import TOOL_VERSION, load_settings
from ada_babel.context import EvalContext
from ada_babel.evaluator import ConfigurationError, evaluate
from ada_babel.models import LEVELS, MODES, REPORTS, VERSIONS, WARNINGS
from ada_babel.tangle import tangle_block, tangling
from ada_babel.templates import TemplateNotFoundError


def _add_expansion_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--template",
        default=None,
        help="Wrap the body in a registered template (e.g. main, spark_main).",
    )
    parser.add_argument(
        "--with",
        dest="with_units",
        action="append",
        default=[],
        metavar="UNIT",
        help="Library unit to `with` and `use` in the template. Repeatable.",
    )
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Substitute NAME with VALUE in the body. Repeatable.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ada_babel",
        description="Compile, run or prove Ada/SPARK source blocks.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ev = sub.add_parser("eval", help="Compile and run (or prove) a block.")
    ev.add_argument("body", help="File holding the block body, or - for stdin.")
    ev.add_argument("--unit", default=None, help="Program unit name for stable file names.")
    _add_expansion_options(ev)
    ev.add_argument(
        "--version",
        dest="language_version",
        type=int,
        choices=VERSIONS,
        default=0,
        help="Ada language version (0 = process default).",
    )
    ev.add_argument(
        "--no-assertions",
        action="store_true",
        help="Compile without assertion checks.",
    )
    ev.add_argument("--prove", action="store_true", help="Run the prover instead of compiling.")
    ev.add_argument("--assumptions", action="store_true", help="Prover: output assumptions.")
    ev.add_argument("--level", type=int, choices=LEVELS, default=4, help="Prover: proof level.")
    ev.add_argument("--mode", choices=MODES, default="all", help="Prover: analysis mode.")
    ev.add_argument("--pedantic", action="store_true", help="Prover: pedantic warnings.")
    ev.add_argument("--report", choices=REPORTS, default="all", help="Prover: report mode.")
    ev.add_argument("--warnings", choices=WARNINGS, default=None, help="Prover: warnings policy.")
    ev.add_argument(
        "--remote",
        action="store_true",
        help="Place artifacts under ADA_BABEL_REMOTE_TMPDIR.",
    )
    ev.add_argument(
        "--json",
        action="store_true",
        help="Print the result (stage, status, exit code, argv, output) as JSON.",
    )

    tg = sub.add_parser("tangle", help="Export a block to a standalone source file.")
    tg.add_argument("body", help="File holding the block body, or - for stdin.")
    tg.add_argument("target", type=Path, help="Output source file.")
    tg.add_argument(
        "--document",
        default=None,
        help="Origin document named in the header banner (default: body path).",
    )
    _add_expansion_options(tg)

    return parser


def _read_body(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _eval_options(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "assumptions": args.assumptions,
        "assertions": not args.no_assertions,
        "level": args.level,
        "mode": args.mode,
        "pedantic": args.pedantic,
        "prove": args.prove,
        "report": args.report,
        "template": args.template,
        "unit": args.unit,
        "var": args.var,
        "version": args.language_version,
        "warnings": args.warnings,
        "with": args.with_units,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        body = _read_body(args.body)
    except OSError as exc:
        print(f"Error: cannot read block body: {exc}", file=sys.stderr)
        return 1

    try:
        settings = load_settings()
        if args.command == "eval":
            ctx = EvalContext(settings=settings, remote=args.remote)
            result = evaluate(ctx, body, _eval_options(args))
            if args.json:
                print(json.dumps(result.to_dict(), indent=2))
                return 0 if result.ok else 1
            output = result.output
            sys.stdout.write(output)
            if output and not output.endswith("\n"):
                sys.stdout.write("\n")
            return 0 if result.ok else 1

        ctx = EvalContext(settings=settings)
        options = {"template": args.template, "with": args.with_units, "var": args.var}
        document = args.document or ("<stdin>" if args.body == "-" else args.body)
        with tangling(ctx):
            target = tangle_block(ctx, body, options, args.target, document)
        print(f"ada_babel v{TOOL_VERSION}: wrote {target}")
        return 0
    except (ConfigurationError, TemplateNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
