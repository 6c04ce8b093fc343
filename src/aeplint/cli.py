# SPDX-License-Identifier: MIT
"""Command line driver — load descriptors and config, run both pipelines, print the merged report.

Exit status: 0 when a report was written, 1 when ``--set-exit-status`` is
given and problems were found, 2 on fatal errors (no report is written).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from aeplint import __version__
from aeplint.descriptor.loader import legacy_files, load_descriptor_set, native_files
from aeplint.lint.base import rule_uri
from aeplint.lint.config import build_config_sequence
from aeplint.lint.engine import Engine
from aeplint.lint.errors import AeplintError, DescriptorResolutionError, RuleExecutionDefect
from aeplint.lint.merge import any_problems, merge
from aeplint.rules import legacy_registry, native_registry

EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_FATAL = 2

OUTPUT_FORMATS = ("yaml", "yml", "json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aeplint",
        description="Lint protocol buffer APIs against API Enhancement Proposals",
    )
    parser.add_argument(
        "files", nargs="*", help="Proto file names to lint, as recorded in the descriptor set."
    )
    parser.add_argument(
        "--config", default=None, help="The linter config file (overrides AEPLINT_CONFIG)."
    )
    parser.add_argument(
        "--output-format",
        choices=OUTPUT_FORMATS,
        default="yaml",
        help="The format of the linting results. YAML is the default.",
    )
    parser.add_argument(
        "-o",
        "--output-path",
        default=None,
        help="The output file path. If not given, results are printed to STDOUT.",
    )
    parser.add_argument(
        "--set-exit-status",
        action="store_true",
        help="Return exit status 1 when lint errors are found.",
    )
    parser.add_argument(
        "--descriptor-set-in",
        action="append",
        default=[],
        help="A FileDescriptorSet (protoc --include_source_info --include_imports). Repeatable.",
    )
    parser.add_argument(
        "--enable-rule", action="append", default=[], help="Enable a rule. Repeatable."
    )
    parser.add_argument(
        "--disable-rule", action="append", default=[], help="Disable a rule. Repeatable."
    )
    parser.add_argument("--list-rules", action="store_true", help="Print the rules and exit.")
    parser.add_argument(
        "--debug", action="store_true", help="Propagate rule failures with a full traceback."
    )
    parser.add_argument(
        "--ignore-comment-disables",
        action="store_true",
        help="Ignore api-linter disable comments, so proto authors cannot opt out of checks.",
    )
    parser.add_argument("--version", action="version", version=f"aeplint {__version__}")
    return parser


def _dump(data: Any, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(data, indent=2) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def _write(text: str, output_path: str | None) -> None:
    if output_path is None:
        sys.stdout.write(text)
        return
    Path(output_path).write_text(text, encoding="utf-8")


def _list_rules() -> list[dict[str, str]]:
    listed: list[dict[str, str]] = []
    for pipeline, registry in (("legacy", legacy_registry()), ("native", native_registry())):
        for name in registry.names():
            listed.append({"name": str(name), "uri": rule_uri(name), "pipeline": pipeline})
    return listed


def run(args: argparse.Namespace) -> int:
    """Run a lint from parsed arguments. Raises AeplintError on fatal errors."""
    if args.list_rules:
        _write(_dump(_list_rules(), args.output_format), args.output_path)
        return EXIT_OK
    if not args.files:
        msg = "no file to lint"
        raise DescriptorResolutionError(msg)
    if not args.descriptor_set_in:
        msg = "no descriptor set given; pass --descriptor-set-in"
        raise DescriptorResolutionError(msg)

    configs = build_config_sequence(args.config, args.enable_rule, args.disable_rule)
    protos = load_descriptor_set(*args.descriptor_set_in)

    options = {"debug": args.debug, "ignore_comment_disables": args.ignore_comment_disables}
    legacy = Engine(legacy_registry(), configs, **options).run(legacy_files(protos, args.files))
    native = Engine(native_registry(), configs, **options).run(native_files(protos, args.files))
    results = merge(legacy, native)

    _write(_dump([r.to_dict() for r in results], args.output_format), args.output_path)
    if args.set_exit_status and any_problems(results):
        return EXIT_PROBLEMS
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except RuleExecutionDefect:
        raise
    except (AeplintError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL
