# SPDX-License-Identifier: MIT
"""Lint engine — runs registered rules over file descriptors and collects problems."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from aeplint.descriptor.base import FileDescriptorLike, SourceSpan
from aeplint.lint.base import Problem, RawProblem, Response, Rule, rule_uri
from aeplint.lint.config import ConfigLayer, ConfigSequence, is_enabled
from aeplint.lint.errors import RuleExecutionDefect
from aeplint.lint.names import RuleName
from aeplint.lint.registry import RuleRegistry
from aeplint.lint.suppression import SuppressionIndex, build_index

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleOutcome:
    """Result of one rule invocation: its attributed problems, or the exception it raised."""

    rule_name: RuleName
    problems: list[Problem] = field(default_factory=list)
    defect: BaseException | None = None


def _effective_location(raw: RawProblem) -> SourceSpan | None:
    location = raw.location
    if location is None:
        location = getattr(raw.descriptor, "location", None)
    if location is not None and not isinstance(location, SourceSpan):
        msg = f"location must be a SourceSpan or None, got {type(location).__name__}"
        raise TypeError(msg)
    return location


def _sort_key(problem: Problem) -> tuple[int, int, int]:
    start = problem.location.start if problem.location is not None else None
    if start is None:
        return (1, 0, 0)
    return (0, start[0], start[1])


class Engine:
    """Runs every enabled rule of a registry over a set of files.

    The registry and configuration are shared read-only; each file gets its
    own suppression index and its own result slot, so output order depends
    only on input order.
    """

    def __init__(
        self,
        registry: RuleRegistry,
        configs: ConfigSequence | Iterable[ConfigLayer] = (),
        *,
        debug: bool = False,
        ignore_comment_disables: bool = False,
        max_workers: int | None = None,
    ) -> None:
        self.registry = registry
        if isinstance(configs, ConfigSequence):
            self.configs = configs
        else:
            self.configs = ConfigSequence(tuple(configs))
        self.debug = debug
        self.ignore_comment_disables = ignore_comment_disables
        self.max_workers = max_workers

    def run(self, files: Iterable[FileDescriptorLike]) -> list[Response]:
        """Lint every non-import file, returning one Response per file in input order.

        Raises:
            RuleExecutionDefect: Only in debug mode, when a rule body raises.
        """
        targets = [f for f in files if not f.is_import]
        if self.max_workers and self.max_workers > 1 and len(targets) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                responses = list(pool.map(self.lint_file, targets))
        else:
            responses = [self.lint_file(f) for f in targets]
        log.info(
            "Linted %d files with %d rules: %d problems",
            len(responses),
            len(self.registry),
            sum(len(r.problems) for r in responses),
        )
        return responses

    def lint_file(self, file: FileDescriptorLike) -> Response:
        index = build_index(file, ignore_comment_disables=self.ignore_comment_disables)
        problems: list[Problem] = []
        for name, rule in self.registry.items():
            if not is_enabled(file.path, name, self.configs):
                log.debug("Skipping %s for %s (disabled by config)", name, file.path)
                continue
            outcome = self._invoke(name, rule, file, index)
            if outcome.defect is not None:
                problems.append(_defect_problem(name, file, outcome.defect))
            else:
                problems.extend(outcome.problems)
        problems.sort(key=_sort_key)
        return Response(file_path=file.path, problems=problems)

    def _invoke(
        self, name: RuleName, rule: Rule, file: FileDescriptorLike, index: SuppressionIndex
    ) -> RuleOutcome:
        """Run one rule and attribute what it returned.

        Anything that goes wrong, in the rule body or with the problems it
        returned, is captured as the outcome's defect.
        """
        try:
            problems: list[Problem] = []
            for raw in rule.lint(file):
                problem = _attribute(name, raw, index)
                if problem is not None:
                    problems.append(problem)
            return RuleOutcome(name, problems)
        except Exception as exc:
            if self.debug:
                raise RuleExecutionDefect(str(name), file.path) from exc
            log.exception("Rule %s failed on %s", name, file.path)
            return RuleOutcome(name, defect=exc)


def _attribute(name: RuleName, raw: RawProblem, index: SuppressionIndex) -> Problem | None:
    """Attribute ``raw`` to ``name``, or return None if a directive suppresses it.

    Raises:
        TypeError: If ``raw`` is not a well-formed RawProblem.
    """
    if not isinstance(raw, RawProblem):
        msg = f"expected RawProblem, got {type(raw).__name__}"
        raise TypeError(msg)
    if not isinstance(getattr(raw.descriptor, "source_path", None), tuple):
        msg = f"problem descriptor {raw.descriptor!r} has no source path"
        raise TypeError(msg)
    location = _effective_location(raw)
    target = location if location is not None else raw.descriptor
    if index.is_suppressed(target, name):
        return None
    return Problem.attribute(raw, name, location)


def _defect_problem(rule_name: RuleName, file: FileDescriptorLike, exc: BaseException) -> Problem:
    return Problem(
        message=f"Rule {rule_name} failed: {type(exc).__name__}: {exc}",
        descriptor=file,
        rule_id=rule_name,
        rule_uri=rule_uri(rule_name),
    )


def lint(
    files: Iterable[FileDescriptorLike],
    registry: RuleRegistry,
    configs: ConfigSequence | Iterable[ConfigLayer] = (),
    *,
    ignore_comment_disables: bool = False,
    debug: bool = False,
) -> list[Response]:
    """Convenience: build an Engine and run it once."""
    engine = Engine(registry, configs, debug=debug, ignore_comment_disables=ignore_comment_disables)
    return engine.run(files)
