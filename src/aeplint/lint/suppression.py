# SPDX-License-Identifier: MIT
"""Inline suppression — ``api-linter: <rule-or-prefix>=disabled`` comment directives.

Directives are usually wrapped as ``(-- api-linter: core::0131::x=disabled --)``
but are recognized wherever the ``api-linter:`` marker appears. The index is
built once per file before any rule runs and is read-only afterwards.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from aeplint.descriptor.base import DeclarationLike, FileDescriptorLike, SourceSpan
from aeplint.lint.errors import InvalidNameError
from aeplint.lint.names import RuleName, RuleNamePrefix

log = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"api-linter:\s*(?P<rule>[^\s=]+)=(?P<state>[a-z]*)")
_STATES = {"disabled": False, "enabled": True}


@dataclass(frozen=True)
class Directive:
    prefix: RuleNamePrefix
    enabled: bool


def parse_directives(text: str) -> list[Directive]:
    """Extract directives from one comment block; malformed ones are skipped."""
    directives: list[Directive] = []
    for match in _DIRECTIVE_RE.finditer(text):
        state = _STATES.get(match.group("state"))
        if state is None:
            log.debug("Ignoring directive with unknown state: %r", match.group(0))
            continue
        try:
            prefix = RuleNamePrefix.parse(match.group("rule"))
        except InvalidNameError:
            log.debug("Ignoring directive with invalid rule name: %r", match.group(0))
            continue
        directives.append(Directive(prefix, state))
    return directives


def _scope_state(directives: Iterable[Directive], rule_name: RuleName) -> bool | None:
    """Longest matching prefix decides; disabled wins an equal-length tie."""
    best: Directive | None = None
    for directive in directives:
        if not directive.prefix.matches(rule_name):
            continue
        if best is None or directive.prefix.specificity > best.prefix.specificity:
            best = directive
        elif directive.prefix.specificity == best.prefix.specificity and not directive.enabled:
            best = directive
    return None if best is None else best.enabled


Target = SourceSpan | DeclarationLike | FileDescriptorLike | tuple[int, ...] | None


@dataclass(frozen=True)
class SuppressionIndex:
    """Source path -> directives found in the comments attached to that path.

    The empty path holds file-level directives.
    """

    scopes: dict[tuple[int, ...], tuple[Directive, ...]] = field(default_factory=dict)
    enabled: bool = True

    @classmethod
    def build(cls, file: FileDescriptorLike) -> SuppressionIndex:
        scopes: dict[tuple[int, ...], tuple[Directive, ...]] = {}
        header = [d for block in file.header_comments() for d in parse_directives(block)]
        if header:
            scopes[()] = tuple(header)
        for decl in file.declarations():
            found = [d for block in decl.comments.all() for d in parse_directives(block)]
            if found:
                scopes[tuple(decl.source_path)] = tuple(found)
        return cls(scopes)

    @classmethod
    def disabled(cls) -> SuppressionIndex:
        """An index that never suppresses (``--ignore-comment-disables``)."""
        return cls(enabled=False)

    def is_suppressed(self, target: Target, rule_name: RuleName | str) -> bool:
        """True if the nearest enclosing scope with a matching directive disables the rule."""
        if not self.enabled or not self.scopes:
            return False
        name = RuleName.parse(rule_name)
        path = _path_of(target)
        for length in range(len(path), -1, -1):
            directives = self.scopes.get(path[:length])
            if directives is None:
                continue
            state = _scope_state(directives, name)
            if state is not None:
                return not state
        return False


def _path_of(target: Target) -> tuple[int, ...]:
    if target is None:
        return ()
    if isinstance(target, tuple):
        return target
    if isinstance(target, SourceSpan):
        return target.path
    return tuple(target.source_path)


def build_index(
    file: FileDescriptorLike, *, ignore_comment_disables: bool = False
) -> SuppressionIndex:
    if ignore_comment_disables:
        return SuppressionIndex.disabled()
    return SuppressionIndex.build(file)
