# SPDX-License-Identifier: MIT
"""Problems, responses, and the Rule protocol for the lint engine."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from aeplint.descriptor.base import (
    DeclarationKind,
    DeclarationLike,
    FileDescriptorLike,
    SourceSpan,
)
from aeplint.lint.names import RuleName

RULE_DOCS_BASE_URL = "https://linter.aep.dev"


def rule_uri(rule_name: RuleName) -> str:
    """Documentation URL for a rule.

    ``core::0131::request-message-name`` -> ``https://linter.aep.dev/131/request-message-name``;
    other categories keep the category segment in the path.
    """
    group = rule_name.group
    if group.isdigit():
        group = group.lstrip("0") or "0"
    if rule_name.category == "core":
        return f"{RULE_DOCS_BASE_URL}/{group}/{rule_name.name}"
    return f"{RULE_DOCS_BASE_URL}/{rule_name.category}/{group}/{rule_name.name}"


@dataclass(frozen=True)
class RawProblem:
    """A violation as returned by a rule body, not yet attributed to a rule."""

    message: str
    descriptor: DeclarationLike | FileDescriptorLike
    location: SourceSpan | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class Problem:
    """A violation attributed to a rule."""

    message: str
    descriptor: DeclarationLike | FileDescriptorLike
    rule_id: RuleName
    rule_uri: str
    location: SourceSpan | None = None
    suggestion: str | None = None

    @classmethod
    def attribute(
        cls, raw: RawProblem, rule_name: RuleName, location: SourceSpan | None
    ) -> Problem:
        return cls(
            message=raw.message,
            descriptor=raw.descriptor,
            rule_id=rule_name,
            rule_uri=rule_uri(rule_name),
            location=location,
            suggestion=raw.suggestion,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "message": self.message,
            "rule_id": str(self.rule_id),
            "rule_doc_uri": self.rule_uri,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        if self.location is not None:
            data["location"] = self.location.to_dict()
        return data


@dataclass(frozen=True)
class Response:
    """Problems found in one linted file by one pipeline."""

    file_path: str
    problems: list[Problem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_path": self.file_path, "problems": [p.to_dict() for p in self.problems]}


@runtime_checkable
class Rule(Protocol):
    """Protocol that every lint rule must satisfy."""

    name: RuleName

    def lint(self, file: FileDescriptorLike) -> list[RawProblem]: ...


# --- Declaration-kind adapters ---

Predicate = Callable[[Any], bool]
Check = Callable[[Any], Iterable[RawProblem]]


class DeclarationRule:
    """Run ``check`` on every declaration of one kind that passes ``only_if``."""

    kind: DeclarationKind

    def __init__(
        self, name: str | RuleName, check: Check, only_if: Predicate | None = None
    ) -> None:
        self.name = RuleName.parse(name)
        self._check = check
        self._only_if = only_if

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.name)!r})"

    def lint(self, file: FileDescriptorLike) -> list[RawProblem]:
        problems: list[RawProblem] = []
        for decl in file.declarations():
            if decl.kind != self.kind:
                continue
            if self._only_if is not None and not self._only_if(decl):
                continue
            problems.extend(self._check(decl))
        return problems


class FileRule:
    """Run ``check`` once per file."""

    def __init__(
        self, name: str | RuleName, check: Check, only_if: Predicate | None = None
    ) -> None:
        self.name = RuleName.parse(name)
        self._check = check
        self._only_if = only_if

    def __repr__(self) -> str:
        return f"FileRule({str(self.name)!r})"

    def lint(self, file: FileDescriptorLike) -> list[RawProblem]:
        if self._only_if is not None and not self._only_if(file):
            return []
        return list(self._check(file))


class MessageRule(DeclarationRule):
    kind = DeclarationKind.MESSAGE


class FieldRule(DeclarationRule):
    kind = DeclarationKind.FIELD


class EnumRule(DeclarationRule):
    kind = DeclarationKind.ENUM


class EnumValueRule(DeclarationRule):
    kind = DeclarationKind.ENUM_VALUE


class ServiceRule(DeclarationRule):
    kind = DeclarationKind.SERVICE


class MethodRule(DeclarationRule):
    kind = DeclarationKind.METHOD
