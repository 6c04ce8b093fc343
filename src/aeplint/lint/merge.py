# SPDX-License-Identifier: MIT
"""Combine the responses of the legacy and native pipelines per file.

Files keep the legacy pipeline's order, with native-only files appended in
the native pipeline's order. The two problem lists are never interleaved.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from aeplint.lint.base import Problem, Response


@dataclass
class CombinedResult:
    """Both pipelines' problems for one file."""

    file_path: str
    legacy_problems: list[Problem] = field(default_factory=list)
    native_problems: list[Problem] = field(default_factory=list)

    @property
    def has_problems(self) -> bool:
        return bool(self.legacy_problems or self.native_problems)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "problems": [p.to_dict() for p in self.legacy_problems],
            "native_problems": [p.to_dict() for p in self.native_problems],
        }


def merge(
    legacy: Iterable[Response], native: Iterable[Response]
) -> list[CombinedResult]:
    """Merge two pipelines' responses into one ordered list of CombinedResult."""
    ordered: list[CombinedResult] = []
    by_path: dict[str, CombinedResult] = {}

    def _slot(path: str) -> CombinedResult:
        result = by_path.get(path)
        if result is None:
            result = CombinedResult(file_path=path)
            by_path[path] = result
            ordered.append(result)
        return result

    for response in legacy:
        _slot(response.file_path).legacy_problems.extend(response.problems)
    for response in native:
        _slot(response.file_path).native_problems.extend(response.problems)
    return ordered


def has_problems(result: CombinedResult) -> bool:
    return result.has_problems


def any_problems(results: Iterable[CombinedResult]) -> bool:
    return any(r.has_problems for r in results)
