# SPDX-License-Identifier: MIT
"""AEP-122: resource names — field naming."""

from __future__ import annotations

from typing import Any

from aeplint.lint.base import FieldRule, RawProblem
from aeplint.lint.registry import RuleRegistry

_SUFFIX = "_name"
_ALLOWED = frozenset({"display_name"})


def _has_name_suffix(field: Any) -> bool:
    return field.name.endswith(_SUFFIX) and field.name not in _ALLOWED


def _name_suffix(field: Any) -> list[RawProblem]:
    return [
        RawProblem(
            message=f"Fields should not use the suffix `{_SUFFIX}`.",
            descriptor=field,
            suggestion=field.name[: -len(_SUFFIX)],
        )
    ]


name_suffix = FieldRule("core::0122::name-suffix", _name_suffix, only_if=_has_name_suffix)

RULES = (name_suffix,)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(*RULES)
