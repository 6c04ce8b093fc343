# SPDX-License-Identifier: MIT
"""AEP-131: Get methods — request message naming."""

from __future__ import annotations

from typing import Any

from aeplint.descriptor.base import short_type_name
from aeplint.lint.base import MethodRule, RawProblem
from aeplint.lint.registry import RuleRegistry


def _is_get_method(method: Any) -> bool:
    return method.name.startswith("Get")


def _request_message_name(method: Any) -> list[RawProblem]:
    want = f"{method.name}Request"
    got = short_type_name(method.input_type)
    if got == want:
        return []
    return [
        RawProblem(
            message=(
                f"Get RPCs should have a request message named after the RPC, such as {want!r}."
            ),
            descriptor=method,
            suggestion=want,
        )
    ]


request_message_name = MethodRule(
    "core::0131::request-message-name",
    _request_message_name,
    only_if=_is_get_method,
)

RULES = (request_message_name,)


def add_rules(registry: RuleRegistry) -> None:
    registry.register(*RULES)
