# SPDX-License-Identifier: MIT
"""Translate rule names into plugin-host check identifiers.

``core::0131::request-message-name`` becomes ``AEP_0131_REQUEST_MESSAGE_NAME``
in categories ``AEP`` and ``AEP_CORE``.
"""

from __future__ import annotations

from dataclasses import dataclass

from aeplint.lint.errors import DuplicateNameError, InvalidNameError
from aeplint.lint.names import RuleName
from aeplint.lint.registry import RuleRegistry

AEP_CATEGORY_ID = "AEP"
CATEGORY_IDS: dict[str, str] = {
    "core": "AEP_CORE",
}
CATEGORY_PURPOSES: dict[str, str] = {
    "AEP": "Checks all API Enhancement proposals as specified at https://aep.dev.",
    "AEP_CORE": "Checks all core API Enhancement proposals as specified at https://aep.dev.",
}


@dataclass(frozen=True)
class RuleSpec:
    id: str
    category_ids: tuple[str, ...]
    purpose: str
    default: bool = True


def check_id(rule_name: RuleName | str) -> str:
    name = RuleName.parse(rule_name)
    return f"AEP_{name.group}_{name.name}".replace("-", "_").upper()


def rule_spec(rule_name: RuleName | str) -> RuleSpec:
    """Build the plugin-host spec for one rule.

    Raises:
        InvalidNameError: If the rule's category has no host category.
    """
    name = RuleName.parse(rule_name)
    category = CATEGORY_IDS.get(name.category)
    if category is None:
        raise InvalidNameError(str(name), f"unknown category {name.category!r}")
    return RuleSpec(
        id=check_id(name),
        category_ids=(AEP_CATEGORY_ID, category),
        purpose=f"Checks AEP rule {name}.",
    )


def rule_specs(*registries: RuleRegistry) -> list[RuleSpec]:
    """Specs for every rule across registries, rejecting id collisions.

    Raises:
        DuplicateNameError: If two rules translate to the same check id.
    """
    specs: list[RuleSpec] = []
    owners: dict[str, RuleName] = {}
    for registry in registries:
        for name in registry.names():
            spec = rule_spec(name)
            if spec.id in owners:
                raise DuplicateNameError(f"{spec.id} ({owners[spec.id]} and {name})")
            owners[spec.id] = name
            specs.append(spec)
    return specs
