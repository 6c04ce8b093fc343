# SPDX-License-Identifier: MIT
"""Built-in rule packs, one ``add_rules`` function per AEP module."""

from __future__ import annotations

from collections.abc import Callable

from aeplint.lint.registry import RuleRegistry
from aeplint.rules import aep0122, aep0131

AddRules = Callable[[RuleRegistry], None]

LEGACY_RULE_PACKS: list[AddRules] = [
    aep0131.add_rules,
]

NATIVE_RULE_PACKS: list[AddRules] = [
    aep0122.add_rules,
]


def add(registry: RuleRegistry) -> None:
    """Register every rule for the legacy pipeline."""
    for add_rules in LEGACY_RULE_PACKS:
        add_rules(registry)


def add_native(registry: RuleRegistry) -> None:
    """Register every rule for the native pipeline."""
    for add_rules in NATIVE_RULE_PACKS:
        add_rules(registry)


def legacy_registry() -> RuleRegistry:
    registry = RuleRegistry()
    add(registry)
    return registry


def native_registry() -> RuleRegistry:
    registry = RuleRegistry()
    add_native(registry)
    return registry
