# SPDX-License-Identifier: MIT
"""Rule registry — explicitly constructed, insertion-ordered, batches registered atomically."""

from __future__ import annotations

from collections.abc import Iterator

from aeplint.lint.base import Rule
from aeplint.lint.errors import DuplicateNameError, InvalidNameError
from aeplint.lint.names import RuleName


class RuleRegistry:
    """Mapping from rule name to rule, in registration order."""

    def __init__(self, *rules: Rule) -> None:
        self._rules: dict[RuleName, Rule] = {}
        if rules:
            self.register(*rules)

    def register(self, *rules: Rule) -> None:
        """Register a batch of rules atomically.

        Raises:
            InvalidNameError: If any rule's name is not a valid three-segment name.
            DuplicateNameError: If any name is already registered or repeated in the batch.
        """
        staged: dict[RuleName, Rule] = {}
        for rule in rules:
            raw = getattr(rule, "name", None)
            if isinstance(raw, (str, RuleName)):
                name = RuleName.parse(raw)
            else:
                raise InvalidNameError(repr(raw), f"rule {rule!r} has no name")
            if name in self._rules or name in staged:
                raise DuplicateNameError(str(name))
            staged[name] = rule
        self._rules.update(staged)

    def lookup(self, name: str | RuleName) -> Rule | None:
        try:
            key = RuleName.parse(name)
        except InvalidNameError:
            return None
        return self._rules.get(key)

    def all(self) -> list[Rule]:
        return list(self._rules.values())

    def names(self) -> list[RuleName]:
        return list(self._rules)

    def items(self) -> list[tuple[RuleName, Rule]]:
        return list(self._rules.items())

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, RuleName)):
            return False
        return self.lookup(name) is not None

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._rules)
