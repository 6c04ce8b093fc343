# SPDX-License-Identifier: MIT
"""Tests for aeplint.lint.registry — registration, lookup, ordering."""

from __future__ import annotations

import pytest

from aeplint.descriptor.base import FileDescriptorLike
from aeplint.lint.base import RawProblem
from aeplint.lint.errors import DuplicateNameError, InvalidNameError
from aeplint.lint.names import RuleName
from aeplint.lint.registry import RuleRegistry


class _NamedRule:
    """Test rule that never finds anything."""

    def __init__(self, name: str | RuleName) -> None:
        self.name = name

    def lint(self, file: FileDescriptorLike) -> list[RawProblem]:
        return []


class TestRegister:
    def test_register_and_lookup(self) -> None:
        rule = _NamedRule("core::0131::request-message-name")
        registry = RuleRegistry(rule)
        assert registry.lookup("core::0131::request-message-name") is rule
        assert registry.lookup(RuleName.parse("core::0131::request-message-name")) is rule
        assert "core::0131::request-message-name" in registry
        assert len(registry) == 1

    def test_lookup_absent(self) -> None:
        registry = RuleRegistry()
        assert registry.lookup("core::0131::request-message-name") is None
        assert registry.lookup("not a name") is None
        assert 42 not in registry

    def test_all_preserves_registration_order(self) -> None:
        names = ["core::0200::z", "core::0100::a", "core::0150::m"]
        registry = RuleRegistry()
        for name in names:
            registry.register(_NamedRule(name))
        assert [str(n) for n in registry.names()] == names
        assert [r.name for r in registry.all()] == names
        assert [r.name for r in registry] == names

    def test_invalid_name_rejected(self) -> None:
        registry = RuleRegistry()
        with pytest.raises(InvalidNameError):
            registry.register(_NamedRule("core::0131"))
        assert len(registry) == 0

    def test_rule_name_instance_accepted(self) -> None:
        name = RuleName("core", "0131", "request-message-name")
        registry = RuleRegistry(_NamedRule(name))
        assert registry.names() == [name]

    def test_missing_name_rejected(self) -> None:
        registry = RuleRegistry()
        with pytest.raises(InvalidNameError):
            registry.register(object())  # type: ignore[arg-type]

    def test_duplicate_rejected(self) -> None:
        registry = RuleRegistry(_NamedRule("core::0131::request-message-name"))
        with pytest.raises(DuplicateNameError, match="core::0131::request-message-name"):
            registry.register(_NamedRule("core::0131::request-message-name"))
        assert len(registry) == 1


class TestAtomicBatch:
    def test_invalid_member_registers_nothing(self) -> None:
        registry = RuleRegistry()
        with pytest.raises(InvalidNameError):
            registry.register(
                _NamedRule("core::0131::request-message-name"),
                _NamedRule("core::0131::Bad"),
            )
        assert len(registry) == 0
        assert registry.lookup("core::0131::request-message-name") is None

    def test_duplicate_within_batch_registers_nothing(self) -> None:
        registry = RuleRegistry(_NamedRule("core::0122::name-suffix"))
        with pytest.raises(DuplicateNameError):
            registry.register(
                _NamedRule("core::0131::request-message-name"),
                _NamedRule("core::0131::request-message-name"),
            )
        assert [str(n) for n in registry.names()] == ["core::0122::name-suffix"]

    def test_failed_constructor_batch(self) -> None:
        with pytest.raises(DuplicateNameError):
            RuleRegistry(
                _NamedRule("core::0122::name-suffix"), _NamedRule("core::0122::name-suffix")
            )
