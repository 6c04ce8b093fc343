# SPDX-License-Identifier: MIT
"""Error taxonomy for the lint engine.

Structural errors (names, registration, configuration, descriptor loading)
abort a run before any rule executes. ``RuleExecutionDefect`` is operational:
the engine contains it unless debug mode asks for full propagation.
"""

from __future__ import annotations


class AeplintError(Exception):
    """Base class for every error raised by aeplint."""


class InvalidNameError(AeplintError, ValueError):
    """Raised when a rule name or rule name prefix is malformed."""

    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        msg = f"Invalid rule name {name!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class DuplicateNameError(AeplintError, ValueError):
    """Raised when a rule name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate rule name {name!r}")


class ConfigParseError(AeplintError):
    """Raised when a configuration source is unreadable or malformed."""

    def __init__(self, source: str, errors: list[str]) -> None:
        self.source = source
        self.errors = errors
        super().__init__(f"Invalid configuration in {source}: {'; '.join(errors)}")


class DescriptorResolutionError(AeplintError):
    """Raised when descriptors could not be produced for the requested files."""


class RuleExecutionDefect(AeplintError):
    """Raised (debug mode only) when a rule body fails instead of returning problems."""

    def __init__(self, rule_name: str, file_path: str) -> None:
        self.rule_name = rule_name
        self.file_path = file_path
        super().__init__(f"Rule {rule_name} failed while linting {file_path}")
