# SPDX-License-Identifier: MIT
"""Rule names — ``category::group::name`` and the prefixes used to target them."""

from __future__ import annotations

import re
from dataclasses import dataclass

from aeplint.lint.errors import InvalidNameError

SEPARATOR = "::"
ALL = "all"
"""Configuration keyword matching every rule name."""

_SEGMENT_RE = re.compile(r"[a-z0-9-]+")


def _split(value: str) -> list[str]:
    if not isinstance(value, str):
        raise InvalidNameError(repr(value), "not a string")
    segments = value.split(SEPARATOR)
    for segment in segments:
        if not _SEGMENT_RE.fullmatch(segment):
            raise InvalidNameError(
                value, f"segment {segment!r} must match [a-z0-9-]+ and be non-empty"
            )
    return segments


@dataclass(frozen=True, order=True)
class RuleName:
    """A validated three-segment rule name, e.g. ``core::0131::request-message-name``."""

    category: str
    group: str
    name: str

    def __post_init__(self) -> None:
        for segment in self.segments:
            if not isinstance(segment, str) or not _SEGMENT_RE.fullmatch(segment):
                raise InvalidNameError(
                    SEPARATOR.join(map(str, self.segments)),
                    f"segment {segment!r} must match [a-z0-9-]+ and be non-empty",
                )

    @classmethod
    def parse(cls, value: str | RuleName) -> RuleName:
        """Validate and build a rule name.

        Raises:
            InvalidNameError: Unless ``value`` has exactly three valid segments.
        """
        if isinstance(value, RuleName):
            return value
        segments = _split(value)
        if len(segments) != 3:
            raise InvalidNameError(value, f"expected 3 segments, got {len(segments)}")
        return cls(*segments)

    @property
    def segments(self) -> tuple[str, str, str]:
        return (self.category, self.group, self.name)

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)


@dataclass(frozen=True)
class RuleNamePrefix:
    """A 1-3 segment leading part of a rule name; zero segments means ``all``."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, value: str) -> RuleNamePrefix:
        """Validate a prefix as written in configuration or comments.

        Raises:
            InvalidNameError: For empty segments, bad characters or more than 3 segments.
        """
        if value == ALL:
            return cls(())
        segments = _split(value)
        if len(segments) > 3:
            raise InvalidNameError(value, f"expected at most 3 segments, got {len(segments)}")
        return cls(tuple(segments))

    @property
    def specificity(self) -> int:
        return len(self.segments)

    def matches(self, rule_name: RuleName) -> bool:
        return rule_name.segments[: len(self.segments)] == self.segments

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments) if self.segments else ALL
