# SPDX-License-Identifier: MIT
"""Descriptor capability set shared by every descriptor representation.

The engine, suppression scanner and rules only rely on what is declared
here, so the legacy ``descriptor_pb2`` wrapper and the native declaration
tree are interchangeable.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

# Field numbers from google/protobuf/descriptor.proto, used to build source paths.
FILE_PACKAGE = 2
FILE_MESSAGE_TYPE = 4
FILE_ENUM_TYPE = 5
FILE_SERVICE = 6
FILE_SYNTAX = 12
MESSAGE_FIELD = 2
MESSAGE_NESTED_TYPE = 3
MESSAGE_ENUM_TYPE = 4
ENUM_VALUE = 2
SERVICE_METHOD = 2


class DeclarationKind(StrEnum):
    FILE = "file"
    MESSAGE = "message"
    FIELD = "field"
    ENUM = "enum"
    ENUM_VALUE = "enum_value"
    SERVICE = "service"
    METHOD = "method"


@dataclass(frozen=True)
class SourceSpan:
    """A source location: descriptor source path plus an optional line/column span.

    ``span`` is ``(start_line, start_column, end_line, end_column)``, zero-based,
    as in ``SourceCodeInfo.Location``.
    """

    path: tuple[int, ...]
    span: tuple[int, int, int, int] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.path, tuple):
            msg = f"path must be a tuple, got {type(self.path).__name__}"
            raise TypeError(msg)
        if self.span is not None and (not isinstance(self.span, tuple) or len(self.span) != 4):
            msg = f"span must be None or a 4-tuple, got {self.span!r}"
            raise ValueError(msg)

    @classmethod
    def from_proto_span(cls, path: Any, span: Any) -> SourceSpan:
        """Build from a ``SourceCodeInfo`` path/span pair (3 or 4 span elements)."""
        values = list(span)
        if len(values) == 3:
            values = [values[0], values[1], values[0], values[2]]
        if len(values) != 4:
            return cls(tuple(path))
        return cls(tuple(path), (values[0], values[1], values[2], values[3]))

    @property
    def start(self) -> tuple[int, int] | None:
        if self.span is None:
            return None
        return (self.span[0], self.span[1])

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"path": list(self.path)}
        if self.span is not None:
            # One-based for humans, like compiler diagnostics.
            start_line, start_column, end_line, end_column = self.span
            data["start_position"] = {
                "line_number": start_line + 1,
                "column_number": start_column + 1,
            }
            data["end_position"] = {"line_number": end_line + 1, "column_number": end_column + 1}
        return data


@dataclass(frozen=True)
class Comments:
    """Comments attached to a declaration."""

    leading: str = ""
    trailing: str = ""
    leading_detached: tuple[str, ...] = ()

    def all(self) -> tuple[str, ...]:
        """Return every non-empty comment block, detached ones first."""
        blocks = (*self.leading_detached, self.leading, self.trailing)
        return tuple(b for b in blocks if b)


@runtime_checkable
class DeclarationLike(Protocol):
    """A message, field, enum, enum value, service or method."""

    @property
    def kind(self) -> DeclarationKind: ...

    @property
    def name(self) -> str: ...

    @property
    def full_name(self) -> str: ...

    @property
    def source_path(self) -> tuple[int, ...]: ...

    @property
    def comments(self) -> Comments: ...

    @property
    def location(self) -> SourceSpan | None: ...

    @property
    def parent(self) -> DeclarationLike | FileDescriptorLike | None: ...

    @property
    def file(self) -> FileDescriptorLike: ...


@runtime_checkable
class FileDescriptorLike(Protocol):
    """A compiled .proto file."""

    @property
    def kind(self) -> DeclarationKind: ...

    @property
    def path(self) -> str: ...

    @property
    def package(self) -> str: ...

    @property
    def is_import(self) -> bool: ...

    @property
    def source_path(self) -> tuple[int, ...]: ...

    @property
    def comments(self) -> Comments: ...

    @property
    def location(self) -> SourceSpan | None: ...

    def declarations(self) -> Iterator[DeclarationLike]: ...

    def header_comments(self) -> tuple[str, ...]: ...


def qualified_name(scope: str, name: str) -> str:
    return f"{scope}.{name}" if scope else name


def short_type_name(type_name: str) -> str:
    """``.acme.library.v1.GetBookRequest`` -> ``GetBookRequest``."""
    return type_name.rsplit(".", 1)[-1]
