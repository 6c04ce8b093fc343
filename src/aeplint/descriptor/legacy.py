# SPDX-License-Identifier: MIT
"""Legacy representation — thin wrappers over ``descriptor_pb2`` messages.

Comments and spans come from the file's ``SourceCodeInfo``, looked up by
source path.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from google.protobuf import descriptor_pb2

from aeplint.descriptor.base import (
    ENUM_VALUE,
    FILE_ENUM_TYPE,
    FILE_MESSAGE_TYPE,
    FILE_PACKAGE,
    FILE_SERVICE,
    FILE_SYNTAX,
    MESSAGE_ENUM_TYPE,
    MESSAGE_FIELD,
    MESSAGE_NESTED_TYPE,
    SERVICE_METHOD,
    Comments,
    DeclarationKind,
    SourceSpan,
    qualified_name,
)

# kind -> (field number, repeated attribute, child kind)
_CHILDREN: dict[DeclarationKind, tuple[tuple[int, str, DeclarationKind], ...]] = {
    DeclarationKind.FILE: (
        (FILE_MESSAGE_TYPE, "message_type", DeclarationKind.MESSAGE),
        (FILE_ENUM_TYPE, "enum_type", DeclarationKind.ENUM),
        (FILE_SERVICE, "service", DeclarationKind.SERVICE),
    ),
    DeclarationKind.MESSAGE: (
        (MESSAGE_FIELD, "field", DeclarationKind.FIELD),
        (MESSAGE_NESTED_TYPE, "nested_type", DeclarationKind.MESSAGE),
        (MESSAGE_ENUM_TYPE, "enum_type", DeclarationKind.ENUM),
    ),
    DeclarationKind.ENUM: ((ENUM_VALUE, "value", DeclarationKind.ENUM_VALUE),),
    DeclarationKind.SERVICE: ((SERVICE_METHOD, "method", DeclarationKind.METHOD),),
}


def index_source_info(
    source_code_info: descriptor_pb2.SourceCodeInfo,
) -> dict[tuple[int, ...], descriptor_pb2.SourceCodeInfo.Location]:
    """Map source path -> first location recorded for it."""
    index: dict[tuple[int, ...], descriptor_pb2.SourceCodeInfo.Location] = {}
    for location in source_code_info.location:
        index.setdefault(tuple(location.path), location)
    return index


def comments_of(location: descriptor_pb2.SourceCodeInfo.Location | None) -> Comments:
    if location is None:
        return Comments()
    return Comments(
        leading=location.leading_comments,
        trailing=location.trailing_comments,
        leading_detached=tuple(location.leading_detached_comments),
    )


def span_of(
    path: tuple[int, ...], location: descriptor_pb2.SourceCodeInfo.Location | None
) -> SourceSpan:
    if location is None:
        return SourceSpan(path)
    return SourceSpan.from_proto_span(path, location.span)


class LegacyDeclaration:
    """A message, field, enum, enum value, service or method proto."""

    def __init__(
        self,
        proto: Any,
        kind: DeclarationKind,
        source_path: tuple[int, ...],
        parent: LegacyDeclaration | LegacyFile,
        file: LegacyFile,
    ) -> None:
        self.proto = proto
        self.kind = kind
        self.source_path = source_path
        self.parent = parent
        self.file = file

    def __repr__(self) -> str:
        return f"LegacyDeclaration({self.kind}, {self.full_name!r})"

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def full_name(self) -> str:
        return qualified_name(self.parent.full_name, self.name)

    @property
    def comments(self) -> Comments:
        return comments_of(self.file.source_locations.get(self.source_path))

    @property
    def location(self) -> SourceSpan:
        return span_of(self.source_path, self.file.source_locations.get(self.source_path))

    # Kind-specific accessors; empty for kinds that do not carry them.

    @property
    def input_type(self) -> str:
        return self.proto.input_type.lstrip(".") if self.kind == DeclarationKind.METHOD else ""

    @property
    def output_type(self) -> str:
        return self.proto.output_type.lstrip(".") if self.kind == DeclarationKind.METHOD else ""

    @property
    def type_name(self) -> str:
        return self.proto.type_name.lstrip(".") if self.kind == DeclarationKind.FIELD else ""

    @property
    def number(self) -> int:
        if self.kind in (DeclarationKind.FIELD, DeclarationKind.ENUM_VALUE):
            return self.proto.number
        return 0

    def children(self) -> Iterator[LegacyDeclaration]:
        for number, attr, child_kind in _CHILDREN.get(self.kind, ()):
            for index, child in enumerate(getattr(self.proto, attr)):
                path = (*self.source_path, number, index)
                yield LegacyDeclaration(child, child_kind, path, self, self.file)

    def walk(self) -> Iterator[LegacyDeclaration]:
        yield self
        for child in self.children():
            yield from child.walk()


class LegacyFile:
    """A ``FileDescriptorProto`` exposed through the descriptor capability set."""

    kind = DeclarationKind.FILE
    source_path: tuple[int, ...] = ()
    parent = None

    def __init__(
        self, proto: descriptor_pb2.FileDescriptorProto, *, is_import: bool = False
    ) -> None:
        self.proto = proto
        self.is_import = is_import
        self.source_locations = index_source_info(proto.source_code_info)

    def __repr__(self) -> str:
        return f"LegacyFile({self.path!r})"

    @property
    def path(self) -> str:
        return self.proto.name

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def package(self) -> str:
        return self.proto.package

    @property
    def full_name(self) -> str:
        return self.proto.package

    @property
    def file(self) -> LegacyFile:
        return self

    @property
    def comments(self) -> Comments:
        return comments_of(self.source_locations.get(()))

    @property
    def location(self) -> SourceSpan:
        return span_of((), self.source_locations.get(()))

    def children(self) -> Iterator[LegacyDeclaration]:
        for number, attr, child_kind in _CHILDREN[DeclarationKind.FILE]:
            for index, child in enumerate(getattr(self.proto, attr)):
                yield LegacyDeclaration(child, child_kind, (number, index), self, self)

    def declarations(self) -> Iterator[LegacyDeclaration]:
        for child in self.children():
            yield from child.walk()

    def header_comments(self) -> tuple[str, ...]:
        blocks: list[str] = []
        for path in ((FILE_SYNTAX,), (FILE_PACKAGE,), ()):
            blocks.extend(comments_of(self.source_locations.get(path)).all())
        return tuple(blocks)
