# SPDX-License-Identifier: MIT
"""Native declaration tree — plain dataclasses, no protobuf runtime needed.

Nodes are linked (parent, file, source path) once by ``NativeFile`` when it
is constructed; after that the tree is treated as read-only.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar

from aeplint.descriptor.base import (
    ENUM_VALUE,
    FILE_ENUM_TYPE,
    FILE_MESSAGE_TYPE,
    FILE_SERVICE,
    MESSAGE_ENUM_TYPE,
    MESSAGE_FIELD,
    MESSAGE_NESTED_TYPE,
    SERVICE_METHOD,
    Comments,
    DeclarationKind,
    SourceSpan,
    qualified_name,
)

Span = tuple[int, int, int, int]


@dataclass(eq=False)
class NativeDeclaration:
    name: str
    comments: Comments = field(default_factory=Comments)
    span: Span | None = None

    kind: ClassVar[DeclarationKind]

    def __post_init__(self) -> None:
        self.parent: NativeDeclaration | NativeFile | None = None
        self._file: NativeFile | None = None
        self.source_path: tuple[int, ...] = ()

    @property
    def file(self) -> NativeFile:
        if self._file is None:
            msg = f"{self.kind} {self.name!r} is not attached to a file"
            raise RuntimeError(msg)
        return self._file

    @property
    def full_name(self) -> str:
        if isinstance(self.parent, NativeDeclaration):
            return qualified_name(self.parent.full_name, self.name)
        return qualified_name(self.file.package, self.name)

    @property
    def location(self) -> SourceSpan | None:
        return SourceSpan(self.source_path, self.span)

    def children(self) -> Iterator[tuple[int, list[NativeDeclaration]]]:
        return iter(())

    def _attach(
        self, parent: NativeDeclaration | NativeFile, file: NativeFile, path: tuple[int, ...]
    ) -> None:
        self.parent = parent
        self._file = file
        self.source_path = path
        for number, nodes in self.children():
            for index, node in enumerate(nodes):
                node._attach(self, file, (*path, number, index))

    def walk(self) -> Iterator[NativeDeclaration]:
        yield self
        for _, nodes in self.children():
            for node in nodes:
                yield from node.walk()


@dataclass(eq=False)
class NativeField(NativeDeclaration):
    number: int = 0
    type_name: str = ""

    kind = DeclarationKind.FIELD


@dataclass(eq=False)
class NativeEnumValue(NativeDeclaration):
    number: int = 0

    kind = DeclarationKind.ENUM_VALUE


@dataclass(eq=False)
class NativeEnum(NativeDeclaration):
    values: list[NativeEnumValue] = field(default_factory=list)

    kind = DeclarationKind.ENUM

    def children(self) -> Iterator[tuple[int, list[NativeDeclaration]]]:
        yield ENUM_VALUE, list(self.values)


@dataclass(eq=False)
class NativeMessage(NativeDeclaration):
    fields: list[NativeField] = field(default_factory=list)
    messages: list[NativeMessage] = field(default_factory=list)
    enums: list[NativeEnum] = field(default_factory=list)

    kind = DeclarationKind.MESSAGE

    def children(self) -> Iterator[tuple[int, list[NativeDeclaration]]]:
        yield MESSAGE_FIELD, list(self.fields)
        yield MESSAGE_NESTED_TYPE, list(self.messages)
        yield MESSAGE_ENUM_TYPE, list(self.enums)


@dataclass(eq=False)
class NativeMethod(NativeDeclaration):
    input_type: str = ""
    output_type: str = ""

    kind = DeclarationKind.METHOD


@dataclass(eq=False)
class NativeService(NativeDeclaration):
    methods: list[NativeMethod] = field(default_factory=list)

    kind = DeclarationKind.SERVICE

    def children(self) -> Iterator[tuple[int, list[NativeDeclaration]]]:
        yield SERVICE_METHOD, list(self.methods)


@dataclass(eq=False)
class NativeFile:
    """A .proto file in the native representation."""

    path: str
    package: str = ""
    messages: list[NativeMessage] = field(default_factory=list)
    enums: list[NativeEnum] = field(default_factory=list)
    services: list[NativeService] = field(default_factory=list)
    is_import: bool = False
    comments: Comments = field(default_factory=Comments)
    header: list[Comments] = field(default_factory=list)
    span: Span | None = None

    kind: ClassVar[DeclarationKind] = DeclarationKind.FILE
    source_path: ClassVar[tuple[int, ...]] = ()

    def __post_init__(self) -> None:
        for number, nodes in self._top_level():
            for index, node in enumerate(nodes):
                node._attach(self, self, (number, index))

    def _top_level(self) -> Iterator[tuple[int, list[NativeDeclaration]]]:
        yield FILE_MESSAGE_TYPE, list(self.messages)
        yield FILE_ENUM_TYPE, list(self.enums)
        yield FILE_SERVICE, list(self.services)

    @property
    def name(self) -> str:
        return self.path

    @property
    def full_name(self) -> str:
        return self.package

    @property
    def file(self) -> NativeFile:
        return self

    @property
    def parent(self) -> None:
        return None

    @property
    def location(self) -> SourceSpan | None:
        return SourceSpan((), self.span)

    def declarations(self) -> Iterator[NativeDeclaration]:
        for _, nodes in self._top_level():
            for node in nodes:
                yield from node.walk()

    def header_comments(self) -> tuple[str, ...]:
        """Comments on the syntax and package statements, plus the file's own."""
        blocks: list[str] = []
        for comments in (*self.header, self.comments):
            blocks.extend(comments.all())
        return tuple(blocks)
