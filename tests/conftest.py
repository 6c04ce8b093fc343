# SPDX-License-Identifier: MIT
"""Shared fixtures: a compiled library.proto with source info."""

from __future__ import annotations

from pathlib import Path

import pytest
from google.protobuf import descriptor_pb2


def _location(
    info: descriptor_pb2.SourceCodeInfo,
    path: tuple[int, ...],
    span: tuple[int, ...],
    leading: str = "",
    trailing: str = "",
    detached: tuple[str, ...] = (),
) -> None:
    location = info.location.add()
    location.path.extend(path)
    location.span.extend(span)
    if leading:
        location.leading_comments = leading
    if trailing:
        location.trailing_comments = trailing
    location.leading_detached_comments.extend(detached)


def build_library_proto(
    name: str = "acme/library/v1/library.proto",
    get_shelf_leading: str = " Retrieves a shelf.\n",
) -> descriptor_pb2.FileDescriptorProto:
    """library.proto: GetBook is compliant, GetShelf is not, Book.author_name breaks AEP-122."""
    proto = descriptor_pb2.FileDescriptorProto(
        name=name, package="acme.library.v1", syntax="proto3"
    )

    request = proto.message_type.add(name="GetBookRequest")
    request.field.add(name="path", number=1, type=descriptor_pb2.FieldDescriptorProto.TYPE_STRING)

    book = proto.message_type.add(name="Book")
    book.field.add(
        name="author_name", number=1, type=descriptor_pb2.FieldDescriptorProto.TYPE_STRING
    )
    book.field.add(
        name="state",
        number=2,
        type=descriptor_pb2.FieldDescriptorProto.TYPE_ENUM,
        type_name=".acme.library.v1.Book.State",
    )
    state = book.enum_type.add(name="State")
    state.value.add(name="STATE_UNSPECIFIED", number=0)
    state.value.add(name="PUBLISHED", number=1)

    service = proto.service.add(name="Library")
    service.method.add(
        name="GetBook",
        input_type=".acme.library.v1.GetBookRequest",
        output_type=".acme.library.v1.Book",
    )
    service.method.add(
        name="GetShelf",
        input_type=".acme.library.v1.Book",
        output_type=".acme.library.v1.Book",
    )

    info = proto.source_code_info
    _location(info, (), (0, 0, 30, 1))
    _location(info, (12,), (0, 0, 18), detached=(" Library API.\n",))
    _location(info, (2,), (2, 0, 24), leading=" Package docs.\n")
    _location(info, (4, 0), (4, 0, 6, 1))
    _location(info, (4, 0, 2, 0), (5, 2, 18))
    _location(info, (4, 1), (8, 0, 16, 1), leading=" A book.\n")
    _location(info, (4, 1, 2, 0), (9, 2, 25), trailing=" Who wrote it.\n")
    _location(info, (4, 1, 2, 1), (10, 2, 17))
    _location(info, (4, 1, 4, 0), (11, 2, 15, 3))
    _location(info, (4, 1, 4, 0, 2, 0), (12, 4, 26))
    _location(info, (4, 1, 4, 0, 2, 1), (13, 4, 18))
    _location(info, (6, 0), (18, 0, 24, 1))
    _location(info, (6, 0, 2, 0), (20, 2, 58), leading=" Retrieves a book.\n")
    _location(info, (6, 0, 2, 1), (22, 2, 58), leading=get_shelf_leading)
    return proto


def write_descriptor_set(path: Path, *protos: descriptor_pb2.FileDescriptorProto) -> Path:
    fds = descriptor_pb2.FileDescriptorSet()
    fds.file.extend(protos)
    path.write_bytes(fds.SerializeToString())
    return path


@pytest.fixture
def library_proto() -> descriptor_pb2.FileDescriptorProto:
    return build_library_proto()


@pytest.fixture
def descriptor_set(tmp_path: Path) -> Path:
    """library.proto plus an import, serialized as a FileDescriptorSet."""
    annotations = descriptor_pb2.FileDescriptorProto(
        name="google/api/annotations.proto", package="google.api"
    )
    service = annotations.service.add(name="Unused")
    service.method.add(name="GetThing", input_type=".google.api.Thing")
    return write_descriptor_set(tmp_path / "library.pb", build_library_proto(), annotations)
