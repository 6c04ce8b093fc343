# SPDX-License-Identifier: MIT
"""Load compiled ``FileDescriptorSet`` files and hand them to both pipelines."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from aeplint.descriptor.base import (
    FILE_PACKAGE,
    FILE_SYNTAX,
    DeclarationKind,
)
from aeplint.descriptor.legacy import (
    LegacyDeclaration,
    LegacyFile,
    comments_of,
)
from aeplint.descriptor.native import (
    NativeDeclaration,
    NativeEnum,
    NativeEnumValue,
    NativeField,
    NativeFile,
    NativeMessage,
    NativeMethod,
    NativeService,
)
from aeplint.lint.errors import DescriptorResolutionError

log = logging.getLogger(__name__)


def load_descriptor_set(*paths: str | Path) -> list[descriptor_pb2.FileDescriptorProto]:
    """Read binary ``FileDescriptorSet`` files, keeping the first proto per file name.

    Raises:
        DescriptorResolutionError: If a file cannot be read or decoded.
    """
    seen: dict[str, descriptor_pb2.FileDescriptorProto] = {}
    for path in paths:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            msg = f"Cannot read descriptor set {path}: {exc}"
            raise DescriptorResolutionError(msg) from exc
        fds = descriptor_pb2.FileDescriptorSet()
        try:
            fds.ParseFromString(data)
        except DecodeError as exc:
            msg = f"Cannot decode descriptor set {path}: {exc}"
            raise DescriptorResolutionError(msg) from exc
        for proto in fds.file:
            seen.setdefault(proto.name, proto)
    log.debug("Loaded %d file descriptors from %d descriptor sets", len(seen), len(paths))
    return list(seen.values())


def _select(
    protos: Iterable[descriptor_pb2.FileDescriptorProto], targets: Iterable[str] | None
) -> list[tuple[descriptor_pb2.FileDescriptorProto, bool]]:
    """Pair each proto with its import flag, in target order for primary files.

    Without ``targets`` every proto is a primary file. Requested targets
    missing from the set raise ``DescriptorResolutionError``.
    """
    protos = list(protos)
    if targets is None:
        return [(p, False) for p in protos]
    wanted = list(dict.fromkeys(targets))
    by_name = {p.name: p for p in protos}
    missing = [t for t in wanted if t not in by_name]
    if missing:
        msg = f"No descriptor found for: {', '.join(missing)}"
        raise DescriptorResolutionError(msg)
    selected = [(by_name[t], False) for t in wanted]
    selected.extend((p, True) for p in protos if p.name not in wanted)
    return selected


def legacy_files(
    protos: Iterable[descriptor_pb2.FileDescriptorProto], targets: Iterable[str] | None = None
) -> list[LegacyFile]:
    return [LegacyFile(p, is_import=is_import) for p, is_import in _select(protos, targets)]


def native_files(
    protos: Iterable[descriptor_pb2.FileDescriptorProto], targets: Iterable[str] | None = None
) -> list[NativeFile]:
    return [native_from_proto(p, is_import=is_import) for p, is_import in _select(protos, targets)]


def _native_node(decl: LegacyDeclaration) -> NativeDeclaration:
    common = {
        "name": decl.name,
        "comments": decl.comments,
        "span": decl.location.span,
    }
    children = [_native_node(c) for c in decl.children()]
    if decl.kind == DeclarationKind.MESSAGE:
        return NativeMessage(
            **common,
            fields=[c for c in children if isinstance(c, NativeField)],
            messages=[c for c in children if isinstance(c, NativeMessage)],
            enums=[c for c in children if isinstance(c, NativeEnum)],
        )
    if decl.kind == DeclarationKind.FIELD:
        return NativeField(**common, number=decl.number, type_name=decl.type_name)
    if decl.kind == DeclarationKind.ENUM:
        return NativeEnum(**common, values=[c for c in children if isinstance(c, NativeEnumValue)])
    if decl.kind == DeclarationKind.ENUM_VALUE:
        return NativeEnumValue(**common, number=decl.number)
    if decl.kind == DeclarationKind.SERVICE:
        return NativeService(**common, methods=[c for c in children if isinstance(c, NativeMethod)])
    return NativeMethod(**common, input_type=decl.input_type, output_type=decl.output_type)


def native_from_proto(
    proto: descriptor_pb2.FileDescriptorProto, *, is_import: bool = False
) -> NativeFile:
    """Build the native tree for a ``FileDescriptorProto``, keeping comments and spans."""
    legacy = LegacyFile(proto, is_import=is_import)
    top = [_native_node(d) for d in legacy.children()]
    locations = legacy.source_locations
    return NativeFile(
        path=proto.name,
        package=proto.package,
        messages=[n for n in top if isinstance(n, NativeMessage)],
        enums=[n for n in top if isinstance(n, NativeEnum)],
        services=[n for n in top if isinstance(n, NativeService)],
        is_import=is_import,
        comments=comments_of(locations.get(())),
        header=[
            comments_of(locations.get((FILE_SYNTAX,))),
            comments_of(locations.get((FILE_PACKAGE,))),
        ],
        span=legacy.location.span,
    )
