# SPDX-License-Identifier: MIT
"""Descriptor representations consumed by the lint engine."""

from aeplint.descriptor.base import (
    Comments,
    DeclarationKind,
    DeclarationLike,
    FileDescriptorLike,
    SourceSpan,
)
from aeplint.descriptor.legacy import LegacyDeclaration, LegacyFile
from aeplint.descriptor.loader import (
    legacy_files,
    load_descriptor_set,
    native_files,
    native_from_proto,
)
from aeplint.descriptor.native import (
    NativeEnum,
    NativeEnumValue,
    NativeField,
    NativeFile,
    NativeMessage,
    NativeMethod,
    NativeService,
)

__all__ = [
    "Comments",
    "DeclarationKind",
    "DeclarationLike",
    "FileDescriptorLike",
    "LegacyDeclaration",
    "LegacyFile",
    "NativeEnum",
    "NativeEnumValue",
    "NativeField",
    "NativeFile",
    "NativeMessage",
    "NativeMethod",
    "NativeService",
    "SourceSpan",
    "legacy_files",
    "load_descriptor_set",
    "native_files",
    "native_from_proto",
]
