# SPDX-License-Identifier: MIT
"""Tests for aeplint.lint.suppression — directive parsing and scope lookup."""

from __future__ import annotations

from aeplint.descriptor.base import Comments, SourceSpan
from aeplint.descriptor.native import NativeFile, NativeMessage, NativeMethod, NativeService
from aeplint.lint.names import RuleNamePrefix
from aeplint.lint.suppression import SuppressionIndex, build_index, parse_directives

RULE = "core::0131::request-message-name"
OTHER = "core::0136::verb-name"


def _disable(prefix: str) -> Comments:
    return Comments(
        leading=f" (-- api-linter: {prefix}=disabled\n     aep.dev/not-precedent: legacy. --)\n"
    )


def _library(
    file_comments: Comments | None = None,
    service_comments: Comments | None = None,
    method_comments: Comments | None = None,
) -> NativeFile:
    return NativeFile(
        path="library.proto",
        package="acme.library.v1",
        header=[file_comments or Comments()],
        messages=[NativeMessage("Book", span=(2, 0, 4, 1))],
        services=[
            NativeService(
                "Library",
                comments=service_comments or Comments(),
                span=(6, 0, 10, 1),
                methods=[
                    NativeMethod(
                        "GetBook", comments=method_comments or Comments(), span=(7, 2, 7, 60)
                    ),
                    NativeMethod("GetShelf", span=(8, 2, 8, 60)),
                ],
            )
        ],
    )


class TestParseDirectives:
    def test_wrapped_directive(self) -> None:
        text = " (-- api-linter: core::0131::request-message-name=disabled --)"
        (directive,) = parse_directives(text)
        assert directive.prefix == RuleNamePrefix.parse(RULE)
        assert directive.enabled is False

    def test_no_space_before_wrapper_end(self) -> None:
        (directive,) = parse_directives("(-- api-linter: core=disabled--)")
        assert str(directive.prefix) == "core"

    def test_enabled_directive(self) -> None:
        (directive,) = parse_directives("api-linter: core::0131=enabled")
        assert directive.enabled is True

    def test_multiple_directives_in_one_block(self) -> None:
        text = (
            "(-- api-linter: core::0131=disabled\n"
            "    api-linter: core::0122::name-suffix=disabled --)"
        )
        prefixes = [str(d.prefix) for d in parse_directives(text)]
        assert prefixes == ["core::0131", "core::0122::name-suffix"]

    def test_malformed_directives_ignored(self) -> None:
        text = (
            "api-linter: core::0131::request-message-name\n"
            "api-linter: core::0131=off\n"
            "api-linter: Core::0131=disabled\n"
            "api-linter: core::::x=disabled\n"
            "api-linter:=disabled\n"
            "api-linter\n"
        )
        assert parse_directives(text) == []

    def test_plain_comment(self) -> None:
        assert parse_directives("Retrieves a book.") == []


class TestIsSuppressed:
    def test_method_directive_suppresses_only_that_rule_at_that_method(self) -> None:
        file = _library(method_comments=_disable(RULE))
        index = SuppressionIndex.build(file)
        get_book, get_shelf = file.services[0].methods
        assert index.is_suppressed(get_book, RULE) is True
        assert index.is_suppressed(get_book, OTHER) is False
        assert index.is_suppressed(get_shelf, RULE) is False

    def test_category_directive_suppresses_every_rule_in_category(self) -> None:
        file = _library(method_comments=_disable("core"))
        index = SuppressionIndex.build(file)
        get_book = file.services[0].methods[0]
        assert index.is_suppressed(get_book, RULE) is True
        assert index.is_suppressed(get_book, OTHER) is True
        assert index.is_suppressed(get_book, "cloud::2500::x") is False

    def test_parent_directive_cascades_to_children(self) -> None:
        file = _library(service_comments=_disable("core::0131"))
        index = SuppressionIndex.build(file)
        service = file.services[0]
        assert index.is_suppressed(service, RULE) is True
        assert all(index.is_suppressed(m, RULE) for m in service.methods)
        assert index.is_suppressed(file.messages[0], RULE) is False

    def test_file_directive_suppresses_everywhere(self) -> None:
        file = _library(file_comments=_disable("core::0131"))
        index = SuppressionIndex.build(file)
        assert index.is_suppressed(file.messages[0], RULE) is True
        assert index.is_suppressed(file.services[0].methods[1], RULE) is True
        assert index.is_suppressed(file, RULE) is True
        assert index.is_suppressed(None, RULE) is True

    def test_narrower_scope_reenables(self) -> None:
        file = _library(
            file_comments=_disable("core"),
            method_comments=Comments(trailing=f" api-linter: {RULE}=enabled\n"),
        )
        index = SuppressionIndex.build(file)
        get_book, get_shelf = file.services[0].methods
        assert index.is_suppressed(get_book, RULE) is False
        assert index.is_suppressed(get_book, OTHER) is True
        assert index.is_suppressed(get_shelf, RULE) is True

    def test_longest_prefix_wins_within_a_scope(self) -> None:
        comments = Comments(leading=f"api-linter: core=disabled\napi-linter: {RULE}=enabled\n")
        index = SuppressionIndex.build(_library(method_comments=comments))
        assert index.is_suppressed((6, 0, 2, 0), RULE) is False
        assert index.is_suppressed((6, 0, 2, 0), OTHER) is True

    def test_disable_wins_equal_length_tie(self) -> None:
        comments = Comments(leading=f"api-linter: {RULE}=enabled\napi-linter: {RULE}=disabled\n")
        index = SuppressionIndex.build(_library(method_comments=comments))
        assert index.is_suppressed((6, 0, 2, 0), RULE) is True

    def test_location_inside_declaration(self) -> None:
        index = SuppressionIndex.build(_library(method_comments=_disable(RULE)))
        # Input type token of GetBook.
        assert index.is_suppressed(SourceSpan((6, 0, 2, 0, 2), (7, 20, 7, 34)), RULE) is True
        assert index.is_suppressed(SourceSpan((6, 0, 2, 1, 2)), RULE) is False

    def test_detached_comment_counts(self) -> None:
        comments = Comments(leading_detached=(f" api-linter: {RULE}=disabled\n",))
        index = SuppressionIndex.build(_library(method_comments=comments))
        assert index.is_suppressed((6, 0, 2, 0), RULE) is True

    def test_no_directives(self) -> None:
        index = SuppressionIndex.build(_library())
        assert index.scopes == {}
        assert index.is_suppressed((6, 0, 2, 0), RULE) is False


class TestIgnoreCommentDisables:
    def test_bypass(self) -> None:
        file = _library(file_comments=_disable("all"), method_comments=_disable(RULE))
        index = build_index(file, ignore_comment_disables=True)
        assert index.is_suppressed(file.services[0].methods[0], RULE) is False
        assert index.is_suppressed(None, RULE) is False

    def test_default_builds_index(self) -> None:
        file = _library(method_comments=_disable(RULE))
        assert build_index(file).is_suppressed(file.services[0].methods[0], RULE) is True
