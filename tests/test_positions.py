"""Tests for the class/constructor line-scan resolvers."""

from __future__ import annotations

from sharpkit.csharp.positions import (
    find_constructor_body_start,
    find_constructor_start,
    find_enclosing_class,
)
from sharpkit.document import Position, TextDocument
from tests.conftest import CUSTOMER_CS, POINT_CS


class TestFindEnclosingClass:
    def test_class_on_first_line(self):
        owner = find_enclosing_class(TextDocument(POINT_CS), 3)
        assert owner.name == "Point"
        assert owner.start_line == 0

    def test_cursor_on_declaration_line(self):
        assert find_enclosing_class(TextDocument(POINT_CS), 0).name == "Point"

    def test_nearest_declaration_above_wins(self):
        doc = TextDocument(
            "public class Outer\n"
            "{\n"
            "    private class Inner\n"
            "    {\n"
            "    }\n"
            "    public int X { get; }\n"
            "}\n"
        )
        assert find_enclosing_class(doc, 5).name == "Inner"

    def test_line_past_the_end_is_clamped(self):
        assert find_enclosing_class(TextDocument(POINT_CS), 99).name == "Point"

    def test_no_class(self):
        assert find_enclosing_class(TextDocument("namespace A\n{\n}\n"), 2) is None


class TestConstructorBodyStart:
    def test_brace_on_next_line(self):
        doc = TextDocument(CUSTOMER_CS)
        assert find_constructor_body_start(doc, Position(5, 32)) == Position(7, 0)

    def test_brace_on_signature_line(self):
        doc = TextDocument("public class A\n{\n    public A(int x) {\n    }\n}\n")
        assert find_constructor_body_start(doc, Position(2, 18)) == Position(3, 0)

    def test_brace_too_far(self):
        doc = TextDocument("public A(int x)\n\n\n\n\n\n{\n}\n")
        assert find_constructor_body_start(doc, Position(0, 13)) is None

    def test_near_end_of_document(self):
        doc = TextDocument("public A(int x)")
        assert find_constructor_body_start(doc, Position(0, 13)) is None


class TestConstructorStart:
    def test_blank_line_above_signature(self):
        doc = TextDocument(CUSTOMER_CS)
        assert find_constructor_start(doc, Position(5, 32)) == Position(4, 0)

    def test_no_blank_line_falls_back_to_cursor_line(self):
        doc = TextDocument(
            "public class A\n"
            "{\n"
            "    public A(int x)\n"
            "    {\n"
            "    }\n"
            "}\n"
        )
        assert find_constructor_start(doc, Position(2, 14)) == Position(2, 0)

    def test_blank_line_above_class_is_ignored(self):
        doc = TextDocument(
            "\n"
            "public class A\n"
            "{\n"
            "    public A(int x)\n"
            "    {\n"
            "    }\n"
            "}\n"
        )
        assert find_constructor_start(doc, Position(3, 14)) == Position(3, 0)

    def test_without_class(self):
        doc = TextDocument("\npublic A(int x)\n{\n}\n")
        assert find_constructor_start(doc, Position(1, 10)) == Position(1, 0)
