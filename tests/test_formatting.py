"""Tests for the brace-depth re-indenter."""

from __future__ import annotations

import pytest

from sharpkit.document import TextDocument, apply_edits
from sharpkit.refactor.formatting import BraceIndentFormatter, strip_code


def _format(text, tab_size=4):
    doc = TextDocument(text)
    return apply_edits(doc, BraceIndentFormatter().format_document(doc, tab_size))


class TestStripCode:
    @pytest.mark.parametrize("line, expected", [
        ('var s = "{";', 'var s = "";'),
        ("var c = '}';", "var c = '';"),
        ("int x; // { comment", "int x; "),
        ("a /* { */ b", "a  b"),
        ('var p = "a\\"{";', 'var p = "";'),
    ])
    def test_single_line(self, line, expected):
        assert strip_code(line, None) == (expected, None)

    def test_block_comment_spans_lines(self):
        code, state = strip_code("x /* {", None)
        assert (code, state) == ("x ", "block")
        code, state = strip_code("} */ y", state)
        assert (code, state) == (" y", None)

    def test_verbatim_string_spans_lines(self):
        code, state = strip_code('var s = @"{', None)
        assert state == "verbatim"
        code, state = strip_code('}"" still" ;', state)
        assert (code, state) == ('"" ;', None)

    def test_raw_string(self):
        code, state = strip_code('var s = """', None)
        assert state == "raw"
        code, state = strip_code('  { """;', state)
        assert (code, state) == ('"";', None)


class TestBraceIndentFormatter:
    def test_well_formatted_code_is_untouched(self):
        text = (
            "namespace Shop\n"
            "{\n"
            "    public class Customer\n"
            "    {\n"
            "        private readonly string name;\n"
            "\n"
            "        public Customer(string name)\n"
            "        {\n"
            "            this.name = name;\n"
            "        }\n"
            "    }\n"
            "}\n"
        )
        doc = TextDocument(text)
        assert BraceIndentFormatter().format_document(doc, 4) == []

    def test_reindents_by_depth(self):
        text = (
            "public class A\n"
            "{\n"
            "public int X { get; }\n"
            "        public A()\n"
            "    {\n"
            "  }\n"
            "}\n"
        )
        assert _format(text) == (
            "public class A\n"
            "{\n"
            "    public int X { get; }\n"
            "    public A()\n"
            "    {\n"
            "    }\n"
            "}\n"
        )

    def test_only_changed_lines_get_edits(self):
        text = "public class A\n{\n  int x;\n    int y;\n}\n"
        edits = BraceIndentFormatter().format_document(TextDocument(text), 4)
        assert [e.range.start.line for e in edits] == [2]

    def test_tab_size(self):
        assert _format("class A\n{\nint x;\n}\n", tab_size=2) == "class A\n{\n  int x;\n}\n"

    def test_tab_indented_document_stays_tabbed(self):
        text = "class A\n{\n\tint x;\n\tint y;\n        int z;\n}\n"
        assert _format(text) == "class A\n{\n\tint x;\n\tint y;\n\tint z;\n}\n"

    def test_braces_in_strings_and_comments_ignored(self):
        text = (
            "public class A\n"
            "{\n"
            '    string s = "{";\n'
            "    // }\n"
            "    /* { */\n"
            "    int x;\n"
            "}\n"
        )
        assert _format(text) == text

    def test_switch_labels(self):
        text = (
            "void M()\n"
            "{\n"
            "    switch (x)\n"
            "    {\n"
            "        case 1:\n"
            "            Foo();\n"
            "            break;\n"
            "        default:\n"
            "            break;\n"
            "    }\n"
            "}\n"
        )
        assert _format(text) == text

    def test_continuation_keeps_relative_offset(self):
        text = (
            "public class A\n"
            "{\n"
            "        public A(int a,\n"
            "                 int b)\n"
            "        {\n"
            "        }\n"
            "}\n"
        )
        assert _format(text) == (
            "public class A\n"
            "{\n"
            "    public A(int a,\n"
            "             int b)\n"
            "    {\n"
            "    }\n"
            "}\n"
        )

    def test_fluent_chain(self):
        text = (
            "class A\n"
            "{\n"
            "    void M()\n"
            "    {\n"
            "        var q = items\n"
            "            .Where(i => i.Ok)\n"
            "            .ToList();\n"
            "    }\n"
            "}\n"
        )
        assert _format(text) == text

    def test_multiline_comment_body_untouched(self):
        text = (
            "class A\n"
            "{\n"
            "    /*\n"
            "  keep me\n"
            "    */\n"
            "    int x;\n"
            "}\n"
        )
        assert _format(text) == text

    def test_preprocessor_lines_untouched(self):
        text = "class A\n{\n#if DEBUG\n    int x;\n#endif\n}\n"
        assert _format(text) == text

    def test_crlf(self):
        text = "class A\r\n{\r\nint x;\r\n}\r\n"
        assert _format(text) == "class A\r\n{\r\n    int x;\r\n}\r\n"
