"""Tests for member and constructor text generation."""

from __future__ import annotations

import pytest

from sharpkit.config import Settings
from sharpkit.csharp.scanner import ClassDefinition, PropertyDefinition
from sharpkit.refactor.codegen import (
    MemberGenerationType,
    camelize,
    capitalize,
    constructor_parameters,
    generate_constructor,
    generate_member,
)


def _prop(owner, name, prop_type="int", line=0):
    return PropertyDefinition(owner, "public", prop_type, name, line, f"public {prop_type} {name} {{ get; }}")


class TestNaming:
    @pytest.mark.parametrize("raw, expected", [
        ("Name", "name"),
        ("name", "name"),
        ("FirstName", "firstName"),
        ("  Age ", "age"),
        ("", ""),
        ("123", ""),
    ])
    def test_camelize(self, raw, expected):
        assert camelize(raw) == expected

    def test_capitalize(self):
        assert capitalize("age") == "Age"
        assert capitalize("Age") == "Age"
        assert capitalize("") == ""


class TestGenerateMember:
    def test_private_field_defaults(self):
        plan = generate_member(MemberGenerationType.PRIVATE_FIELD, "string", "name", Settings())
        assert plan.declaration == "        private readonly string name;\n"
        assert plan.assignment == "            this.name = name;\n"

    def test_private_field_prefix_without_this(self):
        settings = Settings(use_this_for_ctor_assignments=False, private_member_prefix="_")
        plan = generate_member(MemberGenerationType.PRIVATE_FIELD, "ILogger", "logger", settings)
        assert plan.declaration.strip() == "private readonly ILogger _logger;"
        assert plan.assignment.strip() == "_logger = logger;"

    def test_readonly_property(self):
        plan = generate_member(MemberGenerationType.READONLY_PROPERTY, "int", "age", Settings())
        assert plan.declaration.strip() == "public int Age { get; }"
        assert plan.assignment.strip() == "this.Age = age;"

    def test_property(self):
        plan = generate_member(MemberGenerationType.PROPERTY, "int", "age", Settings())
        assert plan.declaration.strip() == "public int Age { get; set; }"

    def test_explicit_indent_and_eol(self):
        plan = generate_member(
            MemberGenerationType.PRIVATE_FIELD, "int", "x", Settings(tab_size=2), indent="  ", eol="\r\n",
        )
        assert plan.declaration == "  private readonly int x;\r\n"
        assert plan.assignment == "    this.x = x;\r\n"

    def test_tab_size_drives_default_indent(self):
        plan = generate_member(MemberGenerationType.PROPERTY, "int", "x", Settings(tab_size=2))
        assert plan.declaration.startswith("    public")
        assert plan.assignment.startswith("      this.")


class TestGenerateConstructor:
    def test_point(self):
        owner = ClassDefinition(0, "Point", "public", "public class Point")
        props = [_prop(owner, "X", line=2), _prop(owner, "Y", line=3)]
        text = generate_constructor(owner, props, Settings(), indent="    ")
        assert text == (
            "    public Point(int x, int y)\n"
            "    {\n"
            "        this.X = x;\n"
            "        this.Y = y;\n"
            "    }\n"
            "\n"
        )

    def test_parameters_follow_property_order(self):
        owner = ClassDefinition(0, "Person", "internal", "internal class Person")
        props = [
            _prop(owner, "FirstName", "string", 2),
            _prop(owner, "LastName", "string", 3),
            _prop(owner, "Age", "int", 4),
        ]
        assert constructor_parameters(props) == ["string firstName", "string lastName", "int age"]
        text = generate_constructor(owner, props, Settings(use_this_for_ctor_assignments=False))
        assert text.splitlines()[0].strip() == "internal Person(string firstName, string lastName, int age)"
        assignments = [line.strip() for line in text.splitlines()[2:5]]
        assert assignments == ["FirstName = firstName;", "LastName = lastName;", "Age = age;"]
