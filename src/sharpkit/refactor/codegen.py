"""C# text generation for the constructor and member code actions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sharpkit.config import Settings
from sharpkit.csharp.scanner import ClassDefinition, PropertyDefinition


class MemberGenerationType(Enum):
    PRIVATE_FIELD = "private_field"
    READONLY_PROPERTY = "readonly_property"
    PROPERTY = "property"


MEMBER_TITLES = {
    MemberGenerationType.PRIVATE_FIELD: "Initialize field from parameter...",
    MemberGenerationType.READONLY_PROPERTY: "Initialize readonly property from parameter...",
    MemberGenerationType.PROPERTY: "Initialize property from parameter...",
}


@dataclass(frozen=True)
class MemberGenerationPlan:
    type: MemberGenerationType
    declaration: str
    assignment: str

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "declaration": self.declaration,
            "assignment": self.assignment,
        }


def camelize(name: str) -> str:
    """Turn a property name into a parameter name.

    Lowercases the first letter only (``FirstName`` -> ``firstName``); an
    all-digit token becomes the empty string.
    """
    name = name.strip()
    if not name or name.isdigit():
        return ""
    return name[0].lower() + name[1:]


def capitalize(name: str) -> str:
    """Uppercase the first character, leave the rest untouched."""
    if not name:
        return name
    return name[0].upper() + name[1:]


def _self_prefix(settings: Settings) -> str:
    return "this." if settings.use_this_for_ctor_assignments else ""


def generate_member(
    member_type: MemberGenerationType,
    parameter_type: str,
    parameter_name: str,
    settings: Settings,
    indent: str | None = None,
    eol: str = "\n",
    unit: str | None = None,
) -> MemberGenerationPlan:
    """Build the declaration/assignment pair for one constructor parameter.

    *indent* is the indentation of the constructor signature; the assignment
    goes one *unit* deeper.  Without it the member sits two units in
    (class inside a namespace block).  *unit* defaults to ``tab_size`` spaces.
    """
    step = unit if unit is not None else settings.indent(1)
    member_indent = indent if indent is not None else step * 2
    body_indent = member_indent + step
    this = _self_prefix(settings)

    if member_type is MemberGenerationType.PRIVATE_FIELD:
        member = f"{settings.private_member_prefix}{parameter_name}"
        declaration = f"private readonly {parameter_type} {member};"
    elif member_type is MemberGenerationType.READONLY_PROPERTY:
        member = capitalize(parameter_name)
        declaration = f"public {parameter_type} {member} {{ get; }}"
    elif member_type is MemberGenerationType.PROPERTY:
        member = capitalize(parameter_name)
        declaration = f"public {parameter_type} {member} {{ get; set; }}"
    else:
        raise ValueError(f"unsupported member type: {member_type!r}")

    return MemberGenerationPlan(
        type=member_type,
        declaration=f"{member_indent}{declaration}{eol}",
        assignment=f"{body_indent}{this}{member} = {parameter_name};{eol}",
    )


def constructor_parameters(properties: list[PropertyDefinition]) -> list[str]:
    return [f"{p.type} {camelize(p.name)}" for p in properties]


def constructor_assignments(properties: list[PropertyDefinition], settings: Settings) -> list[str]:
    this = _self_prefix(settings)
    return [f"{this}{p.name} = {camelize(p.name)};" for p in properties]


def generate_constructor(
    owner: ClassDefinition,
    properties: list[PropertyDefinition],
    settings: Settings,
    indent: str | None = None,
    eol: str = "\n",
    unit: str | None = None,
) -> str:
    """Render a constructor assigning every property from a parameter.

    The text ends with a blank line so the constructor stays separated
    from the property it is inserted above.
    """
    step = unit if unit is not None else settings.indent(1)
    outer = indent if indent is not None else step * 2
    inner = outer + step
    lines = [
        f"{outer}{owner.modifier} {owner.name}({', '.join(constructor_parameters(properties))})",
        f"{outer}{{",
    ]
    lines.extend(f"{inner}{assignment}" for assignment in constructor_assignments(properties, settings))
    lines.append(f"{outer}}}")
    lines.append("")
    return eol.join(lines) + eol
