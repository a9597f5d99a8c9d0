"""Code action synthesis: what can be offered at a cursor position.

Nothing here edits text.  Each ``CodeAction`` carries a title, the id of
the command that executes it, and the plan that command consumes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sharpkit.config import Settings
from sharpkit.csharp.positions import (
    find_constructor_body_start,
    find_constructor_start,
    find_enclosing_class,
)
from sharpkit.csharp.scanner import (
    ClassDefinition,
    PropertyDefinition,
    find_parameter_type,
    match_class,
    match_readonly_property,
    match_signature,
)
from sharpkit.document import Position, Range, TextDocument
from sharpkit.refactor.codegen import (
    MEMBER_TITLES,
    MemberGenerationPlan,
    MemberGenerationType,
    constructor_parameters,
    generate_constructor,
    generate_member,
)

log = logging.getLogger(__name__)

COMMAND_CTOR_FROM_PROPERTIES = "sharpkit.ctorFromProperties"
COMMAND_INITIALIZE_MEMBER = "sharpkit.initializeMemberFromCtor"

CTOR_FROM_PROPERTIES_TITLE = "Initialize ctor from properties..."

# Lines above/below the cursor searched for a constructor signature.
_SIGNATURE_WINDOW = 2


@dataclass(frozen=True)
class ConstructorFromPropertiesPlan:
    owner: ClassDefinition
    properties: list[PropertyDefinition]
    insertion_line: int
    text: str

    def to_dict(self) -> dict:
        return {
            "class": self.owner.name,
            "parameters": constructor_parameters(self.properties),
            "properties": [p.name for p in self.properties],
            "insertion_line": self.insertion_line,
            "text": self.text,
        }


@dataclass(frozen=True)
class InitializeMemberPlan:
    parameter_type: str
    parameter_name: str
    member: MemberGenerationPlan
    body_start: Position
    constructor_start: Position

    def to_dict(self) -> dict:
        return {
            "parameter_type": self.parameter_type,
            "parameter_name": self.parameter_name,
            "body_start": self.body_start.to_dict(),
            "constructor_start": self.constructor_start.to_dict(),
            **self.member.to_dict(),
        }


@dataclass(frozen=True)
class CodeAction:
    title: str
    command: str
    plan: ConstructorFromPropertiesPlan | InitializeMemberPlan
    document: TextDocument = field(compare=False, repr=False)
    kind: str = "refactor"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "command": self.command,
            "kind": self.kind,
            "arguments": self.plan.to_dict(),
        }


def provide_code_actions(document: TextDocument, position: Position,
                         settings: Settings | None = None) -> list[CodeAction]:
    """Return every code action available at *position*.

    Member initializers come first (field, readonly property, property),
    followed by the constructor-from-properties action.
    """
    settings = settings or Settings()
    actions = initialize_member_actions(document, position, settings)
    ctor = constructor_from_properties_action(document, position, settings)
    if ctor:
        actions.append(ctor)
    log.debug("%d code action(s) at %d:%d", len(actions), position.line, position.character)
    return actions


# ── constructor from properties ──────────────────────────────────────────────


def collect_class_properties(document: TextDocument, owner: ClassDefinition) -> list[PropertyDefinition]:
    """Readonly-style properties whose nearest class above is *owner*.

    Classes are matched by name, so two classes sharing a name in one file
    pool their properties.
    """
    properties = []
    current: ClassDefinition | None = None
    for line_no, line_text in enumerate(document.lines):
        current = match_class(line_text, line_no) or current
        found = match_readonly_property(line_text)
        if not found or current is None or current.name != owner.name:
            continue
        modifier, prop_type, name, statement = found
        properties.append(PropertyDefinition(
            owner=current,
            modifier=modifier,
            type=prop_type,
            name=name,
            line_number=line_no,
            statement=statement,
        ))
    return sorted(properties, key=lambda p: p.line_number)


def constructor_from_properties_action(document: TextDocument, position: Position,
                                       settings: Settings) -> CodeAction | None:
    owner = find_enclosing_class(document, position.line)
    if not owner:
        return None

    properties = collect_class_properties(document, owner)
    if not properties:
        return None

    insertion_line = properties[0].line_number
    text = generate_constructor(
        owner,
        properties,
        settings,
        indent=document.indentation_of(insertion_line),
        eol=document.eol,
        unit=document.indent_unit(settings.tab_size),
    )
    plan = ConstructorFromPropertiesPlan(
        owner=owner,
        properties=properties,
        insertion_line=insertion_line,
        text=text,
    )
    return CodeAction(CTOR_FROM_PROPERTIES_TITLE, COMMAND_CTOR_FROM_PROPERTIES, plan, document)


# ── initialize member from constructor parameter ─────────────────────────────


def _selected_parameter(document: TextDocument, position: Position) -> tuple[str, str, int] | None:
    """Resolve ``(type, name, signature_line)`` for the word under the cursor."""
    word_range = document.word_range_at(position)
    if not word_range:
        return None
    selected = document.get_text(word_range)

    window_start = max(position.line - _SIGNATURE_WINDOW, 0)
    window = document.get_text(Range(
        Position(window_start, 0),
        Position(position.line + _SIGNATURE_WINDOW, 0),
    ))
    signature = match_signature(window)
    if not signature:
        return None

    parameter_type = find_parameter_type(signature.parameters, selected)
    if not parameter_type:
        return None
    signature_line = window_start + window.count("\n", 0, signature.offset)
    return parameter_type, selected, signature_line


def initialize_member_actions(document: TextDocument, position: Position,
                              settings: Settings) -> list[CodeAction]:
    resolved = _selected_parameter(document, position)
    if not resolved:
        return []
    parameter_type, parameter_name, signature_line = resolved

    body_start = find_constructor_body_start(document, position)
    if not body_start:
        return []
    constructor_start = find_constructor_start(document, position)

    actions = []
    for member_type in (
        MemberGenerationType.PRIVATE_FIELD,
        MemberGenerationType.READONLY_PROPERTY,
        MemberGenerationType.PROPERTY,
    ):
        member = generate_member(
            member_type,
            parameter_type,
            parameter_name,
            settings,
            indent=document.indentation_of(signature_line),
            eol=document.eol,
            unit=document.indent_unit(settings.tab_size),
        )
        plan = InitializeMemberPlan(
            parameter_type=parameter_type,
            parameter_name=parameter_name,
            member=member,
            body_start=body_start,
            constructor_start=constructor_start,
        )
        actions.append(CodeAction(MEMBER_TITLES[member_type], COMMAND_INITIALIZE_MEMBER, plan, document))
    return actions
