"""Execute code actions: turn a plan into edits and commit them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sharpkit.document import Position, TextDocument, TextEdit
from sharpkit.exit_codes import ApplyError
from sharpkit.host import EditRejectedError, HostContext
from sharpkit.refactor.actions import CodeAction, ConstructorFromPropertiesPlan, InitializeMemberPlan

log = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Outcome of executing one code action."""

    command: str
    edits: list[TextEdit] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    format_edits: list[TextEdit] = field(default_factory=list)
    document: TextDocument | None = None

    @property
    def changed(self) -> bool:
        return bool(self.edits or self.format_edits)

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "changed": self.changed,
            "edits": [e.to_dict() for e in self.edits],
            "skipped": self.skipped,
            "format_edits": len(self.format_edits),
        }


def _already_present(document: TextDocument, fragment: str) -> bool:
    # Whole-document check: a matching fragment in another class also counts.
    return fragment.strip() in document.text


def initialize_member_edits(document: TextDocument, plan: InitializeMemberPlan) -> tuple[list[TextEdit], list[str]]:
    """Build the declaration and assignment insertions, skipping duplicates.

    Returns ``(edits, skipped_fragments)``.
    """
    edits, skipped = [], []
    candidates = [
        (plan.constructor_start, plan.member.declaration),
        (plan.body_start, plan.member.assignment),
    ]
    for position, fragment in candidates:
        if _already_present(document, fragment):
            skipped.append(fragment.strip())
            continue
        edits.append(TextEdit.insert(position, fragment))
    return edits, skipped


def constructor_edits(plan: ConstructorFromPropertiesPlan) -> list[TextEdit]:
    return [TextEdit.insert(Position(plan.insertion_line, 0), plan.text)]


def execute_initialize_member(action: CodeAction, context: HostContext) -> ApplyResult:
    plan = action.plan
    if not isinstance(plan, InitializeMemberPlan):
        raise TypeError(f"{action.command} expects an InitializeMemberPlan")
    edits, skipped = initialize_member_edits(action.document, plan)
    for fragment in skipped:
        log.debug("skipping existing fragment %r", fragment)
    if skipped and not edits:
        context.info(f"{plan.parameter_name} is already initialized")
    result = ApplyResult(action.command, edits=edits, skipped=skipped, document=action.document)
    return commit(result, context)


def execute_ctor_from_properties(action: CodeAction, context: HostContext) -> ApplyResult:
    plan = action.plan
    if not isinstance(plan, ConstructorFromPropertiesPlan):
        raise TypeError(f"{action.command} expects a ConstructorFromPropertiesPlan")
    result = ApplyResult(action.command, edits=constructor_edits(plan), document=action.document)
    return commit(result, context)


def commit(result: ApplyResult, context: HostContext) -> ApplyResult:
    """Apply the result's edits through the sink, then optionally reformat.

    A rejected batch is reported through the context and raised as
    ApplyError; whatever the sink already committed stays committed.
    """
    if not result.edits:
        return result

    try:
        updated = context.sink.apply(result.document, result.edits)
        result.document = updated
        if context.settings.reformat_after_change and context.formatter is not None:
            format_edits = context.formatter.format_document(updated, context.settings.tab_size)
            if format_edits:
                result.document = context.sink.apply(updated, format_edits)
                result.format_edits = format_edits
    except EditRejectedError as exc:
        message = f"Could not apply '{result.command}': {exc}"
        context.error(message)
        raise ApplyError(message) from exc

    log.info("applied %d edit(s) for %s", len(result.edits), result.command)
    return result
