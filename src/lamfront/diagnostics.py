from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .errors import AstError
from .files import FileRegistry


class Severity(str, Enum):
    BUG = "bug"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"


class LabelStyle(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True, slots=True)
class Label:
    """A range [start, end) of character offsets in one file, optionally with its own message."""

    style: LabelStyle
    file_id: int
    start: int
    end: int
    message: str = ""

    @classmethod
    def primary(cls, file_id: int, start: int, end: int) -> "Label":
        return cls(LabelStyle.PRIMARY, file_id, start, end)

    @classmethod
    def secondary(cls, file_id: int, start: int, end: int) -> "Label":
        return cls(LabelStyle.SECONDARY, file_id, start, end)

    def with_message(self, message: str) -> "Label":
        return replace(self, message=message)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str = ""
    labels: tuple[Label, ...] = ()
    notes: tuple[str, ...] = ()

    @classmethod
    def error(cls) -> "Diagnostic":
        return cls(Severity.ERROR)

    def with_message(self, message: str) -> "Diagnostic":
        return replace(self, message=message)

    def with_labels(self, labels: list[Label] | tuple[Label, ...]) -> "Diagnostic":
        return replace(self, labels=self.labels + tuple(labels))

    def with_notes(self, notes: list[str] | tuple[str, ...]) -> "Diagnostic":
        return replace(self, notes=self.notes + tuple(notes))


def pretty_diagnostic(err: AstError, files: FileRegistry) -> Diagnostic:
    diag = Diagnostic.error().with_message(str(err))
    span = err.get_span()
    if span is None or span.file_id not in files:
        return diag
    if not files.get(span.file_id).contains(span.start, span.end):
        return diag
    return diag.with_labels([Label.primary(span.file_id, span.start, span.end)])
