"""Plain-text emission of diagnostics.

Example::

    error: Expected a expression, but got nothing
     --> main.lam:1:1
      |
    1 | x = ;
      | ^^^^^
"""

from __future__ import annotations

from .diagnostics import Diagnostic, Label, LabelStyle
from .files import FileRegistry


def _marker(label: Label) -> str:
    return "^" if label.style is LabelStyle.PRIMARY else "-"


def _render_label(label: Label, files: FileRegistry) -> list[str]:
    if label.file_id not in files:
        return []
    f = files.get(label.file_id)
    if not f.contains(label.start, label.end):
        return []

    first = f.location(label.start)
    # Last character actually covered; zero-width labels point at their start.
    last = f.location(label.end - 1) if label.end > label.start else first

    gutter = len(str(last.line))
    pad = " " * gutter
    mark = _marker(label)
    suffix = f" {label.message}" if label.message else ""

    out = [f"{pad}--> {f.name}:{first.line}:{first.column}", f"{pad} |"]
    first_text = f.line_text(first.line)
    out.append(f"{first.line:>{gutter}} | {first_text}")

    if first.line == last.line:
        width = 1
        if label.end > label.start:
            # A range ending on the newline stops at the end of the line.
            width = max(1, min(last.column, len(first_text)) - first.column + 1)
        out.append(f"{pad} | " + " " * (first.column - 1) + mark * width + suffix)
        return out

    out.append(f"{pad} | " + " " * (first.column - 1) + mark * max(1, len(first_text) - first.column + 1))
    if last.line > first.line + 1:
        out.append(f"{pad} | ...")
    out.append(f"{last.line:>{gutter}} | {f.line_text(last.line)}")
    out.append(f"{pad} | " + mark * last.column + suffix)
    return out


def emit(diagnostic: Diagnostic, files: FileRegistry) -> str:
    lines = [f"{diagnostic.severity.value}: {diagnostic.message}"]
    for label in diagnostic.labels:
        lines.extend(_render_label(label, files))
    for note in diagnostic.notes:
        lines.append(f"  = note: {note}")
    return "\n".join(lines) + "\n"
