from __future__ import annotations

from .api import ParseResult, check_source, parse_file, parse_files, parse_source
from .ast import ExprKind
from .combinators import at, attach_span, expect_kind, or_missing, spanned
from .diagnostics import Diagnostic, Label, LabelStyle, Severity, pretty_diagnostic
from .errors import (
    AstError,
    InvalidDefinition,
    MissingNode,
    ParseError,
    WrongExprType,
    from_parse_error,
    parse_failure_span,
)
from .files import FileRegistry
from .render import emit
from .spans import Span

__all__ = [
    "AstError",
    "Diagnostic",
    "ExprKind",
    "FileRegistry",
    "InvalidDefinition",
    "Label",
    "LabelStyle",
    "MissingNode",
    "ParseError",
    "ParseResult",
    "Severity",
    "Span",
    "WrongExprType",
    "at",
    "attach_span",
    "check_source",
    "emit",
    "expect_kind",
    "from_parse_error",
    "or_missing",
    "parse_failure_span",
    "parse_file",
    "parse_files",
    "parse_source",
    "pretty_diagnostic",
    "spanned",
]
