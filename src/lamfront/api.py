from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from .ast import Module
from .diagnostics import Diagnostic, pretty_diagnostic
from .errors import AstError, from_parse_error
from .failures import ParseFailure
from .files import FileRegistry
from .lexer import iter_tokens
from .parser import Parser
from .spans import Span
from .syntax import build_lam_grammar


logger = logging.getLogger(__name__)

_PARSER: Parser | None = None


def _get_parser() -> Parser:
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser.for_grammar(build_lam_grammar())
    return _PARSER


@dataclass(frozen=True, slots=True)
class ParseResult:
    files: FileRegistry
    modules: dict[int, Module] = field(default_factory=dict)  # file_id -> AST


def parse_source(src: str, *, file_id: int = 0) -> Module:
    """Parse lam source registered as ``file_id``.

    Raises :class:`AstError` on the first failure.
    """
    try:
        out = _get_parser().parse(iter_tokens(src, file_id=file_id))
    except ParseFailure as failure:
        logger.debug("parse failure in file %d: %s", file_id, failure)
        raise from_parse_error(file_id, failure) from failure
    if not isinstance(out, Module):
        raise RuntimeError(f"parser returned unexpected value: {type(out)!r}")
    return replace(out, span=Span(0, len(src), file_id))


def parse_file(path: str | Path, files: FileRegistry) -> Module:
    p = Path(path).expanduser()
    src = p.read_text(encoding="utf-8")
    file_id = files.add(str(p), src)
    logger.debug("registered %s as file %d", p, file_id)
    return parse_source(src, file_id=file_id)


def parse_files(paths: list[str | Path], *, files: FileRegistry | None = None) -> ParseResult:
    """Parse every path in order, stopping at the first failure.

    Pass ``files`` to keep access to the registered sources when an
    :class:`AstError` escapes.
    """
    res = ParseResult(files=files if files is not None else FileRegistry())
    for p in paths:
        module = parse_file(p, res.files)
        res.modules[len(res.files) - 1] = module
    return res


def check_source(src: str, *, name: str = "<memory>", files: FileRegistry | None = None) -> Diagnostic | None:
    """Parse ``src`` and return its diagnostic, or ``None`` when it is well formed."""
    files = files if files is not None else FileRegistry()
    file_id = files.add(name, src)
    try:
        parse_source(src, file_id=file_id)
    except AstError as err:
        return pretty_diagnostic(err, files)
    return None
