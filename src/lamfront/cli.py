from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import fields, is_dataclass

from .api import parse_files
from .ast import Node
from .diagnostics import pretty_diagnostic
from .errors import AstError
from .files import FileRegistry
from .render import emit


def _to_jsonable(obj):
    if is_dataclass(obj):
        out = {f.name: _to_jsonable(getattr(obj, f.name)) for f in fields(obj)}
        if isinstance(obj, Node):
            out["node"] = type(obj).__name__
        return out
    if isinstance(obj, (tuple, list)):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    return obj


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="lamfront", description="Parse and check lam source files")
    ap.add_argument("paths", nargs="+", help="Source files, checked in order")
    ap.add_argument("--json", action="store_true", help="Print parsed ASTs as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    files = FileRegistry()
    try:
        res = parse_files(args.paths, files=files)
    except AstError as err:
        sys.stderr.write(emit(pretty_diagnostic(err, files), files))
        return 1
    except OSError as err:
        sys.stderr.write(f"error: {err}\n")
        return 2

    if args.json:
        payload = {files.name(fid): _to_jsonable(m) for fid, m in res.modules.items()}
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        for fid, m in res.modules.items():
            print(f"{files.name(fid)}: {len(m.definitions)} definitions")
    return 0
