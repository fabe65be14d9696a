from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .spans import Position


class UnknownFileError(KeyError):
    pass


def _line_starts(source: str) -> tuple[int, ...]:
    starts = [0]
    for i, ch in enumerate(source):
        if ch == "\n":
            starts.append(i + 1)
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class SourceFile:
    name: str
    source: str
    line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_starts", _line_starts(self.source))

    def contains(self, start: int, end: int) -> bool:
        return 0 <= start <= end <= len(self.source)

    def line_index(self, offset: int) -> int:
        """0-based line holding ``offset``. The end-of-file offset belongs to the last line."""
        if not 0 <= offset <= len(self.source):
            raise IndexError(f"offset {offset} outside {self.name!r} (length {len(self.source)})")
        return bisect_right(self.line_starts, offset) - 1

    def location(self, offset: int) -> Position:
        idx = self.line_index(offset)
        return Position(offset=offset, line=idx + 1, column=offset - self.line_starts[idx] + 1)

    def line_text(self, line: int) -> str:
        """Text of 1-based ``line`` without its newline."""
        start = self.line_starts[line - 1]
        if line < len(self.line_starts):
            end = self.line_starts[line] - 1
        else:
            end = len(self.source)
        return self.source[start:end].rstrip("\r")


@dataclass(slots=True)
class FileRegistry:
    """Maps a ``file_id`` to a file's display name and text."""

    _files: list[SourceFile] = field(default_factory=list)

    def add(self, name: str, source: str) -> int:
        self._files.append(SourceFile(name=name, source=source))
        return len(self._files) - 1

    def get(self, file_id: int) -> SourceFile:
        if not 0 <= file_id < len(self._files):
            raise UnknownFileError(file_id)
        return self._files[file_id]

    def name(self, file_id: int) -> str:
        return self.get(file_id).name

    def source(self, file_id: int) -> str:
        return self.get(file_id).source

    def __contains__(self, file_id: object) -> bool:
        return isinstance(file_id, int) and 0 <= file_id < len(self._files)

    def __len__(self) -> int:
        return len(self._files)
