from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete source position.

    Offsets are 0-based; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single registered file."""

    start: int
    end: int
    file_id: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def join(self, other: Span) -> Span:
        """Cover both spans. Both must be in the same file."""
        if other.file_id != self.file_id:
            raise ValueError(f"cannot join spans from files {self.file_id} and {other.file_id}")
        return Span(min(self.start, other.start), max(self.end, other.end), self.file_id)
