"""Value objects shared by the plain-text extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Marker(str, Enum):
    """Role of a single message line."""

    EMPTY = "e"
    QUOTE = "m"
    SPLITTER = "s"
    FORWARD = "f"
    TEXT = "t"


@dataclass(frozen=True)
class SplitterMatch:
    """A run of lines recognised as a quotation splitter header."""

    start: int
    lines: tuple[str, ...]

    @property
    def end(self) -> int:
        return self.start + len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Resolution:
    """Lines kept after quotation resolution.

    ``quotation`` is the ``(start, end)`` line range that was dropped, or
    ``None`` when the message was returned unchanged.
    """

    lines: list[str]
    quotation: tuple[int, int] | None = None
    rule: str | None = None

    @property
    def stripped(self) -> bool:
        return self.quotation is not None
