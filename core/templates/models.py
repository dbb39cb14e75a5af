"""Data models for line tokenization and template records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

SegmentKind = Literal["literal", "integer", "float"]
Number = int | float

LITERAL: SegmentKind = "literal"
INTEGER: SegmentKind = "integer"
FLOAT: SegmentKind = "float"


@dataclass(frozen=True)
class Segment:
    """One literal or numeric token of a line.

    ``text`` is the exact source span. Numeric segments may start with the
    whitespace that preceded the number.
    """

    kind: SegmentKind
    text: str
    value: Number | None = None

    @property
    def is_numeric(self) -> bool:
        return self.kind != LITERAL

    @property
    def leading_space(self) -> bool:
        return bool(self.text) and self.text[0].isspace()


@dataclass(frozen=True)
class MalformedNumber:
    """A numeric run the number parser rejected."""

    kind: SegmentKind
    text: str
    start: int
    reason: str


@dataclass
class TokenizedLine:
    """Tokenizer output for one line."""

    text: str
    segments: list[Segment] = field(default_factory=list)
    malformed: list[MalformedNumber] = field(default_factory=list)

    @property
    def numeric_count(self) -> int:
        return sum(1 for segment in self.segments if segment.is_numeric)
