"""Template registry grouping lines by their literal structure."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from core.stats.values import ValueStore
from core.templates.models import LITERAL, Number, Segment, SegmentKind, TokenizedLine
from core.utils.errors import PatternMismatchError

# One entry per segment: literal text, or None for any numeric segment.
TemplateKey = tuple[str | None, ...]


def template_key(segments: list[Segment]) -> TemplateKey:
    """Build the structural key of a segment sequence.

    Numeric values never take part; literal text and the literal/numeric
    category of each position do.
    """

    return tuple(None if segment.is_numeric else segment.text for segment in segments)


@dataclass
class TemplateRecord:
    """One template and every occurrence observed for it."""

    key: TemplateKey
    segments: list[Segment]
    field_positions: list[int]
    store: ValueStore
    count: int = 0
    promoted_positions: set[int] = field(default_factory=set)

    @classmethod
    def from_line(cls, tokenized: TokenizedLine) -> TemplateRecord:
        segments = list(tokenized.segments)
        positions = [index for index, segment in enumerate(segments) if segment.is_numeric]
        kinds = [segments[index].kind for index in positions]
        return cls(
            key=template_key(segments),
            segments=segments,
            field_positions=positions,
            store=ValueStore(kinds),
        )

    def add_occurrence(self, tokenized: TokenizedLine) -> None:
        """Append the numeric values of one matching line."""

        if len(tokenized.segments) != len(self.segments):
            raise PatternMismatchError(
                "Segment count differs from matched template",
                key=self.key,
            )

        entries: list[tuple[SegmentKind, Number]] = []
        for position in self.field_positions:
            incoming = tokenized.segments[position]
            if not incoming.is_numeric or incoming.value is None:
                raise PatternMismatchError(
                    f"Non-numeric segment at numeric position {position}",
                    key=self.key,
                    position=position,
                )
            entries.append((incoming.kind, incoming.value))

        self.store.append(entries)
        self.count += 1

    def active_columns(self) -> list[int]:
        """Column indexes whose segment is still numeric."""

        return [
            column
            for column, position in enumerate(self.field_positions)
            if self.segments[position].kind != LITERAL
        ]

    def has_numeric_fields(self) -> bool:
        return bool(self.active_columns())


class TemplateRegistry:
    """Map template keys to records, enumerated in discovery order."""

    def __init__(self) -> None:
        self._records: dict[TemplateKey, TemplateRecord] = {}

    def lookup_or_insert(self, tokenized: TokenizedLine) -> TemplateRecord:
        key = template_key(tokenized.segments)
        record = self._records.get(key)
        if record is None:
            record = TemplateRecord.from_line(tokenized)
            self._records[key] = record
        return record

    def add_line(self, tokenized: TokenizedLine) -> TemplateRecord:
        record = self.lookup_or_insert(tokenized)
        record.add_occurrence(tokenized)
        return record

    def records(self) -> list[TemplateRecord]:
        return list(self._records.values())

    def __iter__(self) -> Iterator[TemplateRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
