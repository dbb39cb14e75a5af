"""Per-field statistics and the invariant-field literal promotion pass."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from core.stats.values import ValueColumn
from core.templates.models import LITERAL, Number, Segment, SegmentKind
from core.templates.registry import TemplateRecord


@dataclass(frozen=True)
class ColumnStats:
    """Summary statistics of one numeric field."""

    kind: SegmentKind
    count: int
    minimum: Number
    maximum: Number
    mean: float
    stddev: float
    trimmed: bool

    @property
    def degenerate(self) -> bool:
        return self.minimum == self.maximum


@dataclass(frozen=True)
class FieldSummary:
    """One segment of a template with statistics attached when numeric."""

    segment: Segment
    column: int | None = None
    stats: ColumnStats | None = None


def compute_column_stats(column: ValueColumn, trim_outliers: bool = False) -> ColumnStats:
    """Compute min/max/mean/population stddev of a column.

    Rules:
    - Ties keep the first-seen extremum.
    - With ``trim_outliers`` and at least 3 values, one minimum and one maximum
      are excluded from mean and stddev. Fewer values disable trimming.
    """

    values = column.values
    if not values:
        raise ValueError("Cannot compute statistics of an empty column")

    minimum = maximum = total = values[0]
    for value in values[1:]:
        if value > maximum:
            maximum = value
        if value < minimum:
            minimum = value
        total += value

    count = len(values)
    trimmed = trim_outliers and count >= 3
    if trimmed:
        mean = (total - maximum - minimum) / (count - 2)
        effective = count - 2
    else:
        mean = total / count
        effective = count

    variance = sum((value - mean) ** 2 for value in values)
    if trimmed:
        variance -= (minimum - mean) ** 2 + (maximum - mean) ** 2
    # Rounding can leave a tiny negative remainder after trimming.
    stddev = math.sqrt(max(variance, 0.0) / effective)

    return ColumnStats(
        kind=column.kind,
        count=count,
        minimum=minimum,
        maximum=maximum,
        mean=float(mean),
        stddev=stddev,
        trimmed=trimmed,
    )


def promote_invariant_fields(record: TemplateRecord) -> int:
    """Turn numeric segments whose value never varied into literal text.

    The first occurrence's text is kept for rendering. Returns the number of
    segments promoted by this call.
    """

    promoted = 0
    for column_index, position in enumerate(record.field_positions):
        segment = record.segments[position]
        if segment.kind == LITERAL:
            continue
        if not record.store.columns[column_index].is_constant():
            continue
        record.segments[position] = Segment(kind=LITERAL, text=segment.text)
        record.promoted_positions.add(position)
        promoted += 1
    return promoted


def promote_all(records: Iterable[TemplateRecord]) -> int:
    return sum(promote_invariant_fields(record) for record in records)


def summarize_record(record: TemplateRecord, trim_outliers: bool = False) -> list[FieldSummary]:
    """Pair every segment of a record with its statistics, in pattern order."""

    columns_by_position = {
        position: column for column, position in enumerate(record.field_positions)
    }
    fields: list[FieldSummary] = []
    for position, segment in enumerate(record.segments):
        if segment.kind == LITERAL:
            fields.append(FieldSummary(segment=segment))
            continue
        column = columns_by_position[position]
        fields.append(
            FieldSummary(
                segment=segment,
                column=column,
                stats=compute_column_stats(record.store.columns[column], trim_outliers),
            )
        )
    return fields
