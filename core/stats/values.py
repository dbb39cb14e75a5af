"""Columnar per-template value storage with integer/float unification."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from core.templates.models import FLOAT, INTEGER, Number, SegmentKind


@dataclass
class ValueColumn:
    """All observed values of one numeric field.

    The column kind is shared by every stored value. Once a column is float it
    never goes back to integer.
    """

    kind: SegmentKind
    values: list[Number] = field(default_factory=list)

    def append(self, kind: SegmentKind, value: Number) -> None:
        if kind not in (INTEGER, FLOAT):
            raise ValueError(f"Cannot store a {kind} value in a numeric column")

        if kind == FLOAT and self.kind == INTEGER:
            self.promote()
        if self.kind == FLOAT:
            value = float(value)
        self.values.append(value)

    def promote(self) -> None:
        """Convert every stored integer to float in place."""

        if self.kind == FLOAT:
            return
        self.values = [float(value) for value in self.values]
        self.kind = FLOAT

    def is_constant(self) -> bool:
        if not self.values:
            return False
        first = self.values[0]
        return all(value == first for value in self.values)

    def __len__(self) -> int:
        return len(self.values)


class ValueStore:
    """Ordered occurrences of one template, stored column by column."""

    def __init__(self, kinds: list[SegmentKind]) -> None:
        self.columns: list[ValueColumn] = [ValueColumn(kind=kind) for kind in kinds]
        self._size = 0

    def append(self, entries: list[tuple[SegmentKind, Number]]) -> None:
        """Append one occurrence; ``entries`` holds one (kind, value) per column."""

        if len(entries) != len(self.columns):
            raise ValueError(
                f"Occurrence has {len(entries)} numeric fields, expected {len(self.columns)}"
            )
        for column, (kind, value) in zip(self.columns, entries):
            column.append(kind, value)
        self._size += 1

    def rows(self, columns: list[int] | None = None) -> Iterator[tuple[Number, ...]]:
        """Yield per-occurrence tuples, optionally restricted to some columns."""

        selected = self.columns if columns is None else [self.columns[i] for i in columns]
        for index in range(self._size):
            yield tuple(column.values[index] for column in selected)

    def __len__(self) -> int:
        return self._size
