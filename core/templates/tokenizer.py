"""Line tokenizer splitting text into literal and numeric segments.

Rules:
- A digit, or ``-`` directly followed by a digit, starts a number.
- Inside an integer, ``.`` followed by a digit makes it a float; a bare ``.``
  ends the number and is kept as literal text.
- Whitespace before a number is absorbed into the numeric segment, so
  ``"in100"`` and ``"in  5"`` both yield literal ``"in"`` plus a number.
- Adjacent literal text is always coalesced into one segment.
"""

from __future__ import annotations

import logging
import math

from core.templates.models import (
    FLOAT,
    INTEGER,
    LITERAL,
    MalformedNumber,
    Segment,
    SegmentKind,
    TokenizedLine,
)
from core.utils.events import log_event

logger = logging.getLogger("linestats.core")

# ASCII only, matching C isdigit/isspace.
_DIGITS = frozenset("0123456789")
_SPACES = frozenset(" \t\n\v\f\r")

# Signed 64-bit range, as strtoll.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

_PRESPACES = "prespaces"
_TERMINAL = "terminal"


def tokenize_line(line: str, skip: int = 0) -> TokenizedLine:
    """Tokenize one line (without trailing newline).

    Args:
        line: Source text.
        skip: Number of leading numeric runs to keep as literal text.

    Returns:
        TokenizedLine whose segments cover the line, minus any numeric span
        the number parser rejected (those are listed in ``malformed``).
    """

    if skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")

    builder = _SegmentBuilder(line, skip)
    length = len(line)
    state = LITERAL
    start = 0
    index = 0

    while state != _TERMINAL:
        char = line[index] if index < length else ""
        next_char = line[index + 1] if index + 1 < length else ""
        old_state = state
        starts_number = char in _DIGITS or (char == "-" and next_char in _DIGITS)

        if state == LITERAL:
            if starts_number:
                state = INTEGER
            elif char in _SPACES:
                state = _PRESPACES
        elif state == _PRESPACES:
            if starts_number:
                state = INTEGER
            elif char not in _SPACES:
                state = LITERAL
        elif state == INTEGER and char == ".":
            if next_char in _DIGITS:
                state = old_state = FLOAT
            else:
                state = LITERAL
        elif char in _SPACES:
            state = _PRESPACES
        elif char not in _DIGITS:
            state = LITERAL

        if index >= length:
            state = _TERMINAL

        if state != old_state:
            if old_state == INTEGER or old_state == FLOAT:
                builder.add_number(old_state, start, index)
                start = index
            elif old_state == LITERAL:
                builder.add_literal(start, index)
                start = index
            elif state == _TERMINAL:
                # Trailing whitespace with nothing after it.
                builder.add_literal(start, index)
            # Otherwise pending whitespace carries into the next segment.

        index += 1

    return builder.build()


class _SegmentBuilder:
    def __init__(self, line: str, skip: int) -> None:
        self._line = line
        self._skip = skip
        self._segments: list[Segment] = []
        self._malformed: list[MalformedNumber] = []

    def add_literal(self, start: int, end: int) -> None:
        if end <= start:
            return
        self._append_literal(self._line[start:end])

    def add_number(self, kind: SegmentKind, start: int, end: int) -> None:
        text = self._line[start:end]
        if self._skip > 0:
            self._skip -= 1
            self._append_literal(text)
            return

        try:
            value = _parse_number(kind, text)
        except ValueError as exc:
            self._malformed.append(
                MalformedNumber(kind=kind, text=text, start=start, reason=str(exc))
            )
            log_event(
                logger,
                logging.WARNING,
                "malformed_number",
                kind=kind,
                start=start,
                length=len(text),
                reason=str(exc),
            )
            return

        self._segments.append(Segment(kind=kind, text=text, value=value))

    def build(self) -> TokenizedLine:
        return TokenizedLine(
            text=self._line,
            segments=self._segments,
            malformed=self._malformed,
        )

    def _append_literal(self, text: str) -> None:
        if self._segments and self._segments[-1].kind == LITERAL:
            previous = self._segments[-1]
            self._segments[-1] = Segment(kind=LITERAL, text=previous.text + text)
            return
        self._segments.append(Segment(kind=LITERAL, text=text))


def _parse_number(kind: SegmentKind, text: str) -> int | float:
    if kind == INTEGER:
        integer = int(text)
        if not _INT_MIN <= integer <= _INT_MAX:
            raise ValueError("integer out of 64-bit range")
        return integer

    number = float(text)
    if not math.isfinite(number):
        raise ValueError("float out of range")
    return number
