from __future__ import annotations

import logging

import pytest

from core.templates.models import FLOAT, INTEGER, LITERAL
from core.templates.tokenizer import tokenize_line


def _shape(line: str, skip: int = 0) -> list[tuple[str, str]]:
    return [(segment.kind, segment.text) for segment in tokenize_line(line, skip).segments]


def test_tokenize_splits_literal_and_integer_segments() -> None:
    tokenized = tokenize_line("req took 10ms")

    assert _shape("req took 10ms") == [
        (LITERAL, "req took"),
        (INTEGER, " 10"),
        (LITERAL, "ms"),
    ]
    assert tokenized.segments[1].value == 10
    assert tokenized.numeric_count == 1


def test_tokenize_absorbs_whitespace_before_number() -> None:
    glued = tokenize_line("finished in100 seconds").segments
    spaced = tokenize_line("finished in  5 seconds").segments

    assert glued[0].text == spaced[0].text == "finished in"
    assert glued[1].text == "100"
    assert spaced[1].text == "  5"
    assert spaced[1].leading_space is True
    assert glued[2].text == spaced[2].text == " seconds"


def test_tokenize_float_and_trailing_literal() -> None:
    tokenized = tokenize_line("load 0.75 avg")

    assert _shape("load 0.75 avg") == [
        (LITERAL, "load"),
        (FLOAT, " 0.75"),
        (LITERAL, " avg"),
    ]
    assert tokenized.segments[1].value == pytest.approx(0.75)


def test_tokenize_dot_without_digit_ends_integer() -> None:
    assert _shape("v1. end") == [
        (LITERAL, "v"),
        (INTEGER, "1"),
        (LITERAL, ". end"),
    ]


def test_tokenize_second_dot_ends_float() -> None:
    assert _shape("1.2.3") == [
        (FLOAT, "1.2"),
        (LITERAL, "."),
        (INTEGER, "3"),
    ]


def test_tokenize_negative_number_and_range_dash() -> None:
    negative = tokenize_line("delta -5 units").segments
    assert [(s.kind, s.text) for s in negative] == [
        (LITERAL, "delta"),
        (INTEGER, " -5"),
        (LITERAL, " units"),
    ]
    assert negative[1].value == -5

    assert _shape("10-20") == [
        (INTEGER, "10"),
        (LITERAL, "-"),
        (INTEGER, "20"),
    ]


def test_tokenize_keeps_trailing_whitespace_as_literal() -> None:
    assert _shape("done  ") == [(LITERAL, "done  ")]
    assert _shape("took 5  ") == [(LITERAL, "took"), (INTEGER, " 5"), (LITERAL, "  ")]


@pytest.mark.parametrize(
    "line",
    [
        "req took 10ms",
        "  leading spaces 3",
        "a\tb 1.5\tc",
        "x=-1,y=2.25,z=3.",
        "no numbers at all",
        "42",
        "",
    ],
)
def test_tokenize_segments_cover_whole_line(line: str) -> None:
    tokenized = tokenize_line(line)

    assert "".join(segment.text for segment in tokenized.segments) == line
    assert tokenized.malformed == []


def test_tokenize_consecutive_literals_are_coalesced() -> None:
    segments = tokenize_line("alpha beta gamma 7").segments

    kinds = [segment.kind for segment in segments]
    assert kinds == [LITERAL, INTEGER]
    assert segments[0].text == "alpha beta gamma"


def test_tokenize_skip_keeps_leading_numbers_as_literal() -> None:
    assert _shape("id 42 took 7ms", skip=1) == [
        (LITERAL, "id 42 took"),
        (INTEGER, " 7"),
        (LITERAL, "ms"),
    ]
    assert _shape("1 2.5 3", skip=2) == [(LITERAL, "1 2.5"), (INTEGER, " 3")]
    assert _shape("7", skip=5) == [(LITERAL, "7")]


def test_tokenize_rejects_negative_skip() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        tokenize_line("x 1", skip=-1)


def test_tokenize_drops_unparseable_number_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="linestats.core")
    huge = "9" * 5000

    tokenized = tokenize_line(f"size {huge} bytes")

    assert [(s.kind, s.text) for s in tokenized.segments] == [(LITERAL, "size bytes")]
    assert len(tokenized.malformed) == 1
    assert tokenized.malformed[0].kind == INTEGER
    assert tokenized.malformed[0].start == 4
    messages = [record.message for record in caplog.records if record.name == "linestats.core"]
    assert any('"event":"malformed_number"' in message for message in messages)


def test_tokenize_rejects_integers_outside_64_bit_range() -> None:
    kept = tokenize_line("n 9223372036854775807 -9223372036854775808")
    assert [segment.value for segment in kept.segments if segment.is_numeric] == [
        2**63 - 1,
        -(2**63),
    ]

    dropped = tokenize_line("n 9223372036854775808 end")
    assert [(s.kind, s.text) for s in dropped.segments] == [(LITERAL, "n end")]
    assert dropped.malformed[0].reason == "integer out of 64-bit range"


def test_tokenize_rejects_float_overflowing_to_infinity() -> None:
    tokenized = tokenize_line("x " + "9" * 400 + ".5")

    assert [(s.kind, s.text) for s in tokenized.segments] == [(LITERAL, "x")]
    assert tokenized.malformed[0].kind == FLOAT
    assert tokenized.malformed[0].reason == "float out of range"
