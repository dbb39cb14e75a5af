from __future__ import annotations

from core.config.models import AnalysisOptions
from core.orchestrator.pipeline import analyze_lines
from core.render.text_renderer import format_number, render_template_line, render_text
from core.templates.models import FLOAT, INTEGER
from core.templates.registry import TemplateRegistry
from core.templates.tokenizer import tokenize_line


def test_render_text_request_latency_example() -> None:
    result = analyze_lines(["req took 10ms", "req took 20ms", "req took 30ms"])

    assert len(result.templates) == 1
    assert render_text(result) == "req took 10-30(20.000000+/-8.2)ms"


def test_render_text_constant_line_is_verbatim() -> None:
    result = analyze_lines(["code 200 ok"] * 5)

    assert render_text(result) == "code 200 ok"


def test_render_text_leading_space_only_when_source_had_one() -> None:
    glued = analyze_lines(["in10 s", "in20 s"])
    spaced = analyze_lines(["in 10 s", "in 20 s"])

    assert render_text(glued) == "in10-20(15.000000+/-5) s"
    assert render_text(spaced) == "in 10-20(15.000000+/-5) s"


def test_render_text_float_column() -> None:
    result = analyze_lines(["load 0.5", "load 1.5"])

    assert render_text(result) == "load 0.500000-1.500000(1.000000+/-0.5)"


def test_render_text_mixed_kinds_render_as_float() -> None:
    result = analyze_lines(["t 1", "t 2.5"])

    assert render_text(result) == "t 1.000000-2.500000(1.750000+/-0.75)"


def test_render_text_count_and_trim_options() -> None:
    options = AnalysisOptions(trim_outliers=True, show_count=True)
    result = analyze_lines(["n 1", "n 2", "n 3", "n 4", "n 100"], options)

    assert render_text(result) == "n 1-100(3.000000+/-0.82) (count=5)"


def test_render_text_suppress_invariant_drops_constant_templates() -> None:
    lines = ["start", "code 200 ok", "req took 10ms", "code 200 ok", "req took 30ms"]

    kept = analyze_lines(lines)
    suppressed = analyze_lines(lines, AnalysisOptions(suppress_invariant=True))

    assert render_text(kept).splitlines() == [
        "start",
        "code 200 ok",
        "req took 10-30(20.000000+/-10)ms",
    ]
    assert render_text(suppressed) == "req took 10-30(20.000000+/-10)ms"


def test_render_template_line_degenerate_without_promotion() -> None:
    registry = TemplateRegistry()
    registry.add_line(tokenize_line("code 200 ok"))
    record = registry.add_line(tokenize_line("code 200 ok"))

    assert record.has_numeric_fields() is True
    assert render_template_line(record) == "code 200 ok"


def test_format_number_by_kind() -> None:
    assert format_number(42, INTEGER) == "42"
    assert format_number(-3, INTEGER) == "-3"
    assert format_number(2.0, FLOAT) == "2.000000"
