"""Inline text rendering: numbers replaced by ``min-max(mean+/-stddev)``."""

from __future__ import annotations

from core.orchestrator.pipeline import AnalysisResult
from core.stats.engine import ColumnStats, FieldSummary, summarize_record
from core.templates.models import INTEGER, Number, SegmentKind
from core.templates.registry import TemplateRecord


def render_text(result: AnalysisResult) -> str:
    """Render one line per visible template, in discovery order."""

    options = result.options
    return "\n".join(
        render_template_line(
            record,
            trim_outliers=options.trim_outliers,
            show_count=options.show_count,
        )
        for record in result.visible_templates()
    )


def render_template_line(
    record: TemplateRecord, *, trim_outliers: bool = False, show_count: bool = False
) -> str:
    text = "".join(
        format_field(field) for field in summarize_record(record, trim_outliers)
    )
    if show_count:
        text += f" (count={record.count})"
    return text


def format_field(field: FieldSummary) -> str:
    stats = field.stats
    if stats is None or stats.degenerate:
        return field.segment.text

    prefix = " " if field.segment.leading_space else ""
    return prefix + format_stats(stats)


def format_stats(stats: ColumnStats) -> str:
    return "%s-%s(%f+/-%.2g)" % (
        format_number(stats.minimum, stats.kind),
        format_number(stats.maximum, stats.kind),
        stats.mean,
        stats.stddev,
    )


def format_number(value: Number, kind: SegmentKind) -> str:
    if kind == INTEGER:
        return "%d" % value
    return "%f" % value
