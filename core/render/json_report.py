"""JSON report assembly from analysis results."""

from __future__ import annotations

import json

from core.orchestrator.pipeline import AnalysisResult
from core.render.csv_renderer import build_placeholder_pattern
from core.render.models import FieldReport, SourceReport, TemplateReport
from core.stats.engine import summarize_record
from core.templates.registry import TemplateRecord


def build_source_report(result: AnalysisResult, *, include_rows: bool = False) -> SourceReport:
    """Build the report model for one source."""

    return SourceReport(
        source=result.source,
        lines_total=result.lines_total,
        template_count=len(result.templates),
        malformed_count=result.malformed_count,
        templates=[
            build_template_report(
                record,
                trim_outliers=result.options.trim_outliers,
                include_rows=include_rows,
            )
            for record in result.visible_templates()
        ],
    )


def build_template_report(
    record: TemplateRecord, *, trim_outliers: bool = False, include_rows: bool = False
) -> TemplateReport:
    fields: list[FieldReport] = []
    for position, field in enumerate(summarize_record(record, trim_outliers)):
        stats = field.stats
        if stats is None:
            fields.append(
                FieldReport(
                    kind="literal",
                    text=field.segment.text,
                    promoted=position in record.promoted_positions,
                )
            )
            continue
        fields.append(
            FieldReport(
                kind=stats.kind,
                text=field.segment.text,
                column=field.column,
                minimum=stats.minimum,
                maximum=stats.maximum,
                mean=stats.mean,
                stddev=stats.stddev,
                trimmed=stats.trimmed,
            )
        )

    rows = None
    if include_rows:
        rows = [list(row) for row in record.store.rows(record.active_columns())]

    return TemplateReport(
        pattern=build_placeholder_pattern(record),
        count=record.count,
        fields=fields,
        rows=rows,
    )


def render_json(result: AnalysisResult, *, include_rows: bool = False) -> str:
    report = build_source_report(result, include_rows=include_rows)
    return json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2, sort_keys=True)
