"""CSV block rendering: one quoted header plus one row per occurrence."""

from __future__ import annotations

from core.orchestrator.pipeline import AnalysisResult
from core.templates.models import LITERAL, Number
from core.templates.registry import TemplateRecord


def render_csv(result: AnalysisResult) -> str:
    """Render visible templates as CSV blocks separated by an empty line."""

    blocks = [
        "\n".join(render_csv_block(record, show_count=result.options.show_count))
        for record in result.visible_templates()
    ]
    return "\n\n".join(blocks)


def render_csv_block(record: TemplateRecord, *, show_count: bool = False) -> list[str]:
    header = f'"{build_placeholder_pattern(record, strip_quotes=True)}"'
    if show_count:
        header += f",{record.count}"

    lines = [header]
    columns = record.active_columns()
    if not columns:
        return lines
    for row in record.store.rows(columns):
        lines.append(",".join(_format_raw(value) for value in row))
    return lines


def build_placeholder_pattern(record: TemplateRecord, *, strip_quotes: bool = False) -> str:
    """Template text with ``[N]`` (1-based, left to right) for each numeric field."""

    parts: list[str] = []
    placeholder = 0
    for segment in record.segments:
        if segment.kind == LITERAL:
            parts.append(segment.text.replace('"', "") if strip_quotes else segment.text)
            continue
        placeholder += 1
        prefix = " " if segment.leading_space else ""
        parts.append(f"{prefix}[{placeholder}]")
    return "".join(parts)


def _format_raw(value: Number) -> str:
    return str(value)
