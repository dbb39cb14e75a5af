"""Report models for JSON output."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FieldReport(BaseModel):
    """One template segment; statistics are set for numeric fields only."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["literal", "integer", "float"]
    text: str
    promoted: bool = False
    column: int | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    mean: float | None = None
    stddev: float | None = None
    trimmed: bool = False


class TemplateReport(BaseModel):
    """One template with its occurrence count."""

    model_config = ConfigDict(extra="forbid")

    pattern: str
    count: int
    fields: list[FieldReport] = Field(default_factory=list)
    rows: list[list[int | float]] | None = None


class SourceReport(BaseModel):
    """Analysis summary of one input source.

    Rules:
    - templates are listed in discovery order
    - template_count counts all templates, including suppressed ones
    """

    model_config = ConfigDict(extra="forbid")

    source: str
    lines_total: int
    template_count: int
    malformed_count: int
    templates: list[TemplateReport] = Field(default_factory=list)
