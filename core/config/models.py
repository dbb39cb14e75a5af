"""Data models for analysis options."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

OutputFormat = Literal["text", "csv", "json"]


class AnalysisOptions(BaseModel):
    """Options controlling tokenization, statistics and rendering."""

    model_config = ConfigDict(extra="forbid")

    skip: int = Field(default=0, ge=0)
    trim_outliers: bool = False
    suppress_invariant: bool = False
    show_count: bool = False
    output_format: OutputFormat = "text"

    def apply_overrides(self, **overrides: Any) -> AnalysisOptions:
        """Return a validated copy with every non-None override applied."""

        update = {key: value for key, value in overrides.items() if value is not None}
        if not update:
            return self
        return AnalysisOptions.model_validate({**self.model_dump(), **update})
