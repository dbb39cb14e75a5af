"""Orchestration pipeline: lines -> templates -> promoted, ready-to-render records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from core.config.models import AnalysisOptions
from core.stats.engine import promote_all
from core.templates.models import MalformedNumber
from core.templates.registry import TemplateRecord, TemplateRegistry
from core.templates.tokenizer import tokenize_line
from core.utils.events import log_event

logger = logging.getLogger("linestats.core")


@dataclass(frozen=True)
class MalformedEntry:
    """A rejected numeric span and the 1-based line it came from."""

    line_number: int
    number: MalformedNumber


@dataclass
class AnalysisResult:
    """All templates discovered in one input source, in discovery order."""

    source: str
    options: AnalysisOptions
    templates: list[TemplateRecord] = field(default_factory=list)
    lines_total: int = 0
    promoted_count: int = 0
    malformed: list[MalformedEntry] = field(default_factory=list)

    @property
    def malformed_count(self) -> int:
        return len(self.malformed)

    def visible_templates(self) -> list[TemplateRecord]:
        """Templates to render, honouring ``suppress_invariant``."""

        if not self.options.suppress_invariant:
            return list(self.templates)
        return [record for record in self.templates if record.has_numeric_fields()]


def analyze_lines(
    lines: Iterable[str],
    options: AnalysisOptions | None = None,
    *,
    source: str = "<stdin>",
) -> AnalysisResult:
    """Tokenize and aggregate every line, then run literal promotion.

    Every call uses a fresh registry, so separate sources never share state.
    """

    options = options or AnalysisOptions()
    registry = TemplateRegistry()
    result = AnalysisResult(source=source, options=options)

    for line_number, line in enumerate(lines, start=1):
        tokenized = tokenize_line(line, skip=options.skip)
        for number in tokenized.malformed:
            result.malformed.append(MalformedEntry(line_number=line_number, number=number))
        registry.add_line(tokenized)
        result.lines_total = line_number

    result.templates = registry.records()
    result.promoted_count = promote_all(result.templates)

    log_event(
        logger,
        logging.INFO,
        "source_done",
        source=source,
        lines_total=result.lines_total,
        templates=len(result.templates),
        promoted=result.promoted_count,
        malformed=result.malformed_count,
    )
    return result
