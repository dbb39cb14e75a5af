"""Custom exceptions for core logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.templates.registry import TemplateKey


class PatternMismatchError(Exception):
    """Raised when a line matched a template but its numeric fields cannot be unified.

    This signals a broken template equality contract, not bad input.
    """

    def __init__(
        self,
        message: str,
        *,
        key: TemplateKey | None = None,
        position: int | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.position = position


class InputSourceError(Exception):
    """Raised when an input source cannot be opened or read."""

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source
