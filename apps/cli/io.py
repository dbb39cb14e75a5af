"""CLI input helpers: source resolution and newline-stripped line reading."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from core.utils.errors import InputSourceError

STDIN_NAME = "<stdin>"


@dataclass(frozen=True)
class InputSource:
    """One input to analyze; ``path`` is None for standard input."""

    name: str
    path: Path | None = None


def build_sources(files: list[Path] | None) -> list[InputSource]:
    """Resolve CLI file arguments; no files (or ``-``) means standard input."""

    if not files:
        return [InputSource(name=STDIN_NAME)]

    sources: list[InputSource] = []
    for path in files:
        if str(path) == "-":
            sources.append(InputSource(name=STDIN_NAME))
        else:
            sources.append(InputSource(name=str(path), path=path))
    return sources


def iter_source_lines(source: InputSource, stdin: TextIO | None = None) -> Iterator[str]:
    """Yield lines of one source without their trailing newline.

    Open and read failures surface as InputSourceError on iteration.
    """

    if source.path is None:
        if stdin is not None:
            yield from _strip_newlines(stdin, source.name)
        else:
            yield from _read_stdin(source.name)
        return

    try:
        handle = source.path.open("r", encoding="utf-8", errors="replace", newline="")
    except OSError as exc:
        raise InputSourceError(
            f"Failed opening {source.name}: {exc.strerror or exc}", source=source.name
        ) from exc

    with handle:
        yield from _strip_newlines(handle, source.name)


def _read_stdin(name: str) -> Iterator[str]:
    # Same lenient decoding as files; sys.stdin itself must stay open.
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        yield from _strip_newlines(sys.stdin, name)
        return

    wrapper = io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", newline="")
    try:
        yield from _strip_newlines(wrapper, name)
    finally:
        wrapper.detach()


def _strip_newlines(handle: Iterable[str], name: str) -> Iterator[str]:
    try:
        for line in handle:
            yield line[:-1] if line.endswith("\n") else line
    except OSError as exc:
        raise InputSourceError(f"Reading {name}: {exc.strerror or exc}", source=name) from exc
