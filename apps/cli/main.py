"""Typer CLI entrypoint for linestats."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from apps.cli.io import InputSource, build_sources, iter_source_lines
from core.config.models import AnalysisOptions, OutputFormat
from core.config.options_loader import load_options
from core.orchestrator.pipeline import AnalysisResult, analyze_lines
from core.render.csv_renderer import render_csv
from core.render.json_report import render_json
from core.render.text_renderer import render_text
from core.utils.errors import InputSourceError, PatternMismatchError
from core.utils.events import log_event

app = typer.Typer(
    help="Print min-max(mean+/-stddev) stats in place of numbers in a stream",
    rich_markup_mode=None,
)
logger = logging.getLogger("linestats.cli")


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep `linestats run` as explicit command form."""


@app.command("run")
def run_command(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Input files; standard input when omitted or '-'."),
    ] = None,
    trim_outliers: Annotated[
        bool,
        typer.Option("--trim-outliers", help="Remove max and min results from average."),
    ] = False,
    skip: Annotated[
        int | None,
        typer.Option("--skip", min=0, help="Treat the first N numbers of each line as text."),
    ] = None,
    csv_output: Annotated[
        bool, typer.Option("--csv", help="Print a CSV block per template.")
    ] = False,
    json_output: Annotated[
        bool, typer.Option("--json", help="Print a JSON report per input source.")
    ] = False,
    suppress_invariant: Annotated[
        bool,
        typer.Option(
            "--suppress-invariant",
            "-i",
            help="Omit templates in which no number ever changed.",
        ),
    ] = False,
    count: Annotated[
        bool, typer.Option("--count", help="Append the occurrence count of each template.")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", dir_okay=False, help="YAML options file."),
    ] = None,
) -> None:
    """Analyze every input source in order, each with fresh template state."""

    if csv_output and json_output:
        typer.echo("ERROR: --csv and --json cannot be used together.", err=True)
        raise typer.Exit(code=1)

    output_format: OutputFormat | None = None
    if csv_output:
        output_format = "csv"
    elif json_output:
        output_format = "json"

    try:
        options = load_options(config).apply_overrides(
            skip=skip,
            trim_outliers=True if trim_outliers else None,
            suppress_invariant=True if suppress_invariant else None,
            show_count=True if count else None,
            output_format=output_format,
        )
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    exit_code = 0
    for source in build_sources(files):
        try:
            result = _analyze_source(source, options)
        except InputSourceError as exc:
            exit_code = 1
            log_event(logger, logging.ERROR, "source_failed", source=exc.source, reason=str(exc))
            typer.echo(f"ERROR: {exc}", err=True)
            continue
        except PatternMismatchError as exc:
            typer.echo(f"ERROR: internal error: {exc}", err=True)
            raise typer.Exit(code=2) from exc

        for entry in result.malformed:
            typer.echo(
                f"WARNING(parse): {source.name}:{entry.line_number}: "
                f"could not parse {entry.number.kind} '{entry.number.text}'",
                err=True,
            )

        rendered = _render(result)
        if rendered:
            typer.echo(rendered)

    raise typer.Exit(code=exit_code)


def _analyze_source(source: InputSource, options: AnalysisOptions) -> AnalysisResult:
    return analyze_lines(iter_source_lines(source), options, source=source.name)


def _render(result: AnalysisResult) -> str:
    output_format = result.options.output_format
    if output_format == "csv":
        return render_csv(result)
    if output_format == "json":
        return render_json(result)
    return render_text(result)


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
