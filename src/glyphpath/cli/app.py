"""CLI application entry point for glyphpath.

This module provides the main CLI interface using Typer.
"""

import json
import os
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from glyphpath import __version__
from glyphpath.cli.output import (
    console,
    create_progress,
    print_cancellation_summary,
    print_error,
    print_face_table,
    print_font_info,
    print_glyph,
    print_glyph_errors,
    print_header,
    print_kerning,
    print_processing_info,
    print_step,
    print_success,
)
from glyphpath.config import (
    ContourStartPolicy,
    ErrorPolicy,
    GlyphPathSettings,
    LoggingConfig,
    OutlineConfig,
    ProcessingConfig,
)
from glyphpath.core import FontProcessor, GlyphAssembler, to_svg_path
from glyphpath.exceptions import FontLoadError, GlyphPathError
from glyphpath.io import FontReader, GlyphRecordWriter
from glyphpath.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphpath",
    help="Decompose font glyph outlines into absolute path commands.",
    add_completion=False,
    no_args_is_help=True,
)

FontArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to input TTF/OTF/TTC font file",
        show_default=False,
    ),
]
FaceIndexOption = Annotated[
    int,
    typer.Option(
        "--face-index",
        "-f",
        help="Face to load from a font collection",
        min=0,
    ),
]
StartPolicyOption = Annotated[
    ContourStartPolicy,
    typer.Option(
        "--start-policy",
        help="Contours starting off-curve: normalize or reject",
        case_sensitive=False,
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Verbose console output",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_GLYPH_FORMATS = ("flat", "svg", "json")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphpath[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Decompose font glyph outlines into absolute path commands."""


def _check_common(
    input_font: Path,
    log_level: str,
    verbose: bool,
    quiet: bool,
) -> None:
    """Validate options shared by every command.

    Raises:
        typer.Exit: With code 1 if any option is invalid
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in _LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(_LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF, OTF or TTC font file.",
        )
        raise typer.Exit(code=1)


def _exit_on_error(e: Exception) -> NoReturn:
    """Report an error and exit with code 1."""
    if isinstance(e, FontLoadError):
        print_error(f"Could not load font: {e.reason}")
    elif isinstance(e, GlyphPathError):
        print_error(str(e))
    else:
        print_error(f"Unexpected error: {e}")
    raise typer.Exit(code=1)


@app.command()
def info(
    input_font: FontArgument,
    face_index: FaceIndexOption = 0,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Show the attributes of a font face.

    Example:
        glyphpath info Roboto-Regular.ttf
    """
    _check_common(input_font, log_level, verbose, quiet)
    configure_logging(log_file=log_file, console_level=log_level, quiet=quiet)

    try:
        with FontReader(input_font, face_index=face_index) as reader:
            if not quiet:
                print_header(__version__)
                print_step("Loading font")
                print_font_info(
                    font_path=str(input_font),
                    font_type=reader.format,
                    glyph_count=reader.glyph_count,
                    upm=reader.units_per_em,
                )
                print_step("Face attributes")
            print_face_table(reader.face_info)
    except Exception as e:
        _exit_on_error(e)


@app.command()
def glyph(
    input_font: FontArgument,
    text: Annotated[
        str,
        typer.Argument(
            help="Characters whose glyphs to decompose",
            show_default=False,
        ),
    ],
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-F",
            help="Output format (flat|svg|json)",
        ),
    ] = "flat",
    face_index: FaceIndexOption = 0,
    start_policy: StartPolicyOption = ContourStartPolicy.NORMALIZE,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Decompose the glyphs of some characters and print their path commands.

    Kerning between consecutive characters is reported when the face has
    a kerning table.

    Example:
        glyphpath glyph Roboto-Regular.ttf AV --format svg
    """
    _check_common(input_font, log_level, verbose, quiet)

    output_format = output_format.lower()
    if output_format not in _GLYPH_FORMATS:
        print_error(
            f"Invalid format: {output_format}",
            details=f"Valid values: {', '.join(_GLYPH_FORMATS)}",
        )
        raise typer.Exit(code=1)

    configure_logging(log_file=log_file, console_level=log_level, quiet=quiet)

    try:
        with FontReader(input_font, face_index=face_index) as reader:
            assembler = GlyphAssembler(reader, start_policy)
            documents = []
            previous: str | None = None

            if output_format == "flat" and not quiet:
                print_header(__version__)

            for char in text:
                record = assembler.load_char(ord(char))
                dx, dy = (0, 0)
                if previous is not None:
                    dx, dy = assembler.kerning_for_chars(ord(previous), ord(char))

                if output_format == "flat":
                    if (dx, dy) != (0, 0) and previous is not None:
                        print_kerning(previous, char, dx, dy)
                    print_glyph(record, char, verbose)
                elif output_format == "svg":
                    console.print(to_svg_path(record.commands), highlight=False, soft_wrap=True)
                else:
                    documents.append({"char": char, "kerning": [dx, dy], **record.to_dict()})

                previous = char

            if output_format == "json":
                typer.echo(json.dumps(documents, indent=2))
    except Exception as e:
        _exit_on_error(e)


@app.command()
def dump(
    input_font: FontArgument,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-paths.json)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = no worker processes)",
            min=1,
        ),
    ] = None,
    on_error: Annotated[
        ErrorPolicy,
        typer.Option(
            "--on-error",
            help="Failing glyphs: skip, placeholder or abort",
            case_sensitive=False,
        ),
    ] = ErrorPolicy.SKIP,
    skip_empty: Annotated[
        bool,
        typer.Option(
            "--skip-empty",
            help="Leave glyphs without contours out of the output",
        ),
    ] = False,
    face_index: FaceIndexOption = 0,
    start_policy: StartPolicyOption = ContourStartPolicy.NORMALIZE,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Decompose every glyph of a font face and save the result as JSON.

    Example:
        glyphpath dump Roboto-Regular.ttf

    This will create Roboto-Regular-paths.json next to the font.
    """
    _check_common(input_font, log_level, verbose, quiet)

    if not quiet:
        print_header(__version__)

    settings = GlyphPathSettings(
        outline=OutlineConfig(contour_start_policy=start_policy),
        processing=ProcessingConfig(
            max_workers=workers,
            error_policy=on_error,
            skip_empty=skip_empty,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    actual_output_path = output or GlyphRecordWriter.get_output_path(input_font)
    processor = FontProcessor(settings)

    try:
        if not quiet:
            print_step("Decomposing")
            actual_workers = workers if workers else os.cpu_count() or 1
            print_processing_info(actual_workers, is_auto=(workers is None))

            with create_progress() as progress:
                task_id = progress.add_task("Decomposing glyphs", total=None)

                def update_progress(completed: int, total: int, *_: object) -> None:
                    progress.update(task_id, completed=completed, total=total)

                result = processor.process(
                    font_path=input_font,
                    output_path=actual_output_path,
                    face_index=face_index,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            result = processor.process(
                font_path=input_font,
                output_path=actual_output_path,
                face_index=face_index,
                max_workers=workers,
            )
    except KeyboardInterrupt:
        if not quiet:
            stats = processor.processing_logger.stats
            print_cancellation_summary(
                processed=stats.processed_count,
                cancelled=stats.cancelled_count,
            )
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except Exception as e:
        _exit_on_error(e)

    stats = result.stats
    if not quiet:
        print_success(
            output_path=str(actual_output_path),
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            commands=stats.commands_emitted,
            errors=stats.error_count,
            avg_time_ms=stats.avg_glyph_time_ms,
        )
        if verbose and result.errors:
            print_glyph_errors(result.errors)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
