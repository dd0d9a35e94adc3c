"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from glyphpath.domain import FaceInfo, FlatCommand, GlyphRecord

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for glyph decomposition.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphpath[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print a one-line font summary.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_face_table(info: FaceInfo) -> None:
    """Print all face attributes as a table.

    Args:
        info: Face attributes from the reader
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    for key, value in info.to_dict().items():
        if key == "bbox":
            value = " ".join(str(v) for v in value)
        table.add_row(key, "-" if value is None else str(value))

    console.print(table)


def format_flat(record: FlatCommand) -> str:
    """Format one wire record as a space-separated line."""
    return " ".join(str(v) for v in record)


def print_glyph(record: GlyphRecord, char: str, verbose: bool) -> None:
    """Print a decomposed glyph as wire records.

    Args:
        record: Decomposed glyph
        char: Character the glyph was looked up for
        verbose: Also print metrics
    """
    title = Text(f"\n{char!r} ", style="bold")
    title.append(f"{record.glyph_name} #{record.glyph_id}", style="cyan")
    title.append(f" {SYM_DOT} {record.contour_count} contours {SYM_DOT} ")
    title.append(f"advance {record.metrics.hori_advance}")
    console.print(title)

    if verbose:
        metrics = record.metrics.to_dict()
        console.print("  " + "  ".join(f"{k}={v}" for k, v in metrics.items()))

    for command in record.commands:
        console.print(f"  {format_flat(command.to_flat())}", highlight=False)


def print_kerning(left: str, right: str, dx: int, dy: int) -> None:
    """Print a kerning adjustment between two characters."""
    console.print(f"  [dim]kern {left!r} {right!r}: {dx} {dy}[/dim]")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    commands: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        processed: Number of glyphs decomposed
        commands: Total number of path commands emitted
        errors: Number of errors encountered
        avg_time_ms: Average decomposition time per glyph in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} glyphs {SYM_DOT} {commands} commands {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.2f}ms avg per glyph")


def print_glyph_errors(errors: list[tuple[str, str]], limit: int = 20) -> None:
    """Print failed glyphs.

    Args:
        errors: (glyph name, error message) pairs
        limit: Maximum number of entries to show
    """
    for glyph_name, error in errors[:limit]:
        console.print(f"  [red]{SYM_ERR}[/red] {glyph_name}: {error}")
    if len(errors) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} +{len(errors) - limit} more")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of glyphs decomposed before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} glyphs completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
