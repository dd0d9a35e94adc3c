"""Batch decomposition of a font's glyphs.

This module decomposes many glyphs of a face in one run, either in the
calling process or spread over worker processes with ProcessPoolExecutor.
Decomposition is pure, so workers only need the serialized outline.

Key components:
- process_outline: Top-level picklable function for parallel execution
- BatchResult: Records, errors and statistics of a run
- FontProcessor: Main orchestrator class for batch runs
"""

import time
import traceback
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from glyphpath.config import ContourStartPolicy, ErrorPolicy, GlyphPathSettings
from glyphpath.core.assembler import assemble, decompose_outline
from glyphpath.domain import (
    FaceInfo,
    GlyphMetrics,
    GlyphRecord,
    LinearAdvances,
    RawOutline,
    path_command_from_flat,
)
from glyphpath.exceptions import BatchAbortedError, GlyphError
from glyphpath.io import FontReader, GlyphRecordWriter
from glyphpath.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_outline(
    outline_dict: dict[str, Any],
    glyph_name: str,
    start_policy: str = ContourStartPolicy.NORMALIZE.value,
) -> dict[str, Any]:
    """Decompose a single serialized outline.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        outline_dict: Serialized outline (from RawOutline.to_dict())
        glyph_name: Name of the glyph, for error reporting
        start_policy: ContourStartPolicy value

    Returns:
        Dictionary containing either:
        - Success: {"commands": list, "duration_ms": float}
        - Error: {"error": str, "error_type": str, "glyph_name": str,
          "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        outline = RawOutline.from_dict(outline_dict)
        commands = decompose_outline(outline, ContourStartPolicy(start_policy))

        duration_ms = (time.time() - start_time) * 1000
        return {
            "commands": [list(command.to_flat()) for command in commands],
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "glyph_name": glyph_name,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class _GlyphTask:
    glyph_id: int
    glyph_name: str
    outline: RawOutline
    metrics: GlyphMetrics
    linear_advances: LinearAdvances


@dataclass
class BatchResult:
    """Outcome of a batch run.

    Attributes:
        records: Decomposed glyphs in glyph order
        errors: (glyph name, error message) for every failed glyph
        stats: Counts and timings
        face_info: Attributes of the processed face
    """

    records: list[GlyphRecord] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)
    stats: ProcessingStats = field(default_factory=ProcessingStats)
    face_info: FaceInfo | None = None


class FontProcessor:
    """Orchestrates batch decomposition of a font face.

    Manages the complete workflow:
    1. Load font file
    2. Read outlines and metrics for the requested glyphs
    3. Decompose outlines serially or in worker processes
    4. Apply the error policy to failing glyphs
    5. Optionally save the records as JSON

    Example:
        settings = GlyphPathSettings()
        processor = FontProcessor(settings)
        result = processor.process(
            font_path=Path("font.ttf"),
            output_path=Path("font-paths.json"),
            max_workers=4
        )
    """

    def __init__(self, config: GlyphPathSettings) -> None:
        """Initialize font processor with configuration.

        Args:
            config: Settings containing outline, processing and logging config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        font_path: Path,
        output_path: Path | None = None,
        glyph_ids: Iterable[int] | None = None,
        face_index: int = 0,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> BatchResult:
        """Decompose glyphs of a font face.

        Args:
            font_path: Path to input font file
            output_path: Where to save JSON output (nothing saved if None)
            glyph_ids: Glyph indices to decompose (all glyphs if None)
            face_index: Face to load from a collection
            max_workers: Maximum worker processes (None = config default;
                1 = decompose in the calling process)
            progress_callback: Optional callback(completed, total, glyph_name, success)
                for progress updates

        Returns:
            BatchResult with records in glyph order, errors and statistics

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the font cannot be loaded
            BatchAbortedError: If the error policy is ABORT and a glyph fails
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()
        result = BatchResult(stats=stats)

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting batch decomposition",
            input=str(font_path),
            output=str(output_path) if output_path else None,
            max_workers=max_workers,
            error_policy=self.config.processing.error_policy.value,
        )

        with FontReader(font_path, face_index=face_index) as reader:
            result.face_info = reader.face_info
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )

            ids = list(glyph_ids) if glyph_ids is not None else list(reader.iter_glyph_ids())
            tasks = self._read_tasks(reader, ids, result)

        self.logger.info(
            "Outlines read",
            requested=len(ids),
            to_process=len(tasks),
            skipped=stats.skipped_count,
        )

        if tasks:
            self._decompose_tasks(tasks, max_workers, result, progress_callback)
        else:
            self.logger.info("No glyphs to process")

        order = {glyph_id: i for i, glyph_id in enumerate(ids)}
        result.records.sort(key=lambda record: order.get(record.glyph_id, len(order)))

        if output_path is not None:
            self._save_output(result, output_path)

        stats.end_time = time.time()

        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            placeholders=stats.placeholder_count,
            commands=stats.commands_emitted,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return result

    def _read_tasks(
        self,
        reader: FontReader,
        glyph_ids: list[int],
        result: BatchResult,
    ) -> list[_GlyphTask]:
        """Read outlines and metrics for every requested glyph."""
        tasks: list[_GlyphTask] = []

        for glyph_id in glyph_ids:
            glyph_name = str(glyph_id)
            try:
                glyph_name = reader.glyph_name(glyph_id)
                outline = reader.get_outline(glyph_id)
                metrics, linear_advances = reader.get_metrics(glyph_id)
            except GlyphError as e:
                self._handle_failure(result, glyph_id, glyph_name, str(e), type(e).__name__)
                continue

            self.processing_logger.log_outline_read(
                glyph_name, outline.contour_count, len(outline.points)
            )

            if outline.is_empty() and self.config.processing.skip_empty:
                self.processing_logger.log_glyph_skipped(glyph_name, "empty glyph")
                continue

            tasks.append(
                _GlyphTask(
                    glyph_id=glyph_id,
                    glyph_name=glyph_name,
                    outline=outline,
                    metrics=metrics,
                    linear_advances=linear_advances,
                )
            )

        return tasks

    def _decompose_tasks(
        self,
        tasks: list[_GlyphTask],
        max_workers: int | None,
        result: BatchResult,
        progress_callback: Callable[[int, int, str, bool], None] | None,
    ) -> None:
        """Decompose tasks serially or in worker processes."""
        start_policy = self.config.outline.contour_start_policy.value
        total = len(tasks)

        if max_workers == 1:
            completed = 0
            try:
                for task in tasks:
                    self.processing_logger.log_glyph_start(task.glyph_name)
                    outcome = process_outline(
                        task.outline.to_dict(), task.glyph_name, start_policy
                    )
                    success = self._collect(task, outcome, result)

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, task.glyph_name, success)
            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                result.stats.was_cancelled = True
                result.stats.cancelled_count = total - completed
                raise
            return

        self.logger.info(
            "Starting parallel decomposition",
            glyph_count=total,
            max_workers=max_workers,
        )

        completed = 0
        pending_futures: dict[Future[dict[str, Any]], _GlyphTask] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for task in tasks:
                future = executor.submit(
                    process_outline,
                    task.outline.to_dict(),
                    task.glyph_name,
                    start_policy,
                )
                pending_futures[future] = task

            try:
                for future in as_completed(list(pending_futures)):
                    task = pending_futures.pop(future)

                    try:
                        outcome = future.result()
                    except Exception as e:
                        # Executor-level error
                        outcome = {
                            "error": str(e),
                            "error_type": type(e).__name__,
                            "glyph_name": task.glyph_name,
                        }

                    success = self._collect(task, outcome, result)

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, task.glyph_name, success)

            except (KeyboardInterrupt, BatchAbortedError) as e:
                if isinstance(e, KeyboardInterrupt):
                    self.logger.info("Cancellation requested by user")
                    result.stats.was_cancelled = True
                    result.stats.cancelled_count = len(pending_futures)

                for f in pending_futures:
                    f.cancel()
                executor.shutdown(wait=True, cancel_futures=True)
                raise

    def _collect(
        self,
        task: _GlyphTask,
        outcome: dict[str, Any],
        result: BatchResult,
    ) -> bool:
        """Turn one worker outcome into a record or an error entry.

        Returns:
            True if the glyph decomposed successfully
        """
        duration_ms = outcome.get("duration_ms", 0.0)
        result.stats.glyph_timings_ms.append(duration_ms)

        if "error" in outcome:
            self._handle_failure(
                result,
                task.glyph_id,
                task.glyph_name,
                outcome["error"],
                outcome.get("error_type"),
                metrics=task.metrics,
                linear_advances=task.linear_advances,
            )
            return False

        commands = [path_command_from_flat(record) for record in outcome["commands"]]
        result.records.append(
            assemble(
                commands,
                task.metrics,
                task.linear_advances,
                glyph_id=task.glyph_id,
                glyph_name=task.glyph_name,
            )
        )
        self.processing_logger.log_glyph_complete(task.glyph_name, len(commands), duration_ms)
        return True

    def _handle_failure(
        self,
        result: BatchResult,
        glyph_id: int,
        glyph_name: str,
        error: str,
        error_type: str | None,
        metrics: GlyphMetrics | None = None,
        linear_advances: LinearAdvances | None = None,
    ) -> None:
        """Apply the configured error policy to a failed glyph."""
        self.processing_logger.log_glyph_error(glyph_name, error, error_type)
        result.errors.append((glyph_name, error))

        policy = self.config.processing.error_policy

        if policy is ErrorPolicy.ABORT:
            raise BatchAbortedError(glyph_name, error)

        if policy is ErrorPolicy.PLACEHOLDER:
            result.records.append(
                assemble(
                    [],
                    metrics or GlyphMetrics(),
                    linear_advances or LinearAdvances(),
                    glyph_id=glyph_id,
                    glyph_name=glyph_name,
                )
            )
            result.stats.placeholder_count += 1

    def _save_output(self, result: BatchResult, output_path: Path) -> None:
        """Save decomposed glyphs and errors as JSON."""
        writer = GlyphRecordWriter(output_path, result.face_info)

        for record in result.records:
            writer.add_glyph(record)
        for glyph_name, error in result.errors:
            writer.add_error(glyph_name, error)

        writer.save()

        self.logger.info(
            "Output saved",
            output=str(output_path),
            glyphs=len(result.records),
            errors=len(result.errors),
        )
