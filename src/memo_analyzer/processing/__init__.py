"""Batch analysis of many recordings."""

from __future__ import annotations

import hashlib
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from memo_analyzer.analysis.analyzer import Analyzer
from memo_analyzer.config import AnalysisConfig
from memo_analyzer.ingest.parser import load_notes
from memo_analyzer.models.core import AnalysisResult
from memo_analyzer.storage.documents import analysis_path, save_analysis

logger = logging.getLogger(__name__)

NOTE_FILE_EXTENSIONS = (".notes.json", ".mid", ".midi")
CHECKPOINT_NAME = ".memo_analyzer_checkpoint"


def recording_id_for(path: Path) -> str:
    """Derive a recording identifier from a notes file name."""
    name = path.name
    for ext in NOTE_FILE_EXTENSIONS:
        if name.lower().endswith(ext):
            return name[: -len(ext)]
    return path.stem


def analyze_file(
    path: Path,
    output_dir: Path | None = None,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Analyze one notes file and write its analysis document.

    Unreadable note data produces an error result, which is stored like any
    other result so the failure stays visible.

    Args:
        path: JSON or MIDI notes file.
        output_dir: Directory for the document (defaults to the file's directory).
        config: Analysis parameters.

    Returns:
        The stored analysis result.

    Raises:
        FileNotFoundError: If the notes file doesn't exist.
    """
    recording_id = recording_id_for(path)

    try:
        notes = load_notes(path)
    except ValueError as e:
        logger.warning(f"Cannot analyze {path}: {e}")
        result = AnalysisResult.failed(str(e))
    else:
        result = Analyzer(config).analyze(notes)

    output = analysis_path(output_dir or path.parent, recording_id)
    save_analysis(result, output, recording_id=recording_id, title=recording_id)
    return result


@dataclass
class ProcessingResult:
    """Outcome of analyzing one notes file.

    Attributes:
        path: The notes file.
        success: Whether a completed analysis was stored.
        recording_id: Recording identifier (on success).
        duration_ms: Wall time spent on the file.
        error: Failure reason.
    """

    path: Path
    success: bool
    recording_id: str | None = None
    duration_ms: float = 0.0
    error: str | None = None


@dataclass
class BatchProgress:
    """Running totals for a batch.

    Attributes:
        total: Files queued for analysis (skipped files excluded).
        processed: Files finished so far.
        succeeded: Completed analyses.
        failed: Files that could not be analyzed.
        skipped: Files skipped as already analyzed.
        current_file: Most recently finished file.
        start_time: Batch start timestamp.
        elapsed_ms: Time since the batch started.
    """

    total: int
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    current_file: str = ""
    start_time: float = 0.0
    elapsed_ms: float = 0.0

    @property
    def progress_percent(self) -> float:
        """Share of queued files finished, in percent."""
        return (self.processed / self.total * 100) if self.total > 0 else 0.0

    @property
    def rate_per_second(self) -> float:
        """Files finished per second."""
        if self.elapsed_ms <= 0:
            return 0.0
        return self.processed / (self.elapsed_ms / 1000)


@dataclass
class BatchConfig:
    """Options for a batch run.

    Attributes:
        workers: Worker threads; 1 runs in the calling thread.
        skip_existing: Skip files whose fingerprint is already recorded.
        resume: Load recorded fingerprints from the checkpoint file.
        checkpoint_interval: Write the checkpoint every N finished files.
        on_progress: Called with the running totals.
        on_file_complete: Called with each file's result.
    """

    workers: int = 4
    skip_existing: bool = True
    resume: bool = True
    checkpoint_interval: int = 100
    on_progress: Callable[[BatchProgress], None] | None = None
    on_file_complete: Callable[[ProcessingResult], None] | None = None


@dataclass
class BatchState:
    """Fingerprints of analyzed files, persisted between runs."""

    processed_files: set[str] = field(default_factory=set)
    last_checkpoint: float = 0.0
    checkpoint_path: Path | None = None


class BatchProcessor:
    """Analyzes many notes files, optionally in parallel.

    Recordings are independent, so files finish in any order. Successfully
    analyzed files are fingerprinted (path, size, mtime) so later runs can
    skip them.

    Example:
        processor = BatchProcessor(process_func=analyze_file)
        results = processor.process_directory(Path("memos"), BatchConfig(workers=8))
    """

    def __init__(self, process_func: Callable[[Path], AnalysisResult | None]) -> None:
        """Initialize the batch processor.

        Args:
            process_func: Analyzes one notes file and stores its result.
        """
        self.process_func = process_func
        self._state = BatchState()
        self._progress = BatchProgress(total=0)

    def _get_file_hash(self, path: Path) -> str:
        stat = path.stat()
        return hashlib.md5(f"{path}:{stat.st_size}:{stat.st_mtime}".encode()).hexdigest()

    def _save_checkpoint(self) -> None:
        if not self._state.checkpoint_path:
            return

        self._state.checkpoint_path.write_text("\n".join(sorted(self._state.processed_files)))
        self._state.last_checkpoint = time.time()

    def _load_checkpoint(self, checkpoint_path: Path) -> None:
        self._state.checkpoint_path = checkpoint_path

        if checkpoint_path.exists():
            lines = checkpoint_path.read_text().split()
            self._state.processed_files = set(lines)
            logger.info(f"Resuming with {len(lines)} analyzed files from {checkpoint_path}")

    def _process_file(self, path: Path) -> ProcessingResult:
        """Run the process function on one file, capturing any failure."""
        start_time = time.time()

        try:
            result = self.process_func(path)
        except Exception as e:
            logger.exception(f"Error processing {path}: {e}")
            return ProcessingResult(
                path=path,
                success=False,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )

        duration_ms = (time.time() - start_time) * 1000

        if result is None:
            error = "Processing returned None"
        elif not result.succeeded:
            error = result.error or "Analysis failed"
        else:
            return ProcessingResult(
                path=path,
                success=True,
                recording_id=recording_id_for(path),
                duration_ms=duration_ms,
            )

        return ProcessingResult(path=path, success=False, duration_ms=duration_ms, error=error)

    def _record(self, result: ProcessingResult, config: BatchConfig) -> None:
        """Fold one finished file into the progress and state."""
        progress = self._progress
        progress.processed += 1
        progress.current_file = str(result.path)

        if result.success:
            progress.succeeded += 1
            self._state.processed_files.add(self._get_file_hash(result.path))
        else:
            progress.failed += 1

        progress.elapsed_ms = (time.time() - progress.start_time) * 1000

        if config.on_file_complete:
            config.on_file_complete(result)
        if config.on_progress:
            config.on_progress(progress)

        if progress.processed % config.checkpoint_interval == 0:
            self._save_checkpoint()

    def process_files(
        self,
        files: list[Path],
        config: BatchConfig | None = None,
        checkpoint_path: Path | None = None,
    ) -> list[ProcessingResult]:
        """Analyze a list of files.

        Args:
            files: Notes files.
            config: Batch options.
            checkpoint_path: Where analyzed-file fingerprints are kept.

        Returns:
            One result per analyzed file, in completion order.
        """
        config = config or BatchConfig()

        if checkpoint_path:
            if config.resume:
                self._load_checkpoint(checkpoint_path)
            else:
                self._state = BatchState(checkpoint_path=checkpoint_path)

        pending = [
            path
            for path in files
            if not (config.skip_existing and self._get_file_hash(path) in self._state.processed_files)
        ]

        self._progress = BatchProgress(
            total=len(pending),
            skipped=len(files) - len(pending),
            start_time=time.time(),
        )
        if config.on_progress:
            config.on_progress(self._progress)

        results: list[ProcessingResult] = []

        if config.workers > 1:
            with ThreadPoolExecutor(max_workers=config.workers) as executor:
                futures = [executor.submit(self._process_file, path) for path in pending]
                for future in as_completed(futures):
                    result = future.result()
                    results.append(result)
                    self._record(result, config)
        else:
            for path in pending:
                result = self._process_file(path)
                results.append(result)
                self._record(result, config)

        self._save_checkpoint()

        logger.info(
            f"Batch finished: {self._progress.succeeded} succeeded, "
            f"{self._progress.failed} failed, {self._progress.skipped} skipped"
        )
        return results

    def process_directory(
        self,
        directory: Path,
        config: BatchConfig | None = None,
        recursive: bool = True,
        extensions: tuple[str, ...] = NOTE_FILE_EXTENSIONS,
    ) -> list[ProcessingResult]:
        """Analyze every notes file in a directory.

        The checkpoint is kept in the directory itself.

        Args:
            directory: Directory to scan.
            config: Batch options.
            recursive: Whether to include subdirectories.
            extensions: File name endings to include.

        Returns:
            One result per analyzed file.
        """
        found: set[Path] = set()
        for ext in extensions:
            found.update(directory.rglob(f"*{ext}") if recursive else directory.glob(f"*{ext}"))

        return self.process_files(sorted(found), config, directory / CHECKPOINT_NAME)

    def get_progress(self) -> BatchProgress:
        """Running totals of the current or last batch."""
        return self._progress


def analyze_directory(
    directory: Path,
    output_dir: Path | None = None,
    analysis_config: AnalysisConfig | None = None,
    workers: int = 4,
    resume: bool = True,
    on_progress: Callable[[BatchProgress], None] | None = None,
) -> list[ProcessingResult]:
    """Analyze every notes file in a directory.

    Args:
        directory: Directory containing notes files.
        output_dir: Where analysis documents go (defaults beside each file).
        analysis_config: Analysis parameters.
        workers: Number of parallel workers.
        resume: Whether to skip files recorded in the checkpoint.
        on_progress: Optional progress callback.

    Returns:
        List of processing results.
    """
    processor = BatchProcessor(
        process_func=lambda path: analyze_file(path, output_dir, analysis_config),
    )
    config = BatchConfig(
        workers=workers,
        resume=resume,
        skip_existing=resume,
        on_progress=on_progress,
    )
    return processor.process_directory(directory, config)
