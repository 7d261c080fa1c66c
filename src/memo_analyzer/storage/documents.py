"""Analysis documents stored as JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from memo_analyzer.models.core import AnalysisResult, AnalysisStatus, RecordingSummary

logger = logging.getLogger(__name__)

ANALYSIS_SUFFIX = ".analysis.json"


def analysis_path(directory: Path | str, recording_id: str) -> Path:
    """Path of the analysis document for a recording."""
    return Path(directory) / f"{recording_id}{ANALYSIS_SUFFIX}"


def build_document(
    result: AnalysisResult,
    *,
    recording_id: str,
    title: str | None = None,
) -> dict[str, Any]:
    """Wrap an analysis result with the recording it belongs to."""
    document: dict[str, Any] = {"id": recording_id, "title": title or recording_id}
    document.update(result.to_dict())
    if result.notes:
        document["duration"] = max(n.end for n in result.notes)
    return document


def save_analysis(
    result: AnalysisResult,
    output_path: Path | str,
    *,
    recording_id: str,
    title: str | None = None,
) -> Path:
    """Write an analysis document, replacing any previous one.

    Args:
        result: Analysis to store.
        output_path: Destination JSON file.
        recording_id: Recording identifier.
        title: Recording title (defaults to the identifier).

    Returns:
        Path to the written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    document = build_document(result, recording_id=recording_id, title=title)
    output_path.write_text(json.dumps(document, indent=2, ensure_ascii=False))
    return output_path


def load_document(file_path: Path | str) -> dict[str, Any]:
    """Read an analysis document.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a JSON object.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Analysis file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse analysis JSON {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Analysis file must contain a JSON object: {file_path}")

    return data


def load_analysis(file_path: Path | str) -> AnalysisResult:
    """Read an analysis result back from its document."""
    return AnalysisResult.from_dict(load_document(file_path))


def load_summaries(directory: Path | str, recursive: bool = False) -> list[RecordingSummary]:
    """Load recording summaries from every analysis document in a directory.

    Documents with an error status are skipped. Files are read in name order.

    Args:
        directory: Directory containing ``*.analysis.json`` files.
        recursive: Whether to scan subdirectories.

    Returns:
        Summaries of completed analyses.
    """
    directory = Path(directory)
    pattern = f"**/*{ANALYSIS_SUFFIX}" if recursive else f"*{ANALYSIS_SUFFIX}"

    summaries: list[RecordingSummary] = []
    for file_path in sorted(directory.glob(pattern)):
        data = load_document(file_path)
        if data.get("status") == AnalysisStatus.ERROR.value:
            logger.info(f"Skipping failed analysis {file_path.name}")
            continue

        data.setdefault("id", file_path.name[: -len(ANALYSIS_SUFFIX)])
        try:
            summaries.append(RecordingSummary.from_dict(data))
        except ValueError as e:
            raise ValueError(f"Malformed analysis {file_path}: {e}") from e

    logger.debug(f"Loaded {len(summaries)} summaries from {directory}")
    return summaries
