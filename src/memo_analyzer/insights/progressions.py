"""Chord progressions shared between recordings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from memo_analyzer.models.insights import CommonProgression

if TYPE_CHECKING:
    from memo_analyzer.models.core import RecordingSummary

# Extra lengths mined above the minimum progression length
LENGTH_SPAN = 3
MIN_RECORDINGS = 2


@dataclass
class _Occurrences:
    count: int = 0
    recordings: dict[str, None] = field(default_factory=dict)


def iter_subsequences(chords: Sequence[str], min_length: int) -> list[tuple[str, ...]]:
    """All contiguous chord runs of length min_length to min_length + 3."""
    runs: list[tuple[str, ...]] = []
    max_length = min(min_length + LENGTH_SPAN, len(chords))
    for length in range(min_length, max_length + 1):
        for i in range(len(chords) - length + 1):
            runs.append(tuple(chords[i : i + length]))
    return runs


def find_common_progressions(
    summaries: Sequence[RecordingSummary],
    min_length: int = 3,
    limit: int = 20,
) -> list[CommonProgression]:
    """Find chord progressions that appear in at least two recordings.

    Args:
        summaries: Per-recording summaries.
        min_length: Shortest progression considered.
        limit: Maximum number of progressions returned.

    Returns:
        Progressions ranked by the number of recordings containing them,
        then by total occurrences.
    """
    if len(summaries) < MIN_RECORDINGS:
        return []

    occurrences: dict[tuple[str, ...], _Occurrences] = {}

    for summary in summaries:
        for run in iter_subsequences(summary.chord_names, min_length):
            entry = occurrences.setdefault(run, _Occurrences())
            entry.count += 1
            entry.recordings[summary.title] = None

    shared = [
        CommonProgression(
            progression=run,
            count=entry.count,
            recordings=tuple(entry.recordings),
        )
        for run, entry in occurrences.items()
        if len(entry.recordings) >= MIN_RECORDINGS
    ]
    shared.sort(key=lambda p: (len(p.recordings), p.count), reverse=True)

    return shared[:limit]
