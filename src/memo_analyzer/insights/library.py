"""Headline statistics for a library of analyzed recordings."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from memo_analyzer.insights.distributions import get_key_distribution
from memo_analyzer.models.insights import LibrarySummary

if TYPE_CHECKING:
    from memo_analyzer.models.core import RecordingSummary


def summarize_library(summaries: Sequence[RecordingSummary]) -> LibrarySummary:
    """Compute quick stats for a set of recordings.

    Args:
        summaries: Per-recording summaries.

    Returns:
        Library summary.
    """
    keys = get_key_distribution(summaries)
    tempos = [s.tempo for s in summaries if s.tempo is not None]
    unique_chords = {chord for s in summaries for chord in s.chord_names}
    total_duration = sum(s.duration for s in summaries if s.duration is not None)

    average_tempo = None
    if tempos:
        average_tempo = int(math.floor(sum(tempos) / len(tempos) + 0.5))

    return LibrarySummary(
        analyzed=len(summaries),
        most_common_key=keys[0].key if keys else None,
        average_tempo=average_tempo,
        min_tempo=min(tempos) if tempos else None,
        max_tempo=max(tempos) if tempos else None,
        unique_chords=len(unique_chords),
        total_duration=float(total_duration),
    )
