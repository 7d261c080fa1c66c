"""Key and chord distributions across recordings."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

from memo_analyzer.models.insights import ChordCount, KeyCount

if TYPE_CHECKING:
    from memo_analyzer.models.core import RecordingSummary


def get_key_distribution(summaries: Sequence[RecordingSummary]) -> list[KeyCount]:
    """Count recordings per key, most common first.

    Recordings without a detected key are ignored. Equal counts keep the
    order in which the keys were first seen.
    """
    counts = Counter(s.key_signature for s in summaries if s.key_signature)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [KeyCount(key=key, count=count) for key, count in ranked]


def get_chord_frequency(
    summaries: Sequence[RecordingSummary],
    limit: int = 20,
) -> list[ChordCount]:
    """Count chord occurrences across all recordings, most common first."""
    counts = Counter(chord for s in summaries for chord in s.chord_names)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [ChordCount(chord=chord, count=count) for chord, count in ranked[:limit]]
