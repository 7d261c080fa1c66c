"""Harmonic rhythm and recurring progressions within one recording."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memo_analyzer.models.core import ChordEvent

PROGRESSION_SEPARATOR = " → "


def analyze_harmonic_rhythm(chords: Sequence[ChordEvent]) -> str:
    """Describe how quickly the harmony changes.

    Args:
        chords: Merged chord events.

    Returns:
        Qualitative label based on the mean chord duration.
    """
    if len(chords) < 2:
        return "static"

    avg_duration = sum(c.duration for c in chords) / len(chords)

    if avg_duration < 0.75:
        return "fast (chord per beat or faster)"
    if avg_duration < 1.5:
        return "moderate (1-2 beats per chord)"
    if avg_duration < 3:
        return "slow (1-2 bars per chord)"
    return "very slow (multi-bar)"


def detect_progressions(chords: Sequence[ChordEvent], limit: int = 5) -> list[str]:
    """Find 3- and 4-chord sequences that repeat within a recording.

    Args:
        chords: Merged chord events in time order.
        limit: Maximum number of progressions to return.

    Returns:
        Progressions such as ``"C → Am → F (×2)"``, most frequent first.
    """
    if len(chords) < 3:
        return []

    names = [c.chord for c in chords]
    counts: dict[str, int] = {}

    for i in range(len(names) - 2):
        for length in (3, 4):
            if i + length > len(names):
                continue
            pattern = PROGRESSION_SEPARATOR.join(names[i : i + length])
            counts[pattern] = counts.get(pattern, 0) + 1

    repeated = [(pattern, count) for pattern, count in counts.items() if count > 1]
    repeated.sort(key=lambda item: item[1], reverse=True)

    return [f"{pattern} (×{count})" for pattern, count in repeated[:limit]]
