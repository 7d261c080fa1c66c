"""Time signature detection from accent patterns."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memo_analyzer.models.core import NoteEvent

MIN_NOTES = 8
DEFAULT_TIME_SIGNATURE = "4/4"
TRIPLE_TIME_SIGNATURE = "3/4"

# Required margin for 3/4 over 4/4
TRIPLE_METER_BIAS = 1.15
ACCENT_SHARPNESS = 10.0


def accent_score(notes: Sequence[NoteEvent], beat_duration: float, beats_per_bar: int) -> float:
    """Sum velocity-weighted closeness of onsets to bar boundaries.

    Args:
        notes: Note events.
        beat_duration: Seconds per beat.
        beats_per_bar: Length of the bar cycle in beats.

    Returns:
        Unnormalized accent score.
    """
    score = 0.0
    for note in notes:
        position = (note.time / beat_duration) % beats_per_bar
        distance = min(position, beats_per_bar - position)
        score += note.velocity * math.exp(-distance * distance * ACCENT_SHARPNESS)
    return score


def detect_time_signature(
    notes: Sequence[NoteEvent],
    tempo: float | None,
    *,
    bias: float = TRIPLE_METER_BIAS,
) -> str:
    """Choose between 3/4 and 4/4.

    Only these two meters are distinguished, and 4/4 wins unless 3/4 is
    clearly stronger.

    Args:
        notes: Note events in any order.
        tempo: Tempo in BPM, or None.
        bias: Factor by which the 3/4 score must beat the 4/4 score.

    Returns:
        "3/4" or "4/4".
    """
    if not tempo or len(notes) < MIN_NOTES:
        return DEFAULT_TIME_SIGNATURE

    beat_duration = 60 / tempo
    onsets = [n.time for n in notes]
    span = max(onsets) - min(onsets)

    score3 = accent_score(notes, beat_duration, 3)
    score4 = accent_score(notes, beat_duration, 4)

    # Normalize by the number of bar cycles covered
    score3 /= max(1.0, span / (beat_duration * 3))
    score4 /= max(1.0, span / (beat_duration * 4))

    if score3 > score4 * bias:
        return TRIPLE_TIME_SIGNATURE
    return DEFAULT_TIME_SIGNATURE
