"""Tempo estimation from inter-onset intervals."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from memo_analyzer.models.core import NoteEvent

MIN_NOTES = 4

# Inter-onset intervals outside this open range are noise or pauses (seconds)
MIN_IOI = 0.05
MAX_IOI = 2.0

# Candidate beat durations: 240 BPM down to 40 BPM
MIN_BEAT = 60 / 240
MAX_BEAT = 60 / 40
BEAT_STEP = 0.005

BEAT_MULTIPLES = (0.5, 1.0, 2.0, 4.0)
MAX_BEATS_PER_INTERVAL = 8
KERNEL_SHARPNESS = 50.0

MIN_BPM = 50
MAX_BPM = 200


def candidate_beats() -> np.ndarray:
    """Beat durations searched by the estimator, shortest first."""
    count = int(round((MAX_BEAT - MIN_BEAT) / BEAT_STEP)) + 1
    return MIN_BEAT + BEAT_STEP * np.arange(count)


def onset_intervals(notes: Sequence[NoteEvent]) -> np.ndarray:
    """Inter-onset intervals of the sorted onsets, with outliers removed."""
    onsets = np.sort(np.array([n.time for n in notes], dtype=np.float64))
    intervals = np.diff(onsets)
    return intervals[(intervals > MIN_IOI) & (intervals < MAX_IOI)]


def score_beats(intervals: np.ndarray, beats: np.ndarray) -> np.ndarray:
    """Score how well each candidate beat explains the intervals.

    Each interval is compared against 0.5x, 1x, 2x and 4x the beat; a
    Gaussian kernel rewards ratios close to a whole number of units.

    Args:
        intervals: Inter-onset intervals in seconds.
        beats: Candidate beat durations in seconds.

    Returns:
        One score per candidate beat.
    """
    scores = np.zeros(len(beats))

    for multiple in BEAT_MULTIPLES:
        ratio = intervals[np.newaxis, :] / (beats[:, np.newaxis] * multiple)
        nearest = np.floor(ratio + 0.5)
        deviation = np.abs(ratio - nearest)
        closeness = np.exp(-deviation * deviation * KERNEL_SHARPNESS)
        valid = (nearest > 0) & (nearest <= MAX_BEATS_PER_INTERVAL)
        scores += np.where(valid, closeness, 0.0).sum(axis=1)

    return scores


def normalize_bpm(bpm: float) -> float:
    """Fold a tempo into the 50-200 BPM range by octaves."""
    while bpm < MIN_BPM:
        bpm *= 2
    while bpm > MAX_BPM:
        bpm /= 2
    return bpm


def estimate_tempo(notes: Sequence[NoteEvent]) -> int | None:
    """Estimate a single tempo for a recording.

    Args:
        notes: Note events in any order.

    Returns:
        Tempo in whole BPM within 50-200, or None with too little rhythm.
    """
    if len(notes) < MIN_NOTES:
        return None

    intervals = onset_intervals(notes)
    if intervals.size == 0:
        return None

    beats = candidate_beats()
    scores = score_beats(intervals, beats)

    # argmax keeps the first (fastest) beat on ties
    best_beat = float(beats[int(np.argmax(scores))])

    bpm = normalize_bpm(60 / best_beat)
    return int(math.floor(bpm + 0.5))
