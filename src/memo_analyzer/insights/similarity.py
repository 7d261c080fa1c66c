"""Pairwise similarity between recordings."""

from __future__ import annotations

import math
from collections.abc import Sequence
from itertools import combinations
from typing import TYPE_CHECKING

from memo_analyzer.models.insights import SimilarRecording

if TYPE_CHECKING:
    from memo_analyzer.models.core import RecordingSummary

SAME_KEY_SCORE = 30
SIMILAR_TEMPO_SCORE = 20
SIMILAR_TEMPO_BPM = 10
CHORD_OVERLAP_WEIGHT = 50
MIN_CHORD_OVERLAP = 0.5
MIN_SIMILARITY = 30


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def chord_overlap(a: RecordingSummary, b: RecordingSummary) -> tuple[int, float]:
    """Shared chord count and Jaccard overlap of two recordings' chord sets."""
    chords_a = set(a.chord_names)
    chords_b = set(b.chord_names)
    union = chords_a | chords_b
    shared = len(chords_a & chords_b)
    return shared, (shared / len(union) if union else 0.0)


def compare_recordings(a: RecordingSummary, b: RecordingSummary) -> SimilarRecording:
    """Score the similarity of two recordings.

    Every contribution is symmetric in ``a`` and ``b``, and the pair titles
    are stored in sorted order.

    Args:
        a: First recording.
        b: Second recording.

    Returns:
        Score (0-100) with one reason per contributing factor.
    """
    score = 0
    reasons: list[str] = []

    if a.key_signature and a.key_signature == b.key_signature:
        score += SAME_KEY_SCORE
        reasons.append(f"Same key: {a.key_signature}")

    if a.tempo and b.tempo and abs(a.tempo - b.tempo) < SIMILAR_TEMPO_BPM:
        score += SIMILAR_TEMPO_SCORE
        reasons.append(f"Similar tempo (~{_round_half_up((a.tempo + b.tempo) / 2)} BPM)")

    shared, overlap = chord_overlap(a, b)
    if overlap > MIN_CHORD_OVERLAP:
        score += _round_half_up(overlap * CHORD_OVERLAP_WEIGHT)
        reasons.append(f"{shared} shared chords ({_round_half_up(overlap * 100)}% overlap)")

    first, second = sorted((a.title, b.title))
    return SimilarRecording(pair=(first, second), similarity=score, reasons=tuple(reasons))


def find_similar_recordings(
    summaries: Sequence[RecordingSummary],
    limit: int = 15,
) -> list[SimilarRecording]:
    """Find the most similar pairs of recordings.

    Compares every pair, so cost grows quadratically with library size.

    Args:
        summaries: Per-recording summaries.
        limit: Maximum number of pairs returned.

    Returns:
        Pairs scoring at least 30, highest first.
    """
    similar: list[SimilarRecording] = []

    for a, b in combinations(summaries, 2):
        result = compare_recordings(a, b)
        if result.similarity >= MIN_SIMILARITY and result.reasons:
            similar.append(result)

    similar.sort(key=lambda s: s.similarity, reverse=True)
    return similar[:limit]
