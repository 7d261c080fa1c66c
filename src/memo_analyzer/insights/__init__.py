"""Cross-recording insights over many analyses."""

from memo_analyzer.insights.distributions import get_chord_frequency, get_key_distribution
from memo_analyzer.insights.library import summarize_library
from memo_analyzer.insights.progressions import find_common_progressions, iter_subsequences
from memo_analyzer.insights.similarity import (
    chord_overlap,
    compare_recordings,
    find_similar_recordings,
)
from memo_analyzer.insights.tendencies import get_harmonic_tendencies

__all__ = [
    # Distributions
    "get_key_distribution",
    "get_chord_frequency",
    "summarize_library",
    # Progressions
    "find_common_progressions",
    "iter_subsequences",
    # Similarity
    "chord_overlap",
    "compare_recordings",
    "find_similar_recordings",
    # Tendencies
    "get_harmonic_tendencies",
]
