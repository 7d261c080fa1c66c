"""Key detection using pitch-class histogram analysis."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from memo_analyzer.harmony.pitch import PITCH_CLASSES

if TYPE_CHECKING:
    from memo_analyzer.models.core import NoteEvent


class Mode(Enum):
    """Musical mode (major or minor)."""

    MAJOR = "Major"
    MINOR = "Minor"


# Krumhansl-Kessler key profiles
# Based on empirical studies of Western tonal music
MAJOR_PROFILE = (6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88)
MINOR_PROFILE = (6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17)


@dataclass(frozen=True)
class KeySignature:
    """Detected key signature.

    Attributes:
        root: Root note (0-11, where 0=C, 1=C#, etc.)
        mode: Major or minor mode.
        confidence: Confidence score (0-1).
        correlation: Correlation with key profile.
    """

    root: int
    mode: Mode
    confidence: float
    correlation: float

    @property
    def root_name(self) -> str:
        """Get the root note name."""
        return PITCH_CLASSES[self.root]

    @property
    def name(self) -> str:
        """Get the full key name (e.g., 'C Major')."""
        return key_to_string(self.root, self.mode)

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} ({self.confidence:.0%})"


def build_pitch_class_histogram(notes: Sequence[NoteEvent]) -> tuple[float, ...]:
    """Build a duration-weighted pitch-class histogram.

    Velocity is ignored.

    Args:
        notes: List of note events.

    Returns:
        Tuple of 12 values summing to 1 (all zero if there is no weight).
    """
    histogram = [0.0] * 12

    for note in notes:
        histogram[note.midi % 12] += note.duration

    total_weight = sum(histogram)
    if total_weight > 0:
        histogram = [v / total_weight for v in histogram]

    return tuple(histogram)


def correlate_profile(
    histogram: Sequence[float],
    profile: Sequence[float],
    rotation: int = 0,
) -> float:
    """Calculate Pearson correlation between histogram and a rotated profile.

    The histogram is the fixed observation; only the profile is rotated so
    that its tonic lands on pitch class ``rotation``.

    Args:
        histogram: Pitch-class histogram.
        profile: Key profile to match against.
        rotation: Candidate tonic pitch class.

    Returns:
        Correlation coefficient (-1 to 1), or 0 if either side is flat.
    """
    profile = tuple(profile)
    rotated = profile[-rotation:] + profile[:-rotation] if rotation % 12 else profile

    hist_mean = sum(histogram) / 12
    prof_mean = sum(rotated) / 12

    numerator = sum((h - hist_mean) * (p - prof_mean) for h, p in zip(histogram, rotated))
    hist_var = sum((h - hist_mean) ** 2 for h in histogram)
    prof_var = sum((p - prof_mean) ** 2 for p in rotated)

    denominator = (hist_var * prof_var) ** 0.5

    if denominator == 0:
        return 0.0

    return numerator / denominator


def detect_key(notes: Sequence[NoteEvent]) -> KeySignature | None:
    """Detect the key of a sequence of notes.

    Uses the Krumhansl-Schmuckler algorithm. Candidates are tried tonic 0..11
    with major before minor, and the first strictly best correlation wins.

    Args:
        notes: List of note events.

    Returns:
        Detected key signature, or None if there is no pitched content.
    """
    if not notes:
        return None

    histogram = build_pitch_class_histogram(notes)
    if not any(histogram):
        return None

    best_root = 0
    best_mode = Mode.MAJOR
    best_correlation = float("-inf")

    for root in range(12):
        for mode, profile in ((Mode.MAJOR, MAJOR_PROFILE), (Mode.MINOR, MINOR_PROFILE)):
            correlation = correlate_profile(histogram, profile, root)
            if correlation > best_correlation:
                best_correlation = correlation
                best_root = root
                best_mode = mode

    # Map correlation range [-1, 1] onto [0, 1]
    confidence = max(0.0, min(1.0, (best_correlation + 1) / 2))

    return KeySignature(
        root=best_root,
        mode=best_mode,
        confidence=confidence,
        correlation=best_correlation,
    )


def key_to_string(root: int, mode: Mode) -> str:
    """Convert key root and mode to string.

    Args:
        root: Root pitch class (0-11).
        mode: Major or minor.

    Returns:
        Key name string.
    """
    return f"{PITCH_CLASSES[root]} {mode.value}"
