"""Data models for cross-recording insights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class KeyCount:
    """Number of recordings in a key."""

    key: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"key": self.key, "count": self.count}


@dataclass(frozen=True)
class ChordCount:
    """Number of occurrences of a chord across the library."""

    chord: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"chord": self.chord, "count": self.count}


@dataclass(frozen=True)
class CommonProgression:
    """A chord sequence found in several recordings.

    Attributes:
        progression: Chord symbols in order
        count: Total occurrences across all recordings
        recordings: Distinct titles of recordings containing it
    """

    progression: tuple[str, ...]
    count: int
    recordings: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "progression": list(self.progression),
            "count": self.count,
            "recordings": list(self.recordings),
        }


@dataclass(frozen=True)
class SimilarRecording:
    """A pair of recordings with a similarity score.

    Attributes:
        pair: The two recording titles
        similarity: Score from 0 to 100
        reasons: Human-readable contributing factors
    """

    pair: tuple[str, str]
    similarity: int
    reasons: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "pair": list(self.pair),
            "similarity": self.similarity,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class HarmonicTendencies:
    """Qualitative description of the harmonic language of a library."""

    tendencies: tuple[str, ...]
    dominant_style: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"tendencies": list(self.tendencies), "dominant_style": self.dominant_style}


@dataclass(frozen=True)
class LibrarySummary:
    """Headline statistics for a set of analyzed recordings.

    Attributes:
        analyzed: Number of analyzed recordings
        most_common_key: Most frequent key, if any recording has one
        average_tempo: Mean tempo rounded to a whole BPM
        min_tempo: Slowest tempo
        max_tempo: Fastest tempo
        unique_chords: Number of distinct chord symbols
        total_duration: Summed length in seconds of recordings with a duration
    """

    analyzed: int
    most_common_key: str | None = None
    average_tempo: int | None = None
    min_tempo: float | None = None
    max_tempo: float | None = None
    unique_chords: int = 0
    total_duration: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "analyzed": self.analyzed,
            "most_common_key": self.most_common_key,
            "average_tempo": self.average_tempo,
            "min_tempo": self.min_tempo,
            "max_tempo": self.max_tempo,
            "unique_chords": self.unique_chords,
            "total_duration": self.total_duration,
        }
