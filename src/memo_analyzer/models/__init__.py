"""Data models for recording analysis."""

from memo_analyzer.models.core import (
    AnalysisResult,
    AnalysisStatus,
    ChordEvent,
    NoteEvent,
    RecordingSummary,
)
from memo_analyzer.models.insights import (
    ChordCount,
    CommonProgression,
    HarmonicTendencies,
    KeyCount,
    LibrarySummary,
    SimilarRecording,
)

__all__ = [
    "NoteEvent",
    "ChordEvent",
    "AnalysisStatus",
    "AnalysisResult",
    "RecordingSummary",
    "KeyCount",
    "ChordCount",
    "CommonProgression",
    "SimilarRecording",
    "HarmonicTendencies",
    "LibrarySummary",
]
