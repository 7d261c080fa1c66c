"""Piano Memo Analyzer - music-theory analysis of transcribed piano recordings."""

from memo_analyzer.analysis.analyzer import Analyzer, analyze_notes
from memo_analyzer.config import AnalysisConfig, load_config
from memo_analyzer.models.core import (
    AnalysisResult,
    AnalysisStatus,
    ChordEvent,
    NoteEvent,
    RecordingSummary,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Analyzer",
    "analyze_notes",
    "AnalysisConfig",
    "load_config",
    "AnalysisResult",
    "AnalysisStatus",
    "ChordEvent",
    "NoteEvent",
    "RecordingSummary",
]
