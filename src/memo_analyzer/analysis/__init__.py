"""Tempo, meter, voice, and whole-recording analysis."""

from memo_analyzer.analysis.analyzer import Analyzer, analyze_notes
from memo_analyzer.analysis.meter import detect_time_signature
from memo_analyzer.analysis.tempo import estimate_tempo
from memo_analyzer.analysis.voices import extract_bass_line, extract_melody, extract_voice

__all__ = [
    # Pipeline
    "Analyzer",
    "analyze_notes",
    # Rhythm
    "estimate_tempo",
    "detect_time_signature",
    # Voices
    "extract_voice",
    "extract_melody",
    "extract_bass_line",
]
