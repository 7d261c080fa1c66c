"""Harmony, key detection, and chord analysis."""

from memo_analyzer.harmony.chords import (
    CHORD_TEMPLATES,
    Chord,
    ChordQuality,
    detect_chord_names,
    detect_chords,
    match_chords,
)
from memo_analyzer.harmony.keys import (
    KeySignature,
    Mode,
    build_pitch_class_histogram,
    correlate_profile,
    detect_key,
    key_to_string,
)
from memo_analyzer.harmony.pitch import (
    PITCH_CLASSES,
    midi_to_note_name,
    note_name_to_midi,
    pitch_class,
    pitch_class_name,
)
from memo_analyzer.harmony.progressions import (
    analyze_harmonic_rhythm,
    detect_progressions,
)

__all__ = [
    # Pitch
    "PITCH_CLASSES",
    "pitch_class",
    "pitch_class_name",
    "midi_to_note_name",
    "note_name_to_midi",
    # Chords
    "CHORD_TEMPLATES",
    "Chord",
    "ChordQuality",
    "detect_chord_names",
    "detect_chords",
    "match_chords",
    # Keys
    "KeySignature",
    "Mode",
    "build_pitch_class_histogram",
    "correlate_profile",
    "detect_key",
    "key_to_string",
    # Progressions
    "analyze_harmonic_rhythm",
    "detect_progressions",
]
