"""Single-recording analysis pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from memo_analyzer.analysis.meter import detect_time_signature
from memo_analyzer.analysis.tempo import estimate_tempo
from memo_analyzer.analysis.voices import extract_bass_line, extract_melody
from memo_analyzer.config import DEFAULT_CONFIG, AnalysisConfig
from memo_analyzer.harmony.chords import detect_chords
from memo_analyzer.harmony.keys import detect_key
from memo_analyzer.harmony.progressions import analyze_harmonic_rhythm, detect_progressions
from memo_analyzer.models.core import AnalysisResult, AnalysisStatus, NoteEvent

logger = logging.getLogger(__name__)


class Analyzer:
    """Turns a recording's notes into an AnalysisResult.

    The analyzer holds only configuration, so one instance can be shared
    across threads and recordings.

    Example:
        analyzer = Analyzer()
        result = analyzer.analyze(notes)
        print(result.key_signature, result.tempo)
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        """Initialize the analyzer.

        Args:
            config: Analysis parameters (defaults if omitted).
        """
        self.config = config or DEFAULT_CONFIG

    def analyze(self, notes: Sequence[NoteEvent]) -> AnalysisResult:
        """Analyze one recording.

        Always completes; missing information shows up as null fields.

        Args:
            notes: Transcribed notes in any order.

        Returns:
            Completed analysis result.
        """
        config = self.config
        notes = tuple(notes)

        # Tempo feeds both chord windows and meter detection
        tempo = estimate_tempo(notes)
        key = detect_key(notes)
        chords = detect_chords(notes, tempo, fallback_window=config.chord_fallback_window)
        time_signature = detect_time_signature(notes, tempo, bias=config.triple_meter_bias)
        melody = extract_melody(notes, config.melody_window)
        bass_line = extract_bass_line(notes, config.bass_window)
        harmonic_rhythm = analyze_harmonic_rhythm(chords)
        progressions = detect_progressions(chords, limit=config.max_local_progressions)

        logger.debug(
            f"Analyzed {len(notes)} notes: key={key.name if key else None}, "
            f"tempo={tempo}, time_signature={time_signature}, chords={len(chords)}"
        )

        return AnalysisResult(
            status=AnalysisStatus.COMPLETED,
            key_signature=key.name if key else None,
            key_confidence=key.confidence if key else 0.0,
            tempo=tempo,
            time_signature=time_signature,
            chords=tuple(chords),
            notes=notes,
            melody=tuple(melody),
            bass_line=tuple(bass_line),
            harmonic_rhythm=harmonic_rhythm,
            progressions=tuple(progressions),
            midi_data=None,
        )


def analyze_notes(
    notes: Sequence[NoteEvent],
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Convenience function to analyze one recording.

    Args:
        notes: Transcribed notes in any order.
        config: Analysis parameters.

    Returns:
        Completed analysis result.
    """
    return Analyzer(config).analyze(notes)
