"""Qualitative harmonic tendencies of a library."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from memo_analyzer.models.insights import HarmonicTendencies

if TYPE_CHECKING:
    from memo_analyzer.models.core import RecordingSummary

NOT_ENOUGH_DATA = "Not enough data"

# Chord symbol categories
SEVENTH_RE = re.compile(r"7|9|11|13")
MINOR_RE = re.compile(r"^[A-G][#b]?m(?!aj)")
SUS_RE = re.compile(r"sus")
DIMINISHED_RE = re.compile(r"dim|°")
AUGMENTED_RE = re.compile(r"aug|\+")


def _proportion(chords: list[str], pattern: re.Pattern[str]) -> float:
    return sum(1 for chord in chords if pattern.search(chord)) / len(chords)


def get_harmonic_tendencies(summaries: Sequence[RecordingSummary]) -> HarmonicTendencies:
    """Describe the harmonic habits across all recordings.

    Proportions are taken over every chord occurrence in the library.

    Args:
        summaries: Per-recording summaries.

    Returns:
        Tendency labels and a dominant style.
    """
    chords = [chord for s in summaries for chord in s.chord_names]
    if not chords:
        return HarmonicTendencies(tendencies=(), dominant_style=NOT_ENOUGH_DATA)

    seventh = _proportion(chords, SEVENTH_RE)
    minor = _proportion(chords, MINOR_RE)
    sus = _proportion(chords, SUS_RE)
    diminished = _proportion(chords, DIMINISHED_RE)
    augmented = _proportion(chords, AUGMENTED_RE)

    tendencies: list[str] = []
    if seventh > 0.3:
        tendencies.append("Jazz-influenced harmony")
    if minor > 0.5:
        tendencies.append("Drawn to minor tonalities")
    if sus > 0.1:
        tendencies.append("Uses suspended chords for color")
    if diminished > 0.05:
        tendencies.append("Employs diminished passing chords")
    if augmented > 0.05:
        tendencies.append("Uses augmented chords for tension")
    if seventh <= 0.1 and sus <= 0.05:
        tendencies.append("Diatonic/straightforward harmony")

    if seventh > 0.4:
        style = "Jazz / Neo-Soul"
    elif minor > 0.6:
        style = "Minor-key driven"
    elif seventh <= 0.1:
        style = "Pop / Folk / Classical"
    else:
        style = "Contemporary blend"

    return HarmonicTendencies(tendencies=tuple(tendencies), dominant_style=style)
