"""Chord naming and windowed chord detection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from memo_analyzer.harmony.pitch import PITCH_CLASSES
from memo_analyzer.models.core import ChordEvent

if TYPE_CHECKING:
    from memo_analyzer.models.core import NoteEvent

logger = logging.getLogger(__name__)

# Window used when no tempo is known (seconds)
DEFAULT_WINDOW_SECONDS = 0.5
# Maximum gap between windows that still counts as contiguous (seconds)
MERGE_TOLERANCE = 0.01
# Number of loudest notes used for the last-resort lookup
STRONGEST_NOTE_COUNT = 4


class ChordQuality(Enum):
    """Chord quality, valued by its symbol suffix."""

    MAJOR = ""
    MINOR = "m"
    DIMINISHED = "dim"
    AUGMENTED = "aug"
    POWER = "5"
    SUSPENDED_2 = "sus2"
    SUSPENDED_4 = "sus4"
    MAJOR_6 = "6"
    MINOR_6 = "m6"
    DOMINANT_7 = "7"
    MAJOR_7 = "maj7"
    MINOR_7 = "m7"
    MINOR_MAJOR_7 = "mMaj7"
    DIMINISHED_7 = "dim7"
    HALF_DIMINISHED_7 = "m7b5"
    DOMINANT_7_SUS_4 = "7sus4"
    ADD_9 = "add9"
    DOMINANT_9 = "9"
    MAJOR_9 = "maj9"
    MINOR_9 = "m9"


# Chord templates: pitch class intervals from root, in lookup priority order
CHORD_TEMPLATES: dict[ChordQuality, frozenset[int]] = {
    ChordQuality.MAJOR: frozenset({0, 4, 7}),
    ChordQuality.MINOR: frozenset({0, 3, 7}),
    ChordQuality.DIMINISHED: frozenset({0, 3, 6}),
    ChordQuality.AUGMENTED: frozenset({0, 4, 8}),
    ChordQuality.POWER: frozenset({0, 7}),
    ChordQuality.SUSPENDED_2: frozenset({0, 2, 7}),
    ChordQuality.SUSPENDED_4: frozenset({0, 5, 7}),
    ChordQuality.DOMINANT_7: frozenset({0, 4, 7, 10}),
    ChordQuality.MAJOR_7: frozenset({0, 4, 7, 11}),
    ChordQuality.MINOR_7: frozenset({0, 3, 7, 10}),
    ChordQuality.MINOR_MAJOR_7: frozenset({0, 3, 7, 11}),
    ChordQuality.DIMINISHED_7: frozenset({0, 3, 6, 9}),
    ChordQuality.HALF_DIMINISHED_7: frozenset({0, 3, 6, 10}),
    ChordQuality.MAJOR_6: frozenset({0, 4, 7, 9}),
    ChordQuality.MINOR_6: frozenset({0, 3, 7, 9}),
    ChordQuality.DOMINANT_7_SUS_4: frozenset({0, 5, 7, 10}),
    ChordQuality.ADD_9: frozenset({0, 2, 4, 7}),
    ChordQuality.DOMINANT_9: frozenset({0, 2, 4, 7, 10}),
    ChordQuality.MAJOR_9: frozenset({0, 2, 4, 7, 11}),
    ChordQuality.MINOR_9: frozenset({0, 2, 3, 7, 10}),
}


@dataclass(frozen=True)
class Chord:
    """A named chord.

    Attributes:
        root: Root pitch class (0-11).
        quality: Chord quality/type.
        bass: Bass note pitch class if different from root (for inversions).
    """

    root: int
    quality: ChordQuality
    bass: int | None = None

    @property
    def root_name(self) -> str:
        """Get root note name."""
        return PITCH_CLASSES[self.root]

    @property
    def name(self) -> str:
        """Get full chord name (e.g., 'Cmaj7', 'Am/C', 'CM/E')."""
        if self.bass is None or self.bass == self.root:
            return f"{self.root_name}{self.quality.value}"

        # Slash names always carry a quality so 'C/E' stays a bare pitch-class list
        suffix = self.quality.value or "M"
        return f"{self.root_name}{suffix}/{PITCH_CLASSES[self.bass]}"

    def __str__(self) -> str:
        """String representation."""
        return self.name


def match_chords(pitch_classes: Sequence[int], bass: int | None = None) -> list[Chord]:
    """Find every template that spells exactly the given pitch classes.

    Args:
        pitch_classes: Pitch classes present; order sets the root search order.
        bass: Sounding bass pitch class, used for inversions and ranking.

    Returns:
        Matching chords, root-position matches first, then template order.
    """
    unique = list(dict.fromkeys(pc % 12 for pc in pitch_classes))
    if bass is not None and bass in unique:
        unique.remove(bass)
        unique.insert(0, bass)

    pc_set = frozenset(unique)
    ranked: list[tuple[int, int, int, Chord]] = []

    for root_order, root in enumerate(unique):
        intervals = frozenset((pc - root) % 12 for pc in pc_set)
        for template_order, (quality, template) in enumerate(CHORD_TEMPLATES.items()):
            if intervals != template:
                continue
            in_root_position = bass is None or bass == root
            ranked.append((
                0 if in_root_position else 1,
                template_order,
                root_order,
                Chord(root=root, quality=quality, bass=bass),
            ))

    ranked.sort(key=lambda item: item[:3])
    return [item[3] for item in ranked]


def detect_chord_names(pitch_classes: Sequence[int], bass: int | None = None) -> list[str]:
    """Name the chords spelled by a pitch-class set.

    Args:
        pitch_classes: Pitch classes present.
        bass: Optional bass pitch class; adds slash names for inversions.

    Returns:
        Chord symbols, best first. Empty if nothing matches.
    """
    return [chord.name for chord in match_chords(pitch_classes, bass)]


def _name_window(active: list[NoteEvent]) -> str | None:
    """Pick a chord symbol for the notes sounding in one window."""
    by_pitch = sorted(active, key=lambda n: n.midi)
    pitch_classes = list(dict.fromkeys(n.midi % 12 for n in by_pitch))

    if len(pitch_classes) < 2:
        return None

    bass = by_pitch[0].midi % 12

    # Bass-first lookup over the full set catches inversions
    names = detect_chord_names(pitch_classes, bass=bass)
    if names:
        return names[0]

    # Fall back to the loudest notes only
    strongest = sorted(active, key=lambda n: n.velocity, reverse=True)[:STRONGEST_NOTE_COUNT]
    strong_pcs = list(dict.fromkeys(n.midi % 12 for n in strongest))
    if len(strong_pcs) < 2:
        return None

    names = detect_chord_names(strong_pcs)
    if names:
        return names[0]

    return "/".join(PITCH_CLASSES[pc] for pc in strong_pcs)


def detect_chords(
    notes: Sequence[NoteEvent],
    tempo: float | None = None,
    *,
    fallback_window: float = DEFAULT_WINDOW_SECONDS,
) -> list[ChordEvent]:
    """Detect chords over consecutive non-overlapping windows.

    The window is one beat when the tempo is known. Windows with fewer than
    two pitch classes are skipped, and consecutive windows with the same
    chord are merged into one event.

    Args:
        notes: Note events in any order.
        tempo: Tempo in BPM, if known.
        fallback_window: Window size in seconds when tempo is unknown.

    Returns:
        Merged chord events in time order.
    """
    if not notes:
        return []

    window = 60 / tempo if tempo else fallback_window
    max_time = max(n.time + n.duration for n in notes)

    chords: list[ChordEvent] = []
    index = 0
    start = 0.0

    while start < max_time:
        end = start + window
        active = [n for n in notes if n.time < end and n.time + n.duration > start]

        name = _name_window(active) if active else None
        if name is not None:
            last = chords[-1] if chords else None
            if last and last.chord == name and abs(last.time + last.duration - start) < MERGE_TOLERANCE:
                chords[-1] = replace(last, duration=last.duration + window)
            else:
                chords.append(ChordEvent(chord=name, time=start, duration=window))

        index += 1
        start = index * window

    logger.debug(f"Detected {len(chords)} chord events with {window:.3f}s windows")
    return chords
