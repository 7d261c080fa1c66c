"""Monophonic melody and bass-line extraction."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from memo_analyzer.models.core import NoteEvent

MELODY_WINDOW = 0.1
BASS_WINDOW = 0.25
MERGE_TOLERANCE = 0.01


def _highest(active: list[NoteEvent]) -> NoteEvent:
    return max(active, key=lambda n: n.midi)


def _lowest(active: list[NoteEvent]) -> NoteEvent:
    return min(active, key=lambda n: n.midi)


def extract_voice(
    notes: Sequence[NoteEvent],
    window: float,
    pick: Callable[[list[NoteEvent]], NoteEvent],
) -> list[NoteEvent]:
    """Reduce polyphonic notes to one pitch per time slice.

    Notes are ordered by onset, and ``pick`` selects one of the notes
    sounding in each slice; on equal pitches the earliest onset wins.
    Consecutive slices holding the same pitch merge into one note.

    Args:
        notes: Note events in any order.
        window: Slice length in seconds.
        pick: Selects the voice note among the active notes.

    Returns:
        Monophonic note events in time order.
    """
    if not notes:
        return []

    ordered = sorted(notes, key=lambda n: n.time)
    max_time = max(n.time + n.duration for n in notes)

    voice: list[NoteEvent] = []
    index = 0
    start = 0.0

    while start < max_time:
        active = [n for n in ordered if n.time <= start + window and n.time + n.duration > start]

        if active:
            chosen = pick(active)
            last = voice[-1] if voice else None
            if last and last.midi == chosen.midi and abs(last.time + last.duration - start) < MERGE_TOLERANCE:
                voice[-1] = replace(last, duration=last.duration + window)
            else:
                voice.append(replace(chosen, time=start, duration=window))

        index += 1
        start = index * window

    return voice


def extract_melody(notes: Sequence[NoteEvent], window: float = MELODY_WINDOW) -> list[NoteEvent]:
    """Extract the top voice."""
    return extract_voice(notes, window, _highest)


def extract_bass_line(notes: Sequence[NoteEvent], window: float = BASS_WINDOW) -> list[NoteEvent]:
    """Extract the bottom voice."""
    return extract_voice(notes, window, _lowest)
