"""Pitch and note-name helpers."""

from __future__ import annotations

import re

# Pitch class names
PITCH_CLASSES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

_NOTE_NAME_RE = re.compile(r"^([A-G]#?)(-?\d+)$")


def pitch_class(midi: int) -> int:
    """Return the pitch class (0-11) of a MIDI pitch."""
    return midi % 12


def pitch_class_name(midi: int) -> str:
    """Return the pitch class name of a MIDI pitch (e.g. 60 -> 'C')."""
    return PITCH_CLASSES[midi % 12]


def midi_to_note_name(midi: int) -> str:
    """Return the scientific pitch name (e.g. 60 -> 'C4')."""
    octave = midi // 12 - 1
    return f"{PITCH_CLASSES[midi % 12]}{octave}"


def note_name_to_midi(name: str) -> int:
    """Parse a scientific pitch name into a MIDI pitch.

    Args:
        name: Note name such as 'C4' or 'F#-1'.

    Returns:
        MIDI pitch.

    Raises:
        ValueError: If the name is not a sharp-spelled note name.
    """
    match = _NOTE_NAME_RE.match(name.strip())
    if not match:
        raise ValueError(f"Invalid note name: {name}")

    note, octave = match.groups()
    return (int(octave) + 1) * 12 + PITCH_CLASSES.index(note)
