"""Loading transcribed notes from JSON or MIDI files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import mido

from memo_analyzer.models.core import NoteEvent

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
MIDI_SUFFIXES = (".mid", ".midi")


def parse_notes(data: Any) -> list[NoteEvent]:
    """Validate plain note data from a transcription step.

    Accepts either a list of note mappings or a mapping with a ``notes`` list.

    Args:
        data: Decoded JSON data.

    Returns:
        Note events in input order.

    Raises:
        ValueError: If the data is not a note list or a note is malformed.
    """
    if isinstance(data, dict) and "notes" in data:
        data = data["notes"]

    if not isinstance(data, list):
        raise ValueError(f"Expected a list of notes, got {type(data).__name__}")

    notes = []
    for i, item in enumerate(data):
        try:
            notes.append(NoteEvent.from_dict(item))
        except ValueError as e:
            raise ValueError(f"Note {i}: {e}") from e

    return notes


def load_notes_json(file_path: Path | str) -> list[NoteEvent]:
    """Load notes from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not valid note JSON.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Notes file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse notes JSON: {e}") from e

    notes = parse_notes(data)
    logger.debug(f"Loaded {len(notes)} notes from {file_path}")
    return notes


def load_notes_midi(file_path: Path | str) -> list[NoteEvent]:
    """Load notes from a MIDI file with timing in seconds.

    All tracks are merged; tempo changes are honored.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a valid MIDI file.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"MIDI file not found: {file_path}")

    try:
        midi_file = mido.MidiFile(file_path)
    except Exception as e:
        raise ValueError(f"Failed to parse MIDI file: {e}") from e

    # Track active notes ((pitch, channel) -> (start_seconds, velocity))
    active_notes: dict[tuple[int, int], tuple[float, int]] = {}
    notes: list[NoteEvent] = []
    current_time = 0.0

    # Iterating a MidiFile yields merged messages with delta times in seconds
    for msg in midi_file:
        current_time += msg.time

        if msg.type == "note_on" and msg.velocity > 0:
            active_notes[(msg.note, msg.channel)] = (current_time, msg.velocity)

        elif msg.type == "note_off" or (msg.type == "note_on" and msg.velocity == 0):
            key = (msg.note, msg.channel)
            if key not in active_notes:
                continue
            start, velocity = active_notes.pop(key)
            duration = current_time - start
            if duration <= 0:
                continue
            notes.append(NoteEvent(midi=msg.note, time=start, duration=duration, velocity=velocity))

    notes.sort(key=lambda n: (n.time, n.midi))
    logger.debug(f"Loaded {len(notes)} notes from {file_path}")
    return notes


def load_notes(file_path: Path | str) -> list[NoteEvent]:
    """Load notes from a JSON or MIDI file based on its extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the format is unsupported or the content is invalid.
    """
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()

    if suffix in MIDI_SUFFIXES:
        return load_notes_midi(file_path)
    if suffix in JSON_SUFFIXES:
        return load_notes_json(file_path)

    raise ValueError(f"Unsupported notes file: {file_path.name}")
