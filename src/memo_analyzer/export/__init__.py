"""MIDI export of transcribed notes."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import mido

if TYPE_CHECKING:
    from memo_analyzer.models.core import NoteEvent

DEFAULT_TICKS_PER_BEAT = 480
DEFAULT_TEMPO_BPM = 120.0


def create_midi_file(
    notes: Sequence[NoteEvent],
    name: str = "Transcription",
    *,
    tempo_bpm: float = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT,
    channel: int = 0,
) -> mido.MidiFile:
    """Build a single-track MIDI file from notes timed in seconds.

    Args:
        notes: Notes to write.
        name: Track name.
        tempo_bpm: Tempo used to convert seconds to ticks.
        ticks_per_beat: MIDI resolution (PPQ).
        channel: MIDI channel for all notes.

    Returns:
        The MIDI file, not yet saved.
    """
    tempo_us = mido.bpm2tempo(tempo_bpm)

    midi = mido.MidiFile(ticks_per_beat=ticks_per_beat)
    midi_track = mido.MidiTrack()
    midi.tracks.append(midi_track)

    midi_track.append(mido.MetaMessage("track_name", name=name, time=0))
    midi_track.append(mido.MetaMessage("set_tempo", tempo=tempo_us, time=0))

    for event in _notes_to_midi_events(notes, ticks_per_beat, tempo_us, channel):
        midi_track.append(event)

    midi_track.append(mido.MetaMessage("end_of_track", time=0))
    return midi


def export_notes(
    notes: Sequence[NoteEvent],
    output_path: Path | str,
    *,
    name: str = "Transcription",
    tempo_bpm: float = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT,
) -> Path:
    """Export notes to a MIDI file.

    Args:
        notes: Notes to write.
        output_path: Path for the output MIDI file.
        name: Track name.
        tempo_bpm: Tempo written to the file.
        ticks_per_beat: MIDI resolution (PPQ).

    Returns:
        Path to the created file.
    """
    output_path = Path(output_path)
    midi = create_midi_file(notes, name, tempo_bpm=tempo_bpm, ticks_per_beat=ticks_per_beat)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    midi.save(output_path)

    return output_path


def _notes_to_midi_events(
    notes: Sequence[NoteEvent],
    ticks_per_beat: int,
    tempo_us: int,
    channel: int,
) -> list[mido.Message]:
    """Convert notes to MIDI messages with delta times."""
    if not notes:
        return []

    events: list[tuple[int, str, int, int]] = []  # (tick, type, pitch, velocity)

    for note in notes:
        start_tick = int(round(mido.second2tick(note.time, ticks_per_beat, tempo_us)))
        end_tick = int(round(mido.second2tick(note.time + note.duration, ticks_per_beat, tempo_us)))
        end_tick = max(end_tick, start_tick + 1)

        events.append((start_tick, "note_on", note.midi, max(1, note.velocity)))
        events.append((end_tick, "note_off", note.midi, 0))

    # Offs before ons at the same tick so repeated pitches retrigger
    events.sort(key=lambda e: (e[0], 0 if e[1] == "note_off" else 1))

    messages = []
    last_tick = 0

    for tick, msg_type, pitch, velocity in events:
        messages.append(
            mido.Message(msg_type, note=pitch, velocity=velocity, channel=channel, time=tick - last_tick)
        )
        last_tick = tick

    return messages


__all__ = [
    "create_midi_file",
    "export_notes",
]
