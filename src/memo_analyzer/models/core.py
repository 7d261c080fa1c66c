"""Core data models for recording analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AnalysisStatus(str, Enum):
    """Outcome of an analysis run."""

    COMPLETED = "completed"
    ERROR = "error"


def _require_int(data: dict[str, Any], name: str, low: int, high: int) -> int:
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value):
        raise ValueError(f"Invalid note {name}: {value!r}")
    value = int(value)
    if not low <= value <= high:
        raise ValueError(f"Note {name} out of range {low}-{high}: {value}")
    return value


def _require_float(data: dict[str, Any], name: str, kind: str = "note") -> float:
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Invalid {kind} {name}: {value!r}")
    return float(value)


def _optional_float(data: dict[str, Any], name: str, kind: str) -> float | None:
    if data.get(name) is None:
        return None
    return _require_float(data, name, kind)


def _optional_str(data: dict[str, Any], name: str, kind: str) -> str | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Invalid {kind} {name}: {value!r}")
    return value


@dataclass(frozen=True)
class NoteEvent:
    """A single transcribed note with second-based timing.

    Attributes:
        midi: MIDI pitch (0-127)
        time: Onset in seconds from the start of the recording
        duration: Duration in seconds
        velocity: Note velocity (0-127)
    """

    midi: int
    time: float
    duration: float
    velocity: int

    @property
    def end(self) -> float:
        """Time at which the note stops sounding."""
        return self.time + self.duration

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "midi": self.midi,
            "time": self.time,
            "duration": self.duration,
            "velocity": self.velocity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NoteEvent:
        """Build a note from a plain mapping.

        Raises:
            ValueError: If a field is missing or outside its valid range.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid note event: {data!r}")

        midi = _require_int(data, "midi", 0, 127)
        velocity = _require_int(data, "velocity", 0, 127)
        time = _require_float(data, "time")
        duration = _require_float(data, "duration")

        if time < 0:
            raise ValueError(f"Note time must be >= 0: {time}")
        if duration <= 0:
            raise ValueError(f"Note duration must be > 0: {duration}")

        return cls(midi=midi, time=time, duration=duration, velocity=velocity)


@dataclass(frozen=True)
class ChordEvent:
    """A chord symbol spanning a time range.

    Attributes:
        chord: Chord symbol (e.g. "Cmaj7") or slash-joined pitch classes
        time: Start time in seconds
        duration: Duration in seconds
    """

    chord: str
    time: float
    duration: float

    @property
    def end(self) -> float:
        """End time in seconds."""
        return self.time + self.duration

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"chord": self.chord, "time": self.time, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChordEvent:
        """Build a chord event from a plain mapping.

        Raises:
            ValueError: If the chord name is missing or a timing field is not a number.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid chord event: {data!r}")

        chord = data.get("chord")
        if not isinstance(chord, str) or not chord:
            raise ValueError(f"Invalid chord name: {chord!r}")

        time = _optional_float(data, "time", "chord")
        duration = _optional_float(data, "duration", "chord")
        return cls(
            chord=chord,
            time=time if time is not None else 0.0,
            duration=duration if duration is not None else 0.0,
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis of one recording.

    A result is produced once per analysis run and never modified. Insufficient
    data shows up as null or empty fields on a completed result; the error
    status is reserved for input that could not be analyzed at all.

    Attributes:
        status: Completed or error
        key_signature: Detected key (e.g. "C Major") or None
        key_confidence: Key confidence (0-1)
        tempo: Tempo in BPM or None
        time_signature: "4/4" or "3/4" (None on error results)
        chords: Merged chord events in time order
        notes: The analyzed notes
        melody: Monophonic top voice
        bass_line: Monophonic bottom voice
        harmonic_rhythm: Qualitative harmonic rhythm label
        progressions: Recurring chord patterns within this recording
        midi_data: Reserved, always None
        error: Failure reason for error results
    """

    status: AnalysisStatus
    key_signature: str | None
    key_confidence: float
    tempo: int | None
    time_signature: str | None
    chords: tuple[ChordEvent, ...] = ()
    notes: tuple[NoteEvent, ...] = ()
    melody: tuple[NoteEvent, ...] = ()
    bass_line: tuple[NoteEvent, ...] = ()
    harmonic_rhythm: str | None = None
    progressions: tuple[str, ...] = ()
    midi_data: dict[str, Any] | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the analysis completed."""
        return self.status == AnalysisStatus.COMPLETED

    @classmethod
    def failed(cls, reason: str) -> AnalysisResult:
        """Build an error result carrying the failure reason."""
        return cls(
            status=AnalysisStatus.ERROR,
            key_signature=None,
            key_confidence=0.0,
            tempo=None,
            time_signature=None,
            error=reason,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain nested data for storage or prompts."""
        data: dict[str, Any] = {
            "status": self.status.value,
            "key_signature": self.key_signature,
            "key_confidence": self.key_confidence,
            "tempo": self.tempo,
            "time_signature": self.time_signature,
            "chords": [c.to_dict() for c in self.chords],
            "notes": [n.to_dict() for n in self.notes],
            "melody": [n.to_dict() for n in self.melody],
            "bass_line": [n.to_dict() for n in self.bass_line],
            "harmonic_rhythm": self.harmonic_rhythm,
            "progressions": list(self.progressions),
            "midi_data": self.midi_data,
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        """Restore a result from its dictionary form."""
        return cls(
            status=AnalysisStatus(data.get("status", "completed")),
            key_signature=data.get("key_signature"),
            key_confidence=float(data.get("key_confidence") or 0.0),
            tempo=data.get("tempo"),
            time_signature=data.get("time_signature"),
            chords=tuple(ChordEvent.from_dict(c) for c in data.get("chords") or []),
            notes=tuple(NoteEvent.from_dict(n) for n in data.get("notes") or []),
            melody=tuple(NoteEvent.from_dict(n) for n in data.get("melody") or []),
            bass_line=tuple(NoteEvent.from_dict(n) for n in data.get("bass_line") or []),
            harmonic_rhythm=data.get("harmonic_rhythm"),
            progressions=tuple(data.get("progressions") or []),
            midi_data=data.get("midi_data"),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class RecordingSummary:
    """The slice of a stored analysis used for cross-recording insights.

    Attributes:
        id: Recording identifier
        title: Human-readable recording title
        key_signature: Detected key or None
        tempo: Tempo in BPM or None
        chords: Chord events of the recording
        duration: Recording length in seconds, if known
    """

    id: str
    title: str
    key_signature: str | None = None
    tempo: float | None = None
    chords: tuple[ChordEvent, ...] = ()
    duration: float | None = None

    @property
    def chord_names(self) -> list[str]:
        """Chord symbols in time order."""
        return [c.chord for c in self.chords]

    @classmethod
    def from_analysis(
        cls,
        result: AnalysisResult,
        id: str,
        title: str,
        duration: float | None = None,
    ) -> RecordingSummary:
        """Build a summary from a freshly computed analysis."""
        if duration is None and result.notes:
            duration = max(n.end for n in result.notes)
        return cls(
            id=id,
            title=title,
            key_signature=result.key_signature,
            tempo=result.tempo,
            chords=result.chords,
            duration=duration,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RecordingSummary:
        """Build a summary from a stored analysis document.

        Raises:
            ValueError: If the key, tempo, duration or a chord entry is malformed.
        """
        recording_id = str(data.get("id") or data.get("recording_id") or "")

        chords = data.get("chords") or []
        if not isinstance(chords, list):
            raise ValueError(f"Invalid recording chords: {chords!r}")

        return cls(
            id=recording_id,
            title=str(data.get("title") or recording_id),
            key_signature=_optional_str(data, "key_signature", "recording"),
            tempo=_optional_float(data, "tempo", "recording"),
            chords=tuple(ChordEvent.from_dict(c) for c in chords),
            duration=_optional_float(data, "duration", "recording"),
        )
