"""Tests for core data models."""

import pytest

from memo_analyzer.models import (
    AnalysisResult,
    AnalysisStatus,
    ChordEvent,
    CommonProgression,
    HarmonicTendencies,
    NoteEvent,
    RecordingSummary,
    SimilarRecording,
)


class TestNoteEvent:
    """Tests for NoteEvent dataclass."""

    def test_end(self):
        """Test end time."""
        assert NoteEvent(midi=60, time=1.5, duration=0.5, velocity=90).end == 2.0

    def test_from_dict(self):
        """Test parsing a valid note."""
        note = NoteEvent.from_dict({"midi": 60, "time": 0, "duration": 1, "velocity": 90})

        assert note == NoteEvent(midi=60, time=0.0, duration=1.0, velocity=90)
        assert isinstance(note.time, float)

    def test_integral_float_pitch_accepted(self):
        """Test that 60.0 is accepted as a pitch."""
        assert NoteEvent.from_dict({"midi": 60.0, "time": 0, "duration": 1, "velocity": 90}).midi == 60

    @pytest.mark.parametrize(
        "data",
        [
            {"midi": 128, "time": 0, "duration": 1, "velocity": 90},
            {"midi": 60.5, "time": 0, "duration": 1, "velocity": 90},
            {"midi": "C4", "time": 0, "duration": 1, "velocity": 90},
            {"midi": 60, "time": -1, "duration": 1, "velocity": 90},
            {"midi": 60, "time": 0, "duration": 0, "velocity": 90},
            {"midi": 60, "time": 0, "duration": 1, "velocity": 200},
            {"midi": 60, "time": 0, "duration": 1},
            {"midi": True, "time": 0, "duration": 1, "velocity": 90},
        ],
    )
    def test_invalid_notes(self, data):
        """Test that malformed notes are rejected."""
        with pytest.raises(ValueError):
            NoteEvent.from_dict(data)

    def test_not_a_mapping(self):
        """Test that non-dict input is rejected."""
        with pytest.raises(ValueError):
            NoteEvent.from_dict([60, 0, 1, 90])

    def test_frozen(self):
        """Test that notes are immutable."""
        note = NoteEvent(midi=60, time=0.0, duration=1.0, velocity=90)
        with pytest.raises(AttributeError):
            note.midi = 61


class TestChordEvent:
    """Tests for ChordEvent dataclass."""

    def test_from_dict(self):
        """Test parsing a stored chord."""
        chord = ChordEvent.from_dict({"chord": "Am", "time": 1, "duration": 0.5})

        assert chord == ChordEvent(chord="Am", time=1.0, duration=0.5)
        assert chord.end == 1.5

    def test_missing_timing_defaults_to_zero(self):
        """Test that absent timing fields default to zero."""
        assert ChordEvent.from_dict({"chord": "C"}) == ChordEvent(chord="C", time=0.0, duration=0.0)

    @pytest.mark.parametrize(
        "data",
        [
            {"time": 0},
            {"chord": "", "time": 0, "duration": 1},
            {"chord": 7, "time": 0, "duration": 1},
            {"chord": "C", "time": "soon", "duration": 1},
            {"chord": "C", "time": 0, "duration": [1]},
            "C",
        ],
    )
    def test_invalid_chords(self, data):
        """Test that malformed chord entries raise ValueError."""
        with pytest.raises(ValueError):
            ChordEvent.from_dict(data)

    def test_error_names_field(self):
        """Test that the message names the missing chord name."""
        with pytest.raises(ValueError, match="chord name"):
            ChordEvent.from_dict({"time": 0})


class TestAnalysisResult:
    """Tests for AnalysisResult dataclass."""

    @pytest.fixture
    def result(self):
        """A populated result."""
        note = NoteEvent(midi=60, time=0.0, duration=2.0, velocity=80)
        return AnalysisResult(
            status=AnalysisStatus.COMPLETED,
            key_signature="C Major",
            key_confidence=0.8,
            tempo=120,
            time_signature="4/4",
            chords=(ChordEvent(chord="C", time=0.0, duration=2.0),),
            notes=(note,),
            melody=(note,),
            bass_line=(note,),
            harmonic_rhythm="static",
            progressions=(),
        )

    def test_to_dict(self, result):
        """Test serialization."""
        data = result.to_dict()

        assert data["status"] == "completed"
        assert data["chords"] == [{"chord": "C", "time": 0.0, "duration": 2.0}]
        assert data["midi_data"] is None
        assert "error" not in data

    def test_from_dict(self, result):
        """Test restoring a serialized result."""
        assert AnalysisResult.from_dict(result.to_dict()) == result

    def test_failed(self):
        """Test error results."""
        result = AnalysisResult.failed("Note 0: bad")

        assert not result.succeeded
        assert result.status == AnalysisStatus.ERROR
        assert result.time_signature is None
        assert result.to_dict()["error"] == "Note 0: bad"


class TestRecordingSummary:
    """Tests for RecordingSummary dataclass."""

    def test_from_analysis(self):
        """Test building a summary from a result."""
        result = AnalysisResult(
            status=AnalysisStatus.COMPLETED,
            key_signature="A Minor",
            key_confidence=0.7,
            tempo=90,
            time_signature="3/4",
            chords=(ChordEvent("Am", 0.0, 1.0), ChordEvent("E", 1.0, 1.0)),
            notes=(NoteEvent(57, 0.0, 1.0, 80), NoteEvent(52, 1.0, 2.5, 80)),
        )

        summary = RecordingSummary.from_analysis(result, id="memo-1", title="Memo 1")

        assert summary.chord_names == ["Am", "E"]
        assert summary.key_signature == "A Minor"
        assert summary.tempo == 90
        assert summary.duration == 3.5

    def test_from_dict_defaults(self):
        """Test that the title falls back to the identifier."""
        summary = RecordingSummary.from_dict({"recording_id": "memo-2", "chords": []})

        assert summary.id == "memo-2"
        assert summary.title == "memo-2"
        assert summary.key_signature is None
        assert summary.chords == ()

    def test_from_dict_numeric_fields(self):
        """Test that stored numbers come back as floats."""
        summary = RecordingSummary.from_dict({"id": "memo-3", "tempo": 96, "duration": 12})

        assert summary.tempo == 96.0
        assert isinstance(summary.tempo, float)
        assert summary.duration == 12.0

    @pytest.mark.parametrize(
        ("data", "field"),
        [
            ({"id": "m", "tempo": "fast"}, "tempo"),
            ({"id": "m", "duration": "long"}, "duration"),
            ({"id": "m", "key_signature": 5}, "key_signature"),
            ({"id": "m", "chords": "C G"}, "chords"),
            ({"id": "m", "chords": [{"time": 0}]}, "chord name"),
        ],
    )
    def test_from_dict_invalid(self, data, field):
        """Test that malformed documents raise ValueError naming the field."""
        with pytest.raises(ValueError, match=field):
            RecordingSummary.from_dict(data)


class TestInsightModels:
    """Tests for insight result serialization."""

    def test_common_progression(self):
        """Test progression serialization."""
        progression = CommonProgression(progression=("C", "G", "Am"), count=3, recordings=("One", "Two"))
        assert progression.to_dict() == {
            "progression": ["C", "G", "Am"],
            "count": 3,
            "recordings": ["One", "Two"],
        }

    def test_similar_recording(self):
        """Test similarity serialization."""
        similar = SimilarRecording(pair=("A", "B"), similarity=50, reasons=("Same key: C Major",))
        assert similar.to_dict()["pair"] == ["A", "B"]

    def test_tendencies(self):
        """Test tendencies serialization."""
        tendencies = HarmonicTendencies(tendencies=(), dominant_style="Not enough data")
        assert tendencies.to_dict() == {"tendencies": [], "dominant_style": "Not enough data"}
