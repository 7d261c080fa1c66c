"""Tests for loading notes from JSON and MIDI files."""

import json

import pytest

from memo_analyzer.export import export_notes
from memo_analyzer.ingest import load_notes, load_notes_json, load_notes_midi, parse_notes
from memo_analyzer.models.core import NoteEvent


class TestParseNotes:
    """Tests for note data validation."""

    def test_list(self):
        """Test a bare list of notes."""
        notes = parse_notes([{"midi": 60, "time": 0.0, "duration": 0.5, "velocity": 80}])
        assert notes == [NoteEvent(midi=60, time=0.0, duration=0.5, velocity=80)]

    def test_wrapped(self):
        """Test a mapping with a notes key."""
        notes = parse_notes({"notes": [{"midi": 62, "time": 1, "duration": 1, "velocity": 70}]})
        assert notes[0].midi == 62

    def test_keeps_order(self):
        """Test that input order is preserved."""
        data = [
            {"midi": 64, "time": 1.0, "duration": 0.5, "velocity": 80},
            {"midi": 60, "time": 0.0, "duration": 0.5, "velocity": 80},
        ]
        assert [n.midi for n in parse_notes(data)] == [64, 60]

    def test_empty(self):
        """Test an empty list."""
        assert parse_notes([]) == []

    def test_not_a_list(self):
        """Test that other shapes are rejected."""
        with pytest.raises(ValueError, match="Expected a list"):
            parse_notes("notes")

    def test_bad_note_is_indexed(self):
        """Test that errors name the offending note."""
        data = [
            {"midi": 60, "time": 0.0, "duration": 0.5, "velocity": 80},
            {"midi": 60, "time": 0.0, "duration": -1, "velocity": 80},
        ]
        with pytest.raises(ValueError, match="Note 1"):
            parse_notes(data)


class TestLoadNotes:
    """Tests for loading note files."""

    def test_load_json(self, tmp_path):
        """Test loading a JSON notes file."""
        path = tmp_path / "memo.notes.json"
        path.write_text(json.dumps([{"midi": 60, "time": 0, "duration": 1, "velocity": 90}]))

        assert load_notes(path) == [NoteEvent(60, 0.0, 1.0, 90)]

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON."""
        path = tmp_path / "memo.notes.json"
        path.write_text("[{")

        with pytest.raises(ValueError):
            load_notes_json(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file."""
        with pytest.raises(FileNotFoundError):
            load_notes(tmp_path / "missing.json")

    def test_unsupported_extension(self, tmp_path):
        """Test an unknown file type."""
        path = tmp_path / "memo.wav"
        path.write_bytes(b"RIFF")

        with pytest.raises(ValueError, match="Unsupported"):
            load_notes(path)

    def test_invalid_midi(self, tmp_path):
        """Test a file that is not MIDI."""
        path = tmp_path / "memo.mid"
        path.write_bytes(b"not midi at all")

        with pytest.raises(ValueError):
            load_notes_midi(path)

    def test_load_midi(self, tmp_path):
        """Test reading back an exported MIDI file in seconds."""
        notes = [
            NoteEvent(midi=67, time=0.5, duration=0.5, velocity=70),
            NoteEvent(midi=60, time=0.0, duration=1.0, velocity=90),
            NoteEvent(midi=64, time=0.0, duration=1.0, velocity=80),
        ]
        path = export_notes(notes, tmp_path / "memo.mid", tempo_bpm=120)

        loaded = load_notes(path)

        assert [n.midi for n in loaded] == [60, 64, 67]
        assert [n.velocity for n in loaded] == [90, 80, 70]
        assert loaded[2].time == pytest.approx(0.5)
        assert loaded[0].duration == pytest.approx(1.0)

    def test_load_midi_other_tempo(self, tmp_path):
        """Test that the file tempo converts ticks to seconds."""
        notes = [NoteEvent(midi=60, time=1.5, duration=0.75, velocity=90)]
        path = export_notes(notes, tmp_path / "memo.midi", tempo_bpm=90)

        loaded = load_notes(path)

        assert loaded[0].time == pytest.approx(1.5, abs=1e-3)
        assert loaded[0].duration == pytest.approx(0.75, abs=1e-3)
