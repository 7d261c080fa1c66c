"""Tests for pitch helpers."""

import pytest

from memo_analyzer.harmony.pitch import (
    midi_to_note_name,
    note_name_to_midi,
    pitch_class,
    pitch_class_name,
)


class TestPitchHelpers:
    """Tests for pitch class and note name conversion."""

    def test_pitch_class(self):
        """Test pitch class folding."""
        assert pitch_class(60) == 0
        assert pitch_class(71) == 11
        assert pitch_class(0) == 0

    def test_pitch_class_name(self):
        """Test sharp spelling."""
        assert pitch_class_name(61) == "C#"
        assert pitch_class_name(70) == "A#"

    def test_midi_to_note_name(self):
        """Test scientific pitch names."""
        assert midi_to_note_name(60) == "C4"
        assert midi_to_note_name(21) == "A0"
        assert midi_to_note_name(0) == "C-1"
        assert midi_to_note_name(127) == "G9"

    def test_note_name_to_midi(self):
        """Test parsing note names."""
        assert note_name_to_midi("C4") == 60
        assert note_name_to_midi("F#3") == 54
        assert note_name_to_midi("C-1") == 0

    def test_invalid_note_name(self):
        """Test that flats and junk are rejected."""
        with pytest.raises(ValueError):
            note_name_to_midi("Bb3")
        with pytest.raises(ValueError):
            note_name_to_midi("H2")
