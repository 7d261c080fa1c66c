"""Loading transcribed notes."""

from memo_analyzer.ingest.parser import (
    load_notes,
    load_notes_json,
    load_notes_midi,
    parse_notes,
)

__all__ = [
    "load_notes",
    "load_notes_json",
    "load_notes_midi",
    "parse_notes",
]
