"""Tests for cross-recording insights."""

import pytest

from memo_analyzer.insights import (
    chord_overlap,
    compare_recordings,
    find_common_progressions,
    find_similar_recordings,
    get_chord_frequency,
    get_harmonic_tendencies,
    get_key_distribution,
    iter_subsequences,
    summarize_library,
)
from memo_analyzer.models.core import ChordEvent, RecordingSummary
from memo_analyzer.models.insights import ChordCount, CommonProgression, KeyCount


def make_summary(
    title: str,
    chords: list[str] | None = None,
    key: str | None = None,
    tempo: float | None = None,
    duration: float | None = None,
) -> RecordingSummary:
    """Helper to create recording summaries."""
    events = tuple(ChordEvent(chord=c, time=float(i), duration=1.0) for i, c in enumerate(chords or []))
    return RecordingSummary(
        id=title.lower().replace(" ", "-"),
        title=title,
        key_signature=key,
        tempo=tempo,
        chords=events,
        duration=duration,
    )


class TestKeyDistribution:
    """Tests for key distribution."""

    def test_counts_and_order(self):
        """Test that keys are counted and ranked."""
        summaries = [
            make_summary("One", key="C Major"),
            make_summary("Two", key="A Minor"),
            make_summary("Three", key="C Major"),
            make_summary("Four"),
        ]

        assert get_key_distribution(summaries) == [
            KeyCount(key="C Major", count=2),
            KeyCount(key="A Minor", count=1),
        ]

    def test_ties_keep_first_seen_order(self):
        """Test that equal counts keep encounter order."""
        summaries = [make_summary("One", key="D Major"), make_summary("Two", key="B Minor")]
        assert [k.key for k in get_key_distribution(summaries)] == ["D Major", "B Minor"]

    def test_empty(self):
        """Test that no summaries give no keys."""
        assert get_key_distribution([]) == []


class TestChordFrequency:
    """Tests for chord frequency."""

    def test_counts_occurrences(self):
        """Test that every occurrence is counted."""
        summaries = [make_summary("One", ["C", "G", "C"]), make_summary("Two", ["G", "C", "F"])]

        assert get_chord_frequency(summaries) == [
            ChordCount(chord="C", count=3),
            ChordCount(chord="G", count=2),
            ChordCount(chord="F", count=1),
        ]

    def test_limit(self):
        """Test the result limit."""
        summaries = [make_summary("One", ["C", "D", "E", "F", "G"])]
        assert len(get_chord_frequency(summaries, limit=3)) == 3


class TestCommonProgressions:
    """Tests for progressions shared between recordings."""

    def test_iter_subsequences(self):
        """Test contiguous runs of the mined lengths."""
        runs = iter_subsequences(["C", "G", "Am", "F"], 3)
        assert runs == [("C", "G", "Am"), ("G", "Am", "F"), ("C", "G", "Am", "F")]

    def test_shared_progressions(self):
        """Test that only progressions in two or more recordings are kept."""
        summaries = [
            make_summary("One", ["C", "G", "Am", "F"]),
            make_summary("Two", ["C", "G", "Am", "F", "C"]),
            make_summary("Three", ["D", "E", "F"]),
        ]

        progressions = find_common_progressions(summaries)

        assert progressions == [
            CommonProgression(progression=("C", "G", "Am"), count=2, recordings=("One", "Two")),
            CommonProgression(progression=("G", "Am", "F"), count=2, recordings=("One", "Two")),
            CommonProgression(progression=("C", "G", "Am", "F"), count=2, recordings=("One", "Two")),
        ]

    def test_every_result_spans_two_recordings(self):
        """Test the two-recording minimum."""
        summaries = [
            make_summary("One", ["C", "G", "Am", "C", "G", "Am"]),
            make_summary("Two", ["F", "G", "C"]),
        ]

        assert find_common_progressions(summaries) == []

    def test_count_includes_repeats(self):
        """Test that repeats within one recording add to the count."""
        summaries = [
            make_summary("One", ["C", "G", "Am", "C", "G", "Am"]),
            make_summary("Two", ["C", "G", "Am"]),
        ]

        progressions = find_common_progressions(summaries)

        assert progressions[0].progression == ("C", "G", "Am")
        assert progressions[0].count == 3
        assert progressions[0].recordings == ("One", "Two")

    def test_ranked_by_recordings(self):
        """Test that wider spread ranks above higher count."""
        summaries = [
            make_summary("One", ["C", "G", "Am", "Dm", "G", "C", "Dm", "G", "C"]),
            make_summary("Two", ["Dm", "G", "C"]),
            make_summary("Three", ["C", "G", "Am"]),
            make_summary("Four", ["C", "G", "Am"]),
        ]

        progressions = find_common_progressions(summaries)

        assert progressions[0].progression == ("C", "G", "Am")
        assert len(progressions[0].recordings) == 3

    def test_single_recording(self):
        """Test that one recording gives nothing."""
        assert find_common_progressions([make_summary("One", ["C", "G", "Am"] * 3)]) == []

    def test_min_length_and_limit(self):
        """Test the length and limit parameters."""
        summaries = [make_summary("One", ["C", "G", "Am", "F"]), make_summary("Two", ["C", "G", "Am", "F"])]

        progressions = find_common_progressions(summaries, min_length=2, limit=4)

        assert len(progressions) == 4
        assert all(len(p.progression) >= 2 for p in progressions)


class TestSimilarity:
    """Tests for recording similarity."""

    @pytest.fixture
    def pair(self):
        """Two closely related recordings."""
        return (
            make_summary("Song B", ["C", "G", "Am", "F"], key="C Major", tempo=120),
            make_summary("Song A", ["C", "G", "Am", "Em"], key="C Major", tempo=115),
        )

    def test_chord_overlap(self, pair):
        """Test Jaccard overlap of chord sets."""
        shared, overlap = chord_overlap(*pair)

        assert shared == 3
        assert overlap == pytest.approx(0.6)

    def test_chord_overlap_empty(self):
        """Test that two chordless recordings have no overlap."""
        assert chord_overlap(make_summary("One"), make_summary("Two")) == (0, 0.0)

    def test_compare_recordings(self, pair):
        """Test score and reasons."""
        result = compare_recordings(*pair)

        assert result.pair == ("Song A", "Song B")
        assert result.similarity == 80
        assert result.reasons == (
            "Same key: C Major",
            "Similar tempo (~118 BPM)",
            "3 shared chords (60% overlap)",
        )

    def test_symmetric(self, pair):
        """Test that argument order does not matter."""
        a, b = pair
        assert compare_recordings(a, b) == compare_recordings(b, a)

    def test_tempo_difference_limit(self):
        """Test that tempos ten BPM apart are not similar."""
        result = compare_recordings(
            make_summary("One", key="C Major", tempo=100),
            make_summary("Two", key="C Major", tempo=110),
        )

        assert result.similarity == 30
        assert result.reasons == ("Same key: C Major",)

    def test_find_similar_filters_and_sorts(self, pair):
        """Test threshold and ordering of pairs."""
        weak = make_summary("Song C", ["Bb", "Eb"], key="Bb Major", tempo=118)

        similar = find_similar_recordings([*pair, weak])

        assert [s.pair for s in similar] == [("Song A", "Song B")]

    def test_find_similar_limit(self):
        """Test the result limit."""
        summaries = [make_summary(f"Take {i}", ["C", "G"], key="C Major", tempo=100) for i in range(5)]

        similar = find_similar_recordings(summaries, limit=3)

        assert len(similar) == 3
        assert all(s.similarity == 100 for s in similar)


class TestHarmonicTendencies:
    """Tests for harmonic tendencies."""

    def test_not_enough_data(self):
        """Test that a library without chords has no style."""
        result = get_harmonic_tendencies([make_summary("One")])

        assert result.tendencies == ()
        assert result.dominant_style == "Not enough data"

    def test_diatonic(self):
        """Test plain triads."""
        result = get_harmonic_tendencies([make_summary("One", ["C", "F", "G", "C"])])

        assert result.tendencies == ("Diatonic/straightforward harmony",)
        assert result.dominant_style == "Pop / Folk / Classical"

    def test_jazz(self):
        """Test extended chords."""
        result = get_harmonic_tendencies([make_summary("One", ["Cmaj7", "Dm7", "G7", "Am"])])

        assert result.tendencies == ("Jazz-influenced harmony",)
        assert result.dominant_style == "Jazz / Neo-Soul"

    def test_minor(self):
        """Test a minor-heavy library."""
        result = get_harmonic_tendencies([make_summary("One", ["Am", "Dm", "Em", "C"])])

        assert "Drawn to minor tonalities" in result.tendencies
        assert result.dominant_style == "Minor-key driven"

    def test_color_chords(self):
        """Test suspended, diminished and augmented chords."""
        chords = ["C", "Csus4", "Bdim", "Caug", "F", "G", "Am", "Dm7"]

        result = get_harmonic_tendencies([make_summary("One", chords)])

        assert "Uses suspended chords for color" in result.tendencies
        assert "Employs diminished passing chords" in result.tendencies
        assert "Uses augmented chords for tension" in result.tendencies
        assert result.dominant_style == "Contemporary blend"

    def test_major_seventh_is_not_minor(self):
        """Test that maj7 symbols do not count as minor."""
        result = get_harmonic_tendencies([make_summary("One", ["Cmaj7", "Fmaj7"])])
        assert "Drawn to minor tonalities" not in result.tendencies


class TestLibrarySummary:
    """Tests for library statistics."""

    def test_summary(self):
        """Test headline statistics."""
        summaries = [
            make_summary("One", ["C", "G"], key="C Major", tempo=100, duration=30.0),
            make_summary("Two", ["Am", "G"], key="C Major", tempo=101, duration=12.5),
            make_summary("Three", key="A Minor"),
        ]

        summary = summarize_library(summaries)

        assert summary.analyzed == 3
        assert summary.most_common_key == "C Major"
        assert summary.average_tempo == 101
        assert summary.min_tempo == 100
        assert summary.max_tempo == 101
        assert summary.unique_chords == 3
        assert summary.total_duration == 42.5

    def test_empty(self):
        """Test an empty library."""
        summary = summarize_library([])

        assert summary.analyzed == 0
        assert summary.most_common_key is None
        assert summary.average_tempo is None
        assert summary.to_dict()["total_duration"] == 0.0
