"""Tests for chord grouping and the default threshold."""

import pytest

from notes.chords import default_threshold, group_chords
from notes.model import Chord, NormalizedNote


def notes_with(deltas):
    return [NormalizedNote(note=60 + i, velocity=80, delta_ms=d) for i, d in enumerate(deltas)]


class TestGroupChords:

    def test_grouping_off_gives_single_note_chords(self):
        chords = group_chords(notes_with([0, 0, 0, 120, 3]), group=False)
        assert [len(c) for c in chords] == [1, 1, 1, 1, 1]
        assert all(c.notes[0].delta_ms == 0 for c in chords)

    def test_threshold_splits(self):
        chords = group_chords(notes_with([0, 10, 5, 80, 0]), group=True, threshold_ms=50)
        assert [len(c) for c in chords] == [3, 2]
        assert [n.note for n in chords[1]] == [63, 64]

    def test_offsets_are_rebased_to_chord_head(self):
        chords = group_chords(notes_with([400, 10, 5, 20]), threshold_ms=50)
        assert len(chords) == 1
        assert [n.delta_ms for n in chords[0]] == [0, 10, 15, 35]
        assert chords[0].gap_ms == 400

    def test_fast_run_stays_one_chord(self):
        # each step is within the threshold, so the whole run is one trigger
        chords = group_chords(notes_with([0, 30, 30, 30, 30]), threshold_ms=50)
        assert [len(c) for c in chords] == [5]
        assert [n.delta_ms for n in chords[0]] == [0, 30, 60, 90, 120]

    def test_gap_is_measured_between_chord_heads(self):
        chords = group_chords(notes_with([100, 20, 200, 10]), threshold_ms=50)
        assert [c.gap_ms for c in chords] == [100, 220]

    def test_note_equal_to_threshold_joins(self):
        chords = group_chords(notes_with([0, 50]), threshold_ms=50)
        assert [len(c) for c in chords] == [2]

    def test_none_threshold_uses_default(self):
        # mean 200 -> threshold 120
        chords = group_chords(notes_with([0, 100, 600, 100, 200]))
        assert [len(c) for c in chords] == [2, 2, 1]

    def test_pitch_and_velocity_survive(self):
        chords = group_chords([NormalizedNote(61, 33, 0.0), NormalizedNote(65, 90, 4.0)], threshold_ms=10)
        assert [(n.note, n.velocity) for n in chords[0]] == [(61, 33), (65, 90)]

    def test_empty(self):
        assert group_chords([], threshold_ms=10) == []
        assert group_chords([]) == []


class TestDefaultThreshold:

    def test_sixty_percent_of_mean(self):
        # mean = 250 ms
        assert default_threshold(notes_with([0, 500, 250, 250])) == round(0.6 * 250)

    def test_rounds(self):
        # mean = 3000 / 11
        assert default_threshold(notes_with([0, 0, 0, 500, 500, 500, 500, 500, 500, 0, 0])) == 164

    def test_ratio(self):
        assert default_threshold(notes_with([100, 100]), ratio=0.5) == 50

    def test_half_rounds_up(self):
        # 0.5 * mean 5 = 2.5
        assert default_threshold(notes_with([5, 5]), ratio=0.5) == 3

    def test_empty_track(self):
        assert default_threshold([]) == 0


def test_chord_must_not_be_empty():
    with pytest.raises(ValueError):
        Chord(notes=())
