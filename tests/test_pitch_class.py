"""Tests for pitch class, MIDI and voicing helpers."""

import numpy as np
import pytest

from chord_symbols import parse
from chord_symbols.notes import Note
from chord_symbols.pitch_class import (
    MAX_MIDI_CODE,
    MIN_MIDI_CODE,
    chord_pitch_similarity,
    chord_to_pitch_classes,
    chroma,
    encode_harte,
    midi_codes,
    note_midi_code,
    pitch_class_jaccard,
    quality_category,
    roots_match,
    voicing,
    weighted_chord_similarity,
)


class TestPitchClasses:
    def test_absolute_pitch_classes(self) -> None:
        assert chord_to_pitch_classes(parse("D7")) == frozenset({2, 6, 9, 0})

    def test_bass_included(self) -> None:
        assert 10 in chord_to_pitch_classes(parse("C/Bb"))

    def test_chroma_vector(self) -> None:
        vector = chroma(parse("Am"))
        assert vector.shape == (12,)
        assert np.flatnonzero(vector).tolist() == [0, 4, 9]

    def test_chord_method(self) -> None:
        assert np.array_equal(parse("G").chroma(), chroma(parse("G")))


class TestSimilarity:
    def test_jaccard(self) -> None:
        assert pitch_class_jaccard(frozenset({0, 4, 7}), frozenset({0, 4, 7})) == 1.0
        assert pitch_class_jaccard(frozenset(), frozenset({0})) == 0.0

    def test_enharmonic_chords_match(self) -> None:
        assert chord_pitch_similarity(parse("C#m"), parse("Dbm")) == 1.0
        assert roots_match(parse("C#"), parse("Db7"))

    def test_none_is_dissimilar(self) -> None:
        assert chord_pitch_similarity(parse("C"), None) == 0.0
        assert not roots_match(None, parse("C"))

    @pytest.mark.parametrize(
        ("symbol", "category"),
        [
            ("C", "major"),
            ("C7", "major"),
            ("Cm7", "minor"),
            ("Cdim7", "diminished"),
            ("Cø7", "diminished"),
            ("C+", "augmented"),
            ("Csus2", "suspended"),
            ("C5", "other"),
        ],
    )
    def test_quality_category(self, symbol: str, category: str) -> None:
        assert quality_category(parse(symbol)) == category

    def test_weighted_same_root_same_category(self) -> None:
        score = weighted_chord_similarity(parse("Gm7"), parse("Gm"))
        assert score == pytest.approx((0.5 + 0.3 * 0.75 + 0.2) / 1.0)

    def test_weighted_root_gate(self) -> None:
        assert weighted_chord_similarity(parse("C"), parse("D")) == 0.0
        assert weighted_chord_similarity(parse("C"), parse("D"), root_gate=False) > 0.0


class TestMidi:
    @pytest.mark.parametrize(
        ("note", "code"),
        [
            (Note("C"), 48),
            (Note("A"), 57),
            (Note("C", -1), 47),
            (Note("B", 1), 60),
        ],
    )
    def test_note_midi_code(self, note: Note, code: int) -> None:
        assert note_midi_code(note) == code

    def test_midi_codes(self) -> None:
        assert midi_codes(parse("Cm9")).tolist() == [36, 51, 55, 58, 62]

    def test_midi_codes_with_bass(self) -> None:
        assert midi_codes(parse("C/G")).tolist() == [43, 48, 52, 55]


class TestVoicing:
    def test_default_lead(self) -> None:
        assert voicing(parse("C7")).tolist() == [36, 52, 58, 79]

    def test_requested_lead(self) -> None:
        assert voicing(parse("C7"), lead=70).tolist() == [36, 52, 67, 70]

    def test_low_lead_is_raised(self) -> None:
        assert voicing(parse("C7"), lead=40).tolist() == voicing(parse("C7"), lead=65).tolist()

    def test_bass_and_root_at_bottom(self) -> None:
        codes = voicing(parse("C/E"))
        assert codes[:2].tolist() == [40, 48]

    @pytest.mark.parametrize("symbol", ["Cm9", "F13", "Bb7(b9,#11)", "EbMaj7#11", "Gø7"])
    def test_upper_tones_in_range(self, symbol: str) -> None:
        chord = parse(symbol)
        offset = 2 if chord.bass is not None else 1
        upper = voicing(chord)[offset:]
        assert upper.min() >= MIN_MIDI_CODE
        assert upper.max() <= MAX_MIDI_CODE

    def test_lead_is_top(self) -> None:
        codes = voicing(parse("F13"), lead=72)
        assert codes[-1] == codes[1:].max()

    def test_flat_second_suspension_sits_under_lead(self) -> None:
        assert voicing(parse("Csusb2")).tolist() == [36, 73, 79]


class TestEncodeHarte:
    def test_encode(self) -> None:
        pytest.importorskip("mir_eval")
        root, bitmap, bass = encode_harte(parse("D7/F#"))
        assert root == 2
        assert bitmap.tolist() == [1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0]
        assert bass == 4

    def test_encode_extended(self) -> None:
        pytest.importorskip("mir_eval")
        root, bitmap, bass = encode_harte(parse("Bbm9"))
        assert root == 10
        assert np.flatnonzero(bitmap).tolist() == [0, 2, 3, 7, 10]
        assert bass == 0
