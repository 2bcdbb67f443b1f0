"""Tests for the chord symbol tokenizer."""

import pytest

from chord_symbols.errors import LexError
from chord_symbols.tokenizer import MAX_SYMBOL_LENGTH, tokenize


def kinds(symbol: str) -> list[str]:
    return [t.kind for t in tokenize(symbol)]


def values(symbol: str) -> list[str]:
    return [t.value for t in tokenize(symbol)]


class TestTokenizeNotes:
    """Root and bass note scanning."""

    def test_natural_root(self) -> None:
        tokens = tokenize("C")
        assert len(tokens) == 1
        assert tokens[0].kind == "note"
        assert tokens[0].start == 0
        assert tokens[0].end == 1

    def test_flat_root(self) -> None:
        """Test that a root accidental is its own token."""
        assert kinds("Bbm7") == ["note", "accidental", "quality", "extension"]
        assert values("Bbm7") == ["B", "b", "minor", "7"]

    def test_unicode_accidentals(self) -> None:
        assert values("E♭7") == ["E", "b", "7"]
        assert values("F♯m") == ["F", "#", "minor"]

    def test_flat_after_root_is_root_accidental(self) -> None:
        """Test that Cb9 is a C-flat ninth, not C with a flat nine."""
        assert kinds("Cb9") == ["note", "accidental", "extension"]

    def test_slash_bass(self) -> None:
        assert kinds("C/Bb") == ["note", "slash", "note", "accidental"]

    def test_lone_letter_in_body_is_note(self) -> None:
        assert kinds("CE") == ["note", "note"]


class TestTokenizeBody:
    """Quality words, degrees and symbols."""

    @pytest.mark.parametrize(
        ("symbol", "text", "value"),
        [
            ("Cm", "m", "minor"),
            ("Cmi", "mi", "minor"),
            ("Cmin", "min", "minor"),
            ("CMIN", "MIN", "minor"),
            ("C-", "-", "minor"),
            ("CM7", "M", "major"),
            ("CMa7", "Ma", "major"),
            ("Cmaj7", "maj", "major"),
            ("CMajor7", "Major", "major"),
            ("Cdim", "dim", "diminished"),
            ("Co", "o", "diminished"),
            ("C°", "°", "diminished"),
            ("Cø", "ø", "half-diminished"),
            ("Caug", "aug", "augmented"),
            ("C+", "+", "augmented"),
            ("C7alt", "alt", "altered"),
            ("CΔ", "Δ", "delta"),
        ],
    )
    def test_quality_words(self, symbol: str, text: str, value: str) -> None:
        quality = [t for t in tokenize(symbol) if t.kind == "quality"]
        assert len(quality) == 1
        assert quality[0].text == text
        assert quality[0].value == value

    def test_case_decides_minor_or_major(self) -> None:
        assert values("Cm7") == ["C", "minor", "7"]
        assert values("CM7") == ["C", "major", "7"]

    def test_digit_runs_split_into_degrees(self) -> None:
        assert values("C69") == ["C", "6", "9"]
        assert values("C713") == ["C", "7", "13"]

    def test_alteration_is_single_token(self) -> None:
        tokens = tokenize("C7#11")
        assert tokens[-1].kind == "alteration"
        assert tokens[-1].text == "#11"
        assert tokens[-1].start == 2
        assert tokens[-1].end == 5

    def test_parenthesized_modifiers(self) -> None:
        assert values("C69(#11)") == ["C", "6", "9", "(", "#11", ")"]
        assert kinds("C7(b9,add13)") == [
            "note",
            "extension",
            "open",
            "alteration",
            "comma",
            "add",
            "extension",
            "close",
        ]

    def test_omission_words(self) -> None:
        assert kinds("Cno3") == ["note", "omit", "extension"]
        assert kinds("C(omit5)") == ["note", "open", "omit", "extension", "close"]

    def test_suspension(self) -> None:
        assert values("C7sus4") == ["C", "7", "sus", "4"]

    def test_invalid_combination_still_tokenizes(self) -> None:
        """Test that the tokenizer classifies without validating."""
        assert kinds("CMaj") == ["note", "quality"]

    def test_whitespace_is_skipped(self) -> None:
        tokens = tokenize("C m7")
        assert [t.text for t in tokens] == ["C", "m", "7"]
        assert tokens[1].start == 2


class TestTokenizeErrors:
    """Lexical failures."""

    @pytest.mark.parametrize(
        ("symbol", "position"),
        [
            ("Cx", 1),
            ("C8", 1),
            ("C1", 1),
            ("c", 0),
            ("C7?", 2),
        ],
    )
    def test_unrecognized_symbol(self, symbol: str, position: int) -> None:
        with pytest.raises(LexError) as excinfo:
            tokenize(symbol)
        assert excinfo.value.position == position
        assert excinfo.value.kind == "lex"

    def test_unknown_degree_message(self) -> None:
        with pytest.raises(LexError, match="Unknown degree"):
            tokenize("C8")

    def test_too_long(self) -> None:
        with pytest.raises(LexError, match="longer than"):
            tokenize("C" + "7" * MAX_SYMBOL_LENGTH)

    def test_verbose_marks_position(self) -> None:
        with pytest.raises(LexError) as excinfo:
            tokenize("Cx7")
        assert excinfo.value.verbose().endswith("C{x}7")
