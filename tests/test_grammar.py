"""Tests for grammar validation of chord symbol tokens."""

import pytest

from chord_symbols.errors import GrammarError
from chord_symbols.grammar import (
    BARE_MAJOR_EXEMPTIONS,
    GRAMMAR_RULES,
    RULES_BY_NAME,
    read_tokens,
    validate,
)
from chord_symbols.notes import Interval, Note
from chord_symbols.tokenizer import tokenize


def check(symbol: str):
    return validate(tokenize(symbol), symbol)


def violated_rule(symbol: str) -> str:
    with pytest.raises(GrammarError) as excinfo:
        check(symbol)
    return excinfo.value.rule


class TestRuleTable:
    def test_rules_are_ordered_and_named(self) -> None:
        names = [rule.name for rule in GRAMMAR_RULES]
        assert names == [
            "single-root",
            "balanced-groups",
            "clause-target",
            "stray-symbol",
            "slash-bass",
            "single-quality",
            "bare-major",
            "extension-degrees",
            "power-chord",
            "suspension",
            "alteration-context",
            "addition-context",
            "omission-context",
            "incompatible-degrees",
            "semitone-cluster",
        ]

    def test_rules_by_name(self) -> None:
        assert RULES_BY_NAME["bare-major"].description.startswith("A major marker")

    def test_bare_major_exemptions_are_data(self) -> None:
        assert [name for name, _ in BARE_MAJOR_EXEMPTIONS] == ["delta-shorthand", "seventh-or-tension"]


class TestRuleViolations:
    """Each rule rejects at least one symbol, and reports its own name."""

    @pytest.mark.parametrize(
        ("symbol", "rule"),
        [
            ("m7", "single-root"),
            ("CE", "single-root"),
            ("C7(b9", "balanced-groups"),
            ("C7b9)", "balanced-groups"),
            ("C7((b9))", "balanced-groups"),
            ("C()", "balanced-groups"),
            ("C7()", "balanced-groups"),
            ("Cadd", "clause-target"),
            ("C(omit)", "clause-target"),
            ("C7#", "stray-symbol"),
            ("C,7", "stray-symbol"),
            ("C7(b9,,#11)", "stray-symbol"),
            ("C(,)", "stray-symbol"),
            ("C(omit3,)", "stray-symbol"),
            ("C/", "slash-bass"),
            ("C/E7", "slash-bass"),
            ("C/E/G", "slash-bass"),
            ("C/Ebb", "slash-bass"),
            ("Cmdim", "single-quality"),
            ("Cm(dim)", "single-quality"),
            ("CøMaj7", "single-quality"),
            ("CMaj", "bare-major"),
            ("CM", "bare-major"),
            ("CMaj(omit5)", "bare-major"),
            ("CMaj6", "bare-major"),
            ("C79", "extension-degrees"),
            ("C7,9", "extension-degrees"),
            ("C7 13", "extension-degrees"),
            ("C67", "extension-degrees"),
            ("C77", "extension-degrees"),
            ("C2", "extension-degrees"),
            ("C/9", "extension-degrees"),
            ("Calt9", "extension-degrees"),
            ("C5(add9)", "power-chord"),
            ("Cm5", "power-chord"),
            ("Cmsus4", "suspension"),
            ("Csus2sus4", "suspension"),
            ("Csus(omit3)", "suspension"),
            ("C9b9", "alteration-context"),
            ("C7b5b5", "alteration-context"),
            ("Cdim#9", "alteration-context"),
            ("C7#4", "alteration-context"),
            ("Calt(b9)", "alteration-context"),
            ("C(add3)", "addition-context"),
            ("C(add7)", "addition-context"),
            ("C9(add9)", "addition-context"),
            ("CMaj7(addMaj7)", "addition-context"),
            ("C7(b9,addb9)", "addition-context"),
            ("C(add9,add9)", "addition-context"),
            ("C(omit9)", "omission-context"),
            ("C11(omit3)", "omission-context"),
            ("C7b5(omit5)", "omission-context"),
            ("C(omit5,omit5)", "omission-context"),
            ("C(add9,addb9)", "incompatible-degrees"),
            ("Cm(add11,#11)", "incompatible-degrees"),
            ("C(add13,addb13)", "incompatible-degrees"),
            ("CMaj7(b9)", "semitone-cluster"),
        ],
    )
    def test_rejected(self, symbol: str, rule: str) -> None:
        assert violated_rule(symbol) == rule

    def test_minor_marker_conflicts_with_sus(self) -> None:
        """Test that sus with a minor third is caught by the suspension rule."""
        assert violated_rule("Cm7sus4") == "suspension"


class TestAccepted:
    """Symbols every rule lets through."""

    @pytest.mark.parametrize(
        "symbol",
        [
            "C",
            "Cm7",
            "CΔ",
            "CΔ9",
            "CMaj7",
            "CM9",
            "AbMaj7#11",
            "C-Maj7(omit5)",
            "Cm(Maj7)",
            "C6/9",
            "C69",
            "C7(b9,#11)",
            "C(omit3,5)",
            "C7sus4",
            "Csus",
            "C5",
            "C5/G",
            "C13",
            "Cm11",
            "C7alt",
            "Cø7",
            "Cdim7",
            "C+7",
            "Bb7(b9,b13)",
            "C7(9)",
            "C/E",
            "Cno3",
            "C7b5#5b9#9b13",
            "C7(b5,#11)",
            "Cm(add#9)",
            "Csus2(add9)",
            "Cdim7(add13)",
            "C7(b13)",
            "C7(b13,add9)",
            "Cdim7(add9,b13)",
            "Cdim7(add Maj7)",
            "Cdim7(add △, 9)",
            "Cdim7addM911b13",
            "CMaj713#9#11#5",
            "C△713#9#11#5",
            "C7#5,b5",
            "Cadd9,11",
            "C7sus#4",
            "Csusb2",
        ],
    )
    def test_accepted(self, symbol: str) -> None:
        check(symbol)


class TestParsedSymbol:
    def test_root_and_bass(self) -> None:
        parsed = check("Bb7/Ab")
        assert parsed.root == Note("B", -1)
        assert parsed.bass == Note("A", -1)
        assert parsed.extensions == (7,)

    def test_major_marker_takes_its_seventh(self) -> None:
        parsed = check("Cm(Maj7)")
        assert parsed.quality == "minor"
        assert parsed.major_seventh
        assert parsed.extensions == (7,)

    def test_delta_is_major_seventh(self) -> None:
        parsed = check("CΔ")
        assert parsed.delta
        assert parsed.major_seventh
        assert parsed.extensions == ()

    def test_slash_nine_is_six_nine(self) -> None:
        assert check("C6/9").extensions == (6, 9)
        assert check("C6/9").is_six_nine
        assert check("C6/9").bass is None

    def test_bare_degree_in_group_is_addition(self) -> None:
        assert check("C7(9)").additions == (Interval.NINTH,)

    def test_omissions_continue_across_commas(self) -> None:
        assert check("C(omit3,5)").omissions == (3, 5)

    def test_alterations_sorted(self) -> None:
        parsed = check("C7(#11,b9)")
        assert parsed.alterations == (Interval.FLAT_NINTH, Interval.SHARP_ELEVENTH)

    def test_bare_sus_is_fourth(self) -> None:
        assert check("Csus").suspension is Interval.PERFECT_FOURTH
        assert check("Csus2").suspension is Interval.MAJOR_SECOND

    def test_power_chord(self) -> None:
        assert check("E5").is_power


class TestGrammarError:
    def test_message_names_rule_and_position(self) -> None:
        with pytest.raises(GrammarError) as excinfo:
            check("CMaj(omit5)")
        error = excinfo.value
        assert error.kind == "grammar"
        assert error.position == 1
        assert "[bare-major]" in str(error)
        assert error.verbose().endswith("C{Maj}(omit5)")

    def test_missing_root_reports_position(self) -> None:
        with pytest.raises(GrammarError) as excinfo:
            check("m7")
        assert excinfo.value.position == 0

    def test_missing_bass_marks_end(self) -> None:
        with pytest.raises(GrammarError) as excinfo:
            check("C7/")
        assert excinfo.value.position == 2

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            check("CMaj")


class TestReader:
    def test_reader_records_without_rejecting(self) -> None:
        state = read_tokens(tokenize("CE7,"))
        assert [t.value for t in state.extra_notes] == ["E"]
        assert [t.text for t in state.stray] == [","]

    def test_unclosed_group_is_recorded(self) -> None:
        state = read_tokens(tokenize("C7(b9"))
        assert [t.kind for t in state.group_errors] == ["open"]

    def test_empty_group_is_recorded(self) -> None:
        state = read_tokens(tokenize("C()"))
        assert [t.text for t in state.group_errors] == ["("]

    @pytest.mark.parametrize("symbol", ["C(,)", "C(b9,)", "C7(b9,,#11)"])
    def test_comma_must_separate_two_items(self, symbol: str) -> None:
        state = read_tokens(tokenize(symbol))
        assert state.stray
        assert all(t.kind == "comma" for t in state.stray)

    def test_comma_between_top_level_alterations(self) -> None:
        state = read_tokens(tokenize("C7#5,b5"))
        assert state.stray == []
        assert [t.value for t in state.alterations] == ["#5", "b5"]


class TestClauses:
    def test_add_runs_on_through_degrees(self) -> None:
        assert check("Cdim7add911").additions == (Interval.NINTH, Interval.ELEVENTH)

    def test_add_continues_across_top_level_comma(self) -> None:
        assert check("Cadd9,11").additions == (Interval.NINTH, Interval.ELEVENTH)

    @pytest.mark.parametrize("symbol", ["Cdim7(add Maj7)", "Cdim7(add△)", "Cdim7addM"])
    def test_add_major_marker_is_major_seventh(self, symbol: str) -> None:
        parsed = check(symbol)
        assert parsed.additions == (Interval.MAJOR_SEVENTH,)
        assert not parsed.major_seventh

    def test_alteration_after_add_stays_alteration(self) -> None:
        parsed = check("Cdim7(add9,b13)")
        assert parsed.additions == (Interval.NINTH,)
        assert parsed.alterations == (Interval.FLAT_THIRTEENTH,)

    def test_seventh_thirteenth_compound(self) -> None:
        parsed = check("C△713#9#11#5")
        assert parsed.extensions == (7, 13)
        assert parsed.stack_top == 13

    @pytest.mark.parametrize(
        ("symbol", "interval"),
        [
            ("Csusb2", Interval.MINOR_SECOND),
            ("C7sus#4", Interval.AUGMENTED_FOURTH),
        ],
    )
    def test_altered_suspensions(self, symbol: str, interval: Interval) -> None:
        assert check(symbol).suspension is interval
