"""Note and interval vocabulary for chord resolution.

This module holds the static tables the rest of the package reads from:
pitch letters, accidentals, interval classes and the enharmonic speller
that names every chord tone relative to its root.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

LETTERS = "CDEFGAB"

# Natural pitch class of each letter (C=0)
NATURAL_SEMITONES = MappingProxyType(
    {
        "C": 0,
        "D": 2,
        "E": 4,
        "F": 5,
        "G": 7,
        "A": 9,
        "B": 11,
    }
)

ACCIDENTAL_SYMBOLS = MappingProxyType(
    {
        -2: "bb",
        -1: "b",
        0: "",
        1: "#",
        2: "##",
    }
)

# Characters accepted as a single accidental in chord input
ACCIDENTAL_INPUT = MappingProxyType(
    {
        "#": 1,
        "♯": 1,
        "b": -1,
        "♭": -1,
    }
)

MAX_ACCIDENTAL = 2


@dataclass(frozen=True)
class Note:
    """A spelled note: a letter plus an accidental offset.

    Parameters
    ----------
    letter : str
        One of ``"C"`` to ``"B"``.
    accidental : int
        Semitone offset from the natural letter, between -2 and 2.

    Examples
    --------
    >>> Note("A", -1).semitone
    8
    >>> str(Note("C", 2))
    'C##'
    """

    letter: str
    accidental: int = 0

    def __post_init__(self) -> None:
        if self.letter not in NATURAL_SEMITONES:
            msg = f"Unknown note letter: {self.letter}"
            raise ValueError(msg)
        if abs(self.accidental) > MAX_ACCIDENTAL:
            msg = f"Accidental out of range for {self.letter}: {self.accidental}"
            raise ValueError(msg)

    @property
    def semitone(self) -> int:
        """Pitch class of the note (0-11, where C=0)."""
        return (NATURAL_SEMITONES[self.letter] + self.accidental) % 12

    @classmethod
    def from_string(cls, text: str) -> Note:
        """Parse a note name such as ``"Bb"``, ``"F#"`` or ``"C##"``.

        Parameters
        ----------
        text : str
            Note name: a letter followed by zero, one or two accidentals.

        Returns
        -------
        Note
            The parsed note.

        Raises
        ------
        ValueError
            If the name is not a valid note spelling.

        Examples
        --------
        >>> Note.from_string("Eb")
        Note(letter='E', accidental=-1)
        """
        if not text or text[0] not in NATURAL_SEMITONES:
            msg = f"Unknown note: {text}"
            raise ValueError(msg)
        accidental = 0
        for char in text[1:]:
            if char not in ACCIDENTAL_INPUT:
                msg = f"Unknown note: {text}"
                raise ValueError(msg)
            accidental += ACCIDENTAL_INPUT[char]
        if len(text) > 1 + MAX_ACCIDENTAL or abs(accidental) != len(text) - 1:
            msg = f"Unknown note: {text}"
            raise ValueError(msg)
        return cls(text[0], accidental)

    def __str__(self) -> str:
        return f"{self.letter}{ACCIDENTAL_SYMBOLS[self.accidental]}"


class Interval(Enum):
    """Interval classes a chord tone can take above its root.

    Each member carries its Harte-style notation, its distance in semitones
    above the root (compound for ninths and beyond) and its diatonic degree.
    """

    UNISON = ("1", 0, 1)
    MINOR_SECOND = ("b2", 1, 2)
    MAJOR_SECOND = ("2", 2, 2)
    MINOR_THIRD = ("b3", 3, 3)
    MAJOR_THIRD = ("3", 4, 3)
    PERFECT_FOURTH = ("4", 5, 4)
    AUGMENTED_FOURTH = ("#4", 6, 4)
    DIMINISHED_FIFTH = ("b5", 6, 5)
    PERFECT_FIFTH = ("5", 7, 5)
    AUGMENTED_FIFTH = ("#5", 8, 5)
    MINOR_SIXTH = ("b6", 8, 6)
    MAJOR_SIXTH = ("6", 9, 6)
    DIMINISHED_SEVENTH = ("bb7", 9, 7)
    MINOR_SEVENTH = ("b7", 10, 7)
    MAJOR_SEVENTH = ("7", 11, 7)
    FLAT_NINTH = ("b9", 13, 9)
    NINTH = ("9", 14, 9)
    SHARP_NINTH = ("#9", 15, 9)
    ELEVENTH = ("11", 17, 11)
    SHARP_ELEVENTH = ("#11", 18, 11)
    FLAT_THIRTEENTH = ("b13", 20, 13)
    THIRTEENTH = ("13", 21, 13)

    def __init__(self, notation: str, semitones: int, degree: int) -> None:
        self.notation = notation
        self.semitones = semitones
        self.degree = degree

    @classmethod
    def from_notation(cls, notation: str) -> Interval:
        """Look up an interval by its notation (e.g. ``"b9"``, ``"#11"``).

        Raises
        ------
        ValueError
            If the notation is not recognized.
        """
        if notation in INTERVAL_BY_NOTATION:
            return INTERVAL_BY_NOTATION[notation]
        msg = f"Unknown interval: {notation}"
        raise ValueError(msg)

    def __str__(self) -> str:
        return self.notation


INTERVAL_BY_NOTATION = MappingProxyType({i.notation: i for i in Interval})

THIRDS = frozenset({Interval.MINOR_THIRD, Interval.MAJOR_THIRD})
FIFTHS = frozenset(
    {Interval.DIMINISHED_FIFTH, Interval.PERFECT_FIFTH, Interval.AUGMENTED_FIFTH}
)
SEVENTHS = frozenset(
    {Interval.DIMINISHED_SEVENTH, Interval.MINOR_SEVENTH, Interval.MAJOR_SEVENTH}
)


def _fold(offset: int) -> int:
    """Fold a semitone difference into the range -6..5."""
    return (offset + 6) % 12 - 6


def spell_step(root: Note, steps: int, semitone: int) -> Note:
    """Spell a pitch class a given number of letter steps above a root.

    Parameters
    ----------
    root : Note
        The reference note.
    steps : int
        Diatonic letter steps above the root letter (0 = same letter).
    semitone : int
        Target pitch class (0-11).

    Returns
    -------
    Note
        The target pitch spelled on the requested letter when that needs at
        most a double accidental; otherwise on the nearest letter that does.

    Examples
    --------
    >>> str(spell_step(Note("B", 1), 1, 2))
    'C##'
    """
    index = LETTERS.index(root.letter)
    for distance in (0, 1, -1, 2, -2, 3, -3):
        letter = LETTERS[(index + steps + distance) % 7]
        accidental = _fold(semitone - NATURAL_SEMITONES[letter])
        if abs(accidental) <= MAX_ACCIDENTAL:
            return Note(letter, accidental)
    msg = f"Cannot spell pitch class {semitone} above {root}"
    raise ValueError(msg)


def spell(root: Note, interval: Interval) -> Note:
    """Spell the note lying at ``interval`` above ``root``.

    The interval's diatonic degree fixes the letter (a ninth is always the
    letter after the root's), and the accidental makes up the remaining
    semitone difference.

    Examples
    --------
    >>> str(spell(Note("A", -1), Interval.SHARP_ELEVENTH))
    'D'
    >>> str(spell(Note("B", 1), Interval.NINTH))
    'C##'
    """
    semitone = (root.semitone + interval.semitones) % 12
    return spell_step(root, (interval.degree - 1) % 7, semitone)

