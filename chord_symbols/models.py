"""Resolved chord data model for chord-symbols.

A ``Chord`` is the final, immutable result of parsing a chord symbol. It
holds the spelled root and bass, the ordered chord tones and the normalized
descriptor, and offers the conversions other tools need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from chord_symbols.notes import Interval, Note

if TYPE_CHECKING:
    import numpy as np

ChordQuality = Literal[
    "major",
    "major6",
    "major7",
    "dominant",
    "minor",
    "minor6",
    "minor7",
    "minor-major7",
    "half-diminished",
    "diminished",
    "augmented",
    "power",
]


@dataclass(frozen=True)
class ResolvedInterval:
    """A chord tone: its interval above the root, pitch class and spelling.

    Parameters
    ----------
    interval : Interval
        Interval above the root.
    semitone : int
        Pitch-class distance from the root, in ``[0, 12)``.
    note : Note
        The tone spelled relative to the root.
    """

    interval: Interval
    semitone: int
    note: Note


@dataclass(frozen=True)
class Chord:
    """A fully resolved chord.

    Parameters
    ----------
    root : Note
        The root note.
    intervals : tuple[ResolvedInterval, ...]
        Chord tones ordered by distance above the root, root first.
    descriptor : str
        Normalized chord symbol (e.g. ``"CMaj7"`` for ``"CΔ"``).
    origin : str
        The symbol as originally typed.
    bass : Note | None
        Slash-bass note, if any.
    is_sus : bool
        Whether the chord has no third (suspended or eleventh chords).
    quality : ChordQuality
        Harmonic function of the chord (``"dominant"`` for ``C13``,
        ``"minor-major7"`` for ``Cm(Maj7)``...).

    Examples
    --------
    >>> from chord_symbols import parse
    >>> chord = parse("AbMaj7#11")
    >>> chord.note_literals
    ('Ab', 'C', 'Eb', 'G', 'D')
    >>> chord.quality
    'major7'
    >>> str(chord)
    'AbMaj7(#11)'
    """

    root: Note
    intervals: tuple[ResolvedInterval, ...]
    descriptor: str
    origin: str
    bass: Note | None = None
    is_sus: bool = False
    quality: ChordQuality = "major"

    @property
    def notes(self) -> tuple[Note, ...]:
        """Spelled chord tones, root first."""
        return tuple(r.note for r in self.intervals)

    @property
    def note_literals(self) -> tuple[str, ...]:
        return tuple(str(n) for n in self.notes)

    @property
    def semitones(self) -> tuple[int, ...]:
        """Pitch-class distances from the root, in tone order."""
        return tuple(r.semitone for r in self.intervals)

    @property
    def interval_names(self) -> tuple[str, ...]:
        return tuple(r.interval.notation for r in self.intervals)

    def has(self, interval: Interval | str) -> bool:
        """Check whether the chord contains an interval.

        Parameters
        ----------
        interval : Interval | str
            An ``Interval`` or its notation (``"b7"``, ``"#11"``).

        Examples
        --------
        >>> from chord_symbols import parse
        >>> parse("C7").has("b7")
        True
        """
        if isinstance(interval, str):
            interval = Interval.from_notation(interval)
        return any(r.interval is interval for r in self.intervals)

    def to_harte(self) -> str:
        """Convert to Harte notation (e.g. ``"C:(3,5,b7)/3"``)."""
        from chord_symbols.converter import to_harte

        return to_harte(self)

    def to_dict(self) -> dict[str, Any]:
        from chord_symbols.converter import to_dict

        return to_dict(self)

    def to_json(self) -> str:
        from chord_symbols.converter import to_json

        return to_json(self)

    def transpose(self, root: Note | str) -> Chord:
        """Return the same chord built on another root."""
        from chord_symbols.converter import transpose

        return transpose(self, root)

    def chroma(self) -> np.ndarray:
        """Absolute 12-bin pitch-class vector (C=0)."""
        from chord_symbols.pitch_class import chroma

        return chroma(self)

    def __str__(self) -> str:
        """Return the normalized descriptor."""
        return self.descriptor
