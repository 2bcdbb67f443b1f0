"""Chord conversions: transposition, serialization and Harte notation.

This module turns a resolved ``Chord`` into other representations (a plain
dict, JSON, a Harte label) and back, and rebuilds chords on another root.
"""

from __future__ import annotations

import json
from typing import Any

from chord_symbols.models import Chord, ResolvedInterval
from chord_symbols.notes import LETTERS, Interval, Note, spell, spell_step

# Simple-interval name of each semitone offset, for basses outside the chord
HARTE_BASS_DEGREES: tuple[str, ...] = ("1", "b2", "2", "b3", "3", "4", "b5", "5", "b6", "6", "b7", "7")


def _as_note(note: Note | str) -> Note:
    return note if isinstance(note, Note) else Note.from_string(note)


def _descriptor_body(chord: Chord) -> str:
    """Strip root and bass from a descriptor, keeping the quality text."""
    body = chord.descriptor[len(str(chord.root)) :]
    if chord.bass is not None:
        body = body[: -len(f"/{chord.bass}")]
    return body


def transpose(chord: Chord, root: Note | str) -> Chord:
    """Rebuild a chord on a new root.

    Every chord tone is re-spelled against the new root. The bass keeps its
    letter distance from the root when that spelling needs at most a double
    accidental, and moves to the nearest letter that does otherwise, so its
    enharmonic choice is an approximation.

    Parameters
    ----------
    chord : Chord
        The chord to transpose.
    root : Note | str
        The new root (e.g. ``"Eb"``).

    Returns
    -------
    Chord
        The transposed chord. Its ``origin`` is the new descriptor.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> transpose(parse("Cm7/Bb"), "E").note_literals
    ('E', 'G', 'B', 'D')
    >>> str(transpose(parse("Cm7/Bb"), "E"))
    'Em7/D'
    """
    new_root = _as_note(root)
    intervals = tuple(
        ResolvedInterval(interval=r.interval, semitone=r.semitone, note=spell(new_root, r.interval))
        for r in chord.intervals
    )

    bass = None
    if chord.bass is not None:
        offset = (chord.bass.semitone - chord.root.semitone) % 12
        target = (new_root.semitone + offset) % 12
        steps = (LETTERS.index(chord.bass.letter) - LETTERS.index(chord.root.letter)) % 7
        bass = spell_step(new_root, steps, target)

    descriptor = f"{new_root}{_descriptor_body(chord)}"
    if bass is not None:
        descriptor = f"{descriptor}/{bass}"

    return Chord(
        root=new_root,
        intervals=intervals,
        descriptor=descriptor,
        origin=descriptor,
        bass=bass,
        is_sus=chord.is_sus,
        quality=chord.quality,
    )


def to_dict(chord: Chord) -> dict[str, Any]:
    """Convert a chord to a JSON-compatible dict.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> to_dict(parse("C/E"))["notes"]
    ['C', 'E', 'G']
    """
    return {
        "origin": chord.origin,
        "descriptor": chord.descriptor,
        "root": str(chord.root),
        "bass": str(chord.bass) if chord.bass is not None else None,
        "intervals": list(chord.interval_names),
        "notes": list(chord.note_literals),
        "semitones": list(chord.semitones),
        "is_sus": chord.is_sus,
        "quality": chord.quality,
    }


def from_dict(data: dict[str, Any]) -> Chord:
    """Rebuild a chord from ``to_dict`` output.

    Note spellings are recomputed from the root and intervals, so the dict
    only needs ``root``, ``intervals`` and ``descriptor``.

    Raises
    ------
    ValueError
        If a note or interval name is not recognized, or a field is missing.
    """
    for key in ("root", "intervals", "descriptor"):
        if key not in data:
            msg = f"Missing chord field: {key}"
            raise ValueError(msg)

    root = Note.from_string(data["root"])
    intervals = []
    for name in data["intervals"]:
        interval = Interval.from_notation(name)
        note = spell(root, interval)
        intervals.append(ResolvedInterval(interval=interval, semitone=interval.semitones % 12, note=note))
    bass = data.get("bass")
    return Chord(
        root=root,
        intervals=tuple(intervals),
        descriptor=data["descriptor"],
        origin=data.get("origin", data["descriptor"]),
        bass=Note.from_string(bass) if bass else None,
        is_sus=bool(data.get("is_sus", False)),
        quality=data.get("quality", "major"),
    )


def to_json(chord: Chord, **kwargs: Any) -> str:
    """Serialize a chord to JSON; keyword arguments go to ``json.dumps``."""
    return json.dumps(to_dict(chord), ensure_ascii=False, **kwargs)


def from_json(text: str) -> Chord:
    return from_dict(json.loads(text))


def to_harte(chord: Chord) -> str:
    """Convert to a Harte label listing the degrees explicitly.

    The bass, when present, is written as a degree relative to the root.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> to_harte(parse("C7/E"))
    'C:(3,5,b7)/3'
    >>> to_harte(parse("Abm"))
    'Ab:(b3,5)'
    """
    degrees = ",".join(name for name in chord.interval_names if name != "1")
    label = f"{chord.root}:({degrees})"
    if chord.bass is not None:
        offset = (chord.bass.semitone - chord.root.semitone) % 12
        label = f"{label}/{_harte_degree(chord, offset)}"
    return label


def _harte_degree(chord: Chord, offset: int) -> str:
    for r in chord.intervals:
        if r.semitone == offset:
            interval = r.interval
            # Harte bass degrees are simple intervals
            if interval.degree > 7:
                simple = interval.degree - 7
                return f"{interval.notation[:-len(str(interval.degree))]}{simple}"
            return interval.notation
    return HARTE_BASS_DEGREES[offset]

