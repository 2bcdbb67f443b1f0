"""Pitch class and MIDI operations on resolved chords.

This module provides pitch class (0-11) views of a ``Chord`` for
similarity computation, MIDI code renderings and a simple close voicing
generator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from chord_symbols.notes import NATURAL_SEMITONES, Interval, Note

if TYPE_CHECKING:
    from chord_symbols.models import Chord, ResolvedInterval

# MIDI code of middle C (C4)
CENTRAL_C = 60

# Range voicing tones are placed in (Eb3 to G5)
MIN_MIDI_CODE = 51
MAX_MIDI_CODE = 79

# Lowest lead note a voicing accepts
MIN_LEAD_CODE = 65

# Tones stacked upward from the low bound
GUIDE_TONES = frozenset(
    {
        Interval.MINOR_THIRD,
        Interval.MAJOR_THIRD,
        Interval.PERFECT_FOURTH,
        Interval.AUGMENTED_FOURTH,
        Interval.DIMINISHED_FIFTH,
        Interval.AUGMENTED_FIFTH,
        Interval.MAJOR_SIXTH,
        Interval.DIMINISHED_SEVENTH,
        Interval.MINOR_SEVENTH,
        Interval.MAJOR_SEVENTH,
    }
)

# Tones placed just under the lead
TENSIONS = frozenset(
    {
        Interval.MINOR_SECOND,
        Interval.MAJOR_SECOND,
        Interval.PERFECT_FIFTH,
        Interval.FLAT_NINTH,
        Interval.NINTH,
        Interval.SHARP_NINTH,
        Interval.ELEVENTH,
        Interval.SHARP_ELEVENTH,
        Interval.FLAT_THIRTEENTH,
        Interval.THIRTEENTH,
    }
)


def note_midi_code(note: Note) -> int:
    """MIDI code of a note in the octave below middle C.

    The accidental is applied to the letter's code, so ``Cb`` sits below
    ``C`` and ``B#`` above ``B``.

    Examples
    --------
    >>> note_midi_code(Note("C"))
    48
    >>> note_midi_code(Note("B", 1))
    60
    """
    return CENTRAL_C - 12 + NATURAL_SEMITONES[note.letter] + note.accidental


def chord_to_pitch_classes(chord: Chord) -> frozenset[int]:
    """Convert a Chord to a set of absolute pitch classes.

    Parameters
    ----------
    chord : Chord
        The chord to convert.

    Returns
    -------
    frozenset[int]
        Set of pitch classes (0-11, C=0) in the chord, bass included.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> sorted(chord_to_pitch_classes(parse("C")))
    [0, 4, 7]
    >>> sorted(chord_to_pitch_classes(parse("Gm")))
    [2, 7, 10]
    """
    pitch_classes = {(chord.root.semitone + st) % 12 for st in chord.semitones}
    if chord.bass is not None:
        pitch_classes.add(chord.bass.semitone)
    return frozenset(pitch_classes)


def chroma(chord: Chord) -> NDArray[np.int64]:
    """Binary 12-bin chroma vector of a chord (index 0 = C).

    Examples
    --------
    >>> from chord_symbols import parse
    >>> chroma(parse("C")).tolist()
    [1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0]
    """
    vector = np.zeros(12, dtype=np.int64)
    vector[sorted(chord_to_pitch_classes(chord))] = 1
    return vector


def pitch_class_jaccard(pc1: frozenset[int], pc2: frozenset[int]) -> float:
    """Compute Jaccard similarity between two pitch class sets.

    Examples
    --------
    >>> pitch_class_jaccard(frozenset({0, 4, 7}), frozenset({0, 3, 7}))
    0.5
    """
    if not pc1 or not pc2:
        return 0.0
    return len(pc1 & pc2) / len(pc1 | pc2)


def chord_pitch_similarity(chord1: Chord | None, chord2: Chord | None) -> float:
    """Compute pitch class Jaccard similarity between two chords.

    Parameters
    ----------
    chord1 : Chord | None
        First chord.
    chord2 : Chord | None
        Second chord.

    Returns
    -------
    float
        Jaccard similarity of pitch class sets (0.0 to 1.0).

    Examples
    --------
    >>> from chord_symbols import parse
    >>> chord_pitch_similarity(parse("C"), parse("Cm"))
    0.5
    >>> chord_pitch_similarity(parse("C#"), parse("Db"))
    1.0
    """
    if chord1 is None or chord2 is None:
        return 0.0
    return pitch_class_jaccard(chord_to_pitch_classes(chord1), chord_to_pitch_classes(chord2))


def roots_match(chord1: Chord | None, chord2: Chord | None) -> bool:
    """Check if two chords have enharmonically equivalent roots."""
    if chord1 is None or chord2 is None:
        return False
    return chord1.root.semitone == chord2.root.semitone


def quality_category(chord: Chord) -> str:
    """Get the broad category of a chord from its third and fifth.

    Categories: "major", "minor", "diminished", "augmented", "suspended",
    "other" (power chords and chords with the third omitted).

    Examples
    --------
    >>> from chord_symbols import parse
    >>> quality_category(parse("Cm7b5"))
    'diminished'
    >>> quality_category(parse("C7sus4"))
    'suspended'
    """
    if chord.is_sus:
        return "suspended"
    if chord.has(Interval.MINOR_THIRD):
        if chord.has(Interval.DIMINISHED_FIFTH) and not chord.has(Interval.PERFECT_FIFTH):
            return "diminished"
        return "minor"
    if chord.has(Interval.MAJOR_THIRD):
        if chord.has(Interval.AUGMENTED_FIFTH) and not chord.has(Interval.PERFECT_FIFTH):
            return "augmented"
        return "major"
    return "other"


def weighted_chord_similarity(
    chord1: Chord | None,
    chord2: Chord | None,
    *,
    weight_root: float = 0.5,
    weight_pitch: float = 0.3,
    weight_quality: float = 0.2,
    root_gate: bool = True,
) -> float:
    """Compute weighted similarity between two chords.

    Combines root match, pitch class Jaccard, and quality category match.
    If root_gate=True (default), mismatched roots return 0.0 regardless
    of other weights.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> weighted_chord_similarity(parse("Gm7"), parse("Gm7"))
    1.0
    >>> weighted_chord_similarity(parse("Gm7"), parse("Am7"))
    0.0
    """
    if chord1 is None or chord2 is None:
        return 0.0

    root_match = 1.0 if roots_match(chord1, chord2) else 0.0
    if root_gate and root_match == 0.0:
        return 0.0

    pitch_sim = chord_pitch_similarity(chord1, chord2)
    quality_match = 1.0 if quality_category(chord1) == quality_category(chord2) else 0.0

    total_weight = weight_root + weight_pitch + weight_quality
    if total_weight == 0:
        return 0.0

    return (
        weight_root * root_match + weight_pitch * pitch_sim + weight_quality * quality_match
    ) / total_weight


def midi_codes(chord: Chord) -> NDArray[np.int64]:
    """Render a chord as MIDI codes around middle C.

    The bass (or the root, when there is no bass) sounds an octave below;
    chord tones are stacked on the root using their full interval size.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> midi_codes(parse("C7")).tolist()
    [36, 52, 55, 58]
    >>> midi_codes(parse("C/E")).tolist()
    [40, 48, 52, 55]
    """
    root = note_midi_code(chord.root)
    if chord.bass is not None:
        codes = [note_midi_code(chord.bass) - 12, root]
    else:
        codes = [root - 12]
    codes.extend(root + r.interval.semitones for r in chord.intervals[1:])
    return np.array(codes, dtype=np.int64)


def _candidates(tone: ResolvedInterval) -> NDArray[np.int64]:
    codes = np.arange(note_midi_code(tone.note), MAX_MIDI_CODE + 1, 12)
    return codes[codes >= MIN_MIDI_CODE]


def _pick_lead(pool: list[ResolvedInterval], target: int) -> tuple[int, ResolvedInterval] | None:
    """Pick the chord tone nearest to ``target``, skipping minor-ninth clashes."""
    ordered = sorted(pool, key=lambda r: r.semitone)
    clashing = set()
    for i, tone in enumerate(ordered):
        following = ordered[(i + 1) % len(ordered)]
        if abs(tone.semitone - following.semitone) in (1, 11):
            clashing.add(following.interval)
    allowed = [r for r in ordered if r.interval not in clashing] or ordered

    best: tuple[int, ResolvedInterval] | None = None
    best_distance = None
    for tone in allowed:
        for code in _candidates(tone):
            distance = abs(int(code) - target)
            if best_distance is None or distance < best_distance:
                best, best_distance = (int(code), tone), distance
    return best


def voicing(chord: Chord, lead: int | None = None) -> NDArray[np.int64]:
    """Build a close voicing of a chord as MIDI codes.

    The bass and root go at the bottom. The lead (top) note is the chord
    tone nearest to ``lead``. Guide tones (thirds, sixths, sevenths and
    altered fifths) are stacked upward from ``MIN_MIDI_CODE``, and
    tensions fill in just under the lead.

    Parameters
    ----------
    chord : Chord
        The chord to voice.
    lead : int | None
        Desired MIDI code of the top note. Defaults to ``MAX_MIDI_CODE``
        and is raised to ``MIN_LEAD_CODE`` when lower.

    Returns
    -------
    NDArray[np.int64]
        MIDI codes, bottom first and lead last.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> voicing(parse("C7")).tolist()
    [36, 52, 58, 79]
    >>> voicing(parse("C7"), lead=70).tolist()
    [36, 52, 67, 70]
    """
    target = max(lead if lead is not None else MAX_MIDI_CODE, MIN_LEAD_CODE)

    root = note_midi_code(chord.root)
    if chord.bass is not None:
        codes = [note_midi_code(chord.bass) - 12, root]
    else:
        codes = [root - 12]

    pool = list(chord.intervals)
    picked = _pick_lead(pool, target)
    lead_code = None
    if picked is not None:
        lead_code, lead_tone = picked
        pool.remove(lead_tone)

    guides = [r for r in pool if r.interval in GUIDE_TONES]
    codes.extend(sorted(int(_candidates(r)[0]) for r in guides))

    ceiling = lead_code if lead_code is not None else MAX_MIDI_CODE + 1
    fills = []
    for tone in pool:
        if tone.interval not in TENSIONS:
            continue
        below = _candidates(tone)
        below = below[below < ceiling]
        if below.size:
            fills.append(int(below.max()))
    codes.extend(sorted(fills, reverse=True))

    if lead_code is not None:
        codes.append(lead_code)
    return np.array(codes, dtype=np.int64)


def encode_harte(chord: Chord) -> tuple[int, NDArray[np.int64], int]:
    """Encode a chord the way ``mir_eval`` encodes Harte labels.

    Returns
    -------
    tuple[int, NDArray[np.int64], int]
        Root pitch class, 12-bin bitmap relative to the root, and the bass
        as semitones above the root.

    Raises
    ------
    ImportError
        If mir_eval is not installed.

    Examples
    --------
    >>> from chord_symbols import parse
    >>> root, bitmap, bass = encode_harte(parse("D7/F#"))
    >>> root, bitmap.tolist(), bass
    (2, [1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0], 4)
    """
    try:
        import mir_eval
    except ImportError:
        msg = "mir_eval is required for Harte encoding. Install with: pip install mir_eval"
        raise ImportError(msg) from None

    # Fold 9ths, 11ths and 13ths into the octave instead of dropping them
    root, bitmap, bass = mir_eval.chord.encode(chord.to_harte(), reduce_extended_chords=True)
    return int(root), np.asarray(bitmap, dtype=np.int64), int(bass)
