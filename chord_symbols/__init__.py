"""Chord symbol parser with an opinionated jazz notation grammar.

This library turns a typed chord symbol (e.g., "AbMaj7#11", "C-Maj7(omit5)")
into a fully resolved ``Chord``: spelled root and bass, interval set,
note literals and a normalized descriptor. Symbols that do not follow the
notation grammar are rejected with a ``ChordSymbolError``.

Examples
--------
>>> from chord_symbols import parse, is_chord

>>> chord = parse("AbMaj7#11")
>>> chord.note_literals
('Ab', 'C', 'Eb', 'G', 'D')
>>> chord.descriptor
'AbMaj7(#11)'

>>> # Spelling keeps each degree on its own letter
>>> parse("B#9").note_literals
('B#', 'D##', 'F##', 'A#', 'C##')

>>> # A bare major marker needs a seventh or a tension
>>> is_chord("CMaj(omit5)")
False

>>> from chord_symbols import to_harte
>>> to_harte(parse("C/E"))
'C:(3,5)/3'
"""

from chord_symbols.converter import from_dict, from_json, to_dict, to_harte, to_json, transpose
from chord_symbols.errors import ChordSymbolError, GrammarError, LexError, ResolutionError
from chord_symbols.models import Chord, ChordQuality, ResolvedInterval
from chord_symbols.notes import Interval, Note
from chord_symbols.parser import is_chord, parse
from chord_symbols.pitch_class import (
    chord_pitch_similarity,
    chord_to_pitch_classes,
    chroma,
    encode_harte,
    midi_codes,
    roots_match,
    voicing,
    weighted_chord_similarity,
)

__all__ = [
    "Chord",
    "ChordQuality",
    "ChordSymbolError",
    "GrammarError",
    "Interval",
    "LexError",
    "Note",
    "ResolutionError",
    "ResolvedInterval",
    "chord_pitch_similarity",
    "chord_to_pitch_classes",
    "chroma",
    "encode_harte",
    "from_dict",
    "from_json",
    "is_chord",
    "midi_codes",
    "parse",
    "roots_match",
    "to_dict",
    "to_harte",
    "to_json",
    "transpose",
    "voicing",
    "weighted_chord_similarity",
]
