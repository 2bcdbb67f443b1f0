"""Entry points: parse a chord symbol into a ``Chord``."""

from __future__ import annotations

from chord_symbols.assembler import assemble
from chord_symbols.errors import ChordSymbolError
from chord_symbols.grammar import validate
from chord_symbols.models import Chord
from chord_symbols.resolver import resolve
from chord_symbols.tokenizer import tokenize


def parse(symbol: str) -> Chord:
    """Parse a chord symbol.

    The symbol goes through tokenizing, grammar validation, interval
    resolution and assembly; the first stage that fails raises.

    Parameters
    ----------
    symbol : str
        The chord symbol as typed (e.g. ``"AbMaj7#11"``, ``"C-Maj7(omit5)"``).

    Returns
    -------
    Chord
        The resolved chord.

    Raises
    ------
    LexError
        If part of the symbol is not a recognized token.
    GrammarError
        If the tokens break a grammar rule.
    ResolutionError
        If the accepted symbol cannot be resolved.

    Examples
    --------
    >>> parse("C").note_literals
    ('C', 'E', 'G')
    >>> parse("C/E").bass
    Note(letter='E', accidental=0)
    >>> parse("CΔ").descriptor
    'CMaj7'
    """
    tokens = tokenize(symbol)
    parsed = validate(tokens, symbol)
    intervals = resolve(parsed, symbol)
    return assemble(parsed, intervals, symbol)


def is_chord(symbol: str) -> bool:
    """Return True if ``symbol`` parses as a chord.

    Examples
    --------
    >>> is_chord("Cm7b5")
    True
    >>> is_chord("CMaj")
    False
    """
    try:
        parse(symbol)
    except ChordSymbolError:
        return False
    return True
