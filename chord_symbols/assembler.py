"""Assemble the final ``Chord`` and render its normalized descriptor."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from chord_symbols.models import Chord
from chord_symbols.notes import SEVENTHS, THIRDS, Interval

if TYPE_CHECKING:
    from chord_symbols.grammar import ParsedSymbol
    from chord_symbols.models import ChordQuality, ResolvedInterval

QUALITY_TEXT = MappingProxyType(
    {
        "major": "",
        "minor": "m",
        "diminished": "dim",
        "half-diminished": "ø",
        "augmented": "+",
        "altered": "",
    }
)

SUSPENSION_TEXT = MappingProxyType(
    {
        Interval.MINOR_SECOND: "susb2",
        Interval.MAJOR_SECOND: "sus2",
        Interval.PERFECT_FOURTH: "sus4",
        Interval.AUGMENTED_FOURTH: "sus#4",
    }
)

# Added tones not written with their plain notation
ADDITION_TEXT = MappingProxyType(
    {
        Interval.MAJOR_SEVENTH: "Maj7",
    }
)

# A thirteenth with no seventh under it reads as a sixth
SIXTHS = frozenset({Interval.MAJOR_SIXTH, Interval.THIRTEENTH})

POWER_TONES = frozenset({Interval.UNISON, Interval.PERFECT_FIFTH})


def classify_quality(symbol: ParsedSymbol, intervals: tuple[ResolvedInterval, ...]) -> ChordQuality:
    """Name the harmonic function of a resolved chord.

    Checked in order: a bare root and fifth is a power chord; a minor third
    with a diminished fifth (and no perfect fifth) is diminished, or
    half-diminished with a minor seventh; other minor-third chords split by
    their seventh or sixth. An ``aug`` chord with no seventh or sixth stays
    augmented. Everything else, chords without a third included, is major
    or dominant by its seventh or sixth.

    Examples
    --------
    >>> from chord_symbols.grammar import validate
    >>> from chord_symbols.resolver import resolve
    >>> from chord_symbols.tokenizer import tokenize
    >>> symbol = validate(tokenize("C13"))
    >>> classify_quality(symbol, resolve(symbol))
    'dominant'
    """
    present = {r.interval for r in intervals}

    if present == POWER_TONES:
        return "power"
    if Interval.MINOR_THIRD in present:
        if Interval.DIMINISHED_FIFTH in present and Interval.PERFECT_FIFTH not in present:
            return "half-diminished" if Interval.MINOR_SEVENTH in present else "diminished"
        if Interval.MAJOR_SEVENTH in present:
            return "minor-major7"
        if Interval.MINOR_SEVENTH in present:
            return "minor7"
        return "minor6" if present & SIXTHS else "minor"
    if symbol.quality == "augmented" and not present & (SEVENTHS | SIXTHS):
        return "augmented"
    if Interval.MINOR_SEVENTH in present:
        return "dominant"
    if Interval.MAJOR_SEVENTH in present:
        return "major7"
    return "major6" if present & SIXTHS else "major"


def _extension_text(symbol: ParsedSymbol) -> str:
    if symbol.is_power:
        return "5"
    if 6 in symbol.extensions:
        return "69" if 9 in symbol.extensions else "6"
    if symbol.stack_top is not None:
        return str(symbol.stack_top)
    if symbol.delta:
        return "7"
    return ""


def render_descriptor(symbol: ParsedSymbol) -> str:
    """Render a parsed symbol in canonical notation.

    The order is root, quality, major marker, extension, ``alt``, ``sus``,
    then alterations, additions and omissions in one parenthesized group,
    then the bass. Parsing the result gives back an equivalent chord.

    Parameters
    ----------
    symbol : ParsedSymbol
        A validated chord symbol.

    Returns
    -------
    str
        The normalized descriptor.

    Examples
    --------
    >>> from chord_symbols.grammar import validate
    >>> from chord_symbols.tokenizer import tokenize
    >>> render_descriptor(validate(tokenize("C-Maj7(omit5)")))
    'CmMaj7(omit5)'
    >>> render_descriptor(validate(tokenize("C6/9")))
    'C69'
    """
    parts = [str(symbol.root), QUALITY_TEXT[symbol.quality]]
    if symbol.major_seventh:
        parts.append("Maj")
    parts.append(_extension_text(symbol))
    if symbol.quality == "altered":
        parts.append("alt")
    if symbol.suspension is not None:
        parts.append(SUSPENSION_TEXT[symbol.suspension])

    modifiers = [a.notation for a in symbol.alterations]
    modifiers.extend(f"add{ADDITION_TEXT.get(a, a.notation)}" for a in symbol.additions)
    modifiers.extend(f"omit{o}" for o in symbol.omissions)
    if modifiers:
        parts.append(f"({','.join(modifiers)})")

    if symbol.bass is not None:
        parts.append(f"/{symbol.bass}")
    return "".join(parts)


def assemble(symbol: ParsedSymbol, intervals: tuple[ResolvedInterval, ...], origin: str) -> Chord:
    """Build the final chord from a parsed symbol and its resolved tones.

    Parameters
    ----------
    symbol : ParsedSymbol
        The validated symbol.
    intervals : tuple[ResolvedInterval, ...]
        Output of ``chord_symbols.resolver.resolve``.
    origin : str
        The symbol as typed.

    Returns
    -------
    Chord
        The assembled chord.
    """
    has_third = any(r.interval in THIRDS for r in intervals)
    is_sus = not symbol.is_power and 3 not in symbol.omissions and not has_third
    return Chord(
        root=symbol.root,
        intervals=intervals,
        descriptor=render_descriptor(symbol),
        origin=origin,
        bass=symbol.bass,
        is_sus=is_sus,
        quality=classify_quality(symbol, intervals),
    )
