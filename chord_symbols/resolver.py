"""Resolve a validated chord symbol into its interval set.

The expansion follows jazz-harmony conventions: an extension implies the
stacked thirds below it, alterations replace the natural degree, a
suspension replaces the third and omissions remove it or the fifth.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from chord_symbols.errors import ResolutionError
from chord_symbols.models import ResolvedInterval
from chord_symbols.notes import FIFTHS, SEVENTHS, THIRDS, Interval, spell

if TYPE_CHECKING:
    from chord_symbols.grammar import ParsedSymbol

TRIADS = MappingProxyType(
    {
        "major": (Interval.UNISON, Interval.MAJOR_THIRD, Interval.PERFECT_FIFTH),
        "minor": (Interval.UNISON, Interval.MINOR_THIRD, Interval.PERFECT_FIFTH),
        "diminished": (Interval.UNISON, Interval.MINOR_THIRD, Interval.DIMINISHED_FIFTH),
        "half-diminished": (
            Interval.UNISON,
            Interval.MINOR_THIRD,
            Interval.DIMINISHED_FIFTH,
            Interval.MINOR_SEVENTH,
        ),
        "augmented": (Interval.UNISON, Interval.MAJOR_THIRD, Interval.AUGMENTED_FIFTH),
        "altered": (
            Interval.UNISON,
            Interval.MAJOR_THIRD,
            Interval.MINOR_SEVENTH,
            Interval.FLAT_NINTH,
            Interval.SHARP_NINTH,
            Interval.SHARP_ELEVENTH,
            Interval.FLAT_THIRTEENTH,
        ),
    }
)

POWER_CHORD = (Interval.UNISON, Interval.PERFECT_FIFTH)

# Natural interval an alteration of the same degree replaces
NATURAL_BY_DEGREE = MappingProxyType(
    {
        5: Interval.PERFECT_FIFTH,
        9: Interval.NINTH,
        11: Interval.ELEVENTH,
        13: Interval.THIRTEENTH,
    }
)


def _seventh(symbol: ParsedSymbol) -> Interval:
    if symbol.major_seventh:
        return Interval.MAJOR_SEVENTH
    if symbol.quality == "diminished":
        return Interval.DIMINISHED_SEVENTH
    return Interval.MINOR_SEVENTH


def collect_intervals(symbol: ParsedSymbol, *, apply_omissions: bool = True) -> list[Interval]:
    """Expand a parsed symbol into its intervals, ordered by semitones.

    Implied tones are collected once each. Additions are appended as given,
    so a symbol that adds a tone the chord already implies comes back with
    that tone twice, which ``resolve`` rejects.

    Parameters
    ----------
    symbol : ParsedSymbol
        Output of ``chord_symbols.grammar.validate``.
    apply_omissions : bool
        Whether to drop omitted degrees. The grammar turns this off to check
        that an omitted degree is actually present.

    Returns
    -------
    list[Interval]
        Intervals from the root upward.

    Examples
    --------
    >>> from chord_symbols.grammar import ParsedSymbol
    >>> from chord_symbols.notes import Note
    >>> [str(i) for i in collect_intervals(ParsedSymbol(Note("C"), extensions=(9,)))]
    ['1', '3', '5', 'b7', '9']
    >>> flat_13 = ParsedSymbol(Note("C"), extensions=(7,), alterations=(Interval.FLAT_THIRTEENTH,))
    >>> [str(i) for i in collect_intervals(flat_13)]
    ['1', '3', '5', 'b7', '9', 'b13']
    """
    if symbol.is_power:
        intervals = list(POWER_CHORD)
    else:
        intervals = list(TRIADS[symbol.quality])

    def add(interval: Interval) -> None:
        if interval not in intervals:
            intervals.append(interval)

    def drop(*targets: Interval) -> None:
        for interval in targets:
            if interval in intervals:
                intervals.remove(interval)

    def has_degree(degree: int) -> bool:
        return any(i.degree == degree for i in intervals)

    top = symbol.stack_top
    if (top is not None or symbol.delta) and 6 not in symbol.extensions:
        add(_seventh(symbol))
    if 6 in symbol.extensions:
        add(Interval.MAJOR_SIXTH)
    if (top is not None and top >= 9) or 9 in symbol.extensions:
        add(Interval.NINTH)
    if top == 11:
        add(Interval.ELEVENTH)
        drop(Interval.MAJOR_THIRD)
    if top == 13:
        if Interval.MINOR_THIRD in intervals:
            add(Interval.ELEVENTH)
        add(Interval.THIRTEENTH)

    for alteration in symbol.alterations:
        drop(NATURAL_BY_DEGREE[alteration.degree])
        add(alteration)

    if symbol.suspension is not None:
        drop(*THIRDS)
        add(symbol.suspension)

    intervals.extend(symbol.additions)

    # A flat thirteenth on a seventh chord stands for the whole stack below it
    if Interval.FLAT_THIRTEENTH in symbol.alterations and SEVENTHS & set(intervals):
        if not has_degree(9):
            add(Interval.NINTH)
        if Interval.MINOR_THIRD in intervals and not has_degree(11):
            add(Interval.ELEVENTH)

    if apply_omissions:
        if 3 in symbol.omissions:
            drop(*THIRDS)
        if 5 in symbol.omissions:
            drop(*FIFTHS)

    return sorted(intervals, key=lambda i: i.semitones)


def resolve(symbol: ParsedSymbol, text: str = "") -> tuple[ResolvedInterval, ...]:
    """Resolve a parsed symbol into spelled chord tones.

    Parameters
    ----------
    symbol : ParsedSymbol
        Output of ``chord_symbols.grammar.validate``.
    text : str
        The chord symbol as typed, used in error messages.

    Returns
    -------
    tuple[ResolvedInterval, ...]
        One entry per chord tone, root first.

    Raises
    ------
    ResolutionError
        If an interval appears twice or a tone cannot be spelled with at
        most a double accidental.
    """
    seen: set[Interval] = set()
    resolved = []
    for interval in collect_intervals(symbol):
        if interval in seen:
            msg = f"Interval {interval} appears twice above {symbol.root}"
            raise ResolutionError(msg, text)
        seen.add(interval)
        try:
            note = spell(symbol.root, interval)
        except ValueError as e:
            raise ResolutionError(str(e), text) from e
        resolved.append(ResolvedInterval(interval=interval, semitone=interval.semitones % 12, note=note))
    return tuple(resolved)
