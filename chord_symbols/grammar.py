"""Grammar validation for tokenized chord symbols.

Validation runs in two steps. A reader walks the tokens once and sorts them
into a ``ChordGrammarState``: the root, quality markers, extensions,
alterations, ``add``/``omit``/``sus`` clauses, the slash-bass clause and
anything it could not place. Then every rule in ``GRAMMAR_RULES`` is checked
in order, and the first one that fails raises a ``GrammarError`` naming it.

The rules form a flat, ordered table so notation conventions can be changed
by editing data rather than control flow.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Literal

from chord_symbols.errors import GrammarError
from chord_symbols.notes import FIFTHS, THIRDS, Interval, Note
from chord_symbols.resolver import collect_intervals
from chord_symbols.tokenizer import Token

Quality = Literal["major", "minor", "diminished", "half-diminished", "augmented", "altered"]

# Markers that define the triad; at most one may appear
TRIAD_MARKERS = frozenset({"minor", "diminished", "half-diminished", "augmented", "altered"})

# Markers that turn the seventh major
MAJOR_MARKERS = frozenset({"major", "delta"})

# Markers that fix a minor third, so they cannot be suspended
THIRD_MARKERS = frozenset({"minor", "diminished", "half-diminished", "altered"})

# Marker pairs that contradict each other even though they sit in different families
MARKER_CONFLICTS = frozenset(
    {
        frozenset({"altered", "major"}),
        frozenset({"altered", "delta"}),
        frozenset({"half-diminished", "major"}),
        frozenset({"half-diminished", "delta"}),
    }
)

TOP_LEVEL_DEGREES = frozenset({"5", "6", "7", "9", "11", "13"})
SEVENTH_STACK = frozenset({"7", "9", "11", "13"})

# Adjacent stack degrees read as one extension that names its seventh (C△713)
COMPOUND_STACKS = frozenset({("7", "13")})

ALTERATION_TARGETS = MappingProxyType(
    {
        "b5": Interval.DIMINISHED_FIFTH,
        "#5": Interval.AUGMENTED_FIFTH,
        "b9": Interval.FLAT_NINTH,
        "#9": Interval.SHARP_NINTH,
        "#11": Interval.SHARP_ELEVENTH,
        "b13": Interval.FLAT_THIRTEENTH,
    }
)

ALTERATIONS_BY_QUALITY = MappingProxyType(
    {
        "major": frozenset({"b5", "#5", "b9", "#9", "#11", "b13"}),
        "minor": frozenset({"b5", "#5", "b9", "#9", "#11", "b13"}),
        "augmented": frozenset({"b9", "#9", "#11"}),
        "diminished": frozenset({"b9", "b13"}),
        "half-diminished": frozenset({"b9", "b13"}),
        "altered": frozenset(),
    }
)

ADDITION_TARGETS = MappingProxyType(
    {
        "2": Interval.MAJOR_SECOND,
        "4": Interval.PERFECT_FOURTH,
        "6": Interval.MAJOR_SIXTH,
        "b9": Interval.FLAT_NINTH,
        "9": Interval.NINTH,
        "#9": Interval.SHARP_NINTH,
        "11": Interval.ELEVENTH,
        "#11": Interval.SHARP_ELEVENTH,
        "b13": Interval.FLAT_THIRTEENTH,
        "13": Interval.THIRTEENTH,
        # A major marker after add names the major seventh
        "major": Interval.MAJOR_SEVENTH,
        "delta": Interval.MAJOR_SEVENTH,
    }
)

OMISSION_TARGETS = frozenset({"3", "5"})

SUSPENSION_TARGETS = MappingProxyType(
    {
        "b2": Interval.MINOR_SECOND,
        "2": Interval.MAJOR_SECOND,
        "4": Interval.PERFECT_FOURTH,
        "#4": Interval.AUGMENTED_FOURTH,
    }
)

# Degrees that cannot sound together, natural degree first
INCOMPATIBLE_DEGREES: tuple[tuple[Interval, Interval], ...] = (
    (Interval.MAJOR_THIRD, Interval.MINOR_THIRD),
    (Interval.PERFECT_FIFTH, Interval.DIMINISHED_FIFTH),
    (Interval.PERFECT_FIFTH, Interval.AUGMENTED_FIFTH),
    (Interval.MAJOR_SIXTH, Interval.MINOR_SIXTH),
    (Interval.NINTH, Interval.FLAT_NINTH),
    (Interval.NINTH, Interval.SHARP_NINTH),
    (Interval.ELEVENTH, Interval.SHARP_ELEVENTH),
    (Interval.THIRTEENTH, Interval.FLAT_THIRTEENTH),
)

# Tokens a comma may lead into
CLAUSE_STARTS = frozenset({"extension", "alteration", "add", "omit"})


@dataclass(frozen=True)
class ParsedSymbol:
    """An accepted chord symbol, normalized into its parts.

    Parameters
    ----------
    root : Note
        Root note.
    quality : Quality
        Triad family set by the quality marker (``"major"`` when none).
    major_seventh : bool
        Whether a major marker (``Maj``, ``M``, ``Δ``...) was given.
    delta : bool
        Whether the major marker was the ``Δ`` shorthand.
    extensions : tuple[int, ...]
        Top-level degrees (5, 6, 7, 9, 11, 13), ascending.
    alterations : tuple[Interval, ...]
        Chromatically altered degrees, ascending.
    additions : tuple[Interval, ...]
        Added degrees, ascending.
    omissions : tuple[int, ...]
        Omitted degrees (3 and/or 5).
    suspension : Interval | None
        The suspended second or fourth replacing the third.
    bass : Note | None
        Slash-bass note.
    tokens : tuple[Token, ...]
        The tokens the symbol was read from.
    """

    root: Note
    quality: Quality = "major"
    major_seventh: bool = False
    delta: bool = False
    extensions: tuple[int, ...] = ()
    alterations: tuple[Interval, ...] = ()
    additions: tuple[Interval, ...] = ()
    omissions: tuple[int, ...] = ()
    suspension: Interval | None = None
    bass: Note | None = None
    tokens: tuple[Token, ...] = ()

    @property
    def is_power(self) -> bool:
        """Whether this is a power chord (root and fifth only)."""
        return 5 in self.extensions

    @property
    def stack_top(self) -> int | None:
        """Highest of the 7/9/11/13 extensions, if any."""
        return max((e for e in self.extensions if e in (7, 9, 11, 13)), default=None)

    @property
    def is_six_nine(self) -> bool:
        return 6 in self.extensions and 9 in self.extensions


@dataclass
class Marker:
    """A quality marker and the extension it took, if any."""

    token: Token
    in_group: bool
    follower: Token | None = None


@dataclass
class Clause:
    """An ``add``, ``omit`` or ``sus`` clause.

    ``keyword`` is None for a bare degree read as an addition inside
    parentheses (``C7(9)``). ``tail`` holds the ``7`` of ``add Maj7``.
    """

    keyword: Token | None
    target: Token | None
    tail: Token | None = None

    @property
    def tokens(self) -> tuple[Token, ...]:
        return tuple(t for t in (self.keyword, self.target, self.tail) if t is not None)


@dataclass
class BassClause:
    """A ``/`` followed by a bass note and whatever came after it."""

    slash: Token
    note: Token | None = None
    accidental: Token | None = None
    trailing: list[Token] = field(default_factory=list)


@dataclass
class ChordGrammarState:
    """Transient accumulator filled by the reader and inspected by the rules."""

    tokens: tuple[Token, ...]
    root: Token | None = None
    root_accidental: Token | None = None
    extra_notes: list[Token] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    extensions: list[Token] = field(default_factory=list)
    slash_nines: list[Token] = field(default_factory=list)
    alterations: list[Token] = field(default_factory=list)
    additions: list[Clause] = field(default_factory=list)
    omissions: list[Clause] = field(default_factory=list)
    suspensions: list[Clause] = field(default_factory=list)
    bass: BassClause | None = None
    stray: list[Token] = field(default_factory=list)
    group_errors: list[Token] = field(default_factory=list)
    missing_targets: list[Token] = field(default_factory=list)

    def marker_values(self) -> set[str]:
        return {m.token.value for m in self.markers}

    def quality(self) -> Quality:
        for marker in self.markers:
            if marker.token.value in TRIAD_MARKERS:
                return marker.token.value  # type: ignore[return-value]
        return "major"

    def to_symbol(self) -> ParsedSymbol:
        """Build the normalized symbol from what was read.

        Targets the rules have not validated yet are skipped, so the rules
        can call this before the whole table has run.
        """
        if self.root is None:
            msg = "Cannot build a chord symbol without a root"
            raise ValueError(msg)
        root_accidental = 0
        if self.root_accidental is not None:
            root_accidental = 1 if self.root_accidental.value == "#" else -1

        bass = None
        if self.bass is not None and self.bass.note is not None:
            bass_accidental = 0
            if self.bass.accidental is not None:
                bass_accidental = 1 if self.bass.accidental.value == "#" else -1
            bass = Note(self.bass.note.value, bass_accidental)

        values = self.marker_values()
        suspension = None
        if self.suspensions:
            target = self.suspensions[0].target
            suspension = SUSPENSION_TARGETS[target.value if target is not None else "4"]

        extensions = sorted({int(t.value) for t in self.extensions if t.value in TOP_LEVEL_DEGREES})
        alterations = {
            ALTERATION_TARGETS[t.value] for t in self.alterations if t.value in ALTERATION_TARGETS
        }
        additions = {
            ADDITION_TARGETS[c.target.value]
            for c in self.additions
            if c.target is not None and c.target.value in ADDITION_TARGETS
        }
        omissions = sorted(
            {
                int(c.target.value)
                for c in self.omissions
                if c.target is not None and c.target.value in OMISSION_TARGETS
            }
        )
        return ParsedSymbol(
            root=Note(self.root.value, root_accidental),
            quality=self.quality(),
            major_seventh=bool(values & MAJOR_MARKERS),
            delta="delta" in values,
            extensions=tuple(extensions),
            alterations=tuple(sorted(alterations, key=lambda i: i.semitones)),
            additions=tuple(sorted(additions, key=lambda i: i.semitones)),
            omissions=tuple(omissions),
            suspension=suspension,
            bass=bass,
            tokens=self.tokens,
        )


def _peek(tokens: tuple[Token, ...], i: int) -> Token | None:
    return tokens[i] if i < len(tokens) else None


def _is_degree(token: Token | None) -> bool:
    return token is not None and token.kind in ("extension", "alteration")


def _is_major_marker(token: Token | None) -> bool:
    return token is not None and token.kind == "quality" and token.value in MAJOR_MARKERS


def _read_clause(toks: tuple[Token, ...], i: int, keyword: Token) -> tuple[Clause | None, int]:
    """Read the target of an ``add``/``omit`` keyword starting at ``toks[i]``."""
    target = _peek(toks, i)
    if _is_degree(target):
        return Clause(keyword=keyword, target=target), i + 1
    if keyword.kind == "add" and _is_major_marker(target):
        clause = Clause(keyword=keyword, target=target)
        tail = _peek(toks, i + 1)
        if tail is not None and tail.kind == "extension" and tail.value == "7":
            clause.tail = tail
            return clause, i + 2
        return clause, i + 1
    return None, i


def read_tokens(tokens: list[Token] | tuple[Token, ...]) -> ChordGrammarState:
    """Sort tokens into a ``ChordGrammarState`` without judging them.

    Parameters
    ----------
    tokens : list[Token] | tuple[Token, ...]
        Output of ``chord_symbols.tokenizer.tokenize``.

    Returns
    -------
    ChordGrammarState
        The filled-in state. Misplaced tokens are recorded, not rejected.
    """
    state = ChordGrammarState(tokens=tuple(tokens))
    toks = state.tokens
    n = len(toks)
    i = 0

    if n and toks[0].kind == "note":
        state.root = toks[0]
        i = 1
        if i < n and toks[i].kind == "accidental":
            state.root_accidental = toks[i]
            i += 1

    depth = 0
    # add/omit context: commas continue it, and an add also runs on
    # through directly following degrees (Cadd911)
    context: list[Clause] | None = None
    context_keyword: Token | None = None
    continued = False
    chaining = False
    # Whether the last token finished a degree or a clause
    after_item = False

    while i < n:
        previous = toks[i - 1] if i > 0 else None
        tok = toks[i]
        i += 1
        was_continued, continued = continued, False
        was_chaining, chaining = chaining, False
        follows_item, after_item = after_item, False

        if tok.kind == "note":
            state.extra_notes.append(tok)
        elif tok.kind == "accidental":
            state.stray.append(tok)
        elif tok.kind == "quality":
            marker = Marker(token=tok, in_group=depth > 0)
            nxt = _peek(toks, i)
            if tok.value == "major" and nxt is not None and nxt.kind == "extension":
                if nxt.value in SEVENTH_STACK:
                    marker.follower = nxt
                    state.extensions.append(nxt)
                    i += 1
            state.markers.append(marker)
            after_item = marker.follower is not None
        elif tok.kind == "extension":
            if context is not None and (was_continued or was_chaining):
                context.append(Clause(keyword=context_keyword, target=tok))
                chaining = context is state.additions
            elif depth > 0:
                state.additions.append(Clause(keyword=None, target=tok))
            else:
                state.extensions.append(tok)
            after_item = True
        elif tok.kind == "alteration":
            state.alterations.append(tok)
            after_item = True
        elif tok.kind in ("add", "omit"):
            clauses = state.additions if tok.kind == "add" else state.omissions
            clause, i = _read_clause(toks, i, tok)
            if clause is not None:
                clauses.append(clause)
                after_item = True
                chaining = tok.kind == "add"
            else:
                state.missing_targets.append(tok)
            context = clauses
            context_keyword = tok
        elif tok.kind == "sus":
            target = _peek(toks, i)
            if _is_degree(target) and target.value in SUSPENSION_TARGETS:
                state.suspensions.append(Clause(keyword=tok, target=target))
                i += 1
            else:
                state.suspensions.append(Clause(keyword=tok, target=None))
            after_item = True
        elif tok.kind == "slash":
            nxt = _peek(toks, i)
            if nxt is not None and nxt.kind == "extension" and nxt.value == "9":
                # Six-nine written as 6/9
                state.slash_nines.append(tok)
                state.extensions.append(nxt)
                i += 1
                after_item = True
                continue
            bass = BassClause(slash=tok)
            if nxt is not None and nxt.kind == "note":
                bass.note = nxt
                i += 1
                after = _peek(toks, i)
                if after is not None and after.kind == "accidental":
                    bass.accidental = after
                    i += 1
            bass.trailing = list(toks[i:])
            state.bass = bass
            break
        elif tok.kind == "open":
            if depth > 0:
                state.group_errors.append(tok)
            depth += 1
            context = None
        elif tok.kind == "close":
            if depth == 0:
                state.group_errors.append(tok)
            else:
                depth -= 1
                if previous is not None and previous.kind == "open":
                    # Empty group
                    state.group_errors.append(previous)
            context = None
        elif tok.kind == "comma":
            nxt = _peek(toks, i)
            if not follows_item or nxt is None or nxt.kind not in CLAUSE_STARTS:
                state.stray.append(tok)
            elif context is not None:
                continued = True

    if depth > 0:
        opened = [t for t in toks if t.kind == "open"]
        state.group_errors.append(opened[-1])

    return state


# ----------------------------
# Rules
# ----------------------------

Check = Callable[[ChordGrammarState], tuple[Token, ...] | None]


@dataclass(frozen=True)
class GrammarRule:
    """A named grammar rule.

    Parameters
    ----------
    name : str
        Short identifier reported in errors.
    description : str
        What the rule requires, in words.
    check : Check
        Returns the offending tokens (possibly empty) when the rule is
        violated, or None when it holds.
    """

    name: str
    description: str
    check: Check


def _check_single_root(state: ChordGrammarState) -> tuple[Token, ...] | None:
    if state.root is None:
        return state.tokens[:1]
    if state.extra_notes:
        return tuple(state.extra_notes)
    return None


def _check_balanced_groups(state: ChordGrammarState) -> tuple[Token, ...] | None:
    return tuple(state.group_errors) or None


def _check_clause_target(state: ChordGrammarState) -> tuple[Token, ...] | None:
    return tuple(state.missing_targets) or None


def _check_stray_symbol(state: ChordGrammarState) -> tuple[Token, ...] | None:
    return tuple(state.stray) or None


def _check_slash_bass(state: ChordGrammarState) -> tuple[Token, ...] | None:
    bass = state.bass
    if bass is None:
        return None
    if bass.note is None:
        return (bass.slash, *bass.trailing)
    if bass.trailing:
        return tuple(bass.trailing)
    return None


def _check_single_quality(state: ChordGrammarState) -> tuple[Token, ...] | None:
    grouped = [m.token for m in state.markers if m.in_group and m.token.value not in MAJOR_MARKERS]
    if grouped:
        return tuple(grouped)
    triads = [m.token for m in state.markers if m.token.value in TRIAD_MARKERS]
    if len(triads) > 1:
        return tuple(triads)
    majors = [m.token for m in state.markers if m.token.value in MAJOR_MARKERS]
    if len(majors) > 1:
        return tuple(majors)
    for first in triads:
        for second in majors:
            if frozenset({first.value, second.value}) in MARKER_CONFLICTS:
                return (first, second)
    return None


# Ordered exceptions to "a major marker needs a seventh or a tension"
BARE_MAJOR_EXEMPTIONS: tuple[tuple[str, Callable[[Marker], bool]], ...] = (
    ("delta-shorthand", lambda marker: marker.token.value == "delta"),
    ("seventh-or-tension", lambda marker: marker.follower is not None),
)


def _check_bare_major(state: ChordGrammarState) -> tuple[Token, ...] | None:
    for marker in state.markers:
        if marker.token.value not in MAJOR_MARKERS:
            continue
        if not any(exempt(marker) for _, exempt in BARE_MAJOR_EXEMPTIONS):
            return (marker.token,)
    return None


def _check_extension_degrees(state: ChordGrammarState) -> tuple[Token, ...] | None:
    seen: set[str] = set()
    for tok in state.extensions:
        if tok.value not in TOP_LEVEL_DEGREES or tok.value in seen:
            return (tok,)
        seen.add(tok.value)

    stack = [t for t in state.extensions if t.value in SEVENTH_STACK]
    if len(stack) == 2 and (stack[0].value, stack[1].value) in COMPOUND_STACKS:
        if stack[0].end == stack[1].start:
            stack = stack[1:]
    sixes = [t for t in state.extensions if t.value == "6"]
    if len(stack) > 1:
        return tuple(stack)
    if sixes and any(t.value != "9" for t in stack):
        return (*sixes, *stack)
    if sixes:
        majors = [m.token for m in state.markers if m.token.value in MAJOR_MARKERS]
        if majors:
            return (*sixes, *majors)
    if state.slash_nines and not sixes:
        return tuple(state.slash_nines)
    if state.quality() == "altered":
        beyond = [t for t in state.extensions if t.value != "7"]
        if beyond:
            return tuple(beyond)
    return None


def _check_power_chord(state: ChordGrammarState) -> tuple[Token, ...] | None:
    fives = [t for t in state.extensions if t.value == "5"]
    if not fives:
        return None
    others = [
        *(m.token for m in state.markers),
        *(t for t in state.extensions if t.value != "5"),
        *state.alterations,
        *(tok for c in (*state.additions, *state.omissions, *state.suspensions) for tok in c.tokens),
    ]
    if others:
        return (fives[0], *sorted(others, key=lambda t: t.start)[:1])
    return None


def _check_suspension(state: ChordGrammarState) -> tuple[Token, ...] | None:
    if not state.suspensions:
        return None
    if len(state.suspensions) > 1:
        return state.suspensions[1].tokens
    sus = state.suspensions[0].tokens
    thirds = [m.token for m in state.markers if m.token.value in THIRD_MARKERS]
    if thirds:
        return (*sus, *thirds)
    for clause in state.omissions:
        if clause.target is not None and clause.target.value == "3":
            return (*sus, *clause.tokens)
    return None


def _check_alteration_context(state: ChordGrammarState) -> tuple[Token, ...] | None:
    allowed = ALTERATIONS_BY_QUALITY[state.quality()]
    explicit = {t.value for t in state.extensions}
    seen: set[str] = set()
    for tok in state.alterations:
        if tok.value not in allowed or tok.value in seen or tok.value[1:] in explicit:
            return (tok,)
        seen.add(tok.value)
    return None


def _check_addition_context(state: ChordGrammarState) -> tuple[Token, ...] | None:
    seen: set[str] = set()
    for clause in state.additions:
        value = clause.target.value if clause.target is not None else ""
        if value not in ADDITION_TARGETS or value in seen:
            return clause.tokens
        seen.add(value)
    if not state.additions:
        return None

    # Tones implied before any alteration is applied
    symbol = replace(state.to_symbol(), additions=(), alterations=())
    implied = set(collect_intervals(symbol, apply_omissions=False))
    altered = {ALTERATION_TARGETS[t.value] for t in state.alterations if t.value in ALTERATION_TARGETS}
    for clause in state.additions:
        if clause.target is None:
            continue
        interval = ADDITION_TARGETS[clause.target.value]
        if interval in implied or interval in altered:
            return clause.tokens
    return None


def _check_omission_context(state: ChordGrammarState) -> tuple[Token, ...] | None:
    seen: set[str] = set()
    for clause in state.omissions:
        value = clause.target.value if clause.target is not None else ""
        if value not in OMISSION_TARGETS or value in seen:
            return clause.tokens
        seen.add(value)
    if not state.omissions:
        return None

    symbol = replace(state.to_symbol(), omissions=())
    present = set(collect_intervals(symbol, apply_omissions=False))
    altered_fifths = [t for t in state.alterations if t.value in ("b5", "#5")]
    for clause in state.omissions:
        if clause.target is None:
            continue
        if clause.target.value == "3" and not present & THIRDS:
            return clause.tokens
        if clause.target.value == "5":
            if not present & FIFTHS:
                return clause.tokens
            if altered_fifths:
                return (*clause.tokens, *altered_fifths)
    return None


def _interval_sources(state: ChordGrammarState, interval: Interval) -> tuple[Token, ...]:
    """Find the tokens that put ``interval`` into the chord."""
    for tok in state.alterations:
        if tok.value == interval.notation:
            return (tok,)
    for clause in state.additions:
        if clause.target is not None and ADDITION_TARGETS.get(clause.target.value) is interval:
            return clause.tokens
    for clause in state.suspensions:
        target = clause.target.value if clause.target is not None else "4"
        if SUSPENSION_TARGETS[target] is interval:
            return clause.tokens
    for tok in state.extensions:
        if tok.value == str(interval.degree):
            return (tok,)
    return tuple(m.token for m in state.markers[:1])


def _sources(state: ChordGrammarState, intervals: list[Interval]) -> tuple[Token, ...]:
    found = {tok for i in intervals for tok in _interval_sources(state, i)}
    return tuple(sorted(found, key=lambda t: t.start))


def _check_incompatible_degrees(state: ChordGrammarState) -> tuple[Token, ...] | None:
    present = set(collect_intervals(state.to_symbol()))
    for natural, altered in INCOMPATIBLE_DEGREES:
        if natural in present and altered in present:
            return _sources(state, [natural, altered])
    return None


def _check_semitone_cluster(state: ChordGrammarState) -> tuple[Token, ...] | None:
    by_pitch = {i.semitones % 12: i for i in collect_intervals(state.to_symbol())}
    for pc in range(12):
        run = [(pc + k) % 12 for k in range(3)]
        if all(p in by_pitch for p in run):
            return _sources(state, [by_pitch[p] for p in run])
    return None


GRAMMAR_RULES: tuple[GrammarRule, ...] = (
    GrammarRule("single-root", "Exactly one root note, at the start", _check_single_root),
    GrammarRule(
        "balanced-groups",
        "Parentheses must be balanced, not nested and not empty",
        _check_balanced_groups,
    ),
    GrammarRule("clause-target", "add/omit must be followed by a degree", _check_clause_target),
    GrammarRule("stray-symbol", "Symbol is not attached to a note or degree", _check_stray_symbol),
    GrammarRule(
        "slash-bass",
        "A slash bass must come last and hold exactly one note",
        _check_slash_bass,
    ),
    GrammarRule(
        "single-quality",
        "At most one quality marker; markers must not conflict",
        _check_single_quality,
    ),
    GrammarRule(
        "bare-major",
        "A major marker must be followed by a 7th or a tension (9, 11, 13)",
        _check_bare_major,
    ),
    GrammarRule(
        "extension-degrees",
        "Extensions must be 5, 6, 7, 9, 11 or 13 with a single seventh stack",
        _check_extension_degrees,
    ),
    GrammarRule("power-chord", "A power chord takes no other modifier", _check_power_chord),
    GrammarRule(
        "suspension",
        "A single sus, which cannot be combined with a third",
        _check_suspension,
    ),
    GrammarRule(
        "alteration-context",
        "Alteration is not valid for this chord",
        _check_alteration_context,
    ),
    GrammarRule(
        "addition-context",
        "Added degree is not valid or already in the chord",
        _check_addition_context,
    ),
    GrammarRule(
        "omission-context",
        "Omitted degree must be a 3 or 5 the chord actually has",
        _check_omission_context,
    ),
    GrammarRule(
        "incompatible-degrees",
        "A natural degree cannot sound with its own alteration",
        _check_incompatible_degrees,
    ),
    GrammarRule(
        "semitone-cluster",
        "Three consecutive semitones are not allowed",
        _check_semitone_cluster,
    ),
)

RULES_BY_NAME = MappingProxyType({rule.name: rule for rule in GRAMMAR_RULES})


def validate(tokens: list[Token] | tuple[Token, ...], symbol: str = "") -> ParsedSymbol:
    """Check tokens against ``GRAMMAR_RULES`` and normalize them.

    Parameters
    ----------
    tokens : list[Token] | tuple[Token, ...]
        Tokens from ``tokenize``.
    symbol : str
        The original chord symbol, used in error messages.

    Returns
    -------
    ParsedSymbol
        The accepted, normalized chord symbol.

    Raises
    ------
    GrammarError
        For the first rule, in table order, that the tokens violate.

    Examples
    --------
    >>> from chord_symbols.tokenizer import tokenize
    >>> validate(tokenize("Cm7")).extensions
    (7,)
    """
    state = read_tokens(tokens)
    for rule in GRAMMAR_RULES:
        offending = rule.check(state)
        if offending is not None:
            raise GrammarError(rule.name, rule.description, offending, symbol)
    return state.to_symbol()
