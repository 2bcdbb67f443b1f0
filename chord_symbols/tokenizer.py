"""Table-driven tokenizer for chord symbols.

The scanner is a small finite-state machine. In the *note* state (start of
input and right after a slash) it reads a pitch letter and at most one
accidental. In the *body* state it reads, left to right, the longest symbol
the tables below recognize. It only classifies substrings; whether the
resulting sequence makes a valid chord is decided by ``chord_symbols.grammar``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

from chord_symbols.errors import LexError
from chord_symbols.notes import ACCIDENTAL_INPUT, NATURAL_SEMITONES

# Longest chord symbol accepted before scanning starts
MAX_SYMBOL_LENGTH = 32

TokenKind = Literal[
    "note",
    "accidental",
    "quality",
    "extension",
    "alteration",
    "add",
    "omit",
    "sus",
    "slash",
    "open",
    "close",
    "comma",
]

ScanState = Literal["note", "body"]

# Degrees a digit run can be split into, longest first
DEGREES: tuple[str, ...] = ("11", "13", "2", "3", "4", "5", "6", "7", "9")

# Words whose case carries meaning (m = minor, M = major)
CASE_SENSITIVE_WORDS = MappingProxyType(
    {
        "m": ("quality", "minor"),
        "M": ("quality", "major"),
        "Ma": ("quality", "major"),
        "MA": ("quality", "major"),
        "o": ("quality", "diminished"),
    }
)

# Words matched regardless of case, keyed in lower case
CASE_INSENSITIVE_WORDS = MappingProxyType(
    {
        "mi": ("quality", "minor"),
        "min": ("quality", "minor"),
        "minor": ("quality", "minor"),
        "maj": ("quality", "major"),
        "major": ("quality", "major"),
        "dim": ("quality", "diminished"),
        "diminished": ("quality", "diminished"),
        "aug": ("quality", "augmented"),
        "alt": ("quality", "altered"),
        "sus": ("sus", "sus"),
        "add": ("add", "add"),
        "omit": ("omit", "omit"),
        "no": ("omit", "omit"),
    }
)

SYMBOLS = MappingProxyType(
    {
        "-": ("quality", "minor"),
        "+": ("quality", "augmented"),
        "°": ("quality", "diminished"),
        "ø": ("quality", "half-diminished"),
        "Ø": ("quality", "half-diminished"),
        "Δ": ("quality", "delta"),
        "△": ("quality", "delta"),
        "(": ("open", "("),
        ")": ("close", ")"),
        ",": ("comma", ","),
        "/": ("slash", "/"),
    }
)

_MAX_WORD = max(len(w) for w in (*CASE_SENSITIVE_WORDS, *CASE_INSENSITIVE_WORDS))


@dataclass(frozen=True)
class Token:
    """A classified slice of a chord symbol.

    Parameters
    ----------
    kind : TokenKind
        The token class.
    text : str
        The raw substring as typed.
    start : int
        Inclusive start offset (0-indexed).
    end : int
        Exclusive end offset.
    value : str
        Canonical meaning: the note letter, ``"#"``/``"b"`` for accidentals,
        the quality name, the degree (``"9"``) or altered degree (``"#11"``).

    Examples
    --------
    >>> Token(kind="extension", text="7", start=4, end=5, value="7").value
    '7'
    """

    kind: TokenKind
    text: str
    start: int
    end: int
    value: str


def _accidental_value(char: str) -> str:
    return "#" if ACCIDENTAL_INPUT[char] > 0 else "b"


def _match_degree(symbol: str, pos: int) -> str | None:
    for degree in DEGREES:
        if symbol.startswith(degree, pos):
            return degree
    return None


def _match_word(symbol: str, pos: int) -> tuple[str, str, str] | None:
    """Return ``(text, kind, value)`` for the longest word at ``pos``."""
    for length in range(min(_MAX_WORD, len(symbol) - pos), 0, -1):
        text = symbol[pos : pos + length]
        if text in CASE_SENSITIVE_WORDS:
            kind, value = CASE_SENSITIVE_WORDS[text]
            return text, kind, value
        if text.lower() in CASE_INSENSITIVE_WORDS:
            kind, value = CASE_INSENSITIVE_WORDS[text.lower()]
            return text, kind, value
    return None


def _scan_note(symbol: str, pos: int, tokens: list[Token]) -> int:
    """Read a letter and an optional accidental; return the next offset."""
    letter = symbol[pos]
    tokens.append(Token(kind="note", text=letter, start=pos, end=pos + 1, value=letter))
    pos += 1
    if pos < len(symbol) and symbol[pos] in ACCIDENTAL_INPUT:
        char = symbol[pos]
        tokens.append(
            Token(
                kind="accidental",
                text=char,
                start=pos,
                end=pos + 1,
                value=_accidental_value(char),
            )
        )
        pos += 1
    return pos


def _scan_body(symbol: str, pos: int, tokens: list[Token]) -> int:
    """Read one body symbol at ``pos``; return the next offset."""
    char = symbol[pos]

    # Accidental directly followed by a degree is an alteration (b9, #11)
    if char in ACCIDENTAL_INPUT:
        degree = _match_degree(symbol, pos + 1)
        if degree is not None:
            end = pos + 1 + len(degree)
            tokens.append(
                Token(
                    kind="alteration",
                    text=symbol[pos:end],
                    start=pos,
                    end=end,
                    value=f"{_accidental_value(char)}{degree}",
                )
            )
            return end
        tokens.append(
            Token(kind="accidental", text=char, start=pos, end=pos + 1, value=_accidental_value(char))
        )
        return pos + 1

    if char.isdigit():
        degree = _match_degree(symbol, pos)
        if degree is None:
            msg = f"Unknown degree {char!r}"
            raise LexError(msg, symbol, pos)
        end = pos + len(degree)
        tokens.append(Token(kind="extension", text=degree, start=pos, end=end, value=degree))
        return end

    if char in SYMBOLS:
        kind, value = SYMBOLS[char]
        tokens.append(Token(kind=kind, text=char, start=pos, end=pos + 1, value=value))
        return pos + 1

    word = _match_word(symbol, pos)
    if word is not None:
        text, kind, value = word
        tokens.append(Token(kind=kind, text=text, start=pos, end=pos + len(text), value=value))
        return pos + len(text)

    if char in NATURAL_SEMITONES:
        tokens.append(Token(kind="note", text=char, start=pos, end=pos + 1, value=char))
        return pos + 1

    msg = f"Unrecognized symbol {char!r}"
    raise LexError(msg, symbol, pos)


def tokenize(symbol: str) -> list[Token]:
    """Split a chord symbol into classified tokens.

    Parameters
    ----------
    symbol : str
        The chord symbol as typed (e.g. ``"AbMaj7#11"``).

    Returns
    -------
    list[Token]
        Tokens in input order. Whitespace produces no tokens.

    Raises
    ------
    LexError
        If the symbol is too long or a substring matches no token class.

    Examples
    --------
    >>> [(t.kind, t.text) for t in tokenize("Bbm7")]
    [('note', 'B'), ('accidental', 'b'), ('quality', 'm'), ('extension', '7')]
    >>> [t.value for t in tokenize("C69(#11)")]
    ['C', '6', '9', '(', '#11', ')']
    """
    if len(symbol) > MAX_SYMBOL_LENGTH:
        msg = f"Symbol longer than {MAX_SYMBOL_LENGTH} characters"
        raise LexError(msg, symbol, MAX_SYMBOL_LENGTH)

    tokens: list[Token] = []
    state: ScanState = "note"
    pos = 0
    n = len(symbol)

    while pos < n:
        if symbol[pos].isspace():
            pos += 1
            continue

        if state == "note" and symbol[pos] in NATURAL_SEMITONES:
            pos = _scan_note(symbol, pos, tokens)
        else:
            pos = _scan_body(symbol, pos, tokens)

        # A slash hands control back to note scanning for the bass
        state = "note" if tokens[-1].kind == "slash" else "body"

    return tokens
