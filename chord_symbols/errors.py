"""Errors raised while parsing chord symbols.

Three non-overlapping kinds exist, all subclasses of ``ChordSymbolError``
(itself a ``ValueError``):

- ``LexError``: a substring matches no token class.
- ``GrammarError``: tokens were recognized but break a grammar rule.
- ``ResolutionError``: accepted tokens could not be resolved into intervals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from chord_symbols.tokenizer import Token

ErrorKind = Literal["lex", "grammar", "resolution"]


def mark_position(symbol: str, start: int, end: int | None = None) -> str:
    """Surround the span ``symbol[start:end]`` with braces.

    Examples
    --------
    >>> mark_position("CMaj(omit5)", 1, 4)
    'C{Maj}(omit5)'
    >>> mark_position("C7(", 3)
    'C7({}'
    """
    if end is None:
        end = start + 1
    if start >= len(symbol):
        return f"{symbol}{{}}"
    return f"{symbol[:start]}{{{symbol[start:end]}}}{symbol[end:]}"


class ChordSymbolError(ValueError):
    """Base class for chord symbol parse failures.

    Parameters
    ----------
    message : str
        Human-readable reason.
    symbol : str
        The chord symbol being parsed.
    position : int | None
        0-indexed character offset of the failure, when known.
    """

    kind: ErrorKind

    def __init__(self, message: str, symbol: str = "", position: int | None = None) -> None:
        self.reason = message
        self.symbol = symbol
        self.position = position
        super().__init__(message)

    def verbose(self) -> str:
        """Return the message followed by the symbol with the failure marked."""
        if self.position is None:
            return self.reason
        return f"{self.reason} → {mark_position(self.symbol, self.position)}"


class LexError(ChordSymbolError):
    """A character sequence matched no known symbol class."""

    kind: ErrorKind = "lex"

    def __init__(self, reason: str, symbol: str, position: int) -> None:
        message = f"{reason} at position {position}"
        super().__init__(message, symbol, position)


class GrammarError(ChordSymbolError):
    """A token sequence violated a grammar rule.

    Parameters
    ----------
    rule : str
        Name of the first violated rule.
    description : str
        What the rule requires.
    tokens : tuple[Token, ...]
        The offending tokens (empty when the problem is a missing token).
    symbol : str
        The chord symbol being parsed.
    """

    kind: ErrorKind = "grammar"

    def __init__(
        self,
        rule: str,
        description: str,
        tokens: tuple[Token, ...],
        symbol: str,
    ) -> None:
        self.rule = rule
        self.description = description
        self.tokens = tokens
        position = tokens[0].start if tokens else len(symbol)
        offending = "".join(t.text for t in tokens)
        message = f"{description} [{rule}]"
        if offending:
            message = f"{message}: {offending!r} at position {position}"
        super().__init__(message, symbol, position)

    def verbose(self) -> str:
        """Return the message with the whole offending span marked."""
        if not self.tokens:
            return f"{self.reason} → {mark_position(self.symbol, len(self.symbol))}"
        start = self.tokens[0].start
        end = max(t.end for t in self.tokens)
        return f"{self.reason} → {mark_position(self.symbol, start, end)}"


class ResolutionError(ChordSymbolError):
    """Accepted tokens could not be resolved; indicates a grammar gap."""

    kind: ErrorKind = "resolution"
