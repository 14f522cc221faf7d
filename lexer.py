# lexer.py
# Single-pass tokenizer feeding the JSON syntax checker in json_parser.py.
#
# =============================================================================
#  LEXER: DELIMIT, DO NOT JUDGE
# =============================================================================
#
# The lexer only cuts the input into spans. Literal text (numbers, booleans,
# null) is stored raw and checked later by the validator, so tokenize() never
# fails: malformed input simply yields a token stream the validator rejects.
#
# Positions are a running count of consumed characters. Whitespace skipped in
# the main loop is not counted, and multi-character tokens are stamped with the
# counter value *after* their span, so reported positions sit near the end of
# the offending token.
#
# =============================================================================

import logging
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# TOKEN KINDS
# ---------------------------------------------------------------------------
class TokenKind(Enum):
    LEFT_BRACE    = "LeftBrace"
    RIGHT_BRACE   = "RightBrace"
    LEFT_BRACKET  = "LeftBracket"
    RIGHT_BRACKET = "RightBracket"
    COLON         = "Colon"
    COMMA         = "Comma"
    STRING        = "String"
    NUMBER        = "Number"
    BOOLEAN       = "Boolean"
    NULL          = "Null"
    END_OF_FILE   = "EndOfFile"

    @property
    def is_literal(self) -> bool:
        return self in (TokenKind.STRING, TokenKind.NUMBER, TokenKind.BOOLEAN, TokenKind.NULL)

# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class Token(NamedTuple):
    """
    Immutable token record: (kind, raw_value, position).

    raw_value is the unvalidated source text for literal kinds and None for
    punctuation and EndOfFile.
    """
    kind: TokenKind
    raw_value: Optional[str]
    position: int

    def __str__(self) -> str:
        if self.raw_value is None:
            return f"{self.position:>6}  {self.kind.value}"
        return f"{self.position:>6}  {self.kind.value:<12} {self.raw_value!r}"

# ---------------------------------------------------------------------------
# CHARACTER CLASSES
# ---------------------------------------------------------------------------
_PUNCTUATION: Dict[str, TokenKind] = {
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}

# First character of a non-string span decides its kind; anything else is a Number.
_LITERAL_STARTS: Dict[str, TokenKind] = {
    "t": TokenKind.BOOLEAN,
    "f": TokenKind.BOOLEAN,
    "n": TokenKind.NULL,
}

# Characters that end a non-string span and are re-emitted as punctuation.
_TERMINATORS: Dict[str, TokenKind] = {
    ",": TokenKind.COMMA,
    "}": TokenKind.RIGHT_BRACE,
    "]": TokenKind.RIGHT_BRACKET,
}

# Legacy table: closing terminators come back as the opening kind.
_MIRRORED_TERMINATORS: Dict[str, TokenKind] = {
    ",": TokenKind.COMMA,
    "}": TokenKind.LEFT_BRACE,
    "]": TokenKind.LEFT_BRACKET,
}

# str.isspace() also counts the information separators U+001C..U+001F;
# the Unicode White_Space property does not.
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_space(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_WHITESPACE

# ---------------------------------------------------------------------------
# SPAN SCANNERS
# ---------------------------------------------------------------------------
def _scan_string(chars: Iterator[str]) -> Tuple[str, int]:
    """
    Consume a quoted span after its opening quote.

    Stops at the closing quote or a newline, whichever comes first; the
    terminator is consumed but not kept. Escapes are not interpreted.
    Returns (text, consumed).
    """
    consumed = 0
    buf: List[str] = []
    for ch in chars:
        consumed += 1
        if ch == '"' or ch == "\n":
            break
        buf.append(ch)
    return "".join(buf), consumed


def _scan_bare(chars: Iterator[str], first: str) -> Tuple[str, int, Optional[str]]:
    """
    Consume a bare literal span seeded with its first character.

    Returns (text, consumed, terminator) where terminator is the structural
    character that ended the span, or None for whitespace / end of input.
    """
    consumed = 0
    buf = [first]
    for ch in chars:
        consumed += 1
        if _is_space(ch):
            return "".join(buf), consumed, None
        if ch in _TERMINATORS:
            return "".join(buf), consumed, ch
        buf.append(ch)
    return "".join(buf), consumed, None

# ---------------------------------------------------------------------------
# LEXER
# ---------------------------------------------------------------------------
class Lexer:
    """
    Turns JSON text into a flat token list ending in exactly one EndOfFile.

    mirror_openers reproduces the historical behavior where a literal ended by
    ``}`` or ``]`` is followed by a LeftBrace / LeftBracket token instead of the
    matching closer.
    """

    def __init__(self, text: str, *, mirror_openers: bool = False):
        self.text = text
        self.position = 0
        self.tokens: List[Token] = []
        self._terminators = _MIRRORED_TERMINATORS if mirror_openers else _TERMINATORS

    def _emit(self, kind: TokenKind, raw_value: Optional[str], position: int) -> None:
        self.tokens.append(Token(kind, raw_value, position))

    def _lex_bare(self, chars: Iterator[str], first: str) -> None:
        kind = _LITERAL_STARTS.get(first, TokenKind.NUMBER)
        raw, consumed, terminator = _scan_bare(chars, first)
        end = self.position + consumed
        self._emit(kind, raw, end)
        if terminator is not None:
            self._emit(self._terminators[terminator], None, end)
        self.position += consumed

    def tokenize(self) -> List[Token]:
        """Scan the whole input once and return the token list."""
        self.position = 0
        self.tokens = []
        chars = iter(self.text)

        for ch in chars:
            if _is_space(ch):
                continue
            punct = _PUNCTUATION.get(ch)
            if punct is not None:
                self._emit(punct, None, self.position)
            elif ch == '"':
                raw, consumed = _scan_string(chars)
                self.position += consumed
                self._emit(TokenKind.STRING, raw, self.position)
            else:
                self._lex_bare(chars, ch)
            self.position += 1

        self._emit(TokenKind.END_OF_FILE, None, self.position)
        logger.debug("tokenized %d characters into %d tokens", len(self.text), len(self.tokens))
        return self.tokens


def lex(text: str, *, mirror_openers: bool = False) -> List[Token]:
    """Tokenize text in one call."""
    return Lexer(text, mirror_openers=mirror_openers).tokenize()


__all__ = ["Lexer", "Token", "TokenKind", "lex"]
