# json_parser.py
# Token-stream JSON syntax checker: accept/reject with the first error's position.
#
# =============================================================================
#  VALIDATOR: RECURSIVE DESCENT OVER A MATERIALIZED TOKEN LIST
# =============================================================================
#
# The lexer (lexer.py) hands over the full token list; the validator walks it
# with a single forward-only cursor. One method per grammar rule:
#
#   value  := String | Number | Boolean | Null | object | array
#   object := "{" ( String ":" value ( "," String ":" value )* )? "}"
#   array  := "[" ( value ( "," value )* )? "]"
#
# No value tree is built. Literal text stays raw until validate_value() checks
# it against its lexical grammar. The first violation raises JSONSyntaxError;
# nothing is collected or recovered.
#
# Depth guard stops pathological nesting before Python's recursion limit does.
#
# =============================================================================

import argparse
import logging
import re
import sys
from enum import Enum
from typing import List, Optional, Sequence

from lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256   # Three frames per level keeps this under the default recursion limit

EXIT_OK      = 0
EXIT_INVALID = 1

# ---------------------------------------------------------------------------
# LITERAL GRAMMARS
# ---------------------------------------------------------------------------
# Float syntax: sign, digits with optional fraction and exponent, or inf/nan.
# float() alone would also let "1_000" and non-ASCII digits through.
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)
_BOOLEANS = ("true", "false")
_NULL     = "null"

# Tokens that cannot start the element after an array comma.
_INVALID_AFTER_ARRAY_COMMA = frozenset({
    TokenKind.COLON,
    TokenKind.COMMA,
    TokenKind.RIGHT_BRACE,
    TokenKind.RIGHT_BRACKET,
    TokenKind.END_OF_FILE,
})


def _is_number(raw: str) -> bool:
    return _NUMBER_RE.fullmatch(raw) is not None


def _literal_ok(token: Token) -> bool:
    """Check a scalar token's raw text against its kind's lexical grammar."""
    raw = token.raw_value
    if token.kind is TokenKind.STRING:
        return True
    if raw is None:
        return False
    if token.kind is TokenKind.BOOLEAN:
        return raw in _BOOLEANS
    if token.kind is TokenKind.NULL:
        return raw == _NULL
    if token.kind is TokenKind.NUMBER:
        return _is_number(raw)
    return False

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ErrorKind(Enum):
    EMPTY_DOCUMENT   = "empty document"
    UNEXPECTED_TOKEN = "unexpected token"
    TRAILING_CONTENT = "trailing content"
    DEPTH_EXCEEDED   = "depth exceeded"


class JSONSyntaxError(SyntaxError):
    """
    First syntax violation found in a document.

    kind tags the failure; position and raw_value come from the offending
    token (both None for an empty document). str() gives the one-line message.
    """

    def __init__(self, kind: ErrorKind, message: str,
                 position: Optional[int] = None, raw_value: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.position = position
        self.raw_value = raw_value

    @classmethod
    def at(cls, token: Token, kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN) -> "JSONSyntaxError":
        if token.raw_value is not None:
            message = f"Unexpected token {token.raw_value} at position {token.position}."
        else:
            message = f"Unexpected token at position {token.position}."
        return cls(kind, message, token.position, token.raw_value)

# ---------------------------------------------------------------------------
# PARSER
# ---------------------------------------------------------------------------
class Parser:
    """Validates a token list produced by lexer.Lexer as one JSON document."""

    def __init__(self, tokens: Sequence[Token], *, max_depth: int = DEPTH_LIMIT_DEFAULT):
        if not tokens or tokens[-1].kind is not TokenKind.END_OF_FILE:
            raise ValueError("token sequence must end with an EndOfFile token")
        self.tokens = tokens
        self.max_depth = max_depth
        self.current = 0
        self.depth = 0

    @property
    def token(self) -> Token:
        return self.tokens[self.current]

    def advance(self) -> None:
        # EndOfFile is the last slot; the cursor never moves past it.
        if self.current < len(self.tokens) - 1:
            self.current += 1

    def _fail(self, kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN) -> JSONSyntaxError:
        err = JSONSyntaxError.at(self.token, kind)
        logger.debug("rejected at token %d: %s", self.current, err)
        return err

    def parse(self) -> int:
        """
        Validate the whole token list.

        Returns 0 on success and raises JSONSyntaxError on the first violation.
        """
        self.current = 0
        self.depth = 0

        if self.token.kind is TokenKind.END_OF_FILE:
            raise JSONSyntaxError(ErrorKind.EMPTY_DOCUMENT, "empty JSON file")

        try:
            self.validate_value()
        except RecursionError:
            # max_depth set above what the interpreter's stack allows
            raise self._depth_error(
                f"Nesting too deep for the interpreter (depth {self.depth}) at position {self.token.position}."
            ) from None

        self.advance()
        if self.token.kind is not TokenKind.END_OF_FILE:
            raise self._fail(ErrorKind.TRAILING_CONTENT)
        return EXIT_OK

    def validate_value(self) -> None:
        token = self.token
        if token.kind is TokenKind.LEFT_BRACE:
            self._descend(self.validate_object)
        elif token.kind is TokenKind.LEFT_BRACKET:
            self._descend(self.validate_array)
        elif not token.kind.is_literal or not _literal_ok(token):
            raise self._fail()

    def _depth_error(self, message: str) -> JSONSyntaxError:
        token = self.token
        logger.debug("rejected at token %d: %s", self.current, message)
        return JSONSyntaxError(ErrorKind.DEPTH_EXCEEDED, message, token.position, token.raw_value)

    def _descend(self, rule) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self._depth_error(
                f"Maximum nesting depth {self.max_depth} exceeded at position {self.token.position}."
            )
        self.advance()
        rule()
        self.depth -= 1

    def validate_object(self) -> None:
        """Cursor starts after '{' and ends on the matching '}'."""
        while True:
            kind = self.token.kind
            if kind is TokenKind.RIGHT_BRACE:
                return
            if kind is not TokenKind.STRING:
                raise self._fail()

            self.advance()
            if self.token.kind is not TokenKind.COLON:
                raise self._fail()
            self.advance()
            self.validate_value()
            self.advance()

            if self.token.kind is TokenKind.COMMA:
                self.advance()
                if self.token.kind is not TokenKind.STRING:
                    raise self._fail()
            elif self.token.kind is TokenKind.RIGHT_BRACE:
                return
            else:
                raise self._fail()

    def validate_array(self) -> None:
        """Cursor starts after '[' and ends on the matching ']'."""
        while True:
            if self.token.kind is TokenKind.RIGHT_BRACKET:
                return

            self.validate_value()
            self.advance()

            if self.token.kind is TokenKind.COMMA:
                self.advance()
                if self.token.kind in _INVALID_AFTER_ARRAY_COMMA:
                    raise self._fail()
            elif self.token.kind is TokenKind.RIGHT_BRACKET:
                return
            else:
                raise self._fail()

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT, mirror_openers: bool = False) -> int:
    """
    Tokenize and validate text in one call.

    Returns 0 for a valid document; raises JSONSyntaxError otherwise.
    """
    tokens = Lexer(text, mirror_openers=mirror_openers).tokenize()
    return Parser(tokens, max_depth=max_depth).parse()

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Command-line interface for validation runs.

    0 on success, 1 on a syntax error; argparse reports usage problems and
    unreadable files with its own status 2.
    """
    ap = argparse.ArgumentParser(description="JSON syntax checker")
    ap.add_argument("file", help="JSON file to verify")
    ap.add_argument("--tokens", action="store_true", help="print the token stream before the verdict")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--mirror-openers", action="store_true",
                    help="emit LeftBrace/LeftBracket after literals ended by '}'/']' (legacy lexing)")
    ap.add_argument("--verbose", action="store_true", help="debug logging on stderr")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")

    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            data = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        ap.error(f"could not read {args.file}: {exc}")

    tokens = Lexer(data, mirror_openers=args.mirror_openers).tokenize()
    if args.tokens:
        for tok in tokens:
            print(tok)

    try:
        status = Parser(tokens, max_depth=args.max_depth).parse()
    except JSONSyntaxError as exc:
        print(exc, file=sys.stderr)
        return EXIT_INVALID
    print("successfully parsed JSON file")
    return status


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
