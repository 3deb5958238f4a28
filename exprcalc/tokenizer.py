import enum
import logging
import math
import operator
from dataclasses import dataclass
from typing import Iterator, Optional

from exprcalc.builtins import CONSTANTS, UNARY_FUNCS, VARIABLES, BinaryFunc, UnaryFunc

logger = logging.getLogger(__name__)


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class TokenType(PrintableEnum):
    UNKNOWN = enum.auto()
    EOF = enum.auto()
    CONSTANT = enum.auto()
    VARIABLE = enum.auto()
    UNARY_OPERATION = enum.auto()
    BINARY_OPERATION = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    PIPE = enum.auto()


class Precedence(int, PrintableEnum):
    """Binary operator tiers, loosest first. MIN and MAX are sentinels."""

    MIN = 0
    ADD = 1
    SUB = 2
    MUL = 3
    DIV = 4
    POW = 5
    MAX = 6


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    start: int
    end: int
    value: float = 0.0
    unary_fn: Optional[UnaryFunc] = None
    binary_fn: Optional[BinaryFunc] = None
    precedence: Precedence = Precedence.MIN

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


STRUCTURAL_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "|": TokenType.PIPE,
}

BINARY_OPERATORS: dict[str, tuple[BinaryFunc, Precedence]] = {
    "+": (operator.add, Precedence.ADD),
    "-": (operator.sub, Precedence.SUB),
    "*": (operator.mul, Precedence.MUL),
    "/": (operator.truediv, Precedence.DIV),
    "^": (math.pow, Precedence.POW),
}

DECIMAL_MARKERS = ".,"


def _is_valid_in_number(s: str) -> bool:
    return s.isdecimal()


def _is_valid_in_word(s: str) -> bool:
    return s.isalpha()


class TokenStream:
    """Lazily scans ``code`` into tokens, buffering them for lookahead.

    Tokens are produced on demand and kept, so ``peek(n)`` never rescans.
    Once the end of input is reached the stream keeps returning the same
    EOF token from both ``peek`` and ``pop``.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self._scan_idx = 0
        self._tokens: list[Token] = []
        self._current = 0

    def peek(self, offset: int = 0) -> Token:
        if offset < 0:
            raise ValueError(f"Lookahead offset must be non-negative, got {offset}")
        while len(self._tokens) <= self._current + offset and not self._exhausted():
            self._tokens.append(self._next())
        return self._tokens[min(self._current + offset, len(self._tokens) - 1)]

    def pop(self) -> Token:
        token = self.peek()
        if token.type is not TokenType.EOF:
            self._current += 1
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.pop()
            yield token
            if token.type is TokenType.EOF:
                return

    def _exhausted(self) -> bool:
        return bool(self._tokens) and self._tokens[-1].type is TokenType.EOF

    def _next(self) -> Token:
        code = self.code
        i = self._scan_idx
        while i < len(code) and code[i].isspace():
            i += 1

        if i >= len(code):
            self._scan_idx = len(code)
            return Token(type=TokenType.EOF, lexeme="", start=len(code), end=len(code))

        char = code[i]
        if char in STRUCTURAL_TOKENS:
            token = Token(type=STRUCTURAL_TOKENS[char], lexeme=char, start=i, end=i + 1)
        elif char in BINARY_OPERATORS:
            fn, precedence = BINARY_OPERATORS[char]
            token = Token(
                type=TokenType.BINARY_OPERATION,
                lexeme=char,
                start=i,
                end=i + 1,
                binary_fn=fn,
                precedence=precedence,
            )
        elif _is_valid_in_number(char):
            token = self._scan_number(i)
        elif _is_valid_in_word(char):
            token = self._scan_word(i)
        else:
            token = Token(type=TokenType.UNKNOWN, lexeme=char, start=i, end=i + 1)

        self._scan_idx = token.end
        return token

    def _scan_number(self, start: int) -> Token:
        code = self.code
        end = start
        while end < len(code) and _is_valid_in_number(code[end]):
            end += 1
        # at most one decimal marker, a second one is left for the next token
        if end < len(code) and code[end] in DECIMAL_MARKERS:
            end += 1
            while end < len(code) and _is_valid_in_number(code[end]):
                end += 1
        lexeme = code[start:end]
        return Token(
            type=TokenType.CONSTANT,
            lexeme=lexeme,
            start=start,
            end=end,
            value=float(lexeme.replace(",", ".")),
        )

    def _scan_word(self, start: int) -> Token:
        code = self.code
        end = start
        while end < len(code) and _is_valid_in_word(code[end]):
            end += 1
        word = code[start:end]
        if word in UNARY_FUNCS:
            return Token(type=TokenType.UNARY_OPERATION, lexeme=word, start=start, end=end, unary_fn=UNARY_FUNCS[word])
        elif word in CONSTANTS:
            return Token(type=TokenType.CONSTANT, lexeme=word, start=start, end=end, value=CONSTANTS[word])
        elif word in VARIABLES:
            return Token(type=TokenType.VARIABLE, lexeme=word, start=start, end=end)
        else:
            logger.debug("Unrecognized word %r at %d", word, start)
            return Token(type=TokenType.UNKNOWN, lexeme=word, start=start, end=end)


def tokenize(code: str) -> list[Token]:
    """Scans the whole input, the returned list always ends with the EOF token."""
    return list(TokenStream(code))