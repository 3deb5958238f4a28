import logging
import math
import operator
from dataclasses import dataclass

from exprcalc.builtins import BinaryFunc, UnaryFunc
from exprcalc.tokenizer import Precedence, Token, TokenStream, TokenType

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


@dataclass
class ParserError(Exception):
    errmsg: str
    code: str
    token: Token

    def __str__(self) -> str:
        error_char_idx = self.token.start
        print_start_idx = max(0, error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"Parser error: {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


@dataclass
class Constant:
    value: float


@dataclass
class Variable:
    name: str


@dataclass
class UnaryOperation:
    name: str
    fn: UnaryFunc
    operand: "Expression"


@dataclass
class BinaryOperation:
    symbol: str
    fn: BinaryFunc
    left: "Expression"
    right: "Expression"


Expression = Constant | Variable | UnaryOperation | BinaryOperation


def parse(code: str) -> Expression:
    return Parser(code).parse()


class Parser:
    """Precedence climbing parser over the tiers in ``Precedence``.

    Each tier parses its operands one tier up and collects the operators of
    exactly its own tier. The chain is folded from the right, so operators
    within one tier group to the right: ``2^3^2`` is ``2^(3^2)`` and
    ``8-4-2`` is ``8-(4-2)``. Different adjacent tiers still read left to
    right, ``1 - 2 + 3`` is ``(1-2)+3``.

    A variable directly following an operand at the multiplication tier is an
    implicit multiplication: ``7t^2`` is ``7*(t^2)``.

    ``max_depth`` limits how deeply groups, bars, function calls and unary
    signs may nest. Flat operator chains of any length are accepted.
    """

    def __init__(self, code: str, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.code = code
        self.max_depth = max_depth
        self._tokens = TokenStream(code)
        self._depth = 0

    def parse(self) -> Expression:
        expression = self._parse_expression(Precedence.ADD)
        self._expect(TokenType.EOF)
        logger.debug("Parsed %r", self.code)
        return expression

    def _error(self, errmsg: str, token: Token) -> ParserError:
        return ParserError(errmsg, code=self.code, token=token)

    def _expect(self, token_type: TokenType) -> Token:
        token = self._tokens.pop()
        if token.type is not token_type:
            if token.type is TokenType.EOF:
                raise self._error(f"Unexpected end of input, expected {token_type}", token)
            raise self._error(f"Unexpected token '{token.lexeme}' ({token.type}), expected {token_type}", token)
        return token

    def _parse_nested(self, opening: Token, precedence: Precedence = Precedence.MIN) -> Expression:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise self._error("Expression is too deeply nested", opening)
            return self._parse_expression(precedence)
        finally:
            self._depth -= 1

    def _parse_expression(self, precedence: Precedence = Precedence.MIN) -> Expression:
        if precedence >= Precedence.MAX:
            return self._parse_primary()

        next_precedence = Precedence(precedence + 1)
        operands = [self._parse_expression(next_precedence)]
        operators: list[tuple[str, BinaryFunc]] = []
        while True:
            token = self._tokens.peek()
            if token.type is TokenType.BINARY_OPERATION and token.precedence == precedence:
                self._expect(TokenType.BINARY_OPERATION)
                assert token.binary_fn is not None
                operators.append((token.lexeme, token.binary_fn))
            elif token.type is TokenType.VARIABLE and precedence == Precedence.MUL:
                # no operator token to consume: 3t => 3*t
                operators.append(("*", operator.mul))
            else:
                break
            operands.append(self._parse_expression(next_precedence))

        expression = operands.pop()
        while operators:
            symbol, fn = operators.pop()
            expression = BinaryOperation(symbol, fn, operands.pop(), expression)
        return expression

    def _parse_primary(self) -> Expression:
        token = self._tokens.peek()

        if token.type is TokenType.CONSTANT:
            self._expect(TokenType.CONSTANT)
            if not math.isfinite(token.value):
                raise self._error(f"Number '{token.lexeme}' is too large", token)
            return Constant(token.value)

        elif token.type is TokenType.VARIABLE:
            self._expect(TokenType.VARIABLE)
            return Variable(token.lexeme)

        elif token.type is TokenType.UNARY_OPERATION:
            self._expect(TokenType.UNARY_OPERATION)
            self._expect(TokenType.LPAREN)
            operand = self._parse_nested(token)
            self._expect(TokenType.RPAREN)
            assert token.unary_fn is not None
            return UnaryOperation(token.lexeme, token.unary_fn, operand)

        elif token.type is TokenType.LPAREN:
            self._expect(TokenType.LPAREN)
            expression = self._parse_nested(token)
            self._expect(TokenType.RPAREN)
            return expression

        elif token.type is TokenType.PIPE:
            self._expect(TokenType.PIPE)
            operand = self._parse_nested(token)
            self._expect(TokenType.PIPE)
            return UnaryOperation("abs", abs, operand)

        elif token.type is TokenType.BINARY_OPERATION:
            # unary sign: -3, 1 + -2, +1 + +1
            self._expect(TokenType.BINARY_OPERATION)
            if token.lexeme in ("+", "-"):
                assert token.binary_fn is not None
                return UnaryOperation(token.lexeme, _signed(token.binary_fn), self._parse_nested(token, Precedence.MAX))
            raise self._error(f"Misplaced binary operator '{token.lexeme}', expected either '+' or '-'", token)

        elif token.type is TokenType.EOF:
            raise self._error("Unexpected end of input", token)

        raise self._error(f"Unexpected token '{token.lexeme}'", token)


def _signed(binary_fn: BinaryFunc) -> UnaryFunc:
    def apply(x: float) -> float:
        return binary_fn(0.0, x)

    return apply
