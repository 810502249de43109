"""Arithmetic expression evaluation for dimension and quantity formulas.

Formulas are small arithmetic expressions over named variables, for example
``"width - (thickness * 2)"`` or ``"facades.door.count * 2"``. They are
tokenized and evaluated by a recursive-descent parser over a fixed grammar::

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | NUMBER | NAME | "(" expr ")"

Names are looked up in a read-only variable environment that is passed to
every call; the evaluator itself holds no per-calculation state, so a single
instance can be shared across threads.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..errors import (
    FormulaArithmeticError,
    FormulaError,
    FormulaSyntaxError,
    UnknownVariableError,
)

if TYPE_CHECKING:
    from ..value_objects import CorpusSpec, ModuleSizes

__all__ = [
    "BASE_VARIABLES",
    "Environment",
    "Evaluation",
    "ExpressionEvaluator",
    "Token",
    "TokenKind",
    "base_environment",
    "evaluate",
    "extend_environment",
    "round_half_away",
    "tokenize",
]

Environment = Mapping[str, float]

BASE_VARIABLES: tuple[str, ...] = ("width", "height", "depth", "thickness")

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<number>\d+(?:\.\d*)?|\.\d+)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)
    | (?P<op>[+\-*/])
    | (?P<lparen>\()
    | (?P<rparen>\))
    """,
    re.VERBOSE,
)


class TokenKind(str, Enum):
    NUMBER = "number"
    NAME = "name"
    OP = "op"
    LPAREN = "lparen"
    RPAREN = "rparen"
    END = "end"


@dataclass(frozen=True)
class Token:
    """A lexical token with its offset in the source formula."""

    kind: TokenKind
    text: str
    position: int


def tokenize(formula: str) -> list[Token]:
    """Split a formula into tokens, terminated by an END token.

    Raises:
        FormulaSyntaxError: On any character outside the grammar.
    """
    tokens: list[Token] = []
    position = 0
    while position < len(formula):
        match = _TOKEN_RE.match(formula, position)
        if match is None:
            raise FormulaSyntaxError(
                f"Unexpected character {formula[position]!r}", formula, position
            )
        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(TokenKind(kind), match.group(), position))
        position = match.end()
    tokens.append(Token(TokenKind.END, "", len(formula)))
    return tokens


def round_half_away(value: float, digits: int = 2) -> float:
    """Round to ``digits`` decimals, halves away from zero.

    Works on the shortest decimal representation of the float so that
    ``round_half_away(2.675)`` gives 2.68 rather than the binary-float 2.67.
    """
    if abs(value) >= 1e15:
        # Beyond float precision there is no fractional part left to round.
        return float(value)
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def base_environment(sizes: ModuleSizes, corpus: CorpusSpec) -> Environment:
    """Build the read-only environment for dimension formulas."""
    return MappingProxyType(
        {
            "width": float(sizes.width),
            "height": float(sizes.height),
            "depth": float(sizes.depth),
            "thickness": float(corpus.thickness),
        }
    )


def extend_environment(env: Environment, extra: Mapping[str, float]) -> Environment:
    """Return a new read-only environment with ``extra`` bindings added."""
    merged = dict(env)
    merged.update(extra)
    return MappingProxyType(merged)


class _Parser:
    """Single-use recursive-descent evaluator over a token list."""

    def __init__(self, formula: str, tokens: list[Token], env: Environment) -> None:
        self.formula = formula
        self.tokens = tokens
        self.env = env
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse(self) -> float:
        if self.current.kind is TokenKind.END:
            raise FormulaSyntaxError("Empty formula", self.formula)
        value = self.expr()
        token = self.current
        if token.kind is TokenKind.RPAREN:
            raise FormulaSyntaxError("Unbalanced ')'", self.formula, token.position)
        if token.kind is not TokenKind.END:
            raise FormulaSyntaxError(
                f"Unexpected token {token.text!r}", self.formula, token.position
            )
        return value

    def expr(self) -> float:
        value = self.term()
        while self.current.kind is TokenKind.OP and self.current.text in "+-":
            op = self.advance().text
            right = self.term()
            value = value + right if op == "+" else value - right
        return value

    def term(self) -> float:
        value = self.factor()
        while self.current.kind is TokenKind.OP and self.current.text in "*/":
            op = self.advance()
            right = self.factor()
            if op.text == "*":
                value = value * right
            else:
                if right == 0:
                    raise FormulaArithmeticError("Division by zero", self.formula)
                value = value / right
        return value

    def factor(self) -> float:
        token = self.advance()
        if token.kind is TokenKind.OP and token.text in "+-":
            operand = self.factor()
            return -operand if token.text == "-" else operand
        if token.kind is TokenKind.NUMBER:
            return float(token.text)
        if token.kind is TokenKind.NAME:
            if token.text not in self.env:
                raise UnknownVariableError(token.text, self.formula)
            return float(self.env[token.text])
        if token.kind is TokenKind.LPAREN:
            value = self.expr()
            closing = self.current
            if closing.kind is not TokenKind.RPAREN:
                raise FormulaSyntaxError("Unbalanced '('", self.formula, token.position)
            self.advance()
            return value
        if token.kind is TokenKind.END:
            raise FormulaSyntaxError("Unexpected end of formula", self.formula)
        raise FormulaSyntaxError(
            f"Unexpected token {token.text!r}", self.formula, token.position
        )


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating a formula: either a value or an error."""

    value: float | None = None
    error: FormulaError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Evaluation needs exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class ExpressionEvaluator:
    """Evaluates formulas against an explicit variable environment."""

    def __init__(self, digits: int = 2) -> None:
        self.digits = digits

    def evaluate(self, formula: float | int | str, env: Environment) -> float:
        """Evaluate a literal number or a formula string.

        Literal numbers are returned as-is without parsing. Formula results
        are rounded to ``digits`` decimals, halves away from zero.

        Raises:
            FormulaSyntaxError: Malformed formula.
            UnknownVariableError: Name missing from ``env``.
            FormulaArithmeticError: Division by zero or non-finite result.
        """
        if isinstance(formula, bool):
            raise TypeError("Formula must be a number or a string, not bool")
        if isinstance(formula, (int, float)):
            return float(formula)
        if not isinstance(formula, str):
            raise TypeError(f"Formula must be a number or a string, got {formula!r}")

        value = _Parser(formula, tokenize(formula), env).parse()
        if not math.isfinite(value):
            raise FormulaArithmeticError("Non-finite result", formula)
        return round_half_away(value, self.digits)

    def try_evaluate(self, formula: float | int | str, env: Environment) -> Evaluation:
        """Evaluate without raising formula errors."""
        try:
            return Evaluation(value=self.evaluate(formula, env))
        except FormulaError as e:
            return Evaluation(error=e)

    @staticmethod
    def is_formula(value: object) -> bool:
        """Whether a raw field value is a formula rather than a literal number."""
        if not isinstance(value, str):
            return False
        try:
            float(value.strip())
        except ValueError:
            return bool(value.strip())
        return False

    @staticmethod
    def extract_variables(formula: str) -> list[str]:
        """List the distinct variable names of a formula in order of appearance.

        Raises:
            FormulaSyntaxError: If the formula cannot be tokenized.
        """
        names: list[str] = []
        for token in tokenize(formula):
            if token.kind is TokenKind.NAME and token.text not in names:
                names.append(token.text)
        return names

    def missing_variables(self, formula: str, available: Iterable[str]) -> list[str]:
        """Names used by ``formula`` that are not in ``available``."""
        known = set(available)
        return [name for name in self.extract_variables(formula) if name not in known]


_default_evaluator = ExpressionEvaluator()


def evaluate(formula: float | int | str, env: Environment) -> float:
    """Evaluate ``formula`` with the shared default evaluator."""
    return _default_evaluator.evaluate(formula, env)
