"""Sandboxed pricing formula evaluation.

Product pricing formulas are small arithmetic expressions written by
catalog administrators, for example::

    basePriceUsd * (widthMm / 600)
    max(basePriceUsd, basePriceUsd * widthRatio * 1.15)

Grammar (left-associative, unary minus binds tighter than ``*``)::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary)*
    unary   := ('-' | '+') unary | primary
    primary := NUMBER | IDENT | FUNC '(' expr ',' expr ')' | '(' expr ')'
    FUNC    := 'min' | 'max'

Formulas are tokenized and parsed into a tree; nothing is ever handed to
``eval``. Any evaluation problem makes :func:`evaluate_formula` return the
adjusted reference price unchanged, so pricing never blocks an order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from .money import round_money, to_number
from .value_objects import DimensionSchema, ProductFamily, WorkingDimensions

logger = logging.getLogger(__name__)

# Core variables every formula may use.
CORE_VARIABLES: frozenset[str] = frozenset(
    {"widthMm", "heightMm", "depthMm", "basePriceUsd", "categoryId"}
)

# Derived variables available when the product schema is known.
DERIVED_VARIABLES: frozenset[str] = frozenset(
    {
        "widthBaseMm",
        "heightBaseMm",
        "depthBaseMm",
        "widthMinMm",
        "widthMaxMm",
        "heightMinMm",
        "heightMaxMm",
        "depthMinMm",
        "depthMaxMm",
        "widthDeltaMm",
        "heightDeltaMm",
        "depthDeltaMm",
        "widthRatio",
        "heightRatio",
        "depthRatio",
        "referenceVolumeMm3",
    }
)

ALLOWED_VARIABLES: frozenset[str] = CORE_VARIABLES | DERIVED_VARIABLES
FUNCTIONS: frozenset[str] = frozenset({"min", "max"})

MAX_FORMULA_LENGTH = 500
MAX_NESTING_DEPTH = 32


class FormulaError(Exception):
    """Raised when a formula cannot be tokenized, parsed or evaluated."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        super().__init__(message if position is None else f"{message} (at {position})")


# =============================================================================
# Tokenizer
# =============================================================================


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "ident", "op", "lparen", "rparen", "comma"
    text: str
    position: int


_SINGLE_CHAR = {
    "+": "op",
    "-": "op",
    "*": "op",
    "/": "op",
    "%": "op",
    "(": "lparen",
    ")": "rparen",
    ",": "comma",
}


def tokenize(text: str) -> list[Token]:
    """Split a formula into tokens.

    Raises:
        FormulaError: On any character outside the grammar.
    """
    tokens: list[Token] = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch in " \t\r\n":
            i += 1
            continue
        if ch in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[ch], ch, i))
            i += 1
            continue
        if ch.isdigit() or (ch == "." and i + 1 < length and text[i + 1].isdigit()):
            start = i
            seen_dot = False
            while i < length and (text[i].isdigit() or (text[i] == "." and not seen_dot)):
                if text[i] == ".":
                    seen_dot = True
                i += 1
            if i < length and text[i] == ".":
                raise FormulaError("Malformed number", i)
            tokens.append(Token("number", text[start:i], start))
            continue
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            start = i
            while i < length and text[i].isascii() and (text[i].isalnum() or text[i] == "_"):
                i += 1
            tokens.append(Token("ident", text[start:i], start))
            continue
        raise FormulaError(f"Unexpected character {ch!r}", i)
    return tokens


# =============================================================================
# Expression tree
# =============================================================================


@dataclass(frozen=True)
class Number:
    value: float

    def evaluate(self, variables: Mapping[str, float]) -> float:
        return self.value


@dataclass(frozen=True)
class Variable:
    name: str

    def evaluate(self, variables: Mapping[str, float]) -> float:
        if self.name not in variables:
            raise FormulaError(f"Variable {self.name!r} is not bound")
        return variables[self.name]


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: Expression

    def evaluate(self, variables: Mapping[str, float]) -> float:
        value = self.operand.evaluate(variables)
        return -value if self.op == "-" else value


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: Expression
    right: Expression

    def evaluate(self, variables: Mapping[str, float]) -> float:
        a = self.left.evaluate(variables)
        b = self.right.evaluate(variables)
        if self.op == "+":
            return a + b
        if self.op == "-":
            return a - b
        if self.op == "*":
            return a * b
        if b == 0:
            raise FormulaError("Division by zero")
        if self.op == "/":
            return a / b
        return math.fmod(a, b)


@dataclass(frozen=True)
class Call:
    name: str
    left: Expression
    right: Expression

    def evaluate(self, variables: Mapping[str, float]) -> float:
        a = self.left.evaluate(variables)
        b = self.right.evaluate(variables)
        return min(a, b) if self.name == "min" else max(a, b)


Expression = Union[Number, Variable, UnaryOp, BinaryOp, Call]


def referenced_variables(node: Expression) -> set[str]:
    """Collect the variable names an expression reads."""
    if isinstance(node, Variable):
        return {node.name}
    if isinstance(node, UnaryOp):
        return referenced_variables(node.operand)
    if isinstance(node, (BinaryOp, Call)):
        return referenced_variables(node.left) | referenced_variables(node.right)
    return set()


# =============================================================================
# Parser
# =============================================================================


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def peek(self) -> Token | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise FormulaError("Unexpected end of formula")
        self.index += 1
        return token

    def expect(self, kind: str) -> Token:
        token = self.advance()
        if token.kind != kind:
            raise FormulaError(f"Expected {kind}, found {token.text!r}", token.position)
        return token

    def parse(self) -> Expression:
        if not self.tokens:
            raise FormulaError("Formula is empty")
        node = self.expr()
        token = self.peek()
        if token is not None:
            raise FormulaError(f"Unexpected token {token.text!r}", token.position)
        return node

    def expr(self) -> Expression:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise FormulaError("Formula is nested too deeply")
        node = self.term()
        while (token := self.peek()) is not None and token.kind == "op" and token.text in "+-":
            self.advance()
            node = BinaryOp(token.text, node, self.term())
        self.depth -= 1
        return node

    def term(self) -> Expression:
        node = self.unary()
        while (token := self.peek()) is not None and token.kind == "op" and token.text in "*/%":
            self.advance()
            node = BinaryOp(token.text, node, self.unary())
        return node

    def unary(self) -> Expression:
        token = self.peek()
        if token is not None and token.kind == "op" and token.text in "+-":
            self.advance()
            self.depth += 1
            if self.depth > MAX_NESTING_DEPTH:
                raise FormulaError("Formula is nested too deeply", token.position)
            node = UnaryOp(token.text, self.unary())
            self.depth -= 1
            return node
        return self.primary()

    def primary(self) -> Expression:
        token = self.advance()
        if token.kind == "number":
            value = float(token.text)
            if not math.isfinite(value):
                raise FormulaError("Number is out of range", token.position)
            return Number(value)
        if token.kind == "ident":
            if token.text in FUNCTIONS:
                self.expect("lparen")
                left = self.expr()
                self.expect("comma")
                right = self.expr()
                self.expect("rparen")
                return Call(token.text, left, right)
            if token.text not in ALLOWED_VARIABLES:
                raise FormulaError(f"Unknown variable {token.text!r}", token.position)
            return Variable(token.text)
        if token.kind == "lparen":
            node = self.expr()
            self.expect("rparen")
            return node
        raise FormulaError(f"Unexpected token {token.text!r}", token.position)


def parse_formula(text: str) -> Expression:
    """Parse a formula into an expression tree.

    Raises:
        FormulaError: If the formula is empty, too long, or not in the grammar.
    """
    if text is None or not str(text).strip():
        raise FormulaError("Formula is empty")
    text = str(text)
    if len(text) > MAX_FORMULA_LENGTH:
        raise FormulaError(f"Formula exceeds {MAX_FORMULA_LENGTH} characters")
    return _Parser(tokenize(text)).parse()


def validate_formula(text: str) -> list[str]:
    """Check a formula without evaluating it.

    Returns:
        List of error messages. Empty list if the formula parses.
    """
    try:
        parse_formula(text)
    except FormulaError as e:
        return [str(e)]
    return []


# =============================================================================
# Evaluation
# =============================================================================


def _ratio(value: float, base: float) -> float:
    return value / base if base > 0 else 1.0


def build_variables(
    dims: WorkingDimensions,
    adjusted_price: Any,
    category_id: str | None = None,
    schema: DimensionSchema | None = None,
) -> dict[str, float]:
    """Bind the variable table for one evaluation.

    ``categoryId`` is bound only when it is numeric. Derived variables are
    bound only when ``schema`` is given.
    """
    variables: dict[str, float] = {
        "widthMm": float(dims.width_mm),
        "heightMm": float(dims.height_mm),
        "depthMm": float(dims.depth_mm),
        "basePriceUsd": float(adjusted_price),
        "referenceVolumeMm3": dims.reference_volume,
    }
    category = to_number(category_id, fallback=math.nan)
    if not math.isnan(category):
        variables["categoryId"] = category

    if schema is not None:
        base = schema.base_dimensions
        kitchen = schema.family == ProductFamily.KITCHEN_MODULE
        variables.update(
            {
                "widthBaseMm": base.width_mm,
                "heightBaseMm": base.height_mm,
                "depthBaseMm": base.depth_mm,
                "widthMinMm": schema.width.min_mm,
                "widthMaxMm": schema.width.max_mm,
                "heightMinMm": schema.height.min_mm,
                "heightMaxMm": schema.height.max_mm,
                "depthMinMm": schema.depth.min_mm,
                "depthMaxMm": schema.depth.max_mm,
                "widthDeltaMm": dims.width_mm - base.width_mm,
                "heightDeltaMm": 0.0 if kitchen else dims.height_mm - base.height_mm,
                "depthDeltaMm": dims.depth_mm - base.depth_mm,
                "widthRatio": _ratio(dims.width_mm, base.width_mm),
                "heightRatio": 1.0 if kitchen else _ratio(dims.height_mm, base.height_mm),
                "depthRatio": _ratio(dims.depth_mm, base.depth_mm),
            }
        )
    return variables


def evaluate_expression(text: str, variables: Mapping[str, float]) -> float:
    """Parse and evaluate a formula against a variable table.

    Raises:
        FormulaError: On parse failure, unbound variable, or division by zero.
    """
    node = parse_formula(text)
    try:
        return node.evaluate(variables)
    except (OverflowError, ZeroDivisionError, ValueError) as e:
        raise FormulaError(f"Arithmetic error: {e}") from e


@dataclass(frozen=True)
class FormulaOutcome:
    """Price produced by a formula evaluation.

    Attributes:
        price: Final unit price rounded to cents.
        applied: True when ``price`` came from the formula, False when the
            adjusted price was used instead.
        reason: Why the formula was not used; None when applied or when no
            formula was given.
    """

    price: Decimal
    applied: bool = False
    reason: str | None = None


def apply_formula(
    formula: str | None,
    dims: WorkingDimensions,
    adjusted_price: Any,
    category_id: str | None = None,
    *,
    schema: DimensionSchema | None = None,
) -> FormulaOutcome:
    """Evaluate a pricing formula and report whether its result was used.

    Never raises. A missing formula, a parse error, an unknown or unbound
    variable, a division by zero, an arithmetic error, or a non-finite,
    non-positive or unrepresentable result all fall back to
    ``adjusted_price``.

    Args:
        formula: Formula text, or None.
        dims: Working dimensions for this pricing call.
        adjusted_price: Adjusted reference price, bound as ``basePriceUsd``.
        category_id: Product category id; bound as ``categoryId`` if numeric.
        schema: Product schema, enables the derived variables.

    Returns:
        FormulaOutcome with the price and whether the formula produced it.
    """
    fallback = round_money(adjusted_price)
    if formula is None or not str(formula).strip():
        return FormulaOutcome(price=fallback)

    variables = build_variables(dims, adjusted_price, category_id, schema)
    try:
        value = evaluate_expression(str(formula), variables)
    except FormulaError as e:
        logger.debug(f"Formula {formula!r} failed, using adjusted price: {e}")
        return FormulaOutcome(price=fallback, reason=str(e))

    if not math.isfinite(value) or value <= 0:
        logger.debug(f"Formula {formula!r} produced {value}, using adjusted price")
        return FormulaOutcome(price=fallback, reason=f"result {value:g} is not a positive number")

    try:
        result = round_money(value)
    except ArithmeticError:
        logger.debug(f"Formula {formula!r} produced {value}, too large to price")
        return FormulaOutcome(price=fallback, reason=f"result {value:g} is too large")
    if result <= 0:
        return FormulaOutcome(price=fallback, reason=f"result {value:g} rounds to zero")
    return FormulaOutcome(price=result, applied=True)


def evaluate_formula(
    formula: str | None,
    dims: WorkingDimensions,
    adjusted_price: Any,
    category_id: str | None = None,
    *,
    schema: DimensionSchema | None = None,
) -> Decimal:
    """Compute a final unit price from a pricing formula.

    Never raises; see :func:`apply_formula` for the fallback rules.

    Returns:
        Final unit price rounded to cents.
    """
    return apply_formula(formula, dims, adjusted_price, category_id, schema=schema).price
