"""
Layout Expression Parser

Turns strings such as ``"1/3 + 10px"`` or ``"100% - 20px"`` into an AST.

Grammar:
    expr       := term (('+' | '-') term)*
    term       := "0" | fraction | percentage | pixel
    fraction   := INT "/" INT
    percentage := NUMBER "%"
    pixel      := NUMBER "px"

Operators fold left to right, so ``"a - b + c"`` is ``Add(Subtract(a, b), c)``.
Negative literals are not part of the grammar; write ``"0 - 10px"`` instead.
"""

from __future__ import annotations
import re
from typing import List, Tuple

from .types import (
    Add,
    ErrorCategory,
    Fraction,
    LayoutExpression,
    LayoutExpressionError,
    LayoutUnit,
    Percentage,
    Pixel,
    Subtract,
    Zero,
)

OPERATORS = "+-"

_INTEGER_RE = re.compile(r"^[0-9]+$")
_NUMBER_RE = re.compile(r"^[0-9]+(?:\.[0-9]+)?$")


def _split_terms(source: str) -> Tuple[List[str], List[str]]:
    """Split source into raw term strings and the operators between them."""
    terms: List[str] = []
    operators: List[str] = []
    current: List[str] = []

    for ch in source:
        if ch in OPERATORS:
            terms.append("".join(current).strip())
            operators.append(ch)
            current = []
        else:
            current.append(ch)

    terms.append("".join(current).strip())
    return terms, operators


def _parse_fraction(term: str, source: str) -> Fraction:
    parts = term.split("/")
    if len(parts) != 2:
        raise LayoutExpressionError(
            ErrorCategory.INVALID_FRACTION, source, f"too many '/' in {term!r}"
        )

    numerator, denominator = (part.strip() for part in parts)
    if "." in numerator or "." in denominator:
        raise LayoutExpressionError(ErrorCategory.FRACTION_NOT_INTEGER, source, term)
    if not _INTEGER_RE.match(numerator) or not _INTEGER_RE.match(denominator):
        raise LayoutExpressionError(ErrorCategory.INVALID_FRACTION, source, term)

    if int(denominator) == 0:
        raise LayoutExpressionError(ErrorCategory.DIVISION_BY_ZERO, source, term)

    return Fraction(int(numerator), int(denominator))


def _parse_term(term: str, source: str) -> LayoutUnit:
    """Parse a single whitespace-stripped term."""
    if term == "0":
        return Zero()

    if "/" in term:
        return _parse_fraction(term, source)

    if term.endswith("%"):
        number = term[:-1].strip()
        if not _NUMBER_RE.match(number):
            raise LayoutExpressionError(ErrorCategory.INVALID_PERCENTAGE, source, term)
        return Percentage(float(number) / 100)

    if term.endswith("px"):
        number = term[:-2].strip()
        if not _NUMBER_RE.match(number):
            raise LayoutExpressionError(ErrorCategory.INVALID_PIXEL, source, term)
        return Pixel(float(number))

    raise LayoutExpressionError(ErrorCategory.INVALID_TERM, source, term)


def parse(source: str) -> LayoutExpression:
    """
    Parse a layout expression.

    Args:
        source: Expression text, whitespace between tokens is ignored

    Returns:
        The expression AST

    Raises:
        LayoutExpressionError: If the expression is malformed
    """
    if not source or not source.strip():
        raise LayoutExpressionError(ErrorCategory.EMPTY, source or "")

    terms, operators = _split_terms(source)

    if operators and not terms[-1]:
        raise LayoutExpressionError(
            ErrorCategory.INCOMPLETE, source, f"dangling '{operators[-1]}'"
        )

    for i, term in enumerate(terms):
        if not term:
            raise LayoutExpressionError(
                ErrorCategory.INVALID_TERM, source, f"missing term at position {i}"
            )

    expr: LayoutExpression = _parse_term(terms[0], source)
    for op, term in zip(operators, terms[1:]):
        right = _parse_term(term, source)
        if op == "+":
            expr = Add(expr, right)
        else:
            expr = Subtract(expr, right)

    return expr


def is_valid_expression(source: str) -> bool:
    """Check whether source parses without error."""
    try:
        parse(source)
    except LayoutExpressionError:
        return False
    return True
