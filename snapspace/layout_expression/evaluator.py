"""
Layout Expression Evaluator

Resolves a parsed expression to pixels against a container size
(monitor work area width or height).
"""

from __future__ import annotations
import math

from .parser import parse
from .types import (
    Add,
    Fraction,
    LayoutExpression,
    Percentage,
    Pixel,
    Subtract,
    Zero,
)


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, .5 moves away from zero."""
    # Not floor(value + 0.5): 0.49999999999999994 + 0.5 == 1.0 in floats
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _evaluate(expr: LayoutExpression, container_size: float) -> float:
    if isinstance(expr, Zero):
        return 0.0
    if isinstance(expr, Fraction):
        return container_size * expr.numerator / expr.denominator
    if isinstance(expr, Percentage):
        return container_size * expr.value
    if isinstance(expr, Pixel):
        return expr.value
    if isinstance(expr, Add):
        return _evaluate(expr.left, container_size) + _evaluate(
            expr.right, container_size
        )
    if isinstance(expr, Subtract):
        return _evaluate(expr.left, container_size) - _evaluate(
            expr.right, container_size
        )
    raise TypeError(f"Unknown layout expression node: {expr!r}")


def evaluate(expr: LayoutExpression, container_size: float) -> int:
    """
    Evaluate an expression to a pixel value.

    Sub-expressions are combined as floats; rounding happens once, at the end.

    Args:
        expr: Parsed expression AST
        container_size: Container size in pixels

    Returns:
        Resolved pixel value rounded to the nearest integer
    """
    return round_half_away_from_zero(_evaluate(expr, container_size))


def resolve(source: str, container_size: float) -> int:
    """Parse and evaluate in one step."""
    return evaluate(parse(source), container_size)
