"""
Layout Expression System

Parses and evaluates layout expressions:

    expr = parse("1/3 + 10px")
    evaluate(expr, 300)  # 110
"""

from .types import (
    Zero,
    Fraction,
    Percentage,
    Pixel,
    Add,
    Subtract,
    LayoutUnit,
    LayoutExpression,
    ErrorCategory,
    LayoutExpressionError,
)
from .parser import parse, is_valid_expression
from .evaluator import evaluate, resolve, round_half_away_from_zero

__all__ = [
    # AST
    "Zero",
    "Fraction",
    "Percentage",
    "Pixel",
    "Add",
    "Subtract",
    "LayoutUnit",
    "LayoutExpression",
    # Errors
    "ErrorCategory",
    "LayoutExpressionError",
    # Operations
    "parse",
    "is_valid_expression",
    "evaluate",
    "resolve",
    "round_half_away_from_zero",
]
