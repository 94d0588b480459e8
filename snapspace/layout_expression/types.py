"""
Layout Expression Types

The expression AST is a closed set of frozen dataclasses. Every consumer
dispatches over exactly these six node types.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Zero:
    """Bare ``0``."""


@dataclass(frozen=True)
class Fraction:
    """``N/M`` of the container size."""

    numerator: int
    denominator: int


@dataclass(frozen=True)
class Percentage:
    """``N%`` of the container size, stored divided by 100."""

    value: float


@dataclass(frozen=True)
class Pixel:
    """Absolute pixel offset."""

    value: float


@dataclass(frozen=True)
class Add:
    left: "LayoutExpression"
    right: "LayoutExpression"


@dataclass(frozen=True)
class Subtract:
    left: "LayoutExpression"
    right: "LayoutExpression"


LayoutUnit = Union[Zero, Fraction, Percentage, Pixel]
LayoutExpression = Union[Zero, Fraction, Percentage, Pixel, Add, Subtract]


class ErrorCategory(Enum):
    """Stable categories for malformed expressions."""

    EMPTY = "Empty expression"
    INCOMPLETE = "Incomplete expression"
    INVALID_TERM = "Invalid term"
    INVALID_FRACTION = "Invalid fraction"
    FRACTION_NOT_INTEGER = "Fractions must use integers"
    DIVISION_BY_ZERO = "Division by zero"
    INVALID_PERCENTAGE = "Invalid percentage"
    INVALID_PIXEL = "Invalid pixel value"


class LayoutExpressionError(ValueError):
    """Raised when a layout expression cannot be parsed."""

    def __init__(self, category: ErrorCategory, source: str, detail: str = ""):
        self.category = category
        self.source = source
        self.detail = detail
        message = f"{category.value}: {source!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
