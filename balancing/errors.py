"""Exception types raised by complex construction and balancing search."""
from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised for malformed complexes, foreign facets or bad search parameters."""


class ArithmeticOverflowError(ArithmeticError):
    """Raised when an integer computation would not fit the int64 matrix dtype."""
