"""
Numerical routines behind polynomial curve fitting.

Modules:
    vandermonde:
        Construction of the descending-power interpolation matrix and its
        right-hand side from sample coordinates.

    elimination:
        Gaussian elimination with partial pivoting and back substitution,
        returning either the coefficients or an explicit no-fit outcome.

Design Principle:
    This subpackage has no dependency on the curve-fit value type or on
    point parsing. It works on numpy arrays only and can be tested alone.
"""

from .elimination import (
    CoefficientSolution,
    NoFit,
    SolveOutcome,
    format_system,
    solve_coefficients,
    swap,
)
from .vandermonde import build_vandermonde_system

__all__ = [
    "CoefficientSolution",
    "NoFit",
    "SolveOutcome",
    "build_vandermonde_system",
    "format_system",
    "solve_coefficients",
    "swap",
]
