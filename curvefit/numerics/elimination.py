"""Gaussian elimination with partial pivoting for interpolation systems.

The solver is deliberately narrow: it handles one square system at a time,
reports singular systems as an outcome instead of raising, and never returns
partially computed coefficients.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import MutableSequence, Tuple, TypeVar, Union

import numpy as np

from ..errors import FitFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CoefficientSolution:
    """Successful solve: coefficients ordered highest degree first."""

    coefficients: Tuple[float, ...]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class NoFit:
    """Failed solve with the reason it failed."""

    reason: FitFailure
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False


SolveOutcome = Union[CoefficientSolution, NoFit]


def swap(items: MutableSequence[T], i: int, j: int) -> None:
    """Swap entries ``i`` and ``j`` of ``items`` in place.

    Works for lists and for numpy arrays of any dimension, where the entries
    are rows along the first axis.
    """
    if i == j:
        return
    if isinstance(items, np.ndarray):
        items[[i, j]] = items[[j, i]]
    else:
        items[i], items[j] = items[j], items[i]


def format_system(M: np.ndarray, V: np.ndarray, fmt: str = ".5f") -> str:
    """Render the augmented system ``[M | V]`` one row per line."""
    M_arr = np.asarray(M, dtype=float)
    V_arr = np.asarray(V, dtype=float)
    width = max((len(format(v, fmt)) for v in M_arr.ravel()), default=1)
    lines = []
    for row, rhs in zip(M_arr, V_arr):
        cells = " ".join(format(v, fmt).rjust(width) for v in row)
        lines.append(f"| {cells} |   | {format(rhs, fmt)} |")
    return "\n".join(lines)


def solve_coefficients(
    M: np.ndarray, V: np.ndarray, pivot_tolerance: float = 0.0
) -> SolveOutcome:
    """Solve ``M @ C = V`` by Gaussian elimination with partial pivoting.

    At every step the remaining row with the largest absolute entry in the
    pivot column is swapped into place (in both ``M`` and ``V``). A pivot
    whose magnitude is at or below ``pivot_tolerance`` aborts the solve.
    Back substitution then yields the coefficients.

    Args:
        M (numpy.ndarray): Square system matrix, shape ``(n, n)``. Not
            modified.
        V (numpy.ndarray): Right-hand side, length ``n``. Not modified.
        pivot_tolerance (float, optional): Singularity threshold. Defaults to
            ``0.0``, i.e. only an exactly-zero pivot is singular.

    Returns:
        CoefficientSolution | NoFit: The coefficients, or the reason none
        could be computed (``INSUFFICIENT_SAMPLES`` for ``n < 2``,
        ``SINGULAR_SYSTEM`` for a rejected pivot).

    Raises:
        ValueError: If ``M`` is not square, ``V`` does not match it, or
            ``pivot_tolerance`` is negative.

    Note:
        With the default tolerance, nearly singular systems (very close x
        values) still solve and may give very large coefficients. A
        ``RuntimeWarning`` is emitted when any coefficient is non-finite.
    """
    if not pivot_tolerance >= 0.0:
        raise ValueError(f"pivot_tolerance must be >= 0, got {pivot_tolerance!r}")

    A = np.array(M, dtype=float)
    b = np.array(V, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"Matrix must be square, got shape {A.shape}.")
    if b.ndim != 1 or len(b) != A.shape[0]:
        raise ValueError(
            f"Right-hand side length {b.shape} does not match matrix size {A.shape[0]}."
        )

    L = A.shape[0]
    if L < 2:
        return NoFit(FitFailure.INSUFFICIENT_SAMPLES, f"{L} row(s), at least 2 required")

    for pr in range(L):
        mx = pr + int(np.argmax(np.abs(A[pr:, pr])))
        swap(A, pr, mx)
        swap(b, pr, mx)

        P = A[pr, pr]
        if abs(P) <= pivot_tolerance:
            detail = f"pivot {float(P)!r} at step {pr} of {L}"
            logger.warning("Unable to calculate curve-fit coefficients: %s", detail)
            return NoFit(FitFailure.SINGULAR_SYSTEM, detail)

        for i in range(pr + 1, L):
            c = A[i, pr] / P
            A[i, pr:] -= c * A[pr, pr:]
            b[i] -= c * b[pr]

    C = np.zeros(L, dtype=float)
    for i in range(L - 1, -1, -1):
        S = float(np.dot(A[i, i + 1 :], C[i + 1 :]))
        C[i] = (b[i] - S) / A[i, i]

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Reduced system:\n%s", format_system(A, b))
        logger.debug("Coefficients: %s", ", ".join(repr(float(c)) for c in C))

    if not np.all(np.isfinite(C)):
        warnings.warn(
            "Curve-fit coefficients are not finite; the samples are nearly "
            "singular. Consider a non-zero pivot_tolerance.",
            RuntimeWarning,
            stacklevel=2,
        )

    return CoefficientSolution(tuple(float(c) for c in C))

