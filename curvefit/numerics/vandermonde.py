"""Build the interpolation system for a set of samples."""

from __future__ import annotations

from typing import Tuple

import numpy as np


def build_vandermonde_system(
    x: np.ndarray, y: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the descending-power matrix and right-hand side for ``x``/``y``.

    Row ``p`` of the matrix holds ``x[p] ** (n - i - 1)`` for column ``i``, so
    solving ``M @ C = y`` yields polynomial coefficients highest degree first.

    Args:
        x (numpy.ndarray): Sample abscissae, length ``n``.
        y (numpy.ndarray): Sample ordinates, length ``n``.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: ``(M, V)`` with shapes
        ``(n, n)`` and ``(n,)``, both fresh float arrays.

    Raises:
        ValueError: If ``x`` and ``y`` are not one-dimensional arrays of equal
            length.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.ndim != 1 or y_arr.ndim != 1 or len(x_arr) != len(y_arr):
        raise ValueError("x and y must be one-dimensional and the same length.")

    n = len(x_arr)
    powers = np.arange(n - 1, -1, -1, dtype=float)
    M = np.power.outer(x_arr, powers)
    return M, y_arr.copy()
