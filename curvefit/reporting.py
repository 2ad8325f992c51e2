"""Tabulate curve fits as pandas DataFrames for inspection and export.

Nothing here writes files; callers decide where the tables go.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from .fit import CurveFit
from .points import XYPair

COEFFICIENT_COLUMNS = ["Power", "Coefficient"]
RESIDUAL_COLUMNS = ["x", "y", "Fitted", "Residual"]


def coefficient_table(fit: CurveFit) -> pd.DataFrame:
    """Return one row per coefficient, highest power first.

    Args:
        fit (CurveFit): Fit to tabulate.

    Returns:
        pandas.DataFrame: Columns ``Power`` (int) and ``Coefficient``
        (float). Empty, with the same columns, for an invalid fit.
    """
    coeffs = fit.coefficient_array()
    n = len(coeffs)
    return pd.DataFrame(
        {
            "Power": np.arange(n - 1, -1, -1, dtype=int),
            "Coefficient": coeffs,
        },
        columns=COEFFICIENT_COLUMNS,
    )


def residual_table(fit: CurveFit, points: Iterable[XYPair]) -> pd.DataFrame:
    """Compare sample points against the fitted curve.

    Args:
        fit (CurveFit): Fit to evaluate.
        points (Iterable[XYPair]): Samples to compare, usually the ones the
            fit was built from.

    Returns:
        pandas.DataFrame: Columns ``x``, ``y``, ``Fitted`` and ``Residual``
        (``y - Fitted``), one row per point in input order.

    Note:
        For the samples a valid fit was built from, residuals are zero up to
        floating-point error. Large residuals point to a nearly singular
        system.
    """
    pts = list(points)
    x = np.array([p.x for p in pts], dtype=float)
    y = np.array([p.y for p in pts], dtype=float)
    fitted = fit.evaluate_many(x)
    return pd.DataFrame(
        {"x": x, "y": y, "Fitted": fitted, "Residual": y - fitted},
        columns=RESIDUAL_COLUMNS,
    )
