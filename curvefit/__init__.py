"""
Polynomial curve fitting through sample points.

Builds the unique polynomial of degree n-1 through n samples with distinct x
values and evaluates it over the sampled domain, clamping to the boundary
samples outside it.

Modules:
    - points: Sample point type and point-list parsing.
    - numerics: Interpolation matrix construction and Gaussian elimination.
    - fit: The immutable CurveFit value type.
    - reporting: DataFrame views of a fit.
    - plotting: Diagnostic figure of a fit.
"""

__version__ = "1.0.0"

from .config import DEFAULT_CONFIG, INVALID_MARKER, FitConfig
from .errors import CurveFitError, FitFailure
from .fit import CurveFit
from .plotting import plot_curve_fit
from .points import (
    XYPair,
    format_xy_pair,
    parse_xy_pair,
    parse_xy_pairs,
    parse_xy_pairs_at,
)
from .reporting import coefficient_table, residual_table

__all__ = [
    # Points
    "XYPair",
    "format_xy_pair",
    "parse_xy_pair",
    "parse_xy_pairs",
    "parse_xy_pairs_at",
    # Fitting
    "CurveFit",
    "CurveFitError",
    "FitFailure",
    "FitConfig",
    "DEFAULT_CONFIG",
    "INVALID_MARKER",
    # Reporting
    "coefficient_table",
    "residual_table",
    # Plotting
    "plot_curve_fit",
]
