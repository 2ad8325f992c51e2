"""Polynomial curve fit through a set of sample points.

A :class:`CurveFit` holds the coefficients of the unique polynomial of degree
``n - 1`` passing through ``n`` samples with distinct x values, together with
the samples of smallest and largest x. Evaluation is bounded: outside the
sampled domain the curve is held flat at the boundary sample's y value.

Construction never raises for bad data. Too few samples, a short raw row, a
singular system or unreadable text all produce an invalid fit, which is
logged and carries the reason in :attr:`CurveFit.failure`. An invalid fit
evaluates to ``0.0`` everywhere, so check :meth:`CurveFit.is_valid` (or call
:meth:`CurveFit.require_valid`) before relying on results.

Equality is defined by the canonical text form (see :meth:`CurveFit.to_string`)
rather than by numeric comparison of the coefficients.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import (
    DEFAULT_CONFIG,
    INVALID_MARKER,
    MIN_SAMPLES,
    FitConfig,
    validate_coefficient_format,
)
from .errors import CurveFitError, FitFailure
from .numerics import NoFit, build_vandermonde_system, solve_coefficients
from .points import XYPair, format_xy_pair, parse_xy_pair, parse_xy_pairs

logger = logging.getLogger(__name__)

_CANONICAL_RE = re.compile(
    r"\s*min=(\S+)\s+max=(\S+)\s+coeff=(\S+)(?:\s+fmt=(\S+))?\s*"
)


@dataclass(frozen=True, eq=False)
class CurveFit:
    """Immutable interpolating polynomial with clamped evaluation.

    Attributes:
        min_point: Sample with the smallest x (first one on ties), or ``None``
            when fewer than two samples were given.
        max_point: Sample with the largest x (first one on ties), or ``None``.
        coefficients: Polynomial coefficients, highest degree first. Empty
            when the fit is invalid.
        failure: Why the fit is invalid, or ``None`` for a valid fit.
        config: Settings used to solve and render the fit.
    """

    min_point: Optional[XYPair] = None
    max_point: Optional[XYPair] = None
    coefficients: Tuple[float, ...] = ()
    failure: Optional[FitFailure] = None
    config: FitConfig = field(default=DEFAULT_CONFIG, repr=False)

    def __post_init__(self):
        coeffs = tuple(float(c) for c in self.coefficients)
        failure = self.failure
        if failure is None and len(coeffs) < MIN_SAMPLES:
            failure = FitFailure.INSUFFICIENT_SAMPLES
        if failure is not None:
            coeffs = ()
        elif self.min_point is None or self.max_point is None:
            raise ValueError("A valid curve fit requires both min and max points.")
        elif self.min_point.x > self.max_point.x:
            raise ValueError(
                f"min_point.x ({self.min_point.x}) exceeds max_point.x "
                f"({self.max_point.x})."
            )
        object.__setattr__(self, "coefficients", coeffs)
        object.__setattr__(self, "failure", failure)

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def invalid(
        cls, failure: FitFailure, config: Optional[FitConfig] = None
    ) -> "CurveFit":
        """Return an invalid fit recording ``failure``."""
        return cls(failure=failure, config=config or DEFAULT_CONFIG)

    @classmethod
    def _solve(
        cls, x: Sequence[float], y: Sequence[float], config: FitConfig
    ) -> "CurveFit":
        """Fit ``n >= 2`` samples given as parallel coordinate sequences."""
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
            logger.warning("Curve fit samples must have finite x and y values")
            return cls.invalid(FitFailure.MALFORMED_ROW, config)
        min_i = 0
        max_i = 0
        for i in range(1, len(x)):
            if x[i] < x[min_i]:
                min_i = i
            if x[i] > x[max_i]:
                max_i = i
        min_point = XYPair(x[min_i], y[min_i])
        max_point = XYPair(x[max_i], y[max_i])

        M, V = build_vandermonde_system(np.asarray(x), np.asarray(y))
        outcome = solve_coefficients(M, V, pivot_tolerance=config.pivot_tolerance)
        if isinstance(outcome, NoFit):
            return cls(
                min_point=min_point,
                max_point=max_point,
                failure=outcome.reason,
                config=config,
            )
        return cls(
            min_point=min_point,
            max_point=max_point,
            coefficients=outcome.coefficients,
            config=config,
        )

    @classmethod
    def from_points(
        cls,
        points: Optional[Iterable[XYPair]],
        config: Optional[FitConfig] = None,
    ) -> "CurveFit":
        """Fit the polynomial through an ordered sequence of points.

        Args:
            points: Sample points. ``None`` is treated as empty.
            config: Optional solver and rendering settings.

        Returns:
            CurveFit: A valid fit, or an invalid one when fewer than two
            points are given, a coordinate is not finite, or the x values are
            not distinct.

        Raises:
            TypeError: If an entry is not an :class:`XYPair`.
        """
        config = config or DEFAULT_CONFIG
        pts = list(points) if points is not None else []
        for p in pts:
            if not isinstance(p, XYPair):
                raise TypeError(f"Expected XYPair, got {type(p).__name__}.")
        if len(pts) < MIN_SAMPLES:
            logger.warning(
                "Curve fit needs at least %d points, got %d", MIN_SAMPLES, len(pts)
            )
            return cls.invalid(FitFailure.INSUFFICIENT_SAMPLES, config)
        return cls._solve([p.x for p in pts], [p.y for p in pts], config)

    @classmethod
    def from_rows(cls, rows, config: Optional[FitConfig] = None) -> "CurveFit":
        """Fit the polynomial through raw ``(x, y)`` rows.

        Args:
            rows: Sequence of rows (lists, tuples or a 2-D numpy array), or a
                :class:`pandas.DataFrame` whose first two columns are x and y.
                Values beyond the second in a row are ignored.
            config: Optional solver and rendering settings.

        Returns:
            CurveFit: A valid fit, or an invalid one when fewer than two rows
            are given, any row has fewer than two numeric values, a coordinate
            is not finite, or the x values are not distinct.
        """
        config = config or DEFAULT_CONFIG
        if rows is None:
            rows = []
        elif isinstance(rows, pd.DataFrame):
            rows = rows.apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)

        n = len(rows)
        if n < MIN_SAMPLES:
            logger.warning(
                "Curve fit needs at least %d rows, got %d", MIN_SAMPLES, n
            )
            return cls.invalid(FitFailure.INSUFFICIENT_SAMPLES, config)

        pts = []
        for p, row in enumerate(rows):
            try:
                if np.ndim(row) != 1:
                    raise ValueError("row is not one-dimensional")
                pts.append(XYPair.from_sequence(row))
            except (TypeError, ValueError) as exc:
                logger.warning("Curve fit row %d is not a numeric (x, y) pair: %s", p, exc)
                return cls.invalid(FitFailure.MALFORMED_ROW, config)
        return cls._solve([pt.x for pt in pts], [pt.y for pt in pts], config)

    @classmethod
    def from_string(
        cls, text: Optional[str], config: Optional[FitConfig] = None
    ) -> "CurveFit":
        """Build a fit from a point list or from canonical fit text.

        Accepted forms are a point list understood by
        :func:`curvefit.points.parse_xy_pairs` (the polynomial is solved), the
        canonical ``min=... max=... coeff=...`` text produced by
        :meth:`to_string` (restored without solving), and the invalid marker.

        Canonical text restores the coefficient format it was written with
        (its ``fmt=`` field, or none), so ``str()`` of the restored fit
        reproduces the text. Only the solver settings come from ``config``.
        """
        config = config or DEFAULT_CONFIG
        stripped = text.strip() if text else ""
        if stripped == INVALID_MARKER:
            return cls.invalid(FitFailure.UNSPECIFIED, config)
        if stripped.startswith("min="):
            return cls._from_canonical(stripped, config)
        return cls.from_points(parse_xy_pairs(stripped), config)

    @classmethod
    def _from_canonical(cls, text: str, config: FitConfig) -> "CurveFit":
        m = _CANONICAL_RE.fullmatch(text)
        fmt = m.group(4) if m else None
        if fmt is not None:
            try:
                config = replace(config, coefficient_format=fmt)
            except ValueError:
                m = None
        elif config.coefficient_format is not None:
            config = replace(config, coefficient_format=None)
        min_point = parse_xy_pair(m.group(1)) if m else None
        max_point = parse_xy_pair(m.group(2)) if m else None
        coeffs: Tuple[float, ...] = ()
        if m:
            try:
                coeffs = tuple(float(c) for c in m.group(3).split(","))
            except ValueError:
                coeffs = ()
        if (
            min_point is None
            or max_point is None
            or len(coeffs) < MIN_SAMPLES
            or min_point.x > max_point.x
        ):
            logger.warning("Unable to decode curve fit text: %r", text)
            return cls.invalid(FitFailure.UNPARSEABLE, config)
        return cls(
            min_point=min_point,
            max_point=max_point,
            coefficients=coeffs,
            config=config,
        )

    @classmethod
    def from_fit(cls, other: Optional["CurveFit"]) -> "CurveFit":
        """Return an independent copy of ``other`` (invalid when ``None``)."""
        if other is None:
            return cls.invalid(FitFailure.UNSPECIFIED)
        return other.copy()

    def copy(self) -> "CurveFit":
        """Return a copy that shares no storage with this fit."""
        return CurveFit(
            min_point=_copy_point(self.min_point),
            max_point=_copy_point(self.max_point),
            coefficients=tuple(self.coefficients),
            failure=self.failure,
            config=self.config,
        )

    def __copy__(self) -> "CurveFit":
        return self.copy()

    def __deepcopy__(self, memo) -> "CurveFit":
        return self.copy()

    # ------------------------------------------------------------------
    # Queries

    def is_valid(self) -> bool:
        return self.failure is None and len(self.coefficients) > 0

    @staticmethod
    def is_valid_fit(fit: Optional["CurveFit"]) -> bool:
        """Return ``True`` if ``fit`` is not ``None`` and is valid."""
        return fit is not None and fit.is_valid()

    def require_valid(self) -> "CurveFit":
        """Return this fit, or raise :class:`CurveFitError` if it is invalid."""
        if not self.is_valid():
            raise CurveFitError(
                f"Curve fit is invalid ({self.failure.value}).", self.failure
            )
        return self

    def size(self) -> int:
        return len(self.coefficients)

    @property
    def degree(self) -> int:
        """Polynomial degree, or ``-1`` for an invalid fit."""
        return self.size() - 1 if self.is_valid() else -1

    def get_coefficient(self, index: int) -> float:
        """Return coefficient ``index`` (highest degree first), or ``0.0``."""
        if 0 <= index < self.size():
            return self.coefficients[index]
        return 0.0

    def coefficient_array(self) -> np.ndarray:
        """Return the coefficients as a new numpy array."""
        return np.array(self.coefficients, dtype=float)

    # ------------------------------------------------------------------
    # Evaluation

    def evaluate(self, x: float) -> float:
        """Return the fitted y at ``x``.

        Inside the sampled domain this is the polynomial value. At or beyond
        either end of the domain the boundary sample's y is returned
        unchanged. An invalid fit returns ``0.0``.
        """
        if self.size() <= 0:
            return 0.0
        x = float(x)
        if x <= self.min_point.x:
            return self.min_point.y
        if x >= self.max_point.x:
            return self.max_point.y
        return float(np.polyval(self.coefficients, x))

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def evaluate_many(self, xs) -> np.ndarray:
        """Vectorised :meth:`evaluate` over an array-like of x values."""
        x_arr = np.asarray(xs, dtype=float)
        if self.size() <= 0:
            return np.zeros_like(x_arr)
        with np.errstate(over="ignore", invalid="ignore"):
            poly = np.polyval(self.coefficients, x_arr)
        return np.where(
            x_arr <= self.min_point.x,
            self.min_point.y,
            np.where(x_arr >= self.max_point.x, self.max_point.y, poly),
        )

    # ------------------------------------------------------------------
    # Serialization and equality

    def to_string(self, fmt: Optional[str] = None) -> str:
        """Return the canonical text form of this fit.

        Args:
            fmt: Optional format spec (for example ``".6f"``) applied to every
                coefficient and recorded in a trailing ``fmt=`` field. Without
                it each coefficient is written in its shortest round-trip form.
                Either way the text decodes to an equal fit.

        Returns:
            str: ``min=<x/y> max=<x/y> coeff=<c0>,<c1>,...[ fmt=<spec>]`` for
            a valid fit, or ``"invalid"``.

        Raises:
            ValueError: If ``fmt`` is not a valid float format spec or
                contains whitespace.
        """
        if not self.is_valid():
            return INVALID_MARKER
        text = (
            f"min={format_xy_pair(self.min_point)} "
            f"max={format_xy_pair(self.max_point)} "
        )
        if fmt:
            validate_coefficient_format(fmt)
            coeff = ",".join(format(c, fmt) for c in self.coefficients)
            return f"{text}coeff={coeff} fmt={fmt}"
        coeff = ",".join(repr(c) for c in self.coefficients)
        return f"{text}coeff={coeff}"

    def __str__(self) -> str:
        return self.to_string(self.config.coefficient_format)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurveFit):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))


def _copy_point(point: Optional[XYPair]) -> Optional[XYPair]:
    return XYPair(point.x, point.y) if point is not None else None
