"""Failure kinds for curve-fit construction and the strict-mode exception."""

from __future__ import annotations

from enum import Enum


class FitFailure(str, Enum):
    """Reason a curve fit could not be produced.

    Attributes:
        INSUFFICIENT_SAMPLES: Fewer than two sample points were supplied.
        MALFORMED_ROW: A raw row carried fewer than two numeric values, or a
            sample coordinate was not finite.
        SINGULAR_SYSTEM: Elimination met a pivot at or below the tolerance,
            typically because two samples share the same x.
        UNPARSEABLE: Serialized fit text could not be decoded.
        UNSPECIFIED: The fit was restored from the invalid marker, which
            does not record a reason.
    """

    INSUFFICIENT_SAMPLES = "INSUFFICIENT_SAMPLES"
    MALFORMED_ROW = "MALFORMED_ROW"
    SINGULAR_SYSTEM = "SINGULAR_SYSTEM"
    UNPARSEABLE = "UNPARSEABLE"
    UNSPECIFIED = "UNSPECIFIED"


class CurveFitError(ValueError):
    """Raised when a valid fit is required but the fit is invalid."""

    def __init__(self, message: str, failure: FitFailure | None = None):
        self.message = message
        self.failure = failure
        self.code = failure.value if failure is not None else "INVALID_FIT"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
