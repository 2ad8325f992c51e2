"""Tunable settings for coefficient solving and fit serialization."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

INVALID_MARKER = "invalid"
MIN_SAMPLES = 2


def validate_coefficient_format(fmt: str) -> None:
    """Check that ``fmt`` renders floats as single tokens that parse back.

    Raises:
        ValueError: If ``fmt`` is not a float format spec, contains
            whitespace or commas, or produces text ``float()`` cannot read.
    """
    if not fmt or any(ch.isspace() or ch == "," for ch in fmt):
        raise ValueError(f"Invalid coefficient format {fmt!r}.")
    try:
        float(format(-1234.5, fmt))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid coefficient format {fmt!r}: {exc}") from exc


@dataclass(frozen=True)
class FitConfig:
    """Settings shared by every construction path of a curve fit.

    Attributes:
        pivot_tolerance: Largest absolute pivot still treated as singular.
            ``0.0`` reproduces the exact-zero check; raising it turns
            near-duplicate x values into a clean failure instead of huge
            coefficients. This changes which inputs produce a valid fit.
        coefficient_format: Format spec applied to every coefficient when a
            fit is rendered with ``str()``. ``None`` writes the shortest
            round-trip representation. Fits formatted differently compare
            unequal even when numerically identical. The spec is written into
            the text form so decoding restores it.
    """

    pivot_tolerance: float = 0.0
    coefficient_format: Optional[str] = None

    def __post_init__(self):
        if not self.pivot_tolerance >= 0.0:
            raise ValueError(
                f"pivot_tolerance must be >= 0, got {self.pivot_tolerance!r}"
            )
        if self.coefficient_format is not None:
            validate_coefficient_format(self.coefficient_format)

    def with_tolerance(self, pivot_tolerance: float) -> "FitConfig":
        return replace(self, pivot_tolerance=float(pivot_tolerance))


DEFAULT_CONFIG = FitConfig()
