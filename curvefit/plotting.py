"""Diagnostic figure of a curve fit over its sampled domain."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .fit import CurveFit
from .points import XYPair


@dataclass(frozen=True)
class StyleConfig:
    FIGSIZE: tuple[float, float] = (7.0, 4.2)
    FIGURE_DPI: int = 300
    LINEWIDTH: float = 2.0
    LINEWIDTH_THIN: float = 1.2
    MARKERSIZE: float = 36.0
    ALPHA_CLAMP: float = 0.12
    GRID_ALPHA: float = 0.20


STYLE = StyleConfig()


def plot_curve_fit(
    fit: CurveFit,
    points: Optional[Iterable[XYPair]] = None,
    ax: Optional[Axes] = None,
    num: int = 200,
    margin: float = 0.1,
    output_path: Optional[str] = None,
) -> Figure:
    """Plot a fitted curve, its samples, and the clamped regions.

    Args:
        fit (CurveFit): Valid fit to draw.
        points (Iterable[XYPair], optional): Samples to overlay as markers.
        ax (matplotlib.axes.Axes, optional): Axes to draw on. A new figure is
            created when omitted.
        num (int): Number of evaluation points across the plotted range.
        margin (float): Fraction of the domain width drawn beyond each bound
            so the flat clamped segments are visible.
        output_path (str, optional): When given, the figure is saved there.

    Returns:
        matplotlib.figure.Figure: The figure holding the plot.

    Raises:
        ValueError: If ``fit`` is invalid or ``num`` is less than 2.
    """
    if not fit.is_valid():
        raise ValueError("Cannot plot an invalid curve fit.")
    if num < 2:
        raise ValueError("num must be >= 2")

    x_lo = fit.min_point.x
    x_hi = fit.max_point.x
    pad = margin * (x_hi - x_lo)
    grid = np.linspace(x_lo - pad, x_hi + pad, int(num))
    curve = fit.evaluate_many(grid)

    if ax is None:
        fig, ax = plt.subplots(figsize=STYLE.FIGSIZE)
    else:
        fig = ax.figure

    if pad > 0:
        ax.axvspan(x_lo - pad, x_lo, color="0.5", alpha=STYLE.ALPHA_CLAMP, lw=0)
        ax.axvspan(x_hi, x_hi + pad, color="0.5", alpha=STYLE.ALPHA_CLAMP, lw=0)
    ax.plot(grid, curve, color="black", lw=STYLE.LINEWIDTH, label=f"degree {fit.degree}")
    for bound in (x_lo, x_hi):
        ax.axvline(bound, color="0.4", lw=STYLE.LINEWIDTH_THIN, ls="--")

    if points is not None:
        pts = list(points)
        if pts:
            ax.scatter(
                [p.x for p in pts],
                [p.y for p in pts],
                s=STYLE.MARKERSIZE,
                facecolors="white",
                edgecolors="black",
                zorder=3,
                label="samples",
            )

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.grid(True, alpha=STYLE.GRID_ALPHA)
    ax.legend(frameon=False)

    if output_path:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(output_path, dpi=STYLE.FIGURE_DPI, bbox_inches="tight")

    return fig
