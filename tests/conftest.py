"""Pytest configuration for repository-relative imports."""

import os
import sys

import matplotlib

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

import pytest

from curvefit.points import XYPair


@pytest.fixture
def square_points():
    """Samples on y = x**2."""
    return [XYPair(1, 1), XYPair(2, 4), XYPair(3, 9)]


@pytest.fixture
def line_points():
    """Samples on y = x."""
    return [XYPair(0, 0), XYPair(1, 1)]
