import dataclasses
import logging
import math

import numpy as np
import pandas as pd
import pytest

from curvefit import CurveFit, CurveFitError, FitConfig, FitFailure, XYPair


def test_square_scenario(square_points):
    fit = CurveFit.from_points(square_points)
    assert fit.is_valid()
    assert fit.size() == 3
    assert fit.degree == 2
    assert fit.coefficients == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)
    assert fit.evaluate(2.5) == pytest.approx(6.25, abs=1e-9)
    assert fit.evaluate(0) == 1.0
    assert fit.evaluate(10) == 9.0


def test_line_scenario(line_points):
    fit = CurveFit.from_points(line_points)
    assert fit.is_valid()
    assert fit.coefficients == (1.0, 0.0)
    assert fit.evaluate(0.5) == 0.5
    assert fit(0.25) == 0.25


def test_duplicate_x_is_invalid():
    fit = CurveFit.from_points([XYPair(1, 5), XYPair(1, 7)])
    assert not fit.is_valid()
    assert fit.size() == 0
    assert fit.failure is FitFailure.SINGULAR_SYSTEM
    assert fit.evaluate(1.0) == 0.0


def test_interpolation_is_exact_at_every_sample():
    xs = [-2.0, -1.0, 0.5, 1.0, 3.0, 4.0]
    ys = [3.0, -1.0, 2.5, 0.0, 7.0, -4.0]
    fit = CurveFit.from_points([XYPair(x, y) for x, y in zip(xs, ys)])
    assert fit.is_valid()
    assert fit.size() == len(xs)
    for x, y in zip(xs, ys):
        assert math.isclose(fit.evaluate(x), y, rel_tol=1e-9, abs_tol=1e-9)


def test_unsorted_samples_track_min_and_max():
    pts = [XYPair(3, 9), XYPair(-1, 1), XYPair(2, 4)]
    fit = CurveFit.from_points(pts)
    assert fit.min_point == XYPair(-1, 1)
    assert fit.max_point == XYPair(3, 9)
    assert fit.evaluate(0.0) == pytest.approx(0.0, abs=1e-12)


def test_clamping_is_exact_outside_domain(square_points):
    fit = CurveFit.from_points(square_points)
    for x in (-1e6, 0.0, 0.999, 1.0):
        assert fit.evaluate(x) == 1.0
    for x in (3.0, 3.001, 1e6, math.inf):
        assert fit.evaluate(x) == 9.0


@pytest.mark.parametrize("points", [None, [], [XYPair(1, 1)]])
def test_insufficient_points(points, caplog):
    with caplog.at_level(logging.WARNING, logger="curvefit.fit"):
        fit = CurveFit.from_points(points)
    assert not fit.is_valid()
    assert fit.size() == 0
    assert fit.degree == -1
    assert fit.failure is FitFailure.INSUFFICIENT_SAMPLES
    assert fit.min_point is None
    assert "at least 2" in caplog.text


def test_from_points_rejects_non_points():
    with pytest.raises(TypeError):
        CurveFit.from_points([(1, 1), (2, 4)])


def test_failed_solve_keeps_first_min_max():
    fit = CurveFit.from_points([XYPair(1, 1), XYPair(1, 2), XYPair(3, 3)])
    assert fit.failure is FitFailure.SINGULAR_SYSTEM
    assert fit.min_point == XYPair(1, 1)
    assert fit.max_point == XYPair(3, 3)


def test_from_rows_lists_and_arrays():
    rows = [[1, 1], [2, 4], [3, 9]]
    expected = CurveFit.from_points([XYPair(*r) for r in rows])
    assert CurveFit.from_rows(rows) == expected
    assert CurveFit.from_rows(np.array(rows, dtype=float)) == expected
    assert CurveFit.from_rows([(1, 1, "extra"), (2, 4, None), (3, 9, 0)]) == expected


def test_from_rows_dataframe():
    df = pd.DataFrame({"x": [0.0, 1.0], "y": ["0", "1"]})
    fit = CurveFit.from_rows(df)
    assert fit.is_valid()
    assert fit.evaluate(0.5) == 0.5


def test_from_rows_malformed_row(caplog):
    with caplog.at_level(logging.WARNING, logger="curvefit.fit"):
        fit = CurveFit.from_rows([[1, 1], [2], [3, 9]])
    assert not fit.is_valid()
    assert fit.failure is FitFailure.MALFORMED_ROW
    assert "row 1" in caplog.text

    assert CurveFit.from_rows(np.array([1.0, 2.0, 3.0])).failure is FitFailure.MALFORMED_ROW
    assert CurveFit.from_rows(pd.DataFrame({"x": [1.0, 2.0]})).failure is FitFailure.MALFORMED_ROW


@pytest.mark.parametrize("rows", [None, [], [[1, 2]]])
def test_from_rows_insufficient(rows):
    fit = CurveFit.from_rows(rows)
    assert fit.failure is FitFailure.INSUFFICIENT_SAMPLES


def test_from_string_point_list(square_points):
    fit = CurveFit.from_string("[(1, 1), (2, 4), (3, 9)]")
    assert fit == CurveFit.from_points(square_points)


def test_from_string_unparseable_list_is_insufficient():
    fit = CurveFit.from_string("not a list")
    assert fit.failure is FitFailure.INSUFFICIENT_SAMPLES


def test_get_coefficient_out_of_range(square_points):
    fit = CurveFit.from_points(square_points)
    assert fit.get_coefficient(0) == pytest.approx(1.0)
    assert fit.get_coefficient(3) == 0.0
    assert fit.get_coefficient(-1) == 0.0
    assert CurveFit.from_points([]).get_coefficient(0) == 0.0


def test_fit_is_immutable(square_points):
    fit = CurveFit.from_points(square_points)
    with pytest.raises(dataclasses.FrozenInstanceError):
        fit.coefficients = (0.0, 0.0, 0.0)
    arr = fit.coefficient_array()
    arr[:] = 42.0
    assert fit.get_coefficient(0) == pytest.approx(1.0)
    assert fit.coefficient_array() is not fit.coefficient_array()


def test_evaluate_many_matches_scalar(square_points):
    fit = CurveFit.from_points(square_points)
    xs = np.array([-5.0, 1.0, 1.5, 2.0, 2.75, 3.0, 8.0])
    out = fit.evaluate_many(xs)
    assert out.shape == xs.shape
    assert np.allclose(out, [fit.evaluate(x) for x in xs])
    assert out[0] == 1.0
    assert out[-1] == 9.0


def test_invalid_evaluate_many_is_zero():
    fit = CurveFit.from_points([])
    assert np.array_equal(fit.evaluate_many([1.0, 2.0]), np.zeros(2))


def test_require_valid(square_points):
    fit = CurveFit.from_points(square_points)
    assert fit.require_valid() is fit
    bad = CurveFit.from_points([XYPair(1, 5), XYPair(1, 7)])
    with pytest.raises(CurveFitError) as excinfo:
        bad.require_valid()
    assert excinfo.value.failure is FitFailure.SINGULAR_SYSTEM
    assert excinfo.value.code == "SINGULAR_SYSTEM"
    assert isinstance(excinfo.value, ValueError)


def test_is_valid_fit_handles_none(line_points):
    assert not CurveFit.is_valid_fit(None)
    assert CurveFit.is_valid_fit(CurveFit.from_points(line_points))


def test_pivot_tolerance_config():
    pts = [XYPair(1.0, 2.0), XYPair(1.0 + 1e-12, 3.0)]
    assert CurveFit.from_points(pts).is_valid()
    strict = FitConfig().with_tolerance(1e-6)
    fit = CurveFit.from_points(pts, config=strict)
    assert fit.failure is FitFailure.SINGULAR_SYSTEM


def test_config_rejects_negative_tolerance():
    with pytest.raises(ValueError):
        FitConfig(pivot_tolerance=-0.1)


def test_direct_construction_checks_bounds():
    with pytest.raises(ValueError):
        CurveFit(coefficients=(1.0, 2.0))
    with pytest.raises(ValueError):
        CurveFit(XYPair(2, 0), XYPair(1, 0), (1.0, 2.0))
    short = CurveFit(XYPair(0, 0), XYPair(1, 1), (1.0,))
    assert short.failure is FitFailure.INSUFFICIENT_SAMPLES


def test_failed_solve_keeps_first_max():
    fit = CurveFit.from_points([XYPair(1, 1), XYPair(3, 3), XYPair(3, 4)])
    assert fit.failure is FitFailure.SINGULAR_SYSTEM
    assert fit.min_point == XYPair(1, 1)
    assert fit.max_point == XYPair(3, 3)


def test_from_rows_dataframe_non_numeric_cell(caplog):
    df = pd.DataFrame({"x": ["abc", 1.0], "y": [0.0, 1.0]})
    with caplog.at_level(logging.WARNING, logger="curvefit.fit"):
        fit = CurveFit.from_rows(df)
    assert not fit.is_valid()
    assert fit.failure is FitFailure.MALFORMED_ROW
    assert fit.coefficients == ()
    assert "finite" in caplog.text


@pytest.mark.parametrize(
    "rows",
    [
        [[1, "a"], [2, 3]],
        [[1, None], [2, 3]],
        [[1, 1], [2, [3, 4]]],
    ],
)
def test_from_rows_non_numeric_values(rows, caplog):
    with caplog.at_level(logging.WARNING, logger="curvefit.fit"):
        fit = CurveFit.from_rows(rows)
    assert fit.failure is FitFailure.MALFORMED_ROW
    assert "not a numeric (x, y) pair" in caplog.text


@pytest.mark.parametrize(
    "make",
    [
        lambda: CurveFit.from_string("nan/1,2/3"),
        lambda: CurveFit.from_string("1/1,2/inf"),
        lambda: CurveFit.from_points([XYPair(0, 0), XYPair(math.inf, 1)]),
        lambda: CurveFit.from_rows(np.array([[0.0, 0.0], [1.0, np.nan]])),
    ],
)
def test_non_finite_samples_are_invalid(make):
    fit = make()
    assert not fit.is_valid()
    assert fit.failure is FitFailure.MALFORMED_ROW
    assert fit.min_point is None
    assert fit.evaluate(0.5) == 0.0
