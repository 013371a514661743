from __future__ import annotations

import math

import pytest

from perftrend.util.math import FitResult, fit, ieee_div, ieee_log


def test_two_points_give_exact_line() -> None:
    slope, intercept, rr = fit([1, 3], [3, 7])
    assert slope == 2.0
    assert intercept == 1.0
    assert rr == 1.0


def test_fit_returns_named_tuple() -> None:
    result = fit([1, 2, 3, 4], [3, 5, 7, 9])
    assert isinstance(result, FitResult)
    assert result == FitResult(slope=2.0, intercept=1.0, r_squared=1.0)


def test_fit_is_bit_identical_on_repeat() -> None:
    xs = [1.0, 2.5, 3.7, 8.1, 9.9, 15.2]
    ys = [0.31, 0.77, 1.02, 2.61, 2.95, 4.88]
    first = fit(xs, ys)
    second = fit(list(xs), list(ys))
    assert first == second
    assert all(math.isfinite(v) for v in first)


def test_fit_accepts_iterators() -> None:
    assert fit(iter([1, 3]), (y for y in [3, 7])) == fit([1, 3], [3, 7])


def test_fit_applies_transforms() -> None:
    slope, intercept, rr = fit([1, 3], [3, 7], transform_x=lambda x: 2 * x)
    assert slope == 1.0
    assert intercept == 1.0
    assert rr == 1.0


def test_fit_rejects_length_mismatch() -> None:
    with pytest.raises(ValueError, match="same length"):
        fit([1, 2, 3], [1, 2])


def test_single_point_is_not_finite() -> None:
    slope, intercept, rr = fit([2], [5])
    assert math.isnan(slope)
    assert math.isnan(intercept)
    assert math.isnan(rr)


def test_empty_input_is_not_finite() -> None:
    assert all(math.isnan(v) for v in fit([], []))


def test_zero_variance_in_y_propagates_nan() -> None:
    slope, intercept, rr = fit([1, 2, 3], [4, 4, 4])
    assert slope == 0.0
    assert intercept == 4.0
    assert math.isnan(rr)


def test_zero_variance_in_x_propagates_non_finite() -> None:
    slope, _, rr = fit([2, 2, 2], [1, 2, 3])
    assert math.isnan(slope)
    assert math.isnan(rr)


def test_ieee_helpers() -> None:
    assert ieee_div(1.0, 0.0) == math.inf
    assert ieee_div(-1.0, 0.0) == -math.inf
    assert ieee_div(1.0, -0.0) == -math.inf
    assert math.isnan(ieee_div(0.0, 0.0))
    assert ieee_log(0.0) == -math.inf
    assert math.isnan(ieee_log(-3.0))
    assert ieee_log(math.e) == pytest.approx(1.0)
