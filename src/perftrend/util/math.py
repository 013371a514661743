from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import NamedTuple

Transform = Callable[[float], float]


class FitResult(NamedTuple):
    slope: float
    intercept: float
    r_squared: float


def identity(value: float) -> float:
    return value


def ieee_div(num: float, den: float) -> float:
    """Divide with IEEE-754 semantics instead of raising ZeroDivisionError."""
    if den != 0.0:
        return num / den
    if num == 0.0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def ieee_log(value: float) -> float:
    """Natural log returning -inf for zero and nan for negative input."""
    if value > 0.0:
        return math.log(value)
    if value == 0.0:
        return -math.inf
    return math.nan


def ieee_exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def ieee_pow(base: float, exponent: float) -> float:
    try:
        result = base**exponent
    except OverflowError:
        return math.inf
    except ZeroDivisionError:
        return math.inf
    if isinstance(result, complex):
        return math.nan
    return float(result)


def _as_list(values: Iterable[float]) -> list[float]:
    return values if isinstance(values, list) else list(values)


def fit(
    xs: Iterable[float],
    ys: Iterable[float],
    transform_x: Transform = identity,
    transform_y: Transform = identity,
) -> FitResult:
    """Least-squares line through the transformed samples.

    Returns slope, intercept and the coefficient of determination of the
    regression of ``transform_y(y)`` on ``transform_x(x)``. Degenerate input
    (fewer than two points, zero variance, log of a non-positive value) is not
    rejected: the result carries ``inf``/``nan`` instead.
    """
    xs_list = _as_list(xs)
    ys_list = _as_list(ys)
    if len(xs_list) != len(ys_list):
        raise ValueError(
            f"xs and ys must have the same length (got {len(xs_list)} and {len(ys_list)})"
        )

    n = 0
    sum_x = 0.0
    sum_x2 = 0.0
    sum_y = 0.0
    sum_y2 = 0.0
    sum_xy = 0.0

    for x, y in zip(xs_list, ys_list):
        tx = float(transform_x(x))
        ty = float(transform_y(y))
        n += 1
        sum_x += tx
        sum_y += ty
        sum_x2 += tx * tx
        sum_y2 += ty * ty
        sum_xy += tx * ty

    txy = n * sum_xy - sum_x * sum_y
    tx_term = n * sum_x2 - sum_x * sum_x
    ty_term = n * sum_y2 - sum_y * sum_y

    slope = ieee_div(txy, tx_term)
    intercept = ieee_div(sum_y - slope * sum_x, n)
    r_squared = ieee_div(txy * txy, tx_term * ty_term)

    return FitResult(slope=slope, intercept=intercept, r_squared=r_squared)
