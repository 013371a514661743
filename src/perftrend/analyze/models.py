from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from perftrend.util.math import FitResult, Transform, fit, identity, ieee_exp, ieee_log, ieee_pow


class Model(str, Enum):
    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    POWER = "power"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class ModelSpec:
    """Transform pair that linearises a model and the rule that maps the
    fitted line back to the model's own parameters."""

    transform_x: Transform
    transform_y: Transform
    recover: Callable[[FitResult], FitResult]


def _unchanged(result: FitResult) -> FitResult:
    return result


def _recover_power(result: FitResult) -> FitResult:
    # y = a*x^b: ln y = b*ln x + ln a
    return FitResult(ieee_exp(result.intercept), result.slope, result.r_squared)


def _recover_exponential(result: FitResult) -> FitResult:
    return FitResult(ieee_exp(result.slope), ieee_exp(result.intercept), result.r_squared)


MODEL_SPECS: dict[Model, ModelSpec] = {
    Model.LINEAR: ModelSpec(identity, identity, _unchanged),
    Model.LOGARITHMIC: ModelSpec(ieee_log, identity, _unchanged),
    Model.POWER: ModelSpec(ieee_log, ieee_log, _recover_power),
    Model.EXPONENTIAL: ModelSpec(identity, ieee_log, _recover_exponential),
}

_ALIASES: dict[str, Model] = {
    "log": Model.LOGARITHMIC,
    "exp": Model.EXPONENTIAL,
}


def normalize_model(model: Model | str) -> Model:
    if isinstance(model, Model):
        return model
    value = str(model).strip().lower()
    if value in _ALIASES:
        return _ALIASES[value]
    try:
        return Model(value)
    except ValueError:
        choices = ", ".join(m.value for m in Model)
        raise ValueError(f"Unknown model: {model!r} (expected one of: {choices})") from None


def fit_model(model: Model | str, xs: Iterable[float], ys: Iterable[float]) -> FitResult:
    spec = MODEL_SPECS[normalize_model(model)]
    return spec.recover(fit(xs, ys, spec.transform_x, spec.transform_y))


def fit_linear(xs: Iterable[float], ys: Iterable[float]) -> FitResult:
    """Fit ``y = a*x + b``."""
    return fit_model(Model.LINEAR, xs, ys)


def fit_logarithmic(xs: Iterable[float], ys: Iterable[float]) -> FitResult:
    """Fit ``y = a*ln(x) + b``."""
    return fit_model(Model.LOGARITHMIC, xs, ys)


def fit_power(xs: Iterable[float], ys: Iterable[float]) -> FitResult:
    """Fit ``y = a*x^b``; returns ``(a, b, r_squared)``."""
    return fit_model(Model.POWER, xs, ys)


def fit_exponential(xs: Iterable[float], ys: Iterable[float]) -> FitResult:
    """Fit ``y = a*b^x`` through ``ln y = x*ln b + ln a``.

    Returns ``(exp(slope), exp(intercept), r_squared)``, that is the base
    first and the coefficient second.
    """
    return fit_model(Model.EXPONENTIAL, xs, ys)


fit_log = fit_logarithmic
fit_exp = fit_exponential


def fit_at(model: Model | str, slope: float, intercept: float, n: float) -> float:
    """Evaluate a fitted model at input size ``n``.

    ``slope`` and ``intercept`` are the values returned by the matching
    ``fit_*`` function.
    """
    if not n > 0:
        raise ValueError(f"Incorrect input size: {n}")
    kind = normalize_model(model)
    if kind is Model.LINEAR:
        return intercept + slope * n
    if kind is Model.LOGARITHMIC:
        return intercept + slope * ieee_log(n)
    if kind is Model.POWER:
        return slope * ieee_pow(n, intercept)
    return intercept * ieee_pow(slope, n)
