from __future__ import annotations

import time
from collections.abc import Callable, Iterable

from perftrend.analyze.models import Model, fit_model, normalize_model
from perftrend.bench.sampling import measure_execution_time
from perftrend.report.models import SCHEMA_VERSION, TrendFit, TrendReport

# Evaluation order decides ties: the earlier model keeps the lead.
FIT_ORDER: tuple[Model, ...] = (
    Model.EXPONENTIAL,
    Model.POWER,
    Model.LINEAR,
    Model.LOGARITHMIC,
)

NO_TREND = "none"

_TREND_FORMATS: dict[Model, str] = {
    Model.LINEAR: "%.2f*n + %.2f",
    Model.LOGARITHMIC: "%.2f*ln(x) + %.2f",
    Model.POWER: "%.2fn^%.2f",
    Model.EXPONENTIAL: "%.2f * %.2f^n",
}


def trend_format(model: Model | str) -> str:
    return _TREND_FORMATS[normalize_model(model)]


def infer_trend(xs: Iterable[float], ys: Iterable[float]) -> tuple[str, dict[str, TrendFit]]:
    """Fit every model to the samples and pick the best one.

    The best model is the one with the strictly highest residual (r squared),
    starting from ``"none"`` at zero. Models whose fit is undefined for the
    data end up with a ``nan`` residual and never win the comparison.
    """
    xs_list = list(xs)
    ys_list = list(ys)
    best_fit = NO_TREND
    best_residual = 0.0
    fitted: dict[str, TrendFit] = {}
    for model in FIT_ORDER:
        a, b, rr = fit_model(model, xs_list, ys_list)
        fitted[model.value] = TrendFit(
            trend=trend_format(model) % (a, b),
            slope=a,
            intercept=b,
            residual=rr,
        )
        if rr > best_residual:
            best_residual = rr
            best_fit = model.value
    return best_fit, fitted


def build_report(
    sizes: Iterable[float],
    times: Iterable[float],
    target: str = "",
) -> TrendReport:
    sizes_list = list(sizes)
    times_list = list(times)
    best, fits = infer_trend(sizes_list, times_list)
    return TrendReport(
        schema_version=SCHEMA_VERSION,
        generated_at=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        best=best,
        fits=fits,
        sizes=sizes_list,
        times=times_list,
        target=target,
    )


def measure_trend(
    work: Callable[[int], object],
    data: Iterable[int] | None = None,
    repeat: int = 1,
    warmups: int = 0,
    collect_garbage: bool = True,
    target: str = "",
) -> TrendReport:
    """Time ``work`` at each input size and infer its growth trend."""
    sizes, times = measure_execution_time(
        work,
        data=data,
        repeat=repeat,
        warmups=warmups,
        collect_garbage=collect_garbage,
    )
    return build_report(sizes, times, target=target)
