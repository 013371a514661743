from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("perftrend")
except PackageNotFoundError:  # pragma: no cover - fallback for editable source trees
    __version__ = "0.1.0"

from perftrend.analyze.models import (  # noqa: E402
    Model,
    fit_at,
    fit_exp,
    fit_exponential,
    fit_linear,
    fit_log,
    fit_logarithmic,
    fit_power,
)
from perftrend.analyze.trend import infer_trend, measure_trend, trend_format  # noqa: E402
from perftrend.bench.sampling import measure_execution_time, size_range  # noqa: E402
from perftrend.util.math import FitResult, fit  # noqa: E402

__all__ = [
    "__version__",
    "FitResult",
    "Model",
    "fit",
    "fit_at",
    "fit_exp",
    "fit_exponential",
    "fit_linear",
    "fit_log",
    "fit_logarithmic",
    "fit_power",
    "infer_trend",
    "measure_execution_time",
    "measure_trend",
    "size_range",
    "trend_format",
]
