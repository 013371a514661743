from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

SCHEMA_VERSION = 1


def _json_float(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _json_values(values: list[float]) -> list[float | None]:
    return [v if not isinstance(v, float) or math.isfinite(v) else None for v in values]


@dataclass(frozen=True)
class TrendFit:
    trend: str
    slope: float
    intercept: float
    residual: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "trend": self.trend,
            "slope": _json_float(self.slope),
            "intercept": _json_float(self.intercept),
            "residual": _json_float(self.residual),
        }


@dataclass(frozen=True)
class TrendReport:
    schema_version: int
    generated_at: str
    best: str
    fits: dict[str, TrendFit]
    sizes: list[float] = field(default_factory=list)
    times: list[float] = field(default_factory=list)
    target: str = ""

    @property
    def best_fit(self) -> TrendFit | None:
        return self.fits.get(self.best)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "generated_at": self.generated_at,
            "target": self.target,
            "best": self.best,
            "fits": {name: fit.to_dict() for name, fit in self.fits.items()},
            "sizes": _json_values(self.sizes),
            "times": _json_values(self.times),
        }
