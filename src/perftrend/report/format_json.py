from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from .models import SCHEMA_VERSION, TrendFit, TrendReport


def _float(value: Any) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def to_json(report: TrendReport) -> str:
    return json.dumps(report.to_dict(), indent=2, allow_nan=False)


def write_json(report: TrendReport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(report), encoding="utf-8")


def read_json(path: Path) -> TrendReport:
    raw = json.loads(path.read_text(encoding="utf-8"))
    fits: dict[str, TrendFit] = {}
    raw_fits = raw.get("fits", {})
    if isinstance(raw_fits, dict):
        for name, f in raw_fits.items():
            if not isinstance(f, dict):
                continue
            fits[str(name)] = TrendFit(
                trend=str(f.get("trend", "")),
                slope=_float(f.get("slope")),
                intercept=_float(f.get("intercept")),
                residual=_float(f.get("residual")),
            )
    return TrendReport(
        schema_version=int(raw.get("schema_version", SCHEMA_VERSION)),
        generated_at=str(raw.get("generated_at", "")),
        best=str(raw.get("best", "none")),
        fits=fits,
        sizes=[_float(x) for x in raw.get("sizes", [])],
        times=[_float(t) for t in raw.get("times", [])],
        target=str(raw.get("target", "")),
    )
