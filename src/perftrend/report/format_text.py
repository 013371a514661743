from __future__ import annotations

from .models import TrendReport


def to_text(report: TrendReport, precision: int = 2) -> str:
    lines: list[str] = []
    header = f"perftrend: best fit {report.best}"
    if report.target:
        header = f"{header} for {report.target}"
    lines.append(f"{header} ({len(report.sizes)} samples)")
    width = max((len(name) for name in report.fits), default=0)
    for name, fit in report.fits.items():
        marker = "*" if name == report.best else " "
        lines.append(
            f"{marker} {name:<{width}}  {fit.trend:<24}  "
            f"a={fit.slope:.{precision}f} b={fit.intercept:.{precision}f} rr={fit.residual:.4f}"
        )
    return "\n".join(lines)
