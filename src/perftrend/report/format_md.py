from __future__ import annotations

from .models import TrendReport


def _num(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def to_markdown(report: TrendReport, precision: int = 2) -> str:
    lines: list[str] = []
    lines.append("# perftrend report")
    lines.append("")
    lines.append(f"- Generated: `{report.generated_at}`")
    if report.target:
        lines.append(f"- Target: `{report.target}`")
    lines.append(f"- Samples: `{len(report.sizes)}`")
    lines.append(f"- Best fit: `{report.best}`")
    lines.append(f"- Schema: `v{report.schema_version}`")
    lines.append("")

    lines.append("## Fits")
    lines.append("")
    lines.append("| Model | Trend | Slope | Intercept | R² |")
    lines.append("|---|---|---:|---:|---:|")
    for name, fit in report.fits.items():
        marker = " (best)" if name == report.best else ""
        lines.append(
            f"| {name}{marker} | `{fit.trend}` | {_num(fit.slope, precision)} | "
            f"{_num(fit.intercept, precision)} | {_num(fit.residual, 4)} |"
        )
    lines.append("")

    if report.sizes:
        lines.append("## Samples")
        lines.append("")
        lines.append("| Size | Seconds |")
        lines.append("|---:|---:|")
        for size, seconds in zip(report.sizes, report.times):
            lines.append(f"| {size:g} | {seconds:.6f} |")
        lines.append("")
    return "\n".join(lines)
