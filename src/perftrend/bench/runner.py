from __future__ import annotations

import argparse
import json
import platform
import statistics
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from perftrend.analyze.trend import infer_trend


@dataclass(frozen=True)
class BenchCase:
    name: str
    points: int
    coefficient: float = 2.5e-6
    exponent: float = 1.5


def _default_cases() -> list[BenchCase]:
    return [
        BenchCase(name="small", points=64),
        BenchCase(name="medium", points=4_096),
        BenchCase(name="large", points=65_536),
    ]


def synthetic_samples(case: BenchCase) -> tuple[list[float], list[float]]:
    xs = [float(i) for i in range(1, case.points + 1)]
    ys = [case.coefficient * x**case.exponent for x in xs]
    return xs, ys


def _run_infer(xs: list[float], ys: list[float]) -> str:
    best, _ = infer_trend(xs, ys)
    return best


def _measure_simple(func: Callable[[], str], warmups: int, iterations: int) -> list[float]:
    for _ in range(max(0, warmups)):
        func()
    samples: list[float] = []
    for _ in range(max(1, iterations)):
        start = time.perf_counter()
        func()
        samples.append(time.perf_counter() - start)
    return samples


def _run_simple(
    cases: list[BenchCase],
    warmups: int,
    iterations: int,
) -> dict[str, Any]:
    case_results: list[dict[str, Any]] = []
    results: dict[str, Any] = {
        "schema_version": 1,
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "cases": case_results,
    }

    for case in cases:
        xs, ys = synthetic_samples(case)

        def run_case(local_xs: list[float] = xs, local_ys: list[float] = ys) -> str:
            return _run_infer(local_xs, local_ys)

        samples = _measure_simple(run_case, warmups=warmups, iterations=iterations)
        case_results.append(
            {
                "name": case.name,
                "points": case.points,
                "best": run_case(),
                "seconds": statistics.median(samples),
                "samples": samples,
                "iterations": max(1, iterations),
            }
        )
    return results


def _load_results(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def _compare_results(
    baseline: dict[str, Any],
    current: dict[str, Any],
    max_regression: float,
) -> list[str]:
    base_cases = {
        case.get("name"): case
        for case in baseline.get("cases", [])
        if isinstance(case, dict)
    }
    errors: list[str] = []
    for case in current.get("cases", []):
        if not isinstance(case, dict):
            continue
        name = case.get("name")
        base = base_cases.get(name)
        if not base:
            continue
        base_time = float(base.get("seconds", 0.0))
        head_time = float(case.get("seconds", 0.0))
        if base_time <= 0:
            continue
        ratio = head_time / base_time
        if ratio > 1.0 + max_regression:
            pct = (ratio - 1.0) * 100.0
            errors.append(f"{name}: {pct:.1f}% slower ({head_time:.4f}s vs {base_time:.4f}s)")
    return errors


def _filter_cases(cases: list[BenchCase], names: list[str] | None) -> list[BenchCase]:
    if not names:
        return cases
    selected = set(names)
    return [case for case in cases if case.name in selected]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="perftrend-bench", description="perftrend fitting benchmark")
    parser.add_argument("--engine", choices=["simple", "pyperf"], default="simple")
    parser.add_argument("--case", action="append", default=None, help="Run only these case names")
    parser.add_argument("--iterations", type=int, default=5, help="Timing iterations per case")
    parser.add_argument("--warmups", type=int, default=2, help="Warmup runs per case")
    parser.add_argument("--json", default=None, help="Output JSON path (simple engine only)")
    parser.add_argument("--baseline", default=None, help="Baseline JSON to compare against")
    parser.add_argument(
        "--max-regression",
        type=float,
        default=0.10,
        help="Max allowed slowdown vs baseline (default: 0.10 = 10%%)",
    )

    args = parser.parse_args(argv)
    cases = _filter_cases(_default_cases(), args.case)

    if args.engine == "pyperf":
        try:
            import pyperf  # type: ignore
        except ImportError:
            parser.error("pyperf not installed. Use --engine simple or install perftrend[bench].")
        if args.baseline:
            parser.error("--baseline is only supported with --engine simple")
        if args.json:
            parser.error("--json is only supported with --engine simple")
        runner = pyperf.Runner()
        for case in cases:
            xs, ys = synthetic_samples(case)
            runner.bench_func(f"perftrend.{case.name}", _run_infer, xs, ys)
        return 0

    results = _run_simple(cases, warmups=args.warmups, iterations=args.iterations)
    output_path = Path(args.json or "out/perftrend.bench.json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(results, indent=2), encoding="utf-8")

    if args.baseline:
        baseline = _load_results(Path(args.baseline))
        errors = _compare_results(baseline, results, max_regression=args.max_regression)
        if errors:
            for error in errors:
                print(f"Benchmark regression: {error}")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
