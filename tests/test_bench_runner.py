from __future__ import annotations

from perftrend.bench.runner import BenchCase, _compare_results, _run_simple, synthetic_samples


def test_compare_results_detects_regression() -> None:
    baseline = {"cases": [{"name": "small", "seconds": 1.0}]}
    current = {"cases": [{"name": "small", "seconds": 1.2}]}
    errors = _compare_results(baseline, current, max_regression=0.1)
    assert errors


def test_compare_results_allows_improvement() -> None:
    baseline = {"cases": [{"name": "small", "seconds": 1.0}]}
    current = {"cases": [{"name": "small", "seconds": 0.9}]}
    errors = _compare_results(baseline, current, max_regression=0.1)
    assert not errors


def test_synthetic_samples_follow_power_law() -> None:
    xs, ys = synthetic_samples(BenchCase(name="tiny", points=4, coefficient=2.0, exponent=2.0))
    assert xs == [1.0, 2.0, 3.0, 4.0]
    assert ys == [2.0, 8.0, 18.0, 32.0]


def test_run_simple_reports_each_case() -> None:
    results = _run_simple([BenchCase(name="tiny", points=32)], warmups=0, iterations=1)
    (case,) = results["cases"]
    assert case["name"] == "tiny"
    assert case["best"] == "power"
    assert case["seconds"] >= 0
