from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from perftrend.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


def _write_samples(tmp_path: Path) -> Path:
    path = tmp_path / "samples.json"
    sizes = [1, 8, 64, 512, 4096]
    times = [3e-7 * n**2 for n in sizes]
    path.write_text(json.dumps({"sizes": sizes, "times": times}), encoding="utf-8")
    return path


def test_cli_runs(tmp_path: Path) -> None:
    samples = _write_samples(tmp_path)
    env = {**os.environ, "PYTHONPATH": os.pathsep.join([str(SRC), os.environ.get("PYTHONPATH", "")])}
    p = subprocess.run(
        [sys.executable, "-m", "perftrend", "fit", str(samples), "--root", str(tmp_path)],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )
    assert p.returncode == 0
    assert "best fit power" in p.stdout


def test_range_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["range", "8", "8192"]) == 0
    assert capsys.readouterr().out.strip() == "8 64 512 4096 8192"


def test_range_command_rejects_bad_multiplier() -> None:
    assert main(["range", "1", "100", "--multi", "1"]) == 1


def test_fit_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    samples = _write_samples(tmp_path)
    assert main(["fit", str(samples), "--format", "json", "--root", str(tmp_path)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["best"] == "power"
    assert list(data["fits"]) == ["exponential", "power", "linear", "logarithmic"]
    assert data["fits"]["power"]["intercept"] == pytest.approx(2.0)


def test_fit_single_model(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    samples = _write_samples(tmp_path)
    rc = main(["fit", str(samples), "--model", "power", "--format", "json", "--root", str(tmp_path)])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["model"] == "power"
    assert data["slope"] == pytest.approx(3e-7)
    assert data["intercept"] == pytest.approx(2.0)


def test_fit_writes_markdown_file(tmp_path: Path) -> None:
    samples = _write_samples(tmp_path)
    out = tmp_path / "out" / "report.md"
    rc = main(["fit", str(samples), "--format", "markdown", "--output", str(out), "--root", str(tmp_path)])
    assert rc == 0
    assert "# perftrend report" in out.read_text(encoding="utf-8")


def test_fit_min_residual_gate(tmp_path: Path) -> None:
    samples = _write_samples(tmp_path)
    (tmp_path / ".perftrend.yml").write_text("min_residual: 1.5\n", encoding="utf-8")
    assert main(["fit", str(samples), "--root", str(tmp_path)]) == 1


def test_fit_bad_samples(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text('{"sizes": [1, 2]}', encoding="utf-8")
    assert main(["fit", str(path), "--root", str(tmp_path)]) == 1


def test_measure_command(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "perftrend_cli_target.py").write_text(
        "def work(n):\n    return sorted(range(n, 0, -1))\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    rc = main(
        [
            "measure",
            "perftrend_cli_target:work",
            "--start",
            "1",
            "--limit",
            "64",
            "--multi",
            "2",
            "--no-gc",
            "--format",
            "json",
        ]
    )
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["target"] == "perftrend_cli_target:work"
    assert data["sizes"] == [1, 2, 4, 8, 16, 32, 64]
    assert len(data["times"]) == 7
    assert set(data["fits"]) == {"exponential", "power", "linear", "logarithmic"}


def test_measure_rejects_bad_target(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["measure", "no_colon_here"]) == 1
    assert main(["measure", "perftrend_missing_module_xyz:work"]) == 1
