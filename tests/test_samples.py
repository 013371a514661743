from __future__ import annotations

from pathlib import Path

import pytest

from perftrend.bench.samples import SampleFileError, load_samples, parse_samples


def test_parse_mapping() -> None:
    sizes, times = parse_samples({"sizes": [1, 10], "times": [0.5, "1.5"]})
    assert sizes == [1.0, 10.0]
    assert times == [0.5, 1.5]


def test_parse_pairs() -> None:
    sizes, times = parse_samples([[1, 0.1], (2, 0.2)])
    assert sizes == [1.0, 2.0]
    assert times == [0.1, 0.2]


@pytest.mark.parametrize(
    "raw",
    [
        {"sizes": [1, 2], "times": [1.0]},
        {"sizes": [1, 2]},
        {"sizes": [1, True], "times": [1.0, 2.0]},
        [[1, 2, 3]],
        "not samples",
    ],
)
def test_parse_rejects_bad_input(raw: object) -> None:
    with pytest.raises(SampleFileError):
        parse_samples(raw)


def test_load_json_and_yaml(tmp_path: Path) -> None:
    json_path = tmp_path / "samples.json"
    json_path.write_text('{"sizes": [8, 64], "times": [0.01, 0.08]}', encoding="utf-8")
    yaml_path = tmp_path / "samples.yml"
    yaml_path.write_text("sizes: [8, 64]\ntimes: [0.01, 0.08]\n", encoding="utf-8")
    assert load_samples(json_path) == load_samples(yaml_path) == ([8.0, 64.0], [0.01, 0.08])


def test_load_reports_path(tmp_path: Path) -> None:
    path = tmp_path / "broken.yml"
    path.write_text("sizes: [1]\n", encoding="utf-8")
    with pytest.raises(SampleFileError, match="broken.yml"):
        load_samples(path)
