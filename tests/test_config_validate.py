from __future__ import annotations

from pathlib import Path

from perftrend.config.templates import CONFIG_PRESETS
from perftrend.config.validate import validate_config_paths, validate_raw_config


def test_validate_unknown_key() -> None:
    errors = validate_raw_config({"unknown": True})
    assert any("Unknown key" in err for err in errors)


def test_validate_range_bounds() -> None:
    errors = validate_raw_config({"range_start": 100, "range_limit": 10, "range_multi": 1})
    assert "range_multi must be at least 2" in errors
    assert "range_limit must be greater than or equal to range_start" in errors


def test_validate_types() -> None:
    errors = validate_raw_config(
        {"repeat": "3", "sizes": [1, "x"], "collect_garbage": 1, "format": "xml", "min_residual": "high"}
    )
    assert "repeat must be an integer" in errors
    assert "sizes must be a list of integers" in errors
    assert "collect_garbage must be a boolean" in errors
    assert any(err.startswith("format must be one of") for err in errors)
    assert "min_residual must be a number" in errors


def test_templates_are_valid(tmp_path: Path) -> None:
    paths = []
    for name, template in CONFIG_PRESETS.items():
        path = tmp_path / f"{name}.yml"
        path.write_text(template, encoding="utf-8")
        paths.append(path)
    assert validate_config_paths(paths) == []


def test_validate_missing_file(tmp_path: Path) -> None:
    errors = validate_config_paths([tmp_path / "nope.yml"])
    assert errors and "file not found" in errors[0]
