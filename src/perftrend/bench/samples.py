from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class SampleFileError(ValueError):
    pass


def _to_float(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise SampleFileError(f"{where}: expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise SampleFileError(f"{where}: expected a number, got {value!r}") from None


def parse_samples(raw: Any) -> tuple[list[float], list[float]]:
    """Read samples from ``{"sizes": [...], "times": [...]}`` or a list of
    ``[size, time]`` pairs."""
    if isinstance(raw, dict):
        sizes_raw = raw.get("sizes")
        times_raw = raw.get("times")
        if not isinstance(sizes_raw, list) or not isinstance(times_raw, list):
            raise SampleFileError("samples must define 'sizes' and 'times' lists")
        if len(sizes_raw) != len(times_raw):
            raise SampleFileError(
                f"'sizes' and 'times' differ in length ({len(sizes_raw)} vs {len(times_raw)})"
            )
        sizes = [_to_float(v, f"sizes[{i}]") for i, v in enumerate(sizes_raw)]
        times = [_to_float(v, f"times[{i}]") for i, v in enumerate(times_raw)]
        return sizes, times
    if isinstance(raw, list):
        sizes = []
        times = []
        for idx, item in enumerate(raw):
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise SampleFileError(f"samples[{idx}] must be a [size, time] pair")
            sizes.append(_to_float(item[0], f"samples[{idx}][0]"))
            times.append(_to_float(item[1], f"samples[{idx}][1]"))
        return sizes, times
    raise SampleFileError("samples must be a mapping or a list of pairs")


def load_samples(path: Path) -> tuple[list[float], list[float]]:
    # YAML is a superset of JSON, so one loader covers both.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise SampleFileError(f"{path}: failed to read ({exc})") from exc
    try:
        return parse_samples(raw)
    except SampleFileError as exc:
        raise SampleFileError(f"{path}: {exc}") from None
