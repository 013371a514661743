from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .schema import OUTPUT_FORMATS

KNOWN_KEYS = {
    "range_start",
    "range_limit",
    "range_multi",
    "sizes",
    "repeat",
    "warmups",
    "collect_garbage",
    "format",
    "precision",
    "min_residual",
}


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_optional_number(raw: dict[str, Any], key: str, errors: list[str]) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not _is_number(value):
        errors.append(f"{key} must be a number")


def _validate_optional_int(
    raw: dict[str, Any], key: str, errors: list[str], minimum: int | None = None
) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not _is_int(value):
        errors.append(f"{key} must be an integer")
        return
    if minimum is not None and value < minimum:
        errors.append(f"{key} must be at least {minimum}")


def _validate_optional_bool(raw: dict[str, Any], key: str, errors: list[str]) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not _is_bool(value):
        errors.append(f"{key} must be a boolean")


def _validate_optional_str_choice(
    raw: dict[str, Any], key: str, choices: Iterable[str], errors: list[str]
) -> None:
    if key not in raw:
        return
    value = raw.get(key)
    if value is None:
        return
    if not isinstance(value, str):
        errors.append(f"{key} must be a string")
        return
    allowed = set(choices)
    if value.lower() not in allowed:
        errors.append(f"{key} must be one of: {', '.join(sorted(allowed))}")


def _validate_range(raw: dict[str, Any], errors: list[str]) -> None:
    start = raw.get("range_start")
    limit = raw.get("range_limit")
    if _is_int(start) and _is_int(limit) and limit < start:
        errors.append("range_limit must be greater than or equal to range_start")


def validate_raw_config(raw: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    for key in raw.keys():
        if key not in KNOWN_KEYS:
            errors.append(f"Unknown key: {key}")

    _validate_optional_int(raw, "range_start", errors, minimum=1)
    _validate_optional_int(raw, "range_limit", errors, minimum=1)
    _validate_optional_int(raw, "range_multi", errors, minimum=2)
    _validate_optional_int(raw, "repeat", errors, minimum=1)
    _validate_optional_int(raw, "warmups", errors, minimum=0)
    _validate_optional_int(raw, "precision", errors, minimum=0)
    _validate_range(raw, errors)

    if "sizes" in raw and raw.get("sizes") is not None:
        value = raw.get("sizes")
        if not isinstance(value, list) or not all(_is_int(v) for v in value):
            errors.append("sizes must be a list of integers")
        elif any(v <= 0 for v in value):
            errors.append("sizes must contain positive integers")

    _validate_optional_bool(raw, "collect_garbage", errors)
    _validate_optional_str_choice(raw, "format", [*OUTPUT_FORMATS, "md"], errors)
    _validate_optional_number(raw, "min_residual", errors)

    return errors


def validate_config_path(path: Path) -> list[str]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as exc:
        return [f"{path}: failed to read ({exc})"]
    if not isinstance(raw, dict):
        return [f"{path}: config must be a mapping"]
    errors = validate_raw_config(raw)
    return [f"{path}: {err}" for err in errors]


def validate_config_paths(paths: Iterable[Path]) -> list[str]:
    errors: list[str] = []
    for path in paths:
        if not path.exists():
            errors.append(f"{path}: file not found")
            continue
        errors.extend(validate_config_path(path))
    return errors
