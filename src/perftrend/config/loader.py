from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .schema import OUTPUT_FORMATS, PerftrendConfig

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".perftrend.yml"


def _load_raw_config(path: Path) -> dict[str, Any]:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        log.warning("Failed to load %s (%s). Skipping.", path, e)
        return {}


def _get_int_list(raw: dict[str, Any], key: str) -> list[int] | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if not isinstance(v, list):
        return None
    out: list[int] = []
    for item in v:
        try:
            out.append(int(item))
        except (TypeError, ValueError):
            continue
    return out


def _get_optional_int(raw: dict[str, Any], key: str) -> int | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _get_optional_float(raw: dict[str, Any], key: str) -> float | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def _get_bool(raw: dict[str, Any], key: str, default: bool) -> bool:
    if key not in raw:
        return default
    v = raw.get(key)
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        if v.strip().lower() in {"true", "yes", "1", "on"}:
            return True
        if v.strip().lower() in {"false", "no", "0", "off"}:
            return False
    return default


def _get_format(raw: dict[str, Any], default: str) -> str:
    v = raw.get("format")
    if v is None:
        return default
    value = str(v).strip().lower()
    if value == "md":
        value = "markdown"
    if value not in OUTPUT_FORMATS:
        log.warning("Unknown output format %r; using %s.", v, default)
        return default
    return value


def _merge_config(base: PerftrendConfig, raw: dict[str, Any]) -> PerftrendConfig:
    def _int(key: str, current: int) -> int:
        value = _get_optional_int(raw, key)
        return current if value is None else value

    sizes = _get_int_list(raw, "sizes")
    min_residual = _get_optional_float(raw, "min_residual")
    if min_residual is None:
        min_residual = base.min_residual

    return PerftrendConfig(
        range_start=_int("range_start", base.range_start),
        range_limit=_int("range_limit", base.range_limit),
        range_multi=_int("range_multi", base.range_multi),
        sizes=base.sizes if sizes is None else sizes,
        repeat=_int("repeat", base.repeat),
        warmups=_int("warmups", base.warmups),
        collect_garbage=_get_bool(raw, "collect_garbage", base.collect_garbage),
        format=_get_format(raw, base.format),
        precision=_int("precision", base.precision),
        min_residual=min_residual,
    )


def resolve_config_paths(root: Path, config_paths: Iterable[Path] | None) -> list[Path]:
    if config_paths is None:
        return [root / CONFIG_FILENAME]
    resolved: list[Path] = []
    for path in config_paths:
        p = path
        if not p.is_absolute():
            p = root / p
        resolved.append(p)
    return resolved


def load_config(root: Path, config_paths: Iterable[Path] | None = None) -> PerftrendConfig:
    paths = resolve_config_paths(root, config_paths)
    if config_paths is None and not paths[0].exists():
        return PerftrendConfig()

    cfg = PerftrendConfig()
    for path in paths:
        if not path.exists():
            log.warning("Config %s not found; skipping.", path)
            continue
        raw = _load_raw_config(path)
        if not isinstance(raw, dict):
            log.warning("Config %s is not a mapping; skipping.", path)
            continue
        cfg = _merge_config(cfg, raw)
    return cfg
