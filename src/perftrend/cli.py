from __future__ import annotations

import argparse
import dataclasses
import importlib
import json
import logging
import math
import sys
from collections.abc import Callable
from pathlib import Path

import yaml

from perftrend import __version__
from perftrend.analyze.models import Model, fit_model
from perftrend.analyze.trend import build_report, measure_trend
from perftrend.bench.sampling import size_range
from perftrend.bench.samples import SampleFileError, load_samples
from perftrend.config.loader import CONFIG_FILENAME, load_config, resolve_config_paths
from perftrend.config.schema import OUTPUT_FORMATS, PerftrendConfig
from perftrend.config.templates import CONFIG_PRESETS
from perftrend.config.validate import validate_config_paths
from perftrend.report.format_json import to_json
from perftrend.report.format_md import to_markdown
from perftrend.report.format_text import to_text
from perftrend.report.models import TrendReport
from perftrend.util.logging import setup_logging

log = logging.getLogger(__name__)


def _load_cli_config(args: argparse.Namespace) -> PerftrendConfig:
    root = Path(getattr(args, "root", ".") or ".").resolve()
    config_paths = [Path(p) for p in args.config] if getattr(args, "config", None) else None
    return load_config(root, config_paths)


def _render(report: TrendReport, fmt: str, precision: int) -> str:
    if fmt == "json":
        return to_json(report)
    if fmt == "markdown":
        return to_markdown(report, precision=precision)
    return to_text(report, precision=precision)


def _emit(text: str, output: str | None) -> None:
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        log.info("Wrote report to %s", out_path)
    else:
        print(text)


def _check_min_residual(report: TrendReport, min_residual: float | None) -> int:
    if min_residual is None:
        return 0
    best = report.best_fit
    residual = best.residual if best is not None else 0.0
    if not residual >= min_residual:
        log.error(
            "Best fit %s explains %.4f of variance, below min_residual %.4f",
            report.best,
            residual,
            min_residual,
        )
        return 1
    return 0


def _resolve_target(spec: str) -> Callable[[int], object]:
    module_name, sep, qualname = spec.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"target must look like 'module:function' (got {spec!r})")
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(module_name)
    obj: object = module
    for part in qualname.split("."):
        if not hasattr(obj, part):
            raise ValueError(f"{qualname!r} not found in module {module_name!r}")
        obj = getattr(obj, part)
    if not callable(obj):
        raise ValueError(f"{spec!r} is not callable")
    return obj


def cmd_range(args: argparse.Namespace) -> int:
    try:
        sizes = size_range(args.start, args.limit, multi=args.multi)
    except ValueError as exc:
        log.error("%s", exc)
        return 1
    print(" ".join(str(size) for size in sizes))
    return 0


def cmd_fit(args: argparse.Namespace) -> int:
    cfg = _load_cli_config(args)
    try:
        sizes, times = load_samples(Path(args.samples))
    except SampleFileError as exc:
        log.error("%s", exc)
        return 1
    precision = args.precision if args.precision is not None else cfg.precision
    fmt = args.format or cfg.format

    if args.model:
        slope, intercept, rr = fit_model(args.model, sizes, times)
        if fmt == "json":
            text = _model_json(args.model, slope, intercept, rr)
        else:
            text = (
                f"{args.model}: a={slope:.{precision}f} b={intercept:.{precision}f} rr={rr:.4f}"
            )
        _emit(text, args.output)
        return 0

    report = build_report(sizes, times, target=str(args.samples))
    _emit(_render(report, fmt, precision), args.output)
    return _check_min_residual(report, cfg.min_residual)


def _model_json(model: str, slope: float, intercept: float, rr: float) -> str:
    def _val(value: float) -> float | None:
        return value if math.isfinite(value) else None

    return json.dumps(
        {"model": model, "slope": _val(slope), "intercept": _val(intercept), "residual": _val(rr)},
        indent=2,
    )


def cmd_measure(args: argparse.Namespace) -> int:
    cfg = _load_cli_config(args)
    start = args.start if args.start is not None else cfg.range_start
    limit = args.limit if args.limit is not None else cfg.range_limit
    multi = args.multi if args.multi is not None else cfg.range_multi
    repeat = args.repeat if args.repeat is not None else cfg.repeat
    warmups = args.warmups if args.warmups is not None else cfg.warmups
    precision = args.precision if args.precision is not None else cfg.precision
    fmt = args.format or cfg.format

    try:
        work = _resolve_target(args.target)
    except (ImportError, ValueError) as exc:
        log.error("Cannot load target %s: %s", args.target, exc)
        return 1

    try:
        if cfg.sizes and args.start is None and args.limit is None:
            data = list(cfg.sizes)
        else:
            data = size_range(start, limit, multi=multi)
        log.info("Measuring %s over %d sizes", args.target, len(data))
        report = measure_trend(
            work,
            data=data,
            repeat=repeat,
            warmups=warmups,
            collect_garbage=cfg.collect_garbage and not args.no_gc,
            target=args.target,
        )
    except ValueError as exc:
        log.error("%s", exc)
        return 1

    _emit(_render(report, fmt, precision), args.output)
    return _check_min_residual(report, cfg.min_residual)


def cmd_init(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    target = Path(args.output) if args.output else root / CONFIG_FILENAME
    if not target.is_absolute():
        target = root / target
    preset = str(args.preset or "full").lower()
    template = CONFIG_PRESETS.get(preset, CONFIG_PRESETS["full"])
    if target.exists() and not args.force:
        log.error("Config %s already exists. Use --force to overwrite.", target)
        return 1
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(template, encoding="utf-8")
    log.info("Wrote config to %s", target)
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = load_config(root, config_paths)
    text = yaml.safe_dump(dataclasses.asdict(cfg), sort_keys=False)
    if args.output:
        out_path = Path(args.output)
        if not out_path.is_absolute():
            out_path = root / out_path
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    else:
        print(text)
    return 0


def cmd_config_validate(args: argparse.Namespace) -> int:
    root = Path(args.path).resolve()
    config_paths = resolve_config_paths(root, [Path(p) for p in args.config] if args.config else None)
    if not args.config and not config_paths[0].exists():
        log.error("Config %s not found.", config_paths[0])
        return 1
    errors = validate_config_paths(config_paths)
    if errors:
        for err in errors:
            log.error("%s", err)
        return 1
    log.info("Config valid.")
    return 0


def _add_config_arg(a: argparse.ArgumentParser) -> None:
    a.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative to --root or absolute)",
    )
    a.add_argument("--root", default=".", help=f"Directory holding {CONFIG_FILENAME} (default: .)")


def _add_output_args(a: argparse.ArgumentParser) -> None:
    a.add_argument("--format", choices=list(OUTPUT_FORMATS), default=None, help="Report format")
    a.add_argument("--precision", type=int, default=None, help="Decimals for fitted parameters")
    a.add_argument("--output", default=None, help="Write report to path instead of stdout")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="perftrend", description="perftrend  Infer growth trends from timings")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("range", help="Print input sizes spaced by powers")
    r.add_argument("start", type=int)
    r.add_argument("limit", type=int)
    r.add_argument("--multi", type=int, default=8, help="Multiplier between sizes (default: 8)")
    r.set_defaults(func=cmd_range)

    f = sub.add_parser("fit", help="Fit models to recorded samples")
    f.add_argument("samples", help="JSON or YAML file with 'sizes' and 'times'")
    f.add_argument(
        "--model",
        choices=[m.value for m in Model],
        default=None,
        help="Report only this model's parameters",
    )
    _add_output_args(f)
    _add_config_arg(f)
    f.set_defaults(func=cmd_fit)

    m = sub.add_parser("measure", help="Time a callable and infer its trend")
    m.add_argument("target", help="Callable as module:function, called with one input size")
    m.add_argument("--start", type=int, default=None, help="First input size")
    m.add_argument("--limit", type=int, default=None, help="Last input size")
    m.add_argument("--multi", type=int, default=None, help="Multiplier between sizes")
    m.add_argument("--repeat", type=int, default=None, help="Timed runs per size (median is kept)")
    m.add_argument("--warmups", type=int, default=None, help="Untimed runs per size")
    m.add_argument("--no-gc", action="store_true", help="Do not collect garbage before each run")
    _add_output_args(m)
    _add_config_arg(m)
    m.set_defaults(func=cmd_measure)

    c = sub.add_parser("config", help="Config utilities")
    c_sub = c.add_subparsers(dest="config_cmd", required=True)
    c_show = c_sub.add_parser("show", help="Show merged config")
    c_show.add_argument("path", nargs="?", default=".", help="Project root (default: .)")
    c_show.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative or absolute)",
    )
    c_show.add_argument("--output", default=None, help="Write output to path instead of stdout")
    c_show.set_defaults(func=cmd_config_show)

    c_validate = c_sub.add_parser("validate", help="Validate config file(s)")
    c_validate.add_argument("path", nargs="?", default=".", help="Project root (default: .)")
    c_validate.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, relative or absolute)",
    )
    c_validate.set_defaults(func=cmd_config_validate)

    i = sub.add_parser("init", help="Create a perftrend configuration file")
    i.add_argument("path", nargs="?", default=".", help="Project root (default: .)")
    i.add_argument("--output", default=None, help=f"Output path (default: {CONFIG_FILENAME})")
    i.add_argument(
        "--preset",
        default="full",
        choices=sorted(CONFIG_PRESETS.keys()),
        help="Template preset (default: full)",
    )
    i.add_argument("--force", action="store_true", help="Overwrite existing config if present")
    i.set_defaults(func=cmd_init)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))
    return int(args.func(args))
