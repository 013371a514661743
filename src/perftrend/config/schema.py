from __future__ import annotations

from dataclasses import dataclass, field

OUTPUT_FORMATS = ("text", "json", "markdown")


@dataclass(frozen=True)
class PerftrendConfig:
    range_start: int = 1
    range_limit: int = 10_000
    range_multi: int = 8
    sizes: list[int] = field(default_factory=list)
    repeat: int = 1
    warmups: int = 0
    collect_garbage: bool = True
    format: str = "text"
    precision: int = 2
    min_residual: float | None = None
