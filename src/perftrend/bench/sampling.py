from __future__ import annotations

import gc
import logging
import statistics
import time
from collections.abc import Callable, Iterable

log = logging.getLogger(__name__)

DEFAULT_START = 1
DEFAULT_LIMIT = 10_000
DEFAULT_MULTI = 8


def _check_greater(value: float, minimum: float, strict: bool = False) -> None:
    ok = value > minimum if strict else value >= minimum
    if not ok:
        raise ValueError(f"Range value: {value} needs to be greater than {minimum}")


def size_range(start: int, limit: int, multi: int = DEFAULT_MULTI) -> list[int]:
    """Input sizes spaced by powers of ``multi``.

    >>> size_range(8, 8 << 10)
    [8, 64, 512, 4096, 8192]
    """
    _check_greater(start, 0, strict=True)
    _check_greater(limit, start)
    _check_greater(multi, 2)

    items = [start]
    count = start
    for _ in range(int(limit // multi)):
        count *= multi
        if count >= limit:
            break
        items.append(count)
    if start != limit:
        items.append(limit)
    return items


def measure_execution_time(
    work: Callable[[int], object],
    data: Iterable[int] | None = None,
    repeat: int = 1,
    warmups: int = 0,
    collect_garbage: bool = True,
) -> tuple[list[int], list[float]]:
    """Time ``work(size)`` for every size in ``data``.

    Returns the sizes and the elapsed seconds per size. With ``repeat`` above
    one the median of the repeated runs is recorded.
    """
    if repeat < 1:
        raise ValueError(f"repeat must be at least 1 (got {repeat})")
    if warmups < 0:
        raise ValueError(f"warmups must not be negative (got {warmups})")
    inputs = list(data) if data is not None else size_range(DEFAULT_START, DEFAULT_LIMIT)

    times: list[float] = []
    for size in inputs:
        for _ in range(warmups):
            work(size)
        durations: list[float] = []
        for _ in range(repeat):
            if collect_garbage:
                gc.collect()
            start = time.perf_counter()
            work(size)
            durations.append(time.perf_counter() - start)
        elapsed = statistics.median(durations)
        log.debug("size=%s elapsed=%.6fs (%d run(s))", size, elapsed, repeat)
        times.append(elapsed)
    return inputs, times
