"""Timing helpers shared by the generic-math benchmarks."""

from __future__ import annotations

import logging
import math
import os
import platform
import time
from typing import Any, Callable

import jax

logger = logging.getLogger(__name__)

AFFINITY_ENV_VAR = "GENERIC_MATH_BENCH_CPU_AFFINITY"


def configure_cpu_affinity_from_env() -> dict[str, Any]:
    """Pin the process to the CPUs named in ``GENERIC_MATH_BENCH_CPU_AFFINITY``.

    Accepts a comma list of CPU ids and ranges (``0,2-3``). Returns what was
    requested and what is active so the JSON output can record it.
    """
    requested = os.environ.get(AFFINITY_ENV_VAR, "").strip()
    info: dict[str, Any] = {"requested": requested or None, "applied": False, "active": None}
    if not requested or not hasattr(os, "sched_setaffinity"):
        return info

    cpus: set[int] = set()
    for token in (part.strip() for part in requested.split(",")):
        if not token:
            continue
        lo, _, hi = token.partition("-")
        first, last = int(lo), int(hi or lo)
        cpus.update(range(min(first, last), max(first, last) + 1))
    if not cpus:
        return info
    try:
        os.sched_setaffinity(0, cpus)
    except OSError as err:
        logger.warning("could not apply cpu affinity %r: %s", requested, err)
        return info
    info["applied"] = True
    info["active"] = sorted(os.sched_getaffinity(0))
    return info


def host_metadata() -> dict[str, Any]:
    from generic_math import config

    return {
        "platform": platform.platform(),
        "python": platform.python_version(),
        "jax": getattr(jax, "__version__", "unknown"),
        "backend": jax.default_backend(),
        "cpu_count": os.cpu_count(),
        "use_jax_jit": config.USE_JAX_JIT,
        "use_float_fast_path": config.USE_FLOAT_FAST_PATH,
    }


def block_until_ready(value: object) -> None:
    if hasattr(value, "block_until_ready"):
        value.block_until_ready()
    elif isinstance(value, (tuple, list)):
        for item in value:
            block_until_ready(item)


def percentile(values: list[float], q: float) -> float:
    ordered = sorted(values)
    pos = (len(ordered) - 1) * q
    lo, hi = math.floor(pos), math.ceil(pos)
    if lo == hi:
        return ordered[lo]
    alpha = pos - lo
    return ordered[lo] * (1.0 - alpha) + ordered[hi] * alpha


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def stddev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    m = mean(values)
    return math.sqrt(sum((v - m) ** 2 for v in values) / (len(values) - 1))


def time_call_ms(fn: Callable[..., object], args: tuple[object, ...]) -> float:
    """Wall time of a single call, in milliseconds."""
    start_ns = time.perf_counter_ns()
    block_until_ready(fn(*args))
    return (time.perf_counter_ns() - start_ns) / 1e6


def calibrate_repeats(
    fn: Callable[..., object],
    args: tuple[object, ...],
    *,
    target_sample_ms: float,
    min_repeats: int,
    max_repeats: int = 200_000,
) -> int:
    trial = max(4, min_repeats // 4)
    start_ns = time.perf_counter_ns()
    for _ in range(trial):
        block_until_ready(fn(*args))
    per_call_ns = max((time.perf_counter_ns() - start_ns) / trial, 100.0)
    wanted = math.ceil(max(target_sample_ms, 0.1) * 1e6 / per_call_ns)
    return max(min_repeats, min(wanted, max_repeats))


def sample_adaptive_ms(
    fn: Callable[..., object],
    args: tuple[object, ...],
    *,
    repeats: int,
    samples: int,
    cv_target_pct: float,
    max_samples: int,
) -> list[float]:
    """Per-call milliseconds, one entry per sample of ``repeats`` calls.

    Keeps sampling past ``samples`` while the coefficient of variation stays
    above ``cv_target_pct``, up to ``max_samples``.
    """
    rows: list[float] = []

    def _once() -> None:
        start_ns = time.perf_counter_ns()
        for _ in range(repeats):
            block_until_ready(fn(*args))
        rows.append((time.perf_counter_ns() - start_ns) / repeats / 1e6)

    for _ in range(samples):
        _once()
    while len(rows) < max_samples:
        m = mean(rows)
        if m <= 0 or stddev(rows) / m * 100.0 <= cv_target_pct:
            break
        _once()
    return rows
