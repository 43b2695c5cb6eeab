"""Benchmark first-call synthesis against steady-state calls per numeric type."""

from __future__ import annotations

import argparse
import json
import logging
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from decimal import Decimal
from fractions import Fraction
from pathlib import Path
from typing import Callable

import jax
import jax.numpy as jnp

import generic_math as gm
from _bench_utils import (
    calibrate_repeats,
    configure_cpu_affinity_from_env,
    host_metadata,
    mean as _mean,
    percentile as _percentile,
    sample_adaptive_ms,
    stddev as _stddev,
    time_call_ms,
)


PROFILE_CONFIG: dict[str, dict[str, float | int]] = {
    "quick": {"samples": 3, "target_sample_ms": 10.0, "min_repeats": 8, "cv_target_pct": 25.0, "max_samples": 7},
    "full": {"samples": 7, "target_sample_ms": 20.0, "min_repeats": 12, "cv_target_pct": 18.0, "max_samples": 11},
}

NUMERIC_TYPES: dict[str, Callable[[float], object]] = {
    "int": lambda v: int(v),
    "float": float,
    "fraction": lambda v: Fraction(v).limit_denominator(1000),
    "decimal": lambda v: Decimal(str(v)),
    "jax": lambda v: jnp.asarray(v, dtype=jnp.float32),
}

# Exact types never reach a fixed point; cap their pi iterations.
PI_BUDGET = 20


@dataclass(frozen=True)
class BenchCase:
    numeric: str
    name: str
    build: Callable[[Callable[[float], object]], tuple[Callable[..., object], tuple[object, ...]]]


@dataclass(frozen=True)
class BenchRow:
    numeric: str
    name: str
    status: str
    first_call_ms: float | None
    mean_ms: float | None
    stdev_ms: float | None
    cv_pct: float | None
    p50_ms: float | None
    p95_ms: float | None
    min_ms: float | None
    repeats: int | None
    samples: int | None
    synthesized: int | None
    error: str | None


def _pi_budget() -> Callable[[object], bool]:
    calls = 0

    def stop_when(_estimate: object) -> bool:
        nonlocal calls
        calls += 1
        return calls >= PI_BUDGET

    return stop_when


def _operations() -> list[tuple[str, Callable]]:
    return [
        ("add", lambda make: (gm.add, (make(3), make(4)))),
        ("multiply", lambda make: (gm.multiply, (make(3), make(4)))),
        ("power", lambda make: (gm.power, (make(3), make(5)))),
        ("compare", lambda make: (gm.compare, (make(3), make(4)))),
        ("mean", lambda make: (gm.mean, ([make(v) for v in range(1, 33)],))),
        ("pi", lambda make: (lambda tp: gm.pi(tp, _pi_budget()), (type(make(1)),))),
    ]


def _all_cases(wanted_types: set[str]) -> list[BenchCase]:
    return [
        BenchCase(numeric=numeric, name=name, build=build)
        for numeric in NUMERIC_TYPES
        if numeric in wanted_types
        for name, build in _operations()
    ]


def _run_case(
    case: BenchCase,
    *,
    samples: int,
    target_sample_ms: float,
    min_repeats: int,
    cv_target_pct: float,
    max_samples: int,
) -> BenchRow:
    try:
        fn, args = case.build(NUMERIC_TYPES[case.numeric])
        gm.specialization_cache_stats(reset=True)
        first_ms = time_call_ms(fn, args)
        synthesized = gm.specialization_cache_stats()["synthesized"]

        repeats = calibrate_repeats(fn, args, target_sample_ms=target_sample_ms, min_repeats=min_repeats)
        per_call_ms = sample_adaptive_ms(
            fn,
            args,
            repeats=repeats,
            samples=samples,
            cv_target_pct=cv_target_pct,
            max_samples=max_samples,
        )
    except gm.MathError as err:
        return BenchRow(
            numeric=case.numeric,
            name=case.name,
            status="error",
            first_call_ms=None,
            mean_ms=None,
            stdev_ms=None,
            cv_pct=None,
            p50_ms=None,
            p95_ms=None,
            min_ms=None,
            repeats=None,
            samples=None,
            synthesized=None,
            error=f"{type(err).__name__}: {err}",
        )

    mean_ms = _mean(per_call_ms)
    stdev_ms = _stddev(per_call_ms)
    return BenchRow(
        numeric=case.numeric,
        name=case.name,
        status="ok",
        first_call_ms=first_ms,
        mean_ms=mean_ms,
        stdev_ms=stdev_ms,
        cv_pct=(stdev_ms / mean_ms) * 100.0 if mean_ms > 0 else 0.0,
        p50_ms=_percentile(per_call_ms, 0.50),
        p95_ms=_percentile(per_call_ms, 0.95),
        min_ms=min(per_call_ms),
        repeats=repeats,
        samples=len(per_call_ms),
        synthesized=synthesized,
        error=None,
    )


def _print_summary(rows: list[BenchRow]) -> None:
    print("specialization benchmark summary")
    print("type      case        first(ms)   mean(ms)   p95(ms)  synth  status")
    print("--------  ----------  ---------  ---------  --------  -----  ------")
    for row in rows:
        first_text = "-" if row.first_call_ms is None else f"{row.first_call_ms:9.4f}"
        mean_text = "-" if row.mean_ms is None else f"{row.mean_ms:9.5f}"
        p95_text = "-" if row.p95_ms is None else f"{row.p95_ms:8.5f}"
        synth_text = "-" if row.synthesized is None else str(row.synthesized)
        print(
            f"{row.numeric:8}  {row.name:10}  {first_text:>9}  {mean_text:>9}  {p95_text:>8}  "
            f"{synth_text:>5}  {row.status}"
        )
        if row.error:
            print(f"          {row.error}")
    print()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILE_CONFIG),
        default="quick",
        help="fixed benchmark profile presets",
    )
    parser.add_argument(
        "--types",
        default=",".join(NUMERIC_TYPES),
        help="comma-separated subset of numeric types",
    )
    parser.add_argument("--samples", type=int, default=None, help="timing samples per case")
    parser.add_argument("--target-sample-ms", type=float, default=None, help="target wall time per sample")
    parser.add_argument("--min-repeats", type=int, default=None, help="minimum repeats after calibration")
    parser.add_argument("--cv-target", type=float, default=None, help="adaptive sampling CV target percent")
    parser.add_argument("--max-samples", type=int, default=None, help="adaptive sampling cap")
    parser.add_argument("--verbose", action="store_true", help="log each synthesized specialization")
    parser.add_argument("--json-out", default="", help="optional path for machine-readable output")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")
    affinity_info = configure_cpu_affinity_from_env()

    profile = PROFILE_CONFIG[args.profile]
    samples = int(profile["samples"] if args.samples is None else args.samples)
    target_sample_ms = float(profile["target_sample_ms"] if args.target_sample_ms is None else args.target_sample_ms)
    min_repeats = int(profile["min_repeats"] if args.min_repeats is None else args.min_repeats)
    cv_target_pct = float(profile["cv_target_pct"] if args.cv_target is None else args.cv_target)
    max_samples = max(samples, int(profile["max_samples"] if args.max_samples is None else args.max_samples))

    wanted_types = {part.strip() for part in args.types.split(",") if part.strip()}
    unknown = wanted_types - set(NUMERIC_TYPES)
    if unknown:
        raise SystemExit(f"Unknown types: {sorted(unknown)}")

    print(
        f"profile: {args.profile} (samples={samples}, target_sample_ms={target_sample_ms:.1f}, "
        f"min_repeats={min_repeats}, cv_target={cv_target_pct:.1f}%, max_samples={max_samples})"
    )
    print(f"host: backend={jax.default_backend()}, affinity={affinity_info.get('active')}")
    print()

    started = time.perf_counter()
    rows = [
        _run_case(
            case,
            samples=samples,
            target_sample_ms=target_sample_ms,
            min_repeats=min_repeats,
            cv_target_pct=cv_target_pct,
            max_samples=max_samples,
        )
        for case in _all_cases(wanted_types)
    ]
    print(f"completed {len(rows)} cases in {time.perf_counter() - started:.2f}s")
    print()
    _print_summary(rows)

    if args.json_out:
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "timestamp_utc": datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
            "profile": args.profile,
            "types": sorted(wanted_types),
            "samples": samples,
            "target_sample_ms": target_sample_ms,
            "min_repeats": min_repeats,
            "cv_target_pct": cv_target_pct,
            "max_samples": max_samples,
            "affinity": affinity_info,
            "host": host_metadata(),
            "rows": [asdict(row) for row in rows],
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote JSON: {outpath}")


if __name__ == "__main__":
    main()
