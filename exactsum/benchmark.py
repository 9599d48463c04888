"""Timing runs of the accumulators over arrays of one repeated value."""

from __future__ import annotations

import functools
import sys
import time
from collections.abc import Callable, Iterable
from typing import Protocol, TextIO

from .auto import XsumAuto, XsumKind
from .large import XsumLarge
from .small import XsumSmall

ELEMENT = 1.1
SIZES = (10, 100, 1_000, 10_000, 100_000)
DEFAULT_ITERATIONS = 10_000


class _Summer(Protocol):
    def addv(self, values: Iterable[float]) -> None: ...

    def add1(self, value: float) -> None: ...

    def compute_round(self) -> float: ...


class BenchmarkError(Exception):
    """Raised when a benchmarked accumulator returns a wrong sum."""


def benchmark_arrays(value: float, sizes: Iterable[int]) -> list[tuple[float, ...]]:
    """Return one tuple per size, each holding ``value`` repeated that many times."""
    return [(value,) * size for size in sizes]


@functools.lru_cache(maxsize=1)
def _default_arrays() -> tuple[tuple[float, ...], ...]:
    return tuple(benchmark_arrays(ELEMENT, SIZES))


def run_benchmark(
    title: str,
    factory: Callable[[], _Summer],
    method: str,
    iterations: int = DEFAULT_ITERATIONS,
    stream: TextIO | None = None,
) -> None:
    """Time ``iterations`` fresh sums of each array, adding with ``addv`` or ``add1``."""
    if method not in ("addv", "add1"):
        raise ValueError(f"method must be 'addv' or 'add1', not {method!r}")
    out = sys.stdout if stream is None else stream
    print(f"### {title} benchmark with {iterations} iteration for each test case", file=out)
    for arr in _default_arrays():
        expected = ELEMENT * len(arr)
        start = time.perf_counter()
        for _ in range(iterations):
            summer = factory()
            if method == "addv":
                summer.addv(arr)
            else:
                for element in arr:
                    summer.add1(element)
            if summer.compute_round() != expected:
                raise BenchmarkError(f"wrong calculation with arr{len(arr)}")
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        print(f"arr with {len(arr):10d} elements: {f'{elapsed_ms}ms':>10}", file=out)
    print(file=out)


def run_all(iterations: int = DEFAULT_ITERATIONS, stream: TextIO | None = None) -> None:
    """Run the benchmarks for every accumulator and both ways of adding."""
    out = sys.stdout if stream is None else stream
    sections = (
        ("XsumSmall", "XsumSmall", XsumSmall),
        ("XsumLarge", "XsumLarge", XsumLarge),
        (
            "XsumAuto(XsumSmall)",
            "XsumAuto(XsumSmall)",
            functools.partial(XsumAuto, XsumKind.SMALL),
        ),
        (
            "XsumAuto(XsumLarge)",
            "XsumAuto(XsumLarge)",
            functools.partial(XsumAuto, XsumKind.LARGE),
        ),
    )
    for heading, name, factory in sections:
        print(f"-------{heading}-------", file=out)
        for method in ("addv", "add1"):
            run_benchmark(f"{name} {method}()", factory, method, iterations, out)