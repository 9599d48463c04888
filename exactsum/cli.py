"""Command line: an example sum, the known-case checks, and the benchmarks."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .auto import XsumAuto
from .benchmark import DEFAULT_ITERATIONS, BenchmarkError, run_all
from .large import XsumLarge
from .selfcheck import CheckFailure, run_checks
from .small import XsumSmall

EXAMPLE = (1e20, 0.1, -1e20, 1e20, 0.1, -1e20, 1e20, 0.1, -1e20)


def _parse(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="exactsum",
        description="Show an exact sum, run the known-case checks and time the accumulators.",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=DEFAULT_ITERATIONS,
        help="sums to time for each array size (default: %(default)s)",
    )
    parser.add_argument(
        "--no-benchmark",
        action="store_true",
        help="skip the timing runs",
    )
    args = parser.parse_args(argv)
    if args.iterations < 0:
        parser.error("--iterations must not be negative")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the exit status."""
    args = _parse(argv)

    for name, summer in (("XsumSmall", XsumSmall()), ("XsumLarge", XsumLarge()), ("XsumAuto", XsumAuto())):
        summer.addv(EXAMPLE)
        print(f"{name}: {summer.compute_round():g}")

    try:
        run_checks()
    except CheckFailure as failure:
        print(failure)

    if not args.no_benchmark:
        try:
            run_all(args.iterations)
        except BenchmarkError as error:
            print(error)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())