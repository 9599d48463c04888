# exactsum

Exactly rounded summation of IEEE 754 double-precision numbers.

Ordinary floating-point addition rounds after every step, so the result
depends on the order of the terms and can lose everything to cancellation:
`sum([1e20, 0.1, -1e20])` is `0.0`. `exactsum` keeps the sum exactly in an
integer superaccumulator and rounds only once at the end, to nearest with
ties to even. The result is the correctly rounded value of the true sum,
whatever the order of the inputs.

## Installing

```
pip install exactsum
```

Python 3.10 or later. No dependencies outside the standard library.

## Accumulators

There are three summers, and they all have the same interface:

- `addv(values)` adds every float of an iterable,
- `add1(value)` adds a single float,
- `compute_round()` returns the correctly rounded sum of everything added so far.

`XsumSmall` (from `exactsum.small`) keeps the sum in a `SmallAccumulator` of
67 chunks, propagating carries as it goes. It suits short inputs.

`XsumLarge` (from `exactsum.large`) adds a `LargeAccumulator` with one chunk
per sign and exponent, which is condensed into a small accumulator when the
sum is rounded. It is built for long inputs.

`XsumAuto` (from `exactsum.auto`) uses one of the two. Pass `kind` as an
`XsumKind` (`XsumKind.SMALL` or `XsumKind.LARGE`, or the strings `"small"` /
`"large"`), or pass `expected_size`, the expected number of terms: fewer than
1000 selects the small accumulator, 1000 or more the large one. With neither,
the small accumulator is used. Giving both, or a negative `expected_size`,
raises `ValueError`. The chosen kind is available as the `kind` attribute.

```python
from exactsum.small import XsumSmall
from exactsum.large import XsumLarge
from exactsum.auto import XsumAuto, XsumKind

values = [1e20, 0.1, -1e20, 1e20, 0.1, -1e20, 1e20, 0.1, -1e20]

small = XsumSmall()
small.addv(values)
print(small.compute_round())   # 0.30000000000000004

large = XsumLarge()
for v in values:
    large.add1(v)
print(large.compute_round())   # 0.30000000000000004

auto = XsumAuto(kind=XsumKind.LARGE)
auto.addv(values)
print(auto.compute_round())    # 0.30000000000000004
```

## Special values

- If any term is a NaN, the result is a NaN. When there are several NaNs, the
  one with the largest payload is returned, with its sign cleared, so the
  order of the terms does not matter.
- Infinities of one sign give that infinity; `+inf` and `-inf` together give NaN.
- A finite sum too large to represent becomes `+inf` or `-inf`.
- The empty sum is `-0.0`. A sum that comes out as zero is `-0.0` only when no
  term had a clear sign bit (for example, only `-0.0` terms); otherwise it is `+0.0`.

## Self-check and benchmark

`exactsum.selfcheck` holds a table of known hard cases in `CASES`.
`same_value(values, expected)` sums the values with all three summers and
returns the three results, raising `CheckFailure` if any differs from
`expected` (the sign of zero included; a NaN result is always accepted).
`run_checks()` runs every case, raising at the first failure, and returns the
number of cases.

`exactsum.benchmark` times `addv` and `add1` for each summer on arrays of
10, 100, 1 000, 10 000 and 100 000 copies of `1.1`. `run_benchmark` times one
summer and one way of adding; `run_all` runs them all. A wrong sum raises
`BenchmarkError`.

## Command

The `exactsum` command prints an example sum from each summer, runs the
self-check (printing the first failure, if any), and then runs the benchmarks:

```
exactsum
exactsum --iterations 100
exactsum --no-benchmark
```

`--iterations N` sets how many sums are timed for each array size (default
10000); `--no-benchmark` skips the timing runs. The command exits with status
1 if a benchmark produces a wrong sum. Run `exactsum --help` for the options.