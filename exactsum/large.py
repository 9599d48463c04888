"""Exact summation of doubles with the large (per-exponent) accumulator."""

from __future__ import annotations

import struct
from collections.abc import Iterable

from .small import (
    EXP_BITS,
    EXP_MASK,
    LOW_EXP_BITS,
    LOW_EXP_MASK,
    LOW_MANTISSA_BITS,
    LOW_MANTISSA_MASK,
    MANTISSA_BITS,
    SmallAccumulator,
    XsumSmall,
)

# Large accumulator format.
LCOUNT_BITS = 64 - MANTISSA_BITS
LCHUNKS = 1 << (EXP_BITS + 1)

_U64 = (1 << 64) - 1
_FULL_COUNT = 1 << LCOUNT_BITS
_SIGN_INDEX_BIT = 1 << EXP_BITS


def _to_uint64(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


class LargeAccumulator:
    """One chunk per sign and exponent, condensed into a small accumulator on demand."""

    __slots__ = ("chunks", "counts", "chunks_used", "used_used", "small")

    def __init__(self) -> None:
        self.chunks: list[int] = [0] * LCHUNKS
        # Adds remaining before a chunk must be transferred; -1 if unused or special.
        self.counts: list[int] = [-1] * LCHUNKS
        self.chunks_used: list[int] = [0] * (LCHUNKS // 64)
        self.used_used = 0
        self.small = SmallAccumulator()

    def add_chunk_to_small(self, ix: int) -> None:
        """Move chunk ``ix`` into the small accumulator and reset it for reuse."""
        count = self.counts[ix]
        if count >= 0:
            small = self.small
            if small.adds_until_propagate == 0:
                small.carry_propagate()

            chunk = self.chunks[ix]
            # Push the summed sign/exponent bits out the top, leaving the mantissas.
            if count > 0:
                chunk = (chunk + ((count * ix) << MANTISSA_BITS)) & _U64

            exp = ix & EXP_MASK
            if exp == 0:
                low_exp, high_exp = 1, 0
            else:
                low_exp, high_exp = exp & LOW_EXP_MASK, exp >> LOW_EXP_BITS

            low_chunk = (chunk << low_exp) & LOW_MANTISSA_MASK
            mid_chunk = chunk >> (LOW_MANTISSA_BITS - low_exp)
            if exp != 0:
                # Add the implicit leading 1 bits of every normalised term.
                mid_chunk += (_FULL_COUNT - count) << (
                    MANTISSA_BITS - LOW_MANTISSA_BITS + low_exp
                )
                mid_chunk &= _U64
            high_chunk = mid_chunk >> LOW_MANTISSA_BITS
            mid_chunk &= LOW_MANTISSA_MASK

            target = small.chunks
            if ix & _SIGN_INDEX_BIT:
                target[high_exp] -= low_chunk
                target[high_exp + 1] -= mid_chunk
                target[high_exp + 2] -= high_chunk
            else:
                target[high_exp] += low_chunk
                target[high_exp + 1] += mid_chunk
                target[high_exp + 2] += high_chunk
            small.adds_until_propagate -= 1

        self.chunks[ix] = 0
        self.counts[ix] = _FULL_COUNT
        self.chunks_used[ix >> 6] |= 1 << (ix & 0x3F)
        self.used_used |= 1 << (ix >> 6)

    def add_value_inf_nan(self, ix: int, uintv: int) -> None:
        """Handle a value whose chunk count ran out: Inf/NaN, a new chunk, or a full one."""
        if ix & EXP_MASK == EXP_MASK:
            self.small.add_inf_nan(uintv)
        else:
            self.add_chunk_to_small(ix)
            self.counts[ix] -= 1
            self.chunks[ix] = (self.chunks[ix] + uintv) & _U64

    def transfer_to_small(self) -> None:
        """Move every chunk in use into the small accumulator."""
        for block, word in enumerate(self.chunks_used):
            if not (self.used_used >> block) & 1:
                continue
            base = block << 6
            while word:
                lowest = word & -word
                word ^= lowest
                ix = base + lowest.bit_length() - 1
                if self.counts[ix] >= 0:
                    self.add_chunk_to_small(ix)


class XsumLarge:
    """Exact sum of doubles, suited to many terms; rounded to nearest, ties to even."""

    def __init__(self) -> None:
        self._acc = LargeAccumulator()

    def addv(self, values: Iterable[float]) -> None:
        """Add every value of an iterable."""
        acc = self._acc
        counts = acc.counts
        chunks = acc.chunks
        small = acc.small
        for value in values:
            small.note_value(value)
            uintv = _to_uint64(value)
            ix = uintv >> MANTISSA_BITS
            count = counts[ix] - 1
            if count < 0:
                acc.add_value_inf_nan(ix, uintv)
            else:
                counts[ix] = count
                chunks[ix] = (chunks[ix] + uintv) & _U64

    def add1(self, value: float) -> None:
        """Add one value."""
        self.addv((value,))

    def compute_round(self) -> float:
        """Return the correctly rounded sum of everything added so far."""
        self._acc.transfer_to_small()
        return XsumSmall(self._acc.small).compute_round()