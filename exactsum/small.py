"""Exact summation of doubles with the small (carry-propagating) accumulator."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable

# Floating-point format.
MANTISSA_BITS = 52
EXP_BITS = 11
MANTISSA_MASK = (1 << MANTISSA_BITS) - 1
EXP_MASK = (1 << EXP_BITS) - 1
EXP_BIAS = (1 << (EXP_BITS - 1)) - 1
SIGN_BIT = MANTISSA_BITS + EXP_BITS
SIGN_MASK = 1 << SIGN_BIT

# Small accumulator format.
SCHUNK_BITS = 64
LOW_EXP_BITS = 5
LOW_EXP_MASK = (1 << LOW_EXP_BITS) - 1
HIGH_EXP_BITS = EXP_BITS - LOW_EXP_BITS
SCHUNKS = (1 << HIGH_EXP_BITS) + 3
LOW_MANTISSA_BITS = 1 << LOW_EXP_BITS
LOW_MANTISSA_MASK = (1 << LOW_MANTISSA_BITS) - 1
SMALL_CARRY_BITS = (SCHUNK_BITS - 1) - MANTISSA_BITS
SMALL_CARRY_TERMS = (1 << SMALL_CARRY_BITS) - 1

_U64 = (1 << 64) - 1
_OVERFLOW_NAN = (EXP_MASK << MANTISSA_BITS) | MANTISSA_MASK


def _to_int64(value: float) -> int:
    return struct.unpack("<q", struct.pack("<d", value))[0]


def _to_float(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _U64))[0]


def _signed(bits: int) -> int:
    bits &= _U64
    return bits - (1 << 64) if bits >> 63 else bits


class SmallAccumulator:
    """Chunks of 32-bit mantissa pieces plus Inf/NaN flags, holding an exact sum."""

    __slots__ = ("chunks", "adds_until_propagate", "inf", "nan", "size_count", "has_positive")

    def __init__(self) -> None:
        self.chunks: list[int] = [0] * SCHUNKS
        self.adds_until_propagate = SMALL_CARRY_TERMS
        self.inf = 0
        self.nan = 0
        self.size_count = 0
        self.has_positive = False

    def _copy(self) -> SmallAccumulator:
        other = SmallAccumulator()
        other.chunks = list(self.chunks)
        other.adds_until_propagate = self.adds_until_propagate
        other.inf = self.inf
        other.nan = self.nan
        other.size_count = self.size_count
        other.has_positive = self.has_positive
        return other

    def add_inf_nan(self, ivalue: int) -> None:
        """Record an Inf or NaN given by its 64-bit pattern."""
        ivalue = _signed(ivalue)
        mantissa = ivalue & MANTISSA_MASK
        if mantissa == 0:
            if self.inf == 0:
                self.inf = ivalue
            elif self.inf != ivalue:
                value = _to_float(ivalue)
                self.inf = _to_int64(value - value)
        elif (self.nan & MANTISSA_MASK) <= mantissa:
            # The NaN with the larger payload wins, with its sign cleared.
            self.nan = ivalue & (_U64 >> 1)

    def carry_propagate(self) -> int:
        """Normalise the chunks and return the index of the uppermost non-zero one."""
        chunks = self.chunks
        u = SCHUNKS - 1
        while chunks[u] == 0:
            if u == 0:
                self.adds_until_propagate = SMALL_CARRY_TERMS - 1
                return 0
            u -= 1

        i = 0
        uix = -1
        while i <= u:
            while i <= u and chunks[i] == 0:
                i += 1
            if i > u:
                break
            c = chunks[i]
            chigh = c >> LOW_MANTISSA_BITS
            if chigh == 0:
                uix = i
                i += 1
                continue
            if u == i:
                if chigh == -1:
                    uix = i
                    break
                u = i + 1
            clow = c & LOW_MANTISSA_MASK
            if clow != 0:
                uix = i
            chunks[i] = clow
            if i + 1 >= SCHUNKS:
                self.add_inf_nan(_OVERFLOW_NAN)
                u = i
            else:
                chunks[i + 1] += chigh
            i += 1

        self.adds_until_propagate = SMALL_CARRY_TERMS - 1
        if uix < 0:
            return 0

        while chunks[uix] == -1 and uix > 0:
            chunks[uix - 1] -= 1 << LOW_MANTISSA_BITS
            chunks[uix] = 0
            uix -= 1
        return uix

    def add_no_carry(self, value: float) -> None:
        """Add one double, assuming no carry propagation is needed first."""
        ivalue = _to_int64(value)
        exp = (ivalue >> MANTISSA_BITS) & EXP_MASK
        mantissa = ivalue & MANTISSA_MASK
        high_exp = exp >> LOW_EXP_BITS
        low_exp = exp & LOW_EXP_MASK

        if exp == 0:
            if mantissa == 0:
                return
            low_exp = 1
        elif exp == EXP_MASK:
            self.add_inf_nan(ivalue)
            return
        else:
            mantissa |= 1 << MANTISSA_BITS

        low = (mantissa << low_exp) & LOW_MANTISSA_MASK
        high = mantissa >> (LOW_MANTISSA_BITS - low_exp)
        if ivalue < 0:
            self.chunks[high_exp] -= low
            self.chunks[high_exp + 1] -= high
        else:
            self.chunks[high_exp] += low
            self.chunks[high_exp + 1] += high

    def note_value(self, value: float) -> None:
        """Count an added value and remember whether any was non-negative."""
        self.size_count += 1
        self.has_positive = self.has_positive or math.copysign(1.0, value) > 0


class XsumSmall:
    """Exact sum of doubles, rounded to nearest with ties to even."""

    def __init__(self, accumulator: SmallAccumulator | None = None) -> None:
        self._acc = SmallAccumulator() if accumulator is None else accumulator._copy()

    def addv(self, values: Iterable[float]) -> None:
        """Add every value of an iterable."""
        for value in values:
            self.add1(value)

    def add1(self, value: float) -> None:
        """Add one value."""
        acc = self._acc
        acc.note_value(value)
        if acc.adds_until_propagate == 0:
            acc.carry_propagate()
        acc.add_no_carry(value)
        acc.adds_until_propagate -= 1

    def compute_round(self) -> float:
        """Return the correctly rounded sum of everything added so far."""
        acc = self._acc
        if acc.nan != 0:
            return _to_float(acc.nan)
        if acc.inf != 0:
            return _to_float(acc.inf)
        if acc.size_count == 0:
            return -0.0

        i = acc.carry_propagate()
        chunks = acc.chunks
        ivalue = chunks[i]

        if i <= 1:
            if ivalue == 0:
                return 0.0 if acc.has_positive else -0.0
            if i == 0:
                intv = abs(ivalue) >> 1
                if ivalue < 0:
                    intv |= SIGN_MASK
                return _to_float(intv)
            intv = ivalue * (1 << (LOW_MANTISSA_BITS - 1)) + (chunks[0] >> 1)
            if intv < 0:
                if intv > -(1 << MANTISSA_BITS):
                    return _to_float((-intv) | SIGN_MASK)
            elif intv < 1 << MANTISSA_BITS:
                return _to_float(intv)

        e = (_to_int64(float(ivalue)) >> MANTISSA_BITS) & EXP_MASK
        more = 2 + MANTISSA_BITS + EXP_BIAS - e

        ivalue *= 1 << more
        j = i - 1
        lower = chunks[j]
        if more >= LOW_MANTISSA_BITS:
            more -= LOW_MANTISSA_BITS
            ivalue += lower << more
            j -= 1
            lower = chunks[j] if j >= 0 else 0
        ivalue += lower >> (LOW_MANTISSA_BITS - more)
        lower &= (1 << (LOW_MANTISSA_BITS - more)) - 1

        def lower_nonzero() -> bool:
            if lower != 0:
                return True
            return any(chunks[k] != 0 for k in range(j - 1, -1, -1))

        if ivalue >= 0:
            sign = 0
            if ivalue & 2 == 0:
                round_away = False
            elif ivalue & 1 or ivalue & 4:
                round_away = True
            else:
                round_away = lower_nonzero()
        else:
            if (-ivalue) & (1 << (MANTISSA_BITS + 2)) == 0:
                pos = 1 << (LOW_MANTISSA_BITS - 1 - more)
                ivalue *= 2
                if lower & pos:
                    ivalue += 1
                    lower &= ~pos
                e -= 1
            sign = SIGN_MASK
            ivalue = -ivalue
            extra = ivalue & 3
            if extra == 3:
                round_away = True
            elif extra <= 1 or ivalue & 4 == 0:
                round_away = False
            else:
                round_away = not lower_nonzero()

        if round_away:
            ivalue += 4
            if ivalue & (1 << (MANTISSA_BITS + 3)):
                ivalue >>= 1
                e += 1

        ivalue >>= 2
        e += (i << LOW_EXP_BITS) - EXP_BIAS - MANTISSA_BITS

        if e >= EXP_MASK:
            return _to_float(sign | (EXP_MASK << MANTISSA_BITS))
        return _to_float(sign + (e << MANTISSA_BITS) + (ivalue & MANTISSA_MASK))