"""An exact summer that picks the small or large accumulator."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .large import XsumLarge
from .small import XsumSmall

# Expected input sizes from this on use the large accumulator.
THRESHOLD = 1000


class XsumKind(Enum):
    """Which accumulator an :class:`XsumAuto` uses."""

    SMALL = "small"
    LARGE = "large"


class XsumAuto:
    """Exact summer backed by a small or large accumulator.

    Give either ``kind`` or ``expected_size``; with neither, the small
    accumulator is used.
    """

    def __init__(
        self,
        kind: XsumKind | str | None = None,
        expected_size: int | None = None,
    ) -> None:
        if kind is not None and expected_size is not None:
            raise ValueError("give either kind or expected_size, not both")
        if kind is not None:
            chosen = XsumKind(kind)
        elif expected_size is not None:
            if expected_size < 0:
                raise ValueError("expected_size must not be negative")
            chosen = XsumKind.SMALL if expected_size < THRESHOLD else XsumKind.LARGE
        else:
            chosen = XsumKind.SMALL
        self.kind = chosen
        self._sum: XsumSmall | XsumLarge = (
            XsumSmall() if chosen is XsumKind.SMALL else XsumLarge()
        )

    def addv(self, values: Iterable[float]) -> None:
        """Add every value of an iterable."""
        self._sum.addv(values)

    def add1(self, value: float) -> None:
        """Add one value."""
        self._sum.add1(value)

    def compute_round(self) -> float:
        """Return the correctly rounded sum of everything added so far."""
        return self._sum.compute_round()