"""Exact rational helpers built on :class:`fractions.Fraction`."""

from __future__ import annotations

import math
from fractions import Fraction
from functools import reduce
from typing import Iterable, Sequence

__all__ = ["Fraction", "as_decimal", "to_integers", "gcd_all", "lcm_all"]


def gcd_all(values: Iterable[int]) -> int:
    return reduce(math.gcd, (abs(v) for v in values), 0)


def lcm_all(values: Iterable[int]) -> int:
    return reduce(math.lcm, (abs(v) for v in values), 1)


def to_integers(vector: Sequence[Fraction]) -> list[int]:
    """Scale a rational vector to the smallest integer vector with the same direction.

    Every entry is multiplied by the LCM of the denominators, then the result is
    divided by the GCD of the integers. Signs are preserved.
    """
    fractions = [Fraction(value) for value in vector]
    scale = lcm_all(f.denominator for f in fractions)
    integers = [f.numerator * (scale // f.denominator) for f in fractions]
    divisor = gcd_all(integers)
    if divisor > 1:
        integers = [value // divisor for value in integers]
    return integers


def as_decimal(value: Fraction) -> float:
    """Float view of a fraction for display only."""
    return value.numerator / value.denominator
