"""Exact rational scalars.

All scalars are ``sympy.Rational`` values: reduced ``p/q`` with ``q > 0``
and zero stored as ``0/1``. Equality is structural, so ``== 0`` is an exact
test. Nothing here ever produces a float.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple

import sympy as sp

from .errors import ArithmeticOverflowError

ZERO = sp.Integer(0)
ONE = sp.Integer(1)


def as_rational(value) -> sp.Rational:
    """Convert ``value`` to a canonical ``sympy.Rational`` without rounding.

    Accepted: integers (including numpy integers), ``fractions.Fraction``,
    SymPy rationals and strings such as ``"3/4"``, ``"-2"`` or ``"1e-3"``
    (decimal strings are read exactly). Floats are rejected because their
    binary value is rarely the number the caller meant.
    """
    if isinstance(value, sp.Rational):
        return value
    if isinstance(value, bool):
        return sp.Integer(int(value))
    if isinstance(value, numbers.Integral):
        return sp.Integer(int(value))
    if isinstance(value, Fraction):
        return sp.Rational(value.numerator, value.denominator)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("cannot convert an empty string to a rational")
        try:
            r = sp.Rational(text)
        except (TypeError, ValueError, ZeroDivisionError, SyntaxError, sp.SympifyError):
            raise ValueError(f"not an exact rational literal: '{value}'") from None
        if not isinstance(r, sp.Rational):
            raise ValueError(f"not a finite rational: '{value}'")
        return r
    if isinstance(value, sp.Basic):
        if value.is_Rational:
            return value
        raise TypeError(f"expected an exact rational, got SymPy expression {value!r}")
    if isinstance(value, (float, sp.Float)) or isinstance(value, numbers.Real):
        raise TypeError(
            f"refusing to convert inexact value {value!r}; pass an int, Fraction or string"
        )
    raise TypeError(f"cannot convert {type(value).__name__} to a rational")


def bit_length(value: sp.Rational) -> int:
    """Bits needed by the larger of numerator and denominator."""
    return max(int(abs(value.p)).bit_length(), int(value.q).bit_length())


def rational_to_strings(value: sp.Rational) -> Tuple[str, str]:
    """Return ``(numerator, denominator)`` as decimal strings."""
    r = as_rational(value)
    return str(int(r.p)), str(int(r.q))


def format_rational(value: sp.Rational) -> str:
    """``"p/q"``, or ``"p"`` when the denominator is 1."""
    r = as_rational(value)
    if r.q == 1:
        return str(int(r.p))
    return f"{int(r.p)}/{int(r.q)}"


@dataclass(frozen=True)
class MagnitudeGuard:
    """Enforce an upper bound on the size of rational entries.

    ``max_bits=None`` accepts everything.
    """

    max_bits: Optional[int] = None

    def check(self, value: sp.Rational, position: Optional[Tuple[int, int]] = None) -> sp.Rational:
        if self.max_bits is None:
            return value
        bits = bit_length(value)
        if bits > self.max_bits:
            raise ArithmeticOverflowError(bits, self.max_bits, position)
        return value
