"""Exact forward Gaussian elimination over the rationals.

The eliminator turns a matrix into row-echelon form in place and reports the
pivot positions. Pivot choice is purely positional: for each column the
first row at or below the cursor with a nonzero entry wins. Arithmetic is
exact, so entry magnitude plays no role in stability and a positional rule
keeps results reproducible.

Rank deficiency is normal for stoichiometric matrices: zero columns are
skipped and zero rows stay where they end up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import sympy as sp

from .log import get_logger
from .rational import MagnitudeGuard, as_rational

logger = get_logger(__name__)


@dataclass(frozen=True)
class PivotSet:
    """Ordered ``(row, column)`` pivot positions of an echelon matrix."""

    pairs: Tuple[Tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        pairs = tuple((int(r), int(c)) for r, c in self.pairs)
        for (r0, c0), (r1, c1) in zip(pairs, pairs[1:]):
            if r1 <= r0 or c1 <= c0:
                raise ValueError("pivot rows and columns must be strictly increasing")
        object.__setattr__(self, "pairs", pairs)

    @property
    def rows(self) -> Tuple[int, ...]:
        return tuple(r for r, _c in self.pairs)

    @property
    def columns(self) -> Tuple[int, ...]:
        return tuple(c for _r, c in self.pairs)

    @property
    def rank(self) -> int:
        return len(self.pairs)

    def free_columns(self, n_cols: int) -> Tuple[int, ...]:
        """Columns without a pivot, in increasing order."""
        pivot_cols = set(self.columns)
        if pivot_cols and max(pivot_cols) >= n_cols:
            raise ValueError(f"pivot column outside a matrix with {n_cols} columns")
        return tuple(c for c in range(n_cols) if c not in pivot_cols)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


def _require_mutable(matrix: sp.MatrixBase) -> None:
    if not isinstance(matrix, sp.MutableDenseMatrix):
        raise TypeError(
            f"row_echelon works in place and needs a mutable dense matrix, not {type(matrix).__name__}"
        )


def _canonicalize(matrix: sp.MutableDenseMatrix) -> None:
    """Replace every entry by its exact Rational value."""
    for i in range(matrix.rows):
        for j in range(matrix.cols):
            matrix[i, j] = as_rational(matrix[i, j])


def row_echelon(matrix: sp.MutableDenseMatrix, guard: Optional[MagnitudeGuard] = None) -> PivotSet:
    """Reduce ``matrix`` to row-echelon form in place.

    For each column in increasing order the first row at or below the
    current cursor with a nonzero entry is swapped into the cursor row and
    used to clear that column in every row below it. The shape of the
    matrix never changes.

    Parameters
    ----------
    matrix:
        A mutable SymPy matrix with exact rational (or integer) entries.
    guard:
        Optional :class:`MagnitudeGuard`; every newly computed entry is
        checked against it and :class:`ArithmeticOverflowError` aborts the
        reduction.

    Returns
    -------
    PivotSet
        The ``(row, column)`` pivot positions; rows and columns strictly
        increasing.
    """
    _require_mutable(matrix)
    _canonicalize(matrix)
    guard = guard or MagnitudeGuard()

    n_rows, n_cols = matrix.rows, matrix.cols
    pivots: List[Tuple[int, int]] = []
    cursor = 0

    for col in range(n_cols):
        if cursor >= n_rows:
            break

        piv = None
        for r in range(cursor, n_rows):
            if matrix[r, col] != 0:
                piv = r
                break
        if piv is None:
            continue

        if piv != cursor:
            matrix.row_swap(cursor, piv)

        pivot_value = matrix[cursor, col]
        for r in range(cursor + 1, n_rows):
            lead = matrix[r, col]
            if lead == 0:
                continue
            factor = guard.check(lead / pivot_value, (r, col))
            matrix[r, col] = sp.Integer(0)
            for c in range(col + 1, n_cols):
                upper = matrix[cursor, c]
                if upper == 0:
                    continue
                matrix[r, c] = guard.check(matrix[r, c] - factor * upper, (r, c))

        logger.debug("Pivot %d at (%d, %d), swapped from row %d", len(pivots), cursor, col, piv)
        pivots.append((cursor, col))
        cursor += 1

    logger.debug("Elimination finished: %d×%d matrix, rank %d", n_rows, n_cols, len(pivots))
    return PivotSet(tuple(pivots))


def rank(matrix: sp.MatrixBase, guard: Optional[MagnitudeGuard] = None) -> int:
    """Exact rank of ``matrix``; the argument is left untouched."""
    work = sp.Matrix(matrix)
    return row_echelon(work, guard).rank
