from __future__ import annotations

from functools import reduce
from typing import List, Optional, Sequence, Tuple

import sympy as sp

from .elimination import PivotSet, rank, row_echelon
from .errors import InconsistentSystemError
from .log import get_logger
from .rational import ONE, ZERO, MagnitudeGuard, as_rational

logger = get_logger(__name__)

NullSpaceBasis = Tuple[sp.Matrix, ...]


def _check_pivots(reduced: sp.MatrixBase, pivots: PivotSet) -> None:
    for r, c in pivots:
        if r >= reduced.rows or c >= reduced.cols:
            raise ValueError(f"pivot ({r}, {c}) lies outside a {reduced.rows}×{reduced.cols} matrix")
        if reduced[r, c] == 0:
            raise ValueError(f"pivot ({r}, {c}) has a zero entry; matrix is not in echelon form")


def _back_substitute(
    reduced: sp.MatrixBase,
    pivots: PivotSet,
    x: List[sp.Rational],
    n_cols: int,
    rhs_col: Optional[int] = None,
    guard: Optional[MagnitudeGuard] = None,
) -> None:
    """Fill the pivot entries of ``x`` from the last pivot upwards."""
    guard = guard or MagnitudeGuard()
    for r, pc in reversed(pivots.pairs):
        acc = ZERO if rhs_col is None else reduced[r, rhs_col]
        for j in range(pc + 1, n_cols):
            a = reduced[r, j]
            if a != 0 and x[j] != 0:
                acc -= a * x[j]
        x[pc] = guard.check(acc / reduced[r, pc], (r, pc))


def nullspace_basis(
    reduced: sp.MatrixBase,
    pivots: PivotSet,
    guard: Optional[MagnitudeGuard] = None,
) -> NullSpaceBasis:
    """Return one null-space vector per free column of an echelon matrix.

    For free column ``f`` the vector has 1 at ``f``, 0 at every other free
    column, and pivot entries solved by back substitution through the
    echelon rows. The vectors therefore span ``ker(S)`` of the matrix the
    echelon form came from and are linearly independent by construction.

    A matrix of full column rank gives an empty basis: only the zero flux is
    at steady state.
    """
    _check_pivots(reduced, pivots)
    n_cols = reduced.cols
    free = pivots.free_columns(n_cols)

    basis: List[sp.Matrix] = []
    for f in free:
        x: List[sp.Rational] = [ZERO] * n_cols
        x[f] = ONE
        _back_substitute(reduced, pivots, x, n_cols, guard=guard)
        basis.append(sp.Matrix(x))

    logger.debug("Null space of dimension %d (free columns %s)", len(basis), list(free))
    return tuple(basis)


def verify_basis(matrix: sp.MatrixBase, basis: Sequence[sp.MatrixBase]) -> bool:
    """True iff ``matrix * v`` is exactly the zero vector for every ``v``."""
    for v in basis:
        if v.shape != (matrix.cols, 1):
            raise ValueError(f"basis vector has shape {v.shape}; expected ({matrix.cols}, 1)")
        if any(e != 0 for e in matrix * v):
            return False
    return True


def primitive_integer_vector(v: sp.MatrixBase) -> sp.Matrix:
    """Scale a rational vector to the primitive integer vector on the same ray."""
    entries = [as_rational(e) for e in v]
    lcm = reduce(lambda a, b: int(sp.ilcm(a, b)), (int(e.q) for e in entries), 1)
    ints = [int(e.p) * (lcm // int(e.q)) for e in entries]
    g = reduce(lambda a, b: int(sp.igcd(a, b)), (abs(i) for i in ints), 0)
    if g == 0:
        return sp.Matrix(v.shape[0], v.shape[1], [sp.Integer(0)] * len(ints))
    return sp.Matrix(v.shape[0], v.shape[1], [sp.Integer(i // g) for i in ints])


def integer_basis(basis: Sequence[sp.MatrixBase]) -> NullSpaceBasis:
    """Scale every basis vector to a primitive integer vector.

    Scaling is by a positive factor, so each vector keeps its positive entry
    at its free column and the free-column pattern stays intact.
    """
    return tuple(primitive_integer_vector(v) for v in basis)


def basis_matrix(basis: Sequence[sp.MatrixBase], n_cols: int) -> sp.Matrix:
    """Stack basis vectors as columns of an ``n_cols × k`` matrix."""
    if not basis:
        return sp.zeros(n_cols, 0)
    return sp.Matrix.hstack(*[sp.Matrix(v) for v in basis])


def in_span(basis: Sequence[sp.MatrixBase], vector: sp.MatrixBase) -> bool:
    """True iff ``vector`` is an exact rational combination of ``basis``."""
    v = sp.Matrix(vector)
    if not basis:
        return all(e == 0 for e in v)
    B = basis_matrix(basis, v.rows)
    return rank(B) == rank(B.row_join(v))


def particular_solution(
    matrix: sp.MatrixBase,
    accumulation: Sequence,
    guard: Optional[MagnitudeGuard] = None,
) -> sp.Matrix:
    """Return an exact ``x`` with ``matrix * x == accumulation``.

    Free variables are set to zero; adding any null-space vector gives
    another solution.

    Raises
    ------
    InconsistentSystemError
        When the accumulation vector is not in the column space.
    """
    a = [as_rational(e) for e in accumulation]
    if len(a) != matrix.rows:
        raise ValueError(f"accumulation vector has length {len(a)}; expected {matrix.rows}")

    n_cols = matrix.cols
    augmented = sp.Matrix(matrix).row_join(sp.Matrix(a))
    pivots = row_echelon(augmented, guard)
    if n_cols in pivots.columns:
        raise InconsistentSystemError("accumulation vector is not reachable by any flux distribution")

    x: List[sp.Rational] = [ZERO] * n_cols
    _back_substitute(augmented, pivots, x, n_cols, rhs_col=n_cols, guard=guard)
    return sp.Matrix(x)
