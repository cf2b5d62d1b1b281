import pytest
import sympy as sp

from flux_space import (
    InconsistentSystemError,
    PivotSet,
    in_span,
    integer_basis,
    nullspace_basis,
    particular_solution,
    row_echelon,
    verify_basis,
)


def _solve(M):
    work = sp.Matrix(M)
    pivots = row_echelon(work)
    return pivots, nullspace_basis(work, pivots)


def test_free_column_unit_pattern():
    M = sp.Matrix([[1, 2, 0, 3], [0, 0, 1, 4]])
    pivots, basis = _solve(M)
    free = pivots.free_columns(M.cols)
    assert free == (1, 3)
    for k, v in enumerate(basis):
        for j, f in enumerate(free):
            assert v[f] == (1 if j == k else 0)


def test_basis_annihilates_original_exactly():
    M = sp.Matrix([[2, -1, 0, 1, 3], [1, 1, -3, 0, 0], [3, 0, -3, 1, 3]])
    pivots, basis = _solve(M)
    assert len(basis) == M.cols - pivots.rank
    for v in basis:
        assert M * v == sp.zeros(M.rows, 1)
    assert verify_basis(M, basis)


def test_back_substitution_through_unreduced_rows():
    # Echelon (not reduced) rows: the pivot variable of row 0 depends on
    # the pivot variable of row 1 as well as on the free column.
    M = sp.Matrix([[1, 1, 1], [0, 1, 2]])
    pivots, basis = _solve(M)
    assert basis == (sp.Matrix([1, -2, 1]),)


def test_matches_sympy_nullspace():
    M = sp.Matrix([[1, -1, 0, 0, 1], [0, 1, -1, 0, 0], [0, 0, 1, -1, -1]])
    _, basis = _solve(M)
    assert list(basis) == M.nullspace()


def test_full_column_rank_gives_empty_basis():
    M = sp.Matrix([[1, 0], [0, 1], [1, 1]])
    pivots, basis = _solve(M)
    assert pivots.rank == 2
    assert basis == ()


def test_zero_matrix_basis_is_identity():
    M = sp.zeros(2, 3)
    _, basis = _solve(M)
    assert basis == (sp.Matrix([1, 0, 0]), sp.Matrix([0, 1, 0]), sp.Matrix([0, 0, 1]))


def test_fractional_entries():
    M = sp.Matrix([[2, 3]])
    _, basis = _solve(M)
    assert basis == (sp.Matrix([sp.Rational(-3, 2), 1]),)
    assert integer_basis(basis) == (sp.Matrix([-3, 2]),)


def test_integer_basis_is_primitive_and_keeps_free_sign():
    v = sp.Matrix([sp.Rational(2, 3), sp.Rational(-4, 9), 1])
    (w,) = integer_basis([v])
    assert w == sp.Matrix([6, -4, 9])


def test_rejects_bad_pivots():
    M = sp.Matrix([[0, 1]])
    with pytest.raises(ValueError):
        nullspace_basis(M, PivotSet(((0, 0),)))
    with pytest.raises(ValueError):
        nullspace_basis(M, PivotSet(((0, 5),)))


def test_verify_basis_detects_wrong_vector():
    M = sp.Matrix([[-2, 2], [1, -1]])
    assert verify_basis(M, [sp.Matrix([1, 1])])
    assert not verify_basis(M, [sp.Matrix([1, 2])])
    with pytest.raises(ValueError):
        verify_basis(M, [sp.Matrix([1, 1, 1])])


def test_in_span():
    basis = [sp.Matrix([1, 0, 1]), sp.Matrix([0, 1, 1])]
    assert in_span(basis, sp.Matrix([2, -3, -1]))
    assert not in_span(basis, sp.Matrix([1, 0, 0]))
    assert in_span([], sp.Matrix([0, 0]))
    assert not in_span([], sp.Matrix([0, 1]))


def test_particular_solution():
    S = sp.Matrix([[-1, 0, 1], [1, -1, 0]])
    x = particular_solution(S, [1, "1/2"])
    assert S * x == sp.Matrix([1, sp.Rational(1, 2)])
    # Free variable (column 2) is zero.
    assert x[2] == 0


def test_particular_solution_inconsistent():
    S = sp.Matrix([[1, -1], [-1, 1]])
    with pytest.raises(InconsistentSystemError):
        particular_solution(S, [1, 1])
    with pytest.raises(ValueError):
        particular_solution(S, [1])
