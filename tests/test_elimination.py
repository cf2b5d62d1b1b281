import pytest
import sympy as sp

from flux_space import ArithmeticOverflowError, MagnitudeGuard, PivotSet, rank, row_echelon


def _is_row_echelon(M, pivots):
    # Every entry below a pivot and left of the row's own pivot is zero.
    for r, c in pivots:
        if M[r, c] == 0:
            return False
        for rr in range(r + 1, M.rows):
            if M[rr, c] != 0:
                return False
        if any(M[r, j] != 0 for j in range(c)):
            return False
    pivot_rows = set(pivots.rows)
    return all(all(M[r, j] == 0 for j in range(M.cols)) for r in range(M.rows) if r not in pivot_rows)


def test_two_by_two_rank_one():
    M = sp.Matrix([[-1, 1], [1, -1]])
    pivots = row_echelon(M)
    assert pivots.pairs == ((0, 0),)
    assert M == sp.Matrix([[-1, 1], [0, 0]])


def test_first_nonzero_row_is_pivot_no_magnitude_choice():
    M = sp.Matrix([[0, 1, 2], [1, 5, 0], [100, 0, 1]])
    pivots = row_echelon(M)
    # Column 0: first nonzero row is row 1, swapped into row 0.
    assert M.row(0) == sp.Matrix([[1, 5, 0]])
    assert pivots.columns == (0, 1, 2)
    assert _is_row_echelon(M, pivots)


def test_zero_column_is_skipped():
    M = sp.Matrix([[0, 1, 2], [0, 2, 4], [0, 0, 1]])
    pivots = row_echelon(M)
    assert pivots.pairs == ((0, 1), (1, 2))
    assert _is_row_echelon(M, pivots)


def test_zero_matrix_has_no_pivots():
    M = sp.zeros(3, 4)
    pivots = row_echelon(M)
    assert pivots.rank == 0
    assert pivots.free_columns(4) == (0, 1, 2, 3)


def test_exact_rational_entries():
    M = sp.Matrix([[3, 1], [1, 3]])
    row_echelon(M)
    assert M[1, 1] == sp.Rational(8, 3)
    assert isinstance(M[1, 1], sp.Rational)


def test_shape_is_preserved_and_rows_stay_in_place():
    M = sp.Matrix([[1, 2, 3], [2, 4, 6], [1, 0, 1], [0, 0, 0]])
    pivots = row_echelon(M)
    assert M.shape == (4, 3)
    assert pivots.rank == 2
    assert _is_row_echelon(M, pivots)


def test_accepts_fraction_and_string_entries():
    from fractions import Fraction

    M = sp.Matrix(2, 2, [Fraction(1, 2), 1, "1/4", "1/2"])
    pivots = row_echelon(M)
    assert pivots.rank == 1


def test_rejects_float_entries():
    with pytest.raises(TypeError):
        row_echelon(sp.Matrix([[0.5, 1]]))


def test_rejects_immutable_matrix():
    with pytest.raises(TypeError):
        row_echelon(sp.ImmutableMatrix([[1, 2]]))


def test_rank_matches_sympy_and_leaves_input_untouched():
    M = sp.Matrix([[1, 2, 3, 4], [2, 4, 6, 8], [0, 1, 1, 0], [1, 3, 4, 4]])
    before = M.copy()
    assert rank(M) == M.rank() == 2
    assert M == before


def test_magnitude_guard_aborts():
    M = sp.Matrix([[3, 7], [7, 3]])
    with pytest.raises(ArithmeticOverflowError) as exc:
        row_echelon(M, MagnitudeGuard(max_bits=3))
    assert exc.value.limit == 3
    assert exc.value.bits > 3


def test_unbounded_guard_accepts_large_values():
    big = 2**200 + 1
    M = sp.Matrix([[big, 1], [1, big]])
    pivots = row_echelon(M, MagnitudeGuard(max_bits=None))
    assert pivots.rank == 2


def test_pivot_set_validation():
    with pytest.raises(ValueError):
        PivotSet(((0, 1), (1, 1)))
    with pytest.raises(ValueError):
        PivotSet(((1, 0), (0, 1)))
    ps = PivotSet(((0, 0), (1, 2)))
    assert ps.rows == (0, 1)
    assert ps.columns == (0, 2)
    assert ps.free_columns(4) == (1, 3)
    assert len(ps) == 2
