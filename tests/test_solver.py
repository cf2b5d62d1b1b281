import random

import numpy as np
import pytest
import sympy as sp

from flux_space import (
    ArithmeticOverflowError,
    EmptyNetworkError,
    FluxSpaceSolver,
    ParseError,
    ReactionNetwork,
    SolverConfig,
    glycolysis_core_network,
    gpl_replication_network,
    in_span,
    michaelis_menten_network,
    solve_matrix,
    solve_network,
    solve_text,
    three_species_cycle_network,
)


def test_opposite_reactions_balance_at_equal_flux():
    result = solve_text("A -> B\nB -> A")
    assert result.matrix == sp.Matrix([[-1, 1], [1, -1]])
    assert result.rank == 1
    assert result.dimension == 1
    assert result.basis == (sp.Matrix([1, 1]),)


def test_two_to_one_stoichiometry():
    result = solve_text("2A -> B\nB -> 2A")
    assert result.matrix == sp.Matrix([[-2, 2], [1, -1]])
    assert result.rank == 1
    assert result.dimension == 1
    (v,) = result.basis
    assert result.matrix * v == sp.zeros(2, 1)
    assert v == sp.Matrix([1, 1])


def test_malformed_line_halts_before_matrix():
    with pytest.raises(ParseError) as exc:
        solve_text("A -> B\nA ->")
    assert exc.value.line_number == 2


def test_empty_text_is_an_error():
    with pytest.raises(EmptyNetworkError):
        solve_text("")


def test_full_rank_network_has_trivial_flux_space():
    result = solve_network(michaelis_menten_network())
    assert result.rank == 2
    assert result.is_trivial
    assert result.basis == ()


def test_cycle():
    result = solve_network(three_species_cycle_network())
    assert result.basis == (sp.Matrix([1, 1, 1]),)
    assert result.free_columns == (2,)


def test_gpl_internal_cycle():
    result = solve_network(gpl_replication_network())
    assert result.rank == 4
    assert result.integer_basis() == (sp.Matrix([-1, -1, 1, 1, 0]),)


def test_glycolysis_flux_mode():
    result = solve_network(glycolysis_core_network())
    assert result.dimension == 1
    assert result.integer_basis() == (sp.Matrix([1, 1, 1, 1, 1, 1, 2, 2]),)


def test_dimension_is_columns_minus_rank():
    rng = random.Random(7)
    for _ in range(20):
        rows, cols = rng.randint(1, 5), rng.randint(1, 6)
        M = sp.Matrix(rows, cols, [rng.randint(-2, 2) for _ in range(rows * cols)])
        result = solve_matrix(M)
        assert result.dimension == cols - result.rank
        assert result.rank == M.rank()
        for v in result.basis:
            assert M * v == sp.zeros(rows, 1)


def test_zero_matrix_dimension_is_column_count():
    result = solve_matrix(sp.zeros(3, 4))
    assert result.rank == 0
    assert result.dimension == 4


def test_basis_vectors_are_independent():
    net = ReactionNetwork.from_string(
        """
        0 -> A
        A -> B
        A -> C
        B -> D
        C -> D
        D -> 0
        B <-> C
        """
    )
    result = solve_network(net)
    B = result.basis_matrix()
    assert B.rank() == result.dimension == 3


def test_permuted_network_spans_the_same_subspace():
    lines = ["0 -> A", "A -> B", "A -> C", "B -> D", "C -> D", "D -> 0", "B + C -> E", "E -> 0"]
    original = solve_text("\n".join(lines))

    order = [5, 2, 7, 0, 3, 6, 1, 4]
    permuted = solve_text("\n".join(lines[i] for i in order))
    assert permuted.dimension == original.dimension

    # Map each permuted basis vector back into the original column order.
    for v in permuted.basis:
        w = sp.zeros(len(lines), 1)
        for new_col, old_col in enumerate(order):
            w[old_col] = v[new_col]
        assert in_span(original.basis, w)


def test_species_order_does_not_change_flux_space():
    a = solve_text("A -> B\nB -> C\nC -> A")
    b = solve_text("C -> A\nA -> B\nB -> C")
    # Reactions are rotated by one position.
    rotated = [sp.Matrix([v[1], v[2], v[0]]) for v in b.basis]
    assert all(in_span(a.basis, w) for w in rotated)


def test_reversible_is_single_column_by_default():
    result = solve_text("A <-> B\nB -> A")
    assert result.matrix.cols == 2


def test_split_reversible_config():
    result = FluxSpaceSolver(SolverConfig(split_reversible=True)).solve_text("v: A <-> B")
    assert result.matrix.cols == 2
    assert result.reaction_labels == ["v_f", "v_b"]
    assert result.basis == (sp.Matrix([1, 1]),)


def test_overflow_bound_from_config():
    text = "3A -> 7B\n7A -> 3B\nA -> C"
    with pytest.raises(ArithmeticOverflowError):
        solve_text(text, SolverConfig(max_bits=3))
    unbounded = solve_text(text, SolverConfig(max_bits=None))
    assert unbounded.rank == 3
    assert unbounded.is_trivial


def test_result_views():
    result = solve_text("A -> B\nB -> C\nC -> A\nA -> C")
    arr = result.as_array()
    assert arr.shape == (result.dimension, 4)
    S = np.array(result.matrix.tolist(), dtype=float)
    np.testing.assert_allclose(S @ arr.T, 0.0)
    assert result.basis_matrix().shape == (4, result.dimension)
    assert result.species_names == ["A", "B", "C"]
    assert result.reaction_labels == ["R1", "R2", "R3", "R4"]


def test_empty_basis_array_shape():
    result = solve_network(michaelis_menten_network())
    assert result.as_array().shape == (0, 2)


def test_particular_solution_through_result():
    result = solve_text("0 -> A\nA -> B")
    x = result.particular_solution([0, 1])
    assert result.matrix * x == sp.Matrix([0, 1])


def test_particular_solution_respects_magnitude_bound():
    result = FluxSpaceSolver(SolverConfig(max_bits=3)).solve_text("A -> B")
    assert result.particular_solution([-2, 2]) == sp.Matrix([2, 0])
    with pytest.raises(ArithmeticOverflowError):
        result.particular_solution([-(2**40), 2**40])

    unbounded = FluxSpaceSolver(SolverConfig(max_bits=None)).solve_text("A -> B")
    assert unbounded.particular_solution([-(2**40), 2**40]) == sp.Matrix([2**40, 0])


def test_solve_matrix_rejects_empty():
    with pytest.raises(EmptyNetworkError):
        solve_matrix(sp.zeros(0, 3))


def test_solve_matrix_does_not_mutate_input():
    M = sp.Matrix([[1, 2], [2, 4]])
    solve_matrix(M)
    assert M == sp.Matrix([[1, 2], [2, 4]])
