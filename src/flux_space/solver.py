from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
import sympy as sp

from .config import SolverConfig
from .elimination import PivotSet, row_echelon
from .errors import EmptyNetworkError
from .log import get_logger
from .network import ReactionNetwork
from .nullspace import (
    NullSpaceBasis,
    basis_matrix,
    integer_basis,
    nullspace_basis,
    particular_solution,
    verify_basis,
)
from .parser import ReactionParser
from .rational import MagnitudeGuard, as_rational

logger = get_logger(__name__)


@dataclass(frozen=True)
class FluxSpaceResult:
    """Outcome of one solve.

    Attributes
    ----------
    matrix:
        The stoichiometric matrix as built (not reduced).
    reduced:
        Its row-echelon form.
    pivots:
        Pivot positions of ``reduced``.
    basis:
        One column vector per free column; spans ``ker(matrix)``.
    network:
        The parsed network, or None when solving a bare matrix.
    guard:
        Magnitude bound applied by the solver; reused by
        :meth:`particular_solution`.
    """

    matrix: sp.ImmutableMatrix
    reduced: sp.ImmutableMatrix
    pivots: PivotSet
    basis: NullSpaceBasis
    network: Optional[ReactionNetwork] = field(default=None, compare=False)
    guard: MagnitudeGuard = field(default_factory=MagnitudeGuard, compare=False, repr=False)

    @property
    def n_reactions(self) -> int:
        return self.matrix.cols

    @property
    def rank(self) -> int:
        return self.pivots.rank

    @property
    def dimension(self) -> int:
        return len(self.basis)

    @property
    def free_columns(self) -> Tuple[int, ...]:
        return self.pivots.free_columns(self.matrix.cols)

    @property
    def is_trivial(self) -> bool:
        """True when the zero flux is the only steady state."""
        return not self.basis

    @property
    def reaction_labels(self) -> List[str]:
        if self.network is not None:
            return self.network.reaction_labels
        return [f"R{j + 1}" for j in range(self.matrix.cols)]

    @property
    def species_names(self) -> List[str]:
        if self.network is not None:
            return self.network.species_names
        return [f"X{i + 1}" for i in range(self.matrix.rows)]

    def integer_basis(self) -> NullSpaceBasis:
        return integer_basis(self.basis)

    def basis_matrix(self) -> sp.Matrix:
        """Basis vectors as the columns of a C×k matrix."""
        return basis_matrix(self.basis, self.matrix.cols)

    def as_array(self) -> np.ndarray:
        """Float view of the basis, one row per vector (k×C)."""
        rows = [[float(e) for e in v] for v in self.basis]
        return np.array(rows, dtype=float).reshape(len(rows), self.matrix.cols)

    def particular_solution(self, accumulation: Sequence) -> sp.Matrix:
        """Exact flux ``x`` with ``S x = accumulation`` (free fluxes zero)."""
        return particular_solution(self.matrix, accumulation, self.guard)


@dataclass
class FluxSpaceSolver:
    """Run parse → build → eliminate → extract.

    Parameters
    ----------
    config:
        A :class:`SolverConfig`; defaults to ``SolverConfig()``.
    """

    config: SolverConfig = field(default_factory=SolverConfig)

    def parser(self) -> ReactionParser:
        return ReactionParser(
            max_coefficient=self.config.max_coefficient,
            split_reversible=self.config.split_reversible,
        )

    def guard(self) -> MagnitudeGuard:
        return MagnitudeGuard(self.config.max_bits)

    def solve_text(self, text: str) -> FluxSpaceResult:
        network = self.parser().parse_network(text)
        return self.solve(network)

    def solve(self, network: ReactionNetwork) -> FluxSpaceResult:
        result = self.solve_matrix(network.stoichiometric_matrix())
        logger.debug(
            "Network with %d species and %d reactions: flux space dimension %d",
            network.n_species,
            network.n_reactions,
            result.dimension,
        )
        return FluxSpaceResult(
            matrix=result.matrix,
            reduced=result.reduced,
            pivots=result.pivots,
            basis=result.basis,
            network=network,
            guard=result.guard,
        )

    def solve_matrix(self, matrix: sp.MatrixBase) -> FluxSpaceResult:
        if matrix.rows == 0 or matrix.cols == 0:
            raise EmptyNetworkError(f"cannot solve an empty {matrix.rows}×{matrix.cols} matrix")

        original = sp.ImmutableMatrix(matrix).applyfunc(as_rational)
        work = sp.Matrix(original)
        guard = self.guard()
        pivots = row_echelon(work, guard)
        basis = nullspace_basis(work, pivots, guard)

        if self.config.verify and not verify_basis(original, basis):
            raise RuntimeError("null-space basis failed exact verification")

        return FluxSpaceResult(
            matrix=original,
            reduced=sp.ImmutableMatrix(work),
            pivots=pivots,
            basis=basis,
            guard=guard,
        )


def solve_text(text: str, config: Optional[SolverConfig] = None) -> FluxSpaceResult:
    """Compute the steady-state flux space of a reaction-network text."""
    return FluxSpaceSolver(config or SolverConfig()).solve_text(text)


def solve_network(network: ReactionNetwork, config: Optional[SolverConfig] = None) -> FluxSpaceResult:
    return FluxSpaceSolver(config or SolverConfig()).solve(network)


def solve_matrix(matrix: sp.MatrixBase, config: Optional[SolverConfig] = None) -> FluxSpaceResult:
    """Compute an exact null-space basis of any rational matrix."""
    return FluxSpaceSolver(config or SolverConfig()).solve_matrix(matrix)
