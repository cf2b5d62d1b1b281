from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
import sympy as sp

from .errors import EmptyNetworkError
from .log import get_logger
from .parser import ReactionParser
from .reaction import Reaction
from .species import SpeciesRegistry

logger = get_logger(__name__)


def build_stoichiometric_matrix(registry: SpeciesRegistry, reactions: Sequence[Reaction]) -> sp.Matrix:
    """Return the dense species × reactions matrix of exact coefficients.

    Entry ``(s, r)`` is the coefficient of species ``s`` in reaction ``r``,
    or exact zero when ``s`` does not take part in ``r``. Every call
    allocates a new mutable matrix owned by the caller.
    """
    n_rows = len(registry)
    n_cols = len(reactions)
    if n_rows == 0:
        raise EmptyNetworkError("network has no species")
    if n_cols == 0:
        raise EmptyNetworkError("network has no reactions")

    S = sp.zeros(n_rows, n_cols)
    for j, rxn in enumerate(reactions):
        for idx, c in rxn.coefficients:
            if not 0 <= idx < n_rows:
                raise ValueError(f"reaction '{rxn.label}' references unknown species index {idx}")
            S[idx, j] = sp.Integer(int(c))

    logger.debug("Built %d×%d stoichiometric matrix", n_rows, n_cols)
    return S


@dataclass
class ReactionNetwork:
    """A reaction network: species registry plus ordered reactions.

    Parameters
    ----------
    registry:
        Species names and their row indices.
    reactions:
        List of :class:`Reaction` objects; their order is the column order
        of the stoichiometric matrix.

    Notes
    -----
    A flux vector ``v`` is a steady state when

        S v = 0

    i.e. when it lies in the null space of the stoichiometric matrix.
    """

    registry: SpeciesRegistry
    reactions: List[Reaction] = field(default_factory=list)

    def __post_init__(self) -> None:
        n = len(self.registry)
        for r in self.reactions:
            if any(idx >= n for idx in r.species_indices):
                raise ValueError(f"reaction '{r.label}' references a species outside the registry")

    @property
    def n_species(self) -> int:
        return len(self.registry)

    @property
    def n_reactions(self) -> int:
        return len(self.reactions)

    @property
    def species_names(self) -> List[str]:
        return list(self.registry.names)

    @property
    def reaction_labels(self) -> List[str]:
        return [r.label or f"R{j + 1}" for j, r in enumerate(self.reactions)]

    def reversibility(self) -> List[bool]:
        return [r.reversible for r in self.reactions]

    def stoichiometric_matrix(self) -> sp.Matrix:
        """Return the stoichiometric matrix S with columns reaction vectors."""
        return build_stoichiometric_matrix(self.registry, self.reactions)

    def stoichiometric_array(self) -> np.ndarray:
        """Float copy of S for numeric libraries. Exact work should use
        :meth:`stoichiometric_matrix`."""
        S = self.stoichiometric_matrix()
        return np.array(S.tolist(), dtype=float).reshape(S.rows, S.cols)

    def conservation_laws(self) -> List[sp.Matrix]:
        """Return a basis of conservation laws as 1×n row vectors.

        Each row ``mu`` satisfies ``mu * S == 0``: a weighted sum of species
        amounts that no reaction changes.
        """
        from .solver import solve_matrix  # local import to avoid circular import

        result = solve_matrix(self.stoichiometric_matrix().T)
        return [v.T for v in result.integer_basis()]

    def summary(self) -> str:
        """Human-readable summary."""
        lines = []
        lines.append(f"ReactionNetwork(n_species={self.n_species}, n_reactions={self.n_reactions})")
        lines.append("Species: " + ", ".join(self.species_names))
        for label, r in zip(self.reaction_labels, self.reactions):
            lines.append(f"  {label}: {r.to_string(self.species_names)}")
        return "\n".join(lines)

    def reaction(self, label: str) -> Tuple[int, Reaction]:
        """Return ``(column, reaction)`` for a reaction label."""
        for j, (lab, r) in enumerate(zip(self.reaction_labels, self.reactions)):
            if lab == label:
                return j, r
        raise KeyError(f"Unknown reaction '{label}'")

    # -----------------------------
    # Constructors
    # -----------------------------

    @classmethod
    def from_string(cls, text: str, **parser_options) -> "ReactionNetwork":
        """Parse a reaction network from a multi-line string.

        Parameters
        ----------
        text:
            One reaction per line, e.g. ``"2A + B -> C"`` or ``"v1: A <-> B"``.
        parser_options:
            Forwarded to :class:`ReactionParser` (``max_coefficient``,
            ``split_reversible``, ``label_prefix``).

        Returns
        -------
        ReactionNetwork
        """
        parser = ReactionParser(**parser_options)
        return parser.parse_network(text)
