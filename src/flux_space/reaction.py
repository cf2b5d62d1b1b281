from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

import sympy as sp


@dataclass(frozen=True)
class Reaction:
    """A single reaction as a signed stoichiometric map.

    Parameters
    ----------
    coefficients:
        Ordered ``(species_index, coefficient)`` pairs. Negative coefficients
        are consumed, positive ones produced. Zero entries are not stored.
    label:
        Reaction identifier (e.g. ``"R1"`` or a user supplied ``"PGI"``).
    reversible:
        Whether the source line used a bidirectional arrow. This is metadata
        only: a reversible reaction is a single column whose flux may take
        either sign.
    line_number, text:
        Where the reaction came from, for diagnostics.

    Notes
    -----
    For a network with ``n`` species the reaction contributes the column

        v_s = coefficient of species s (0 when absent)

    to the stoichiometric matrix.
    """

    coefficients: Tuple[Tuple[int, int], ...]
    label: str = ""
    reversible: bool = False
    line_number: Optional[int] = None
    text: str = ""

    def __post_init__(self) -> None:
        if not self.coefficients:
            raise ValueError("a reaction must reference at least one species")
        seen = set()
        for idx, c in self.coefficients:
            if int(idx) < 0:
                raise ValueError("species indices must be nonnegative")
            if idx in seen:
                raise ValueError(f"species index {idx} appears twice in one reaction")
            if int(c) == 0:
                raise ValueError("zero coefficients must be elided")
            seen.add(idx)

    @property
    def species_indices(self) -> Tuple[int, ...]:
        return tuple(idx for idx, _c in self.coefficients)

    def coefficient(self, species_index: int) -> int:
        """Coefficient of the given species (0 when the species is absent)."""
        for idx, c in self.coefficients:
            if idx == species_index:
                return int(c)
        return 0

    def as_dict(self) -> Dict[int, int]:
        return {int(idx): int(c) for idx, c in self.coefficients}

    def reactants(self) -> Dict[int, int]:
        """Consumed species with positive amounts."""
        return {int(idx): -int(c) for idx, c in self.coefficients if c < 0}

    def products(self) -> Dict[int, int]:
        return {int(idx): int(c) for idx, c in self.coefficients if c > 0}

    def reaction_vector(self, n_species: int) -> sp.Matrix:
        """Return this reaction's column of the stoichiometric matrix."""
        if any(idx >= n_species for idx in self.species_indices):
            raise ValueError(f"reaction '{self.label}' references a species outside 0..{n_species - 1}")
        col = [sp.Integer(0)] * n_species
        for idx, c in self.coefficients:
            col[idx] = sp.Integer(int(c))
        return sp.Matrix(col)

    def to_string(self, species_names: Optional[Sequence[str]] = None) -> str:
        """Human-readable form such as ``"2A + B -> C"``."""

        def name(i: int) -> str:
            if species_names is None:
                return f"X{i + 1}"
            return species_names[i]

        def side(amounts: Dict[int, int]) -> str:
            terms = []
            for i, c in amounts.items():
                terms.append(name(i) if c == 1 else f"{c}{name(i)}")
            return " + ".join(terms) if terms else "0"

        arrow = "<->" if self.reversible else "->"
        return f"{side(self.reactants())} {arrow} {side(self.products())}"

    def reversed(self, label: Optional[str] = None) -> "Reaction":
        """The irreversible reaction running in the opposite direction."""
        return Reaction(
            coefficients=tuple((idx, -c) for idx, c in self.coefficients),
            label=self.label if label is None else label,
            reversible=False,
            line_number=self.line_number,
            text=self.text,
        )

    @staticmethod
    def from_mapping(
        coefficients: Iterable[Tuple[int, int]],
        label: str = "",
        reversible: bool = False,
    ) -> "Reaction":
        """Build a reaction from ``(index, coefficient)`` pairs, dropping zeros."""
        pairs = tuple((int(i), int(c)) for i, c in coefficients if int(c) != 0)
        return Reaction(pairs, label=label, reversible=reversible)
