"""Top-level package API for flux_space.

This package computes the steady-state flux space of a chemical or metabolic
reaction network: the null space of its stoichiometric matrix, obtained by
exact Gaussian elimination over the rationals.

Public API:
- ReactionParser, ReactionNetwork, Reaction, SpeciesRegistry
- row_echelon, PivotSet, nullspace_basis
- FluxSpaceSolver, FluxSpaceResult, solve_text, solve_matrix
- report and payload helpers
- Built-in example networks
"""

__version__ = "0.1.0"

from .errors import (
    ArithmeticOverflowError,
    EmptyNetworkError,
    FluxSpaceError,
    InconsistentSystemError,
    ParseError,
)
from .config import SolverConfig
from .species import SpeciesRegistry
from .reaction import Reaction
from .parser import ReactionParser, parse_reactions
from .network import ReactionNetwork, build_stoichiometric_matrix
from .rational import MagnitudeGuard, as_rational
from .elimination import PivotSet, rank, row_echelon
from .nullspace import (
    in_span,
    integer_basis,
    nullspace_basis,
    particular_solution,
    verify_basis,
)
from .solver import FluxSpaceResult, FluxSpaceSolver, solve_matrix, solve_network, solve_text
from .report import (
    ReportOptions,
    error_to_payload,
    format_basis,
    format_basis_mm,
    result_to_payload,
)
from .api import solve_json, solve_payload
from .examples import (
    glycolysis_core_network,
    gpl_replication_network,
    list_available_networks,
    michaelis_menten_network,
    three_species_cycle_network,
)

__all__ = [
    "ArithmeticOverflowError",
    "EmptyNetworkError",
    "FluxSpaceError",
    "InconsistentSystemError",
    "ParseError",
    "SolverConfig",
    "SpeciesRegistry",
    "Reaction",
    "ReactionParser",
    "parse_reactions",
    "ReactionNetwork",
    "build_stoichiometric_matrix",
    "MagnitudeGuard",
    "as_rational",
    "PivotSet",
    "rank",
    "row_echelon",
    "in_span",
    "integer_basis",
    "nullspace_basis",
    "particular_solution",
    "verify_basis",
    "FluxSpaceResult",
    "FluxSpaceSolver",
    "solve_matrix",
    "solve_network",
    "solve_text",
    "ReportOptions",
    "error_to_payload",
    "format_basis",
    "format_basis_mm",
    "result_to_payload",
    "solve_json",
    "solve_payload",
    "glycolysis_core_network",
    "gpl_replication_network",
    "list_available_networks",
    "michaelis_menten_network",
    "three_species_cycle_network",
]
