"""Human-readable and structured renderings of a flux space result.

- plain-text reports for the console,
- Matrix Market array text, and
- JSON-serialisable payloads for embedding hosts, where every rational is
  sent as numerator / denominator strings so no precision is lost.

Nothing here is required for the core algebra; it is strictly presentation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import sympy as sp

from .errors import FluxSpaceError
from .matrix_market import format_matrix_mm
from .nullspace import basis_matrix
from .rational import format_rational, rational_to_strings
from .solver import FluxSpaceResult


@dataclass
class ReportOptions:
    """Tunable knobs for report verbosity."""

    integer: bool = False
    max_vectors: Optional[int] = None
    include_matrix: bool = False
    header: str = "steady-state flux space basis"


def _vectors(result: FluxSpaceResult, opt: ReportOptions) -> Sequence[sp.MatrixBase]:
    return result.integer_basis() if opt.integer else result.basis


def format_flux_vector(vector: sp.MatrixBase, labels: Sequence[str]) -> str:
    """Format a flux vector as ``"R1 = 1, R2 = 1/2"``, skipping zeros."""
    terms = [f"{lab} = {format_rational(v)}" for lab, v in zip(labels, vector) if v != 0]
    return ", ".join(terms) if terms else "0"


def format_stoichiometric_matrix(result: FluxSpaceResult) -> List[str]:
    """Tab-separated table with species rows and reaction columns."""
    labels = result.reaction_labels
    lines = ["\t" + "\t".join(labels)]
    for i, name in enumerate(result.species_names):
        row = [format_rational(result.matrix[i, j]) for j in range(result.matrix.cols)]
        lines.append(name + "\t" + "\t".join(row))
    return lines


def format_basis(result: FluxSpaceResult, *, options: Optional[ReportOptions] = None) -> str:
    """Plain-text report of a result."""
    opt = options or ReportOptions()
    labels = result.reaction_labels

    lines: List[str] = []
    lines.append(
        f"{len(result.species_names)} species, {result.n_reactions} reactions, "
        f"rank {result.rank}, flux space dimension {result.dimension}"
    )
    if opt.include_matrix:
        lines.append("Stoichiometric matrix:")
        lines.extend("  " + s for s in format_stoichiometric_matrix(result))

    pivot_labels = [labels[c] for c in result.pivots.columns]
    free_labels = [labels[c] for c in result.free_columns]
    lines.append("Pivot reactions: " + (", ".join(pivot_labels) if pivot_labels else "none"))
    lines.append("Free reactions: " + (", ".join(free_labels) if free_labels else "none"))

    if result.is_trivial:
        lines.append("Only the zero flux is at steady state.")
        return "\n".join(lines)

    vectors = list(_vectors(result, opt))
    shown = vectors if opt.max_vectors is None else vectors[: int(opt.max_vectors)]
    for k, v in enumerate(shown, start=1):
        lines.append(f"v{k}: {format_flux_vector(v, labels)}")
    if len(vectors) > len(shown):
        lines.append(f"... ({len(vectors) - len(shown)} more)")
    return "\n".join(lines)


def format_basis_mm(result: FluxSpaceResult, *, options: Optional[ReportOptions] = None) -> str:
    """Basis as a C×k Matrix Market array (one column per basis vector)."""
    opt = options or ReportOptions()
    B = basis_matrix(list(_vectors(result, opt)), result.n_reactions)
    header = opt.header + "\nrows: " + " ".join(result.reaction_labels)
    return format_matrix_mm(B, header=header)


def rational_payload(value) -> Dict[str, str]:
    num, den = rational_to_strings(value)
    return {"numerator": num, "denominator": den}


def result_to_payload(result: FluxSpaceResult, *, integer: bool = False) -> Dict[str, Any]:
    """JSON-serialisable success payload."""
    vectors = result.integer_basis() if integer else result.basis
    return {
        "ok": True,
        "species": list(result.species_names),
        "reactions": list(result.reaction_labels),
        "rank": result.rank,
        "dimension": result.dimension,
        "free_columns": list(result.free_columns),
        "basis": [[rational_payload(e) for e in v] for v in vectors],
    }


def error_to_payload(exc: BaseException) -> Dict[str, Any]:
    """JSON-serialisable error payload."""
    if isinstance(exc, FluxSpaceError):
        kind = exc.kind
        line_number = exc.line_number
    else:
        kind = type(exc).__name__
        line_number = None
    return {
        "ok": False,
        "error": {"kind": kind, "message": str(exc), "line_number": line_number},
    }
