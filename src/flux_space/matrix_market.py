"""Matrix Market array text, read and written exactly.

Files hold ``%`` comment lines, a ``rows cols`` header (a trailing third
number is tolerated) and then the entries in row-major order, whitespace
separated. Entries are read as exact rationals, so ``5.4416e-07`` becomes
``3401/6250000000`` rather than a binary float.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import sympy as sp

from .rational import as_rational, format_rational

COMMENT = "%"


def _data_lines(text: str) -> List[str]:
    return [ln for ln in text.splitlines() if ln.strip() and not ln.lstrip().startswith(COMMENT)]


def _parse_header(line: str) -> Tuple[int, int]:
    fields = line.split()
    if len(fields) not in (2, 3):
        raise ValueError(f"Matrix Market header must be 'rows cols'; got '{line.strip()}'")
    try:
        rows, cols = int(fields[0]), int(fields[1])
    except ValueError:
        raise ValueError(f"Matrix Market header must hold integers; got '{line.strip()}'") from None
    if rows < 0 or cols < 0:
        raise ValueError("Matrix Market dimensions must be nonnegative")
    return rows, cols


def parse_matrix_market(text: str) -> sp.Matrix:
    """Parse Matrix Market array text into an exact SymPy matrix."""
    lines = _data_lines(text)
    if not lines:
        raise ValueError("Matrix Market text has no header line")
    rows, cols = _parse_header(lines[0])
    values = [as_rational(tok) for ln in lines[1:] for tok in ln.split()]
    if len(values) != rows * cols:
        raise ValueError(f"expected {rows * cols} entries for a {rows}×{cols} matrix, found {len(values)}")
    return sp.Matrix(rows, cols, values)


def parse_vector(text: str) -> sp.Matrix:
    """Parse a whitespace-delimited list of numbers into an exact column vector."""
    values = [as_rational(tok) for tok in text.split()]
    return sp.Matrix(values)


def parse_vector_mm(text: str) -> sp.Matrix:
    """Parse an ``n 1`` (or ``1 n``) Matrix Market array as a column vector."""
    matrix = parse_matrix_market(text)
    if matrix.cols != 1 and matrix.rows != 1:
        raise ValueError(f"expected a vector, got a {matrix.rows}×{matrix.cols} matrix")
    return sp.Matrix(list(matrix))


def format_matrix_mm(matrix: sp.MatrixBase, header: str = "") -> str:
    """Write ``matrix`` as Matrix Market array text, one row per line."""
    out: List[str] = []
    if header:
        out.extend(f"{COMMENT} {ln}" for ln in header.splitlines())
    out.append(f"{matrix.rows} {matrix.cols}")
    for i in range(matrix.rows):
        out.append("  " + " ".join(format_rational(matrix[i, j]) for j in range(matrix.cols)))
    return "\n".join(out)


def format_vector_mm(vector: Sequence, header: str = "") -> str:
    """Write a vector as an n×1 Matrix Market array."""
    values = list(vector)
    return format_matrix_mm(sp.Matrix(len(values), 1, values), header=header)


def format_vector_flat(vector: Sequence) -> str:
    """Space-delimited exact entries, e.g. ``"1 1/2 0"``."""
    return " ".join(format_rational(v) for v in vector)
