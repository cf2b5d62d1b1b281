"""Command line interface.

    flux-space solve network.txt [--format text|mm|json] [--integer]
    flux-space solve network.txt -a "0 1 0.5"
    flux-space solve-matrix stoich.mtx --accumulation acc.mtx
    flux-space help
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import SolverConfig
from .errors import FluxSpaceError
from .log import setup_logger
from .matrix_market import (
    format_vector_flat,
    format_vector_mm,
    parse_matrix_market,
    parse_vector,
    parse_vector_mm,
)
from .report import ReportOptions, format_basis, format_basis_mm, rational_payload, result_to_payload
from .solver import FluxSpaceSolver

PROG = "flux-space"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Exact steady-state flux space (stoichiometric null space) of a reaction network.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("path", help="input file (UTF-8)")
    common.add_argument(
        "-f", "--format", choices=["text", "mm", "json"], default="text", help="output format (default: text)"
    )
    common.add_argument("--integer", action="store_true", help="scale basis vectors to primitive integers")
    common.add_argument(
        "--max-bits",
        type=int,
        default=None,
        help="largest numerator/denominator bit length allowed during elimination",
    )
    common.add_argument("--no-limit", action="store_true", help="disable the magnitude bound")
    common.add_argument("--show-matrix", action="store_true", help="include the stoichiometric matrix (text format)")
    common.add_argument("-v", "--verbose", action="count", default=0, help="log progress (-vv for debug)")
    accumulation = common.add_mutually_exclusive_group()
    accumulation.add_argument(
        "--accumulation",
        metavar="PATH",
        help="Matrix Market vector a; also print one exact flux x with S x = a",
    )
    accumulation.add_argument(
        "-a",
        "--accumulation-string",
        metavar="VALUES",
        help="accumulation vector inline, whitespace delimited, e.g. \"0 1e-3 1/2\"",
    )

    solve = sub.add_parser("solve", parents=[common], help="solve a reaction-network text file")
    solve.add_argument(
        "--split-reversible",
        action="store_true",
        help="represent each reversible reaction as two irreversible ones",
    )
    sub.add_parser("solve-matrix", parents=[common], help="solve a Matrix Market stoichiometric matrix")
    sub.add_parser("help", help="show this help and exit")
    return parser


def _config(args: argparse.Namespace) -> SolverConfig:
    overrides = {}
    if args.no_limit:
        overrides["max_bits"] = None
    elif args.max_bits is not None:
        overrides["max_bits"] = args.max_bits
    if getattr(args, "split_reversible", False):
        overrides["split_reversible"] = True
    return SolverConfig.from_env(**overrides)


def _accumulation(args: argparse.Namespace):
    if args.accumulation is not None:
        return parse_vector_mm(Path(args.accumulation).read_text(encoding="utf-8-sig"))
    if args.accumulation_string is not None:
        return parse_vector(args.accumulation_string)
    return None


def _render(result, args: argparse.Namespace, particular=None) -> str:
    options = ReportOptions(integer=args.integer, include_matrix=args.show_matrix)
    if args.format == "json":
        payload = result_to_payload(result, integer=args.integer)
        if particular is not None:
            payload["particular_solution"] = [rational_payload(v) for v in particular]
        return json.dumps(payload, indent=2)
    if args.format == "mm":
        text = format_basis_mm(result, options=options)
        if particular is not None:
            text += "\n" + format_vector_mm(particular, header="particular flux x with S x = a")
        return text
    text = format_basis(result, options=options)
    if particular is not None:
        text += "\n\nParticular flux (S x = a): " + format_vector_flat(particular)
    return text


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_usage(sys.stderr)
        return 2
    if args.command == "help":
        parser.print_help()
        return 0

    if args.verbose:
        setup_logger(logging.DEBUG if args.verbose > 1 else logging.INFO)
    log = logging.getLogger("flux_space.cli")

    try:
        config = _config(args)
        text = Path(args.path).read_text(encoding="utf-8-sig")
        solver = FluxSpaceSolver(config)
        if args.command == "solve":
            result = solver.solve_text(text)
        else:
            result = solver.solve_matrix(parse_matrix_market(text))
        accumulation = _accumulation(args)
        particular = None if accumulation is None else result.particular_solution(accumulation)
    except (FluxSpaceError, OSError, UnicodeDecodeError, ValueError) as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return 1

    log.info("Solved %s: rank %d, dimension %d", args.path, result.rank, result.dimension)
    print(_render(result, args, particular))
    return 0


if __name__ == "__main__":
    sys.exit(main())
