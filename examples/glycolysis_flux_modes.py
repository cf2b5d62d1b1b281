"""Steady-state fluxes of a small glycolysis model.

The script builds the stoichiometric matrix of upper glycolysis with
exchange reactions, prints the exact flux space basis, the conservation law
ATP + ADP, and a particular flux for a prescribed g3p accumulation.

Run:
    python examples/glycolysis_flux_modes.py
"""

from __future__ import annotations

import sympy as sp

from flux_space import (
    ReportOptions,
    format_basis,
    glycolysis_core_network,
    solve_network,
)


def main() -> None:
    net = glycolysis_core_network()
    print(net.summary())

    result = solve_network(net)
    print()
    print(format_basis(result, options=ReportOptions(integer=True, include_matrix=True)))

    print("\nConservation laws (mu * S = 0):")
    for mu in net.conservation_laws():
        terms = [f"{c}*{name}" for c, name in zip(mu, net.species_names) if c != 0]
        print("  ", " + ".join(terms))

    # Net production of one g3p per unit time, everything else balanced.
    acc = [0] * net.n_species
    acc[net.registry.index("g3p")] = 1
    x = result.particular_solution(acc)
    print("\nFlux with d[g3p]/dt = 1:")
    sp.pprint(x.T)


if __name__ == "__main__":
    main()
