from __future__ import annotations

from typing import Callable, Dict

from .network import ReactionNetwork


MICHAELIS_MENTEN = """
# S + E <-> C <-> E + P
bind: S + E <-> C
cat:  C <-> E + P
"""

THREE_SPECIES_CYCLE = """
# X1 -> X2 -> X3 -> X1, closed loop
v1: X1 -> X2
v2: X2 -> X3
v3: X3 -> X1
"""

GPL_REPLICATION = """
# self-replication: A + B + P -> 2P through two intermediate routes
r1: A + P <-> Ia
r2: B + Ia <-> I
r3: B + P <-> Ib
r4: A + Ib <-> I
r5: I <-> 2P
"""

GLYCOLYSIS_CORE = """
# upper glycolysis with exchange fluxes
EX_glc: 0 -> glc
HEX1:   glc + atp -> g6p + adp
PGI:    g6p <-> f6p
PFK:    f6p + atp -> fdp + adp
FBA:    fdp <-> dhap + g3p
TPI:    dhap <-> g3p
EX_g3p: g3p -> 0
ATPM:   adp -> atp
"""


def michaelis_menten_network() -> ReactionNetwork:
    """Reversible Michaelis–Menten scheme; species order [S, E, C, P]."""
    return ReactionNetwork.from_string(MICHAELIS_MENTEN)


def three_species_cycle_network() -> ReactionNetwork:
    """Three first-order reactions around a loop; one cyclic flux mode."""
    return ReactionNetwork.from_string(THREE_SPECIES_CYCLE)


def gpl_replication_network() -> ReactionNetwork:
    """Self-replication model with five reversible reactions.

    Species order: [A, P, Ia, B, I, Ib]. Without exchange reactions the only
    steady state is the internal cycle running one route to I forward and
    the other backward, so the flux space is one-dimensional.
    """
    return ReactionNetwork.from_string(GPL_REPLICATION)


def glycolysis_core_network() -> ReactionNetwork:
    """Upper glycolysis with glucose uptake, g3p export and ATP recycling."""
    return ReactionNetwork.from_string(GLYCOLYSIS_CORE)


def list_available_networks() -> Dict[str, Callable[[], ReactionNetwork]]:
    return {
        "michaelis_menten": michaelis_menten_network,
        "three_species_cycle": three_species_cycle_network,
        "gpl_replication": gpl_replication_network,
        "glycolysis_core": glycolysis_core_network,
    }
