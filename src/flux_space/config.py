from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

MAX_BITS_ENV_VAR = "FLUX_SPACE_MAX_BITS"
SPLIT_REVERSIBLE_ENV_VAR = "FLUX_SPACE_SPLIT_REVERSIBLE"

DEFAULT_MAX_BITS = 4096
DEFAULT_MAX_COEFFICIENT = 2**63 - 1

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SolverConfig:
    """Tunable knobs for a solve.

    Parameters
    ----------
    max_bits:
        Largest bit length allowed for any numerator or denominator produced
        during elimination. ``None`` removes the bound.
    max_coefficient:
        Largest stoichiometric coefficient accepted by the parser.
    split_reversible:
        Emit two irreversible reactions for each reversible line instead of a
        single reaction with signed flux.
    verify:
        Check ``S v == 0`` for every basis vector before returning.
    """

    max_bits: Optional[int] = DEFAULT_MAX_BITS
    max_coefficient: int = DEFAULT_MAX_COEFFICIENT
    split_reversible: bool = False
    verify: bool = True

    def __post_init__(self) -> None:
        if self.max_bits is not None and int(self.max_bits) <= 0:
            raise ValueError("max_bits must be positive or None")
        if int(self.max_coefficient) <= 0:
            raise ValueError("max_coefficient must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "SolverConfig":
        """Build a config from ``FLUX_SPACE_*`` environment variables.

        Explicit keyword ``overrides`` win over the environment.
        """
        env = os.environ if environ is None else environ
        values = {}

        if MAX_BITS_ENV_VAR in env:
            raw = env[MAX_BITS_ENV_VAR].strip()
            if raw.lower() == "none":
                values["max_bits"] = None
            else:
                try:
                    values["max_bits"] = int(raw)
                except ValueError:
                    raise ValueError(
                        f'Environment variable {MAX_BITS_ENV_VAR} must be an integer or "none"; got "{raw}"'
                    ) from None

        if SPLIT_REVERSIBLE_ENV_VAR in env:
            raw = env[SPLIT_REVERSIBLE_ENV_VAR].strip().lower()
            if raw in _TRUE:
                values["split_reversible"] = True
            elif raw in _FALSE:
                values["split_reversible"] = False
            else:
                raise ValueError(
                    f'Environment variable {SPLIT_REVERSIBLE_ENV_VAR} must be a boolean; got "{raw}"'
                )

        values.update(overrides)
        return cls(**values)
