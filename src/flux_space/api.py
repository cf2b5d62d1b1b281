"""Single-function entry points for embedding hosts.

Hosts pass the reaction-network text as a string and receive a plain dict
(or its JSON text). Pipeline errors come back as error payloads instead of
exceptions, so the host only has to inspect ``payload["ok"]``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .config import SolverConfig
from .errors import FluxSpaceError
from .log import get_logger
from .report import error_to_payload, result_to_payload
from .solver import solve_text

logger = get_logger(__name__)


def solve_payload(
    text: str,
    *,
    config: Optional[SolverConfig] = None,
    integer: bool = False,
) -> Dict[str, Any]:
    """Solve ``text`` and return a success or error payload.

    Success::

        {"ok": True, "species": [...], "reactions": [...], "rank": 1,
         "dimension": 1, "free_columns": [1],
         "basis": [[{"numerator": "1", "denominator": "1"}, ...], ...]}

    Error::

        {"ok": False, "error": {"kind": "ParseError", "message": "...",
                                "line_number": 3}}
    """
    try:
        result = solve_text(text, config)
    except FluxSpaceError as exc:
        logger.debug("Solve failed: %s", exc)
        return error_to_payload(exc)
    return result_to_payload(result, integer=integer)


def solve_json(text: str, *, config: Optional[SolverConfig] = None, integer: bool = False) -> str:
    """JSON text of :func:`solve_payload`."""
    return json.dumps(solve_payload(text, config=config, integer=integer))
