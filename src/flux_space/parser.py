from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import DEFAULT_MAX_COEFFICIENT
from .errors import EmptyNetworkError, ParseError
from .log import get_logger
from .reaction import Reaction
from .species import SpeciesRegistry

logger = get_logger(__name__)

# A single term like "2A", "2 A", "2*A" or "A".
_TERM_RE = re.compile(r"^(?:(\d+)\s*\*?\s*)?([A-Za-z_][\w.'\[\]()]*)$")

# Supported arrow tokens. Reversible ones are listed first so "<->" is not read as "->".
_ARROW_RE = re.compile(r"<=>|<->|=>|->")
_REVERSIBLE_ARROWS = {"<=>", "<->"}

# Optional "label:" prefix naming the reaction.
_LABEL_RE = re.compile(r"^([A-Za-z_][\w.]*)\s*:\s*(.*)$")

_EMPTY_COMPLEX = {"0", "∅"}

COMMENT_MARKER = "#"
BOM = "\ufeff"


@dataclass
class _Line:
    number: int
    raw: str

    def error(self, reason: str) -> ParseError:
        return ParseError(self.number, self.raw, reason)


@dataclass
class ReactionParser:
    """Parse reaction-network text into a species registry and reactions.

    Format
    ------
    One reaction per line; blank lines and lines starting with ``#`` are
    skipped. Each reaction looks like::

        [label:] 2A + B -> C
        [label:] A <-> B

    - irreversible arrows: ``->`` or ``=>``
    - reversible arrows: ``<->`` or ``<=>``
    - ``0`` stands for the empty complex (``0 -> A``, ``A -> 0``)
    - coefficients are positive integers, default 1

    Reactants get negative coefficients and products positive ones. A
    reversible line yields one reaction flagged ``reversible=True`` unless
    ``split_reversible`` is set, in which case it yields a forward and a
    backward irreversible reaction.

    The first malformed line raises :class:`ParseError`; there is no
    best-effort mode.
    """

    max_coefficient: int = DEFAULT_MAX_COEFFICIENT
    split_reversible: bool = False
    label_prefix: str = "R"

    def parse_network(self, text: str):
        """Parse ``text`` into a :class:`~flux_space.network.ReactionNetwork`."""
        registry, reactions = self.parse_reactions(text)

        from .network import ReactionNetwork  # local import to avoid circular import

        return ReactionNetwork(registry=registry, reactions=reactions)

    def parse_reactions(self, text: str) -> Tuple[SpeciesRegistry, List[Reaction]]:
        """Parse ``text`` and return ``(registry, reactions)``.

        The registry is frozen before it is returned.
        """
        if not isinstance(text, str):
            raise TypeError(f"reaction text must be str, not {type(text).__name__}")

        registry = SpeciesRegistry()
        reactions: List[Reaction] = []
        labels = set()
        n_lines = 0

        if text.startswith(BOM):
            text = text[len(BOM) :]
        entries = []
        for number, raw in enumerate(text.splitlines(), start=1):
            stripped = raw.strip()
            if stripped and not stripped.startswith(COMMENT_MARKER):
                entries.append((number, raw, stripped))
        # Auto labels never take a name written explicitly anywhere in the text.
        explicit = {self._split_label(stripped)[0] for _, _, stripped in entries} - {None}

        for number, raw, stripped in entries:
            n_lines += 1
            line = _Line(number, raw)

            label, body = self._split_label(stripped)
            if label is None:
                label = self._auto_label(n_lines, labels | explicit)
            if label in labels:
                raise line.error(f"duplicate reaction label '{label}'")
            labels.add(label)

            lhs_str, reversible, rhs_str = self._split_reaction_line(body, line)
            lhs = self._parse_complex(lhs_str, line, "left-hand side")
            rhs = self._parse_complex(rhs_str, line, "right-hand side")

            # Register in the order species are written, left to right.
            net: Dict[int, int] = {}
            for name, c in lhs:
                idx = registry.register(name)
                net[idx] = net.get(idx, 0) - c
            for name, c in rhs:
                idx = registry.register(name)
                net[idx] = net.get(idx, 0) + c

            coefficients = tuple((idx, c) for idx, c in net.items() if c != 0)
            if not coefficients:
                raise line.error("reaction has no net stoichiometry")

            reaction = Reaction(
                coefficients=coefficients,
                label=label,
                reversible=reversible,
                line_number=number,
                text=raw,
            )
            if reversible and self.split_reversible:
                forward = Reaction(coefficients, label=f"{label}_f", reversible=False, line_number=number, text=raw)
                reactions.append(forward)
                reactions.append(forward.reversed(label=f"{label}_b"))
            else:
                reactions.append(reaction)

        if not reactions:
            raise EmptyNetworkError("No reactions found in input")

        registry.freeze()
        logger.debug("Parsed %d reactions over %d species", len(reactions), len(registry))
        return registry, reactions

    def _parse_complex(self, complex_str: str, line: _Line, side: str) -> List[Tuple[str, int]]:
        """Parse one side such as ``'2A + B'`` into ``[('A', 2), ('B', 1)]``.

        ``'0'`` is the empty complex. Empty text means the side is missing.
        """
        s = complex_str.strip()
        if s == "":
            raise line.error(f"missing {side}")
        if s in _EMPTY_COMPLEX:
            return []

        terms: List[Tuple[str, int]] = []
        seen = set()
        for part in s.split("+"):
            part = part.strip()
            if not part:
                raise line.error(f"empty term on the {side}")
            m = _TERM_RE.match(part)
            if not m:
                raise line.error(f"could not parse term '{part}'")
            c_str, name = m.group(1), m.group(2)
            c = int(c_str) if c_str is not None else 1
            if c == 0:
                raise line.error(f"zero coefficient in term '{part}'")
            if c > self.max_coefficient:
                raise line.error(f"coefficient {c} exceeds the maximum of {self.max_coefficient}")
            if name in seen:
                raise line.error(f"species '{name}' appears twice on the {side}")
            seen.add(name)
            terms.append((name, c))
        return terms

    def _auto_label(self, index: int, taken) -> str:
        """``R<index>``, or the next free ``R<k>`` when that name is taken."""
        while f"{self.label_prefix}{index}" in taken:
            index += 1
        return f"{self.label_prefix}{index}"

    @staticmethod
    def _split_label(line: str) -> Tuple[Optional[str], str]:
        m = _LABEL_RE.match(line)
        if not m:
            return None, line
        return m.group(1), m.group(2)

    @staticmethod
    def _split_reaction_line(body: str, line: _Line) -> Tuple[str, bool, str]:
        """Split a reaction body into ``(lhs, reversible, rhs)``."""
        arrows = list(_ARROW_RE.finditer(body))
        if not arrows:
            raise line.error("no supported arrow found")
        if len(arrows) > 1:
            raise line.error("more than one arrow")

        m = arrows[0]
        reversible = m.group(0) in _REVERSIBLE_ARROWS
        return body[: m.start()], reversible, body[m.end() :]


def parse_reactions(text: str, **kwargs) -> Tuple[SpeciesRegistry, List[Reaction]]:
    """Shortcut for ``ReactionParser(**kwargs).parse_reactions(text)``."""
    return ReactionParser(**kwargs).parse_reactions(text)
