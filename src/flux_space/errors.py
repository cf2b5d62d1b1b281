"""Exception types raised by the flux space pipeline."""

from __future__ import annotations

from typing import Optional, Tuple


class FluxSpaceError(Exception):
    """Base class for every error the pipeline reports to its caller."""

    kind = "FluxSpaceError"

    @property
    def line_number(self) -> Optional[int]:
        return None


class ParseError(FluxSpaceError, ValueError):
    """A reaction line could not be parsed."""

    kind = "ParseError"

    def __init__(self, line_number: int, text: str, reason: str) -> None:
        self._line_number = int(line_number)
        self.text = text
        self.reason = reason
        super().__init__(f"line {self._line_number}: {reason}: '{text}'")

    @property
    def line_number(self) -> int:
        return self._line_number


class EmptyNetworkError(FluxSpaceError, ValueError):
    """The network has no reactions or no species."""

    kind = "EmptyNetworkError"


class ArithmeticOverflowError(FluxSpaceError, ArithmeticError):
    """A rational entry grew past the configured magnitude bound."""

    kind = "ArithmeticOverflowError"

    def __init__(self, bits: int, limit: int, position: Optional[Tuple[int, int]] = None) -> None:
        self.bits = int(bits)
        self.limit = int(limit)
        self.position = position
        where = f" at {position}" if position is not None else ""
        super().__init__(
            f"rational entry{where} needs {self.bits} bits, exceeding the limit of {self.limit}"
        )


class InconsistentSystemError(FluxSpaceError, ValueError):
    """S x = a has no exact solution."""

    kind = "InconsistentSystemError"
