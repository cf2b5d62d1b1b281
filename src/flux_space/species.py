from __future__ import annotations

from typing import Dict, Iterator, List, Tuple


class SpeciesRegistry:
    """Ordered mapping from species names to row indices.

    Indices are assigned in first-seen order and never change. A registry is
    created per parse; call :meth:`freeze` once the network is complete to
    reject further additions.
    """

    def __init__(self, names: Tuple[str, ...] = ()) -> None:
        self._index: Dict[str, int] = {}
        self._names: List[str] = []
        self._frozen = False
        for name in names:
            self.register(name)

    def register(self, name: str) -> int:
        """Return the index of ``name``, assigning the next one if it is new."""
        if not isinstance(name, str) or not name:
            raise ValueError("species name must be a non-empty string")
        idx = self._index.get(name)
        if idx is not None:
            return idx
        if self._frozen:
            raise RuntimeError(f"registry is frozen; cannot add species '{name}'")
        idx = len(self._names)
        self._index[name] = idx
        self._names.append(name)
        return idx

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"Unknown species '{name}'") from None

    def name(self, index: int) -> str:
        return self._names[index]

    def freeze(self) -> "SpeciesRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._names))

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpeciesRegistry):
            return NotImplemented
        return self._names == other._names

    def __repr__(self) -> str:
        return f"SpeciesRegistry({self._names!r})"
