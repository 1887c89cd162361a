"""Simplices as sorted multisets of vertex labels.

A simplex is stored by its canonical (sorted) vertex tuple. Repeated labels
are allowed, which gives the singular simplices used by singular complexes.
"""
from __future__ import annotations

import operator
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from balancing.errors import InvalidInputError


@dataclass(frozen=True, order=True, init=False, repr=False)
class Simplex:
    """Immutable vertex multiset, canonicalized by sorting.

    Equality, hashing and ordering all use the sorted vertex tuple, so
    simplices can be deduplicated in sets and sorted lexicographically.
    """
    vertices: Tuple[int, ...]

    def __init__(self, vertices: Iterable[int] = ()):
        labels = []
        for v in vertices:
            if isinstance(v, bool):
                raise InvalidInputError(f"Vertex label {v!r} is not an integer")
            try:
                v = operator.index(v)
            except TypeError:
                raise InvalidInputError(f"Vertex label {v!r} is not an integer") from None
            if v < 0:
                raise InvalidInputError(f"Vertex label {v} is negative")
            labels.append(v)
        object.__setattr__(self, "vertices", tuple(sorted(labels)))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self):
        return iter(self.vertices)

    def __repr__(self) -> str:
        return f"Simplex({list(self.vertices)})"

    @property
    def dimension(self) -> int:
        return len(self.vertices) - 1

    @property
    def is_singular(self) -> bool:
        return len(set(self.vertices)) != len(self.vertices)

    def count(self, label: int) -> int:
        return self.vertices.count(label)

    def faces(self) -> List["Simplex"]:
        """Codimension-1 faces, one per omitted position, deduplicated and sorted."""
        seen = set()
        for k in range(len(self.vertices)):
            seen.add(Simplex(self.vertices[:k] + self.vertices[k + 1:]))
        return sorted(seen)

    def multiplicity(self, other: "Simplex") -> int:
        """Incidence multiplicity of this facetto in the facet ``other``.

        For each distinct label i of ``self`` the product picks up a factor
        ``self.count(i) * other.count(i)``. The empty simplex has
        multiplicity 1 everywhere; any label missing from ``other`` gives 0.
        """
        own = Counter(self.vertices)
        theirs = Counter(other.vertices)
        result = 1
        for label, n in own.items():
            result *= n * theirs[label]
        return result
