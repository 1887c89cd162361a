"""Partial integer weightings of a complex's facets.

A WeightAssignment keeps one slot per facet, addressed by column index.
A slot holds an int or None (undefined). The Complex is shared by
reference and never mutated.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np

from balancing.errors import InvalidInputError
from balancing.topology.complexes import Complex
from balancing.topology.simplex import Simplex

FacetRef = Union[Simplex, int]


def _check_weight(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInputError(f"Weight {value!r} is not an integer")
    return int(value)


class WeightAssignment:
    """Overlay of (possibly partial) integer weights on a Complex."""

    __slots__ = ("_complex", "_weights")

    def __init__(
        self,
        complex_: Complex,
        weights: Optional[Union[Sequence[Optional[int]], Mapping]] = None,
    ):
        self._complex = complex_
        slots: List[Optional[int]] = [None] * complex_.n_facets
        if weights is None:
            pass
        elif isinstance(weights, Mapping):
            for facet, value in weights.items():
                j = complex_.index_of(facet)
                slots[j] = None if value is None else _check_weight(value)
        else:
            weights = list(weights)
            if len(weights) != complex_.n_facets:
                raise InvalidInputError(
                    f"Expected {complex_.n_facets} weights, got {len(weights)}"
                )
            slots = [None if w is None else _check_weight(w) for w in weights]
        self._weights = slots

    @classmethod
    def _from_slots(cls, complex_: Complex, slots: List[Optional[int]]) -> "WeightAssignment":
        obj = cls.__new__(cls)
        obj._complex = complex_
        obj._weights = slots
        return obj

    def __repr__(self) -> str:
        body = ", ".join("_" if w is None else str(w) for w in self._weights)
        return f"WeightAssignment([{body}])"

    def __getitem__(self, facet: FacetRef) -> Optional[int]:
        return self._weights[self._complex.index_of(facet)]

    @property
    def complex(self) -> Complex:
        return self._complex

    @property
    def weights(self) -> List[Optional[int]]:
        """Copy of the slot list in facet order."""
        return list(self._weights)

    def weight(self, facet: FacetRef) -> Optional[int]:
        return self[facet]

    def as_dict(self) -> Dict[Simplex, Optional[int]]:
        return dict(zip(self._complex.facets, self._weights))

    def as_tuple(self) -> tuple:
        return tuple(self._weights)

    # ── Mutation ──────────────────────────────────────────────────────

    def copy(self) -> "WeightAssignment":
        """Independent slot list over the same Complex."""
        return WeightAssignment._from_slots(self._complex, list(self._weights))

    def with_weight(self, facet: FacetRef, value: int) -> "WeightAssignment":
        """Child assignment with one more facet defined; self is unchanged."""
        child = self.copy()
        child.set_weight(facet, value)
        return child

    def set_weight(self, facet: FacetRef, value: int) -> None:
        self._weights[self._complex.index_of(facet)] = _check_weight(value)

    def clear_weight(self, facet: FacetRef) -> None:
        self._weights[self._complex.index_of(facet)] = None

    # ── Queries ───────────────────────────────────────────────────────

    def is_complete(self) -> bool:
        return all(w is not None for w in self._weights)

    def first_undefined(self, order: Optional[Iterable[int]] = None) -> Optional[int]:
        """Column index of the first undefined facet in ``order`` (default: natural)."""
        if order is None:
            order = range(len(self._weights))
        for j in order:
            if self._weights[j] is None:
                return j
        return None

    def weight_vector(self) -> np.ndarray:
        """int64 weights in facet order, undefined entries read as 0."""
        return np.array(
            [0 if w is None else w for w in self._weights], dtype=np.int64
        )

    def residual(self) -> np.ndarray:
        """M @ w with undefined weights read as 0."""
        w = self.weight_vector()
        max_abs = max((abs(x) for x in self._weights if x is not None), default=0)
        self._complex.ensure_no_overflow(max_abs)
        return self._complex.multiplicity_matrix @ w

    def is_balanced(self) -> bool:
        """Every facet is weighted and M @ w is exactly the zero vector."""
        if not self.is_complete():
            return False
        return not np.any(self.residual())

    def is_balanced_at(self, facet: FacetRef) -> bool:
        """Check every fully determined balancing row that involves ``facet``.

        Rows in which some contributing facet is still undefined cannot be
        falsified yet and are skipped. Returns False on the first determined
        row whose weighted sum is nonzero.
        """
        j = self._complex.index_of(facet)
        weights = self._weights
        for row in self._complex.rows_of_facet(j):
            cols, coeffs = self._complex.row_support(row)
            total = 0
            for c, m in zip(cols, coeffs):
                w = weights[c]
                if w is None:
                    break
                total += int(m) * w
            else:
                if total != 0:
                    return False
        return True
