"""Homogeneous simplicial complexes given by their facets.

A Complex owns a fixed list of equal-size facets, derives the facettos
(codimension-1 sub-faces) in lexicographic order, and builds the
facetto × facet multiplicity matrix used by the balancing search.
"""
from __future__ import annotations

import logging
from itertools import combinations, combinations_with_replacement
from typing import Iterable, List, Sequence, Tuple, Union

import networkx as nx
import numpy as np

from balancing.errors import ArithmeticOverflowError, InvalidInputError
from balancing.topology.incidence import (
    INT64_MAX,
    build_multiplicity_matrix,
    build_supports,
    max_row_weight,
)
from balancing.topology.simplex import Simplex

logger = logging.getLogger(__name__)

FacetLike = Union[Simplex, Iterable[int]]


class Complex:
    """Immutable homogeneous complex.

    Attributes:
        facets: Facets in input order (matrix columns).
        facettos: Deduplicated codimension-1 faces in lexicographic order
            (matrix rows).
        multiplicity_matrix: int64 array (n_facettos, n_facets).
    """

    def __init__(self, facets: Sequence[FacetLike]):
        simplices = tuple(
            f if isinstance(f, Simplex) else Simplex(f) for f in facets
        )
        if not simplices:
            raise InvalidInputError("A complex needs at least one facet")

        sizes = {len(s) for s in simplices}
        if len(sizes) != 1:
            raise InvalidInputError(
                f"Facets have mixed sizes {sorted(sizes)}; complex must be homogeneous"
            )

        index = {}
        for j, s in enumerate(simplices):
            if s in index:
                raise InvalidInputError(
                    f"Facet {s} appears twice (columns {index[s]} and {j})"
                )
            index[s] = j

        self._facets = simplices
        self._facet_index = index

        facetto_set = set()
        for s in simplices:
            facetto_set.update(s.faces())
        self._facettos = tuple(sorted(facetto_set))
        self._facetto_index = {t: i for i, t in enumerate(self._facettos)}

        M = build_multiplicity_matrix(self._facettos, self._facets)
        M.setflags(write=False)
        self._matrix = M
        self._rows_of_col, self._row_support = build_supports(M)
        self._max_row_weight = max_row_weight(M)

        logger.debug(
            f"Built complex: {len(self._facets)} facets of dimension "
            f"{self.dimension}, {len(self._facettos)} facettos"
        )

    @classmethod
    def build(cls, facets: Sequence[FacetLike]) -> "Complex":
        return cls(facets)

    def __repr__(self) -> str:
        return (
            f"Complex(dimension={self.dimension}, n_facets={self.n_facets}, "
            f"n_facettos={self.n_facettos})"
        )

    @property
    def facets(self) -> Tuple[Simplex, ...]:
        return self._facets

    @property
    def facettos(self) -> Tuple[Simplex, ...]:
        return self._facettos

    @property
    def multiplicity_matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def dimension(self) -> int:
        return self._facets[0].dimension

    @property
    def n_facets(self) -> int:
        return len(self._facets)

    @property
    def n_facettos(self) -> int:
        return len(self._facettos)

    @property
    def is_singular(self) -> bool:
        return any(f.is_singular for f in self._facets)

    def index_of(self, facet: Union[Simplex, int]) -> int:
        """Column index of a facet, given as a Simplex or an index.

        Raises:
            InvalidInputError: If the facet does not belong to this complex.
        """
        if isinstance(facet, Simplex):
            j = self._facet_index.get(facet)
            if j is None:
                raise InvalidInputError(f"{facet} is not a facet of this complex")
            return j
        if isinstance(facet, (int, np.integer)) and not isinstance(facet, bool):
            if 0 <= facet < len(self._facets):
                return int(facet)
            raise InvalidInputError(
                f"Facet index {facet} out of range for {len(self._facets)} facets"
            )
        raise InvalidInputError(f"Cannot interpret {facet!r} as a facet")

    def facetto_index(self, facetto: Simplex) -> int:
        i = self._facetto_index.get(facetto)
        if i is None:
            raise InvalidInputError(f"{facetto} is not a facetto of this complex")
        return i

    def rows_of_facet(self, facet: Union[Simplex, int]) -> np.ndarray:
        """Facetto rows with a nonzero multiplicity in this facet's column."""
        return self._rows_of_col[self.index_of(facet)]

    def row_support(self, row: int) -> Tuple[np.ndarray, np.ndarray]:
        """(columns, coefficients) of the nonzero entries of one facetto row."""
        return self._row_support[row]

    def ensure_no_overflow(self, max_abs_weight: int) -> None:
        """Check that M @ w fits int64 for any |w_j| <= max_abs_weight.

        Raises:
            ArithmeticOverflowError: If some row sum could exceed int64.
        """
        bound = self._max_row_weight * abs(int(max_abs_weight))
        if bound > INT64_MAX:
            raise ArithmeticOverflowError(
                f"Weighted row sums up to {bound} do not fit int64"
            )

    def facet_graph(self) -> nx.Graph:
        """Graph on facet indices joining facets that share a facetto."""
        G = nx.Graph()
        G.add_nodes_from(range(len(self._facets)))
        for cols, _ in self._row_support:
            cols = [int(c) for c in cols]
            for a, b in combinations(cols, 2):
                G.add_edge(a, b)
        return G


def generate_vertex_tuples(n: int, d: int, singular: bool = False) -> List[Tuple[int, ...]]:
    """Enumerate the facets of the complete d-dimensional complex on n vertices.

    Non-singular: all (d+1)-subsets of {0, ..., n-1}.
    Singular: all (d+1)-multisets (repetition allowed).
    Both in lexicographic order.
    """
    if n < 0 or d < 0:
        raise InvalidInputError(f"n and d must be non-negative, got n={n}, d={d}")
    chooser = combinations_with_replacement if singular else combinations
    return list(chooser(range(n), d + 1))


def build_complete_complex(n: int, d: int, singular: bool = False) -> Complex:
    """Complete complex of dimension d on n vertices."""
    tuples = generate_vertex_tuples(n, d, singular)
    if not tuples:
        raise InvalidInputError(
            f"No {d}-dimensional facets on {n} vertices (singular={singular})"
        )
    return Complex(tuples)
