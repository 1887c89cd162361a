"""Construct the facetto-facet multiplicity matrix and its sparse supports."""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from scipy import sparse

from balancing.errors import ArithmeticOverflowError
from balancing.topology.simplex import Simplex

INT64_MAX = int(np.iinfo(np.int64).max)


def build_multiplicity_matrix(
    facettos: Sequence[Simplex],
    facets: Sequence[Simplex],
) -> np.ndarray:
    """Build the dense multiplicity matrix M.

    M is (n_facettos × n_facets) with
      M[i, j] = facettos[i].multiplicity(facets[j])

    Entries are computed as Python ints and checked against the int64
    range before they are stored.
    """
    M = np.zeros((len(facettos), len(facets)), dtype=np.int64)
    for i, facetto in enumerate(facettos):
        for j, facet in enumerate(facets):
            m = facetto.multiplicity(facet)
            if m > INT64_MAX:
                raise ArithmeticOverflowError(
                    f"Multiplicity {m} of {facetto} in {facet} exceeds int64"
                )
            M[i, j] = m
    return M


def build_supports(
    M: np.ndarray,
) -> Tuple[List[np.ndarray], List[Tuple[np.ndarray, np.ndarray]]]:
    """Extract column and row supports of M.

    Returns:
        rows_of_col: for each facet column, the facetto rows with a nonzero entry.
        row_support: for each facetto row, (columns, coefficients) of its nonzeros.
    """
    M_csc = sparse.csc_matrix(M)
    M_csc.eliminate_zeros()
    M_csc.sort_indices()
    rows_of_col = [
        M_csc.indices[M_csc.indptr[j]:M_csc.indptr[j + 1]].copy()
        for j in range(M.shape[1])
    ]

    M_csr = M_csc.tocsr()
    M_csr.sort_indices()
    row_support = []
    for i in range(M.shape[0]):
        lo, hi = M_csr.indptr[i], M_csr.indptr[i + 1]
        row_support.append((M_csr.indices[lo:hi].copy(), M_csr.data[lo:hi].copy()))
    return rows_of_col, row_support


def max_row_weight(M: np.ndarray) -> int:
    """Largest row sum of |M|, as a Python int."""
    if M.size == 0:
        return 0
    return max(sum(abs(int(x)) for x in row) for row in M)
