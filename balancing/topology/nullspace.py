"""Exact rational null spaces of multiplicity matrices.

Used only to cross-check search results: every balancing vector must lie in
the right null space of M over the rationals. The converse does not hold,
since the search is restricted to a bounded integer box.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np
import sympy as sp


def _to_sympy(M: np.ndarray) -> sp.Matrix:
    # tolist() yields Python ints, keeping the arithmetic exact
    return sp.Matrix(np.asarray(M).tolist())


def nullspace_basis(M: np.ndarray) -> List[sp.Matrix]:
    """Basis of {x : M x = 0} over Q, as sympy column vectors."""
    M = np.asarray(M)
    if M.shape[0] == 0:
        return [sp.eye(M.shape[1])[:, j] for j in range(M.shape[1])]
    return _to_sympy(M).nullspace()


def lies_in_nullspace(
    M: np.ndarray,
    vector: Sequence[int],
    basis: Optional[List[sp.Matrix]] = None,
) -> bool:
    """Check that ``vector`` is in the span of the rational null-space basis."""
    if basis is None:
        basis = nullspace_basis(M)
    v = sp.Matrix([int(x) for x in vector])
    if all(x == 0 for x in v):
        return True
    if not basis:
        return False
    B = sp.Matrix.hstack(*basis)
    return B.rank() == sp.Matrix.hstack(B, v).rank()


def verify_against_nullspace(complex_, assignments: Iterable) -> bool:
    """True iff every assignment's weight vector lies in the null space of M."""
    M = complex_.multiplicity_matrix
    basis = nullspace_basis(M)
    return all(
        lies_in_nullspace(M, a.weight_vector(), basis=basis) for a in assignments
    )
