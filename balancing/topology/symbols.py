"""Symbolic facet variables and the balancing equations they satisfy."""
from __future__ import annotations

from typing import List

import sympy as sp


def facet_symbol_name(facet) -> str:
    return "x_" + "_".join(str(v) for v in facet.vertices)


def facet_symbols(complex_) -> List[sp.Symbol]:
    """One integer symbol per facet, e.g. x_0_1 for the facet [0, 1]."""
    return [sp.Symbol(facet_symbol_name(f), integer=True) for f in complex_.facets]


def balancing_equations(complex_) -> List[sp.Expr]:
    """Left-hand sides of the balancing conditions, one per facetto row.

    Row i reads sum_j M[i, j] * x_j; a weighting is balancing when every
    expression evaluates to zero.
    """
    xs = facet_symbols(complex_)
    equations = []
    for i in range(complex_.n_facettos):
        cols, coeffs = complex_.row_support(i)
        equations.append(
            sp.Add(*[int(c) * xs[int(j)] for j, c in zip(cols, coeffs)])
        )
    return equations
