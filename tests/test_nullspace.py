"""Tests for the exact null-space cross-check and symbolic equations."""
import sympy as sp
import pytest

from balancing.search.enumeration import exhaustive_search, sudoku_search
from balancing.topology.complexes import build_complete_complex
from balancing.topology.nullspace import (
    lies_in_nullspace,
    nullspace_basis,
    verify_against_nullspace,
)
from balancing.topology.registry import get_complex
from balancing.topology.symbols import balancing_equations, facet_symbols


@pytest.fixture
def k4():
    return build_complete_complex(4, 1)


class TestNullspace:
    def test_k4_dimension(self, k4):
        # unsigned incidence of a connected non-bipartite graph has rank n0
        assert len(nullspace_basis(k4.multiplicity_matrix)) == 6 - 4

    def test_triangle_trivial(self):
        assert nullspace_basis(get_complex("triangle").multiplicity_matrix) == []

    def test_basis_is_exact(self, k4):
        M = sp.Matrix(k4.multiplicity_matrix.tolist())
        for v in nullspace_basis(k4.multiplicity_matrix):
            assert M * v == sp.zeros(4, 1)

    def test_membership(self, k4):
        M = k4.multiplicity_matrix
        assert lies_in_nullspace(M, (1, -1, 0, 0, -1, 1))
        assert lies_in_nullspace(M, (0,) * 6)
        assert not lies_in_nullspace(M, (1, 0, 0, 0, 0, 0))

    def test_zero_vector_with_trivial_kernel(self):
        M = get_complex("triangle").multiplicity_matrix
        assert lies_in_nullspace(M, (0, 0, 0))
        assert not lies_in_nullspace(M, (1, -1, 1))

    @pytest.mark.parametrize("name,limit", [
        ("k4_edges", 2), ("singular_pair", 3), ("tetrahedron_boundary", 1),
    ])
    def test_search_results_in_nullspace(self, name, limit):
        c = get_complex(name)
        assert verify_against_nullspace(c, sudoku_search(c, limit))
        assert verify_against_nullspace(c, exhaustive_search(c, limit))


class TestSymbols:
    def test_names(self, k4):
        assert [s.name for s in facet_symbols(k4)] == [
            "x_0_1", "x_0_2", "x_0_3", "x_1_2", "x_1_3", "x_2_3",
        ]

    def test_equations(self, k4):
        xs = facet_symbols(k4)
        eqs = balancing_equations(k4)
        assert len(eqs) == 4
        assert sp.simplify(eqs[0] - (xs[0] + xs[1] + xs[2])) == 0

    def test_singular_coefficients(self):
        c = get_complex("singular_pair")
        x00, x01, x11 = facet_symbols(c)
        eqs = balancing_equations(c)
        assert sp.expand(eqs[0] - (2 * x00 + x01)) == 0
        assert sp.expand(eqs[1] - (x01 + 2 * x11)) == 0

    def test_solutions_satisfy_equations(self, k4):
        xs = facet_symbols(k4)
        eqs = balancing_equations(k4)
        for a in sudoku_search(k4, 1):
            subs = dict(zip(xs, a.as_tuple()))
            assert all(eq.subs(subs) == 0 for eq in eqs)
