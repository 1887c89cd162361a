"""Tests for Complex construction and the multiplicity matrix.

Complete 1-dimensional complex on 4 vertices (K4 edges):
  facets   = 01, 02, 03, 12, 13, 23
  facettos = 0, 1, 2, 3
  M is the unsigned vertex-edge incidence matrix.
"""
import numpy as np
import pytest

from balancing.errors import ArithmeticOverflowError, InvalidInputError
from balancing.topology.complexes import (
    Complex,
    build_complete_complex,
    generate_vertex_tuples,
)
from balancing.topology.registry import get_complex, list_complexes
from balancing.topology.simplex import Simplex


@pytest.fixture
def k4():
    return build_complete_complex(4, 1)


@pytest.fixture
def singular_pair():
    return build_complete_complex(2, 1, singular=True)


class TestGenerator:
    def test_subsets(self):
        assert generate_vertex_tuples(4, 1) == [
            (0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3),
        ]

    def test_multisets(self):
        assert generate_vertex_tuples(2, 1, singular=True) == [
            (0, 0), (0, 1), (1, 1),
        ]

    def test_too_few_vertices_is_empty(self):
        assert generate_vertex_tuples(2, 2) == []

    def test_negative_parameters(self):
        with pytest.raises(InvalidInputError):
            generate_vertex_tuples(-1, 1)
        with pytest.raises(InvalidInputError):
            generate_vertex_tuples(3, -1)

    def test_empty_complete_complex_rejected(self):
        with pytest.raises(InvalidInputError):
            build_complete_complex(2, 2)


class TestConstruction:
    def test_counts(self, k4):
        assert k4.n_facets == 6
        assert k4.n_facettos == 4
        assert k4.dimension == 1
        assert not k4.is_singular

    def test_facets_keep_input_order(self):
        c = Complex([(1, 2), (0, 1)])
        assert c.facets == (Simplex([1, 2]), Simplex([0, 1]))

    def test_facettos_sorted(self):
        c = Complex([(2, 3), (0, 3), (1, 2)])
        assert [t.vertices for t in c.facettos] == [(0,), (1,), (2,), (3,)]

    def test_build_alias(self):
        assert Complex.build([(0, 1)]).n_facets == 1

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            Complex([])

    def test_mixed_dimensions_rejected(self):
        with pytest.raises(InvalidInputError):
            Complex([(0, 1), (0, 1, 2)])

    def test_duplicate_facet_rejected(self):
        with pytest.raises(InvalidInputError):
            Complex([(0, 1), (1, 0)])

    def test_index_of(self, k4):
        assert k4.index_of(Simplex([1, 3])) == 4
        assert k4.index_of(2) == 2
        with pytest.raises(InvalidInputError):
            k4.index_of(Simplex([0, 4]))
        with pytest.raises(InvalidInputError):
            k4.index_of(6)

    def test_matrix_read_only(self, k4):
        with pytest.raises(ValueError):
            k4.multiplicity_matrix[0, 0] = 5


class TestMultiplicityMatrix:
    def test_k4_incidence(self, k4):
        expected = np.array([
            [1, 1, 1, 0, 0, 0],
            [1, 0, 0, 1, 1, 0],
            [0, 1, 0, 1, 0, 1],
            [0, 0, 1, 0, 1, 1],
        ])
        np.testing.assert_array_equal(k4.multiplicity_matrix, expected)

    def test_singular_pair(self, singular_pair):
        np.testing.assert_array_equal(
            singular_pair.multiplicity_matrix,
            np.array([[2, 1, 0], [0, 1, 2]]),
        )

    @pytest.mark.parametrize("n,d,singular", [
        (4, 1, False), (5, 2, False), (3, 2, True), (3, 1, True),
    ])
    def test_zero_structure(self, n, d, singular):
        """M[t, f] = 0 exactly when t's vertex set is not inside f's."""
        c = build_complete_complex(n, d, singular=singular)
        M = c.multiplicity_matrix
        for i, t in enumerate(c.facettos):
            for j, f in enumerate(c.facets):
                if set(t.vertices) <= set(f.vertices):
                    assert M[i, j] > 0
                else:
                    assert M[i, j] == 0

    @pytest.mark.parametrize("n,d", [(4, 1), (5, 2), (6, 3), (4, 3)])
    def test_facetto_count_bound(self, n, d):
        c = build_complete_complex(n, d)
        assert c.n_facettos <= (d + 1) * c.n_facets

    def test_facetto_count_without_overlap(self):
        c = Complex([(0, 1, 2), (3, 4, 5)])
        assert c.n_facettos == 6

    def test_supports(self, k4):
        np.testing.assert_array_equal(k4.rows_of_facet(Simplex([1, 2])), [1, 2])
        cols, coeffs = k4.row_support(0)
        np.testing.assert_array_equal(cols, [0, 1, 2])
        np.testing.assert_array_equal(coeffs, [1, 1, 1])

    def test_zero_dimensional_complex(self):
        c = Complex([(0,), (1,), (2,)])
        assert c.facettos == (Simplex([]),)
        np.testing.assert_array_equal(c.multiplicity_matrix, [[1, 1, 1]])


class TestOverflow:
    def test_huge_multiplicity_rejected(self):
        facet = [v for v in range(21) for _ in range(3)]
        with pytest.raises(ArithmeticOverflowError):
            Complex([facet])

    def test_weight_bound(self, k4):
        k4.ensure_no_overflow(10 ** 6)
        with pytest.raises(ArithmeticOverflowError):
            k4.ensure_no_overflow(2 ** 62)


class TestFacetGraph:
    def test_k4_edges_share_vertices(self, k4):
        G = k4.facet_graph()
        assert G.number_of_nodes() == 6
        # Disjoint pairs 01-23, 02-13, 03-12 share no vertex
        assert G.number_of_edges() == 15 - 3
        assert not G.has_edge(0, 5)


class TestRegistry:
    def test_list(self):
        assert "k4_edges" in list_complexes()

    def test_get(self):
        assert get_complex("tetrahedron_boundary").n_facettos == 6

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_complex("moebius")
